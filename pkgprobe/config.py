import dataclasses
import enum
import os
from typing import Mapping, Optional

import toml

from .cli_logger import logger
from .metadata import MetadataSink

CONFIG_FILE = "pkgprobe.toml"


class StaticPolicy(enum.Enum):
    DYNAMIC = "dynamic"
    # static only when a non-system lib<name>.a is found
    PREFER_STATIC = "prefer-static"
    FORCE_STATIC = "force-static"

    @classmethod
    def from_bool(cls, flag: bool) -> "StaticPolicy":
        return cls.PREFER_STATIC if flag else cls.DYNAMIC

    @classmethod
    def parse(cls, value) -> "StaticPolicy":
        """Accept a bool or a policy name as found in option files and on the CLI."""
        if isinstance(value, bool):
            return cls.from_bool(value)
        name = str(value).strip().lower().replace("_", "-")
        if name == "static":
            return cls.PREFER_STATIC
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown static policy: {value!r}") from None


def envify(name: str) -> str:
    return name.upper().replace("-", "_")


@dataclasses.dataclass(frozen=True)
class Config:
    """How pkg-config is invoked for a probe.

    Every builder method returns a new ``Config``; the receiver is never
    modified, so one base configuration can be shared between probes::

        base = Config().atleast_version("1.2.3")
        probe("foo", base.statik(StaticPolicy.FORCE_STATIC))
    """

    static_policy: Optional[StaticPolicy] = None
    static_blacklist: frozenset = frozenset()
    min_version: Optional[str] = None
    extra_args: tuple = ()
    emit_metadata: bool = True
    emit_env_metadata: bool = False
    allow_system_libs: bool = True
    environ: Mapping[str, str] = dataclasses.field(
        default_factory=lambda: os.environ, repr=False, compare=False)
    sink: MetadataSink = dataclasses.field(
        default_factory=MetadataSink, repr=False, compare=False)

    # -------- Builder --------
    def statik(self, policy: StaticPolicy) -> "Config":
        """Set the static policy, overriding the environment inference.

        Use ``StaticPolicy.from_bool`` to convert a plain flag.
        """
        if not isinstance(policy, StaticPolicy):
            raise TypeError(f"Expected a StaticPolicy, got {type(policy).__name__}")
        return dataclasses.replace(self, static_policy=policy)

    def blacklist(self, *names: str) -> "Config":
        """Libraries that are always linked dynamically."""
        return dataclasses.replace(self, static_blacklist=self.static_blacklist | frozenset(names))

    def blacklist_contains(self, name: str) -> bool:
        return name in self.static_blacklist

    def atleast_version(self, version: str) -> "Config":
        return dataclasses.replace(self, min_version=version)

    def arg(self, arg: str) -> "Config":
        """Add an argument placed after all of the generated ones."""
        return dataclasses.replace(self, extra_args=self.extra_args + (arg,))

    def metadata(self, flag: bool) -> "Config":
        return dataclasses.replace(self, emit_metadata=flag)

    def env_metadata(self, flag: bool) -> "Config":
        return dataclasses.replace(self, emit_env_metadata=flag)

    def print_system_libs(self, flag: bool) -> "Config":
        return dataclasses.replace(self, allow_system_libs=flag)

    def with_environ(self, environ: Mapping[str, str]) -> "Config":
        return dataclasses.replace(self, environ=environ)

    def with_sink(self, sink: MetadataSink) -> "Config":
        return dataclasses.replace(self, sink=sink)

    # -------- Environment --------
    def env_var(self, name: str) -> Optional[str]:
        if self.emit_env_metadata:
            self.sink.emit(f"rerun-if-env-changed={name}")
        return self.environ.get(name)

    def targeted_env_var(self, var_base: str) -> Optional[str]:
        """Look up ``var_base``, allowing per-target overrides.

        Tried in order: ``<base>_<target>``, ``<base>_<target_underscored>``,
        ``HOST_<base>`` or ``TARGET_<base>``, then ``<base>``.
        """
        target = self.environ.get("TARGET")
        if target is None:
            return self.env_var(var_base)

        host = self.environ.get("HOST")
        if host is None:
            return None
        kind = "HOST" if host == target else "TARGET"
        target_u = target.replace("-", "_")

        for name in (f"{var_base}_{target}", f"{var_base}_{target_u}",
                     f"{kind}_{var_base}", var_base):
            value = self.env_var(name)
            if value is not None:
                return value
        return None

    def target_supported(self) -> bool:
        # Only use pkg-config when host == target unless explicitly allowed.
        target = self.environ.get("TARGET") or ""
        host = self.environ.get("HOST") or ""
        return host == target or "PKG_CONFIG_ALLOW_CROSS" in self.environ

    def is_msvc_target(self) -> bool:
        return "msvc" in (self.environ.get("TARGET") or "")

    def print_metadata(self, line: str):
        if self.emit_metadata:
            self.sink.emit(line)

    # -------- Option file --------
    @classmethod
    def from_options(cls, options: dict, **kwargs) -> "Config":
        """Build a config from the ``[probe]`` table of a pkgprobe.toml."""
        probe = options.get("probe", {})
        cfg = cls(**kwargs)
        if "static" in probe:
            cfg = cfg.statik(StaticPolicy.parse(probe["static"]))
        blacklisted = probe.get("static_blacklist", [])
        if isinstance(blacklisted, str):
            blacklisted = [blacklisted]
        if blacklisted:
            cfg = cfg.blacklist(*(str(name) for name in blacklisted))
        if probe.get("atleast_version"):
            cfg = cfg.atleast_version(str(probe["atleast_version"]))
        extra_args = probe.get("args", [])
        if isinstance(extra_args, str):
            extra_args = [extra_args]
        for extra in extra_args:
            cfg = cfg.arg(str(extra))
        if "metadata" in probe:
            cfg = cfg.metadata(bool(probe["metadata"]))
        if "env_metadata" in probe:
            cfg = cfg.env_metadata(bool(probe["env_metadata"]))
        if "print_system_libs" in probe:
            cfg = cfg.print_system_libs(bool(probe["print_system_libs"]))
        return cfg


def load_config(path="."):
    config_path = os.path.join(path, CONFIG_FILE)
    logger.debug(f"Loading configuration from {config_path}")
    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.error(f"Error decoding TOML file at {config_path}: {e}")
            logger.info("Please check the file's format for syntax errors.")
        except IOError as e:
            logger.error(f"Error reading configuration file at {config_path}: {e}")
            logger.info("Please check file permissions.")
    return {}
