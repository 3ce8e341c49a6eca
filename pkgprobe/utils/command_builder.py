import shlex
from typing import NamedTuple

from ..config import StaticPolicy

DEFAULT_EXECUTABLE = "pkg-config"

LIBS_CFLAGS = ("--libs", "--cflags")
MODVERSION = ("--modversion",)

# Forwarded to pkg-config after resolving per-target overrides.
TARGETED_VARIABLES = ("PKG_CONFIG_PATH", "PKG_CONFIG_LIBDIR", "PKG_CONFIG_SYSROOT_DIR")


def variable_args(variable: str) -> tuple:
    return (f"--variable={variable}",)


class PkgConfigCommand(NamedTuple):
    argv: tuple
    env: dict

    def describe(self) -> str:
        assignments = [f"{key}={shlex.quote(value)}" for key, value in self.env.items()]
        return " ".join(assignments + [shlex.join(self.argv)])

    def __str__(self):
        return self.describe()


def build_command(config, name: str, args, policy: StaticPolicy) -> PkgConfigCommand:
    """
    Composes the pkg-config invocation for ``name``.

    Args:
        config (Config): Probe configuration, also used for environment lookups.
        name (str): The package to query.
        args (tuple): Query flags, e.g. ``LIBS_CFLAGS`` or ``MODVERSION``.
        policy (StaticPolicy): Resolved static policy for ``name``.

    Returns:
        PkgConfigCommand: argv plus the environment overrides for the child.
    """
    exe = config.env_var("PKG_CONFIG") or DEFAULT_EXECUTABLE
    argv = [exe]
    if policy is not StaticPolicy.DYNAMIC:
        argv.append("--static")
    argv.extend(args)
    argv.extend(config.extra_args)

    env = {}
    for variable in TARGETED_VARIABLES:
        value = config.targeted_env_var(variable)
        if value is not None:
            env[variable] = value
    if config.allow_system_libs:
        env["PKG_CONFIG_ALLOW_SYSTEM_LIBS"] = "1"

    if config.min_version:
        argv.append(f"{name} >= {config.min_version}")
    else:
        argv.append(name)

    return PkgConfigCommand(tuple(argv), env)
