import dataclasses
import types
from typing import Mapping, Optional

from .config import StaticPolicy
from .utils.flags import split_flags
from .utils.static_resolver import is_static_available

# Provided by the CRT with MSVC
MSVC_IMPLICIT_LIBS = ("m", "c", "pthread")


@dataclasses.dataclass(frozen=True)
class Library:
    """Compiler and linker flags reported by pkg-config for one package.

    Sequences keep the order pkg-config printed them in, since link order
    matters to some linkers.
    """

    libs: tuple = ()
    link_paths: tuple = ()
    frameworks: tuple = ()
    framework_paths: tuple = ()
    include_paths: tuple = ()
    defines: Mapping[str, Optional[str]] = dataclasses.field(
        default_factory=lambda: types.MappingProxyType({}))
    version: str = ""

    def to_dict(self):
        return {
            "libs": list(self.libs),
            "link_paths": list(self.link_paths),
            "frameworks": list(self.frameworks),
            "framework_paths": list(self.framework_paths),
            "include_paths": list(self.include_paths),
            "defines": dict(self.defines),
            "version": self.version,
        }


class LibraryBuilder:
    """Accumulates a :class:`Library` while the probe runs."""

    def __init__(self):
        self.libs = []
        self.link_paths = []
        self.frameworks = []
        self.framework_paths = []
        self.include_paths = []
        self.defines = {}
        self.version = ""

    def parse_libs_cflags(self, name, output: bytes, config, policy: StaticPolicy):
        is_msvc = config.is_msvc_target()
        words = split_flags(output)
        dirs = []

        for word in words:
            if len(word) <= 2:
                continue
            flag, val = word[:2], word[2:]

            if flag == "-L":
                config.print_metadata(f"rustc-link-search=native={val}")
                dirs.append(val)
                self.link_paths.append(val)
            elif flag == "-F":
                config.print_metadata(f"rustc-link-search=framework={val}")
                self.framework_paths.append(val)
            elif flag == "-I":
                self.include_paths.append(val)
            elif flag == "-l":
                if is_msvc and val in MSVC_IMPLICIT_LIBS:
                    continue

                if policy is StaticPolicy.FORCE_STATIC:
                    statik = True
                elif policy is StaticPolicy.PREFER_STATIC:
                    statik = is_static_available(val, dirs)
                else:
                    statik = False

                if statik and not config.blacklist_contains(val):
                    config.print_metadata(f"rustc-link-lib=static={val}")
                else:
                    config.print_metadata(f"rustc-link-lib={val}")
                self.libs.append(val)
            elif flag == "-D":
                key, sep, value = val.partition("=")
                self.defines[key] = value if sep else None

        parts = iter(_expand_linker_args(words))
        for part in parts:
            if part != "-framework":
                continue
            lib = next(parts, None)
            if lib is not None:
                config.print_metadata(f"rustc-link-lib=framework={lib}")
                self.frameworks.append(lib)

    def parse_modversion(self, output: str):
        self.version += output.strip()

    def build(self) -> Library:
        return Library(
            libs=tuple(self.libs),
            link_paths=tuple(self.link_paths),
            frameworks=tuple(self.frameworks),
            framework_paths=tuple(self.framework_paths),
            include_paths=tuple(self.include_paths),
            defines=types.MappingProxyType(dict(self.defines)),
            version=self.version,
        )


def _expand_linker_args(words):
    # "-Wl,-framework,Foo" is handled the same as "-framework Foo"
    for word in words:
        if word.startswith("-Wl,"):
            yield from word[4:].split(",")
        else:
            yield word
