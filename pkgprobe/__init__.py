"""Find system libraries for a build through ``pkg-config``."""

from .config import Config, StaticPolicy
from .errors import (
    CommandError,
    CrossCompilation,
    EnvNoPkgConfig,
    FailureError,
    PkgConfigError,
    UnknownError,
)
from .library import Library
from .metadata import MetadataSink
from .prober import get_variable, probe, probe_library

__all__ = [
    "Config",
    "StaticPolicy",
    "Library",
    "MetadataSink",
    "probe",
    "probe_library",
    "get_variable",
    "PkgConfigError",
    "EnvNoPkgConfig",
    "CrossCompilation",
    "CommandError",
    "FailureError",
    "UnknownError",
]
