import os
import sys
from pathlib import PurePath

from ..config import StaticPolicy, envify


def resolve_static_policy(config, name: str) -> StaticPolicy:
    """
    Decides how ``name`` should be linked.

    A blacklisted library is always dynamic. Otherwise an explicit policy on
    the config wins, and failing that the environment is consulted.
    """
    if config.blacklist_contains(name):
        return StaticPolicy.DYNAMIC
    if config.static_policy is not None:
        return config.static_policy
    return infer_static(config, name)


def infer_static(config, name: str) -> StaticPolicy:
    name = envify(name)
    if config.env_var(f"{name}_STATIC_FORCE") is not None:
        return StaticPolicy.FORCE_STATIC
    elif config.env_var(f"{name}_STATIC") is not None:
        return StaticPolicy.PREFER_STATIC
    elif config.env_var(f"{name}_DYNAMIC") is not None:
        return StaticPolicy.DYNAMIC
    elif config.env_var("PKG_CONFIG_ALL_STATIC") is not None:
        return StaticPolicy.PREFER_STATIC
    elif config.env_var("PKG_CONFIG_ALL_DYNAMIC") is not None:
        return StaticPolicy.DYNAMIC
    return StaticPolicy.DYNAMIC


def system_roots(platform=None) -> list[PurePath]:
    platform = platform or sys.platform
    if platform == "darwin":
        return [PurePath("/Library"), PurePath("/System")]
    return [PurePath("/usr")]


def is_static_available(name: str, dirs, roots=None) -> bool:
    """System libraries should only be linked dynamically."""
    libname = f"lib{name}.a"
    roots = system_roots() if roots is None else [PurePath(r) for r in roots]

    for directory in dirs:
        path = PurePath(directory)
        if any(path.is_relative_to(root) for root in roots):
            continue
        if os.path.exists(os.path.join(directory, libname)):
            return True
    return False
