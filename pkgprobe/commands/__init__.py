from .log import log
from .probe import probe
from .variable import variable
from .version import version

__all__ = ["log", "probe", "variable", "version"]
