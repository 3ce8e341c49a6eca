"""Run pkg-config for a library and turn its output into a :class:`Library`.

Environment variables that change how a probe runs:

* ``PKG_CONFIG`` - executable to run instead of ``pkg-config``.
* ``PKG_CONFIG_ALLOW_CROSS`` - probe even when ``HOST`` and ``TARGET`` differ.
* ``FOO_NO_PKG_CONFIG`` - never run pkg-config for the library ``foo``.
* ``FOO_STATIC_FORCE`` / ``FOO_STATIC`` / ``FOO_DYNAMIC`` - how ``foo`` is linked.
* ``PKG_CONFIG_ALL_STATIC`` / ``PKG_CONFIG_ALL_DYNAMIC`` - the same, for every library.
* ``PKG_CONFIG_PATH``, ``PKG_CONFIG_LIBDIR``, ``PKG_CONFIG_SYSROOT_DIR`` -
  forwarded to pkg-config, each overridable per target
  (``PKG_CONFIG_PATH_x86_64-unknown-linux-gnu``, ``TARGET_PKG_CONFIG_PATH``, ...).
"""

from .cli_logger import logger
from .config import Config, envify
from .errors import CrossCompilation, EnvNoPkgConfig
from .library import Library, LibraryBuilder
from .utils.command_builder import LIBS_CFLAGS, MODVERSION, build_command, variable_args
from .utils.command_executor import run_command
from .utils.static_resolver import resolve_static_policy


def probe(name: str, config: Config = None, runner=run_command) -> Library:
    """
    Runs pkg-config to find the library ``name``.

    Args:
        name (str): pkg-config package name, e.g. ``"zlib"``.
        config (Config, optional): How to invoke pkg-config. Defaults to ``Config()``.
        runner (callable, optional): ``runner(command, environ) -> bytes``.

    Returns:
        Library: The parsed flags and version.

    Raises:
        EnvNoPkgConfig: ``<NAME>_NO_PKG_CONFIG`` is set.
        CrossCompilation: Cross compiling without ``PKG_CONFIG_ALLOW_CROSS``.
        CommandError: pkg-config could not be started.
        FailureError: pkg-config exited unsuccessfully.
    """
    config = config or Config()

    abort_var_name = f"{envify(name)}_NO_PKG_CONFIG"
    if config.env_var(abort_var_name) is not None:
        logger.debug(f"Skipping pkg-config for {name}: {abort_var_name} is set")
        raise EnvNoPkgConfig(abort_var_name)
    if not config.target_supported():
        logger.debug(f"Skipping pkg-config for {name}: cross compilation detected")
        raise CrossCompilation()

    policy = resolve_static_policy(config, name)
    logger.debug(f"Probing {name} (link policy: {policy.value})")
    builder = LibraryBuilder()

    output = runner(build_command(config, name, LIBS_CFLAGS, policy), config.environ)
    builder.parse_libs_cflags(name, output, config, policy)

    output = runner(build_command(config, name, MODVERSION, policy), config.environ)
    builder.parse_modversion(output.decode("utf-8"))

    library = builder.build()
    logger.debug(f"Found {name} {library.version}")
    return library


def probe_library(name: str) -> Library:
    """Shortcut for probing with all default options."""
    return probe(name)


def get_variable(package: str, variable: str, config: Config = None, runner=run_command) -> str:
    """Runs ``pkg-config --variable=<variable> <package>`` and returns the value."""
    config = config or Config()
    policy = resolve_static_policy(config, package)
    command = build_command(config, package, variable_args(variable), policy)
    output = runner(command, config.environ)
    return output.decode("utf-8").rstrip()
