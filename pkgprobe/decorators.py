import functools
import sys

import click

from .cli_logger import logger
from .errors import CommandError, EnvNoPkgConfig, CrossCompilation, PkgConfigError


def handle_exceptions(func):
    """A decorator to handle common exceptions for CLI commands.

    Probe errors are logged and turned into exit status 1.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (EnvNoPkgConfig, CrossCompilation) as e:
            logger.warning(str(e))
            sys.exit(1)
        except CommandError as e:
            logger.error(str(e))
            logger.info("Is pkg-config installed? Set PKG_CONFIG to use another executable.")
            sys.exit(1)
        except PkgConfigError as e:
            logger.error(str(e))
            sys.exit(1)
        except click.ClickException:
            raise
        except Exception as e:
            logger.error(f"An unexpected error occurred: {e}")
            logger.exception(*sys.exc_info())
            sys.exit(1)
    return wrapper
