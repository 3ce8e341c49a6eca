import importlib.metadata
import sys

import click

from ..cli_logger import logger


@click.command()
def version():
    """Print the version of pkgprobe."""
    try:
        ver = importlib.metadata.version("pkgprobe")
        click.echo(f"pkgprobe version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of pkgprobe. Is it installed correctly?")
        sys.exit(1)
