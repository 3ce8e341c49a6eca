import click

from .. import config as config_module
from ..config import Config
from ..decorators import handle_exceptions
from ..prober import get_variable


@click.command()
@click.argument("package")
@click.argument("name")
@click.pass_context
@handle_exceptions
def variable(ctx, package, name):
    """Print the value of the pkg-config variable NAME of PACKAGE."""
    options = config_module.load_config(path=(ctx.obj or {}).get("path", "."))
    cfg = Config.from_options(options).metadata(False)
    click.echo(get_variable(package, name, cfg))
