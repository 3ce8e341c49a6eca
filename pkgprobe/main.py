import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Directory containing pkgprobe.toml.")
@click.pass_context
def cli(ctx, path):
    """pkgprobe: resolve build flags for system libraries through pkg-config."""
    ctx.obj = {"path": path}

cli.add_command(probe)
cli.add_command(variable)
cli.add_command(version)
cli.add_command(log)

if __name__ == '__main__':
    cli()
