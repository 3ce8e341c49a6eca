import json

import click

from .. import config as config_module
from ..cli_logger import logger
from ..config import Config, StaticPolicy
from ..decorators import handle_exceptions
from ..metadata import MetadataSink
from ..prober import probe as run_probe


@click.command()
@click.argument("name")
@click.option("--atleast-version", default=None, help="Minimum acceptable version of the library.")
@click.option("--static", "prefer_static", is_flag=True,
              help="Link statically when a non-system static archive exists.")
@click.option("--force-static", is_flag=True, help="Always request static linking.")
@click.option("--dynamic", is_flag=True, help="Always link dynamically.")
@click.option("--blacklist", multiple=True, help="Library that must never be linked statically.")
@click.option("--arg", "extra_args", multiple=True, help="Extra argument passed to pkg-config.")
@click.option("--no-metadata", is_flag=True, help="Do not print link metadata lines.")
@click.option("--env-metadata", is_flag=True, help="Print rerun-if-env-changed lines for every variable read.")
@click.option("--no-system-libs", is_flag=True, help="Do not set PKG_CONFIG_ALLOW_SYSTEM_LIBS.")
@click.option("--prefix", default="cargo:", show_default=True, help="Prefix of metadata lines.")
@click.option("--json", "as_json", is_flag=True, help="Print the resolved flags as JSON.")
@click.pass_context
@handle_exceptions
def probe(ctx, name, atleast_version, prefer_static, force_static, dynamic, blacklist, extra_args,
          no_metadata, env_metadata, no_system_libs, prefix, as_json):
    """Resolve compiler and linker flags for NAME through pkg-config."""
    if sum((prefer_static, force_static, dynamic)) > 1:
        raise click.UsageError("--static, --force-static and --dynamic are mutually exclusive.")

    path = (ctx.obj or {}).get("path", ".")
    options = config_module.load_config(path=path)
    cfg = Config.from_options(options, sink=MetadataSink(prefix=prefix))

    if force_static:
        cfg = cfg.statik(StaticPolicy.FORCE_STATIC)
    elif prefer_static:
        cfg = cfg.statik(StaticPolicy.PREFER_STATIC)
    elif dynamic:
        cfg = cfg.statik(StaticPolicy.DYNAMIC)
    if blacklist:
        cfg = cfg.blacklist(*blacklist)
    if atleast_version:
        cfg = cfg.atleast_version(atleast_version)
    for extra in extra_args:
        cfg = cfg.arg(extra)
    if no_metadata or as_json:
        cfg = cfg.metadata(False)
    if env_metadata:
        cfg = cfg.env_metadata(True)
    if no_system_libs:
        cfg = cfg.print_system_libs(False)

    library = run_probe(name, cfg)

    if as_json:
        click.echo(json.dumps(library.to_dict(), indent=4))
        return

    logger.success(f"{name} {library.version}: "
                   f"{len(library.libs)} libraries, {len(library.include_paths)} include paths")
