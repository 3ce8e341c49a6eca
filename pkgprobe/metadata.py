import click


class MetadataSink:
    """Writes build metadata lines, one per event, to stdout by default.

    Every line is ``<prefix><key>=<value>``, e.g. ``cargo:rustc-link-lib=z``.
    """

    def __init__(self, prefix="cargo:", stream=None):
        self.prefix = prefix
        self.stream = stream

    def emit(self, line):
        click.echo(f"{self.prefix}{line}", file=self.stream)
