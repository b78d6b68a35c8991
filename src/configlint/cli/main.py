"""configlint CLI - configlint command."""

import click

from configlint import __version__
from configlint.cli.check import check_command
from configlint.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="configlint")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """configlint - keep the config struct, JSON persistence, console and README in sync."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
