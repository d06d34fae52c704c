"""lintspan CLI - lintspan command."""

import click

from lintspan.cli.annotate import annotate_command
from lintspan.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="lintspan")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """lintspan - map Stylus linter diagnostics onto source ranges."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(annotate_command, name="annotate")


if __name__ == "__main__":
    cli()
