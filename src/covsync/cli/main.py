"""covsync CLI - covsync command."""

from pathlib import Path

import click

from covsync.cli.annotate import annotate_command
from covsync.cli.reports import reports_command
from covsync.cli.summary import summary_command
from covsync.cli.watch import watch_command
from covsync.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="covsync")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "-c",
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file to use instead of <root>/.covsync/config.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """covsync - Cobertura coverage annotations for open source files."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(reports_command, name="reports")
cli.add_command(summary_command, name="summary")
cli.add_command(annotate_command, name="annotate")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
