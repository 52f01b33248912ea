"""covsync reports command - list report files in a workspace."""

from pathlib import Path

import click

from covsync.cli.utils import get_console, load_cli_config
from covsync.report.discovery import find_reports
from covsync.report.parser import CoberturaParser


@click.command()
@click.argument("root", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", default=None, help="Report glob (default: from config)")
def reports_command(root: Path, pattern: str | None) -> None:
    """List coverage reports below ROOT (default: current directory)."""
    root = root.resolve()
    config = load_cli_config(root)
    pattern = pattern or config.report.pattern
    console = get_console()

    found = find_reports(root, pattern)
    if not found:
        console.print(f"No reports matching '{pattern}' under {root}")
        return

    parser = CoberturaParser()
    for path in found:
        suffix = "" if parser.can_parse(path) else "  [dim](not Cobertura)[/dim]"
        console.print(f"{path.relative_to(root)}{suffix}")
