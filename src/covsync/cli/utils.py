"""CLI utilities."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from covsync.config.loader import load_config
from covsync.config.models import CovSyncConfig
from covsync.core.errors import ConfigError, CovSyncError
from covsync.report.active import ActiveReport, ReportStore
from covsync.report.stats import format_percent
from covsync.report.tree import ReportSummary

_console: Console | None = None


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def load_cli_config(root: Path) -> CovSyncConfig:
    """Load config for a workspace, turning config errors into CLI errors.

    Honors the group-level --config file when one was given.
    """
    ctx = click.get_current_context(silent=True)
    options = ctx.obj if ctx is not None and ctx.obj else {}
    config_path = options.get("config_path")
    try:
        return load_config(root, config_path=config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def load_report(store: ReportStore, report: Path) -> ActiveReport:
    try:
        return store.load(str(report))
    except CovSyncError as e:
        raise click.ClickException(str(e)) from e


def summary_table(summary: ReportSummary) -> Table:
    """Render a report summary: one row per file plus a total line."""
    table = Table(title=summary.report_location, title_justify="left", pad_edge=False)
    table.add_column("file", style="cyan", no_wrap=True)
    table.add_column("coverage", justify="right")
    table.add_column("", width=1)

    for row in summary.rows:
        if row.ok is None:
            mark = "[dim]-[/dim]"
        elif row.ok:
            mark = "[green]✓[/green]"
        else:
            mark = "[yellow]![/yellow]"
        table.add_row(row.display_path, row.description, mark)

    total = "-" if summary.total_percent is None else format_percent(summary.total_percent)
    table.add_section()
    table.add_row("[bold]total[/bold]", f"{total}/{summary.minimum}%", "")
    return table
