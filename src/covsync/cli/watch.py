"""covsync watch command - keep a report summary current as it changes."""

import asyncio
from pathlib import Path

import click

from covsync.cli.utils import get_console, load_cli_config, load_report, summary_table
from covsync.core.errors import ReportError
from covsync.report.active import ReportStore
from covsync.report.tree import summarize
from covsync.sync.session import CoverageSession
from covsync.watch.watcher import ReportChange, ReportWatcher, pump


@click.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Workspace root to watch",
)
def watch_command(report: Path, root: Path) -> None:
    """Print the summary of REPORT now and again whenever it changes."""
    root = root.resolve()
    config = load_cli_config(root)
    store = ReportStore()
    session = CoverageSession(config, store=store, workspace_root=root)
    console = get_console()

    def print_summary() -> None:
        active = store.active
        if active is None:
            console.print("[dim]Report removed; annotations cleared.[/dim]")
            return
        summary = summarize(active, config.report.min_coverage, workspace_root=str(root))
        console.print(summary_table(summary))

    load_report(store, report.resolve())
    print_summary()

    async def on_change(change: ReportChange) -> None:
        before = store.active
        await session.on_file_event_async(change.path, change.kind)
        if store.active is not before:
            print_summary()

    def on_error(error: ReportError) -> None:
        console.print(f"[red]{error}[/red]")

    watcher = ReportWatcher(
        root,
        config.report.pattern,
        debounce_ms=config.watch.debounce_ms,
        step_ms=config.watch.step_ms,
    )
    console.print(f"[dim]Watching {root} for '{config.report.pattern}' (Ctrl+C to stop)[/dim]")
    try:
        asyncio.run(pump(watcher, on_change, on_error=on_error))
    except KeyboardInterrupt:
        watcher.stop()
