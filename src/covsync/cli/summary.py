"""covsync summary command - per-file coverage of a report."""

import json
from pathlib import Path

import click

from covsync.cli.utils import get_console, load_cli_config, load_report, summary_table
from covsync.report.active import ReportStore
from covsync.report.tree import summarize


@click.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Workspace root for config and relative display paths",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def summary_command(report: Path, root: Path, as_json: bool) -> None:
    """Show coverage per resolved file of REPORT."""
    root = root.resolve()
    config = load_cli_config(root)
    active = load_report(ReportStore(), report.resolve())
    summary = summarize(active, config.report.min_coverage, workspace_root=str(root))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "report": summary.report_location,
                    "minimum": summary.minimum,
                    "total": summary.total_percent,
                    "files": [
                        {
                            "path": row.display_path,
                            "percent": row.percent,
                            "ok": row.ok,
                        }
                        for row in summary.rows
                    ],
                }
            )
        )
        return

    if not summary.rows:
        click.echo("No files of this report exist under its declared sources.")
        return
    get_console().print(summary_table(summary))
