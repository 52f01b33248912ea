"""covsync annotate command - show what a view of FILE would display."""

from pathlib import Path

import click

from covsync.cli.utils import get_console, load_cli_config
from covsync.core.errors import CovSyncError
from covsync.core.languages import detect_language
from covsync.sync.effects import HighlightCategory, SetDiagnostics, SetHighlights, SetStatus
from covsync.sync.events import View
from covsync.sync.session import CoverageSession


@click.command()
@click.argument("report", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", default=None, help="Document language id (default: from extension)")
@click.option(
    "--root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Workspace root for config",
)
def annotate_command(report: Path, file: Path, language: str | None, root: Path) -> None:
    """Print FILE with the hit/miss marks, diagnostic and status REPORT gives it."""
    config = load_cli_config(root.resolve())
    session = CoverageSession(config, workspace_root=root.resolve())
    try:
        session.select_report(report.resolve())
    except CovSyncError as e:
        raise click.ClickException(str(e)) from e

    path = file.resolve()
    text = path.read_text(errors="replace").splitlines()
    view = View(
        view_id="cli",
        document_path=str(path),
        language_id=language or detect_language(path) or "plaintext",
        line_count=len(text),
    )
    effects = session.focus(view)

    marks: dict[int, str] = {}
    console = get_console()
    for effect in effects:
        if isinstance(effect, SetHighlights):
            for highlight in effect.highlights:
                mark = "+" if highlight.category is HighlightCategory.HIT else "-"
                for line in range(highlight.range.start_line, highlight.range.end_line + 1):
                    marks[line] = mark
        elif isinstance(effect, SetDiagnostics):
            for diagnostic in effect.diagnostics:
                console.print(f"[yellow]{diagnostic.severity}[/yellow]: {diagnostic.message}")
        elif isinstance(effect, SetStatus):
            style = "green" if effect.ok else "yellow"
            console.print(f"[{style}]{effect.text}[/{style}]")

    if not marks:
        console.print(f"[dim]No coverage data for {path}[/dim]")
        return

    width = len(str(len(text)))
    for index, line in enumerate(text):
        mark = marks.get(index, " ")
        style = {"+": "green", "-": "red"}.get(mark)
        number = str(index + 1).rjust(width)
        rendered = f"{mark} {number} {line}"
        console.print(rendered, style=style, markup=False)
