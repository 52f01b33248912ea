"""Per-file coverage listing for the active report.

One row per resolved file, the way a sidebar would show it: a display path
(relative to the workspace when possible), the percentage against the
minimum, and whether the file meets it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from types import ModuleType

from covsync.report.active import ActiveReport
from covsync.report.stats import aggregate_percent, class_percent, format_percent, meets_threshold


@dataclass(frozen=True, slots=True)
class SummaryRow:
    display_path: str
    absolute_path: str
    percent: float | None
    minimum: float

    @property
    def ok(self) -> bool | None:
        """None when the file has no line data."""
        if self.percent is None:
            return None
        return meets_threshold(self.percent, self.minimum)

    @property
    def description(self) -> str:
        """``50.00/80.0%``, or ``-/80.0%`` without line data."""
        shown = "-" if self.percent is None else format_percent(self.percent)
        return f"{shown}/{self.minimum}%"


@dataclass(frozen=True, slots=True)
class ReportSummary:
    report_location: str
    rows: tuple[SummaryRow, ...]
    total_percent: float | None
    minimum: float


def _display_path(path: str, workspace_root: str | None, pathmod: ModuleType) -> str:
    if not workspace_root:
        return path
    try:
        relative = pathmod.relpath(path, workspace_root)
    except ValueError:
        # Different drives
        return path
    if relative == pathmod.pardir or relative.startswith(pathmod.pardir + pathmod.sep):
        return path
    return relative


def summarize(
    report: ActiveReport,
    minimum: float,
    *,
    workspace_root: str | None = None,
    pathmod: ModuleType = os.path,
) -> ReportSummary:
    """Build the per-file listing, sorted by display path."""
    rows = [
        SummaryRow(
            display_path=_display_path(resolved.absolute_path, workspace_root, pathmod),
            absolute_path=resolved.absolute_path,
            percent=class_percent(resolved.coverage_class),
            minimum=minimum,
        )
        for resolved in report.resolved_index.values()
    ]
    rows.sort(key=lambda row: row.display_path)
    return ReportSummary(
        report_location=report.report_location,
        rows=tuple(rows),
        total_percent=aggregate_percent(r.coverage_class for r in report.resolved_index.values()),
        minimum=minimum,
    )
