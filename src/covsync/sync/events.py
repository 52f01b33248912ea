"""Inputs to the view synchronizer.

Each event is one discrete thing that happened in the host. Events are
consumed one at a time by ``step``.
"""

from __future__ import annotations

from dataclasses import dataclass

from covsync.report.active import ActiveReport


@dataclass(frozen=True, slots=True)
class View:
    """An open editor showing a document."""

    view_id: str
    document_path: str
    language_id: str
    line_count: int


@dataclass(frozen=True, slots=True)
class FocusChanged:
    """A view gained focus. None means no view is focused."""

    view: View | None


@dataclass(frozen=True, slots=True)
class VisibleViewsChanged:
    """The full set of views currently on screen."""

    views: tuple[View, ...]


@dataclass(frozen=True, slots=True)
class DocumentChanged:
    """The document shown by a view was edited.

    Every view of the same document is affected. ``line_count`` is the new
    length of the document when the host knows it.
    """

    view_id: str
    line_count: int | None = None


@dataclass(frozen=True, slots=True)
class ReportChanged:
    """A report was loaded or reloaded. None means it was unloaded."""

    report: ActiveReport | None


@dataclass(frozen=True, slots=True)
class ToggleChanged:
    """Highlighting switched on or off for all views.

    Switching on while already on still re-annotates every visible view.
    """

    enabled: bool


@dataclass(frozen=True, slots=True)
class ViewClosed:
    view_id: str


Event = (
    FocusChanged | VisibleViewsChanged | DocumentChanged | ReportChanged | ToggleChanged | ViewClosed
)
