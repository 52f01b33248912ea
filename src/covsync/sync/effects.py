"""Presentation instructions produced by the view synchronizer.

Effects are plain data. A host applies them to its highlight, diagnostic and
status surfaces; tests compare them directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DIAGNOSTIC_SOURCE = "Code Coverage"
TOGGLE_COMMAND = "covsync.toggle"


class HighlightCategory(Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True, slots=True)
class LineRange:
    """Whole-line range, zero-based and inclusive on both ends."""

    start_line: int
    end_line: int


@dataclass(frozen=True, slots=True)
class Highlight:
    range: LineRange
    category: HighlightCategory
    style: str


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A document-level finding, anchored at the start of the document."""

    range: LineRange
    message: str
    severity: str = "warning"
    source: str = DIAGNOSTIC_SOURCE


@dataclass(frozen=True, slots=True)
class SetHighlights:
    """Replace all coverage highlights of a view. Empty clears them."""

    view_id: str
    highlights: tuple[Highlight, ...]


@dataclass(frozen=True, slots=True)
class SetDiagnostics:
    """Replace the coverage diagnostics of a document. Empty clears them."""

    document_path: str
    diagnostics: tuple[Diagnostic, ...]


@dataclass(frozen=True, slots=True)
class DropDiagnostics:
    """Forget a document's diagnostics entirely (its last view closed)."""

    document_path: str


@dataclass(frozen=True, slots=True)
class SetStatus:
    """Show the status summary for the focused view."""

    text: str
    ok: bool
    command: str = TOGGLE_COMMAND


@dataclass(frozen=True, slots=True)
class HideStatus:
    pass


Effect = SetHighlights | SetDiagnostics | DropDiagnostics | SetStatus | HideStatus
