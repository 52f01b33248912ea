"""View synchronization: events in, presentation effects out."""

from covsync.sync.effects import (
    Diagnostic,
    DropDiagnostics,
    Effect,
    HideStatus,
    Highlight,
    HighlightCategory,
    LineRange,
    SetDiagnostics,
    SetHighlights,
    SetStatus,
)
from covsync.sync.engine import SyncSettings, SyncState, ViewPhase, ViewState, step
from covsync.sync.events import (
    DocumentChanged,
    Event,
    FocusChanged,
    ReportChanged,
    ToggleChanged,
    View,
    ViewClosed,
    VisibleViewsChanged,
)
from covsync.sync.session import CoverageSession

__all__ = [
    # Events
    "DocumentChanged",
    "Event",
    "FocusChanged",
    "ReportChanged",
    "ToggleChanged",
    "View",
    "ViewClosed",
    "VisibleViewsChanged",
    # Effects
    "Diagnostic",
    "DropDiagnostics",
    "Effect",
    "HideStatus",
    "Highlight",
    "HighlightCategory",
    "LineRange",
    "SetDiagnostics",
    "SetHighlights",
    "SetStatus",
    # Engine
    "CoverageSession",
    "SyncSettings",
    "SyncState",
    "ViewPhase",
    "ViewState",
    "step",
]
