"""Command surface over the report store and the view synchronizer.

A CoverageSession owns the single ReportStore and the current SyncState. Host
events and user commands go in; effects come out, both returned and handed
to an optional sink in the order they must be applied.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import structlog

from covsync.config.models import CovSyncConfig
from covsync.core.errors import ReportError
from covsync.report.active import ReportFileEvent, ReportStore
from covsync.report.discovery import find_reports
from covsync.sync.effects import Effect
from covsync.sync.engine import SyncSettings, SyncState, step
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

logger = structlog.get_logger()

EffectSink = Callable[[Effect], None]
ReportChooser = Callable[[Sequence[Path]], Path | None]


def choose_single(candidates: Sequence[Path]) -> Path | None:
    """Pick the report when exactly one candidate exists."""
    if len(candidates) == 1:
        return candidates[0]
    return None


class CoverageSession:
    """Usage::

        session = CoverageSession(config, workspace_root=Path("/repo"))
        session.select_report("/repo/build/coverage.xml")
        effects = session.focus(View("1", "/repo/src/a.cpp", "cpp", 120))
    """

    def __init__(
        self,
        config: CovSyncConfig | None = None,
        *,
        store: ReportStore | None = None,
        sink: EffectSink | None = None,
        workspace_root: Path | None = None,
        chooser: ReportChooser = choose_single,
    ) -> None:
        self._config = config or CovSyncConfig()
        self._store = store or ReportStore()
        self._sink = sink
        self._workspace_root = workspace_root or Path.cwd()
        self._chooser = chooser
        self._state = SyncState(settings=SyncSettings.from_config(self._config))

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def store(self) -> ReportStore:
        return self._store

    def dispatch(self, event: Event) -> list[Effect]:
        self._state, effects = step(self._state, event)
        if self._sink is not None:
            for effect in effects:
                self._sink(effect)
        return effects

    # Host events

    def focus(self, view: View | None) -> list[Effect]:
        return self.dispatch(FocusChanged(view))

    def set_visible(self, views: Sequence[View]) -> list[Effect]:
        return self.dispatch(VisibleViewsChanged(tuple(views)))

    def edit(self, view_id: str, line_count: int | None = None) -> list[Effect]:
        return self.dispatch(DocumentChanged(view_id, line_count))

    def close(self, view_id: str) -> list[Effect]:
        return self.dispatch(ViewClosed(view_id))

    def on_file_event(self, path: str, kind: ReportFileEvent) -> list[Effect]:
        """A watched report file changed. Reloads only the active report's file.

        Raises:
            ReportReadError, ReportParseError: If the reload fails; views keep
            showing the previous report.
        """
        if not self._store.handle_file_event(path, kind):
            return []
        return self.dispatch(ReportChanged(self._store.active))

    async def on_file_event_async(self, path: str, kind: ReportFileEvent) -> list[Effect]:
        """Like on_file_event, with the reload off the event loop.

        A reload overtaken by a newer one produces no effects.
        """
        if not self._store.is_active_location(path):
            logger.debug("report_reload_ignored", path=path, kind=kind.value)
            return []
        if kind is ReportFileEvent.DELETED:
            self._store.invalidate()
            return self.dispatch(ReportChanged(None))
        report = await self._store.load_async(path)
        if report is None:
            return []
        return self.dispatch(ReportChanged(report))

    # Commands

    def select_report(self, path: str | Path) -> list[Effect]:
        """Load a report and show it.

        Raises:
            ReportReadError, ReportParseError: The previous report stays active.
        """
        report = self._store.load(str(path))
        effects = self.dispatch(ReportChanged(report))
        if not self._state.highlighting_enabled:
            effects += self.dispatch(ToggleChanged(True))
        return effects

    def show_for_report(self, path: str | Path) -> list[Effect]:
        return self.select_report(path)

    def show(self) -> list[Effect]:
        """Show highlights, choosing a report first when none is loaded.

        Raises:
            ReportError: If no report is loaded and none could be chosen.
        """
        if self._store.active is None:
            candidates = find_reports(self._workspace_root, self._config.report.pattern)
            chosen = self._chooser(candidates)
            if chosen is None:
                raise ReportError.not_selected([str(c) for c in candidates])
            return self.select_report(chosen)
        return self.dispatch(ToggleChanged(True))

    def hide(self) -> list[Effect]:
        return self.dispatch(ToggleChanged(False))

    def toggle(self) -> list[Effect]:
        if self._state.highlighting_enabled:
            return self.hide()
        return self.show()

    def unload(self) -> list[Effect]:
        self._store.invalidate()
        return self.dispatch(ReportChanged(None))
