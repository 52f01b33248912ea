"""Report file watcher using watchfiles for async filesystem monitoring.

Design:
- One recursive awatch over the workspace root
- Only files matching the report glob pass the filter
- Each batch is collapsed to the last change per path
- The watcher only reports changes; deciding whether a change concerns the
  active report is up to the session
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

import structlog
from watchfiles import Change, awatch

from covsync.core.errors import ReportError
from covsync.report.active import ReportFileEvent
from covsync.report.discovery import SKIPPED_DIRS, matches_pattern

logger = structlog.get_logger()

_CHANGE_KINDS: dict[Change, ReportFileEvent] = {
    Change.added: ReportFileEvent.CREATED,
    Change.modified: ReportFileEvent.CHANGED,
    Change.deleted: ReportFileEvent.DELETED,
}


@dataclass(frozen=True, slots=True)
class ReportChange:
    """A change to a file matching the report glob."""

    path: str
    kind: ReportFileEvent


def collapse_changes(changes: Iterable[tuple[Change, str]]) -> list[ReportChange]:
    """Last change per path wins, first-seen order kept."""
    latest: dict[str, ReportFileEvent] = {}
    for change, path in changes:
        latest[path] = _CHANGE_KINDS[change]
    return [ReportChange(path=path, kind=kind) for path, kind in latest.items()]


class ReportWatcher:
    """Watches a workspace for changes to report files.

    Usage::

        watcher = ReportWatcher(Path("/repo"), "coverage.xml")

        async for changes in watcher.watch():
            for change in changes:
                print(f"{change.kind}: {change.path}")
    """

    def __init__(
        self,
        root: Path,
        pattern: str,
        *,
        debounce_ms: int = 300,
        step_ms: int = 50,
    ) -> None:
        self._root = root.resolve()
        self._pattern = pattern
        self._debounce_ms = debounce_ms
        self._step_ms = step_ms
        self._stop_event = asyncio.Event()
        self._running = False

    @property
    def root(self) -> Path:
        return self._root

    @property
    def is_running(self) -> bool:
        return self._running

    def accepts(self, change: Change, path: str) -> bool:  # noqa: ARG002
        """watchfiles filter: report files outside skipped directories."""
        candidate = Path(path)
        try:
            parts = candidate.relative_to(self._root).parts
        except ValueError:
            return False
        if any(part in SKIPPED_DIRS for part in parts[:-1]):
            return False
        return matches_pattern(candidate, self._root, self._pattern)

    async def watch(self) -> AsyncIterator[list[ReportChange]]:
        """Yield batches of report changes until stop() is called."""
        self._running = True
        self._stop_event.clear()
        logger.info("report_watch_started", root=str(self._root), pattern=self._pattern)
        try:
            async for changes in awatch(
                self._root,
                watch_filter=self.accepts,
                debounce=self._debounce_ms,
                step=self._step_ms,
                stop_event=self._stop_event,
                ignore_permission_denied=True,
            ):
                batch = collapse_changes(changes)
                if batch:
                    yield batch
        finally:
            self._running = False
            logger.info("report_watch_stopped", root=str(self._root))

    def stop(self) -> None:
        self._stop_event.set()


async def pump(
    watcher: ReportWatcher,
    handler: Callable[[ReportChange], Awaitable[object]],
    *,
    on_error: Callable[[ReportError], None] | None = None,
) -> None:
    """Feed every change to handler, one at a time, in arrival order.

    A failed reload is reported once through on_error and does not stop the
    watcher; it is not retried.
    """
    async for batch in watcher.watch():
        for change in batch:
            try:
                await handler(change)
            except ReportError as e:
                logger.warning("report_reload_failed", path=change.path, error=str(e))
                if on_error is not None:
                    on_error(e)
