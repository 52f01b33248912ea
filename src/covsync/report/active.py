"""The currently loaded coverage report.

At most one report is active. A load builds a complete ActiveReport off to the
side and only then publishes it, so nothing ever observes a half-built report.
A failed load leaves the previous report in place.

Loads are numbered. When two loads overlap, a load that finishes after a newer
one has already been published (or after the report was invalidated) is
discarded instead of overwriting fresher state.
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType, ModuleType

import structlog

from covsync.core.errors import ReportParseError, ReportReadError
from covsync.core.logging import clear_load_id, set_load_id
from covsync.report.models import Coverage, ResolvedFile
from covsync.report.parser import CoberturaParser
from covsync.report.resolver import ExistsFn, index_key, resolve

logger = structlog.get_logger()

ReadFn = Callable[[str], bytes]


def _read_bytes(location: str) -> bytes:
    return Path(location).read_bytes()


class ReportFileEvent(Enum):
    """Kind of change observed on a report file."""

    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class ActiveReport:
    """A parsed and resolved report. Replaced wholesale, never mutated."""

    report_location: str
    coverage: Coverage
    resolved_index: Mapping[str, ResolvedFile] = field(
        default_factory=lambda: MappingProxyType({})
    )
    version: int = 0
    pathmod: ModuleType = field(default=os.path, compare=False, repr=False)

    def lookup(self, absolute_path: str) -> ResolvedFile | None:
        return self.resolved_index.get(index_key(absolute_path, self.pathmod))

    def is_location(self, path: str) -> bool:
        return index_key(path, self.pathmod) == index_key(self.report_location, self.pathmod)


def lookup(active: ActiveReport | None, absolute_path: str) -> ResolvedFile | None:
    """Resolved file for a document path, or None when there is no data for it."""
    if active is None:
        return None
    return active.lookup(absolute_path)


class ReportStore:
    """Owns the single active report and its reload semantics.

    Usage::

        store = ReportStore()
        report = store.load("/repo/build/coverage.xml")
        resolved = store.lookup("/repo/src/a.cpp")
    """

    def __init__(
        self,
        *,
        read_fn: ReadFn = _read_bytes,
        exists_fn: ExistsFn = os.path.exists,
        pathmod: ModuleType = os.path,
        parser: CoberturaParser | None = None,
    ) -> None:
        self._read_fn = read_fn
        self._exists_fn = exists_fn
        self._pathmod = pathmod
        self._parser = parser or CoberturaParser()
        self._active: ActiveReport | None = None
        self._issued = 0  # last load ticket handed out
        self._published = 0  # ticket of the state currently visible

    @property
    def active(self) -> ActiveReport | None:
        return self._active

    def lookup(self, absolute_path: str) -> ResolvedFile | None:
        return lookup(self._active, absolute_path)

    def _normalize_location(self, location: str) -> str:
        if self._pathmod.isabs(location):
            return self._pathmod.normpath(location)
        return self._pathmod.abspath(location)

    def _build(self, location: str, data: bytes, ticket: int) -> ActiveReport:
        coverage = self._parser.parse(data, location=location)
        resolved = resolve(coverage, self._exists_fn, pathmod=self._pathmod)
        return ActiveReport(
            report_location=location,
            coverage=coverage,
            resolved_index=MappingProxyType(resolved),
            version=ticket,
            pathmod=self._pathmod,
        )

    def _read(self, location: str) -> bytes:
        try:
            return self._read_fn(location)
        except OSError as e:
            raise ReportReadError.io_error(location, str(e)) from e

    def _superseded(self, location: str, ticket: int) -> bool:
        if ticket >= self._published:
            return False
        logger.info(
            "report_load_superseded",
            location=location,
            version=ticket,
            published=self._published,
        )
        return True

    def _publish(self, report: ActiveReport) -> ActiveReport | None:
        if self._superseded(report.report_location, report.version):
            return None
        self._active = report
        self._published = report.version
        logger.info(
            "report_loaded",
            location=report.report_location,
            version=report.version,
            classes=len(report.coverage.iter_classes()),
            resolved=len(report.resolved_index),
        )
        return report

    def load(self, location: str) -> ActiveReport:
        """Read, parse and resolve a report, then make it the active one.

        Raises:
            ReportReadError: If the report cannot be read.
            ReportParseError: If the report is not well-formed XML.
        """
        location = self._normalize_location(location)
        self._issued += 1
        ticket = self._issued
        set_load_id()
        try:
            report = self._build(location, self._read(location), ticket)
            self._publish(report)
            return report
        except ReportReadError as e:
            logger.warning("report_read_failed", location=location, reason=e.details["reason"])
            raise
        except ReportParseError as e:
            logger.warning("report_parse_failed", location=location, reason=e.details["reason"])
            raise
        finally:
            clear_load_id()

    async def load_async(self, location: str) -> ActiveReport | None:
        """Like load(), with file I/O and resolution off the event loop.

        Returns None when a newer load or an invalidation won the race while
        this one was in flight; its result is dropped, failures included.
        """
        location = self._normalize_location(location)
        self._issued += 1
        ticket = self._issued
        set_load_id()
        try:
            data = await asyncio.to_thread(self._read, location)
            report = await asyncio.to_thread(self._build, location, data, ticket)
            return self._publish(report)
        except ReportReadError as e:
            if self._superseded(location, ticket):
                return None
            logger.warning("report_read_failed", location=location, reason=e.details["reason"])
            raise
        except ReportParseError as e:
            if self._superseded(location, ticket):
                return None
            logger.warning("report_parse_failed", location=location, reason=e.details["reason"])
            raise
        finally:
            clear_load_id()

    def invalidate(self) -> None:
        """Forget the active report. In-flight loads started before this are dropped."""
        if self._active is not None:
            logger.info("report_invalidated", location=self._active.report_location)
        self._active = None
        self._issued += 1
        self._published = self._issued

    def is_active_location(self, path: str) -> bool:
        return self._active is not None and self._active.is_location(path)

    def handle_file_event(self, path: str, kind: ReportFileEvent) -> bool:
        """React to a watched report file changing on disk.

        Only the exact file backing the active report counts. Returns True when
        the active report was replaced or cleared.

        Raises:
            ReportReadError, ReportParseError: If the reload fails. The previous
            report stays active.
        """
        active = self._active
        if active is None or not active.is_location(path):
            logger.debug("report_reload_ignored", path=path, kind=kind.value)
            return False
        if kind is ReportFileEvent.DELETED:
            self.invalidate()
            return True
        self.load(active.report_location)
        return True
