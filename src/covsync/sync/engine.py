"""View synchronizer: keeps every observed view consistent with the active report.

``step(state, event)`` is pure. It returns the next state and the effects a
host must apply, in order. State is never mutated; each step builds a new
SyncState with a higher revision.

Per view phases:
- UNKNOWN: nothing applied (no report, no data for the document)
- ANNOTATED: hit/miss highlights and the threshold diagnostic are applied
- SUPPRESSED: data exists but is hidden, because highlighting is off or the
  document was edited after it was annotated

An edited document stays SUPPRESSED until highlighting is switched on again
or the report reloads. Refocusing it is not enough: the report's line
numbers no longer describe the edited text.

Views whose language is not in the allow-list are tracked but never receive
effects.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

import structlog

from covsync.config.models import CovSyncConfig
from covsync.core.errors import InternalError
from covsync.report.active import ActiveReport
from covsync.report.models import ResolvedFile
from covsync.report.stats import class_percent, format_percent, meets_threshold, validate_minimum
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


class ViewPhase(Enum):
    UNKNOWN = "unknown"
    ANNOTATED = "annotated"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True, slots=True)
class SyncSettings:
    """The slice of configuration the synchronizer needs."""

    min_coverage: float = 80.0
    languages: frozenset[str] = frozenset({"c", "cpp"})
    hit_style: str = "rgba(0, 255, 0, 0.1)"
    miss_style: str = "rgba(255, 0, 0, 0.1)"

    def __post_init__(self) -> None:
        validate_minimum(self.min_coverage)

    @classmethod
    def from_config(cls, config: CovSyncConfig) -> SyncSettings:
        return cls(
            min_coverage=config.report.min_coverage,
            languages=frozenset(config.report.languages),
            hit_style=config.highlight.hit_style,
            miss_style=config.highlight.miss_style,
        )


@dataclass(frozen=True, slots=True)
class ViewState:
    view: View
    phase: ViewPhase = ViewPhase.UNKNOWN
    visible: bool = True
    edited: bool = False
    last_hits: tuple[int, ...] = ()
    last_misses: tuple[int, ...] = ()

    @property
    def view_id(self) -> str:
        return self.view.view_id

    @property
    def document_path(self) -> str:
        return self.view.document_path

    @property
    def highlights_visible(self) -> bool:
        return self.phase is ViewPhase.ANNOTATED


@dataclass(frozen=True, slots=True)
class SyncState:
    settings: SyncSettings = field(default_factory=SyncSettings)
    report: ActiveReport | None = None
    highlighting_enabled: bool = True
    views: Mapping[str, ViewState] = field(default_factory=dict)
    focused: str | None = None
    revision: int = 0

    def view_state(self, view_id: str) -> ViewState | None:
        return self.views.get(view_id)


def highlight_lines(line_numbers: Iterable[int], line_count: int) -> tuple[int, ...]:
    """Report line numbers (1-based) to document lines (0-based) inside the document.

    Out-of-range lines are dropped; duplicates collapse to their first position.
    """
    converted = (number - 1 for number in line_numbers)
    return tuple(dict.fromkeys(line for line in converted if 0 <= line < line_count))


def coverage_message(value: float, minimum: float) -> str:
    return (
        f"File is not covered sufficiently "
        f"({format_percent(value)}/{format_percent(minimum)}%)"
    )


def status_text(value: float) -> str:
    return f"Coverage: {format_percent(value)}%"


class _Step:
    """Accumulates the next state and effects while one event is handled."""

    def __init__(self, state: SyncState) -> None:
        self.settings = state.settings
        self.report = state.report
        self.enabled = state.highlighting_enabled
        self.views: dict[str, ViewState] = dict(state.views)
        self.focused = state.focused
        self.revision = state.revision
        self.effects: list[Effect] = []

    def finish(self) -> tuple[SyncState, list[Effect]]:
        state = SyncState(
            settings=self.settings,
            report=self.report,
            highlighting_enabled=self.enabled,
            views=self.views,
            focused=self.focused,
            revision=self.revision + 1,
        )
        return state, self.effects

    def hide_status(self) -> None:
        """Hide the status summary once per step, unless something showed it since."""
        for effect in reversed(self.effects):
            if isinstance(effect, HideStatus):
                return
            if isinstance(effect, SetStatus):
                break
        self.effects.append(HideStatus())

    def annotatable(self, vs: ViewState) -> bool:
        return vs.view.language_id in self.settings.languages

    def resolve(self, vs: ViewState) -> tuple[ResolvedFile, float] | None:
        if self.report is None:
            return None
        resolved = self.report.lookup(vs.document_path)
        if resolved is None:
            return None
        value = class_percent(resolved.coverage_class)
        if value is None:
            return None
        return resolved, value

    def clear(self, vs: ViewState, phase: ViewPhase) -> None:
        self.effects.append(SetHighlights(view_id=vs.view_id, highlights=()))
        self.effects.append(SetDiagnostics(document_path=vs.document_path, diagnostics=()))
        if vs.view_id == self.focused:
            self.hide_status()
        self.views[vs.view_id] = replace(vs, phase=phase, last_hits=(), last_misses=())

    def annotate(self, vs: ViewState) -> None:
        """Apply data to one gated view, or clear it when there is none."""
        found = self.resolve(vs)
        if found is None:
            self.clear(vs, ViewPhase.UNKNOWN)
            logger.debug("view_no_data", view_id=vs.view_id, path=vs.document_path)
            return
        if not self.enabled:
            self.clear(vs, ViewPhase.SUPPRESSED)
            return

        resolved, value = found
        line_count = vs.view.line_count
        hits = highlight_lines(resolved.coverage_class.hit_lines(), line_count)
        misses = highlight_lines(resolved.coverage_class.miss_lines(), line_count)
        highlights = tuple(
            Highlight(LineRange(line, line), HighlightCategory.HIT, self.settings.hit_style)
            for line in hits
        ) + tuple(
            Highlight(LineRange(line, line), HighlightCategory.MISS, self.settings.miss_style)
            for line in misses
        )
        self.effects.append(SetHighlights(view_id=vs.view_id, highlights=highlights))

        minimum = self.settings.min_coverage
        ok = meets_threshold(value, minimum)
        diagnostics: tuple[Diagnostic, ...] = ()
        if not ok:
            diagnostics = (Diagnostic(LineRange(0, 0), coverage_message(value, minimum)),)
        self.effects.append(SetDiagnostics(document_path=vs.document_path, diagnostics=diagnostics))

        if vs.view_id == self.focused:
            self.effects.append(SetStatus(text=status_text(value), ok=ok))

        self.views[vs.view_id] = replace(
            vs, phase=ViewPhase.ANNOTATED, edited=False, last_hits=hits, last_misses=misses
        )
        logger.debug(
            "view_annotated",
            view_id=vs.view_id,
            path=vs.document_path,
            percent=format_percent(value),
            hits=len(hits),
            misses=len(misses),
        )

    def refresh_all(self) -> None:
        """Re-annotate every visible gated view. Edits are forgiven."""
        status_shown = False
        for view_id in list(self.views):
            vs = self.views[view_id]
            if not vs.visible or not self.annotatable(vs):
                continue
            self.annotate(replace(vs, edited=False))
            status_shown = status_shown or (
                view_id == self.focused and self.views[view_id].highlights_visible
            )
        if not status_shown:
            self.hide_status()

    def suppress_all(self, phase: ViewPhase) -> None:
        """Clear every gated view. Hidden views only lose their diagnostics."""
        for view_id in list(self.views):
            vs = self.views[view_id]
            if not self.annotatable(vs):
                continue
            target = phase if vs.phase is not ViewPhase.UNKNOWN else ViewPhase.UNKNOWN
            if vs.visible:
                self.clear(vs, target)
            elif vs.phase is not ViewPhase.UNKNOWN:
                if vs.phase is ViewPhase.ANNOTATED:
                    self.effects.append(
                        SetDiagnostics(document_path=vs.document_path, diagnostics=())
                    )
                self.views[view_id] = replace(vs, phase=target, last_hits=(), last_misses=())
        self.hide_status()

    def release_document(self, document_path: str) -> None:
        """Drop a document's diagnostics once no tracked view shows it."""
        if any(vs.document_path == document_path for vs in self.views.values()):
            return
        self.effects.append(DropDiagnostics(document_path=document_path))

    def track(self, view: View, *, visible: bool = True) -> ViewState:
        previous = self.views.get(view.view_id)
        switched = previous is not None and previous.document_path != view.document_path
        if previous is None or switched:
            vs = ViewState(view=view, visible=visible)
        else:
            vs = replace(previous, view=view, visible=visible)
        self.views[view.view_id] = vs
        if previous is not None and switched:
            # The view now shows another document
            if previous.phase is ViewPhase.ANNOTATED and not self.annotatable(vs):
                self.effects.append(SetHighlights(view_id=view.view_id, highlights=()))
            self.release_document(previous.document_path)
        return vs


def _on_focus(step: _Step, event: FocusChanged) -> None:
    if event.view is None:
        step.focused = None
        step.hide_status()
        return

    vs = step.track(event.view)
    step.focused = vs.view_id
    if not step.annotatable(vs):
        step.hide_status()
        return
    if vs.edited:
        # Stale line numbers; wait for an explicit show or a reload
        step.hide_status()
        return
    step.annotate(vs)


def _on_visible(step: _Step, event: VisibleViewsChanged) -> None:
    visible_ids = {view.view_id for view in event.views}
    for view_id, vs in list(step.views.items()):
        if view_id not in visible_ids and vs.visible:
            step.views[view_id] = replace(vs, visible=False)
    for view in event.views:
        previous = step.views.get(view.view_id)
        was_shown = (
            previous is not None
            and previous.visible
            and previous.document_path == view.document_path
        )
        vs = step.track(view)
        if was_shown or vs.edited or not step.annotatable(vs):
            continue
        step.annotate(vs)


def _on_document_changed(step: _Step, event: DocumentChanged) -> None:
    changed = step.views.get(event.view_id)
    if changed is None:
        return
    for view_id, vs in list(step.views.items()):
        if vs.document_path != changed.document_path:
            continue
        if event.line_count is not None:
            vs = replace(vs, view=replace(vs.view, line_count=event.line_count))
        vs = replace(vs, edited=True)
        step.views[view_id] = vs
        if vs.phase is ViewPhase.ANNOTATED and step.annotatable(vs):
            step.clear(vs, ViewPhase.SUPPRESSED)
            logger.debug("view_suppressed", view_id=view_id, reason="edited")


def _on_report(step: _Step, event: ReportChanged) -> None:
    step.report = event.report
    if event.report is None:
        step.suppress_all(ViewPhase.UNKNOWN)
        return
    if step.enabled:
        step.refresh_all()
    else:
        # Keep the data, show nothing; edits predate this report
        for view_id, vs in list(step.views.items()):
            step.views[view_id] = replace(vs, edited=False)


def _on_toggle(step: _Step, event: ToggleChanged) -> None:
    step.enabled = event.enabled
    if event.enabled:
        step.refresh_all()
    else:
        step.suppress_all(ViewPhase.SUPPRESSED)


def _on_close(step: _Step, event: ViewClosed) -> None:
    vs = step.views.pop(event.view_id, None)
    if vs is None:
        return
    if step.focused == event.view_id:
        step.focused = None
        step.hide_status()
    step.release_document(vs.document_path)


def step(state: SyncState, event: Event) -> tuple[SyncState, list[Effect]]:
    """Apply one event. Returns the next state and the effects to apply, in order."""
    current = _Step(state)
    match event:
        case FocusChanged():
            _on_focus(current, event)
        case VisibleViewsChanged():
            _on_visible(current, event)
        case DocumentChanged():
            _on_document_changed(current, event)
        case ReportChanged():
            _on_report(current, event)
        case ToggleChanged():
            _on_toggle(current, event)
        case ViewClosed():
            _on_close(current, event)
        case _:
            raise InternalError.unexpected("unknown sync event", event=repr(event))
    return current.finish()
