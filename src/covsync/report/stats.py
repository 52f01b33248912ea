"""Coverage statistics.

A file with no instrumented lines has no percentage at all. Callers get
``None`` and must present it as "no data", never as 0% or 100%.
"""

from __future__ import annotations

from collections.abc import Iterable, Sized

from covsync.core.errors import ConfigError
from covsync.report.models import CoverageClass


def percent(hits: Sized, misses: Sized) -> float | None:
    """Percentage of hit lines, or None when there are no lines."""
    total = len(hits) + len(misses)
    if total == 0:
        return None
    return 100.0 * len(hits) / total


def validate_minimum(minimum: float) -> float:
    """Reject thresholds outside [0, 100] instead of clamping them."""
    if not (0.0 <= minimum <= 100.0):
        raise ConfigError.invalid_value("report.min_coverage", minimum, "must be 0-100")
    return minimum


def meets_threshold(value: float, minimum: float) -> bool:
    return value >= validate_minimum(minimum)


def format_percent(value: float) -> str:
    """Two fixed decimals, e.g. ``50.00``."""
    return f"{value:.2f}"


def class_percent(cls: CoverageClass) -> float | None:
    return percent(cls.hit_lines(), cls.miss_lines())


def aggregate_percent(classes: Iterable[CoverageClass]) -> float | None:
    """Line coverage over several classes, weighted by line count."""
    hits = 0
    misses = 0
    for cls in classes:
        hits += len(cls.hit_lines())
        misses += len(cls.miss_lines())
    total = hits + misses
    if total == 0:
        return None
    return 100.0 * hits / total
