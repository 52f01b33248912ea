"""Coverage report model, parsing, path resolution and the active report.

Usage:
    from covsync.report import ReportStore, summarize

    store = ReportStore()
    report = store.load("build/coverage.xml")
    resolved = store.lookup("/repo/src/a.cpp")
    summary = summarize(report, minimum=80.0, workspace_root="/repo")
"""

from covsync.report.active import ActiveReport, ReportFileEvent, ReportStore, lookup
from covsync.report.attributes import extract_attributes
from covsync.report.discovery import find_reports
from covsync.report.models import (
    Coverage,
    CoverageClass,
    Line,
    Package,
    ResolvedFile,
    Source,
)
from covsync.report.parser import CoberturaParser, parse_report
from covsync.report.resolver import is_drive_root, join_root, resolve
from covsync.report.stats import (
    aggregate_percent,
    class_percent,
    format_percent,
    meets_threshold,
    percent,
)
from covsync.report.tree import ReportSummary, SummaryRow, summarize

__all__ = [
    # Models
    "Coverage",
    "CoverageClass",
    "Line",
    "Package",
    "ResolvedFile",
    "Source",
    # Parsing
    "CoberturaParser",
    "extract_attributes",
    "parse_report",
    # Resolution
    "is_drive_root",
    "join_root",
    "resolve",
    # Statistics
    "aggregate_percent",
    "class_percent",
    "format_percent",
    "meets_threshold",
    "percent",
    # Active report
    "ActiveReport",
    "ReportFileEvent",
    "ReportStore",
    "lookup",
    # Listing
    "ReportSummary",
    "SummaryRow",
    "find_reports",
    "summarize",
]
