"""Report file watching."""

from covsync.watch.watcher import ReportChange, ReportWatcher, collapse_changes, pump

__all__ = ["ReportChange", "ReportWatcher", "collapse_changes", "pump"]
