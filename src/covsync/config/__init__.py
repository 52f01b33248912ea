"""Config module exports."""

from covsync.config.loader import load_config
from covsync.config.models import (
    CovSyncConfig,
    HighlightConfig,
    LoggingConfig,
    ReportConfig,
    WatchConfig,
)

__all__ = [
    "load_config",
    "CovSyncConfig",
    "HighlightConfig",
    "LoggingConfig",
    "ReportConfig",
    "WatchConfig",
]
