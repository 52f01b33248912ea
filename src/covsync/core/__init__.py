"""Core module exports."""

from covsync.core.errors import (
    ConfigError,
    CovSyncError,
    ErrorCode,
    InternalError,
    ReportError,
    ReportParseError,
    ReportReadError,
)
from covsync.core.logging import (
    clear_load_id,
    configure_logging,
    get_load_id,
    get_logger,
    set_load_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovSyncError",
    "ErrorCode",
    "InternalError",
    "ReportError",
    "ReportParseError",
    "ReportReadError",
    # Logging
    "clear_load_id",
    "configure_logging",
    "get_load_id",
    "get_logger",
    "set_load_id",
]
