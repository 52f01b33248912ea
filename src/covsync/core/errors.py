"""covsync error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report
- 9xxx: Internal

Only report load failures (3xxx) are surfaced to whoever triggered the load.
Per-record problems inside a report never become errors; the parser skips
the record and keeps going.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Report (3xxx)
    REPORT_PARSE_ERROR = 3001
    REPORT_READ_ERROR = 3002
    REPORT_NOT_SELECTED = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovSyncError(Exception):
    """Base error with structured context for notifications and JSON output."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovSyncError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ReportError(CovSyncError):
    """Errors loading a coverage report. The previous active report survives."""

    @classmethod
    def not_selected(cls, candidates: list[str]) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_NOT_SELECTED,
            message=f"No report selected ({len(candidates)} candidates)",
            details={"candidates": candidates},
        )


class ReportParseError(ReportError):
    """The report is not well-formed XML."""

    @classmethod
    def parse_error(cls, location: str, reason: str) -> "ReportParseError":
        return cls(
            code=ErrorCode.REPORT_PARSE_ERROR,
            message=f"Failed to parse coverage report {location}: {reason}",
            details={"location": location, "reason": reason},
        )


class ReportReadError(ReportError):
    """The report could not be read."""

    @classmethod
    def io_error(cls, location: str, reason: str) -> "ReportReadError":
        return cls(
            code=ErrorCode.REPORT_READ_ERROR,
            message=f"Failed to read coverage report {location}: {reason}",
            retryable=True,
            details={"location": location, "reason": reason},
        )


class InternalError(CovSyncError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
