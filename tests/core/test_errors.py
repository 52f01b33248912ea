"""Tests for core/errors.py."""

from __future__ import annotations

import pytest

from covsync.core.errors import (
    ConfigError,
    CovSyncError,
    ErrorCode,
    InternalError,
    ReportError,
    ReportParseError,
    ReportReadError,
)


class TestErrorCodes:
    """Tests for ErrorCode ranges."""

    def test_ranges(self) -> None:
        """Codes fall in their category range."""
        for code in ErrorCode:
            if code.name.startswith("CONFIG_"):
                assert 2000 <= code.value < 3000
            elif code.name.startswith("REPORT_"):
                assert 3000 <= code.value < 4000
            else:
                assert code.value >= 9000

    def test_unique(self) -> None:
        """No two codes share a value."""
        values = [code.value for code in ErrorCode]
        assert len(values) == len(set(values))


class TestCovSyncError:
    """Tests for the base error."""

    def test_str(self) -> None:
        """String form carries code, name and message."""
        error = CovSyncError(code=ErrorCode.INTERNAL_ERROR, message="boom")
        assert str(error) == "[9001] INTERNAL_ERROR: boom"

    def test_to_dict(self) -> None:
        """Serializes every field for JSON output."""
        error = ReportReadError.io_error("/r.xml", "denied")
        assert error.to_dict() == {
            "code": 3002,
            "error": "REPORT_READ_ERROR",
            "message": "Failed to read coverage report /r.xml: denied",
            "retryable": True,
            "details": {"location": "/r.xml", "reason": "denied"},
        }

    def test_is_frozen(self) -> None:
        """Errors are immutable."""
        error = InternalError.unexpected("x")
        with pytest.raises(AttributeError):
            error.message = "y"  # type: ignore[misc]


class TestReportErrors:
    """Tests for report load errors."""

    def test_parse_error(self) -> None:
        """Parse errors are not retryable and keep the reason."""
        error = ReportParseError.parse_error("/r.xml", "unclosed token")
        assert error.code == ErrorCode.REPORT_PARSE_ERROR
        assert not error.retryable
        assert error.details["reason"] == "unclosed token"

    def test_catchable_as_report_error(self) -> None:
        """Both load failures are ReportErrors."""
        with pytest.raises(ReportError):
            raise ReportParseError.parse_error("/r.xml", "bad")
        with pytest.raises(ReportError):
            raise ReportReadError.io_error("/r.xml", "gone")

    def test_not_selected(self) -> None:
        """Not-selected error counts the candidates."""
        error = ReportError.not_selected(["/a.xml", "/b.xml"])
        assert error.code == ErrorCode.REPORT_NOT_SELECTED
        assert "2 candidates" in error.message


class TestConfigErrors:
    """Tests for config error factories."""

    @pytest.mark.parametrize(
        ("error", "code"),
        [
            (ConfigError.parse_error("/c.yaml", "bad"), ErrorCode.CONFIG_PARSE_ERROR),
            (
                ConfigError.invalid_value("report.min_coverage", 120, "range"),
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            (ConfigError.file_not_found("/c.yaml"), ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_factories(self, error: ConfigError, code: ErrorCode) -> None:
        """Each factory sets its code."""
        assert error.code == code
        assert isinstance(error, CovSyncError)

    def test_invalid_value_stringifies(self) -> None:
        """Offending values are stored as strings."""
        error = ConfigError.invalid_value("report.min_coverage", 120.0, "range")
        assert error.details["value"] == "120.0"


class TestInternalError:
    """Tests for InternalError."""

    def test_details(self) -> None:
        """Extra keyword details are kept."""
        error = InternalError.unexpected("oops", event="X")
        assert error.details == {"event": "X"}
        assert error.message == "Internal error: oops"
