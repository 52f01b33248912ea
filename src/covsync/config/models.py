"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVSYNC__SECTION__KEY)
3. Repo YAML (.covsync/config.yaml)
4. Global YAML (~/.config/covsync/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVSYNC__<SECTION>__<KEY>=<VALUE>

Examples:
    COVSYNC__LOGGING__LEVEL=DEBUG
    COVSYNC__REPORT__MIN_COVERAGE=90
    COVSYNC__REPORT__PATTERN=cobertura.xml
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_MIN_COVERAGE = 80.0
DEFAULT_LANGUAGES = ("c", "cpp")


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVSYNC__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped report record.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ReportConfig(BaseModel):
    """Coverage report configuration.

    Env vars:
        COVSYNC__REPORT__PATTERN: Report file glob (default: coverage.xml)
        COVSYNC__REPORT__MIN_COVERAGE: Minimum coverage percent (default: 80.0)
    """

    pattern: str = Field(
        default="coverage.xml",
        description="Glob for report files. Matched anywhere below the workspace root.",
    )
    min_coverage: float = Field(
        default=DEFAULT_MIN_COVERAGE,
        description="Minimum line coverage percent. Files below it get a warning.",
    )
    languages: list[str] = Field(
        default_factory=lambda: list(DEFAULT_LANGUAGES),
        description="Document language ids that receive annotations.",
    )

    @field_validator("min_coverage")
    @classmethod
    def validate_min_coverage(cls, v: float) -> float:
        if not (0.0 <= v <= 100.0):
            raise ValueError(f"Minimum coverage must be 0-100, got {v}")
        return v

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Report pattern must not be empty")
        return v


class HighlightConfig(BaseModel):
    """Highlight styles. Passed through to the host untouched.

    Env vars:
        COVSYNC__HIGHLIGHT__HIT_STYLE: Style for executed lines
        COVSYNC__HIGHLIGHT__MISS_STYLE: Style for lines never executed
    """

    hit_style: str = Field(default="rgba(0, 255, 0, 0.1)")
    miss_style: str = Field(default="rgba(255, 0, 0, 0.1)")


class WatchConfig(BaseModel):
    """Report file watcher configuration.

    Env vars:
        COVSYNC__WATCH__DEBOUNCE_MS: Coalescing window for change storms
        COVSYNC__WATCH__STEP_MS: Polling step of the underlying watcher
    """

    debounce_ms: int = Field(
        default=300,
        description="Changes within this window are coalesced into one reload.",
    )
    step_ms: int = Field(default=50)

    @field_validator("debounce_ms", "step_ms")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"Must be non-negative, got {v}")
        return v


class CovSyncConfig(BaseModel):
    """Root configuration for covsync.

    All settings can be configured via:
    1. Environment variables: COVSYNC__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
