"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: yaml < env < kwargs
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from covsync.config.loader import _deep_merge, _load_yaml, load_config
from covsync.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def no_global_config(tmp_path: Path):
    with patch("covsync.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml"):
        yield


def _write_repo_config(root: Path, text: str) -> None:
    config_dir = root / ".covsync"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "config.yaml").write_text(text)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Returns empty dict when file doesn't exist."""
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_empty_file(self, tmp_path: Path) -> None:
        """Returns empty dict for empty file."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert _load_yaml(path) == {}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Raises ConfigError for invalid YAML syntax."""
        path = tmp_path / "invalid.yaml"
        path.write_text("report:\n  pattern: [unclosed")
        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(path)
        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR


class TestDeepMerge:
    """Tests for _deep_merge function."""

    def test_nested_merge(self) -> None:
        """Nested sections merge key by key."""
        base = {"report": {"pattern": "a.xml", "min_coverage": 10}}
        override = {"report": {"min_coverage": 20}}
        assert _deep_merge(base, override) == {"report": {"pattern": "a.xml", "min_coverage": 20}}

    def test_base_untouched(self) -> None:
        """Merging does not mutate the base dict."""
        base = {"a": {"b": 1}}
        _deep_merge(base, {"a": {"b": 2}})
        assert base == {"a": {"b": 1}}


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults(self, tmp_path: Path) -> None:
        """No config files yields built-in defaults."""
        config = load_config(tmp_path)
        assert config.report.min_coverage == 80.0

    def test_repo_yaml(self, tmp_path: Path) -> None:
        """Repo config file values are applied."""
        _write_repo_config(tmp_path, "report:\n  min_coverage: 65\n  pattern: cobertura.xml\n")
        config = load_config(tmp_path)
        assert config.report.min_coverage == 65.0
        assert config.report.pattern == "cobertura.xml"

    def test_global_yaml_below_repo(self, tmp_path: Path) -> None:
        """Repo config overrides global config key by key."""
        global_path = tmp_path / "global.yaml"
        global_path.write_text("report:\n  min_coverage: 10\n  pattern: g.xml\n")
        _write_repo_config(tmp_path, "report:\n  min_coverage: 20\n")
        with patch("covsync.config.loader.GLOBAL_CONFIG_PATH", global_path):
            config = load_config(tmp_path)
        assert config.report.min_coverage == 20.0
        assert config.report.pattern == "g.xml"

    def test_env_overrides_yaml(self, tmp_path: Path) -> None:
        """Environment variables override YAML."""
        _write_repo_config(tmp_path, "report:\n  min_coverage: 65\n")
        with patch.dict(os.environ, {"COVSYNC__REPORT__MIN_COVERAGE": "90"}):
            config = load_config(tmp_path)
        assert config.report.min_coverage == 90.0

    def test_kwargs_override_env(self, tmp_path: Path) -> None:
        """Direct kwargs override environment variables."""
        with patch.dict(os.environ, {"COVSYNC__REPORT__MIN_COVERAGE": "90"}):
            config = load_config(tmp_path, report={"min_coverage": 30})
        assert config.report.min_coverage == 30.0

    def test_out_of_range_minimum_rejected(self, tmp_path: Path) -> None:
        """Out-of-range threshold raises ConfigError naming the field."""
        _write_repo_config(tmp_path, "report:\n  min_coverage: 120\n")
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert "min_coverage" in exc_info.value.details["field"]

    def test_invalid_env_rejected(self, tmp_path: Path) -> None:
        """Invalid env values raise ConfigError."""
        with (
            patch.dict(os.environ, {"COVSYNC__WATCH__DEBOUNCE_MS": "-5"}),
            pytest.raises(ConfigError),
        ):
            load_config(tmp_path)

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        """An explicit config file is read instead of the repo one."""
        custom = tmp_path / "custom.yaml"
        custom.write_text("report:\n  min_coverage: 55\n")
        _write_repo_config(tmp_path, "report:\n  min_coverage: 65\n")

        config = load_config(tmp_path, config_path=custom)
        assert config.report.min_coverage == 55.0

    def test_missing_explicit_config_path(self, tmp_path: Path) -> None:
        """A missing explicit config file is an error, not silently defaults."""
        missing = tmp_path / "missing.yaml"
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path, config_path=missing)
        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND
        assert exc_info.value.details["path"] == str(missing)
