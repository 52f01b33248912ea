"""Configuration loading with pydantic-settings.

Supports loading configuration from multiple sources with precedence:
1. Direct kwargs (highest priority)
2. Environment variables (COVSYNC__SECTION__KEY)
3. Repo config (.covsync/config.yaml)
4. Global config (~/.config/covsync/config.yaml)
5. Built-in defaults (lowest priority)
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from covsync.config.models import (
    CovSyncConfig,
    HighlightConfig,
    LoggingConfig,
    ReportConfig,
    WatchConfig,
)
from covsync.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/covsync/config.yaml").expanduser()
REPO_CONFIG_DIR = ".covsync"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML snapshot."""

    class CovSyncSettings(BaseSettings):
        """Root config. Env vars: COVSYNC__REPORT__MIN_COVERAGE, COVSYNC__LOGGING__LEVEL, etc."""

        model_config = SettingsConfigDict(
            env_prefix="COVSYNC__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        report: ReportConfig = ReportConfig()
        highlight: HighlightConfig = HighlightConfig()
        watch: WatchConfig = WatchConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return CovSyncSettings


def load_config(
    repo_root: Path | None = None,
    config_path: Path | None = None,
    **kwargs: Any,
) -> CovSyncConfig:
    """Load config: defaults < global yaml < repo yaml < env vars < kwargs.

    Args:
        repo_root: Workspace root holding .covsync/config.yaml.
                   Defaults to current working directory.
        config_path: Explicit config file read instead of the repo one.
                     Must exist.
        **kwargs: Override values (highest precedence), keyed by section.

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On invalid YAML syntax, validation errors, or a missing
            explicit config file.
    """
    repo_root = repo_root or Path.cwd()
    if config_path is None:
        config_path = repo_root / REPO_CONFIG_DIR / "config.yaml"
    elif not config_path.is_file():
        raise ConfigError.file_not_found(str(config_path))

    yaml_config = _deep_merge(_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(config_path))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
    return CovSyncConfig.model_validate(settings.model_dump())
