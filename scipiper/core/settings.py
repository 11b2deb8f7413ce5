"""
Pydantic Settings for scipiper configuration.

Provides settings loading from TOML files, environment variables, and defaults.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from .exceptions import ConfigFileError, ConfigValidationError
from .models.config import (
    BuildConfig,
    HashConfig,
    IndicatorConfig,
    LoggingConfig,
    ScipiperConfig,
    SyncConfig,
)

CONFIG_DIR_NAME = ".scipiper"
CONFIG_FILE_NAME = "config.toml"


def find_config_file(start_dir: str | None = None) -> Path | None:
    """
    Find .scipiper/config.toml by walking up from start_dir (or cwd).

    A pyproject.toml with a [tool.scipiper] table is accepted as well.

    Returns:
        Path to config file, or None if not found.
    """
    start = Path(start_dir) if start_dir else Path.cwd()

    for parent in [start, *list(start.parents)]:
        config_path = parent / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        pyproject = parent / "pyproject.toml"
        if pyproject.exists():
            data = _read_toml(pyproject)
            if "scipiper" in data.get("tool", {}):
                return pyproject

    return None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigFileError(
            "Failed to parse config file", file_path=str(path), cause=e
        ) from e
    except OSError as e:
        raise ConfigFileError("Failed to read config file", file_path=str(path), cause=e) from e


class TomlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from TOML config files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        config_path: Path | None = None,
        start_dir: str | None = None,
    ):
        super().__init__(settings_cls)
        self._config_path = config_path
        self._start_dir = start_dir
        self._data: dict[str, Any] | None = None

    def _load_toml(self) -> dict[str, Any]:
        """Load and cache TOML data."""
        if self._data is not None:
            return self._data

        path = self._config_path
        if path is None:
            path = find_config_file(self._start_dir)

        if path is None:
            self._data = {}
            return self._data

        data = _read_toml(path)
        if path.name == "pyproject.toml":
            data = data.get("tool", {}).get("scipiper", {})

        self._data = data
        return self._data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get field value from TOML data."""
        data = self._load_toml()
        return data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all TOML data for settings initialization."""
        return self._load_toml()


class ScipiperSettings(BaseSettings):
    """scipiper configuration settings with TOML and environment variable support.

    Priority (highest to lowest):
    1. Explicit init values
    2. Environment variables (SCIPIPER_<section>__<field>)
    3. TOML config file (.scipiper/config.toml or pyproject.toml [tool.scipiper])
    4. Model defaults
    """

    model_config = {
        "env_prefix": "SCIPIPER_",
        "env_nested_delimiter": "__",
        "extra": "ignore",
    }

    indicator: IndicatorConfig = IndicatorConfig()
    build: BuildConfig = BuildConfig()
    sync: SyncConfig = SyncConfig()
    hash: HashConfig = HashConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add TOML loading.

        Note: config_path/start_dir cannot be passed here, so load_settings
        hands them over through module-level variables.
        """
        toml_source = TomlConfigSource(
            settings_cls,
            config_path=_current_config_path,
            start_dir=_current_start_dir,
        )
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def to_config(self) -> ScipiperConfig:
        """Convert settings to the plain config model."""
        return ScipiperConfig(
            indicator=self.indicator,
            build=self.build,
            sync=self.sync,
            hash=self.hash,
            logging=self.logging,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_config().to_dict()


# Module-level variables for passing to settings_customise_sources
_current_config_path: Path | None = None
_current_start_dir: str | None = None


def load_settings(
    config_path: Path | None = None, start_dir: str | None = None, **overrides: Any
) -> ScipiperSettings:
    """Load scipiper settings from config file and environment.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)
        **overrides: Explicit section values, e.g. ``indicator={"ext": "st"}``

    Returns:
        ScipiperSettings instance with all sources merged

    Raises:
        ConfigFileError: If the config file cannot be read or parsed
        ConfigValidationError: If a configured value is invalid
    """
    global _current_config_path, _current_start_dir

    _current_config_path = config_path
    _current_start_dir = start_dir

    try:
        return ScipiperSettings(**overrides)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid scipiper configuration: {e.error_count()} error(s)",
            context={"errors": [err["msg"] for err in e.errors()]},
            cause=e,
        ) from e
    finally:
        _current_config_path = None
        _current_start_dir = None
