"""
Configuration models.

Provides Pydantic models for scipiper configuration with validation.
"""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ConfigValidationError
from .base import ScipiperBaseModel

# Type aliases
HashAlgorithm = Literal["md5", "sha256", "sha512", "blake3"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_IND_EXT = "ind"
DEFAULT_STATUS_DIR = "build/status"


class ConfigBaseModel(ScipiperBaseModel):
    """Base model for config sections with relaxed strict mode for TOML loading."""

    model_config = ConfigDict(
        strict=False,  # Allow coercion from TOML/env types
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields in config files
        populate_by_name=True,
        use_enum_values=True,
        revalidate_instances="never",
    )


def validate_ind_ext(v: str) -> str:
    """
    Check that an indicator extension is a single, bare file extension.

    A leading dot is dropped. Raises ConfigValidationError, which pydantic
    reports like any other ValueError when called from a field validator.
    """
    if not isinstance(v, str):
        raise ConfigValidationError(
            "indicator extension must be a string", key="indicator.ext", value=repr(v)
        )
    ext = v.strip()
    if ext.startswith("."):
        ext = ext[1:]
    if not ext:
        raise ConfigValidationError(
            "indicator extension must not be empty", key="indicator.ext", value=v
        )
    if "." in ext or "/" in ext or "\\" in ext:
        raise ConfigValidationError(
            f"indicator extension must be a single extension, got {ext!r}",
            key="indicator.ext",
            value=v,
        )
    return ext


class IndicatorConfig(ConfigBaseModel):
    """Indicator file configuration section."""

    ext: str = DEFAULT_IND_EXT

    @field_validator("ext", mode="before")
    @classmethod
    def check_ext(cls, v: Any) -> str:
        return validate_ind_ext(v)


class BuildConfig(ConfigBaseModel):
    """Build engine and on-disk layout configuration section."""

    remake_file: str = "remake.yml"
    engine: str | None = None
    status_dir: str = DEFAULT_STATUS_DIR
    db_path: str = ".remake/status.db"


class SyncConfig(ConfigBaseModel):
    """Status import/export configuration section."""

    new_only: bool = True
    mangle_pad: bool = True


class HashConfig(ConfigBaseModel):
    """Hash algorithm used for indicator `hash` fields."""

    algorithm: HashAlgorithm = "md5"


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False


class ScipiperConfig(ConfigBaseModel):
    """Complete scipiper configuration.

    This model represents the full configuration with all sections.
    It can be loaded from TOML files or constructed programmatically.
    """

    indicator: IndicatorConfig = Field(default_factory=IndicatorConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    sync: SyncConfig = Field(default_factory=SyncConfig)
    hash: HashConfig = Field(default_factory=HashConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-notation key (e.g., 'indicator.ext')."""
        obj: Any = self
        for part in key.split("."):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            elif isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()


class SyncOptions(ConfigBaseModel):
    """Resolved options handed to every sync operation.

    Built from settings once per call, with per-call overrides applied, so
    that services never look configuration up on their own.
    """

    model_config = ConfigDict(
        frozen=True,
        strict=False,
        extra="forbid",
        populate_by_name=True,
        revalidate_instances="never",
    )

    ind_ext: str = DEFAULT_IND_EXT
    remake_file: str = "remake.yml"
    engine: str | None = None
    status_dir: str = DEFAULT_STATUS_DIR
    db_path: str = ".remake/status.db"
    new_only: bool = True
    mangle_pad: bool = True
    hash_algorithm: HashAlgorithm = "md5"

    @field_validator("ind_ext", mode="before")
    @classmethod
    def check_ext(cls, v: Any) -> str:
        return validate_ind_ext(v)

    @field_validator("remake_file", "status_dir", "db_path", mode="before")
    @classmethod
    def coerce_path(cls, v: Any) -> Any:
        if isinstance(v, os.PathLike):
            return os.fspath(v)
        return v

    @classmethod
    def from_config(cls, config: ScipiperConfig, **overrides: Any) -> SyncOptions:
        """Flatten a config into options; ``None`` overrides are ignored."""
        values: dict[str, Any] = {
            "ind_ext": config.indicator.ext,
            "remake_file": config.build.remake_file,
            "engine": config.build.engine,
            "status_dir": config.build.status_dir,
            "db_path": config.build.db_path,
            "new_only": config.sync.new_only,
            "mangle_pad": config.sync.mangle_pad,
            "hash_algorithm": config.hash.algorithm,
        }
        for key, value in overrides.items():
            if key not in values:
                raise ConfigValidationError(f"Unknown sync option: {key}", key=key)
            if value is not None:
                values[key] = value
        return cls._build(values)

    @classmethod
    def _build(cls, values: dict[str, Any]) -> SyncOptions:
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigValidationError(
                "Invalid sync options",
                context={"errors": [err["msg"] for err in e.errors()]},
                cause=e,
            ) from e
