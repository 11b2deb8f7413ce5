"""
Pydantic models for scipiper.

This package provides typed, validated models for configuration and build
status. All models use Pydantic v2.
"""

from .base import ImmutableModel, ScipiperBaseModel
from .config import (
    DEFAULT_IND_EXT,
    DEFAULT_STATUS_DIR,
    BuildConfig,
    HashConfig,
    IndicatorConfig,
    LoggingConfig,
    ScipiperConfig,
    SyncConfig,
    SyncOptions,
)
from .status import BuildRecord, DirtyState, ImportReport, TargetStatus

__all__ = [
    "DEFAULT_IND_EXT",
    "DEFAULT_STATUS_DIR",
    "BuildConfig",
    "BuildRecord",
    "DirtyState",
    "HashConfig",
    "ImmutableModel",
    "ImportReport",
    "IndicatorConfig",
    "LoggingConfig",
    "ScipiperBaseModel",
    "ScipiperConfig",
    "SyncConfig",
    "SyncOptions",
    "TargetStatus",
]
