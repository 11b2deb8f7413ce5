"""
Core infrastructure for scipiper.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Build engine discovery through entry points
- Application bootstrap for initialization
- Interface definitions for the build engine, status store and artifact cache
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .exceptions import (
    ConfigFileError,
    ConfigValidationError,
    DataFileMissingError,
    DataNotAvailableError,
    DatabaseConnectionError,
    EngineNotFoundError,
    IndicatorNameError,
    KeyManglingError,
    ScipiperConfigError,
    ScipiperException,
    ScipiperIOError,
    ScipiperValidationError,
    StatusRecordError,
    UnknownTargetError,
)
from .registry import discover_engines

__all__ = [
    "ConfigFileError",
    "ConfigValidationError",
    "DataFileMissingError",
    "DataNotAvailableError",
    "DatabaseConnectionError",
    "EngineNotFoundError",
    "IndicatorNameError",
    "KeyManglingError",
    "ScipiperConfigError",
    "ScipiperException",
    "ScipiperIOError",
    "ScipiperValidationError",
    "ServiceContainer",
    "StatusRecordError",
    "UnknownTargetError",
    "bootstrap",
    "discover_engines",
    "get_container",
    "is_initialized",
    "reset",
    "resolve",
    "try_resolve",
]
