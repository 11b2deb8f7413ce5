"""
Custom exception hierarchy for scipiper.

Configuration, validation and I/O errors are fatal to the current operation
and always carry enough context to name the offending target(s). Consistency
problems that are not fatal (obsolete status records) are reported, not raised.
"""

from __future__ import annotations


class ScipiperException(Exception):
    """
    Base exception for all scipiper errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (targets, file paths, etc.)
        exit_code: Suggested exit code for callers that wrap scipiper in a script
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ScipiperConfigError(ScipiperException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(ScipiperConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(ScipiperConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers catching ValueError keep working.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Validation Errors
# =============================================================================


class ScipiperValidationError(ScipiperException, ValueError):
    """Base class for invalid target names and arguments."""

    recoverable: bool = False


class UnknownTargetError(ScipiperValidationError):
    """Targets were requested that the build graph does not declare."""

    def __init__(
        self,
        message: str,
        *,
        targets: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if targets:
            ctx["targets"] = list(targets)
        super().__init__(message, context=ctx, cause=cause)
        self.targets = list(targets or [])


class IndicatorNameError(ScipiperValidationError):
    """
    A guarded indicator name conversion was given the wrong kind of name.

    Raised when converting a name that is already an indicator into an
    indicator name, or a non-indicator into a data name.
    """

    def __init__(
        self,
        message: str,
        *,
        names: list[str] | None = None,
        ind_ext: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if names:
            ctx["names"] = list(names)
        if ind_ext is not None:
            ctx["ind_ext"] = ind_ext
        super().__init__(message, context=ctx, cause=cause)
        self.names = list(names or [])


# =============================================================================
# I/O Errors
# =============================================================================


class ScipiperIOError(ScipiperException, OSError):
    """Base class for file-system errors raised by scipiper itself."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)
        self.path = path


class DataFileMissingError(ScipiperIOError):
    """A data file that was claimed to exist (e.g. for hashing) is absent."""

    recoverable: bool = False


class StatusRecordError(ScipiperIOError):
    """An exported status record could not be read, parsed or written."""

    pass


class DataNotAvailableError(ScipiperIOError):
    """
    An indicator promises data that cannot be materialized.

    Raised when neither a fresh local copy nor a cache entry exists for the
    data target behind an indicator.
    """

    def __init__(
        self,
        message: str,
        *,
        target: str | None = None,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if target:
            ctx["target"] = target
        super().__init__(message, path=path, context=ctx, cause=cause)
        self.target = target


# =============================================================================
# Consistency Errors
# =============================================================================


class KeyManglingError(ScipiperException):
    """
    A mangled key could not be decoded, or two targets mangle to one key.

    Always fatal: silently merging two targets' status records would corrupt
    the shared build status.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        targets: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key is not None:
            ctx["key"] = key
        if targets:
            ctx["targets"] = list(targets)
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Database Errors
# =============================================================================


class ScipiperDatabaseError(ScipiperException):
    """Base class for status store errors."""

    pass


class DatabaseConnectionError(ScipiperDatabaseError):
    """
    Error connecting to or initializing the status store.

    Raised when the store is used before it is opened.
    """

    def __init__(
        self,
        message: str,
        *,
        db_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if db_path:
            ctx["db_path"] = db_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Plugin Errors
# =============================================================================


class ScipiperPluginError(ScipiperException):
    """Base class for plugin-related errors."""

    pass


class EngineNotFoundError(ScipiperPluginError):
    """
    No build engine is available.

    Raised when neither an engine instance was passed nor a registered engine
    matches the configured name.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        engine_name: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if engine_name:
            ctx["engine_name"] = engine_name
        super().__init__(message, context=ctx, cause=cause)
