"""
Application bootstrap for scipiper.

Initializes the DI container with the logger and any build engines
advertised through entry points. Library functions work without it, falling
back to a NullLogger and explicitly passed engines.
"""

from pathlib import Path

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .registry import discover_engines

_initialized = False


def bootstrap(config_path: Path | None = None, start_dir: str | None = None) -> ServiceContainer:
    """
    Bootstrap scipiper.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start the config search from

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    _register_core_services(container, config_path, start_dir)
    discover_engines()

    _initialized = True
    return container


def _register_core_services(
    container: ServiceContainer, config_path: Path | None, start_dir: str | None
) -> None:
    """Register core application services."""
    from ..services.logging import ScipiperLogger
    from .settings import load_settings

    logging_config = load_settings(config_path=config_path, start_dir=start_dir).logging

    def create_logger() -> ILogger:
        return ScipiperLogger.from_config(logging_config)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
