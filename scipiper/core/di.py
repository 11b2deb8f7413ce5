"""
Dependency injection helpers for scipiper.

Provides lazy resolution that falls back to a default implementation when
the container has not been bootstrapped, so library functions work the same
whether or not an application called ``bootstrap()`` first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from scipiper.core.interfaces.logger import ILogger
        >>> from scipiper.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    from .container import get_container

    instance = get_container().try_resolve(interface)
    if instance is not None:
        return instance
    return default_factory()
