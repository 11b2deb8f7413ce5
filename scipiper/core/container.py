"""
Dependency injection container for scipiper.

Uses dependency-injector for DI with support for:
- Singleton and transient lifetimes
- Interface-based resolution
- A named registry of build engine factories
"""

from collections.abc import Callable
from pathlib import Path
from typing import Optional, TypeVar

from dependency_injector import providers

from .exceptions import EngineNotFoundError
from .interfaces.engine import EngineFactory, IBuildEngine

T = TypeVar("T")


class ServiceContainer:
    """
    Dependency injection container for scipiper.

    Combines dependency-injector's providers with a registry of build engine
    factories, so wrappers can look up the engine named in configuration.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self) -> None:
        """Initialize the container with empty registries."""
        self._providers: dict[type, providers.Provider] = {}
        self._engine_factories: dict[str, providers.Factory] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the global container instance (singleton)."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the global container (for testing)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Core service registration
    # -------------------------------------------------------------------------

    def register_singleton(
        self,
        interface: type[T],
        implementation: T | None = None,
        factory: Callable[[], T] | None = None,
    ) -> None:
        """
        Register a singleton service.

        Args:
            interface: The interface type
            implementation: Optional concrete instance
            factory: Optional factory function (for lazy init)
        """
        if implementation is not None:
            self._providers[interface] = providers.Object(implementation)
        elif factory is not None:
            self._providers[interface] = providers.Singleton(factory)
        else:
            raise ValueError("Must provide either implementation or factory")

    def register_transient(
        self,
        interface: type[T],
        factory: Callable[..., T],
    ) -> None:
        """Register a transient service (new instance per resolve)."""
        self._providers[interface] = providers.Factory(factory)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a service by interface.

        Raises:
            KeyError: If no registration found
        """
        if interface not in self._providers:
            raise KeyError(f"No provider registered for: {interface}")
        return self._providers[interface]()

    def try_resolve(self, interface: type[T]) -> T | None:
        """Try to resolve a service, returning None if not registered."""
        if interface not in self._providers:
            return None
        return self._providers[interface]()

    def override(self, interface: type[T], provider: providers.Provider) -> None:
        """Override a registered provider (useful for testing)."""
        self._providers[interface] = provider

    # -------------------------------------------------------------------------
    # Build engine registry
    # -------------------------------------------------------------------------

    def register_build_engine(self, name: str, factory: EngineFactory) -> None:
        """
        Register a build engine factory.

        Args:
            name: Engine name, as used in the ``build.engine`` setting
            factory: Callable taking the build-graph file path
        """
        self._engine_factories[name] = providers.Factory(factory)

    def get_build_engine(self, name: str | None, remake_file: Path) -> IBuildEngine:
        """
        Create an engine for a build-graph file.

        If name is None and exactly one engine is registered, that one is used.

        Raises:
            EngineNotFoundError: If no matching engine is registered
        """
        if name is None:
            if len(self._engine_factories) != 1:
                raise EngineNotFoundError(
                    "No build engine configured; set build.engine or pass an engine",
                    context={"registered": sorted(self._engine_factories)},
                )
            name = next(iter(self._engine_factories))
        if name not in self._engine_factories:
            raise EngineNotFoundError(
                f"No build engine registered: {name}",
                engine_name=name,
                context={"registered": sorted(self._engine_factories)},
            )
        return self._engine_factories[name](remake_file)

    def list_build_engines(self) -> list[str]:
        """List registered engine names."""
        return list(self._engine_factories.keys())


# -------------------------------------------------------------------------
# Module-level convenience functions
# -------------------------------------------------------------------------


def get_container() -> ServiceContainer:
    """Get the global service container instance."""
    return ServiceContainer.get_instance()


def resolve(interface: type[T]) -> T:
    """Resolve a service from the global container."""
    return get_container().resolve(interface)


def try_resolve(interface: type[T]) -> T | None:
    """Try to resolve a service, returning None if not registered."""
    return get_container().try_resolve(interface)
