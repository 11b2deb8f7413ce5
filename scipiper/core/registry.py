"""
Build engine discovery.

External packages make an engine adapter available to scipiper by adding an
entry point to their pyproject.toml:

    [project.entry-points."scipiper.engines"]
    remake = "my_package.engine:RemakeEngine"

The entry point must load a callable taking the build-graph file path and
returning an IBuildEngine (an IBuildEngine subclass works).
"""

from importlib.metadata import entry_points

from .container import get_container
from .di import resolve_or_default
from .interfaces.logger import ILogger

ENGINE_ENTRY_POINT_GROUP = "scipiper.engines"


def _get_logger() -> ILogger:
    from ..services.logging import NullLogger

    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


def discover_engines(group: str = ENGINE_ENTRY_POINT_GROUP) -> list[str]:
    """
    Register every build engine advertised through entry points.

    Engines already registered under the same name are left alone, so an
    explicit ``register_build_engine`` call always wins.

    Returns:
        Names of the engines registered by this call
    """
    container = get_container()
    known = set(container.list_build_engines())
    registered = []

    for ep in entry_points(group=group):
        if ep.name in known:
            continue
        try:
            factory = ep.load()
        except Exception as e:
            _get_logger().warning("Failed to load build engine %s: %s", ep.name, e)
            continue
        if not callable(factory):
            _get_logger().warning("Build engine entry point %s is not callable", ep.name)
            continue
        container.register_build_engine(ep.name, factory)
        registered.append(ep.name)
        _get_logger().debug("Registered build engine %s from %s", ep.name, ep.value)

    return registered
