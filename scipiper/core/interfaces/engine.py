"""
Build engine interface.

scipiper does not build anything itself. It wraps a dependency-graph build
engine that owns the graph, decides staleness and runs recipes. Adapters for
a concrete engine implement IBuildEngine and are registered by name in the
service container or through the ``scipiper.engines`` entry-point group.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Literal

from ..models.status import DirtyState
from .store import IStatusStore

TargetKind = Literal["file", "object"]


class IBuildEngine(ABC):
    """Contract a build engine adapter must fulfil."""

    @property
    @abstractmethod
    def store(self) -> IStatusStore:
        """The engine's status store."""
        pass

    @property
    @abstractmethod
    def default_target(self) -> str | None:
        """Target built when none is requested."""
        pass

    @abstractmethod
    def list_targets(self, kind: TargetKind | None = None) -> list[str]:
        """
        List targets declared in the build graph.

        Args:
            kind: 'file' for file-backed targets, 'object' for in-memory
                targets, None for all
        """
        pass

    @abstractmethod
    def dependency_status(self, target_names: Sequence[str]) -> dict[str, DirtyState]:
        """
        Freshness of the requested targets and everything they depend on.

        Returns:
            Mapping of target -> DirtyState, in the engine's own order.
        """
        pass

    @abstractmethod
    def is_current(self, target_name: str) -> bool | None:
        """
        Whether a target is up to date.

        Returns:
            None when the engine cannot tell (e.g. no record yet).
        """
        pass

    @abstractmethod
    def make(self, target_names: Sequence[str] | None = None, **kwargs: Any) -> Any:
        """Build targets; failures are raised as the engine sees fit."""
        pass

    @abstractmethod
    def delete(self, target_names: Sequence[str], *, dependencies: bool = False) -> None:
        """
        Delete targets and their build records.

        Args:
            dependencies: Also delete upstream targets. scipiper always
                passes False.
        """
        pass


# factory(remake_file) -> engine
EngineFactory = Callable[[Path], IBuildEngine]
