"""
Status store interface.

The status store is the build engine's own key-value record of what was last
built. scipiper reads and writes it only through this interface; deciding
whether a target is stale stays with the engine.
"""

from abc import ABC, abstractmethod

from ..models.status import BuildRecord


class IStatusStore(ABC):
    """Read/write access to per-target build records."""

    @abstractmethod
    def get(self, key: str) -> BuildRecord | None:
        """
        Get the build record for a target.

        Returns:
            The record, or None if the target has never been built or imported.
        """
        pass

    @abstractmethod
    def set(self, key: str, record: BuildRecord) -> None:
        """Create or overwrite the build record for a target."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove the build record for a target.

        Returns:
            True if a record was removed.
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List every target that currently holds a record."""
        pass

    @abstractmethod
    def last_written(self, key: str) -> float | None:
        """
        When the record for a target was last written.

        Returns:
            Epoch seconds, or None if there is no record.
        """
        pass

    def exists(self, key: str) -> bool:
        """Check whether a target holds a record."""
        return self.get(key) is not None
