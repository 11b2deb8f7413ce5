"""
Artifact cache interface.

The artifact cache holds the actual data files. scipiper never talks to it
on its own: build recipes call the helpers in ``scipiper.services.cache``,
which go through this interface.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class IArtifactCache(ABC):
    """Interface for a store of data files addressed by name."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short description used in log and error messages."""
        pass

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Check whether the cache holds an entry for name."""
        pass

    @abstractmethod
    def mtime(self, name: str) -> float | None:
        """
        When the cached entry was stored.

        Returns:
            Epoch seconds, or None if there is no entry.
        """
        pass

    @abstractmethod
    def download(self, name: str, dest: Path) -> None:
        """Copy the cached entry for name to dest."""
        pass

    @abstractmethod
    def upload(self, src: Path, name: str) -> None:
        """Store src in the cache under name, replacing any existing entry."""
        pass
