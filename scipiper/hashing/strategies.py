"""
Hash algorithm strategy implementations.

Each strategy encapsulates one algorithm used to fingerprint data files for
indicator files. MD5 is the default because existing indicator files written
by shared-cache pipelines carry MD5 digests.
"""

import hashlib
from abc import ABC, abstractmethod
from typing import Any

import blake3


class HashStrategy(ABC):
    """
    Abstract base class for hash algorithm strategies.

    Implementations must provide:
    - algorithm_name: Unique identifier for the algorithm
    - create_hasher(): Factory method for hasher instances
    """

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Return algorithm identifier (e.g., 'md5', 'sha256')."""
        pass

    @abstractmethod
    def create_hasher(self) -> Any:
        """Create a new hasher instance."""
        pass

    def update(self, hasher: Any, data: bytes) -> None:
        hasher.update(data)

    def hexdigest(self, hasher: Any) -> str:
        return hasher.hexdigest()


class MD5Strategy(HashStrategy):
    """MD5 - matches digests in existing indicator files."""

    @property
    def algorithm_name(self) -> str:
        return "md5"

    def create_hasher(self) -> Any:
        return hashlib.md5()


class SHA256Strategy(HashStrategy):
    @property
    def algorithm_name(self) -> str:
        return "sha256"

    def create_hasher(self) -> Any:
        return hashlib.sha256()


class SHA512Strategy(HashStrategy):
    @property
    def algorithm_name(self) -> str:
        return "sha512"

    def create_hasher(self) -> Any:
        return hashlib.sha512()


class Blake3Strategy(HashStrategy):
    """BLAKE3 - fast cryptographic hash for large data files."""

    @property
    def algorithm_name(self) -> str:
        return "blake3"

    def create_hasher(self) -> Any:
        return blake3.blake3()
