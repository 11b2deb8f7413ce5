"""
Hash algorithm registry.

Maps algorithm names to strategies and hashes files in chunks.
"""

from pathlib import Path
from typing import Any

from ..core.exceptions import ConfigValidationError, DataFileMissingError
from .strategies import (
    Blake3Strategy,
    HashStrategy,
    MD5Strategy,
    SHA256Strategy,
    SHA512Strategy,
)

CHUNK_SIZE = 8 * 1024 * 1024  # 8MB


class HashAlgorithmRegistry:
    """
    Registry for hash algorithm strategies.

    Example:
        registry = HashAlgorithmRegistry()
        digest = registry.hash_file("md5", Path("B.rds"))
    """

    def __init__(self, register_defaults: bool = True):
        self._strategies: dict[str, HashStrategy] = {}
        if register_defaults:
            self._register_defaults()

    def _register_defaults(self) -> None:
        self.register(MD5Strategy())
        self.register(SHA256Strategy())
        self.register(SHA512Strategy())
        self.register(Blake3Strategy())

    def register(self, strategy: HashStrategy) -> None:
        self._strategies[strategy.algorithm_name] = strategy

    def get(self, algorithm: str) -> HashStrategy | None:
        return self._strategies.get(algorithm)

    def _require(self, algorithm: str) -> HashStrategy:
        strategy = self.get(algorithm)
        if strategy is None:
            raise ConfigValidationError(
                f"Unknown hash algorithm: {algorithm}",
                key="hash.algorithm",
                value=algorithm,
                context={"available": self.available_algorithms},
            )
        return strategy

    def create_hasher(self, algorithm: str) -> Any:
        return self._require(algorithm).create_hasher()

    def compute_hash(self, algorithm: str, data: bytes) -> str:
        """Hex digest of in-memory data."""
        strategy = self._require(algorithm)
        hasher = strategy.create_hasher()
        strategy.update(hasher, data)
        return strategy.hexdigest(hasher)

    def hash_file(self, algorithm: str, path: Path) -> str:
        """
        Hex digest of a file's content.

        Raises:
            DataFileMissingError: If path does not exist or is not a file
        """
        strategy = self._require(algorithm)
        path = Path(path)
        if not path.is_file():
            raise DataFileMissingError("Data file to hash does not exist", path=str(path))
        hasher = strategy.create_hasher()
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                strategy.update(hasher, chunk)
        return strategy.hexdigest(hasher)

    @property
    def available_algorithms(self) -> list[str]:
        return list(self._strategies.keys())

    def __contains__(self, algorithm: str) -> bool:
        return algorithm in self._strategies
