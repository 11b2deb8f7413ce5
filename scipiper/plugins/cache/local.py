"""
Local directory artifact cache.

Entries are plain files under a root directory, addressed by their data file
name. Useful for a cache on a shared drive and for exercising cache recipes.
"""

import shutil
from pathlib import Path

from ...core.exceptions import DataNotAvailableError, ScipiperIOError
from ...core.interfaces.cache import IArtifactCache


class LocalDirectoryCache(IArtifactCache):
    """
    Artifact cache backed by a directory.

    Usage:
        cache = LocalDirectoryCache(Path("/shared/project-cache"))
        cache.upload(Path("out/B.rds"), "out/B.rds")
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def name(self) -> str:
        return f"local:{self.root}"

    def path_for(self, name: str) -> Path:
        return self.root / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def mtime(self, name: str) -> float | None:
        path = self.path_for(name)
        if not path.is_file():
            return None
        return path.stat().st_mtime

    def download(self, name: str, dest: Path) -> None:
        src = self.path_for(name)
        if not src.is_file():
            raise DataNotAvailableError(f"{name} is not in cache", target=name, path=str(src))
        dest = Path(dest)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            # copyfile gives dest a fresh mtime, newer than its indicator
            shutil.copyfile(src, dest)
        except OSError as e:
            raise ScipiperIOError("Cache download failed", path=str(dest), cause=e) from e

    def upload(self, src: Path, name: str) -> None:
        dest = self.path_for(name)
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
        except OSError as e:
            raise ScipiperIOError("Cache upload failed", path=str(src), cause=e) from e
