"""
Shared pytest fixtures for scipiper tests.

- project: an empty working directory, made the cwd, with no SCIPIPER_* env
- store: a connected SQLAlchemyStatusStore in a temp directory
- cache: a LocalDirectoryCache in a temp directory
- engine: a FakeBuildEngine running the shared-cache pipeline
"""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from scipiper.core.bootstrap import reset
from scipiper.core.interfaces.presenter import IPresenter
from scipiper.db.store import SQLAlchemyStatusStore
from scipiper.plugins.cache.local import LocalDirectoryCache

from fakes import FakeBuildEngine, shared_cache_targets


@pytest.fixture(autouse=True)
def clean_container():
    """Every test starts with an empty service container."""
    reset()
    yield
    reset()


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a project directory and make it the working directory."""
    for name in list(os.environ):
        if name.startswith("SCIPIPER_"):
            monkeypatch.delenv(name)
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def store(tmp_path: Path):
    with SQLAlchemyStatusStore(tmp_path / "db" / "status.db") as s:
        yield s


@pytest.fixture
def cache(tmp_path: Path) -> LocalDirectoryCache:
    root = tmp_path / "cache"
    root.mkdir()
    return LocalDirectoryCache(root)


@pytest.fixture
def recipe_calls() -> list[str]:
    return []


@pytest.fixture
def engine(project: Path, store, cache, recipe_calls) -> FakeBuildEngine:
    return FakeBuildEngine(store, shared_cache_targets(cache, recipe_calls), default_target="B.rds")


@pytest.fixture
def presenter() -> MagicMock:
    return MagicMock(spec=IPresenter)
