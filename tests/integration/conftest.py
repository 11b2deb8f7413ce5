"""Integration test fixtures."""

from pathlib import Path

import pytest

from scipiper.services.keys import KeyMangler


@pytest.fixture
def status_dir(project: Path) -> Path:
    return project / "build" / "status"


@pytest.fixture
def status_file(status_dir: Path):
    """Path of the exported status record of a target."""

    def _status_file(target: str) -> Path:
        return status_dir / f"{KeyMangler().mangle(target)}.yml"

    return _status_file


def exported_targets(status_dir: Path) -> set[str]:
    if not status_dir.is_dir():
        return set()
    mangler = KeyMangler()
    return {mangler.demangle(p.stem) for p in status_dir.glob("*.yml")}


@pytest.fixture
def exported():
    return exported_targets
