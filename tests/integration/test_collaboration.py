"""Two collaborators sharing build/status through version control."""

import shutil
from pathlib import Path

import pytest
from fakes import FakeBuildEngine, shared_cache_targets

from scipiper import export_status, import_status, scmake
from scipiper.core.models.config import SyncOptions
from scipiper.db.store import SQLAlchemyStatusStore
from scipiper.services.build import SharedCacheBuilder
from scipiper.services.keys import KeyMangler

pytestmark = pytest.mark.integration


@pytest.fixture
def first_build(engine, cache, project):
    (cache.root / "A.txt").write_text("raw data\n")
    scmake("B.rds", engine=engine, verbose=False)
    return engine


@pytest.fixture
def clone(first_build, project, tmp_path, monkeypatch):
    """A second checkout holding only what version control carries."""
    root = tmp_path / "clone"
    shutil.copytree(project / "build" / "status", root / "build" / "status")
    for ind in project.glob("*.ind"):
        shutil.copy(ind, root / ind.name)
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def clone_engine(clone, cache, tmp_path):
    calls: list[str] = []
    with SQLAlchemyStatusStore(tmp_path / "db2" / "status.db") as store:
        engine = FakeBuildEngine(store, shared_cache_targets(cache, calls), default_target="B.rds")
        engine.calls = calls
        yield engine


class TestCollaboration:
    def test_clone_skips_indicator_recipes(self, clone_engine, cache):
        out = scmake("B.rds", engine=clone_engine, verbose=False)

        assert out == ["B.rds"]
        assert clone_engine.calls == ["B.rds"]
        assert Path("B.rds").read_text() == "RAW DATA\n"
        assert not Path("A.txt").exists()

    def test_clone_store_matches_shared_status(self, first_build, clone_engine):
        scmake("B.rds.ind", engine=clone_engine, verbose=False)

        for target in ("A.txt.ind", "B.rds.ind"):
            ours = clone_engine.store.get(target)
            theirs = first_build.store.get(target)
            assert ours.hash == theirs.hash
            assert ours.depends == theirs.depends

    def test_obsolete_status_file_warns(self, clone_engine, clone, presenter):
        stale = clone / "build" / "status" / f"{KeyMangler().mangle('gone.ind')}.yml"
        shutil.copy(clone / "build" / "status" / f"{KeyMangler().mangle('A.txt.ind')}.yml", stale)

        report = SharedCacheBuilder(clone_engine, SyncOptions(), presenter=presenter).import_status()

        assert report.obsolete == [stale.stem]
        presenter.print_warning.assert_called_once()
        assert stale.name in presenter.print_warning.call_args[0][0]

    def test_repeated_import_is_stable(self, clone_engine):
        import_status(new_only=False, engine=clone_engine)
        first = {k: clone_engine.store.get(k) for k in clone_engine.store.keys()}

        import_status(new_only=False, engine=clone_engine)

        assert {k: clone_engine.store.get(k) for k in clone_engine.store.keys()} == first
        assert sorted(first) == ["A.txt.ind", "B.rds.ind"]

    def test_new_only_skips_current_store(self, clone_engine):
        first = import_status(engine=clone_engine)
        second = import_status(engine=clone_engine)

        assert sorted(first.imported) == ["A.txt.ind", "B.rds.ind"]
        assert second.imported == []
        assert sorted(second.skipped) == ["A.txt.ind", "B.rds.ind"]

    def test_export_then_import_into_fresh_store(self, clone_engine, cache, tmp_path):
        scmake("B.rds", engine=clone_engine, verbose=False)
        written = export_status(["B.rds", "B.rds.ind"], engine=clone_engine)
        assert len(written) == 2

        with SQLAlchemyStatusStore(tmp_path / "db3" / "status.db") as store:
            fresh = FakeBuildEngine(store, shared_cache_targets(cache))
            report = import_status(new_only=False, engine=fresh)

            assert sorted(report.imported) == ["A.txt.ind", "B.rds", "B.rds.ind"]
            for target in report.imported:
                ours = fresh.store.get(target).to_text_fields()
                theirs = clone_engine.store.get(target).to_text_fields()
                assert ours == theirs
