"""Unit tests for the status exporter and importer."""

import os
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import yaml
from fakes import FakeBuildEngine, FakeTarget

from scipiper.core.exceptions import KeyManglingError, StatusRecordError
from scipiper.core.models.status import BuildRecord
from scipiper.services.keys import KeyMangler
from scipiper.services.sync import StatusExporter, StatusImporter, render_record

T0 = datetime(2017, 8, 25, 15, 0, tzinfo=timezone.utc)
A = "A.txt.ind"
B = "out/B.rds.ind"


def _record(**overrides) -> BuildRecord:
    values = {"hash": "abc", "time": T0, "version": (0, 3, 0)}
    values.update(overrides)
    return BuildRecord(**values)


def _token(target: str) -> str:
    return KeyMangler().mangle(target)


@pytest.fixture
def graph_engine(store) -> FakeBuildEngine:
    return FakeBuildEngine(
        store,
        [
            FakeTarget(A),
            FakeTarget(B, depends=[A]),
            FakeTarget("model", kind="object", depends=[B]),
        ],
    )


@pytest.fixture
def status_dir(tmp_path) -> Path:
    return tmp_path / "build" / "status"


class TestStatusExporter:
    """Tests for StatusExporter."""

    def test_exports_selected_file_targets(self, graph_engine, store, status_dir):
        store.set(A, _record())
        store.set(B, _record(hash="def", depends={A: "abc"}))
        written = StatusExporter(graph_engine, status_dir).export([A, B])
        assert written == [status_dir / f"{_token(A)}.yml", status_dir / f"{_token(B)}.yml"]
        data = yaml.safe_load(written[1].read_text())
        assert data == {
            "version": "0.3.0",
            "hash": "def",
            "time": "2017-08-25 15:00:00.000000 +0000",
            "depends": {A: "abc"},
        }

    def test_skips_objects_unrecorded_and_unrequested(self, graph_engine, store, status_dir):
        """Only requested file targets that hold a record are exported."""
        store.set(A, _record())
        store.set("model", _record())
        written = StatusExporter(graph_engine, status_dir).export(["model", B, "undeclared"])
        assert written == []
        assert status_dir.is_dir()
        assert list(status_dir.iterdir()) == []

    def test_output_is_deterministic(self, graph_engine, store, status_dir):
        store.set(A, _record(depends={"z": "1", "a": "2"}))
        exporter = StatusExporter(graph_engine, status_dir)
        [path] = exporter.export([A])
        first = path.read_bytes()
        exporter.export([A])
        assert path.read_bytes() == first
        assert first == render_record(store.get(A)).encode()

    def test_overwrites_whole_file(self, graph_engine, store, status_dir):
        store.set(A, _record(fixed="a-very-long-pin-token"))
        exporter = StatusExporter(graph_engine, status_dir)
        [path] = exporter.export([A])
        store.set(A, _record())
        exporter.export([A])
        assert "fixed" not in yaml.safe_load(path.read_text())

    def test_unpadded_names(self, graph_engine, store, status_dir):
        store.set(A, _record())
        [path] = StatusExporter(graph_engine, status_dir, KeyMangler(pad=False)).export([A])
        assert not path.stem.endswith("=")


class TestStatusImporter:
    """Tests for StatusImporter."""

    def _write(self, status_dir: Path, target: str, record: BuildRecord, mtime=None) -> Path:
        status_dir.mkdir(parents=True, exist_ok=True)
        path = status_dir / f"{_token(target)}.yml"
        path.write_text(render_record(record), encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    def test_missing_directory_is_empty_import(self, graph_engine, status_dir):
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.imported == [] and report.skipped == [] and report.obsolete == []

    def test_imports_into_empty_store(self, graph_engine, store, status_dir):
        record = _record(depends={A: "h"})
        self._write(status_dir, B, record)
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.imported == [B]
        assert store.get(B) == record

    def test_export_import_round_trip(self, graph_engine, store, status_dir):
        """A record survives export and import field for field."""
        original = _record(
            time=datetime(2020, 1, 2, 3, 4, 5, 678901, tzinfo=timezone.utc),
            version=(1, 10, 2),
            fixed="pin",
            depends={A: "h"},
        )
        store.set(B, original)
        StatusExporter(graph_engine, status_dir).export([B])
        store.delete(B)
        StatusImporter(graph_engine, status_dir, new_only=False).run()
        assert store.get(B) == original

    def test_non_ascii_dependency_round_trip(self, graph_engine, store, status_dir):
        original = _record(depends={"données/A.txt.ind": "h"})
        store.set(B, original)
        [path] = StatusExporter(graph_engine, status_dir).export([B])
        assert "données".encode("utf-8") in path.read_bytes()
        store.delete(B)
        StatusImporter(graph_engine, status_dir, new_only=False).run()
        assert store.get(B) == original

    def test_freshness_guard_skips_older_yaml(self, graph_engine, store, status_dir):
        store.set(A, _record(hash="local"))
        written = store.last_written(A)
        self._write(status_dir, A, _record(hash="shared"), mtime=written - 60)
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.skipped == [A]
        assert store.get(A).hash == "local"

    def test_freshness_guard_imports_newer_yaml(self, graph_engine, store, status_dir):
        store.set(A, _record(hash="local"))
        written = store.last_written(A)
        self._write(status_dir, A, _record(hash="shared"), mtime=written + 60)
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.imported == [A]
        assert store.get(A).hash == "shared"

    def test_guard_disabled_imports_everything(self, graph_engine, store, status_dir):
        store.set(A, _record(hash="local"))
        written = store.last_written(A)
        self._write(status_dir, A, _record(hash="shared"), mtime=written - 60)
        StatusImporter(graph_engine, status_dir, new_only=False).run()
        assert store.get(A).hash == "shared"

    def test_repeated_imports_leave_store_identical(self, graph_engine, store, status_dir):
        self._write(status_dir, A, _record())
        self._write(status_dir, B, _record(depends={A: "abc"}))
        importer = StatusImporter(graph_engine, status_dir, new_only=False)
        importer.run()
        snapshot = [(k, store.get(k), store.last_written(k)) for k in store.keys()]
        importer.run()
        assert [(k, store.get(k), store.last_written(k)) for k in store.keys()] == snapshot

    def test_object_and_undeclared_targets_not_imported(self, graph_engine, store, status_dir):
        self._write(status_dir, "model", _record())
        self._write(status_dir, "gone.ind", _record())
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.imported == []
        assert store.keys() == []

    def test_obsolete_records_reported(self, graph_engine, store, status_dir):
        """Status files matching no store key are warned about, not raised."""
        self._write(status_dir, A, _record())
        self._write(status_dir, "gone.ind", _record())
        logger = MagicMock()
        report = StatusImporter(graph_engine, status_dir, logger=logger).run()
        assert report.imported == [A]
        assert report.obsolete == [_token("gone.ind")]
        assert report.has_warnings
        logger.warning.assert_called_once()
        assert _token("gone.ind") in logger.warning.call_args[0][0]

    def test_non_yml_files_ignored(self, graph_engine, status_dir):
        status_dir.mkdir(parents=True)
        (status_dir / "README.md").write_text("status files\n")
        report = StatusImporter(graph_engine, status_dir).run()
        assert report.obsolete == []

    def test_undecodable_name_is_fatal(self, graph_engine, status_dir):
        status_dir.mkdir(parents=True)
        (status_dir / "not a key.yml").write_text("hash: a\n")
        with pytest.raises(KeyManglingError):
            StatusImporter(graph_engine, status_dir).run()

    def test_corrupt_record(self, graph_engine, status_dir):
        status_dir.mkdir(parents=True)
        path = status_dir / f"{_token(A)}.yml"
        path.write_text("hash: [unclosed\n")
        with pytest.raises(StatusRecordError) as exc_info:
            StatusImporter(graph_engine, status_dir).run()
        assert A in str(exc_info.value)

    def test_incomplete_record(self, graph_engine, status_dir):
        status_dir.mkdir(parents=True)
        (status_dir / f"{_token(A)}.yml").write_text("hash: abc\n")
        with pytest.raises(StatusRecordError):
            StatusImporter(graph_engine, status_dir).run()
