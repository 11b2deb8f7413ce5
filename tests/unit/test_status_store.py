"""Unit tests for the SQLAlchemy status store."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from scipiper.config import get_sync_options
from scipiper.core.exceptions import DatabaseConnectionError
from scipiper.core.models.config import SyncOptions
from scipiper.core.models.status import BuildRecord
from scipiper.db.store import SQLAlchemyStatusStore

T0 = datetime(2017, 8, 25, 15, 0, tzinfo=timezone.utc)


def _record(**overrides) -> BuildRecord:
    values = {"hash": "abc", "time": T0, "version": (0, 3, 0)}
    values.update(overrides)
    return BuildRecord(**values)


class TestSQLAlchemyStatusStore:
    """Tests for SQLAlchemyStatusStore."""

    def test_missing_key_is_none(self, store):
        """No record is a normal outcome."""
        assert store.get("A.ind") is None
        assert store.last_written("A.ind") is None
        assert not store.exists("A.ind")

    def test_set_get_round_trip(self, store):
        record = _record(fixed="pin", depends={"A.txt.ind": "h1", "x": "h2"})
        store.set("B.rds.ind", record)
        assert store.get("B.rds.ind") == record
        assert store.exists("B.rds.ind")

    def test_overwrite(self, store):
        store.set("A.ind", _record())
        store.set("A.ind", _record(hash="def"))
        assert store.get("A.ind").hash == "def"

    def test_keys_sorted(self, store):
        for key in ["b", "a", "c/d"]:
            store.set(key, _record())
        assert store.keys() == ["a", "b", "c/d"]

    def test_delete(self, store):
        store.set("A.ind", _record())
        assert store.delete("A.ind") is True
        assert store.get("A.ind") is None
        assert store.delete("A.ind") is False

    def test_equal_set_keeps_last_written(self, store, monkeypatch):
        """Writing an identical record changes nothing."""
        store.set("A.ind", _record())
        first = store.last_written("A.ind")
        monkeypatch.setattr("scipiper.db.store.time.time", lambda: first + 100)
        store.set("A.ind", _record())
        assert store.last_written("A.ind") == first

    def test_changed_set_bumps_last_written(self, store, monkeypatch):
        store.set("A.ind", _record())
        first = store.last_written("A.ind")
        monkeypatch.setattr("scipiper.db.store.time.time", lambda: first + 100)
        store.set("A.ind", _record(hash="def"))
        assert store.last_written("A.ind") == first + 100

    def test_persists_across_connections(self, tmp_path):
        db_path = tmp_path / ".remake" / "status.db"
        with SQLAlchemyStatusStore(db_path) as s:
            s.set("A.ind", _record())
        with SQLAlchemyStatusStore(db_path) as s:
            assert s.get("A.ind") == _record()

    def test_requires_connection(self, tmp_path):
        s = SQLAlchemyStatusStore(tmp_path / "status.db")
        with pytest.raises(DatabaseConnectionError):
            s.get("A.ind")


class TestFromOptions:
    """Tests for building the store from resolved options."""

    def test_uses_configured_db_path(self, project, monkeypatch):
        monkeypatch.setenv("SCIPIPER_BUILD__DB_PATH", "state/status.db")
        store = SQLAlchemyStatusStore.from_options(get_sync_options())
        assert store.db_path == Path("state/status.db")

        with store:
            store.set("A.ind", _record())
        assert (project / "state" / "status.db").is_file()

    def test_default_db_path(self, project):
        store = SQLAlchemyStatusStore.from_options(SyncOptions())
        assert store.db_path == Path(".remake/status.db")
