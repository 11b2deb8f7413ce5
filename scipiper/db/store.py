"""
SQLAlchemy status store.

Reference IStatusStore implementation: one SQLite row per target, holding
the fields of its BuildRecord plus the time the row was last written.
"""

import json
import time
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ..core.exceptions import DatabaseConnectionError
from ..core.interfaces.store import IStatusStore
from ..core.models.config import SyncOptions
from ..core.models.status import BuildRecord, format_version
from ..utils.timefmt import format_time
from .engine import create_session_factory, create_status_engine, init_database
from .models import BuildRecordRow


def _to_row_values(record: BuildRecord) -> dict:
    return {
        "hash": record.hash,
        "time": format_time(record.time),
        "version": format_version(record.version),
        "fixed": record.fixed,
        "depends": json.dumps(record.depends) if record.depends else None,
    }


def _from_row(row: BuildRecordRow) -> BuildRecord:
    return BuildRecord(
        hash=row.hash,
        time=row.time,
        version=row.version,
        fixed=row.fixed,
        depends=json.loads(row.depends) if row.depends else {},
    )


class SQLAlchemyStatusStore(IStatusStore):
    """
    Status store backed by a SQLite file.

    Usage:
        with SQLAlchemyStatusStore(Path(".remake/status.db")) as store:
            record = store.get("B.rds.ind")

    Every mutation is committed immediately so that ``last_written`` always
    reflects what is on disk.
    """

    def __init__(self, db_path: Path):
        """
        Args:
            db_path: Path to SQLite database file (created if missing)
        """
        self.db_path = Path(db_path)
        self._engine: Engine | None = None
        self._session: Session | None = None

    @classmethod
    def from_options(cls, options: SyncOptions) -> "SQLAlchemyStatusStore":
        """Store at the configured ``build.db_path``, relative to the working directory."""
        return cls(Path(options.db_path))

    def connect(self) -> None:
        """Open the database and create the schema if needed."""
        self._engine = create_status_engine(self.db_path)
        init_database(self._engine)
        self._session = create_session_factory(self._engine)()

    def close(self) -> None:
        if self._session:
            self._session.close()
            self._session = None
        if self._engine:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> "SQLAlchemyStatusStore":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session and exc_type:
            self._session.rollback()
        self.close()

    @property
    def session(self) -> Session:
        if self._session is None:
            raise DatabaseConnectionError(
                "Status store not connected. Use as context manager.",
                db_path=str(self.db_path),
            )
        return self._session

    def _row(self, key: str) -> BuildRecordRow | None:
        return self.session.execute(
            select(BuildRecordRow).where(BuildRecordRow.key == key)
        ).scalar_one_or_none()

    # -------------------------------------------------------------------------
    # IStatusStore
    # -------------------------------------------------------------------------

    def get(self, key: str) -> BuildRecord | None:
        row = self._row(key)
        return _from_row(row) if row is not None else None

    def set(self, key: str, record: BuildRecord) -> None:
        """
        Create or overwrite a record.

        Writing a record equal to the stored one changes nothing, including
        the last-written time.
        """
        values = _to_row_values(record)
        row = self._row(key)
        if row is None:
            self.session.add(BuildRecordRow(key=key, written_at=time.time(), **values))
        elif _from_row(row) == record:
            return
        else:
            for name, value in values.items():
                setattr(row, name, value)
            row.written_at = time.time()
        self.session.commit()

    def delete(self, key: str) -> bool:
        result = self.session.execute(delete(BuildRecordRow).where(BuildRecordRow.key == key))
        self.session.commit()
        return bool(result.rowcount)

    def keys(self) -> list[str]:
        return list(
            self.session.execute(select(BuildRecordRow.key).order_by(BuildRecordRow.key))
            .scalars()
            .all()
        )

    def last_written(self, key: str) -> float | None:
        return self.session.execute(
            select(BuildRecordRow.written_at).where(BuildRecordRow.key == key)
        ).scalar_one_or_none()

    def exists(self, key: str) -> bool:
        return self._row(key) is not None
