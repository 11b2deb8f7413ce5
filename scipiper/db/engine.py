"""
SQLAlchemy engine and session configuration.

Handles database connection setup with SQLite-specific settings.
"""

from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Use WAL so a reader never blocks the build engine's writer."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode = WAL")
    cursor.close()


def create_status_engine(db_path: Path) -> Engine:
    """
    Create SQLAlchemy engine for the given database path.

    Args:
        db_path: Path to SQLite database file

    Returns:
        Configured SQLAlchemy Engine
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a session factory for the engine."""
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Create the status store schema if it does not exist yet."""
    Base.metadata.create_all(engine)
