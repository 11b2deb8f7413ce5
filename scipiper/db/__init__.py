"""
SQLite-backed status store.
"""

from .engine import create_session_factory, create_status_engine, init_database
from .store import SQLAlchemyStatusStore

__all__ = [
    "SQLAlchemyStatusStore",
    "create_session_factory",
    "create_status_engine",
    "init_database",
]
