"""
SQLAlchemy ORM models for the scipiper status store.
"""

from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class BuildRecordRow(Base):
    """Build record for one target, keyed by the unmangled target name."""

    __tablename__ = "build_records"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    hash: Mapped[str] = mapped_column(String, nullable=False)
    time: Mapped[str] = mapped_column(String, nullable=False)  # canonical UTC text
    version: Mapped[str] = mapped_column(String, nullable=False)
    fixed: Mapped[str | None] = mapped_column(String)
    depends: Mapped[str | None] = mapped_column(Text)  # JSON object
    written_at: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (Index("idx_build_records_written", "written_at"),)
