"""
Build status domain models.

BuildRecord mirrors what a build engine stores per target. TargetStatus is
one row of a status snapshot taken around a build. ImportReport summarizes
one pass of the status importer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_serializer, field_validator

from ...utils.timefmt import format_time, parse_time, to_utc
from .base import ImmutableModel, ScipiperBaseModel


def parse_version(value: Any) -> tuple[int, ...]:
    """Parse a dotted version tag such as '0.3.0' into a comparable tuple."""
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    if isinstance(value, int):
        return (value,)
    if isinstance(value, float):
        value = repr(value)
    if not isinstance(value, str):
        raise ValueError(f"version must be a dotted string, got {type(value).__name__}")
    parts = value.strip().split(".")
    try:
        return tuple(int(p) for p in parts)
    except ValueError as e:
        raise ValueError(f"invalid version tag: {value!r}") from e


def format_version(version: tuple[int, ...]) -> str:
    return ".".join(str(p) for p in version)


class BuildRecord(ImmutableModel):
    """The build engine's metadata for one target.

    Attributes:
        hash: Content fingerprint of the target at its last build
        time: When the target was last built (aware UTC)
        version: Version tag of the schema that recorded this entry
        fixed: Pin token; present only for externally pinned records
        depends: Upstream target -> hash at build time
    """

    hash: str = Field(min_length=1)
    time: datetime
    version: tuple[int, ...]
    fixed: str | None = None
    depends: dict[str, str] = Field(default_factory=dict)

    @field_validator("version", mode="before")
    @classmethod
    def coerce_version(cls, v: Any) -> tuple[int, ...]:
        return parse_version(v)

    @field_validator("time", mode="before")
    @classmethod
    def coerce_time(cls, v: Any) -> datetime:
        if isinstance(v, str):
            return parse_time(v)
        if isinstance(v, datetime):
            return to_utc(v)
        return v

    @field_validator("hash", "fixed", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        # YAML may hand back ints/bools for short hashes or pin tokens
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_serializer("version")
    def serialize_version(self, version: tuple[int, ...]) -> str:
        return format_version(version)

    @property
    def is_fixed(self) -> bool:
        return self.fixed is not None

    def to_text_fields(self) -> dict[str, Any]:
        """Normalize non-text fields to canonical strings for export.

        Absent optional fields are left out rather than written as nulls.
        """
        out: dict[str, Any] = {
            "version": format_version(self.version),
            "hash": self.hash,
            "time": format_time(self.time),
        }
        if self.fixed is not None:
            out["fixed"] = self.fixed
        if self.depends:
            out["depends"] = dict(self.depends)
        return out

    @classmethod
    def from_text_fields(cls, data: dict[str, Any]) -> BuildRecord:
        """Rebuild a record from the output of ``to_text_fields``."""
        missing = [k for k in ("version", "hash", "time") if k not in data]
        if missing:
            raise ValueError(f"status record is missing fields: {', '.join(missing)}")
        depends = data.get("depends") or {}
        if not isinstance(depends, dict):
            raise ValueError("status record 'depends' must be a mapping")
        return cls(
            version=data["version"],
            hash=data["hash"],
            time=data["time"],
            fixed=data.get("fixed"),
            depends={str(k): str(v) for k, v in depends.items()},
        )


class DirtyState(ImmutableModel):
    """Engine view of one target's freshness."""

    dirty: bool
    dirty_by_descent: bool


class TargetStatus(ImmutableModel):
    """One row of a build status snapshot.

    ``time``, ``hash`` and ``fixed`` are None when the target holds no build
    record; that is a normal state, not an error.
    """

    target: str
    is_current: bool | None = None
    dirty: bool = True
    dirty_by_descent: bool = True
    time: str | None = None
    hash: str | None = None
    fixed: str | None = None


class ImportReport(ScipiperBaseModel):
    """Outcome of one status import pass."""

    imported: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    obsolete: list[str] = Field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.obsolete)
