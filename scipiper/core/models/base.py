"""
Base Pydantic models for scipiper.

Status rows, build records and option objects all derive from these two
classes so that unknown fields and loose types are rejected the same way
everywhere.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ScipiperBaseModel(BaseModel):
    """Mutable model: strict types, no extra fields, checked on assignment."""

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        revalidate_instances="never",
    )


class ImmutableModel(ScipiperBaseModel):
    """Frozen model for values compared or hashed by content.

    Status snapshots are diffed as sets, so rows must be hashable.
    """

    model_config = ConfigDict(frozen=True, validate_assignment=False)
