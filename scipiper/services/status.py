"""
Build status snapshots.

A snapshot lists the requested targets and their dependencies with the
engine's freshness view and the stored build record fields. Two snapshots
taken around a build are diffed to find which targets got new records.
"""

from collections.abc import Sequence

from ..core.exceptions import UnknownTargetError
from ..core.interfaces.engine import IBuildEngine
from ..core.models.status import TargetStatus
from ..utils.timefmt import format_time


def _resolve_targets(target_names: Sequence[str] | str | None, engine: IBuildEngine) -> list[str]:
    if target_names is None:
        default = engine.default_target
        return [default] if default is not None else []
    if isinstance(target_names, str):
        return [target_names]
    return list(target_names)


def get_build_status(
    target_names: Sequence[str] | str | None,
    engine: IBuildEngine,
) -> list[TargetStatus]:
    """
    Snapshot the build status of targets and everything they depend on.

    Args:
        target_names: Targets to report on; None means the engine's default
        engine: Build engine to query

    Returns:
        One TargetStatus per target, in the engine's dependency order.
        Targets without a build record have time, hash and fixed set to None.

    Raises:
        UnknownTargetError: If any requested target is not in the build graph
    """
    targets = _resolve_targets(target_names, engine)
    declared = set(engine.list_targets())
    unknown = [t for t in targets if t not in declared]
    if unknown:
        raise UnknownTargetError(f"unknown targets: {', '.join(unknown)}", targets=unknown)
    if not targets:
        return []

    rows = []
    for target, state in engine.dependency_status(targets).items():
        record = engine.store.get(target)
        rows.append(
            TargetStatus(
                target=target,
                is_current=engine.is_current(target),
                dirty=state.dirty,
                dirty_by_descent=state.dirty_by_descent,
                time=format_time(record.time) if record else None,
                hash=record.hash if record else None,
                fixed=record.fixed if record else None,
            )
        )
    return rows


def diff_status(before: Sequence[TargetStatus], after: Sequence[TargetStatus]) -> list[TargetStatus]:
    """Rows of ``after`` that do not appear, field for field, in ``before``."""
    seen = set(before)
    return [row for row in after if row not in seen]
