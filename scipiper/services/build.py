"""
Shared-cache wrappers around a build engine's make and delete.

``scmake`` keeps ``build/status`` and the engine's status store in step:

1. import the shared YAML status into the store
2. snapshot build status
3. run the engine's make
4. snapshot again
5. export the records of indicator files whose status changed

``scdel`` deletes targets without touching their upstream dependencies and
removes the YAML status of deleted indicator files.
"""

import os
import time
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..config import get_sync_options
from ..core.container import get_container
from ..core.di import resolve_or_default
from ..core.interfaces.engine import IBuildEngine
from ..core.interfaces.logger import ILogger
from ..core.interfaces.presenter import IPresenter
from ..core.models.config import SyncOptions
from ..core.models.status import ImportReport, TargetStatus
from ..core.registry import discover_engines
from ..presenters.console import ConsolePresenter
from ..utils.timefmt import now_utc
from .indicator import as_data_file, is_ind_file
from .keys import KeyMangler
from .logging import NullLogger
from .status import diff_status, get_build_status
from .sync import StatusExporter, StatusImporter

Targets = Sequence[str] | str | None


def _as_list(target_names: Sequence[str] | str) -> list[str]:
    if isinstance(target_names, str):
        return [target_names]
    return list(target_names)


class SharedCacheBuilder:
    """
    Runs build operations with status import/export around them.

    Usage:
        builder = SharedCacheBuilder(engine, SyncOptions())
        builder.make(["B.rds.ind"])
    """

    def __init__(
        self,
        engine: IBuildEngine,
        options: SyncOptions,
        logger: ILogger | None = None,
        presenter: IPresenter | None = None,
    ):
        self.engine = engine
        self.options = options
        self._logger = logger or resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        self._presenter = presenter or resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]
        self._mangler = KeyMangler(pad=options.mangle_pad)
        self._status_dir = Path(options.status_dir)

    def status_path(self, target: str) -> Path:
        """Where the YAML status record of a target lives."""
        return self._status_dir / f"{self._mangler.mangle(target)}.yml"

    def import_status(self, new_only: bool | None = None) -> ImportReport:
        """Load ``build/status`` into the engine's store."""
        importer = StatusImporter(
            self.engine,
            self._status_dir,
            mangler=self._mangler,
            new_only=self.options.new_only if new_only is None else new_only,
            logger=self._logger,
        )
        report = importer.run()
        if report.has_warnings:
            names = ", ".join(f"{token}.yml" for token in report.obsolete)
            self._presenter.print_warning(f"these build/status files may be obsolete: {names}")
        return report

    def export_status(self, target_names: Sequence[str] | str) -> list[Path]:
        """Write the YAML status of the given file targets."""
        exporter = StatusExporter(
            self.engine, self._status_dir, mangler=self._mangler, logger=self._logger
        )
        return exporter.export(_as_list(target_names))

    def build_status(self, target_names: Targets) -> list[TargetStatus]:
        return get_build_status(target_names, self.engine)

    def changed_indicators(
        self, before: Sequence[TargetStatus], after: Sequence[TargetStatus]
    ) -> list[str]:
        """Indicator targets whose status row changed across a build."""
        changed = [row.target for row in diff_status(before, after)]
        flags = is_ind_file(changed, ind_ext=self.options.ind_ext)
        return [target for target, flag in zip(changed, flags) if flag]

    def make(self, target_names: Targets = None, verbose: bool = True, **kwargs: Any) -> Any:
        """
        Build targets through the engine and share indicator status.

        If the engine raises, indicator records that did change before the
        failure are still exported, then the engine's exception propagates.
        A failure of that export is logged and never replaces the engine's
        exception.

        Returns:
            Whatever the engine's make returned
        """
        self.import_status()
        status_pre = self.build_status(target_names)

        start_time = now_utc()
        started = time.monotonic()
        self._progress(f"Starting build at {start_time}", verbose)
        try:
            out = self.engine.make(target_names, verbose=verbose, **kwargs)
        except Exception:
            self._logger.error(f"Build failed after {_minutes(started):0.2f} minutes")
            try:
                self._export_changes(target_names, status_pre)
            except Exception as export_error:
                self._logger.error(f"Could not export status after failed build: {export_error}")
            raise
        self._progress(f"Finished build at {now_utc()}", verbose)
        self._progress(f"Build completed in {_minutes(started):0.2f} minutes", verbose)

        self._export_changes(target_names, status_pre)
        return out

    def _export_changes(self, target_names: Targets, status_pre: list[TargetStatus]) -> None:
        status_post = self.build_status(target_names)
        to_export = self.changed_indicators(status_pre, status_post)
        if to_export:
            self._logger.info(f"Exporting status of {len(to_export)} indicator files")
        self.export_status(to_export)

    def delete(self, target_names: Sequence[str] | str, verbose: bool = True) -> list[Path]:
        """
        Delete targets and the YAML status of any indicator files among them.

        Upstream dependencies are never deleted. A missing status file is not
        an error.

        Returns:
            Status files that were removed
        """
        targets = _as_list(target_names)
        self.engine.delete(targets, dependencies=False)

        flags = is_ind_file(targets, ind_ext=self.options.ind_ext)
        removed: list[Path] = []
        for target, flag in zip(targets, flags):
            if not flag:
                continue
            path = self.status_path(target)
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            removed.append(path)
            self._progress(f"Deleted status file {path}", verbose)
        return removed

    def retrieve(self, ind_file: str | os.PathLike) -> str:
        """Build the data file behind an indicator; returns its name."""
        data_file = as_data_file(ind_file, ind_ext=self.options.ind_ext)
        self.make(data_file, verbose=False)
        return data_file

    def _progress(self, message: str, verbose: bool) -> None:
        self._logger.info(message)
        if verbose:
            self._presenter.print(message)


def _minutes(started: float) -> float:
    return (time.monotonic() - started) / 60


# -------------------------------------------------------------------------
# Public functions
# -------------------------------------------------------------------------


def _builder(
    engine: IBuildEngine | None,
    remake_file: str | os.PathLike | None,
    **overrides: Any,
) -> SharedCacheBuilder:
    options = get_sync_options(remake_file=remake_file, **overrides)
    if engine is None:
        discover_engines()
        engine = get_container().get_build_engine(options.engine, Path(options.remake_file))
    return SharedCacheBuilder(engine, options)


def scmake(
    target_names: Targets = None,
    remake_file: str | os.PathLike | None = None,
    *,
    engine: IBuildEngine | None = None,
    verbose: bool = True,
    ind_ext: str | None = None,
    **kwargs: Any,
) -> Any:
    """
    Build targets while sharing indicator build status.

    Args:
        target_names: Targets to build; None builds the default target
        remake_file: Build-graph file; defaults to ``build.remake_file``
        engine: Engine to use instead of the configured one
        verbose: Print build start, end and duration
        ind_ext: Indicator extension; defaults to ``indicator.ext``
        **kwargs: Passed through to the engine's make

    Returns:
        The engine's make result, unchanged
    """
    builder = _builder(engine, remake_file, ind_ext=ind_ext)
    return builder.make(target_names, verbose=verbose, **kwargs)


def scdel(
    target_names: Sequence[str] | str,
    remake_file: str | os.PathLike | None = None,
    *,
    engine: IBuildEngine | None = None,
    verbose: bool = True,
    ind_ext: str | None = None,
) -> list[Path]:
    """
    Delete targets, never their dependencies, plus their YAML status.

    Commit the removal of the status files, unless the targets are rebuilt
    and the new status files committed instead.
    """
    builder = _builder(engine, remake_file, ind_ext=ind_ext)
    return builder.delete(target_names, verbose=verbose)


def sc_retrieve(
    ind_file: str | os.PathLike,
    remake_file: str | os.PathLike | None = None,
    *,
    engine: IBuildEngine | None = None,
    ind_ext: str | None = None,
) -> str:
    """
    Materialize the data file declared by an indicator.

    The data file is built with ``scmake``, so the build graph's recipe for it
    decides how (typically a download from the shared cache).

    Returns:
        Name of the retrieved data file
    """
    builder = _builder(engine, remake_file, ind_ext=ind_ext)
    return builder.retrieve(ind_file)


def export_status(
    target_names: Sequence[str] | str,
    remake_file: str | os.PathLike | None = None,
    *,
    engine: IBuildEngine | None = None,
) -> list[Path]:
    """Copy build records of file targets from the store to ``build/status``."""
    return _builder(engine, remake_file).export_status(target_names)


def import_status(
    new_only: bool | None = None,
    remake_file: str | os.PathLike | None = None,
    *,
    engine: IBuildEngine | None = None,
) -> ImportReport:
    """
    Copy ``build/status`` into the store.

    Args:
        new_only: Only import records newer than the store entry. Pass False
            to recover after the engine was run directly on pulled status.
    """
    return _builder(engine, remake_file, new_only=new_only).import_status()
