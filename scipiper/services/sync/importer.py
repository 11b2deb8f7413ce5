"""
Status importer: versionable YAML -> build records.

The freshness guard compares the store's last write of a key with the mtime
of its YAML file. It is a heuristic: running the build engine directly after
pulling new status files, and before the next import, makes the store look
newer than the shared state. Always build through ``scmake`` in a shared
cache project, or import once with ``new_only=False`` to recover.
"""

from pathlib import Path

import yaml

from ...core.exceptions import StatusRecordError
from ...core.interfaces.engine import IBuildEngine
from ...core.interfaces.logger import ILogger
from ...core.models.status import BuildRecord, ImportReport
from ..keys import KeyMangler
from ..logging import NullLogger


def load_record(path: Path, target: str) -> BuildRecord:
    """
    Parse one YAML status file.

    Raises:
        StatusRecordError: If the file is unreadable or not a valid record
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise StatusRecordError(
            "Could not read status record", path=str(path), context={"target": target}, cause=e
        ) from e
    if not isinstance(data, dict):
        raise StatusRecordError(
            "Status record is not a mapping", path=str(path), context={"target": target}
        )
    try:
        return BuildRecord.from_text_fields(data)
    except ValueError as e:
        raise StatusRecordError(
            f"Invalid status record: {e}", path=str(path), context={"target": target}, cause=e
        ) from e


class StatusImporter:
    """
    Loads ``<status_dir>/*.yml`` into the engine's status store.

    Usage:
        report = StatusImporter(engine, Path("build/status")).run()
        if report.has_warnings:
            ...
    """

    def __init__(
        self,
        engine: IBuildEngine,
        status_dir: Path,
        mangler: KeyMangler | None = None,
        new_only: bool = True,
        logger: ILogger | None = None,
    ):
        self._engine = engine
        self._status_dir = Path(status_dir)
        self._mangler = mangler or KeyMangler()
        self._new_only = new_only
        self._logger = logger or NullLogger()

    def _is_newer(self, target: str, path: Path) -> bool:
        last = self._engine.store.last_written(target)
        return last is None or last < path.stat().st_mtime

    def run(self) -> ImportReport:
        """
        Import every status file that names a file target in the build graph.

        Returns:
            ImportReport with imported and skipped targets, and the mangled
            keys of status files that match no key in the store

        Raises:
            KeyManglingError: If a file name is not a mangled key
            StatusRecordError: If a status file cannot be parsed
        """
        report = ImportReport()
        if not self._status_dir.is_dir():
            return report

        files = sorted(self._status_dir.glob("*.yml"))
        found = {path.stem: path for path in files}
        file_targets = set(self._engine.list_targets("file"))
        store = self._engine.store

        for token, path in found.items():
            target = self._mangler.demangle(token)
            if target not in file_targets:
                continue
            if self._new_only and not self._is_newer(target, path):
                report.skipped.append(target)
                continue
            store.set(target, load_record(path, target))
            report.imported.append(target)

        store_tokens = set(self._mangler.mangle_all(store.keys()).values())
        report.obsolete.extend(token for token in found if token not in store_tokens)
        if report.obsolete:
            names = ", ".join(f"{token}.yml" for token in report.obsolete)
            self._logger.warning(f"these status files may be obsolete: {names}")

        self._logger.debug(
            f"Imported {len(report.imported)} status records, skipped {len(report.skipped)}"
        )
        return report
