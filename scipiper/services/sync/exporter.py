"""
Status exporter: build records -> versionable YAML.

Only file targets are exported. Object targets would require sharing their
in-memory values as well, which is a different mechanism altogether.
"""

from collections.abc import Iterable
from pathlib import Path

import yaml

from ...core.exceptions import StatusRecordError
from ...core.interfaces.engine import IBuildEngine
from ...core.interfaces.logger import ILogger
from ...core.models.status import BuildRecord
from ..keys import KeyMangler
from ..logging import NullLogger


def render_record(record: BuildRecord) -> str:
    """YAML text of a record; identical records give identical text."""
    return yaml.safe_dump(
        record.to_text_fields(),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


class StatusExporter:
    """
    Writes build records to ``<status_dir>/<mangled-key>.yml``.

    Usage:
        exporter = StatusExporter(engine, Path("build/status"))
        written = exporter.export(["B.rds.ind"])
    """

    def __init__(
        self,
        engine: IBuildEngine,
        status_dir: Path,
        mangler: KeyMangler | None = None,
        logger: ILogger | None = None,
    ):
        self._engine = engine
        self._status_dir = Path(status_dir)
        self._mangler = mangler or KeyMangler()
        self._logger = logger or NullLogger()

    def select(self, target_names: Iterable[str]) -> list[str]:
        """Requested targets that are file targets and hold a build record."""
        file_targets = set(self._engine.list_targets("file"))
        stored = set(self._engine.store.keys())
        selected: list[str] = []
        for target in target_names:
            if target in file_targets and target in stored and target not in selected:
                selected.append(target)
        return selected

    def export(self, target_names: Iterable[str]) -> list[Path]:
        """
        Export the records of the selected targets.

        Each file is overwritten whole. The status directory is created even
        when nothing is selected.

        Returns:
            Paths written, in request order

        Raises:
            StatusRecordError: If a record file cannot be written
            KeyManglingError: If two selected targets share a mangled key
        """
        to_export = self.select(target_names)
        tokens = self._mangler.mangle_all(to_export)

        try:
            self._status_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StatusRecordError(
                "Could not create status directory", path=str(self._status_dir), cause=e
            ) from e

        written: list[Path] = []
        for target in to_export:
            record = self._engine.store.get(target)
            if record is None:
                continue
            path = self._status_dir / f"{tokens[target]}.yml"
            try:
                path.write_text(render_record(record), encoding="utf-8")
            except OSError as e:
                raise StatusRecordError(
                    "Could not write status record",
                    path=str(path),
                    context={"target": target},
                    cause=e,
                ) from e
            self._logger.debug(f"Exported status of {target} to {path}")
            written.append(path)
        return written
