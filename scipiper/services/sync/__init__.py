"""
Status synchronization between a build engine's store and ``build/status``.

- StatusExporter: build records -> one YAML file per target
- StatusImporter: YAML files -> build records, with a freshness guard
"""

from .exporter import StatusExporter, render_record
from .importer import StatusImporter, load_record

__all__ = [
    "StatusExporter",
    "StatusImporter",
    "load_record",
    "render_record",
]
