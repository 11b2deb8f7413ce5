"""
scipiper: shared-cache build status for dependency-graph pipelines.

Collaborators share small indicator files and the build status of those
indicators through version control, while the data files themselves live in
a shared artifact cache.
"""

from .core.bootstrap import bootstrap
from .core.exceptions import (
    DataFileMissingError,
    DataNotAvailableError,
    IndicatorNameError,
    KeyManglingError,
    ScipiperException,
    StatusRecordError,
    UnknownTargetError,
)
from .core.models.status import BuildRecord, ImportReport, TargetStatus
from .plugins.cache.local import LocalDirectoryCache
from .services.build import (
    SharedCacheBuilder,
    export_status,
    import_status,
    sc_retrieve,
    scdel,
    scmake,
)
from .services.cache import (
    get_cached_file,
    indicate_by_trust,
    indicate_from_cache,
    put_cached_file,
)
from .services.indicator import as_data_file, as_ind_file, is_ind_file, read_indicator, sc_indicate
from .services.keys import KeyMangler, get_mangled_key
from .services.status import diff_status, get_build_status

__version__ = "0.3.0"

__all__ = [
    "BuildRecord",
    "DataFileMissingError",
    "DataNotAvailableError",
    "ImportReport",
    "IndicatorNameError",
    "KeyMangler",
    "KeyManglingError",
    "LocalDirectoryCache",
    "ScipiperException",
    "SharedCacheBuilder",
    "StatusRecordError",
    "TargetStatus",
    "UnknownTargetError",
    "__version__",
    "as_data_file",
    "as_ind_file",
    "bootstrap",
    "diff_status",
    "export_status",
    "get_build_status",
    "get_cached_file",
    "get_mangled_key",
    "import_status",
    "indicate_by_trust",
    "indicate_from_cache",
    "is_ind_file",
    "put_cached_file",
    "read_indicator",
    "sc_indicate",
    "sc_retrieve",
    "scdel",
    "scmake",
]
