"""
Indicator-driven cache recipes.

Building blocks for build-graph recipes in a shared-cache project. The
official product of a processing step is an indicator; the data file lives
in the artifact cache and is pulled locally only when a step needs it.

- put_cached_file: upload a data file and indicate it
- indicate_from_cache: indicate a file that is already in the cache
- indicate_by_trust: indicate a file believed to be in the cache
- get_cached_file: materialize the data file behind an indicator
"""

import os
from pathlib import Path

from ..core.di import resolve_or_default
from ..core.exceptions import DataNotAvailableError
from ..core.interfaces.cache import IArtifactCache
from ..core.interfaces.logger import ILogger
from ..core.models.config import DEFAULT_IND_EXT
from ..utils.timefmt import format_time, from_timestamp
from .indicator import as_data_file, as_ind_file, sc_indicate
from .logging import NullLogger


def _cache_name(data_file: str | os.PathLike) -> str:
    return Path(data_file).as_posix()


def _logger() -> ILogger:
    return resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]


def indicate_from_cache(
    ind_file: str | os.PathLike,
    cache: IArtifactCache,
    ind_ext: str = DEFAULT_IND_EXT,
) -> Path:
    """
    Write an indicator for a data file found in the cache.

    The indicator records when the cache entry was stored, so it only
    changes when the cached data does.

    Raises:
        DataNotAvailableError: If the data file is not in the cache
    """
    data_file = as_data_file(ind_file, ind_ext=ind_ext)
    name = _cache_name(data_file)
    stored = cache.mtime(name)
    if stored is None:
        raise DataNotAvailableError(f"{data_file} is not in cache", target=data_file)
    path = sc_indicate(ind_file, indication_time=format_time(from_timestamp(stored)))
    _logger().info(f"made {ind_file} because found {data_file} in {cache.name}")
    return path


def indicate_by_trust(ind_file: str | os.PathLike) -> Path:
    """
    Write a timestamp indicator on trust that the data is in the cache.

    Reasonable when the cache is local, or when checking remotely costs more
    than occasionally being wrong.
    """
    path = sc_indicate(ind_file)
    _logger().info(f"made {ind_file} on trust")
    return path


def put_cached_file(
    data_file: str | os.PathLike,
    cache: IArtifactCache,
    ind_file: str | os.PathLike | None = None,
    ind_ext: str = DEFAULT_IND_EXT,
    hash_algorithm: str | None = None,
) -> Path:
    """
    Upload a data file and write its indicator with the data's hash.

    The hash uses ``hash_algorithm``, or the configured ``hash.algorithm``
    when none is given.

    Returns:
        Path of the indicator
    """
    if ind_file is None:
        ind_file = as_ind_file(data_file, ind_ext=ind_ext)
    cache.upload(Path(data_file), _cache_name(data_file))
    return sc_indicate(ind_file, data_file=data_file, hash_algorithm=hash_algorithm)


def get_cached_file(
    ind_file: str | os.PathLike,
    cache: IArtifactCache,
    data_file: str | os.PathLike | None = None,
    ind_ext: str = DEFAULT_IND_EXT,
) -> Path:
    """
    Make sure the data file behind an indicator exists locally.

    The local copy is current when it exists and is not older than the
    indicator. Otherwise it is downloaded from the cache.

    Returns:
        Path of the local data file

    Raises:
        DataNotAvailableError: If a download is needed but the cache has no
            entry for the data file
    """
    if data_file is None:
        data_file = as_data_file(ind_file, ind_ext=ind_ext)
    data_path = Path(data_file)
    ind_path = Path(ind_file)
    if not ind_path.is_file():
        raise DataNotAvailableError(
            f"{data_path} has no indicator", target=str(data_path), path=str(ind_path)
        )
    ind_mtime = ind_path.stat().st_mtime
    logger = _logger()

    if data_path.exists() and data_path.stat().st_mtime >= ind_mtime:
        logger.info(f"{data_path} is available locally")
        return data_path

    name = _cache_name(data_path)
    if not cache.exists(name):
        raise DataNotAvailableError(
            f"{data_path} is promised but not in cache",
            target=str(data_path),
            context={"ind_file": str(ind_path)},
        )
    logger.info(f"downloading {data_path}")
    cache.download(name, data_path)
    return data_path
