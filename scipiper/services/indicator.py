"""
Indicator files.

An indicator ``<data>.<ext>`` is a small YAML mapping that certifies its data
file is obtainable. Build graphs depend on indicators instead of the data
files, so a collaborator without the data locally still sees a current graph.

Name conversions here are purely lexical; nothing is checked against a build
graph.
"""

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from ..config import get_sync_options
from ..core.exceptions import DataFileMissingError, IndicatorNameError, ScipiperIOError
from ..core.models.config import DEFAULT_IND_EXT, validate_ind_ext
from ..hashing import HashAlgorithmRegistry
from ..utils.timefmt import format_time, now_utc

StrPath = str | os.PathLike


def _final_ext(name: str) -> str:
    base = os.path.basename(name)
    if "." not in base:
        return ""
    return base.rsplit(".", 1)[1]


def is_ind_file(
    target_names: StrPath | Iterable[StrPath],
    ind_ext: str = DEFAULT_IND_EXT,
) -> bool | list[bool]:
    """
    Whether names carry the indicator extension as their final extension.

    A single name gives a bool; any other iterable gives a list of bools.

    Examples:
        is_ind_file("mydata.rds")                  # False
        is_ind_file("mydata.rds.ind")              # True
        is_ind_file("mydata.rds.st", ind_ext="st") # True
    """
    ind_ext = validate_ind_ext(ind_ext)
    if isinstance(target_names, (str, os.PathLike)):
        return _final_ext(os.fspath(target_names)) == ind_ext
    return [_final_ext(os.fspath(n)) == ind_ext for n in target_names]


def as_ind_file(data_file: StrPath, ind_ext: str = DEFAULT_IND_EXT) -> str:
    """
    Indicator name for a data file: ``mydata.rds`` -> ``mydata.rds.ind``.

    Raises:
        IndicatorNameError: If data_file already has the indicator extension
    """
    ind_ext = validate_ind_ext(ind_ext)
    data_file = os.fspath(data_file)
    if is_ind_file(data_file, ind_ext=ind_ext):
        raise IndicatorNameError(
            f"{data_file} is already an indicator file",
            names=[data_file],
            ind_ext=ind_ext,
        )
    return f"{data_file}.{ind_ext}"


def as_data_file(ind_file: StrPath, ind_ext: str = DEFAULT_IND_EXT) -> str:
    """
    Data file name for an indicator: ``mydata.rds.ind`` -> ``mydata.rds``.

    Raises:
        IndicatorNameError: If ind_file does not have the indicator extension
    """
    ind_ext = validate_ind_ext(ind_ext)
    ind_file = os.fspath(ind_file)
    if not is_ind_file(ind_file, ind_ext=ind_ext):
        raise IndicatorNameError(
            f"{ind_file} is not an indicator file",
            names=[ind_file],
            ind_ext=ind_ext,
        )
    return ind_file[: -(len(ind_ext) + 1)]


def sc_indicate(
    ind_file: StrPath,
    data_file: StrPath | None = None,
    *,
    hash_algorithm: str | None = None,
    **info: Any,
) -> Path:
    """
    Write an indicator file.

    With no ``info`` and no ``data_file`` the indicator holds only an
    ``indication_time``, so its content changes on every write. Pass fixed
    values (for instance a hash fetched from a remote cache) to make it
    static.

    Args:
        ind_file: Indicator file to write
        data_file: Data file whose hash is recorded under ``hash``
        hash_algorithm: Algorithm used to hash data_file; defaults to the
            configured ``hash.algorithm``
        **info: Extra string fields for the indicator

    Returns:
        Path of the written indicator

    Raises:
        DataFileMissingError: If data_file is given but does not exist
    """
    ind_path = Path(ind_file)
    fields: dict[str, str] = {str(k): str(v) for k, v in info.items()}

    if data_file is not None:
        data_path = Path(data_file)
        if not data_path.is_file():
            raise DataFileMissingError(
                "data_file must exist if specified",
                path=str(data_path),
                context={"ind_file": str(ind_path)},
            )
        if hash_algorithm is None:
            hash_algorithm = get_sync_options().hash_algorithm
        fields["hash"] = HashAlgorithmRegistry().hash_file(hash_algorithm, data_path)

    if not fields:
        fields["indication_time"] = format_time(now_utc())

    try:
        ind_path.parent.mkdir(parents=True, exist_ok=True)
        with open(ind_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                fields, f, default_flow_style=False, sort_keys=False, allow_unicode=True
            )
    except OSError as e:
        raise ScipiperIOError("Could not write indicator file", path=str(ind_path), cause=e) from e
    return ind_path


def read_indicator(ind_file: StrPath) -> dict[str, str]:
    """
    Read the fields of an indicator file.

    An empty file reads as an empty mapping.

    Raises:
        ScipiperIOError: If the file is missing or is not a YAML mapping
    """
    ind_path = Path(ind_file)
    try:
        with open(ind_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ScipiperIOError("Could not read indicator file", path=str(ind_path), cause=e) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ScipiperIOError("Indicator file is not a mapping", path=str(ind_path))
    return {str(k): str(v) for k, v in data.items()}
