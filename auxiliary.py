#!/usr/bin/env python3
"""
Auxiliary utility functions for the Koinos project

File type and size operator lookups, size tolerance matching, human
size parsing and record validation shared by the koinos tools.
"""

import dataclasses
import pathlib
from typing import Any, Optional, Union

from koinos_types import (
    FILE_EXTENSIONS,
    SIZE_UNITS,
    WILDCARD_EXTENSION,
    FileType,
    OperatorType,
    ToleranceResults,
)

_FILE_TYPE_NAMES = {
    "any": FileType.ANY,
    "video": FileType.VIDEO,
    "image": FileType.IMAGE,
    "archive": FileType.ARCHIVE,
    "documents": FileType.DOCUMENTS,
}

_OPERATOR_ALIASES = {
    OperatorType.EQUAL_TO: ("et", "equal to", "equalto", "equal", "=="),
    OperatorType.GREATER_THAN: ("gt", "greater", "greater than", "greaterthan", ">"),
    OperatorType.GREATER_THAN_EQUAL_TO: ("gte", "greater than or equal to", "greaterthanorequalto", ">="),
    OperatorType.LESS_THAN: ("lt", "less", "less than", "lessthan", "<"),
    OperatorType.LESS_THAN_EQUAL_TO: ("lte", "less than or equal to", "lessthanorequalto", "<="),
}
_OPERATOR_NAMES = {alias: op for op, aliases in _OPERATOR_ALIASES.items() for alias in aliases}


def to_file_type(name: str) -> Optional[FileType]:
    """Map a user supplied name like "Video" to a FileType, None if unknown"""
    return _FILE_TYPE_NAMES.get(name.lower())


def to_operator_type(name: str) -> Optional[OperatorType]:
    """Map an operator alias like "gte" or ">=" to an OperatorType, None if unknown"""
    return _OPERATOR_NAMES.get(name.lower())


def is_extension_valid(file_type: Any, path: Union[str, pathlib.Path]) -> bool:
    """Check if the extension of path is allowed for file_type

    Args:
        file_type: FileType to check against, unknown values never match
        path: File name or path

    Returns:
        True for FileType.ANY or when the lowercase suffix is listed
    """
    extensions = FILE_EXTENSIONS.get(file_type)
    if extensions is None:
        return False
    if WILDCARD_EXTENSION in extensions:
        return True
    return pathlib.PurePath(path).suffix.lower() in extensions


def calculate_tolerances(wanted_size: int, tolerance_kib: float) -> ToleranceResults:
    """Calculate the size window around wanted_size

    Args:
        wanted_size: Wanted file size in bytes
        tolerance_kib: Tolerance in KiB on either side

    Returns:
        ToleranceResults with the lower bound clamped at zero
    """
    if wanted_size < 0:
        raise ValueError("wanted_size cannot be negative")
    if tolerance_kib < 0:
        raise ValueError("tolerance_size cannot be negative")

    tolerance_bytes = int(tolerance_kib * 1024)
    return ToleranceResults(
        tolerance_size=tolerance_bytes,
        upper_bound_size=wanted_size + tolerance_bytes,
        lower_bound_size=max(wanted_size - tolerance_bytes, 0),
    )


def get_operator_size_matches(
    operator: Optional[OperatorType], wanted_size: int, tolerance_kib: float, file_size: int
) -> bool:
    """Check whether file_size satisfies operator against wanted_size

    Equality (and any unknown operator) uses the tolerance window, the
    ordering operators compare against wanted_size exactly.
    """
    try:
        window = calculate_tolerances(wanted_size, tolerance_kib)
    except ValueError as e:
        raise ValueError(f"error calculating tolerances {e}") from e

    if operator is OperatorType.LESS_THAN:
        return file_size < wanted_size
    if operator is OperatorType.LESS_THAN_EQUAL_TO:
        return file_size <= wanted_size
    if operator is OperatorType.GREATER_THAN:
        return file_size > wanted_size
    if operator is OperatorType.GREATER_THAN_EQUAL_TO:
        return file_size >= wanted_size
    return window.lower_bound_size <= file_size <= window.upper_bound_size


def convert_string_size_to_bytes(text: str) -> int:
    """Parse a human-readable size string like '2.5 TB' into bytes

    The unit is everything from the first letter on and must be one of
    the SIZE_UNITS labels (case-insensitive).
    """
    text = text.strip()
    if not text:
        raise ValueError("size cannot be empty")

    num_str = unit_str = ""
    for i, ch in enumerate(text):
        if ch.isalpha():
            num_str = text[:i].strip()
            unit_str = text[i:].strip().upper()
            break

    if not num_str or not unit_str:
        raise ValueError("invalid size format")

    num = float(num_str)

    for unit in SIZE_UNITS:
        if unit.label == unit_str:
            return int(num * unit.size)

    raise ValueError("invalid size unit")


def validate_struct(record: Any) -> None:
    """Validate that string fields are set and nested records are not empty

    Args:
        record: A dataclass instance

    Raises:
        TypeError: record is not a dataclass instance
        ValueError: on the first empty string field or empty nested record
    """
    if not dataclasses.is_dataclass(record) or isinstance(record, type):
        raise TypeError("validate_struct expects a dataclass instance")

    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        if isinstance(value, str):
            if value == "":
                raise ValueError(f"{f.name} cannot be empty")
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            if not any(getattr(value, inner.name) for inner in dataclasses.fields(value)):
                raise ValueError(f"{f.name} cannot be an empty struct")


def is_directory_empty(path: Union[str, pathlib.Path]) -> bool:
    """Check if a directory has no entries

    Raises:
        FileNotFoundError: path does not exist
        NotADirectoryError: path is not a directory
    """
    path = pathlib.Path(path)
    if not path.exists():
        raise FileNotFoundError(f"directory does not exist: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"{path} is not a directory")
    return not any(path.iterdir())
