#!/usr/bin/env python3
"""
String, size and path formatters for the Koinos utilities

Small helpers shared by the results table, the koinos CLI and any tool
that needs human-readable sizes or case-insensitive string matching.
"""

import math
from typing import Any, Union

from koinos_types import SIZE_UNITS


def to_lower(value: Any) -> str:
    """Lowercase a string, raising TypeError for anything else"""
    if not isinstance(value, str):
        raise TypeError("input is not a string")
    return value.lower()


def to_upper(value: Any) -> str:
    """Uppercase a string, raising TypeError for anything else"""
    if not isinstance(value, str):
        raise TypeError("input is not a string")
    return value.upper()


def contains(s: str, sub: Union[str, list[str]]) -> bool:
    """Check whether s contains sub, or any of the strings in sub

    Args:
        s: String to search in, must not be empty
        sub: A substring or a list of substrings (empty items are skipped)

    Returns:
        True if a substring was found
    """
    if s == "":
        raise ValueError("string cannot be empty")

    if isinstance(sub, str):
        if sub == "":
            raise ValueError("substring cannot be empty")
        return sub in s

    if isinstance(sub, list):
        return any(item and item in s for item in sub)

    raise TypeError("substring must be a string or a slice of strings")


def in_range(target: Any, options: Union[str, list[str]]) -> bool:
    """Case-insensitive check whether target is one of options"""
    try:
        lowered = to_lower(target)
    except TypeError:
        raise TypeError(f"error converting target to lowercase: {target}") from None

    if isinstance(options, str):
        options = [options]
    elif not isinstance(options, list):
        raise TypeError("options must be a string or a slice of strings")

    if not lowered:
        return False

    for option in options:
        try:
            if to_lower(option) == lowered:
                return True
        except TypeError:
            raise TypeError(f"error converting option to lowercase: {option}") from None
    return False


def pluralize(count: int, singular: str, plural: str) -> str:
    """Pick the singular or plural form of a word for count"""
    # bool is an int subclass but never a count
    if isinstance(count, bool) or not isinstance(count, int):
        raise TypeError("count must be an integer")
    if count < 0:
        raise ValueError("count cannot be negative")
    if not singular or not plural:
        raise ValueError("singular and plural forms cannot be empty")
    return singular if count <= 1 else plural


def format_path(path: str, platform: str) -> str:
    """Convert path separators to the style of the given platform

    Args:
        path: Path to convert
        platform: "windows", "linux" or "darwin"; anything else leaves path untouched

    Returns:
        Path with backslashes on windows, forward slashes on linux/darwin
    """
    if platform == "windows":
        return path.replace("/", "\\")
    if platform in ("linux", "darwin"):
        return path.replace("\\", "/")
    return path


def format_size(num_bytes: int) -> str:
    """Format byte size into human-readable string

    Args:
        num_bytes: Size in bytes to format

    Returns:
        Formatted string like "1.00 KB", "2.50 GB" or "0 B"
    """
    for unit in SIZE_UNITS:
        if num_bytes >= unit.size:
            value = num_bytes / unit.size
            # Round half up to two decimals before formatting
            rounded = math.floor(value * 100 + 0.5) / 100
            return f"{rounded:.2f} {unit.label}"
    return "0 B"


def get_version(version: str, fallback: str) -> str:
    """Return version, or fallback when version is empty"""
    return version or fallback
