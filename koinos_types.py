#!/usr/bin/env python3
"""
Shared types for the Koinos utilities

File type and size operator enums, size units and the extension
tables used to classify files.
"""

from dataclasses import dataclass
from enum import Enum


class FileType(Enum):
    """Category of file, matched by extension"""

    ANY = "Any"
    VIDEO = "Video"
    IMAGE = "Image"
    ARCHIVE = "Archive"
    DOCUMENTS = "Documents"


class OperatorType(Enum):
    """Comparison applied when matching file sizes"""

    EQUAL_TO = "Equal To"
    GREATER_THAN = "Greater Than"
    GREATER_THAN_EQUAL_TO = "Greater Than or Equal To"
    LESS_THAN = "Less Than"
    LESS_THAN_EQUAL_TO = "Less Than Or Equal To"


@dataclass(frozen=True)
class SizeUnit:
    label: str
    size: int


@dataclass
class ToleranceResults:
    """Window around a wanted size, all values in bytes"""

    tolerance_size: int
    upper_bound_size: int
    lower_bound_size: int


# Largest first, format_size picks the first unit that fits
SIZE_UNITS = [
    SizeUnit("PB", 1 << 50),
    SizeUnit("TB", 1 << 40),
    SizeUnit("GB", 1 << 30),
    SizeUnit("MB", 1 << 20),
    SizeUnit("KB", 1 << 10),
    SizeUnit("B", 1),
]

WILDCARD_EXTENSION = "*.*"

FILE_EXTENSIONS: dict[FileType, set[str]] = {
    FileType.ANY: {WILDCARD_EXTENSION},
    FileType.VIDEO: {
        ".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv",
        ".webm", ".m4v", ".mpg", ".mpeg", ".ts",
    },
    FileType.IMAGE: {
        ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff",
        ".webp", ".svg", ".raw", ".heic", ".ico",
    },
    FileType.ARCHIVE: {
        ".zip", ".rar", ".7z", ".tar", ".gz",
        ".bz2", ".xz", ".iso", ".tgz", ".tbz2",
    },
    FileType.DOCUMENTS: {
        ".docx", ".doc", ".pdf", ".txt", ".rtf", ".odt", ".xlsx",
        ".xls", ".pptx", ".ppt", ".csv", ".md", ".pages",
    },
}
