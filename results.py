#!/usr/bin/env python3
"""
Generic Results Table Module

Renders and sorts collections of arbitrary records without knowing their
shape up front. A record is a dataclass instance or a mapping; its
columns are discovered at call time.

Dataclass fields declared with embedded() are flattened: the nested
record's own fields take the place of the embedding field, in their
declared order. Inherited dataclass fields flatten naturally.

Example:
    @dataclass
    class FileInfo:
        name: str
        size: int

    @dataclass
    class FileEntry:
        info: FileInfo = embedded()
        extension: str = ""

    entries = [FileEntry(FileInfo("b.txt", 2048), ".txt"), FileEntry(FileInfo("a.txt", 10), ".txt")]
    sort_records(entries, "name")
    render_results_table(entries, {"size": "2.01 KB"})

Nothing here raises for malformed input: unsupported records render
nothing, missing fields render empty cells and sorting by an unknown or
unsortable field leaves the order untouched. Each of these cases is
logged at DEBUG or WARNING level on this module's logger.
"""

import dataclasses
import functools
import logging
import numbers
from collections.abc import Mapping, MutableSequence, Sequence
from typing import Any, Optional

from rich.text import Text

from console_ui import ConsoleUI
from formatters import format_size
from koinos_config import KoinosConfig

logger = logging.getLogger(__name__)

EMBEDDED_METADATA_KEY = "embedded"
SIZE_FIELD = "size"

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_NOT_FOUND = (False, None)


def embedded(**kwargs) -> Any:
    """Declare a dataclass field whose record is flattened into its parent

    Accepts the same keyword arguments as dataclasses.field().
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[EMBEDDED_METADATA_KEY] = True
    return dataclasses.field(metadata=metadata, **kwargs)


def _is_dataclass_instance(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_embed(f: dataclasses.Field, value: Any) -> bool:
    return bool(f.metadata.get(EMBEDDED_METADATA_KEY)) and _is_dataclass_instance(value)


# ---------------------------------------------------------------------------
# Field introspection
# ---------------------------------------------------------------------------


def describe_fields(sample: Any) -> tuple[list[str], list[str]]:
    """Return (headers, keys) describing the columns of a record

    Args:
        sample: A representative record, usually the first of a collection

    Returns:
        Display names and lookup keys in declaration order, with embedded
        records flattened in place. Both lists are empty when sample is
        not a record.
    """
    headers: list[str] = []
    keys: list[str] = []

    if isinstance(sample, Mapping):
        for key in sample:
            headers.append(str(key))
            keys.append(str(key))
        return headers, keys

    if not _is_dataclass_instance(sample):
        return headers, keys

    for f in dataclasses.fields(sample):
        value = getattr(sample, f.name)
        if _is_embed(f, value):
            embedded_headers, embedded_keys = describe_fields(value)
            headers.extend(embedded_headers)
            keys.extend(embedded_keys)
        else:
            headers.append(f.name)
            keys.append(f.name)

    return headers, keys


def lookup_field(record: Any, name: str) -> tuple[bool, Any]:
    """Find a field by case-insensitive name on the flattened record

    Shallower fields shadow embedded ones. A name matched by more than one
    field at the same depth is ambiguous and counts as not found.

    Returns:
        (found, value)
    """
    target = name.lower()

    if isinstance(record, Mapping):
        matches = [value for key, value in record.items() if str(key).lower() == target]
        if len(matches) == 1:
            return True, matches[0]
        if matches:
            logger.debug("Key %r is ambiguous on %s", name, type(record).__name__)
        return _NOT_FOUND

    if not _is_dataclass_instance(record):
        return _NOT_FOUND

    level = [record]
    while level:
        matches = []
        next_level = []
        for current in level:
            for f in dataclasses.fields(current):
                value = getattr(current, f.name)
                if f.name.lower() == target:
                    matches.append(value)
                if _is_embed(f, value):
                    next_level.append(value)
        if len(matches) == 1:
            return True, matches[0]
        if matches:
            logger.debug("Field name %r is ambiguous on %s", name, type(record).__name__)
            return _NOT_FOUND
        level = next_level

    return _NOT_FOUND


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------


def _is_int64(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        return False
    return _INT64_MIN <= value <= _INT64_MAX


def materialize_row(record: Any, keys: list[str]) -> list[Any]:
    """Build one row of display values for record

    Values keep their type, except that an integer field named "size"
    (any case) is rendered with format_size. Keys missing from the record
    produce an empty string.
    """
    row: list[Any] = []
    for key in keys:
        found, value = lookup_field(record, key)
        if not found:
            row.append("")
        elif key.lower() == SIZE_FIELD and _is_int64(value):
            row.append(format_size(value))
        else:
            row.append(value)
    return row


create_data_row = materialize_row


def create_header_row(headers: list[str]) -> list[str]:
    """Create the header row for the table"""
    return list(headers)


def create_footer_row(headers: list[str], total_values: Mapping[str, Any]) -> list[Any]:
    """Create the footer row, matching headers exactly against total_values"""
    return [total_values[header] if header in total_values else "" for header in headers]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def _sort_kind(value: Any) -> Optional[str]:
    # bool is an Integral, but it is not sortable here
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return "string"
    if isinstance(value, numbers.Real):
        return "number"
    return None


def _is_nan(value: Any) -> bool:
    return value != value


def _compare_lookups(a: tuple[bool, Any], b: tuple[bool, Any], descending: bool) -> int:
    found_a, value_a = a
    found_b, value_b = b
    if not (found_a and found_b):
        return 0

    kind = _sort_kind(value_a)
    if kind is None or kind != _sort_kind(value_b):
        return 0

    if kind == "number":
        nan_a, nan_b = _is_nan(value_a), _is_nan(value_b)
        if nan_a or nan_b:
            # NaN goes last in both directions
            return int(nan_a) - int(nan_b)

    if value_a < value_b:
        result = -1
    elif value_b < value_a:
        result = 1
    else:
        return 0
    return -result if descending else result


def sort_records(records: Any, by_field: str, descending: bool = False) -> None:
    """Sort records in place by the field named by_field (case-insensitive)

    Args:
        records: A mutable sequence of records sharing one shape
        by_field: Field to sort by, looked up on the flattened records
        descending: Sort largest first; ties keep their original order

    Strings, integers and floats are sortable. Records missing the field,
    values of any other type, and values of mismatched kinds compare
    equal, so the sort is stable and leaves such records where they were.
    Columns mixing kinds or holding None get no ordering guarantee.
    Anything that is not a mutable sequence is left alone.
    """
    if not isinstance(records, MutableSequence):
        logger.debug("Not sorting %s, expected a mutable sequence", type(records).__name__)
        return
    if len(records) < 2:
        return

    lookups = [lookup_field(record, by_field) for record in records]
    if not any(found for found, _ in lookups):
        logger.debug("Sort field %r not found, order unchanged", by_field)
        return

    key = functools.cmp_to_key(lambda i, j: _compare_lookups(lookups[i], lookups[j], descending))
    order = sorted(range(len(records)), key=key)
    records[:] = [records[i] for i in order]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _cell(value: Any) -> Text:
    # Text keeps rich from reading brackets in values as markup
    return Text("" if value is None else str(value))


def render_results_table(
    records: Any,
    total_values: Optional[Mapping[str, Any]] = None,
    ui: Optional[ConsoleUI] = None,
    config: Optional[KoinosConfig] = None,
) -> None:
    """Render records as a table on the console

    Columns come from describe_fields() on the first record, rows from
    materialize_row(). When total_values is given, a footer row shows the
    value for each header found in it (exact, case-sensitive match).

    Args:
        records: Sequence of records sharing one shape
        total_values: Optional footer values keyed by header
        ui: Console to render on, a default stdout ConsoleUI if omitted
        config: Table styling, KoinosConfig defaults if omitted
    """
    ui = ui or ConsoleUI()
    config = config or KoinosConfig()

    if isinstance(records, (str, bytes)) or not isinstance(records, Sequence):
        logger.warning("Cannot render %s as a table", type(records).__name__)
        ui.print_warning("Expected a sequence of records")
        return

    if not records:
        ui.print_info("No results to display")
        return

    headers, keys = describe_fields(records[0])
    if not headers:
        logger.warning("Records of type %s have no fields to display", type(records[0]).__name__)
        ui.print_warning("Expected a sequence of records")
        return

    footers = None
    if total_values:
        footers = [_cell(value) for value in create_footer_row(headers, total_values)]

    table = ui.create_table(
        create_header_row(headers),
        title=config.table_title,
        footers=footers,
        box_name=config.table_box,
        show_lines=config.show_lines,
    )
    for record in records:
        table.add_row(*(_cell(value) for value in materialize_row(record, keys)))

    ui.print_table(table)
