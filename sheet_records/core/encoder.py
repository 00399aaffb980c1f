"""Row encoder: one record -> one row of cell strings.

RULES:
- Output is aligned one-to-one with the given column paths
- Absent optional values, absent containers and sequence indices beyond
  this record's length all encode as ""
- A required leaf set to None, a value of the wrong type, or an int too
  large for a float column raises CoercionError naming the row and header
- Pure function; the record is never modified
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Optional

from sheet_records.core.coercion import to_text
from sheet_records.core.errors import CoercionError
from sheet_records.core.headers import serialize
from sheet_records.core.records import MISSING, read_path
from sheet_records.core.schema import ColumnPath, OptionalShape, RecordShape, shape_at


def encode_row(
    record: Mapping,
    column_paths: Sequence[ColumnPath],
    shape: RecordShape,
    row: Optional[int] = None,
) -> list[str]:
    """Encode a dict record into cell strings.

    Args:
        record: The record to encode.
        column_paths: Column order of the grid being built.
        shape: The record shape the paths were derived from.
        row: Index of the record in its batch, for error messages.

    Returns:
        One cell string per column path.
    """
    cells: list[str] = []
    for path in column_paths:
        leaf = shape_at(shape, path)
        try:
            value = read_path(record, path)
        except TypeError as exc:
            found = record.get(path[0]) if isinstance(record, Mapping) else record
            raise CoercionError(row, serialize(path), repr(found), f"value ({exc})") from exc

        if value is MISSING:
            cells.append("")
            continue
        if value is None:
            if isinstance(leaf, OptionalShape):
                cells.append("")
                continue
            raise CoercionError(row, serialize(path), "None", f"required {leaf.kind}")

        kind = leaf.inner.kind if isinstance(leaf, OptionalShape) else leaf.kind
        try:
            cells.append(to_text(kind, value))
        except (TypeError, OverflowError) as exc:
            raise CoercionError(row, serialize(path), repr(value), kind) from exc
    return cells
