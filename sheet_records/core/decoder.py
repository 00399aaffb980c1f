"""Row decoder: one row of cell strings -> one record.

WHY: Reading is the partial direction. Cells may be missing (ragged
rows), empty, or hold text that does not parse as the declared type, and
the grid may carry columns the reader does not know about. The decoder
turns all of that into either a complete record or a precise error.

HOW: The row is first indexed by column path (only columns the shape
knows about). The record is then built top-down from the shape:
  - scalar leaf: coerce the cell text
  - optional: None unless some leaf cell under it holds text
  - sequence: length = highest index with any non-empty leaf cell + 1
  - record: one entry per declared field

RULES:
- Missing trailing cells read as ""
- Unknown headers are ignored
- Empty cell for a required str leaf decodes as ""; for int, float and
  bool it raises DecodeError
- A required leaf whose column is absent from the header raises
  DecodeError
- Unparsable text raises CoercionError with row, header and raw text
- Absent optionals come back as None, never as a missing key
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional, Tuple

from sheet_records.core.coercion import from_text
from sheet_records.core.errors import CoercionError, DecodeError
from sheet_records.core.schema import (
    ColumnPath,
    OptionalShape,
    RecordShape,
    ScalarShape,
    SequenceShape,
    Shape,
)


class _RowCells:
    """Cells of one row, keyed by column path."""

    def __init__(self, cells: Dict[ColumnPath, Tuple[str, str]], row: Optional[int]) -> None:
        self.cells = cells  # path -> (header, text)
        self.row = row

    def _under(self, prefix: ColumnPath):
        size = len(prefix)
        for path, (_header, text) in self.cells.items():
            if text and path[:size] == prefix:
                yield path

    def has_data(self, prefix: ColumnPath) -> bool:
        return any(True for _ in self._under(prefix))

    def sequence_length(self, prefix: ColumnPath) -> int:
        size = len(prefix)
        indices = [path[size] for path in self._under(prefix) if len(path) > size]
        return max(indices) + 1 if indices else 0


def decode_row(
    cells: Sequence[str],
    header_row: Sequence[str],
    header_map: Mapping[str, ColumnPath],
    shape: RecordShape,
    row: Optional[int] = None,
) -> dict[str, Any]:
    """Decode one data row into a dict record.

    Args:
        cells: The row's cell strings; may be shorter than the header.
        header_row: The grid's header row, giving each cell's header.
        header_map: Header -> column path, as built by map_headers().
        shape: The target record shape.
        row: Index of the data row, for error messages.

    Returns:
        A complete dict record.
    """
    indexed: Dict[ColumnPath, Tuple[str, str]] = {}
    for position, header in enumerate(header_row):
        path = header_map.get(header)
        if path is None:
            continue
        text = cells[position] if position < len(cells) else ""
        indexed[path] = (header, text)
    return _decode(shape, (), _RowCells(indexed, row))


def _decode(shape: Shape, prefix: ColumnPath, row: _RowCells) -> Any:
    if isinstance(shape, OptionalShape):
        if not row.has_data(prefix):
            return None
        return _decode(shape.inner, prefix, row)
    if isinstance(shape, RecordShape):
        return {
            field.name: _decode(field.shape, prefix + (field.name,), row)
            for field in shape.fields
        }
    if isinstance(shape, SequenceShape):
        length = row.sequence_length(prefix)
        return [_decode(shape.item, prefix + (index,), row) for index in range(length)]
    return _decode_scalar(shape, prefix, row)


def _decode_scalar(shape: ScalarShape, path: ColumnPath, row: _RowCells) -> Any:
    if path not in row.cells:
        raise DecodeError(path, row.row, "column is missing from the header")
    header, text = row.cells[path]
    if not text:
        if shape.kind == "str":
            return ""
        raise DecodeError(path, row.row, f"required {shape.kind} value is empty")
    try:
        return from_text(shape.kind, text)
    except ValueError as exc:
        raise CoercionError(row.row, header, text, shape.kind) from exc
