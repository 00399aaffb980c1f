"""Grid assembler: record batches <-> header row plus data rows.

WHY: A grid is exchanged with the backend in one piece. Writing needs a
single header that fits every record in the batch; reading needs the
header split off, validated and mapped onto the target shape before any
row is decoded.

HOW: build_grid() walks the whole batch once for column paths, renders
the header and encodes every record in input order. records_from_grid()
splits off the first row as header, maps it, then decodes the remaining
rows in order. encode_for_header() encodes records against a header that
already exists in a sheet, for appends.

RULES:
- A batch that yields no columns at all → SchemaError
- Empty grid (no header row) → GridError
- Blank header cells are ignored; all-blank header or duplicate headers
  → GridError
- Row order is preserved in both directions; nothing is deduplicated
- Decoding is all-or-nothing: the first failing row aborts the call
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, List, Tuple

from sheet_records.core.decoder import decode_row
from sheet_records.core.encoder import encode_row
from sheet_records.core.errors import GridError, SchemaError
from sheet_records.core.headers import map_headers, serialize
from sheet_records.core.schema import ColumnPath, RecordShape, validate_shape, walk_columns

logger = logging.getLogger(__name__)

Grid = List[List[str]]


def build_grid(records: Iterable[Mapping], shape: RecordShape) -> Grid:
    """Build a header row plus one data row per record."""
    records = list(records)
    paths = walk_columns(shape, records)
    header = [serialize(path) for path in paths]
    if not header:
        raise SchemaError(
            "Record batch produces no columns: every leaf of the shape sits "
            "inside a sequence and every sequence in the batch is empty"
        )
    rows = [encode_row(rec, paths, shape, row=index) for index, rec in enumerate(records)]
    logger.debug("Built grid: %d columns, %d data rows", len(header), len(rows))
    return [header] + rows


def split_grid(grid: Sequence[Sequence[str]]) -> Tuple[List[str], List[Sequence[str]]]:
    """Split a grid into its validated header row and its data rows."""
    if not grid:
        raise GridError("Grid is empty: expected a header row")
    header_row = [str(cell) for cell in grid[0]]
    if not any(header_row):
        raise GridError("Header row is blank")

    seen = set()
    for header in header_row:
        if not header:
            continue
        if header in seen:
            raise GridError(f"Duplicate header {header!r}")
        seen.add(header)
    return header_row, list(grid[1:])


def records_from_grid(grid: Sequence[Sequence[str]], shape: RecordShape) -> list[dict[str, Any]]:
    """Decode every data row of a grid into dict records, in row order."""
    validate_shape(shape)
    header_row, rows = split_grid(grid)
    header_map = map_headers(header_row, shape)
    records = [
        decode_row(cells, header_row, header_map, shape, row=index)
        for index, cells in enumerate(rows)
    ]
    logger.debug("Decoded %d records from %d columns", len(records), len(header_row))
    return records


def encode_for_header(
    records: Iterable[Mapping],
    header_row: Sequence[str],
    shape: RecordShape,
) -> Grid:
    """Encode records as data rows aligned to an existing header row.

    Columns the shape does not know stay empty. Raises GridError when a
    record has data for a column the header lacks, e.g. a longer sequence
    than the sheet was first written with.
    """
    records = list(records)
    split_grid([header_row])
    header_map = map_headers(header_row, shape)
    known = set(header_map.values())

    paths: List[ColumnPath] = walk_columns(shape, records)
    rows: Grid = []
    for index, rec in enumerate(records):
        encoded = dict(zip(paths, encode_row(rec, paths, shape, row=index)))
        for path, text in encoded.items():
            if text and path not in known:
                raise GridError(
                    f"Record {index} has data for column {serialize(path)!r}, "
                    "which the existing header lacks"
                )
        rows.append([
            encoded.get(header_map[header], "") if header in header_map else ""
            for header in header_row
        ])
    return rows
