"""Page operations: the boundary between records and a grid store.

WHY: Callers think in "write these records to that tab" and "read that
tab as records". These functions wire the core engine to a grid store
with exactly one store call per direction.

HOW: write_page() builds the grid and hands it to put_grid().
read_all() fetches the grid and decodes it. append_records() reads the
existing header, encodes the new records against it and appends them.
Each accepts either a RecordShape (dict records) or a RecordType
subclass (instances converted through to_record / from_record).

RULES:
- One get_grid or put_grid per call; append adds one append_rows
- All errors propagate; a failed read returns nothing at all
- write_page replaces the tab's whole content
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Union

from sheet_records.api.base import BaseGridStore
from sheet_records.core.grid import build_grid, encode_for_header, records_from_grid, split_grid
from sheet_records.core.records import RecordType
from sheet_records.core.schema import RecordShape

logger = logging.getLogger(__name__)

ShapeSource = Union[RecordShape, "type[RecordType]"]


def _resolve_shape(shape: ShapeSource) -> RecordShape:
    if isinstance(shape, type) and issubclass(shape, RecordType):
        return shape.describe_shape()
    return shape


def _as_dicts(records: Iterable[Any]) -> list:
    return [rec.to_record() if isinstance(rec, RecordType) else rec for rec in records]


def write_page(
    store: BaseGridStore,
    page_id: str,
    tab_name: str,
    records: Iterable[Any],
    shape: ShapeSource,
) -> None:
    """Replace a tab's content with a header row and one row per record.

    Args:
        store: The grid store to write through.
        page_id: Spreadsheet/document identifier understood by the store.
        tab_name: Name of the tab to replace.
        records: Dict records or RecordType instances, in row order.
        shape: RecordShape of the records, or their RecordType class.
    """
    grid = build_grid(_as_dicts(records), _resolve_shape(shape))
    store.put_grid(page_id, tab_name, grid)
    logger.info("Wrote %d records to %s/%s", len(grid) - 1, page_id, tab_name)


def read_all(store: BaseGridStore, page_id: str, tab_name: str, shape: ShapeSource) -> list:
    """Read every data row of a tab as records, in row order.

    Returns:
        Dict records, or RecordType instances when ``shape`` is a
        RecordType subclass.
    """
    grid = store.get_grid(page_id, tab_name)
    records = records_from_grid(grid, _resolve_shape(shape))
    logger.info("Read %d records from %s/%s", len(records), page_id, tab_name)
    if isinstance(shape, type) and issubclass(shape, RecordType):
        return [shape.from_record(rec) for rec in records]
    return records


def append_records(
    store: BaseGridStore,
    page_id: str,
    tab_name: str,
    records: Iterable[Any],
    shape: ShapeSource,
) -> None:
    """Append records below a tab's existing rows.

    The new rows follow the column order of the header already in the
    tab. A tab without content is written with write_page() instead.

    Raises:
        GridError: a record has data for a column the existing header
                   lacks (e.g. a longer sequence than first written).
    """
    records = _as_dicts(records)
    resolved = _resolve_shape(shape)
    grid = store.get_grid(page_id, tab_name)
    if not grid or not any(grid[0]):
        write_page(store, page_id, tab_name, records, resolved)
        return

    header_row, _rows = split_grid(grid)
    rows = encode_for_header(records, header_row, resolved)
    store.append_rows(page_id, tab_name, rows)
    logger.info("Appended %d records to %s/%s", len(rows), page_id, tab_name)
