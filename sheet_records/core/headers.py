"""Canonical header strings for column paths.

WHY: The header row is the only schema information a grid carries. Each
column path must map to exactly one header string and back, so a grid
written by one call can be decoded by the next.

HOW: serialize() joins path segments with "." and renders sequence
indices as plain numerals ("tags.2", "items.0.sku"). parse() splits a
header and walks it against the target record shape: a numeric segment
is an index only where the shape declares a sequence.

RULES:
- parse(serialize(path), shape) == path for every valid path of shape
- Numeric field names are ambiguous and raise HeaderError
- Indices are canonical numerals: "0", "1", ... never "01"
- Headers naming fields unknown to the shape, continuing past a scalar
  leaf, or stopping at a record or sequence node map to None and are
  ignored by the decoder, so a tab keeps reading after a field changes
  from a scalar to a record or sequence
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from sheet_records.core.errors import HeaderError
from sheet_records.core.schema import (
    HEADER_DELIMITER,
    ColumnPath,
    RecordShape,
    ScalarShape,
    SequenceShape,
    unwrap_optional,
)

logger = logging.getLogger(__name__)

_NUMERAL_RE = re.compile(r"[0-9]+")
_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


def serialize(path: ColumnPath) -> str:
    """Render a column path as its header string."""
    text = HEADER_DELIMITER.join(str(segment) for segment in path)
    if not path:
        raise HeaderError(text, "empty column path")
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            if segment < 0:
                raise HeaderError(text, f"negative index {segment}")
        elif _NUMERAL_RE.fullmatch(segment):
            raise HeaderError(
                text, f"field name {segment!r} is numeric and would read back as an index"
            )
    return text


def parse(header: str, shape: RecordShape) -> ColumnPath | None:
    """Parse a header string into a column path of the given shape.

    Returns:
        The column path, or None when the header names a column the shape
        does not have as a scalar leaf.

    Raises:
        HeaderError: the header is malformed or ambiguous.
    """
    segments = header.split(HEADER_DELIMITER)
    if any(not segment for segment in segments):
        raise HeaderError(header, "empty segment")

    node = shape
    path: list = []
    for segment in segments:
        node = unwrap_optional(node)
        if isinstance(node, SequenceShape):
            if not _INDEX_RE.fullmatch(segment):
                raise HeaderError(header, f"{segment!r} is not a sequence index")
            path.append(int(segment))
            node = node.item
        elif isinstance(node, RecordShape):
            field = node.field(segment)
            if field is None:
                return None
            if _NUMERAL_RE.fullmatch(segment):
                raise HeaderError(header, f"field name {segment!r} is ambiguous with an index")
            path.append(segment)
            node = field.shape
        else:
            # Continues past a scalar leaf; the column belongs to another schema.
            return None

    if not isinstance(unwrap_optional(node), ScalarShape):
        # Names a record or sequence node, not a leaf column.
        return None
    return tuple(path)


def map_headers(header_row: Sequence[str], shape: RecordShape) -> dict[str, ColumnPath]:
    """Build the header -> column path map for a grid's header row.

    Blank headers and headers unknown to the shape are left out of the
    map; the decoder ignores their columns.
    """
    mapping: dict[str, ColumnPath] = {}
    for header in header_row:
        if not header:
            continue
        path = parse(header, shape)
        if path is None:
            logger.debug("Ignoring column %r: not part of the record shape", header)
            continue
        mapping[header] = path
    return mapping
