"""Sheet Records: schema-driven conversion between records and spreadsheet grids.

WHY: Spreadsheet backends exchange plain two-dimensional grids of text
cells. Application code wants typed, nested records. This package maps
one onto the other with a canonical column-naming scheme, so a batch of
records can be written to a tab and read back losslessly.

HOW: Three-stage pipeline: describe (record shape), convert (core
engine: walker, headers, encoder, decoder, grid assembler), exchange
(grid store collaborator). Each stage is independently testable.

RULES:
- The engine only ever sees an abstract grid store (get_grid / put_grid)
- Column paths are derived fresh per call; nothing is cached between calls
- Every conversion error is a SheetRecordsError subclass and propagates
"""

from sheet_records.core.errors import (
    CoercionError,
    DecodeError,
    GridError,
    HeaderError,
    SchemaError,
    SheetRecordsError,
)
from sheet_records.core.schema import (
    BOOL,
    FLOAT,
    INT,
    STR,
    Field,
    OptionalShape,
    RecordShape,
    ScalarShape,
    SequenceShape,
    optional,
    record,
    sequence,
)
from sheet_records.pages import append_records, read_all, write_page

__version__ = "0.1.0"

__all__ = [
    "BOOL",
    "FLOAT",
    "INT",
    "STR",
    "CoercionError",
    "DecodeError",
    "Field",
    "GridError",
    "HeaderError",
    "OptionalShape",
    "RecordShape",
    "ScalarShape",
    "SchemaError",
    "SequenceShape",
    "SheetRecordsError",
    "append_records",
    "optional",
    "read_all",
    "record",
    "sequence",
    "write_page",
]
