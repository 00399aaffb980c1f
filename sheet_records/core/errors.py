"""Error taxonomy for the conversion engine.

WHY: Callers need to tell a bad record shape apart from a malformed
sheet, a missing value or unparsable cell text. Each failure mode gets
its own exception type carrying the structured details (path, row,
header, raw text) needed to locate the problem in the sheet.

RULES:
- Every engine error derives from SheetRecordsError
- Errors propagate to the caller; the engine never swallows them
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

PathSegment = Union[str, int]


def _format_path(path: Tuple[PathSegment, ...]) -> str:
    return ".".join(str(segment) for segment in path)


class SheetRecordsError(Exception):
    """Base class for all conversion errors."""


class SchemaError(SheetRecordsError):
    """Raised when a record shape uses an unsupported construct.

    Examples: a sequence nested inside a sequence, a map-typed field,
    duplicate field names.
    """


class HeaderError(SheetRecordsError):
    """Raised when a header string is ambiguous or malformed."""

    def __init__(self, header: str, reason: str) -> None:
        self.header = header
        self.reason = reason
        super().__init__(f"Invalid header {header!r}: {reason}")


class DecodeError(SheetRecordsError):
    """Raised when a row has no data for a required column."""

    def __init__(self, path: Tuple[PathSegment, ...], row: Optional[int], reason: str) -> None:
        self.path = path
        self.row = row
        self.reason = reason
        location = f"row {row}, " if row is not None else ""
        super().__init__(f"Cannot decode {location}column {_format_path(path)!r}: {reason}")


class CoercionError(SheetRecordsError):
    """Raised when a value cannot be converted between scalar and text.

    On read, ``text`` is the raw cell text. On write, it is the repr of
    the offending value.
    """

    def __init__(self, row: Optional[int], header: str, text: str, expected: str) -> None:
        self.row = row
        self.header = header
        self.text = text
        self.expected = expected
        location = f"row {row}, " if row is not None else ""
        super().__init__(
            f"Cannot coerce {location}column {header!r}: {text!r} is not a valid {expected}"
        )


class GridError(SheetRecordsError):
    """Raised when a grid has a missing or invalid header row."""
