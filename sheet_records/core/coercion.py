"""Scalar <-> text conversion shared by the row encoder and decoder.

WHY: Every cell is text. Numbers and booleans need one canonical,
locale-independent text form so that what is written reads back as the
identical value.

HOW: to_text() is total over well-typed values and raises TypeError for
values of the wrong Python type. from_text() validates the text against a
strict pattern before converting and raises ValueError on malformed input.
Callers wrap both into CoercionError with row and header context.

RULES:
- int:   str(value): no leading zeros, no sign for positives
- float: repr(value): shortest round-trip form, "." separator,
         "inf" / "-inf" / "nan" for non-finite values
- bool:  "true" / "false", parsed case-sensitively
- str:   passed through unchanged, no quoting or escaping
"""

from __future__ import annotations

import re
from typing import Any

TRUE_LITERAL = "true"
FALSE_LITERAL = "false"

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|[+-]?inf|nan"
)


def to_text(kind: str, value: Any) -> str:
    """Render a scalar value as cell text."""
    if kind == "str":
        if not isinstance(value, str):
            raise TypeError(f"expected str, got {type(value).__name__}")
        return value
    if kind == "bool":
        if not isinstance(value, bool):
            raise TypeError(f"expected bool, got {type(value).__name__}")
        return TRUE_LITERAL if value else FALSE_LITERAL
    # bool is an int subclass; never let True/False pass as a number
    if isinstance(value, bool):
        raise TypeError(f"expected {kind}, got bool")
    if kind == "int":
        if not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        return str(value)
    if kind == "float":
        if not isinstance(value, (int, float)):
            raise TypeError(f"expected float, got {type(value).__name__}")
        return repr(float(value))
    raise TypeError(f"unknown scalar kind {kind!r}")


def from_text(kind: str, text: str) -> Any:
    """Parse cell text into a scalar value of the given kind."""
    if kind == "str":
        return text
    if kind == "bool":
        if text == TRUE_LITERAL:
            return True
        if text == FALSE_LITERAL:
            return False
        raise ValueError(f"expected {TRUE_LITERAL!r} or {FALSE_LITERAL!r}")
    if kind == "int":
        if not _INT_RE.fullmatch(text):
            raise ValueError("expected a decimal integer")
        return int(text)
    if kind == "float":
        if not _FLOAT_RE.fullmatch(text):
            raise ValueError("expected a decimal number")
        return float(text)
    raise ValueError(f"unknown scalar kind {kind!r}")
