"""Record access by column path, and the typed record interface.

WHY: The engine works on plain dict records so it never needs runtime
type introspection. Applications that prefer their own classes
implement RecordType once per class: describe the shape, convert to a
dict record, and build an instance back from one.

RULES:
- A missing key reads the same as an explicit None
- read_path returns MISSING when a container on the way is absent or a
  sequence is shorter than the index
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from sheet_records.core.schema import ColumnPath, RecordShape


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()
"""Sentinel: the path leads through an absent container."""


def read_path(record: Mapping, path: ColumnPath) -> Any:
    """Navigate a dict record along a column path.

    Returns:
        The leaf value (None when the key is missing or None), or MISSING
        when a container before the leaf is absent or too short.

    Raises:
        TypeError: a container has the wrong type (e.g. a string where a
                   sequence is expected).
    """
    value: Any = record
    for segment in path:
        if value is None:
            return MISSING
        if isinstance(segment, int):
            if not isinstance(value, (list, tuple)):
                raise TypeError(f"expected a sequence, got {type(value).__name__}")
            if segment >= len(value):
                return MISSING
            value = value[segment]
        else:
            if not isinstance(value, Mapping):
                raise TypeError(f"expected a record, got {type(value).__name__}")
            value = value.get(segment)
    return value


class RecordType(ABC):
    """Interface for application classes stored as sheet rows.

    To store a class in a sheet:
    1. Subclass RecordType
    2. Implement describe_shape(), to_record() and from_record()
    3. Pass the class as the shape to write_page() / read_all()
    """

    @classmethod
    @abstractmethod
    def describe_shape(cls) -> RecordShape:
        """The static shape of this record type."""

    @abstractmethod
    def to_record(self) -> dict[str, Any]:
        """Convert this instance into a dict record matching describe_shape()."""

    @classmethod
    @abstractmethod
    def from_record(cls, record: dict[str, Any]) -> RecordType:
        """Build an instance from a decoded dict record."""
