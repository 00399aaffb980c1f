"""Record shapes and the schema walker.

WHY: A grid has one flat header row, but records nest: optional fields,
sub-records and sequences. Before any row can be written, every scalar
leaf of the record shape needs its own column, and sequences need as many
index columns as the longest sequence in the batch.

HOW: Shapes are a small tagged variant of frozen dataclasses:
  ScalarShape   - one text cell (kind: str, int, float, bool)
  OptionalShape - the inner shape may be absent (None)
  SequenceShape - a list of scalars or sub-records
  RecordShape   - ordered named fields, each with its own shape
walk_columns() traverses a shape depth-first in field-declaration order
and emits one column path per scalar leaf, sizing sequences from the
whole batch in the same pass.

RULES:
- Column paths are tuples: str segments are field names, int segments
  are sequence indices
- Optional fields always produce columns, present or not
- Sequence width is the maximum length across ALL records in the batch
- Unsupported shapes raise SchemaError: nested sequences, optional of
  optional, optional of sequence, maps (anything not one of the four
  variants), duplicate or empty field names, names containing the header
  delimiter
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, List, Tuple, Union

from sheet_records.core.errors import CoercionError, SchemaError

HEADER_DELIMITER = "."
"""Joins the segments of a column path into a header string."""

SCALAR_KINDS = ("str", "int", "float", "bool")

ColumnPath = Tuple[Union[str, int], ...]


@dataclass(frozen=True)
class ScalarShape:
    """A single scalar leaf stored in one cell."""

    kind: str

    def __post_init__(self) -> None:
        if self.kind not in SCALAR_KINDS:
            raise SchemaError(
                f"Unknown scalar kind {self.kind!r}; expected one of {', '.join(SCALAR_KINDS)}"
            )


@dataclass(frozen=True)
class OptionalShape:
    """A value that may be absent (None)."""

    inner: Shape


@dataclass(frozen=True)
class SequenceShape:
    """A list of scalars or sub-records, one index column group per element."""

    item: Shape


@dataclass(frozen=True)
class Field:
    name: str
    shape: Shape


@dataclass(frozen=True)
class RecordShape:
    """An ordered set of named fields."""

    fields: Tuple[Field, ...]

    def field(self, name: str) -> Field | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None


Shape = Union[ScalarShape, OptionalShape, SequenceShape, RecordShape]

STR = ScalarShape("str")
INT = ScalarShape("int")
FLOAT = ScalarShape("float")
BOOL = ScalarShape("bool")


def optional(inner: Shape) -> OptionalShape:
    return OptionalShape(inner)


def sequence(item: Shape) -> SequenceShape:
    return SequenceShape(item)


def record(*pairs: Tuple[str, Shape], **named: Shape) -> RecordShape:
    """Build a RecordShape from (name, shape) pairs and/or keyword fields.

    Positional pairs come first, then keyword fields, each in the order
    given. Use pairs for names that are not valid Python identifiers.
    """
    fields = [Field(name, shape) for name, shape in pairs]
    fields.extend(Field(name, shape) for name, shape in named.items())
    return RecordShape(tuple(fields))


def unwrap_optional(shape: Shape) -> Shape:
    """Return the inner shape of an OptionalShape, or the shape itself."""
    if isinstance(shape, OptionalShape):
        return shape.inner
    return shape


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_shape(shape: RecordShape) -> None:
    """Check that a top-level record shape only uses supported constructs.

    Raises:
        SchemaError: naming the offending field and the construct.
    """
    if not isinstance(shape, RecordShape):
        raise SchemaError(
            f"Top-level shape must be a RecordShape, got {type(shape).__name__}"
        )
    _validate(shape, "<record>", inside_sequence=False)


def _validate(shape: object, where: str, inside_sequence: bool) -> None:
    if isinstance(shape, ScalarShape):
        return
    if isinstance(shape, OptionalShape):
        if isinstance(shape.inner, OptionalShape):
            raise SchemaError(f"{where}: optional of optional is not supported")
        if isinstance(shape.inner, SequenceShape):
            raise SchemaError(
                f"{where}: optional sequences are not supported; "
                "an empty sequence already expresses absence"
            )
        _validate(shape.inner, where, inside_sequence)
        return
    if isinstance(shape, SequenceShape):
        if inside_sequence:
            raise SchemaError(f"{where}: nested sequences are not supported")
        _validate(shape.item, where, inside_sequence=True)
        return
    if isinstance(shape, RecordShape):
        seen = set()
        for field in shape.fields:
            if not isinstance(field.name, str) or not field.name:
                raise SchemaError(f"{where}: field names must be non-empty strings")
            if HEADER_DELIMITER in field.name:
                raise SchemaError(
                    f"{where}: field name {field.name!r} contains the header "
                    f"delimiter {HEADER_DELIMITER!r}"
                )
            if field.name in seen:
                raise SchemaError(f"{where}: duplicate field name {field.name!r}")
            seen.add(field.name)
            _validate(field.shape, field.name, inside_sequence)
        return
    if isinstance(shape, Mapping):
        raise SchemaError(f"{where}: map-typed fields are not supported")
    raise SchemaError(f"{where}: unsupported shape {shape!r}")


def shape_at(shape: RecordShape, path: ColumnPath) -> Shape:
    """Return the shape node a column path points at.

    Optional wrappers along the way are looked through; the node itself
    is returned as declared, so a leaf may come back as an OptionalShape.
    """
    node: Shape = shape
    for segment in path:
        node = unwrap_optional(node)
        if isinstance(segment, int):
            if not isinstance(node, SequenceShape):
                raise SchemaError(f"Index segment {segment} does not follow a sequence")
            node = node.item
        else:
            field = node.field(segment) if isinstance(node, RecordShape) else None
            if field is None:
                raise SchemaError(f"Unknown field {segment!r} in column path {path!r}")
            node = field.shape
    return node


# ---------------------------------------------------------------------------
# Schema walker
# ---------------------------------------------------------------------------


def walk_columns(shape: RecordShape, records: Iterable[Mapping]) -> list[ColumnPath]:
    """Derive the ordered column paths for a batch of records.

    Args:
        shape: The record shape every record in the batch conforms to.
        records: The whole write batch. Sequence widths are the union
                 over all of them, so one header serves every row.

    Returns:
        Column paths in depth-first, field-declaration order.

    Raises:
        CoercionError: a record holds a non-record where the shape
                       declares a record, a non-list where it declares a
                       sequence, or None for a required sub-record.
    """
    validate_shape(shape)
    paths: list[ColumnPath] = []
    _walk(shape, list(enumerate(records)), (), paths)
    return paths


def _label(prefix: ColumnPath) -> str:
    return HEADER_DELIMITER.join(str(segment) for segment in prefix) or "<record>"


def _walk(
    shape: Shape,
    values: List[Tuple[int, Any]],
    prefix: ColumnPath,
    out: list[ColumnPath],
) -> None:
    """Collect leaf paths; ``values`` pairs each observed value with its row."""
    if isinstance(shape, ScalarShape):
        out.append(prefix)
    elif isinstance(shape, OptionalShape):
        present = [(row, v) for row, v in values if v is not None]
        _walk(shape.inner, present, prefix, out)
    elif isinstance(shape, RecordShape):
        for row, value in values:
            if value is None:
                raise CoercionError(row, _label(prefix), "None", "required record")
            if not isinstance(value, Mapping):
                raise CoercionError(row, _label(prefix), repr(value), "record")
        for field in shape.fields:
            children = [(row, value.get(field.name)) for row, value in values]
            _walk(field.shape, children, prefix + (field.name,), out)
    else:
        # A missing sequence counts as empty.
        lists = [(row, v) for row, v in values if v is not None]
        for row, value in lists:
            if not isinstance(value, (list, tuple)):
                raise CoercionError(row, _label(prefix), repr(value), "sequence")
        width = max((len(v) for _row, v in lists), default=0)
        for index in range(width):
            items = [(row, v[index]) for row, v in lists if len(v) > index]
            _walk(shape.item, items, prefix + (index,), out)
