"""Record shapes described as JSON documents.

WHY: The command-line tool has no Python classes to read shapes from.
A small JSON document describes the fields instead, and is checked
against a JSON Schema before it is turned into a RecordShape, so typos
surface as clear errors rather than odd columns.

HOW: SHAPE_DOCUMENT_SCHEMA describes the document format. load_shape()
reads and validates a file; shape_from_document() validates a parsed
document with jsonschema and converts it recursively.

Document format::

    {"fields": [
        {"name": "name", "type": "str"},
        {"name": "age", "type": "int", "optional": true},
        {"name": "tags", "type": "sequence", "items": {"type": "str"}},
        {"name": "address", "type": "record", "optional": true,
         "fields": [{"name": "city", "type": "str"}]}
    ]}

RULES:
- "type" is one of str, int, float, bool, record, sequence
- "record" needs "fields"; "sequence" needs "items" (a type without name)
- Anything the document schema rejects raises SchemaError
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema

from sheet_records.core.errors import SchemaError
from sheet_records.core.schema import (
    SCALAR_KINDS,
    Field,
    OptionalShape,
    RecordShape,
    ScalarShape,
    SequenceShape,
    Shape,
    validate_shape,
)

SHAPE_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "definitions": {
        "type": {
            "type": "object",
            "properties": {
                "type": {"enum": list(SCALAR_KINDS) + ["record", "sequence"]},
                "optional": {"type": "boolean"},
                "fields": {"type": "array", "items": {"$ref": "#/definitions/field"}},
                "items": {"$ref": "#/definitions/type"},
            },
            "required": ["type"],
            "allOf": [
                {
                    "if": {"properties": {"type": {"const": "record"}}},
                    "then": {"required": ["fields"]},
                },
                {
                    "if": {"properties": {"type": {"const": "sequence"}}},
                    "then": {"required": ["items"]},
                },
            ],
        },
        "field": {
            "allOf": [
                {"$ref": "#/definitions/type"},
                {
                    "type": "object",
                    "properties": {"name": {"type": "string", "minLength": 1}},
                    "required": ["name"],
                },
            ],
        },
    },
    "type": "object",
    "properties": {
        "fields": {"type": "array", "items": {"$ref": "#/definitions/field"}},
    },
    "required": ["fields"],
}


def _convert(node: Dict[str, Any]) -> Shape:
    kind = node["type"]
    if kind == "record":
        shape: Shape = RecordShape(
            tuple(Field(child["name"], _convert(child)) for child in node["fields"])
        )
    elif kind == "sequence":
        shape = SequenceShape(_convert(node["items"]))
    else:
        shape = ScalarShape(kind)
    if node.get("optional", False):
        shape = OptionalShape(shape)
    return shape


def shape_from_document(document: Any) -> RecordShape:
    """Validate a parsed shape document and convert it to a RecordShape."""
    try:
        jsonschema.validate(document, SHAPE_DOCUMENT_SCHEMA)
    except jsonschema.ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SchemaError(f"Invalid shape document at {location}: {exc.message}") from exc

    shape = _convert({"type": "record", "fields": document["fields"]})
    validate_shape(shape)
    return shape


def load_shape(path: str | Path) -> RecordShape:
    """Read a JSON shape document from disk."""
    with open(path, encoding="utf-8") as f:
        try:
            document = json.load(f)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"Shape file {path} is not valid JSON: {exc}") from exc
    return shape_from_document(document)
