"""Shared test fixtures for the sheet_records test suite.

WHY: Most test modules need the same record shapes, sample records and a
grid store that does not touch the network. Centralizing them here keeps
every module on the same reference data.

HOW: MemoryGridStore implements BaseGridStore over a dict and records
every call, so tests can assert that each page operation issues exactly
one store request per direction. Fixtures provide a flat person shape,
a nested order shape and matching records.

RULES:
- No test talks to a real backend
- Fixtures return fresh objects per test
"""

from typing import Any, Dict, List, Tuple

import pytest

from sheet_records.api.base import BaseGridStore
from sheet_records.core.schema import (
    BOOL,
    FLOAT,
    INT,
    STR,
    optional,
    record,
    sequence,
)


class MemoryGridStore(BaseGridStore):
    """In-memory grid store keyed by (page_id, tab_name)."""

    def __init__(self) -> None:
        self.tabs: Dict[Tuple[str, str], List[List[str]]] = {}
        self.calls: List[str] = []

    def get_grid(self, page_id, tab_name):
        self.calls.append("get_grid")
        return [list(row) for row in self.tabs.get((page_id, tab_name), [])]

    def put_grid(self, page_id, tab_name, grid):
        self.calls.append("put_grid")
        self.tabs[(page_id, tab_name)] = [list(row) for row in grid]


@pytest.fixture
def store():
    return MemoryGridStore()


@pytest.fixture
def person_shape():
    """{name: str, age: optional int}"""
    return record(name=STR, age=optional(INT))


@pytest.fixture
def person_records():
    return [
        {"name": "Ann", "age": 30},
        {"name": "Bo", "age": None},
    ]


@pytest.fixture
def order_shape():
    """A nested shape exercising every variant."""
    return record(
        id=INT,
        customer=record(name=STR, vip=BOOL),
        shipping=optional(record(city=STR, zip=optional(STR))),
        tags=sequence(STR),
        lines=sequence(record(sku=STR, qty=INT, price=FLOAT)),
        note=optional(STR),
    )


@pytest.fixture
def order_records() -> List[Dict[str, Any]]:
    return [
        {
            "id": 1,
            "customer": {"name": "Ann", "vip": True},
            "shipping": {"city": "Oslo", "zip": "0150"},
            "tags": ["rush", "gift"],
            "lines": [
                {"sku": "A-1", "qty": 2, "price": 9.5},
                {"sku": "B-7", "qty": 1, "price": 120.0},
            ],
            "note": None,
        },
        {
            "id": 2,
            "customer": {"name": "Bo", "vip": False},
            "shipping": None,
            "tags": [],
            "lines": [{"sku": "C-3", "qty": 10, "price": 0.25}],
            "note": "leave at door",
        },
    ]
