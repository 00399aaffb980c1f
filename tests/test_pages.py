"""Tests for the page operations against an in-memory grid store.

WHY: write_page(), read_all() and append_records() are the public
boundary. They must issue one store request per direction, accept both
dict records and RecordType classes, and propagate every error.
"""

import pytest

from sheet_records.core.errors import CoercionError, GridError
from sheet_records.core.records import RecordType
from sheet_records.core.schema import INT, STR, optional, record, sequence
from sheet_records.pages import append_records, read_all, write_page


class Book(RecordType):
    """Example application class stored as sheet rows."""

    def __init__(self, title, year=None, authors=()):
        self.title = title
        self.year = year
        self.authors = list(authors)

    def __eq__(self, other):
        return isinstance(other, Book) and vars(self) == vars(other)

    @classmethod
    def describe_shape(cls):
        return record(title=STR, year=optional(INT), authors=sequence(STR))

    def to_record(self):
        return {"title": self.title, "year": self.year, "authors": self.authors}

    @classmethod
    def from_record(cls, rec):
        return cls(rec["title"], rec["year"], rec["authors"])


class TestWritePage:

    def test_single_put(self, store, person_shape, person_records):
        write_page(store, "doc", "People", person_records, person_shape)
        assert store.calls == ["put_grid"]
        assert store.tabs[("doc", "People")] == [["name", "age"], ["Ann", "30"], ["Bo", ""]]

    def test_replaces_existing_content(self, store, person_shape):
        store.tabs[("doc", "People")] = [["old"], ["x"], ["y"], ["z"]]
        write_page(store, "doc", "People", [{"name": "Ann", "age": 1}], person_shape)
        assert store.tabs[("doc", "People")] == [["name", "age"], ["Ann", "1"]]

    def test_error_leaves_store_untouched(self, store, person_shape):
        with pytest.raises(CoercionError):
            write_page(store, "doc", "People", [{"name": "Ann", "age": "x"}], person_shape)
        assert store.calls == []


class TestReadAll:

    def test_single_get(self, store, person_shape, person_records):
        store.tabs[("doc", "People")] = [["name", "age"], ["Ann", "30"], ["Bo"]]
        assert read_all(store, "doc", "People", person_shape) == person_records
        assert store.calls == ["get_grid"]

    def test_missing_tab_is_grid_error(self, store, person_shape):
        with pytest.raises(GridError):
            read_all(store, "doc", "Nowhere", person_shape)

    def test_round_trip_through_store(self, store, order_shape, order_records):
        write_page(store, "doc", "Orders", order_records, order_shape)
        assert read_all(store, "doc", "Orders", order_shape) == order_records


class TestRecordTypes:

    def test_round_trip_instances(self, store):
        books = [Book("Dune", 1965, ["Herbert"]), Book("Anon")]
        write_page(store, "doc", "Books", books, Book)
        assert store.tabs[("doc", "Books")][0] == ["title", "year", "authors.0"]
        assert read_all(store, "doc", "Books", Book) == books


class TestAppendRecords:

    def test_appends_below_existing_rows(self, store, person_shape):
        write_page(store, "doc", "People", [{"name": "Ann", "age": 30}], person_shape)
        append_records(store, "doc", "People", [{"name": "Bo", "age": None}], person_shape)
        assert store.tabs[("doc", "People")] == [["name", "age"], ["Ann", "30"], ["Bo", ""]]

    def test_empty_tab_writes_header(self, store, person_shape):
        append_records(store, "doc", "People", [{"name": "Cy", "age": 2}], person_shape)
        assert store.tabs[("doc", "People")] == [["name", "age"], ["Cy", "2"]]

    def test_longer_sequence_rejected(self, store):
        shape = record(tags=sequence(STR))
        write_page(store, "doc", "T", [{"tags": ["a"]}], shape)
        with pytest.raises(GridError):
            append_records(store, "doc", "T", [{"tags": ["a", "b"]}], shape)
        assert store.tabs[("doc", "T")] == [["tags.0"], ["a"]]

    def test_record_types(self, store):
        write_page(store, "doc", "Books", [Book("Dune", 1965, ["Herbert"])], Book)
        append_records(store, "doc", "Books", [Book("Emma", None, ["Austen"])], Book)
        assert read_all(store, "doc", "Books", Book) == [
            Book("Dune", 1965, ["Herbert"]),
            Book("Emma", None, ["Austen"]),
        ]
