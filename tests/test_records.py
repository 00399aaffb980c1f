"""Unit tests for record navigation by column path."""

import pytest

from sheet_records.core.records import MISSING, read_path


class TestReadPath:

    def test_leaf_value(self):
        assert read_path({"a": {"b": 3}}, ("a", "b")) == 3

    def test_missing_key_reads_as_none(self):
        assert read_path({"a": {}}, ("a", "b")) is None

    def test_absent_container_is_missing(self):
        assert read_path({"a": None}, ("a", "b")) is MISSING

    def test_index_beyond_length_is_missing(self):
        assert read_path({"tags": ["x"]}, ("tags", 1)) is MISSING

    def test_tuple_sequences(self):
        assert read_path({"tags": ("x", "y")}, ("tags", 1)) == "y"

    def test_wrong_container_type(self):
        with pytest.raises(TypeError, match="expected a record"):
            read_path({"a": 5}, ("a", "b"))
