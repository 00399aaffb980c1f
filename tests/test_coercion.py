"""Unit tests for scalar <-> text coercion.

WHY: Coercion is shared by both directions. A float written with a
locale comma, or a boolean parsed case-insensitively on one side only,
breaks round trips silently.

HOW: Tests check the canonical write forms, strict read parsing, and
that write coercion rejects values of the wrong Python type.
"""

import math

import pytest

from sheet_records.core.coercion import from_text, to_text


class TestToText:

    @pytest.mark.parametrize("value, text", [
        (0, "0"),
        (30, "30"),
        (-7, "-7"),
        (10 ** 20, "100000000000000000000"),
    ])
    def test_int(self, value, text):
        assert to_text("int", value) == text

    @pytest.mark.parametrize("value, text", [
        (0.5, "0.5"),
        (120.0, "120.0"),
        (-0.25, "-0.25"),
        (1e16, "1e+16"),
        (float("inf"), "inf"),
    ])
    def test_float(self, value, text):
        assert to_text("float", value) == text

    def test_float_accepts_int(self):
        assert to_text("float", 3) == "3.0"

    def test_bool_literals(self):
        assert to_text("bool", True) == "true"
        assert to_text("bool", False) == "false"

    def test_str_passes_through(self):
        assert to_text("str", ' a, "quoted" value ') == ' a, "quoted" value '

    @pytest.mark.parametrize("kind, value", [
        ("int", "30"),
        ("int", True),
        ("int", 1.5),
        ("float", "1.5"),
        ("float", False),
        ("bool", 1),
        ("str", 5),
    ])
    def test_wrong_type_raises(self, kind, value):
        with pytest.raises(TypeError):
            to_text(kind, value)


class TestFromText:

    def test_int(self):
        assert from_text("int", "-42") == -42

    def test_float_forms(self):
        assert from_text("float", "0.5") == 0.5
        assert from_text("float", "1e+16") == 1e16
        assert from_text("float", "30") == 30.0
        assert math.isnan(from_text("float", "nan"))

    def test_bool_is_case_sensitive(self):
        assert from_text("bool", "true") is True
        assert from_text("bool", "false") is False
        with pytest.raises(ValueError):
            from_text("bool", "TRUE")

    @pytest.mark.parametrize("kind, text", [
        ("int", "3.0"),
        ("int", " 3"),
        ("int", "1_000"),
        ("int", "+3"),
        ("float", "1,5"),
        ("float", "abc"),
        ("float", "infinity"),
        ("bool", "yes"),
    ])
    def test_malformed_text_raises(self, kind, text):
        with pytest.raises(ValueError):
            from_text(kind, text)

    @pytest.mark.parametrize("kind, value", [
        ("int", 123456789),
        ("float", 0.1),
        ("float", -2.5e-10),
        ("bool", False),
        ("str", "0150"),
    ])
    def test_write_form_reads_back(self, kind, value):
        assert from_text(kind, to_text(kind, value)) == value
