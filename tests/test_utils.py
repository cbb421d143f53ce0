"""Tests for shared utility functions."""

from carepair.utils import as_text, strip_non_digits


class TestStripNonDigits:
    def test_strips_spaces(self):
        assert strip_non_digits("0412 345 678") == "0412345678"

    def test_strips_dashes(self):
        assert strip_non_digits("555-0123-4") == "55501234"

    def test_strips_parentheses_and_plus(self):
        assert strip_non_digits("+61 (412) 345-678") == "61412345678"

    def test_letters_removed(self):
        assert strip_non_digits("call 555 ext 12") == "55512"

    def test_empty(self):
        assert strip_non_digits("") == ""

    def test_non_ascii_digits_removed(self):
        assert strip_non_digits("\u0665\u0665\u0665-0123") == "0123"


class TestAsText:
    def test_none_is_empty(self):
        assert as_text(None) == ""

    def test_int_is_stringified(self):
        assert as_text(2018) == "2018"

    def test_string_unchanged(self):
        assert as_text("  Civic ") == "  Civic "
