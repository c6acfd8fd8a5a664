"""Tests for the alphabet and library layout configuration values."""

import pytest

from babelcodec.core.alphabet import (
    BABEL_SYMBOLS,
    DEFAULT_ALPHABET,
    Alphabet,
)
from babelcodec.core.layout import DEFAULT_LAYOUT, LibraryLayout


class TestAlphabet:
    """Test the default alphabet and its validation."""

    def test_default_has_29_symbols(self):
        """Letters, comma, space and period."""
        assert DEFAULT_ALPHABET.radix == 29
        assert BABEL_SYMBOLS == "abcdefghijklmnopqrstuvwxyz, ."

    def test_digit_values_follow_order(self):
        assert DEFAULT_ALPHABET.index("a") == 0
        assert DEFAULT_ALPHABET.index("z") == 25
        assert DEFAULT_ALPHABET.index(",") == 26
        assert DEFAULT_ALPHABET.index(" ") == 27
        assert DEFAULT_ALPHABET.index(".") == 28
        assert DEFAULT_ALPHABET.symbol(28) == "."

    def test_zero_symbol(self):
        assert DEFAULT_ALPHABET.zero_symbol == "a"

    def test_pad_symbol_is_not_data(self):
        """The sentinel must never be usable for byte data."""
        assert DEFAULT_ALPHABET.pad_symbol == "."
        assert not DEFAULT_ALPHABET.is_data_symbol(".")
        assert not DEFAULT_ALPHABET.is_data_symbol(",")
        assert not DEFAULT_ALPHABET.is_data_symbol(" ")
        assert DEFAULT_ALPHABET.is_data_symbol("z")

    def test_membership(self):
        assert "q" in DEFAULT_ALPHABET
        assert "Q" not in DEFAULT_ALPHABET
        assert "!" not in DEFAULT_ALPHABET

    def test_symbol_out_of_range_raises(self):
        with pytest.raises(ValueError, match="Digit must be 0-28"):
            DEFAULT_ALPHABET.symbol(29)

    def test_duplicate_symbols_raise(self):
        with pytest.raises(ValueError, match="unique"):
            Alphabet(symbols="abca.", pad_symbol=".", data_radix=2)

    def test_pad_symbol_must_be_member(self):
        with pytest.raises(ValueError, match="not in the alphabet"):
            Alphabet(symbols="abc", pad_symbol=".", data_radix=2)

    def test_data_radix_must_exclude_pad(self):
        """Data symbols must all come before the pad symbol."""
        with pytest.raises(ValueError, match="data_radix"):
            Alphabet(symbols="ab.c", pad_symbol=".", data_radix=3)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_ALPHABET.data_radix = 10

    def test_equal_alphabets_hash_alike(self):
        assert Alphabet() == DEFAULT_ALPHABET
        assert hash(Alphabet()) == hash(DEFAULT_ALPHABET)


class TestLibraryLayout:
    """Test the format-version-1 layout constants."""

    def test_page_length(self):
        assert DEFAULT_LAYOUT.page_length == 3239

    def test_levels_least_significant_first(self):
        assert DEFAULT_LAYOUT.levels == (
            ("page", 410), ("volume", 32), ("shelf", 5), ("wall", 4),
        )

    def test_location_count(self):
        assert DEFAULT_LAYOUT.location_count == 4 * 5 * 32 * 410 == 262400

    def test_page_space(self):
        assert DEFAULT_LAYOUT.page_space == 29 ** 3239

    def test_max_hexagon(self):
        assert DEFAULT_LAYOUT.max_hexagon == (29 ** 3239 - 1) // 262400

    def test_field_widths(self):
        assert DEFAULT_LAYOUT.field_width("wall") == 1
        assert DEFAULT_LAYOUT.field_width("shelf") == 1
        assert DEFAULT_LAYOUT.field_width("volume") == 2
        assert DEFAULT_LAYOUT.field_width("page") == 3

    def test_invalid_page_length_raises(self):
        with pytest.raises(ValueError, match="Page length"):
            LibraryLayout(page_length=0)

    def test_invalid_level_range_raises(self):
        with pytest.raises(ValueError, match="'volume'"):
            LibraryLayout(volumes=0)

    def test_tiny_layout(self, tiny_layout):
        assert tiny_layout.location_count == 60
        assert tiny_layout.page_space == 216
        assert tiny_layout.max_hexagon == 3
