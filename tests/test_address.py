"""Tests for page addresses and their text form."""

import pytest

from babelcodec.core.address import (
    Address,
    decode_base36,
    encode_base36,
)
from babelcodec.core.errors import AddressOutOfRange, ContainerParseError


class TestBase36:
    def test_encode_zero(self):
        assert encode_base36(0) == "0"

    def test_encode_small_numbers(self):
        assert encode_base36(9) == "9"
        assert encode_base36(10) == "A"
        assert encode_base36(35) == "Z"
        assert encode_base36(36) == "10"
        assert encode_base36(36 ** 3) == "1000"

    def test_encode_negative_raises(self):
        with pytest.raises(ValueError, match="negative"):
            encode_base36(-1)

    def test_decode(self):
        assert decode_base36("0") == 0
        assert decode_base36("Z") == 35
        assert decode_base36("10") == 36

    def test_huge_values_keep_precision(self):
        """Values far past 64 bits survive exactly."""
        n = 29 ** 3239 - 12345
        assert decode_base36(encode_base36(n)) == n

    def test_decode_rejects_lowercase(self):
        with pytest.raises(ValueError, match="Invalid base-36 character"):
            decode_base36("1a")

    def test_decode_rejects_leading_zero(self):
        with pytest.raises(ValueError, match="Leading zero"):
            decode_base36("01")

    def test_decode_rejects_empty(self):
        with pytest.raises(ValueError, match="Empty"):
            decode_base36("")


class TestAddressText:
    def test_zero_address(self, layout):
        assert Address(0, 0, 0, 0, 0).to_string(layout) == "0:0:0:00:000"

    def test_fields_are_zero_padded(self, layout):
        assert Address(71, 3, 4, 7, 9).to_string(layout) == "1Z:3:4:07:009"

    def test_str_uses_default_layout(self):
        assert str(Address(36, 1, 2, 31, 409)) == "10:1:2:31:409"

    def test_parse(self, layout):
        assert Address.from_string("1Z:3:4:07:009", layout) == Address(71, 3, 4, 7, 9)

    def test_parse_roundtrip(self, layout):
        a = Address(29 ** 100, 2, 1, 16, 205)
        assert Address.from_string(a.to_string(layout), layout) == a

    @pytest.mark.parametrize("text", [
        "",
        "0:0:0:00",
        "0:0:0:00:000:0",
        "a:0:0:00:000",
        "00:0:0:00:000",
        "0:0:0:0:000",
        "0:0:0:00:00",
        "0:00:0:00:000",
        "0:0:0:00:0a0",
        " 0:0:0:00:000",
        "0:0:0:00:000 ",
        "0:-1:0:00:000",
        "0:0:0:00:０００",
    ])
    def test_non_canonical_text_raises(self, text, layout):
        with pytest.raises(ContainerParseError):
            Address.from_string(text, layout)

    @pytest.mark.parametrize("text", [
        "0:4:0:00:000",
        "0:0:5:00:000",
        "0:0:0:32:000",
        "0:0:0:00:410",
    ])
    def test_out_of_range_raises(self, text, layout):
        with pytest.raises(AddressOutOfRange):
            Address.from_string(text, layout)


class TestAddressCheck:
    def test_in_range(self, layout):
        Address(0, 3, 4, 31, 409).check(layout)

    def test_negative_hexagon(self, layout):
        with pytest.raises(AddressOutOfRange, match="Hexagon"):
            Address(-1, 0, 0, 0, 0).check(layout)

    def test_level_ranges(self, layout):
        with pytest.raises(AddressOutOfRange, match="page must be 0-409, got 410"):
            Address(0, 0, 0, 0, 410).check(layout)
        with pytest.raises(AddressOutOfRange, match="wall must be 0-3, got -1"):
            Address(0, -1, 0, 0, 0).check(layout)

    def test_to_string_checks_range(self, layout):
        with pytest.raises(AddressOutOfRange):
            Address(0, 0, 0, 99, 0).to_string(layout)

    def test_tiny_layout_widths(self, tiny_layout):
        assert Address(3, 1, 1, 2, 4).to_string(tiny_layout) == "3:1:1:2:4"


class TestAddressRepr:
    def test_hexagon_shown_in_base36(self):
        assert repr(Address(36 ** 2 + 35, 1, 2, 3, 4)) == (
            "Address(hexagon=10Z (base 36), wall=1, shelf=2, volume=3, page=4)"
        )

    def test_largest_hexagon(self, layout):
        """Far past the decimal int-to-str limit."""
        text = repr(Address(layout.max_hexagon, 0, 0, 0, 0))
        assert encode_base36(layout.max_hexagon) in text

    def test_negative_hexagon(self):
        assert repr(Address(-36, 0, 0, 0, 0)).startswith("Address(hexagon=-10 ")
