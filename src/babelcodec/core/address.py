"""Page addresses and their canonical text form.

An address names one page of the library:

    HEXAGON:WALL:SHELF:VOLUME:PAGE      e.g.  3F9K...Q2:3:0:17:204

HEXAGON is base-36 (0-9, A-Z) and carries the high-order part of the page
number; the other four levels are bounded decimals, zero-padded to the width
of their largest value. Every address has exactly one spelling: lowercase
letters, leading zeros in HEXAGON, wrong field widths and stray whitespace
are all rejected.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import AddressOutOfRange, ContainerParseError
from .layout import DEFAULT_LAYOUT, LibraryLayout

BASE36_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE36_DECODE = {c: i for i, c in enumerate(BASE36_CHARS)}
SEPARATOR = ":"


def encode_base36(value: int) -> str:
    """Encode a non-negative integer of any size as base-36."""
    if value < 0:
        raise ValueError("Cannot encode negative values")
    if value == 0:
        return BASE36_CHARS[0]

    chars = []
    while value:
        value, d = divmod(value, 36)
        chars.append(BASE36_CHARS[d])
    return "".join(reversed(chars))


def decode_base36(encoded: str) -> int:
    """Decode a canonical base-36 string (uppercase, no leading zeros)."""
    if not encoded:
        raise ValueError("Empty base-36 string")
    if len(encoded) > 1 and encoded[0] == "0":
        raise ValueError(f"Leading zero in base-36 value {encoded[:16]!r}")
    result = 0
    for char in encoded:
        d = BASE36_DECODE.get(char)
        if d is None:
            raise ValueError(f"Invalid base-36 character: {char!r}")
        result = result * 36 + d
    return result


@dataclass(frozen=True, repr=False)
class Address:
    """Location of a single page.

    Real hexagons run to thousands of decimal digits, past the interpreter's
    int-to-str limit, so they are only ever shown in base 36.
    """
    hexagon: int
    wall: int
    shelf: int
    volume: int
    page: int

    def check(self, layout: LibraryLayout = DEFAULT_LAYOUT) -> None:
        """Raise AddressOutOfRange if any bounded level is outside its range."""
        if self.hexagon < 0:
            raise AddressOutOfRange("Hexagon must be non-negative")
        for name, size in layout.levels:
            value = getattr(self, name)
            if not 0 <= value < size:
                raise AddressOutOfRange(f"{name} must be 0-{size - 1}, got {value}")

    def to_string(self, layout: LibraryLayout = DEFAULT_LAYOUT) -> str:
        """Canonical text form."""
        self.check(layout)
        return SEPARATOR.join((
            encode_base36(self.hexagon),
            f"{self.wall:0{layout.field_width('wall')}d}",
            f"{self.shelf:0{layout.field_width('shelf')}d}",
            f"{self.volume:0{layout.field_width('volume')}d}",
            f"{self.page:0{layout.field_width('page')}d}",
        ))

    @classmethod
    def from_string(cls, text: str, layout: LibraryLayout = DEFAULT_LAYOUT) -> Address:
        """Parse the canonical text form.

        Raises:
            ContainerParseError: the text is not a canonical address.
            AddressOutOfRange: a level has the right shape but is out of range.
        """
        parts = text.split(SEPARATOR)
        if len(parts) != 5:
            raise ContainerParseError(
                f"Address needs 5 '{SEPARATOR}'-separated fields, got {len(parts)}"
            )
        try:
            hexagon = decode_base36(parts[0])
        except ValueError as e:
            raise ContainerParseError(f"Bad hexagon: {e}") from None

        levels = {}
        for name, raw in zip(("wall", "shelf", "volume", "page"), parts[1:]):
            width = layout.field_width(name)
            if len(raw) != width or not (raw.isascii() and raw.isdigit()):
                raise ContainerParseError(
                    f"{name} must be {width} decimal digit(s), got {raw!r}"
                )
            levels[name] = int(raw)

        address = cls(hexagon=hexagon, **levels)
        address.check(layout)
        return address

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        sign = "-" if self.hexagon < 0 else ""
        return (f"Address(hexagon={sign}{encode_base36(abs(self.hexagon))} (base 36), "
                f"wall={self.wall}, shelf={self.shelf}, "
                f"volume={self.volume}, page={self.page})")
