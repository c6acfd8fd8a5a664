"""Coordinate transform: page text <-> address.

A page of L symbols is read as one base-R integer N, first symbol most
significant. N is then split by mixed-radix division, least significant
level first:

    N = (((hexagon * walls + wall) * shelves + shelf) * volumes + volume) * pages + page

The quotient left after the four bounded levels is the hexagon. Both
directions are exact Python int arithmetic, so the mapping is a bijection
between the R ** L pages and the addresses whose hexagon is at most
``layout.max_hexagon``.
"""
from __future__ import annotations

from .address import Address
from .errors import AddressOutOfRange, MalformedBlock
from .layout import DEFAULT_LAYOUT, LibraryLayout


def block_to_int(block: str, layout: LibraryLayout = DEFAULT_LAYOUT) -> int:
    """Read a page as a base-R integer."""
    if len(block) != layout.page_length:
        raise MalformedBlock(
            f"Page must be {layout.page_length} symbols, got {len(block)}"
        )
    alphabet = layout.alphabet
    radix = alphabet.radix
    n = 0
    for pos, c in enumerate(block):
        if c not in alphabet:
            raise MalformedBlock(f"Symbol {c!r} at position {pos} is not in the alphabet")
        n = n * radix + alphabet.index(c)
    return n


def int_to_block(n: int, layout: LibraryLayout = DEFAULT_LAYOUT) -> str:
    """Write a page number as exactly L symbols, zero-filled on the left."""
    if not 0 <= n < layout.page_space:
        raise AddressOutOfRange("Page number lies outside the library")
    alphabet = layout.alphabet
    radix = alphabet.radix
    digits = []
    while n:
        n, d = divmod(n, radix)
        digits.append(alphabet.symbols[d])
    digits.extend(alphabet.zero_symbol * (layout.page_length - len(digits)))
    return "".join(reversed(digits))


def address_of(block: str, layout: LibraryLayout = DEFAULT_LAYOUT) -> Address:
    """The unique address of a page."""
    n = block_to_int(block, layout)
    levels = {}
    for name, size in layout.levels:
        n, levels[name] = divmod(n, size)
    return Address(hexagon=n, **levels)


def block_of(address: Address, layout: LibraryLayout = DEFAULT_LAYOUT) -> str:
    """Regenerate the page stored at an address."""
    address.check(layout)
    if address.hexagon > layout.max_hexagon:
        raise AddressOutOfRange(
            "Hexagon lies beyond the last hexagon of the library"
        )
    n = address.hexagon
    for name, size in reversed(layout.levels):
        n = n * size + getattr(address, name)
    return int_to_block(n, layout)
