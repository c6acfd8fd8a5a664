"""Split symbol text into fixed-length pages and join it back.

The last page is right-padded with the sentinel. Joining never looks for
padding: the cut point is computed from the stored symbol count.
"""
from __future__ import annotations

from typing import Sequence

from .errors import ByteLengthMismatch, MalformedBlock
from .layout import DEFAULT_LAYOUT, LibraryLayout


def page_count(symbol_count: int, page_length: int) -> int:
    """Number of pages needed for ``symbol_count`` symbols (0 for none)."""
    return -(-symbol_count // page_length)


def chunk(symbols: str, layout: LibraryLayout = DEFAULT_LAYOUT) -> list[str]:
    """Split symbols into pages of exactly ``layout.page_length``."""
    size = layout.page_length
    pad = layout.alphabet.pad_symbol
    blocks = []
    for start in range(0, len(symbols), size):
        block = symbols[start:start + size]
        if len(block) < size:
            block += pad * (size - len(block))
        blocks.append(block)
    return blocks


def unchunk(blocks: Sequence[str], symbol_count: int,
            layout: LibraryLayout = DEFAULT_LAYOUT) -> str:
    """Join pages and cut them back to exactly ``symbol_count`` symbols.

    Raises:
        MalformedBlock: a page is not exactly page_length long.
        ByteLengthMismatch: page count or padding disagrees with symbol_count.
    """
    size = layout.page_length
    for i, block in enumerate(blocks):
        if len(block) != size:
            raise MalformedBlock(f"Page {i} has {len(block)} symbols, expected {size}")

    expected = page_count(symbol_count, size)
    if len(blocks) != expected:
        raise ByteLengthMismatch(
            f"{symbol_count} symbols need {expected} pages, got {len(blocks)}"
        )

    text = "".join(blocks)
    tail = text[symbol_count:]
    pad = layout.alphabet.pad_symbol
    if tail.strip(pad):
        offset = symbol_count + next(i for i, c in enumerate(tail) if c != pad)
        raise ByteLengthMismatch(
            f"Non-padding symbol {text[offset]!r} at position {offset}, "
            f"past the stored length of {symbol_count} symbols"
        )
    return text[:symbol_count]
