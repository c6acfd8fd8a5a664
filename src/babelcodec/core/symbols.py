"""Byte <-> symbol codec.

Each byte is written as a fixed number of base-``data_radix`` digits, most
significant first. With the default alphabet that is two letters per byte:

    0x00 -> "aa"    0x19 -> "az"    0x1A -> "ba"    0xFF -> "jv"

Only data symbols are produced, so the padding sentinel never appears in
encoded data. Decoding re-reads the same number of symbols per byte and is
checked against the authoritative byte count.
"""
from __future__ import annotations

from functools import lru_cache

from .alphabet import Alphabet, DEFAULT_ALPHABET
from .errors import ByteLengthMismatch, InvalidSymbolSequence

BYTE_VALUES = 256


def symbols_per_byte(alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Smallest k with data_radix ** k >= 256."""
    k = 1
    while alphabet.data_radix ** k < BYTE_VALUES:
        k += 1
    return k


def symbol_count(byte_count: int, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Exact number of data symbols produced for ``byte_count`` bytes."""
    if byte_count < 0:
        raise ValueError(f"Byte count must be non-negative, got {byte_count}")
    return byte_count * symbols_per_byte(alphabet)


@lru_cache(maxsize=8)
def _byte_table(alphabet: Alphabet) -> tuple[str, ...]:
    k = symbols_per_byte(alphabet)
    radix = alphabet.data_radix
    table = []
    for value in range(BYTE_VALUES):
        digits = []
        v = value
        for _ in range(k):
            v, d = divmod(v, radix)
            digits.append(alphabet.symbols[d])
        table.append("".join(reversed(digits)))
    return tuple(table)


def bytes_to_symbols(data: bytes, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Expand bytes into data symbols."""
    table = _byte_table(alphabet)
    return "".join(table[b] for b in data)


def symbols_to_bytes(symbols: str, byte_count: int,
                     alphabet: Alphabet = DEFAULT_ALPHABET) -> bytes:
    """Inverse of bytes_to_symbols for a known original byte count."""
    k = symbols_per_byte(alphabet)
    expected = symbol_count(byte_count, alphabet)
    if len(symbols) != expected:
        raise ByteLengthMismatch(
            f"Expected {expected} symbols for {byte_count} bytes, got {len(symbols)}"
        )

    radix = alphabet.data_radix
    out = bytearray(byte_count)
    for i in range(byte_count):
        value = 0
        for pos in range(i * k, i * k + k):
            c = symbols[pos]
            if not alphabet.is_data_symbol(c):
                raise InvalidSymbolSequence(
                    f"Symbol {c!r} at position {pos} does not encode data"
                )
            value = value * radix + alphabet.index(c)
        if value >= BYTE_VALUES:
            raise InvalidSymbolSequence(
                f"Symbols {symbols[i * k:i * k + k]!r} at position {i * k} "
                f"decode to {value}, not a byte"
            )
        out[i] = value
    return bytes(out)
