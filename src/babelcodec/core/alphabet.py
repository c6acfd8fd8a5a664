"""The page alphabet.

Default alphabet: a-z, comma, space, period (29 symbols).
A symbol's digit value is its index, so 'a' is zero.
The period doubles as the padding sentinel and is never used for data.
"""
from __future__ import annotations

from dataclasses import dataclass, field

BABEL_SYMBOLS = "abcdefghijklmnopqrstuvwxyz, ."
PAD_SYMBOL = "."
DATA_RADIX = 26  # letters only


@dataclass(frozen=True)
class Alphabet:
    """
    Immutable ordered symbol set.

    The first ``data_radix`` symbols carry byte data; the remaining symbols
    (including ``pad_symbol``) only ever appear as page filler.
    """
    symbols: str = BABEL_SYMBOLS
    pad_symbol: str = PAD_SYMBOL
    data_radix: int = DATA_RADIX
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.symbols) < 2:
            raise ValueError(f"Alphabet needs at least 2 symbols, got {len(self.symbols)}")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError(f"Alphabet symbols must be unique: {self.symbols!r}")
        if len(self.pad_symbol) != 1 or self.pad_symbol not in self.symbols:
            raise ValueError(f"Pad symbol {self.pad_symbol!r} is not in the alphabet")
        pad_index = self.symbols.index(self.pad_symbol)
        if not 2 <= self.data_radix <= pad_index:
            raise ValueError(
                f"data_radix must be 2-{pad_index} so the pad symbol "
                f"stays out of data, got {self.data_radix}"
            )
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(self.symbols)})

    @property
    def radix(self) -> int:
        """Working radix R (number of symbols)."""
        return len(self.symbols)

    @property
    def zero_symbol(self) -> str:
        return self.symbols[0]

    def index(self, symbol: str) -> int:
        """Digit value of a symbol. Raises KeyError for foreign symbols."""
        return self._index[symbol]

    def symbol(self, digit: int) -> str:
        """Symbol for a digit value 0..R-1."""
        if not 0 <= digit < self.radix:
            raise ValueError(f"Digit must be 0-{self.radix - 1}, got {digit}")
        return self.symbols[digit]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def is_data_symbol(self, symbol: str) -> bool:
        """True for symbols that may encode byte data."""
        i = self._index.get(symbol)
        return i is not None and i < self.data_radix


DEFAULT_ALPHABET = Alphabet()
