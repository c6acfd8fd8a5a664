"""Library layout: page length and the ranges of the bounded address levels.

The layout is part of the container format contract. Every value here is
baked into existing containers; changing one breaks their decode.

Format version 1:
    page length   3239 symbols
    page          0-409
    volume        0-31
    shelf         0-4
    wall          0-3
    hexagon       0-max_hexagon (base-36, unbounded in practice)
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from .alphabet import Alphabet, DEFAULT_ALPHABET

FORMAT_VERSION = 1
PAGE_LENGTH = 3239
WALLS = 4
SHELVES = 5
VOLUMES = 32
PAGES = 410


@dataclass(frozen=True)
class LibraryLayout:
    alphabet: Alphabet = DEFAULT_ALPHABET
    page_length: int = PAGE_LENGTH
    walls: int = WALLS
    shelves: int = SHELVES
    volumes: int = VOLUMES
    pages: int = PAGES

    def __post_init__(self) -> None:
        if self.page_length < 1:
            raise ValueError(f"Page length must be positive, got {self.page_length}")
        for name, size in self.levels:
            if size < 1:
                raise ValueError(f"Level {name!r} needs a positive range, got {size}")

    @property
    def levels(self) -> tuple[tuple[str, int], ...]:
        """Bounded levels, least significant first."""
        return (
            ("page", self.pages),
            ("volume", self.volumes),
            ("shelf", self.shelves),
            ("wall", self.walls),
        )

    @property
    def location_count(self) -> int:
        """Number of (wall, shelf, volume, page) slots per hexagon."""
        return self.walls * self.shelves * self.volumes * self.pages

    @cached_property
    def page_space(self) -> int:
        """Number of distinct pages, R ** L."""
        return self.alphabet.radix ** self.page_length

    @cached_property
    def max_hexagon(self) -> int:
        """Largest hexagon that still holds at least one page."""
        return (self.page_space - 1) // self.location_count

    def field_width(self, level: str) -> int:
        """Zero-padded decimal width of a bounded level in address text."""
        size = dict(self.levels)[level]
        return len(str(size - 1))


DEFAULT_LAYOUT = LibraryLayout()
