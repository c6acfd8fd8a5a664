"""Shared fixtures and markers for babelcodec tests."""

import pytest

from babelcodec.core.alphabet import Alphabet
from babelcodec.core.layout import DEFAULT_LAYOUT, LibraryLayout


def pytest_configure(config):
    config.addinivalue_line("markers", "db: requires PostgreSQL connection")


@pytest.fixture
def layout():
    return DEFAULT_LAYOUT


@pytest.fixture
def tiny_layout():
    """A 6-symbol, 3-symbol-page library small enough to walk completely.

    216 pages, 60 locations per hexagon, 4 data symbols (so 4 symbols per byte).
    """
    alphabet = Alphabet(symbols="abcde.", pad_symbol=".", data_radix=4)
    return LibraryLayout(alphabet=alphabet, page_length=3,
                         walls=2, shelves=2, volumes=3, pages=5)
