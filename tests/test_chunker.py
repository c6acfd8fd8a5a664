"""Tests for page chunking and padding."""

import pytest

from babelcodec.core.chunker import chunk, page_count, unchunk
from babelcodec.core.errors import ByteLengthMismatch, MalformedBlock


class TestPageCount:
    def test_zero(self):
        assert page_count(0, 3239) == 0

    def test_partial_and_exact(self):
        assert page_count(1, 3239) == 1
        assert page_count(3239, 3239) == 1
        assert page_count(3240, 3239) == 2
        assert page_count(6478, 3239) == 2


class TestChunk:
    def test_empty_gives_no_pages(self, layout):
        assert chunk("", layout) == []

    def test_short_text_is_padded(self, layout):
        blocks = chunk("hello", layout)
        assert len(blocks) == 1
        assert len(blocks[0]) == 3239
        assert blocks[0].startswith("hello")
        assert blocks[0][5:] == "." * 3234

    def test_exact_multiple_has_no_padding_page(self, layout):
        blocks = chunk("ab" * 3239, layout)
        assert len(blocks) == 2
        assert "." not in "".join(blocks)

    def test_one_over_boundary(self, layout):
        blocks = chunk("a" * 3240, layout)
        assert len(blocks) == 2
        assert blocks[1] == "a" + "." * 3238

    def test_tiny_layout(self, tiny_layout):
        assert chunk("abcdabcd", tiny_layout) == ["abc", "dab", "cd."]


class TestUnchunk:
    def test_inverse_of_chunk(self, layout):
        text = "thequickbrownfox" * 500
        assert unchunk(chunk(text, layout), len(text), layout) == text

    def test_empty(self, layout):
        assert unchunk([], 0, layout) == ""

    def test_cut_point_is_arithmetic(self, tiny_layout):
        """Trailing pad-free data is kept even though the page is full."""
        assert unchunk(["abc", "dab"], 6, tiny_layout) == "abcdab"

    def test_short_page_raises(self, tiny_layout):
        with pytest.raises(MalformedBlock, match="Page 1 has 2 symbols"):
            unchunk(["abc", "ab"], 5, tiny_layout)

    def test_missing_page_raises(self, tiny_layout):
        with pytest.raises(ByteLengthMismatch, match="need 2 pages, got 1"):
            unchunk(["abc"], 4, tiny_layout)

    def test_extra_padding_page_raises(self, tiny_layout):
        with pytest.raises(ByteLengthMismatch, match="need 1 pages, got 2"):
            unchunk(["abc", "..."], 3, tiny_layout)

    def test_data_in_padding_raises(self, tiny_layout):
        with pytest.raises(ByteLengthMismatch, match="Non-padding symbol 'e' at position 4"):
            unchunk(["abc", "de."], 4, tiny_layout)
