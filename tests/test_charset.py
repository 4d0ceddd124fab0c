"""
Tests for the HP 82143A Glyph Table
===================================

Verifies the table size, the positional layout that encodes the printer
protocol, and out-of-range lookup behavior.
"""

import pytest

from hp41_reader.errors import DecodeError, GlyphIndexError, HP41Error
from hp41_reader.printer.charset import (
    GLYPH_TABLE,
    GLYPH_TABLE_SIZE,
    LABEL_MARKER,
    decode_glyphs,
    lookup,
)


# =============================================================================
# Table Layout Tests
# =============================================================================

class TestGlyphTable:
    """Tests for the glyph table contents."""

    def test_table_size(self):
        """Table must have exactly 128 entries."""
        assert GLYPH_TABLE_SIZE == 128
        assert len(GLYPH_TABLE) == 128

    def test_entries_are_single_characters(self):
        """Every entry is one printable character."""
        for index, glyph in enumerate(GLYPH_TABLE):
            assert len(glyph) == 1, f"entry {index} is {glyph!r}"

    def test_table_is_immutable(self):
        """The table is a tuple so it cannot be extended or reordered."""
        assert isinstance(GLYPH_TABLE, tuple)

    def test_ascii_letters_and_digits(self):
        """Letters and digits sit at their ASCII positions."""
        for ch in "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789":
            assert GLYPH_TABLE[ord(ch)] == ch

    def test_escaped_characters(self):
        """Double quote and backslash keep their ASCII positions."""
        assert GLYPH_TABLE[34] == '"'
        assert GLYPH_TABLE[92] == "\\"

    def test_space(self):
        """Code 32 is a space."""
        assert GLYPH_TABLE[32] == " "

    def test_hp_substitutions(self):
        """HP-specific glyphs replace some ASCII positions."""
        assert GLYPH_TABLE[94] == "↑"
        assert GLYPH_TABLE[123] == "π"
        assert GLYPH_TABLE[125] == "→"
        assert GLYPH_TABLE[126] == "Σ"
        assert GLYPH_TABLE[127] == "├"

    def test_special_symbols(self):
        """Spot-check the lower 32 HP symbols."""
        assert GLYPH_TABLE[0] == "♦"
        assert GLYPH_TABLE[3] == "←"
        assert GLYPH_TABLE[4] == "α"
        assert GLYPH_TABLE[10] == "♦"
        assert GLYPH_TABLE[12] == "µ"
        assert GLYPH_TABLE[29] == "≠"
        assert GLYPH_TABLE[31] == "▒"

    def test_label_marker(self):
        """Label marker is the diamond glyph."""
        assert LABEL_MARKER == "♦"


# =============================================================================
# Lookup Tests
# =============================================================================

class TestLookup:
    """Tests for lookup() and decode_glyphs()."""

    def test_lookup_every_index(self):
        """lookup() agrees with the table for every valid index."""
        for index in range(128):
            assert lookup(index) == GLYPH_TABLE[index]

    @pytest.mark.parametrize("index", [-1, 128, 160, 224, 255, 1000])
    def test_lookup_out_of_range(self, index):
        """Indices outside [0, 128) raise GlyphIndexError."""
        with pytest.raises(GlyphIndexError) as exc_info:
            lookup(index)
        assert exc_info.value.index == index
        assert "out of range" in str(exc_info.value)

    def test_glyph_error_hierarchy(self):
        """GlyphIndexError is catchable as DecodeError and HP41Error."""
        assert issubclass(GlyphIndexError, DecodeError)
        assert issubclass(GlyphIndexError, HP41Error)

    def test_decode_glyphs(self):
        """decode_glyphs translates a byte string."""
        assert decode_glyphs(b"HP-41") == "HP-41"
        assert decode_glyphs(bytes([0x7E, 0x3D, 0x7B])) == "Σ=π"

    def test_decode_glyphs_skips_non_glyphs(self):
        """Values >= 128 are skipped, not errors."""
        assert decode_glyphs(bytes([0x41, 0xE0, 0x42, 0xA3])) == "AB"

    def test_decode_glyphs_empty(self):
        """Empty input gives empty output."""
        assert decode_glyphs(b"") == ""
