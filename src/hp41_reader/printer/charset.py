"""
HP 82143A Printer Character Set
===============================

The HP-41 sends printable characters to its thermal printer as 7-bit codes.
Each code in the range 0-127 selects one glyph from the printer's built-in
character ROM. The lower 32 codes hold the calculator's special symbols
(Greek letters, arrows, accented capitals); codes 32-127 follow ASCII with
a handful of HP substitutions (↑ for ^, π for {, → for }, Σ for ~ and ├
for DEL).

Codes 128-255 are not glyphs. The printer protocol uses them for spacing
runs and line control, which the line decoder interprets separately.

Table Layout
------------
    0x00  ♦ ¤ ж ← α β Γ ↓ Δ σ ♦ λ µ д τ Φ
    0x10  Θ Ω δ Å å Ä ä Ö ö Ü ü Æ æ ≠ £ ▒
    0x20  (space) ! " # $ % & ' ( ) * + , - . /
    0x30  0 1 2 3 4 5 6 7 8 9 : ; < = > ?
    0x40  @ A B C D E F G H I J K L M N O
    0x50  P Q R S T U V W X Y Z [ \\ ] ↑ _
    0x60  ` a b c d e f g h i j k l m n o
    0x70  p q r s t u v w x y z π | → Σ ├

The order of this table IS the protocol. Entries must never be added,
removed or reordered.
"""

import logging
from typing import Final

from hp41_reader.errors import GlyphIndexError

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Glyph Table
# =============================================================================

# Number of entries in the printer character ROM
GLYPH_TABLE_SIZE: Final[int] = 128

GLYPH_TABLE: Final[tuple[str, ...]] = (
    # 0x00 - 0x0F: HP special symbols
    "♦", "¤", "ж", "←", "α", "β", "Γ", "↓",
    "Δ", "σ", "♦", "λ", "µ", "д", "τ", "Φ",
    # 0x10 - 0x1F: Greek letters, accented capitals, block
    "Θ", "Ω", "δ", "Å", "å", "Ä", "ä", "Ö",
    "ö", "Ü", "ü", "Æ", "æ", "≠", "£", "▒",
    # 0x20 - 0x2F
    " ", "!", "\"", "#", "$", "%", "&", "'",
    "(", ")", "*", "+", ",", "-", ".", "/",
    # 0x30 - 0x3F
    "0", "1", "2", "3", "4", "5", "6", "7",
    "8", "9", ":", ";", "<", "=", ">", "?",
    # 0x40 - 0x4F
    "@", "A", "B", "C", "D", "E", "F", "G",
    "H", "I", "J", "K", "L", "M", "N", "O",
    # 0x50 - 0x5F
    "P", "Q", "R", "S", "T", "U", "V", "W",
    "X", "Y", "Z", "[", "\\", "]", "↑", "_",
    # 0x60 - 0x6F
    "`", "a", "b", "c", "d", "e", "f", "g",
    "h", "i", "j", "k", "l", "m", "n", "o",
    # 0x70 - 0x7F
    "p", "q", "r", "s", "t", "u", "v", "w",
    "x", "y", "z", "π", "|", "→", "Σ", "├",
)

if len(GLYPH_TABLE) != GLYPH_TABLE_SIZE:
    raise RuntimeError(
        f"HP 82143A glyph table has {len(GLYPH_TABLE)} entries, "
        f"expected {GLYPH_TABLE_SIZE}"
    )

# Glyph printed by the HP-41 between a program line number and a label
LABEL_MARKER: Final[str] = GLYPH_TABLE[0x00]


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup(index: int) -> str:
    """
    Return the glyph for a printer character code.

    Args:
        index: Character code (0-127).

    Returns:
        The single-character glyph string.

    Raises:
        GlyphIndexError: If index is outside [0, 128).

    Example:
        >>> lookup(0x41)
        'A'
        >>> lookup(0x7E)
        'Σ'
    """
    if not 0 <= index < GLYPH_TABLE_SIZE:
        raise GlyphIndexError(index, GLYPH_TABLE_SIZE)
    return GLYPH_TABLE[index]


def decode_glyphs(data: bytes) -> str:
    """
    Map a sequence of character codes to text, skipping non-glyph values.

    This is a plain table translation with none of the line framing rules
    applied; it is useful for inspecting raw captures.

    Args:
        data: Bytes-like object (or iterable of ints) of character codes.

    Returns:
        The translated string.
    """
    chars = []
    for value in data:
        try:
            chars.append(lookup(value))
        except GlyphIndexError as e:
            logger.debug("Skipping non-glyph value: %s", e)
    return "".join(chars)
