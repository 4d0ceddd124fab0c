"""
Program Listing Annotator
=========================

When an HP-41 prints a program (PRP or LIST) through the printer interface,
the DTR/TULIP4041 variant drops the line numbers the calculator would show
on screen. This module reconstructs them.

Listing Detection
-----------------
Every completed line is normalized (stripped and upper-cased) and checked
for a header:

- ``PRP`` / ``LIST``                        -> a listing starts
- ``PRFLAGS`` / ``PRKEYS`` / ``PRREG`` / ``STATUS`` -> a non-listing printout

Any other line leaves the current mode alone.

Line Numbering
--------------
Inside a listing, label lines already carry their own number::

     05♦LBL "TEST"

The two digits at positions 1-2 (after one leading space) followed by the
label marker glyph resync the counter. Every other line gets the next number
prepended::

     06 STO 01
"""

import logging
from dataclasses import dataclass
from typing import Final

from hp41_reader.printer.charset import LABEL_MARKER

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Normalized line prefixes that start a program listing
LISTING_HEADERS: Final[tuple[str, ...]] = ("PRP", "LIST")

# Normalized line prefixes that start some other printout
NON_LISTING_HEADERS: Final[tuple[str, ...]] = (
    "PRFLAGS",
    "PRKEYS",
    "PRREG",
    "STATUS",
)

_DIGITS: Final[str] = "0123456789"


# =============================================================================
# Listing State
# =============================================================================

@dataclass
class ListingState:
    """
    Listing mode and the last line number handed out.

    Attributes:
        in_listing_mode: True while lines belong to a program listing
        line_number: Last line number used (0 right after a header)
    """

    in_listing_mode: bool = False
    line_number: int = 0

    def reset(self) -> None:
        """Leave listing mode and zero the counter."""
        self.in_listing_mode = False
        self.line_number = 0


def is_label_line(line: str) -> bool:
    """
    Return True if the line carries its own label line number.

    A label line reads " NN♦..." -- one space, two digits, the label marker.
    """
    return (
        len(line) >= 4
        and line[0] == " "
        and line[1] in _DIGITS
        and line[2] in _DIGITS
        and line[3] == LABEL_MARKER
    )


# =============================================================================
# Annotator
# =============================================================================

class ListingAnnotator:
    """
    Stateful line-number reconstruction for DTR-mode program listings.

    The annotator is called once per completed line, before the line is
    published. It persists its state across lines of one listing.

    Example:
        >>> annotator = ListingAnnotator()
        >>> annotator.annotate("PRP TEST\\n")
        'PRP TEST\\n'
        >>> annotator.annotate("STO 01\\n")
        ' 01 STO 01\\n'
    """

    def __init__(self) -> None:
        self.state = ListingState()

    @property
    def in_listing_mode(self) -> bool:
        return self.state.in_listing_mode

    @property
    def line_number(self) -> int:
        return self.state.line_number

    def reset(self) -> None:
        """Forget any listing in progress (used on disconnect)."""
        self.state.reset()

    def annotate(self, line: str) -> str:
        """
        Update listing state from a completed line and number it if needed.

        Args:
            line: The completed line, including its trailing newline.

        Returns:
            The line to publish, possibly with a " NN " prefix.
        """
        normalized = line.strip().upper()

        if normalized.startswith(LISTING_HEADERS):
            logger.debug("Listing started: %r", normalized)
            self.state.in_listing_mode = True
            self.state.line_number = 0
            return line

        if normalized.startswith(NON_LISTING_HEADERS):
            logger.debug("Non-listing printout: %r", normalized)
            self.state.in_listing_mode = False
            self.state.line_number = 0
            return line

        if not self.state.in_listing_mode:
            return line

        if is_label_line(line):
            self.state.line_number = int(line[1:3])
            logger.debug("Label line resyncs number to %d", self.state.line_number)
            return line

        self.state.line_number += 1
        return f" {self.state.line_number:02d} {line}"
