"""
HP-41 Printer Line Decoder
==========================

This module implements the state machine that turns the HP-41 printer
byte stream into complete text lines.

Byte Codes
----------
The printer interface sends one byte per print action:

    ┌───────────┬─────────────────────────────────────────────────┐
    │ 0 - 127   │ glyph from the HP 82143A character set          │
    │ 161 - 183 │ run of (b - 160) spaces                         │
    │ 162       │ end of line (DTR/TULIP4041 variant only)        │
    │ 224       │ end of line                                     │
    │ 232       │ right-justify the accumulated line              │
    │ others    │ ignored                                         │
    └───────────┴─────────────────────────────────────────────────┘

224 and 232 are dropped when nothing has been accumulated yet, so the
stream never produces blank lines.

Interface Variants
------------------
- **LEGACY** (USB interface, no DTR): 232 prepends 24 spaces to the line
  and leaves it open; the following 224 completes it.
- **DTR** (TULIP4041 and other DTR-asserting interfaces): 162 completes
  the line, 232 pads the line to a 24-column field and completes it, and
  program listings get reconstructed line numbers.

Chunking
--------
Serial drivers deliver bytes in platform-dependent groups (a single byte
per read on some machines, hundreds on others). ``process_chunk`` walks
every chunk one byte at a time, so the output never depends on how the
stream was split.
"""

import logging
from enum import Enum
from typing import Callable, Final, Iterable, Optional

from hp41_reader.errors import GlyphIndexError
from hp41_reader.printer.charset import GLYPH_TABLE_SIZE, lookup
from hp41_reader.printer.listing import ListingAnnotator, ListingState

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Protocol Constants
# =============================================================================

# Space run codes: SPACE_RUN_BASE < b < SPACE_RUN_END gives (b - base) spaces
SPACE_RUN_BASE: Final[int] = 160
SPACE_RUN_END: Final[int] = 184

# Two-space code that doubles as a line separator in DTR mode
DTR_SEPARATOR: Final[int] = 162

# End-of-line sentinel (both variants)
END_OF_LINE: Final[int] = 224

# Right-justify sentinel
RIGHT_JUSTIFY: Final[int] = 232

# Width of the printer's paper in characters
PRINT_WIDTH: Final[int] = 24

# Type alias for the completed-line callback
LineSink = Callable[[str], None]


# =============================================================================
# Mode Selector
# =============================================================================

class DecoderMode(Enum):
    """
    Printer interface variant, fixed for the lifetime of a connection.

    The value is the "DTR mode enabled" configuration flag.
    """

    LEGACY = False
    DTR = True

    @classmethod
    def from_flag(cls, dtr_enabled: bool) -> "DecoderMode":
        """Map the DTR configuration flag to a mode."""
        return cls.DTR if dtr_enabled else cls.LEGACY

    @property
    def is_dtr(self) -> bool:
        return self is DecoderMode.DTR


# =============================================================================
# Line Decoder
# =============================================================================

class LineDecoder:
    """
    Byte-at-a-time decoder for the HP-41 printer stream.

    The decoder accumulates glyphs into a line buffer and passes each
    completed line to ``sink``. It holds no locks: feed it from one thread
    only.

    Attributes:
        mode: The interface variant this decoder was built for
        sink: Callable receiving each completed line (with trailing newline)

    Example:
        >>> lines = []
        >>> decoder = LineDecoder(DecoderMode.LEGACY, lines.append)
        >>> decoder.process_chunk(bytes([0x48, 0x49, 224]))
        >>> lines
        ['HI\\n']
    """

    def __init__(
        self,
        mode: DecoderMode = DecoderMode.LEGACY,
        sink: Optional[LineSink] = None,
    ):
        self._mode = mode
        self.sink = sink
        self._line_buffer = ""
        self._line_ended = False
        self._annotator = ListingAnnotator()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def mode(self) -> DecoderMode:
        return self._mode

    @property
    def line_buffer(self) -> str:
        """The line currently being assembled."""
        return self._line_buffer

    @property
    def line_ended(self) -> bool:
        """True if the last byte completed a line."""
        return self._line_ended

    @property
    def listing(self) -> ListingState:
        """Program listing state (only updated in DTR mode)."""
        return self._annotator.state

    # -------------------------------------------------------------------------
    # Byte Processing
    # -------------------------------------------------------------------------

    def process_chunk(self, data: Iterable[int]) -> None:
        """
        Decode a chunk of bytes in arrival order.

        Args:
            data: Bytes-like object (or iterable of ints) of any length.
        """
        for byte in data:
            self.process_byte(byte)

    def process_byte(self, byte: int) -> None:
        """
        Decode a single byte from the printer stream.

        Args:
            byte: Raw byte value (0-255).
        """
        logger.debug(
            "Raw byte: %02X  ASCII: %r  Integer: %d",
            byte, chr(byte) if 32 <= byte < 127 else ".", byte
        )

        if self._line_ended:
            self._line_ended = False
            self._line_buffer = ""

        if byte < GLYPH_TABLE_SIZE:
            self._append_glyph(byte)

        elif SPACE_RUN_BASE < byte < SPACE_RUN_END:
            if self._mode.is_dtr and byte == DTR_SEPARATOR:
                self._end_line()
            else:
                self._line_buffer += " " * (byte - SPACE_RUN_BASE)

        elif byte == END_OF_LINE and self._line_buffer:
            self._end_line()

        elif byte == RIGHT_JUSTIFY and self._line_buffer:
            self._right_justify()

        if self._line_ended:
            self._publish()

    def reset(self) -> None:
        """
        Drop all connection state.

        Any partially assembled line is discarded, not published.
        """
        if self._line_buffer and not self._line_ended:
            logger.debug("Discarding partial line: %r", self._line_buffer)
        self._line_buffer = ""
        self._line_ended = False
        self._annotator.reset()

    # -------------------------------------------------------------------------
    # Internal Helpers
    # -------------------------------------------------------------------------

    def _append_glyph(self, byte: int) -> None:
        try:
            self._line_buffer += lookup(byte)
        except GlyphIndexError as e:
            logger.warning("Skipping character: %s", e)

    def _end_line(self) -> None:
        self._line_buffer += "\n"
        self._line_ended = True

    def _right_justify(self) -> None:
        if self._mode.is_dtr:
            padding = max(0, PRINT_WIDTH - len(self._line_buffer))
            self._line_buffer = " " * padding + self._line_buffer
            self._end_line()
        else:
            # Legacy interface: the line stays open until 224 arrives
            self._line_buffer = " " * PRINT_WIDTH + self._line_buffer

    def _publish(self) -> None:
        if self._mode.is_dtr:
            self._line_buffer = self._annotator.annotate(self._line_buffer)
        line = self._line_buffer
        logger.debug("Line complete: %r", line)
        if self.sink is not None:
            self.sink(line)
