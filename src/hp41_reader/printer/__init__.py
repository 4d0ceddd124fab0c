"""
HP-41 Printer Stream Decoding
=============================

This package turns the byte stream an HP-41 sends to its thermal printer
into readable text lines.

Module Structure
----------------
- **charset**: HP 82143A 128-entry glyph table
- **decoder**: per-byte line framing state machine
- **listing**: program listing detection and line numbering (DTR mode)
- **transcript**: append-only transcript and FIFO line hand-off

Quick Start
-----------
    from hp41_reader.printer import DecoderMode, LineDecoder, Transcript

    transcript = Transcript()
    decoder = LineDecoder(DecoderMode.DTR, transcript.append)
    decoder.process_chunk(data)
    print(transcript.text)
"""

from hp41_reader.printer.charset import (
    GLYPH_TABLE,
    GLYPH_TABLE_SIZE,
    LABEL_MARKER,
    decode_glyphs,
    lookup,
)
from hp41_reader.printer.decoder import (
    DTR_SEPARATOR,
    END_OF_LINE,
    PRINT_WIDTH,
    RIGHT_JUSTIFY,
    SPACE_RUN_BASE,
    SPACE_RUN_END,
    DecoderMode,
    LineDecoder,
    LineSink,
)
from hp41_reader.printer.listing import (
    LISTING_HEADERS,
    NON_LISTING_HEADERS,
    ListingAnnotator,
    ListingState,
    is_label_line,
)
from hp41_reader.printer.transcript import LineChannel, Transcript

__all__ = [
    # Character set
    "GLYPH_TABLE",
    "GLYPH_TABLE_SIZE",
    "LABEL_MARKER",
    "lookup",
    "decode_glyphs",
    # Decoder
    "SPACE_RUN_BASE",
    "SPACE_RUN_END",
    "DTR_SEPARATOR",
    "END_OF_LINE",
    "RIGHT_JUSTIFY",
    "PRINT_WIDTH",
    "DecoderMode",
    "LineDecoder",
    "LineSink",
    # Listing
    "LISTING_HEADERS",
    "NON_LISTING_HEADERS",
    "ListingState",
    "ListingAnnotator",
    "is_label_line",
    # Transcript
    "Transcript",
    "LineChannel",
]
