"""
HP-41 Reader - Printer Stream Capture for the HP-41 Calculator
==============================================================

This package captures the output an HP-41 sends to its thermal printer
(HP 82143A / HP 82162A protocol) over a serial interface and turns it
into a readable text transcript.

The printer stream has no framing beyond a few sentinel byte values
("run of spaces", "end of line", "right-justify"), arrives in chunks of
whatever size the serial driver likes, and differs slightly between the
legacy USB interface and DTR-asserting interfaces such as the TULIP4041.
In DTR mode, program listings also get their line numbers reconstructed.

Main Components
---------------
- **printer**: glyph table, line decoder, listing annotator, transcript
- **comms**: serial port utilities and the capture read loop
- **config**: capture settings with environment overrides
- **cli**: the ``hp41read`` command-line tool

Quick Start
-----------
Decode a raw capture file:
    >>> from hp41_reader import DecoderMode, decode_bytes
    >>> text = decode_bytes(open("capture.bin", "rb").read(), DecoderMode.DTR)

Capture live from a serial port:
    $ hp41read capture --port /dev/ttyUSB0 --dtr

Version History
---------------
1.0.0 - Initial release with decoder, DTR listing numbering and capture CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hp41_reader.errors import (
    HP41Error,
    DecodeError,
    GlyphIndexError,
    ConfigError,
    CommsError,
    ConnectionError as HP41ConnectionError,  # Avoid collision with builtin
)

from hp41_reader.printer import (
    GLYPH_TABLE,
    DecoderMode,
    LineDecoder,
    ListingAnnotator,
    ListingState,
    LineChannel,
    Transcript,
    decode_glyphs,
    lookup,
)

from hp41_reader.comms import (
    PortInfo,
    PrinterReader,
    close_serial_port,
    decode_bytes,
    decode_chunks,
    find_printer_port,
    list_serial_ports,
    open_serial_port,
)

from hp41_reader.config import ReaderConfig

__all__ = [
    # Version info
    "__version__",
    # Errors
    "HP41Error",
    "DecodeError",
    "GlyphIndexError",
    "ConfigError",
    "CommsError",
    "HP41ConnectionError",
    # Printer decoding
    "GLYPH_TABLE",
    "lookup",
    "decode_glyphs",
    "DecoderMode",
    "LineDecoder",
    "ListingAnnotator",
    "ListingState",
    "Transcript",
    "LineChannel",
    # Communication
    "PortInfo",
    "PrinterReader",
    "list_serial_ports",
    "find_printer_port",
    "open_serial_port",
    "close_serial_port",
    "decode_chunks",
    "decode_bytes",
    # Configuration
    "ReaderConfig",
]
