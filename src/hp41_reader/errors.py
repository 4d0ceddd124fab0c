"""
HP-41 Reader Error Hierarchy
============================

This module defines the exception hierarchy for the HP-41 printer reader.
All exceptions inherit from HP41Error, allowing callers to catch all
reader-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
HP41Error (base)
├── DecodeError (printer stream decoding)
│   └── GlyphIndexError - byte value outside the 128-entry glyph table
├── ConfigError - invalid serial / reader settings
└── CommsError (serial communication)
    ├── ConnectionError - cannot open or lost the serial port
    └── TimeoutError - no data within the expected time

Recovery Policy
---------------
Decoding errors are never fatal. The line decoder catches GlyphIndexError,
logs it and carries on with the next byte. Only the transport layer raises
errors that end a capture session (CommsError and subclasses).
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HP41Error(Exception):
    """
    Base exception for all HP-41 reader errors.

    All exceptions in the package inherit from this class, allowing callers
    to catch all reader-related errors with a single except clause:

        try:
            reader.run()
        except HP41Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Decoding Exceptions
# =============================================================================

class DecodeError(HP41Error):
    """Base exception for printer stream decoding errors."""
    pass


class GlyphIndexError(DecodeError):
    """
    A value outside [0, 128) was looked up in the glyph table.

    The HP 82143A character table has exactly 128 entries. The printer
    protocol uses the upper half of the byte range for spacing and
    control codes, so an out-of-table index is expected now and then and
    is recovered from by skipping the character.

    Attributes:
        index: The offending index value
    """

    def __init__(self, index: int, table_size: int = 128):
        self.index = index
        self.table_size = table_size
        super().__init__(
            f"glyph index {index} out of range (table has {table_size} entries)"
        )


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(HP41Error):
    """
    Invalid reader or serial port configuration.

    Attributes:
        setting: Name of the offending setting (optional)
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        self.setting = setting
        if setting:
            message = f"{setting}: {message}"
        super().__init__(message)


# =============================================================================
# Communication Exceptions
# =============================================================================

class CommsError(HP41Error):
    """Base exception for serial communication errors."""
    pass


class ConnectionError(CommsError):
    """
    Cannot establish or maintain the serial connection.

    Raised when:
    - The serial port cannot be opened
    - The serial port disappears during a capture
    - Permission is denied on the device node
    """
    pass

