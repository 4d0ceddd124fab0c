"""
HP-41 Reader - Test Configuration
=================================

Shared fixtures for the test suite:
- a fake serial port that replays a byte capture
- byte helpers for building printer streams from text
"""

import pytest
import serial

from hp41_reader.printer.charset import GLYPH_TABLE


class FakeSerialPort:
    """
    Stand-in for serial.Serial that replays a fixed capture.

    ``read`` returns up to ``size`` bytes. Once the capture is exhausted it
    returns b"" (like a read timeout), or raises ``fail_when_empty`` if one
    is given: True means SerialException (an unplugged adapter), and an
    exception class such as KeyboardInterrupt is raised as is.
    """

    def __init__(self, data: bytes = b"", fail_when_empty=False):
        self._buffer = bytearray(data)
        self.fail_when_empty = fail_when_empty
        self.is_open = True
        self.read_sizes: list[int] = []
        self.dtr = False

    @property
    def in_waiting(self) -> int:
        return len(self._buffer)

    def read(self, size: int = 1) -> bytes:
        if not self._buffer and self.fail_when_empty:
            if self.fail_when_empty is True:
                raise serial.SerialException("device reports readiness to read but returned no data")
            raise self.fail_when_empty()
        self.read_sizes.append(size)
        chunk = bytes(self._buffer[:size])
        del self._buffer[:size]
        return chunk

    def close(self) -> None:
        self.is_open = False


def printer_bytes(text: str) -> bytes:
    """Encode text as glyph codes (no framing bytes)."""
    return bytes(GLYPH_TABLE.index(ch) for ch in text)


@pytest.fixture
def fake_port():
    """Factory fixture: fake_port(data, fail_when_empty=False)."""
    def _make(data: bytes = b"", fail_when_empty=False) -> FakeSerialPort:
        return FakeSerialPort(data, fail_when_empty)
    return _make


@pytest.fixture
def encode():
    """Fixture exposing printer_bytes() to tests."""
    return printer_bytes
