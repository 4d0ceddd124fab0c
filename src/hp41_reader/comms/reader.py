"""
Printer Stream Reader
=====================

Connects an ordered byte-chunk source (normally an open serial port) to a
LineDecoder. The reader owns the decoder for the lifetime of one
connection:

- ``read_once`` pulls one chunk and decodes it
- ``run`` keeps reading until told to stop or the port goes away
- ``disconnect`` resets the decoder and closes the source

A line that is still being assembled when the connection ends is dropped.
Only complete lines ever reach the sink.

Offline Decoding
----------------
``decode_chunks`` and ``decode_bytes`` run a fresh decoder over captured
data and return the transcript text. They are what the ``hp41read decode``
command uses.
"""

import logging
import threading
from typing import Iterable, Optional, Protocol

import serial

from hp41_reader.comms.serial import close_serial_port
from hp41_reader.errors import ConnectionError
from hp41_reader.printer.decoder import DecoderMode, LineDecoder, LineSink
from hp41_reader.printer.transcript import Transcript

# Configure module logger
logger = logging.getLogger(__name__)


class ByteSource(Protocol):
    """Anything that delivers the printer stream in arrival order."""

    def read(self, size: int = 1) -> bytes:
        ...


# =============================================================================
# Reader
# =============================================================================

class PrinterReader:
    """
    Feeds a byte source into a LineDecoder for one connection.

    Not thread-safe: ``read_once`` / ``run`` must be called from one thread.
    Use a LineChannel as the sink to hand lines to another thread.

    Args:
        source: Open byte source (e.g., serial.Serial).
        mode: Printer interface variant.
        sink: Callable receiving each completed line.
        chunk_size: Maximum bytes requested per read.

    Example:
        >>> port = open_serial_port('/dev/ttyUSB0', dtr_mode=True)
        >>> reader = PrinterReader(port, DecoderMode.DTR, print)
        >>> try:
        ...     reader.run()
        ... finally:
        ...     reader.disconnect()
    """

    def __init__(
        self,
        source: ByteSource,
        mode: DecoderMode = DecoderMode.LEGACY,
        sink: Optional[LineSink] = None,
        chunk_size: int = 256,
    ):
        self.source = source
        self.chunk_size = chunk_size
        self.decoder = LineDecoder(mode, sink)
        self.bytes_received = 0
        self._connected = True

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def mode(self) -> DecoderMode:
        return self.decoder.mode

    def read_once(self) -> int:
        """
        Read one chunk from the source and decode it.

        Returns:
            Number of bytes decoded (0 on a read timeout).

        Raises:
            ConnectionError: If the reader is disconnected or the port fails.
        """
        if not self._connected:
            raise ConnectionError("Reader is disconnected")

        # in_waiting fails too when an adapter is unplugged
        try:
            waiting = getattr(self.source, "in_waiting", 0) or 0
            data = self.source.read(min(max(waiting, 1), self.chunk_size))
        except (serial.SerialException, OSError) as e:
            raise ConnectionError(f"Serial port lost: {e}") from e

        if data:
            self.bytes_received += len(data)
            self.decoder.process_chunk(data)
        return len(data)

    def run(self, stop_event: Optional[threading.Event] = None) -> None:
        """
        Read and decode until ``stop_event`` is set.

        Args:
            stop_event: Event that ends the loop. Without one, the loop
                runs until the source raises.
        """
        logger.info("Capturing printer output (%s mode)", self.mode.name)
        while stop_event is None or not stop_event.is_set():
            self.read_once()

    def disconnect(self) -> None:
        """
        End the connection.

        Resets the decoder (discarding any partial line and listing state)
        and closes the source if it can be closed.
        """
        if not self._connected:
            return
        self._connected = False
        self.decoder.reset()

        if hasattr(self.source, "is_open"):
            close_serial_port(self.source)
        elif (close := getattr(self.source, "close", None)) is not None:
            try:
                close()
            except Exception as e:
                logger.warning("Error closing byte source: %s", e)

        logger.info("Disconnected after %d bytes", self.bytes_received)


# =============================================================================
# Offline Decoding
# =============================================================================

def decode_chunks(
    chunks: Iterable[bytes],
    mode: DecoderMode = DecoderMode.LEGACY,
) -> str:
    """
    Decode a sequence of captured chunks with a fresh decoder.

    Args:
        chunks: Byte chunks in arrival order.
        mode: Printer interface variant.

    Returns:
        The transcript text (complete lines only).
    """
    transcript = Transcript()
    decoder = LineDecoder(mode, transcript.append)
    for chunk in chunks:
        decoder.process_chunk(chunk)
    return transcript.text


def decode_bytes(
    data: bytes,
    mode: DecoderMode = DecoderMode.LEGACY,
    chunk_size: Optional[int] = None,
) -> str:
    """
    Decode a complete capture, optionally split into fixed-size chunks.

    The chunk size never changes the result; it exists to reproduce how a
    given serial driver delivered the data.
    """
    if not chunk_size:
        return decode_chunks([data], mode)
    return decode_chunks(
        (data[i:i + chunk_size] for i in range(0, len(data), chunk_size)),
        mode,
    )
