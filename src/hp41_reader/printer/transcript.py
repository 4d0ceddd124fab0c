"""
Transcript and Ordered Line Hand-off
====================================

The decoder runs on whichever thread reads the serial port. Whatever shows
the output (a terminal, a GUI text view, a log file) may live on another
thread. This module provides the two pieces between them:

- **Transcript**: an append-only text store of completed lines.
- **LineChannel**: a FIFO queue with a consumer thread that delivers
  completed lines in exactly the order the decoder produced them.

Usage
-----
    transcript = Transcript()
    with LineChannel(transcript.append) as channel:
        decoder = LineDecoder(DecoderMode.DTR, channel.put)
        decoder.process_chunk(data)
    print(transcript.text)
"""

import logging
import queue
import threading
from typing import Callable, Optional

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Transcript
# =============================================================================

class Transcript:
    """
    Append-only store of completed printer lines.

    Appends are serialized with a lock so a consumer thread can append
    while another thread reads the text.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._lock = threading.Lock()

    def append(self, line: str) -> None:
        """Append one completed line (including its newline)."""
        with self._lock:
            self._lines.append(line)

    def clear(self) -> None:
        """Start over with an empty transcript."""
        with self._lock:
            self._lines.clear()

    @property
    def lines(self) -> list[str]:
        """Snapshot of the completed lines, in order."""
        with self._lock:
            return list(self._lines)

    @property
    def text(self) -> str:
        """The whole transcript as one string."""
        with self._lock:
            return "".join(self._lines)

    def __len__(self) -> int:
        with self._lock:
            return len(self._lines)

    def __str__(self) -> str:
        return self.text


# =============================================================================
# Line Channel
# =============================================================================

# Queue marker telling the consumer thread to stop
_STOP = object()


class LineChannel:
    """
    FIFO hand-off of completed lines to a consumer running on its own thread.

    ``put`` is meant to be the decoder's sink. The consumer callback is
    invoked on the channel thread, one line at a time, in put order.

    Args:
        consumer: Callable receiving each line.
        name: Thread name (useful in log output).
    """

    def __init__(
        self,
        consumer: Callable[[str], None],
        name: str = "hp41-line-channel",
    ):
        self._consumer = consumer
        self._queue: "queue.Queue[object]" = queue.Queue()
        self._thread: Optional[threading.Thread] = threading.Thread(
            target=self._drain, name=name, daemon=True
        )
        self._closed = False
        self._thread.start()

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, line: str) -> None:
        """
        Queue a completed line for the consumer.

        Raises:
            RuntimeError: If the channel has been closed.
        """
        if self._closed:
            raise RuntimeError("LineChannel is closed")
        self._queue.put(line)

    def join(self) -> None:
        """Block until every queued line has been consumed."""
        self._queue.join()

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Deliver all queued lines, then stop the consumer thread.

        Args:
            timeout: Maximum seconds to wait for the thread to finish.
        """
        if self._closed:
            return
        self._closed = True
        self._queue.put(_STOP)
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Line channel thread did not stop in time")
            self._thread = None

    def _drain(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                try:
                    self._consumer(item)
                except Exception:
                    logger.exception("Line consumer failed")
            finally:
                self._queue.task_done()

    def __enter__(self) -> "LineChannel":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
