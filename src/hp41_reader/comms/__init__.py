"""
HP-41 Printer Communication Module
==================================

This module connects the printer stream decoder to the outside world:

- **serial**: serial port utilities (detection, configuration, DTR)
- **reader**: the read loop that feeds a decoder, plus offline decoding

Quick Start
-----------
    from hp41_reader.comms import PrinterReader, open_serial_port
    from hp41_reader.printer import DecoderMode

    port = open_serial_port('/dev/ttyUSB0', dtr_mode=True)
    reader = PrinterReader(port, DecoderMode.DTR, sink=print)
    try:
        reader.run()
    finally:
        reader.disconnect()

Thread Safety
-------------
The reader is NOT thread-safe. Drive it from a single thread and pass
lines to other threads through a LineChannel.
"""

from hp41_reader.comms.reader import (
    ByteSource,
    PrinterReader,
    decode_bytes,
    decode_chunks,
)
from hp41_reader.comms.serial import (
    COMMON_BAUD_RATES,
    DEFAULT_BAUD_RATE,
    DEFAULT_DATA_BITS,
    DEFAULT_PARITY,
    DEFAULT_STOP_BITS,
    DEFAULT_TIMEOUT,
    PARITY_OPTIONS,
    PREFERRED_PORT,
    VALID_DATA_BITS,
    VALID_STOP_BITS,
    PortInfo,
    close_serial_port,
    find_printer_port,
    format_port_list,
    list_serial_ports,
    open_serial_port,
)

__all__ = [
    # Serial constants
    "COMMON_BAUD_RATES",
    "DEFAULT_BAUD_RATE",
    "DEFAULT_DATA_BITS",
    "DEFAULT_STOP_BITS",
    "DEFAULT_PARITY",
    "DEFAULT_TIMEOUT",
    "PARITY_OPTIONS",
    "PREFERRED_PORT",
    "VALID_DATA_BITS",
    "VALID_STOP_BITS",
    # Serial
    "PortInfo",
    "list_serial_ports",
    "find_printer_port",
    "open_serial_port",
    "close_serial_port",
    "format_port_list",
    # Reader
    "ByteSource",
    "PrinterReader",
    "decode_chunks",
    "decode_bytes",
]
