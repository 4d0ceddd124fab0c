"""
Serial Port Utilities for HP-41 Printer Capture
===============================================

This module provides utilities for managing the serial connection that
carries the HP-41 printer stream. It handles:

- Port enumeration and detection
- Automatic selection of a likely printer interface
- Port configuration, including DTR assertion for TULIP4041-style
  interfaces
- Platform-independent operation

Hardware
--------
The printer stream reaches the PC through one of two kinds of interface:

1. **USB (legacy)**: an HP-IL or printer-port bridge that presents a
   USB-serial device. DTR is left deasserted.
2. **DTR (TULIP4041)**: interfaces that only transmit while the host
   asserts DTR. These also batch end-of-line codes differently, which the
   decoder accounts for.

Serial Port Settings
--------------------
Typical settings:
- Baud Rate: 115200 (300 - 921600 accepted)
- Data Bits: 8
- Parity: None
- Stop Bits: 1
- Flow Control: None
"""

import logging
from dataclasses import dataclass
from typing import Final, Optional

import serial
import serial.tools.list_ports

from hp41_reader.errors import ConnectionError

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Baud rates offered for the printer interface
COMMON_BAUD_RATES: Final[tuple[int, ...]] = (
    300, 1200, 2400, 4800, 9600,
    14400, 19200, 38400, 57600,
    115200, 230400, 460800, 921600,
)

DEFAULT_BAUD_RATE: Final[int] = 115200

VALID_DATA_BITS: Final[tuple[int, ...]] = (5, 6, 7, 8)
DEFAULT_DATA_BITS: Final[int] = 8

VALID_STOP_BITS: Final[tuple[int, ...]] = (1, 2)
DEFAULT_STOP_BITS: Final[int] = 1

PARITY_OPTIONS: Final[tuple[str, ...]] = ("None", "Even", "Odd")
DEFAULT_PARITY: Final[str] = "None"

# Default read timeout in seconds
DEFAULT_TIMEOUT: Final[float] = 1.0

# Device path of the reference USB printer interface (macOS naming)
PREFERRED_PORT: Final[str] = "/dev/cu.usbserial-00301314"

_BYTESIZES: Final[dict[int, int]] = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}

_STOPBITS: Final[dict[int, float]] = {
    1: serial.STOPBITS_ONE,
    2: serial.STOPBITS_TWO,
}

_PARITIES: Final[dict[str, str]] = {
    "None": serial.PARITY_NONE,
    "Even": serial.PARITY_EVEN,
    "Odd": serial.PARITY_ODD,
}

# USB Vendor IDs for common USB-serial adapters
USB_VENDOR_IDS: Final[dict[int, str]] = {
    0x0403: "FTDI",       # Future Technology Devices International
    0x10C4: "Silicon Labs",  # Silicon Labs CP210x
    0x067B: "Prolific",   # Prolific Technology
    0x1A86: "QinHeng",    # QinHeng Electronics (CH340)
    0x2E8A: "Raspberry Pi",  # RP2040-based interfaces (TULIP4041)
}


# =============================================================================
# Port Information
# =============================================================================

@dataclass(frozen=True)
class PortInfo:
    """
    Information about an available serial port.

    Attributes:
        device: System device path (e.g., '/dev/ttyUSB0', 'COM3')
        description: Human-readable description from the driver
        manufacturer: Device manufacturer (if available)
        product: Product name (if available)
        serial_number: Device serial number (if available)
        vid: USB Vendor ID (None for non-USB ports)
        pid: USB Product ID (None for non-USB ports)
    """

    device: str
    description: str
    manufacturer: Optional[str]
    product: Optional[str]
    serial_number: Optional[str]
    vid: Optional[int]
    pid: Optional[int]

    @property
    def is_usb(self) -> bool:
        """Return True if this is a USB-serial adapter."""
        return self.vid is not None

    @property
    def vendor_name(self) -> Optional[str]:
        """Return the vendor name for known USB adapters."""
        if self.vid is not None:
            return USB_VENDOR_IDS.get(self.vid)
        return None

    def __str__(self) -> str:
        parts = [self.device]
        if self.description:
            parts.append(f"- {self.description}")
        if self.vendor_name:
            parts.append(f"({self.vendor_name})")
        return " ".join(parts)


# =============================================================================
# Port Enumeration
# =============================================================================

def list_serial_ports() -> list[PortInfo]:
    """
    List all available serial ports on the system.

    Returns:
        List of PortInfo objects describing available ports.

    Example:
        >>> for port in list_serial_ports():
        ...     print(f"{port.device}: {port.description}")
        /dev/ttyUSB0: USB Serial Port (FTDI)
    """
    ports = []

    for port in serial.tools.list_ports.comports():
        info = PortInfo(
            device=port.device,
            description=port.description or "",
            manufacturer=port.manufacturer,
            product=port.product,
            serial_number=port.serial_number,
            vid=port.vid,
            pid=port.pid,
        )
        ports.append(info)
        logger.debug(
            "Found port: %s (vid=%s, pid=%s)",
            port.device,
            f"{port.vid:04X}" if port.vid else "N/A",
            f"{port.pid:04X}" if port.pid else "N/A",
        )

    return ports


def find_printer_port(preferred: str = PREFERRED_PORT) -> Optional[str]:
    """
    Pick the serial port most likely to carry the printer stream.

    Detection Priority:
    1. The preferred device path, if present
    2. FTDI or Silicon Labs USB adapters
    3. Any other USB-serial adapter
    4. The first port on the system
    5. None if there are no ports at all

    Args:
        preferred: Device path to use whenever it is available.

    Returns:
        Device path of the selected port, or None.
    """
    ports = list_serial_ports()

    if not ports:
        logger.debug("No serial ports found")
        return None

    for port in ports:
        if port.device == preferred:
            logger.info("Using preferred port: %s", port.device)
            return port.device

    usb_ports = [p for p in ports if p.is_usb]

    for vid in [0x0403, 0x10C4]:  # FTDI, Silicon Labs
        for port in usb_ports:
            if port.vid == vid:
                logger.info(
                    "Auto-detected port: %s (%s)",
                    port.device, port.vendor_name
                )
                return port.device

    fallback = usb_ports[0] if usb_ports else ports[0]
    logger.info(
        "Using first available port: %s (%s)",
        fallback.device, fallback.description
    )
    return fallback.device


# =============================================================================
# Port Configuration
# =============================================================================

def open_serial_port(
    device: str,
    baud_rate: int = DEFAULT_BAUD_RATE,
    data_bits: int = DEFAULT_DATA_BITS,
    stop_bits: int = DEFAULT_STOP_BITS,
    parity: str = DEFAULT_PARITY,
    dtr_mode: bool = False,
    timeout: float = DEFAULT_TIMEOUT,
) -> serial.Serial:
    """
    Open and configure a serial port for printer capture.

    Flow control is always disabled. In DTR mode the DTR line is asserted
    after opening so the interface starts transmitting.

    Args:
        device: Serial port device path (e.g., '/dev/ttyUSB0', 'COM3').
        baud_rate: One of COMMON_BAUD_RATES.
        data_bits: 5, 6, 7 or 8.
        stop_bits: 1 or 2.
        parity: "None", "Even" or "Odd".
        dtr_mode: Assert DTR (TULIP4041-style interfaces).
        timeout: Read timeout in seconds.

    Returns:
        Configured and opened serial.Serial object.

    Raises:
        ConnectionError: If the port cannot be opened or configured.
        ValueError: If a setting is not valid.

    Note:
        The caller is responsible for closing the port when done.
    """
    if baud_rate not in COMMON_BAUD_RATES:
        valid_str = ", ".join(str(b) for b in COMMON_BAUD_RATES)
        raise ValueError(
            f"Invalid baud rate: {baud_rate}. Valid rates: {valid_str}"
        )
    if data_bits not in _BYTESIZES:
        raise ValueError(f"Invalid data bits: {data_bits}")
    if stop_bits not in _STOPBITS:
        raise ValueError(f"Invalid stop bits: {stop_bits}")
    if parity not in _PARITIES:
        raise ValueError(
            f"Invalid parity: {parity}. Valid: {', '.join(PARITY_OPTIONS)}"
        )

    logger.info(
        "Opening serial port: %s at %d baud (%d%s%d, DTR %s)",
        device, baud_rate, data_bits, parity[0], stop_bits,
        "on" if dtr_mode else "off",
    )

    try:
        port = serial.Serial(
            port=device,
            baudrate=baud_rate,
            bytesize=_BYTESIZES[data_bits],
            parity=_PARITIES[parity],
            stopbits=_STOPBITS[stop_bits],
            timeout=timeout,
            xonxoff=False,      # No software flow control
            rtscts=False,       # No hardware flow control
            dsrdtr=False,       # DTR is driven manually below
        )

        port.dtr = dtr_mode
        port.reset_input_buffer()

        logger.debug("Port opened: %s (timeout=%.1f)", device, timeout)

        return port

    except serial.SerialException as e:
        error_msg = str(e)

        if "Permission denied" in error_msg:
            raise ConnectionError(
                f"Permission denied accessing {device}. "
                "You may need to add your user to the 'dialout' group: "
                "sudo usermod -a -G dialout $USER"
            )
        elif "No such file" in error_msg or "not found" in error_msg.lower():
            raise ConnectionError(
                f"Serial port not found: {device}. "
                "Use 'hp41read ports' to list available ports."
            )
        elif "busy" in error_msg.lower() or "in use" in error_msg.lower():
            raise ConnectionError(
                f"Serial port {device} is busy. "
                "Close any other programs using the port."
            )
        else:
            raise ConnectionError(f"Cannot open {device}: {e}")


def close_serial_port(port: Optional[serial.Serial]) -> None:
    """
    Safely close a serial port.

    Errors during close are logged, not raised: the port is being
    abandoned either way.

    Args:
        port: Serial port object to close (None is accepted).
    """
    if port is None:
        return

    try:
        if port.is_open:
            port.close()
            logger.info("Serial port disconnected")
    except Exception as e:
        logger.warning("Error closing serial port: %s", e)


# =============================================================================
# Display Helpers
# =============================================================================

def format_port_list(ports: list[PortInfo], verbose: bool = False) -> str:
    """
    Format a list of ports for display to the user.

    Args:
        ports: List of PortInfo objects to format.
        verbose: If True, include additional details.

    Returns:
        Formatted string with one port per line.
    """
    if not ports:
        return "No serial ports found."

    lines = []
    for port in ports:
        if verbose:
            line = f"  {port.device}"
            if port.description:
                line += f"\n    Description: {port.description}"
            if port.manufacturer:
                line += f"\n    Manufacturer: {port.manufacturer}"
            if port.product:
                line += f"\n    Product: {port.product}"
            if port.vid is not None:
                line += f"\n    USB VID:PID: {port.vid:04X}:{(port.pid or 0):04X}"
                if port.vendor_name:
                    line += f" ({port.vendor_name})"
            if port.serial_number:
                line += f"\n    Serial: {port.serial_number}"
            lines.append(line)
        else:
            lines.append(f"  {port}")

    return "\n".join(lines)
