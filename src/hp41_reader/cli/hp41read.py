"""
hp41read - HP-41 Printer Capture Command-Line Interface
=======================================================

This module implements the command-line interface for capturing and
decoding the HP-41 printer stream.

Usage Examples
--------------
List available serial ports:
    $ hp41read ports

Capture live printer output (legacy USB interface):
    $ hp41read capture --port /dev/ttyUSB0

Capture from a TULIP4041 / DTR interface with listing line numbers:
    $ hp41read capture --dtr

Decode a raw capture file offline:
    $ hp41read decode capture.bin --dtr

Configuration
-------------
Settings default to 115200 baud, 8N1, DTR off. The HP41_PORT, HP41_BAUD,
HP41_DATA_BITS, HP41_STOP_BITS, HP41_PARITY, HP41_DTR and HP41_TIMEOUT
environment variables override the defaults; command-line options
override both.

Exit Codes
----------
0 - Success
1 - Connection, configuration or decoding error
2 - Invalid arguments
3 - Internal error
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hp41_reader import __version__
from hp41_reader.cli.errors import handle_cli_exception
from hp41_reader.comms import (
    COMMON_BAUD_RATES,
    PARITY_OPTIONS,
    VALID_DATA_BITS,
    VALID_STOP_BITS,
    PrinterReader,
    decode_bytes,
    find_printer_port,
    format_port_list,
    list_serial_ports,
    open_serial_port,
)
from hp41_reader.config import ReaderConfig
from hp41_reader.errors import HP41Error
from hp41_reader.printer import DecoderMode, LineChannel

# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Holds the configuration assembled from the environment and the
    global options.
    """

    def __init__(self) -> None:
        self.config: ReaderConfig = ReaderConfig()
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.WARNING
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s" if self.verbose else "%(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


def echo_line(line: str) -> None:
    """Write one decoded line to stdout as soon as it arrives."""
    click.echo(line, nl=False)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable verbose output (includes a per-byte trace)",
)
@click.version_option(version=__version__, prog_name="hp41read")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Capture and decode HP-41 printer output from a serial interface.

    Use 'hp41read ports' to list available serial ports.
    """
    ctx.verbose = verbose
    ctx.setup_logging()
    ctx.config = ReaderConfig.from_env()


# =============================================================================
# Ports Command
# =============================================================================

@main.command()
@click.option(
    "--detailed", "-d",
    is_flag=True,
    help="Show detailed port information",
)
@pass_context
def ports(ctx: Context, detailed: bool) -> None:
    """
    List available serial ports.

    Example:
        hp41read ports
        hp41read ports --detailed
    """
    port_list = list_serial_ports()

    if not port_list:
        click.echo("No serial ports found.")
        click.echo("\nTips:")
        click.echo("  - Connect your printer interface")
        click.echo("  - On Linux, ensure you have permission (dialout group)")
        return

    click.echo("Available serial ports:")
    click.echo(format_port_list(port_list, verbose=detailed))

    auto_port = find_printer_port()
    if auto_port:
        click.echo(f"\nSuggested port: {auto_port}")


# =============================================================================
# Capture Command
# =============================================================================

@main.command()
@click.option(
    "-p", "--port",
    type=str,
    default=None,
    help="Serial port device (auto-detect if not specified)",
)
@click.option(
    "-b", "--baud",
    type=click.Choice([str(b) for b in COMMON_BAUD_RATES]),
    default=None,
    help="Baud rate (default: 115200)",
)
@click.option(
    "--data-bits",
    type=click.Choice([str(b) for b in VALID_DATA_BITS]),
    default=None,
    help="Data bits (default: 8)",
)
@click.option(
    "--stop-bits",
    type=click.Choice([str(b) for b in VALID_STOP_BITS]),
    default=None,
    help="Stop bits (default: 1)",
)
@click.option(
    "--parity",
    type=click.Choice(list(PARITY_OPTIONS), case_sensitive=False),
    default=None,
    help="Parity (default: None)",
)
@click.option(
    "--dtr/--no-dtr", "dtr_mode",
    default=None,
    help="DTR/TULIP4041 interface mode (default: off)",
)
@pass_context
def capture(
    ctx: Context,
    port: Optional[str],
    baud: Optional[str],
    data_bits: Optional[str],
    stop_bits: Optional[str],
    parity: Optional[str],
    dtr_mode: Optional[bool],
) -> None:
    """
    Capture printer output and print decoded lines.

    Lines are written to stdout as they complete. Press Ctrl+C to stop;
    a line still being printed at that moment is dropped.

    Example:
        hp41read capture --port /dev/ttyUSB0
        hp41read capture --dtr --baud 9600
    """
    config = ctx.config.with_overrides(
        port=port,
        baud_rate=int(baud) if baud else None,
        data_bits=int(data_bits) if data_bits else None,
        stop_bits=int(stop_bits) if stop_bits else None,
        parity=parity.capitalize() if parity else None,
        dtr_mode=dtr_mode,
    )

    try:
        config.validate()
    except HP41Error as e:
        handle_cli_exception(e, ctx.verbose, "Configuration")

    port_device = config.port or find_printer_port()
    if not port_device:
        click.echo("Error: No serial port specified and auto-detect failed.", err=True)
        click.echo("Use --port option or 'hp41read ports' to find available ports.", err=True)
        raise SystemExit(1)

    mode = config.decoder_mode
    click.echo(f"Connecting to {port_device} ({mode.name} mode)...", err=True)

    try:
        serial_port = open_serial_port(
            port_device,
            baud_rate=config.baud_rate,
            data_bits=config.data_bits,
            stop_bits=config.stop_bits,
            parity=config.parity,
            dtr_mode=config.dtr_mode,
            timeout=config.timeout,
        )
    except (HP41Error, ValueError) as e:
        handle_cli_exception(e, ctx.verbose, "Connection")

    error: Optional[HP41Error] = None
    with LineChannel(echo_line) as channel:
        reader = PrinterReader(serial_port, mode, channel.put, config.chunk_size)
        click.echo("Waiting for printer output... (Ctrl+C to stop)", err=True)
        try:
            reader.run()
        except KeyboardInterrupt:
            pass
        except HP41Error as e:
            error = e
        finally:
            reader.disconnect()

    if error is not None:
        handle_cli_exception(error, ctx.verbose, "Connection")

    click.echo(f"\nCapture ended ({reader.bytes_received} bytes).", err=True)


# =============================================================================
# Decode Command
# =============================================================================

@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--dtr/--no-dtr", "dtr_mode",
    default=None,
    help="Decode as DTR/TULIP4041 stream (default: off)",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Feed the decoder in chunks of N bytes (result is identical)",
)
@pass_context
def decode(
    ctx: Context,
    file: Path,
    dtr_mode: Optional[bool],
    chunk_size: Optional[int],
) -> None:
    """
    Decode a raw printer capture file.

    FILE holds the bytes exactly as received from the serial port.

    Example:
        hp41read decode capture.bin
        hp41read decode listing.bin --dtr
    """
    config = ctx.config.with_overrides(dtr_mode=dtr_mode)

    try:
        data = file.read_bytes()
    except OSError as e:
        handle_cli_exception(e, ctx.verbose)

    logger.info("Decoding %d bytes from %s", len(data), file)
    text = decode_bytes(data, DecoderMode.from_flag(config.dtr_mode), chunk_size)
    click.echo(text, nl=False)


if __name__ == "__main__":
    main()
