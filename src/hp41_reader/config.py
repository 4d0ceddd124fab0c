"""
HP-41 Reader - Configuration
============================

Serial and decoder settings for a capture session. Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of the above)

Defaults match the usual HP-IL/USB printer interface setup: 115200 baud,
8 data bits, no parity, 1 stop bit, DTR mode off.
"""

import logging
import os
from dataclasses import dataclass, replace
from typing import Optional

from hp41_reader.comms.serial import (
    COMMON_BAUD_RATES,
    DEFAULT_BAUD_RATE,
    DEFAULT_DATA_BITS,
    DEFAULT_PARITY,
    DEFAULT_STOP_BITS,
    DEFAULT_TIMEOUT,
    PARITY_OPTIONS,
    VALID_DATA_BITS,
    VALID_STOP_BITS,
)
from hp41_reader.errors import ConfigError
from hp41_reader.printer.decoder import DecoderMode

# Configure module logger
logger = logging.getLogger(__name__)

# Values accepted as "true" in boolean environment variables
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")

# Default number of bytes requested per serial read
DEFAULT_CHUNK_SIZE = 256


@dataclass
class ReaderConfig:
    """
    Settings for one printer capture connection.

    Attributes:
        port: Serial device path (None = auto-detect)
        baud_rate: Serial baud rate (default: 115200)
        data_bits: Data bits per character (5-8, default: 8)
        stop_bits: Stop bits (1 or 2, default: 1)
        parity: "None", "Even" or "Odd" (default: "None")
        dtr_mode: True for DTR/TULIP4041 interfaces (default: False)
        timeout: Serial read timeout in seconds (default: 1.0)
        chunk_size: Maximum bytes per read (default: 256)
    """

    port: Optional[str] = None
    baud_rate: int = DEFAULT_BAUD_RATE
    data_bits: int = DEFAULT_DATA_BITS
    stop_bits: int = DEFAULT_STOP_BITS
    parity: str = DEFAULT_PARITY
    dtr_mode: bool = False
    timeout: float = DEFAULT_TIMEOUT
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # ═══════════════════════════════════════════════════════════════════════════
    # FACTORY METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "ReaderConfig":
        """
        Create ReaderConfig from environment variables.

        Environment variables (all optional):
            HP41_PORT: Serial device path
            HP41_BAUD: Baud rate (integer)
            HP41_DATA_BITS: Data bits (integer)
            HP41_STOP_BITS: Stop bits (integer)
            HP41_PARITY: Parity ("None", "Even", "Odd")
            HP41_DTR: DTR mode ("1"/"true"/"yes"/"on" or "0"/"false"/...)
            HP41_TIMEOUT: Read timeout in seconds (float)

        Invalid values are logged and ignored.

        Args:
            environ: Mapping to read instead of os.environ (for testing).

        Returns:
            ReaderConfig with values from the environment
        """
        env = os.environ if environ is None else environ
        config = cls()

        if port := env.get("HP41_PORT"):
            config.port = port

        for var, attr in (
            ("HP41_BAUD", "baud_rate"),
            ("HP41_DATA_BITS", "data_bits"),
            ("HP41_STOP_BITS", "stop_bits"),
        ):
            if value := env.get(var):
                try:
                    setattr(config, attr, int(value))
                except ValueError:
                    logger.warning("Ignoring invalid %s=%r", var, value)

        if parity := env.get("HP41_PARITY"):
            if parity.capitalize() in PARITY_OPTIONS:
                config.parity = parity.capitalize()
            else:
                logger.warning("Ignoring invalid HP41_PARITY=%r", parity)

        if dtr := env.get("HP41_DTR"):
            if dtr.lower() in _TRUE_VALUES:
                config.dtr_mode = True
            elif dtr.lower() in _FALSE_VALUES:
                config.dtr_mode = False
            else:
                logger.warning("Ignoring invalid HP41_DTR=%r", dtr)

        if timeout := env.get("HP41_TIMEOUT"):
            try:
                config.timeout = float(timeout)
            except ValueError:
                logger.warning("Ignoring invalid HP41_TIMEOUT=%r", timeout)

        return config

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPER METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    def with_overrides(self, **overrides) -> "ReaderConfig":
        """
        Return a copy with the given fields replaced.

        Overrides whose value is None are skipped, so unset CLI options
        leave the existing value in place.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    @property
    def decoder_mode(self) -> DecoderMode:
        return DecoderMode.from_flag(self.dtr_mode)

    def validate(self) -> None:
        """
        Check that all settings are usable.

        Raises:
            ConfigError: If a setting is out of range.
        """
        if self.baud_rate not in COMMON_BAUD_RATES:
            valid = ", ".join(str(b) for b in COMMON_BAUD_RATES)
            raise ConfigError(
                f"unsupported rate {self.baud_rate} (valid: {valid})",
                setting="baud_rate",
            )
        if self.data_bits not in VALID_DATA_BITS:
            raise ConfigError(f"must be one of {VALID_DATA_BITS}", setting="data_bits")
        if self.stop_bits not in VALID_STOP_BITS:
            raise ConfigError(f"must be one of {VALID_STOP_BITS}", setting="stop_bits")
        if self.parity not in PARITY_OPTIONS:
            raise ConfigError(f"must be one of {PARITY_OPTIONS}", setting="parity")
        if self.timeout <= 0:
            raise ConfigError("must be positive", setting="timeout")
        if self.chunk_size < 1:
            raise ConfigError("must be at least 1", setting="chunk_size")
