"""
Tests for ReaderConfig
======================

Covers defaults, environment overrides, CLI-style overrides and validation.
"""

import pytest

from hp41_reader.config import DEFAULT_CHUNK_SIZE, ReaderConfig
from hp41_reader.errors import ConfigError, HP41Error
from hp41_reader.printer.decoder import DecoderMode


class TestReaderConfigDefaults:
    """Tests for default settings."""

    def test_defaults(self):
        config = ReaderConfig()
        assert config.port is None
        assert config.baud_rate == 115200
        assert config.data_bits == 8
        assert config.stop_bits == 1
        assert config.parity == "None"
        assert config.dtr_mode is False
        assert config.timeout == 1.0
        assert config.chunk_size == DEFAULT_CHUNK_SIZE

    def test_defaults_are_valid(self):
        ReaderConfig().validate()  # Should not raise

    def test_decoder_mode(self):
        assert ReaderConfig().decoder_mode is DecoderMode.LEGACY
        assert ReaderConfig(dtr_mode=True).decoder_mode is DecoderMode.DTR


class TestReaderConfigFromEnv:
    """Tests for ReaderConfig.from_env()."""

    def test_empty_environment(self):
        assert ReaderConfig.from_env({}) == ReaderConfig()

    def test_all_variables(self):
        config = ReaderConfig.from_env({
            "HP41_PORT": "/dev/ttyUSB3",
            "HP41_BAUD": "9600",
            "HP41_DATA_BITS": "7",
            "HP41_STOP_BITS": "2",
            "HP41_PARITY": "odd",
            "HP41_DTR": "yes",
            "HP41_TIMEOUT": "0.5",
        })
        assert config.port == "/dev/ttyUSB3"
        assert config.baud_rate == 9600
        assert config.data_bits == 7
        assert config.stop_bits == 2
        assert config.parity == "Odd"
        assert config.dtr_mode is True
        assert config.timeout == 0.5

    @pytest.mark.parametrize("value,expected", [
        ("1", True), ("true", True), ("ON", True),
        ("0", False), ("false", False), ("Off", False),
    ])
    def test_dtr_values(self, value, expected):
        assert ReaderConfig.from_env({"HP41_DTR": value}).dtr_mode is expected

    def test_invalid_values_ignored(self, caplog):
        config = ReaderConfig.from_env({
            "HP41_BAUD": "fast",
            "HP41_PARITY": "Mark",
            "HP41_DTR": "maybe",
            "HP41_TIMEOUT": "soon",
        })
        assert config == ReaderConfig()
        assert "HP41_BAUD" in caplog.text
        assert "HP41_PARITY" in caplog.text
        assert "HP41_DTR" in caplog.text
        assert "HP41_TIMEOUT" in caplog.text

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("HP41_DTR", "1")
        assert ReaderConfig.from_env().dtr_mode is True


class TestReaderConfigOverrides:
    """Tests for with_overrides() and validate()."""

    def test_overrides(self):
        config = ReaderConfig().with_overrides(port="/dev/ttyS0", dtr_mode=True)
        assert config.port == "/dev/ttyS0"
        assert config.dtr_mode is True

    def test_none_overrides_skipped(self):
        base = ReaderConfig(dtr_mode=True, baud_rate=9600)
        config = base.with_overrides(dtr_mode=None, baud_rate=None)
        assert config == base

    def test_false_override_applied(self):
        config = ReaderConfig(dtr_mode=True).with_overrides(dtr_mode=False)
        assert config.dtr_mode is False

    def test_overrides_return_copy(self):
        base = ReaderConfig()
        base.with_overrides(port="/dev/ttyS0")
        assert base.port is None

    @pytest.mark.parametrize("field,value", [
        ("baud_rate", 1234),
        ("data_bits", 9),
        ("stop_bits", 0),
        ("parity", "Mark"),
        ("timeout", 0),
        ("chunk_size", 0),
    ])
    def test_validate_rejects(self, field, value):
        config = ReaderConfig(**{field: value})
        with pytest.raises(ConfigError) as exc_info:
            config.validate()
        assert exc_info.value.setting == field
        assert field in str(exc_info.value)

    def test_config_error_hierarchy(self):
        assert issubclass(ConfigError, HP41Error)
