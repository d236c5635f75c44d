"""Tests for benchmark configuration and logging setup."""

import logging

import numpy as np
import pytest

from isobench.config import (
    DEFAULT_LOG_LEVEL,
    LOG_ENV_VAR,
    SAMPLE_SPECS,
    SUB_SAMPLES,
    TOTAL_SAMPLES,
    BenchmarkConfig,
    ParameterSpec,
    configure_logging,
    parse_log_level,
)


class TestParameterSpec:
    """Test ParameterSpec validation."""

    def test_valid_value(self):
        """In-range integers pass through."""
        spec = ParameterSpec("count", 1, 10, 5)
        assert spec.validate(1) == 1
        assert spec.validate(10) == 10
        assert spec.validate(np.int64(7)) == 7

    def test_out_of_range_raises(self):
        """Values outside the range raise ValueError."""
        spec = ParameterSpec("count", 1, 10, 5)
        with pytest.raises(ValueError, match="count=0 is outside valid range"):
            spec.validate(0)
        with pytest.raises(ValueError, match="count=11 is outside valid range"):
            spec.validate(11)

    def test_non_integer_raises(self):
        """Floats and bools are rejected."""
        spec = ParameterSpec("count", 1, 10, 5)
        with pytest.raises(TypeError, match="must be an integer"):
            spec.validate(2.5)
        with pytest.raises(TypeError, match="must be an integer"):
            spec.validate(True)

    def test_repr(self):
        """repr shows the range."""
        assert "range=[1, 10]" in repr(ParameterSpec("count", 1, 10, 5))


class TestBenchmarkConfig:
    """Test BenchmarkConfig defaults and validation."""

    def test_defaults(self):
        """Defaults are 1000 outer samples x 100000 inner iterations."""
        config = BenchmarkConfig()
        assert config.total_samples == TOTAL_SAMPLES.default == 1000
        assert config.sub_samples == SUB_SAMPLES.default == 100_000
        assert config.seed is None
        assert config.total_operations == 100_000_000

    def test_invalid_counts(self):
        """Zero or non-integer counts are rejected."""
        with pytest.raises(ValueError):
            BenchmarkConfig(total_samples=0)
        with pytest.raises(TypeError):
            BenchmarkConfig(sub_samples=10.0)

    def test_invalid_seed(self):
        """Seed must be an integer or None."""
        with pytest.raises(TypeError, match="seed"):
            BenchmarkConfig(seed="42")

    def test_negative_seed_rejected(self):
        """A negative seed fails at construction."""
        with pytest.raises(ValueError, match="seed=-1"):
            BenchmarkConfig(seed=-1)

    def test_numpy_integers_accepted(self):
        """NumPy integer counts and seeds are stored as plain ints."""
        config = BenchmarkConfig(
            total_samples=np.int64(3), sub_samples=np.int32(5), seed=np.uint32(9)
        )
        assert config.total_samples == 3
        assert type(config.total_samples) is int
        assert type(config.sub_samples) is int
        assert type(config.seed) is int
        assert config.total_operations == 15

    def test_counts_checked_against_sample_specs(self):
        """Each count is validated by its entry in SAMPLE_SPECS."""
        assert set(SAMPLE_SPECS) == {"total_samples", "sub_samples"}
        with pytest.raises(ValueError, match="sub_samples=0"):
            BenchmarkConfig(sub_samples=0)
        with pytest.raises(ValueError, match="total_samples=1000001"):
            BenchmarkConfig(total_samples=1_000_001)

    def test_frozen(self):
        """Config is immutable."""
        config = BenchmarkConfig(total_samples=2, sub_samples=3, seed=1)
        with pytest.raises(AttributeError):
            config.total_samples = 5


class TestLogging:
    """Test log level handling."""

    @pytest.mark.parametrize(
        "name,level",
        [("info", logging.INFO), ("DEBUG", logging.DEBUG), (" warn ", logging.WARNING)],
    )
    def test_parse_log_level(self, name, level):
        """Level names are case-insensitive and trimmed."""
        assert parse_log_level(name) == level

    def test_unknown_level_raises(self):
        """Unknown names raise ValueError naming the variable."""
        with pytest.raises(ValueError, match=LOG_ENV_VAR):
            parse_log_level("loud")

    def test_configure_logging_from_mapping(self):
        """The level is read from the given mapping."""
        assert configure_logging({LOG_ENV_VAR: "error"}) == logging.ERROR

    def test_configure_logging_default(self):
        """A missing variable falls back to the default level."""
        assert DEFAULT_LOG_LEVEL == "info"
        assert configure_logging({}) == logging.INFO

    def test_configure_logging_reads_environment(self, monkeypatch):
        """Without a mapping the process environment is used."""
        monkeypatch.setenv(LOG_ENV_VAR, "debug")
        assert configure_logging() == logging.DEBUG
