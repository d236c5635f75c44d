"""Configuration module for isobench runs.

Usage:
    from isobench.config import BenchmarkConfig, configure_logging
    config = BenchmarkConfig(total_samples=10, sub_samples=1000)
"""

from isobench.config.params import SAMPLE_SPECS, SUB_SAMPLES, TOTAL_SAMPLES, ParameterSpec
from isobench.config.values import (
    DEFAULT_LOG_LEVEL,
    LOG_ENV_VAR,
    BenchmarkConfig,
    configure_logging,
    parse_log_level,
)

__all__ = [
    "ParameterSpec",
    "BenchmarkConfig",
    "SAMPLE_SPECS",
    "TOTAL_SAMPLES",
    "SUB_SAMPLES",
    "LOG_ENV_VAR",
    "DEFAULT_LOG_LEVEL",
    "configure_logging",
    "parse_log_level",
]
