"""Benchmark run configuration and logging setup."""

from __future__ import annotations

import logging
import numbers
import os
from dataclasses import dataclass

from isobench.config.params import SAMPLE_SPECS, SUB_SAMPLES, TOTAL_SAMPLES

LOG_ENV_VAR = "ISOBENCH_LOG"
DEFAULT_LOG_LEVEL = "info"

_LOG_LEVELS = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    # env_logger-style alias
    "trace": logging.DEBUG,
}


@dataclass(frozen=True)
class BenchmarkConfig:
    """Sample counts for a benchmark run.

    Example:
        >>> config = BenchmarkConfig(total_samples=10, sub_samples=1000, seed=42)
    """

    total_samples: int = TOTAL_SAMPLES.default
    sub_samples: int = SUB_SAMPLES.default
    seed: int | None = None

    def __post_init__(self):
        for name, spec in SAMPLE_SPECS.items():
            object.__setattr__(self, name, spec.validate(getattr(self, name)))
        if self.seed is None:
            return
        if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
            raise TypeError(f"seed must be an integer or None, got {type(self.seed).__name__}")
        if self.seed < 0:
            raise ValueError(f"seed={self.seed} must be non-negative")
        object.__setattr__(self, "seed", int(self.seed))

    @property
    def total_operations(self) -> int:
        """Inner iterations per representation across the whole run."""
        return self.total_samples * self.sub_samples


def parse_log_level(name: str) -> int:
    """Map a level name such as "info" or "DEBUG" to a logging level.

    :raises ValueError: If the name is not a known level
    """
    key = name.strip().lower()
    if key not in _LOG_LEVELS:
        raise ValueError(
            f"{LOG_ENV_VAR}={name!r} is not a valid log level "
            f"(expected one of {sorted(_LOG_LEVELS)})"
        )
    return _LOG_LEVELS[key]


def configure_logging(env: dict[str, str] | None = None) -> int:
    """Configure root logging from the ``ISOBENCH_LOG`` environment variable.

    :param env: Mapping to read from (defaults to ``os.environ``)
    :returns: The resolved logging level
    """
    env = os.environ if env is None else env
    level = parse_log_level(env.get(LOG_ENV_VAR, DEFAULT_LOG_LEVEL))
    logging.basicConfig(level=level, format="%(message)s")
    return level
