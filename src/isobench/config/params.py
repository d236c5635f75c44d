"""Parameter specifications for benchmark configuration.

This module defines the ParameterSpec dataclass that specifies allowed
ranges and defaults for the integer knobs of a benchmark run.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass


@dataclass(frozen=True)
class ParameterSpec:
    """Specification for a benchmark count parameter.

    Attributes:
        name: Parameter name (e.g., "total_samples")
        min_value: Minimum allowed value
        max_value: Maximum allowed value
        default: Default value when not specified
        description: Human-readable description
    """

    name: str
    min_value: int
    max_value: int
    default: int
    description: str = ""

    def validate(self, value: int) -> int:
        """Validate value against the allowed range.

        :param value: Value to validate (Python or NumPy integer)
        :returns: The value as an int
        :raises TypeError: If value is not an integer
        :raises ValueError: If value is outside [min_value, max_value]
        """
        # bool is an int subclass but never a meaningful count
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise TypeError(f"{self.name} must be an integer, got {type(value).__name__}")

        if not self.min_value <= value <= self.max_value:
            raise ValueError(
                f"{self.name}={value} is outside valid range "
                f"[{self.min_value}, {self.max_value}]"
            )
        return int(value)

    def __repr__(self) -> str:
        return (
            f"ParameterSpec({self.name}, "
            f"range=[{self.min_value}, {self.max_value}], "
            f"default={self.default})"
        )


TOTAL_SAMPLES = ParameterSpec(
    name="total_samples",
    min_value=1,
    max_value=1_000_000,
    default=1000,
    description="Outer iterations: fresh random transform pairs per run",
)

SUB_SAMPLES = ParameterSpec(
    name="sub_samples",
    min_value=1,
    max_value=100_000_000,
    default=100_000,
    description="Inner timed iterations per representation per outer sample",
)

SAMPLE_SPECS: dict[str, ParameterSpec] = {
    "total_samples": TOTAL_SAMPLES,
    "sub_samples": SUB_SAMPLES,
}
