"""Throughput benchmark of the three rigid-transform representations.

Each outer sample draws two random transforms. Every representation then
runs its own timed loop of ``sub_samples`` iterations:

1. draw a fresh random point
2. compose the two transforms
3. invert the result (``Transform3`` may report no inverse)
4. compose the result with its inverse
5. transform the point

Elapsed time is accumulated per representation across all outer samples.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass, field

import numpy as np

from isobench.config import DEFAULT_LOG_LEVEL, LOG_ENV_VAR, BenchmarkConfig, configure_logging
from isobench.geometry import Isometry3, IsometryMatrix3, Transform3, warmup_kernels
from isobench.sampling import RigidSample, make_rng, random_point, random_sample

logger = logging.getLogger(__name__)

REPRESENTATIONS = ("Transform", "Isometry", "IsometryMatrix")


class _Sink:
    __slots__ = ("value",)

    def __init__(self):
        self.value = None


_SINK = _Sink()


def black_box(value):
    """Opaque identity: hand a value to an observer so it is always computed."""
    _SINK.value = value
    return value


# ============================================================================
# Timed loops
# ============================================================================


def time_transform(
    trans1: Transform3, trans2: Transform3, rng: np.random.Generator, iterations: int
) -> float:
    """Time compose / try_inverse / compose-with-inverse / transform_point.

    :returns: Elapsed seconds
    """
    start = time.perf_counter()
    for _ in range(iterations):
        p = random_point(rng)
        transform = black_box(black_box(trans1) * black_box(trans2))
        inverse = transform.try_inverse()
        if inverse is not None:
            black_box(black_box(transform) * black_box(inverse))
        black_box(black_box(transform).transform_point(black_box(p)))
    return time.perf_counter() - start


def time_isometry(
    iso1: Isometry3, iso2: Isometry3, rng: np.random.Generator, iterations: int
) -> float:
    """Time compose / inverse / compose-with-inverse / point transform.

    :returns: Elapsed seconds
    """
    start = time.perf_counter()
    for _ in range(iterations):
        p = random_point(rng)
        iso = black_box(black_box(iso1) * black_box(iso2))
        inverse = iso.inverse()
        black_box(black_box(iso) * black_box(inverse))
        black_box(black_box(iso) * black_box(p))
    return time.perf_counter() - start


def time_isometry_matrix(
    isom1: IsometryMatrix3, isom2: IsometryMatrix3, rng: np.random.Generator, iterations: int
) -> float:
    """Same loop as :func:`time_isometry` for the matrix-backed isometry."""
    start = time.perf_counter()
    for _ in range(iterations):
        p = random_point(rng)
        isom = black_box(black_box(isom1) * black_box(isom2))
        inverse = isom.inverse()
        black_box(black_box(isom) * black_box(inverse))
        black_box(black_box(isom) * black_box(p))
    return time.perf_counter() - start


# ============================================================================
# Usability check
# ============================================================================


def check_identity(sample: RigidSample) -> bool:
    """Compose a sample with its own inverse in every representation.

    Nothing is asserted here; the outcome is logged at DEBUG.

    :returns: True if all three compositions are within 1e-9 of identity
    """
    iso = sample.isometry
    iso_ok = (iso * iso.inverse()).approx_eq(Isometry3.identity())

    isom = sample.isometry_matrix
    isom_ok = (isom * isom.inverse()).approx_eq(IsometryMatrix3.identity())

    trans = sample.transform
    inverse = trans.try_inverse()
    trans_ok = inverse is not None and (trans * inverse).approx_eq(Transform3.identity())

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "[Benchmark] identity check: isometry=%s isometry_matrix=%s transform=%s%s",
            iso_ok,
            isom_ok,
            trans_ok,
            "" if inverse is not None else " (no inverse)",
        )
    return iso_ok and isom_ok and trans_ok


# ============================================================================
# Runner
# ============================================================================


@dataclass
class BenchmarkTimings:
    """Accumulated seconds per representation.

    Attributes:
        transform: Total for ``Transform3``
        isometry: Total for ``Isometry3``
        isometry_matrix: Total for ``IsometryMatrix3``
        history: Running totals (transform, isometry, isometry_matrix)
            after each outer sample
    """

    transform: float = 0.0
    isometry: float = 0.0
    isometry_matrix: float = 0.0
    history: list[tuple[float, float, float]] = field(default_factory=list)

    def add(self, transform: float, isometry: float, isometry_matrix: float) -> None:
        self.transform += transform
        self.isometry += isometry
        self.isometry_matrix += isometry_matrix
        self.history.append((self.transform, self.isometry, self.isometry_matrix))

    def as_dict(self) -> dict[str, float]:
        return dict(
            zip(REPRESENTATIONS, (self.transform, self.isometry, self.isometry_matrix), strict=True)
        )


def _warmup() -> None:
    """Run each loop once on fixed data so first-call costs stay untimed."""
    warmup_kernels()
    sample = random_sample(make_rng(0))
    rng = make_rng(0)
    time_transform(sample.transform, sample.transform, rng, 2)
    time_isometry(sample.isometry, sample.isometry, rng, 2)
    time_isometry_matrix(sample.isometry_matrix, sample.isometry_matrix, rng, 2)


def run_benchmarks(
    config: BenchmarkConfig | None = None, rng: np.random.Generator | None = None
) -> BenchmarkTimings:
    """Run the full benchmark.

    :param config: Sample counts (defaults to ``BenchmarkConfig()``)
    :param rng: Random source (defaults to ``make_rng(config.seed)``)
    :returns: Accumulated timings
    """
    config = BenchmarkConfig() if config is None else config
    rng = make_rng(config.seed) if rng is None else rng

    logger.debug(
        "[Benchmark] %d samples x %d iterations (%d operations per representation)",
        config.total_samples,
        config.sub_samples,
        config.total_operations,
    )
    _warmup()

    timings = BenchmarkTimings()
    for i in range(config.total_samples):
        sample1 = random_sample(rng)
        sample2 = random_sample(rng)

        check_identity(sample1)

        elapsed_transform = time_transform(
            sample1.transform, sample2.transform, rng, config.sub_samples
        )
        elapsed_isometry = time_isometry(
            sample1.isometry, sample2.isometry, rng, config.sub_samples
        )
        elapsed_isometry_matrix = time_isometry_matrix(
            sample1.isometry_matrix, sample2.isometry_matrix, rng, config.sub_samples
        )
        timings.add(elapsed_transform, elapsed_isometry, elapsed_isometry_matrix)

        logger.debug(
            "[Benchmark] sample %d/%d: transform=%.6fs isometry=%.6fs isometry_matrix=%.6fs",
            i + 1,
            config.total_samples,
            elapsed_transform,
            elapsed_isometry,
            elapsed_isometry_matrix,
        )

    return timings


def format_report(timings: BenchmarkTimings) -> list[str]:
    """One "<Representation> took <seconds> seconds" line per representation."""
    return [f"{name} took {seconds} seconds" for name, seconds in timings.as_dict().items()]


def main(config: BenchmarkConfig | None = None) -> int:
    """Benchmark entry point. Prints three lines to stdout and returns 0."""
    os.environ[LOG_ENV_VAR] = DEFAULT_LOG_LEVEL
    configure_logging()

    timings = run_benchmarks(config)
    for line in format_report(timings):
        print(line)
    return 0
