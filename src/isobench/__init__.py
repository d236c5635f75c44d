"""
isobench - Rigid-transform representation benchmark

Compares three representations of a 3D rigid-body transform:

- Isometry3: unit quaternion + translation
- IsometryMatrix3: 3x3 rotation matrix + translation
- Transform3: dense 4x4 homogeneous affine matrix (inversion may fail)

Each is timed on composition, inversion, compose-with-inverse and point
transformation over many random samples.

Example:
    >>> from isobench import BenchmarkConfig, format_report, run_benchmarks
    >>>
    >>> timings = run_benchmarks(BenchmarkConfig(total_samples=10, sub_samples=1000))
    >>> for line in format_report(timings):
    ...     print(line)

Example - Representations:
    >>> from isobench import Isometry3, Transform3
    >>>
    >>> iso = Isometry3.from_axis_angle([0.1, 0.2, 0.3], [1.0, 0.0, 0.0])
    >>> identity = iso * iso.inverse()
    >>> trans = Transform3.from_matrix_unchecked(iso.to_homogeneous())
    >>> inverse = trans.try_inverse()  # None if singular
"""

__version__ = "0.1.0"

from isobench.benchmark import (
    BenchmarkTimings,
    black_box,
    check_identity,
    format_report,
    main,
    run_benchmarks,
)
from isobench.config import BenchmarkConfig, ParameterSpec, configure_logging
from isobench.geometry import Isometry3, IsometryMatrix3, Transform3
from isobench.sampling import (
    RigidSample,
    build_representations,
    make_rng,
    random_axis_angle,
    random_point,
    random_sample,
    random_translation,
)

__all__ = [
    "__version__",
    # Representations
    "Isometry3",
    "IsometryMatrix3",
    "Transform3",
    # Sampling
    "RigidSample",
    "build_representations",
    "make_rng",
    "random_axis_angle",
    "random_translation",
    "random_point",
    "random_sample",
    # Benchmark
    "BenchmarkTimings",
    "black_box",
    "check_identity",
    "run_benchmarks",
    "format_report",
    "main",
    # Configuration
    "BenchmarkConfig",
    "ParameterSpec",
    "configure_logging",
]
