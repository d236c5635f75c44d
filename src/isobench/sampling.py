"""Random rigid-transform samples.

Every sample is drawn from a uniform source over [0, 1) and expanded into
all three transform representations so that each benchmark loop operates
on the same geometry.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from isobench.geometry import Isometry3, IsometryMatrix3, Transform3


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Create the uniform random source. ``seed=None`` draws OS entropy."""
    return np.random.default_rng(seed)


def random_axis_angle(rng: np.random.Generator) -> np.ndarray:
    """Three uniform components scaled by a fourth uniform scalar."""
    direction = rng.random(3)
    return direction * rng.random()


def random_translation(rng: np.random.Generator) -> np.ndarray:
    return rng.random(3)


def random_point(rng: np.random.Generator) -> np.ndarray:
    return rng.random(3)


@dataclass(frozen=True, eq=False)
class RigidSample:
    """One rotation/translation pair in every representation.

    Attributes:
        axis_angle: Axis-angle vector the rotations were derived from
        translation: Translation shared by all representations
        isometry: Quaternion-backed isometry
        isometry_matrix: Matrix-backed isometry
        transform: 4x4 affine transform wrapping ``isometry.to_homogeneous()``
    """

    axis_angle: np.ndarray
    translation: np.ndarray
    isometry: Isometry3
    isometry_matrix: IsometryMatrix3
    transform: Transform3


def build_representations(axis_angle, translation) -> RigidSample:
    """Build all three representations from one axis-angle and translation.

    The quaternion and the rotation matrix are each derived directly from
    the axis-angle. The affine transform expands the quaternion isometry to
    its homogeneous matrix and wraps it unchecked.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :param translation: Translation [3]
    :returns: RigidSample holding every representation
    """
    axis_angle = np.asarray(axis_angle, dtype=np.float64)
    translation = np.asarray(translation, dtype=np.float64)

    isometry = Isometry3.from_axis_angle(axis_angle, translation)
    isometry_matrix = IsometryMatrix3.from_axis_angle(axis_angle, translation)
    transform = Transform3.from_matrix_unchecked(isometry.to_homogeneous())

    return RigidSample(
        axis_angle=axis_angle,
        translation=translation,
        isometry=isometry,
        isometry_matrix=isometry_matrix,
        transform=transform,
    )


def random_sample(rng: np.random.Generator) -> RigidSample:
    """Draw one axis-angle, then one translation, and convert them."""
    axis_angle = random_axis_angle(rng)
    translation = random_translation(rng)
    return build_representations(axis_angle, translation)
