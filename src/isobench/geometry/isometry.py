"""Rigid-body transforms: quaternion-backed and matrix-backed isometries.

Both classes are immutable value types. Composition, inversion and point
transformation run through the Numba kernels in
:mod:`isobench.geometry.kernels`.

Convention: ``a * b`` applies ``b`` FIRST, then ``a``; ``a * p`` maps a
point ``p``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

from isobench.geometry.kernels import (
    isometry_compose_numba,
    isometry_inverse_numba,
    isometry_transform_point_numba,
    matrix_isometry_compose_numba,
    matrix_isometry_inverse_numba,
    matrix_isometry_transform_point_numba,
)
from isobench.shared.rotation import (
    axis_angle_to_quaternion,
    axis_angle_to_rotation_matrix,
    quaternion_identity,
    quaternion_to_rotation_matrix,
)

ArrayLike: TypeAlias = np.ndarray | tuple | list


def _as_frozen(value: ArrayLike, shape: tuple[int, ...], name: str) -> np.ndarray:
    """Copy into an owned, read-only contiguous float64 array of the given shape."""
    arr = np.array(value, dtype=np.float64, order="C", copy=True)
    if arr.shape != shape:
        raise ValueError(f"{name}: expected shape {shape}, got {arr.shape}")
    arr.setflags(write=False)
    return arr


def _from_buffers(cls, rotation: np.ndarray, translation: np.ndarray):
    """Wrap freshly computed kernel outputs without re-validating them."""
    rotation.setflags(write=False)
    translation.setflags(write=False)
    obj = object.__new__(cls)
    object.__setattr__(obj, "rotation", rotation)
    object.__setattr__(obj, "translation", translation)
    return obj


def as_point(value: ArrayLike) -> np.ndarray:
    """Coerce a 3D point to a float64 array [3].

    :raises ValueError: If the input is not a 3-vector
    """
    p = np.asarray(value, dtype=np.float64)
    if p.shape != (3,):
        raise ValueError(f"point: expected shape (3,), got {p.shape}")
    return p


@dataclass(frozen=True, eq=False)
class Isometry3:
    """Rotation stored as a unit quaternion (w, x, y, z) plus a translation.

    Example:
        >>> iso = Isometry3.from_axis_angle([0, 0, np.pi / 2], [1, 0, 0])
        >>> iso * np.array([1.0, 0.0, 0.0])  # -> [1, 1, 0]
    """

    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "rotation", _as_frozen(self.rotation, (4,), "rotation"))
        object.__setattr__(
            self, "translation", _as_frozen(self.translation, (3,), "translation")
        )

    @classmethod
    def identity(cls) -> Isometry3:
        return cls(quaternion_identity(), np.zeros(3))

    @classmethod
    def from_parts(cls, translation: ArrayLike, rotation: ArrayLike) -> Isometry3:
        """Build from a translation and a unit quaternion.

        :param translation: Translation [3]
        :param rotation: Unit quaternion [4] (w, x, y, z), normalized here
        """
        q = np.asarray(rotation, dtype=np.float64)
        return cls(q / np.linalg.norm(q), translation)

    @classmethod
    def from_axis_angle(cls, axis_angle: ArrayLike, translation: ArrayLike) -> Isometry3:
        """Build from an axis-angle vector (axis * angle) and a translation."""
        return cls(axis_angle_to_quaternion(axis_angle), translation)

    def __mul__(self, other):
        if isinstance(other, Isometry3):
            q_out = np.empty(4, dtype=np.float64)
            t_out = np.empty(3, dtype=np.float64)
            isometry_compose_numba(
                self.rotation, self.translation, other.rotation, other.translation, q_out, t_out
            )
            return _from_buffers(Isometry3, q_out, t_out)
        if isinstance(other, np.ndarray | list | tuple):
            return self.transform_point(other)
        return NotImplemented

    def inverse(self) -> Isometry3:
        """Analytic inverse. Always defined."""
        q_out = np.empty(4, dtype=np.float64)
        t_out = np.empty(3, dtype=np.float64)
        isometry_inverse_numba(self.rotation, self.translation, q_out, t_out)
        return _from_buffers(Isometry3, q_out, t_out)

    def transform_point(self, point: ArrayLike) -> np.ndarray:
        """Map a point [3] through this isometry."""
        out = np.empty(3, dtype=np.float64)
        isometry_transform_point_numba(self.rotation, self.translation, as_point(point), out)
        return out

    def rotation_matrix(self) -> np.ndarray:
        return quaternion_to_rotation_matrix(self.rotation)

    def to_homogeneous(self) -> np.ndarray:
        """Expand to a 4x4 homogeneous matrix.

        Note this is a plain ndarray, not a :class:`Transform3`.
        """
        M = np.eye(4, dtype=np.float64)
        M[:3, :3] = self.rotation_matrix()
        M[:3, 3] = self.translation
        return M

    def approx_eq(self, other: Isometry3, tol: float = 1e-9) -> bool:
        """Compare as rotations, so q and -q are considered equal."""
        same_rotation = np.allclose(self.rotation, other.rotation, atol=tol) or np.allclose(
            self.rotation, -other.rotation, atol=tol
        )
        return same_rotation and np.allclose(self.translation, other.translation, atol=tol)

    def __repr__(self) -> str:
        return (
            f"Isometry3(rotation={self.rotation.tolist()}, "
            f"translation={self.translation.tolist()})"
        )


@dataclass(frozen=True, eq=False)
class IsometryMatrix3:
    """Rotation stored as a 3x3 orthonormal matrix plus a translation."""

    rotation: np.ndarray
    translation: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "rotation", _as_frozen(self.rotation, (3, 3), "rotation"))
        object.__setattr__(
            self, "translation", _as_frozen(self.translation, (3,), "translation")
        )

    @classmethod
    def identity(cls) -> IsometryMatrix3:
        return cls(np.eye(3), np.zeros(3))

    @classmethod
    def from_parts(cls, translation: ArrayLike, rotation: ArrayLike) -> IsometryMatrix3:
        """Build from a translation and a 3x3 rotation matrix (trusted orthonormal)."""
        return cls(rotation, translation)

    @classmethod
    def from_axis_angle(
        cls, axis_angle: ArrayLike, translation: ArrayLike
    ) -> IsometryMatrix3:
        """Build from an axis-angle vector (axis * angle) and a translation."""
        return cls(axis_angle_to_rotation_matrix(axis_angle), translation)

    def __mul__(self, other):
        if isinstance(other, IsometryMatrix3):
            r_out = np.empty((3, 3), dtype=np.float64)
            t_out = np.empty(3, dtype=np.float64)
            matrix_isometry_compose_numba(
                self.rotation, self.translation, other.rotation, other.translation, r_out, t_out
            )
            return _from_buffers(IsometryMatrix3, r_out, t_out)
        if isinstance(other, np.ndarray | list | tuple):
            return self.transform_point(other)
        return NotImplemented

    def inverse(self) -> IsometryMatrix3:
        """Analytic inverse (transpose). Always defined."""
        r_out = np.empty((3, 3), dtype=np.float64)
        t_out = np.empty(3, dtype=np.float64)
        matrix_isometry_inverse_numba(self.rotation, self.translation, r_out, t_out)
        return _from_buffers(IsometryMatrix3, r_out, t_out)

    def transform_point(self, point: ArrayLike) -> np.ndarray:
        """Map a point [3] through this isometry."""
        out = np.empty(3, dtype=np.float64)
        matrix_isometry_transform_point_numba(
            self.rotation, self.translation, as_point(point), out
        )
        return out

    def to_homogeneous(self) -> np.ndarray:
        M = np.eye(4, dtype=np.float64)
        M[:3, :3] = self.rotation
        M[:3, 3] = self.translation
        return M

    def approx_eq(self, other: IsometryMatrix3, tol: float = 1e-9) -> bool:
        return np.allclose(self.rotation, other.rotation, atol=tol) and np.allclose(
            self.translation, other.translation, atol=tol
        )

    def __repr__(self) -> str:
        return (
            f"IsometryMatrix3(rotation={self.rotation.tolist()}, "
            f"translation={self.translation.tolist()})"
        )
