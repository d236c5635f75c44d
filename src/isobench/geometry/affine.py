"""Generic affine transform backed by a dense 4x4 homogeneous matrix.

Unlike the isometries, a :class:`Transform3` carries no structural
guarantee: the rotation block may hold scale or shear, and inversion may
fail. :meth:`Transform3.try_inverse` reports that case by returning
``None``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from isobench.geometry.isometry import ArrayLike, as_point
from isobench.geometry.kernels import (
    affine_transform_point_numba,
    mat4_multiply_numba,
    mat4_try_inverse_numba,
)

_AFFINE_BOTTOM_ROW = np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float64)


def _wrap(matrix: np.ndarray) -> Transform3:
    matrix.setflags(write=False)
    obj = object.__new__(Transform3)
    object.__setattr__(obj, "matrix", matrix)
    return obj


@dataclass(frozen=True, eq=False)
class Transform3:
    """Affine 3D transform stored as a 4x4 homogeneous matrix.

    Construct with :meth:`from_matrix` (checked) or
    :meth:`from_matrix_unchecked` (trusted, no validation).

    Example:
        >>> t = Transform3.from_matrix_unchecked(iso.to_homogeneous())
        >>> inv = t.try_inverse()
        >>> if inv is not None:
        ...     identity = t * inv
    """

    matrix: np.ndarray

    def __post_init__(self):
        m = np.array(self.matrix, dtype=np.float64, order="C")
        if m.shape != (4, 4):
            raise ValueError(f"matrix: expected shape (4, 4), got {m.shape}")
        m.setflags(write=False)
        object.__setattr__(self, "matrix", m)

    @classmethod
    def identity(cls) -> Transform3:
        return cls(np.eye(4))

    @classmethod
    def from_matrix_unchecked(cls, matrix: ArrayLike) -> Transform3:
        """Wrap a 4x4 matrix without checking that it is affine."""
        return cls(matrix)

    @classmethod
    def from_matrix(cls, matrix: ArrayLike, atol: float = 1e-12) -> Transform3:
        """Wrap a 4x4 matrix after checking its bottom row is [0, 0, 0, 1].

        :param matrix: 4x4 homogeneous matrix
        :param atol: Absolute tolerance for the bottom row check
        :raises ValueError: If the matrix is not 4x4 or not affine
        """
        transform = cls(matrix)
        bottom = transform.matrix[3]
        if not np.allclose(bottom, _AFFINE_BOTTOM_ROW, rtol=0.0, atol=atol):
            raise ValueError(
                f"matrix: bottom row {bottom.tolist()} is not [0, 0, 0, 1]; "
                "not an affine transform"
            )
        return transform

    def __mul__(self, other):
        if isinstance(other, Transform3):
            out = np.empty((4, 4), dtype=np.float64)
            mat4_multiply_numba(self.matrix, other.matrix, out)
            return _wrap(out)
        if isinstance(other, np.ndarray | list | tuple):
            return self.transform_point(other)
        return NotImplemented

    def try_inverse(self) -> Transform3 | None:
        """General inverse, or ``None`` when the matrix is singular."""
        out = np.empty((4, 4), dtype=np.float64)
        if not mat4_try_inverse_numba(self.matrix, out):
            return None
        return _wrap(out)

    def transform_point(self, point: ArrayLike) -> np.ndarray:
        """Map a point [3]: upper 3x4 block applied, no projective divide."""
        out = np.empty(3, dtype=np.float64)
        affine_transform_point_numba(self.matrix, as_point(point), out)
        return out

    def to_homogeneous(self) -> np.ndarray:
        return self.matrix.copy()

    def is_rigid(self, atol: float = 1e-9) -> bool:
        """Check whether the matrix encodes a proper rigid transform.

        :returns: True for an affine matrix whose 3x3 block is orthonormal
            with determinant +1
        """
        R = self.matrix[:3, :3]
        affine = np.allclose(self.matrix[3], _AFFINE_BOTTOM_ROW, atol=atol)
        orthonormal = np.allclose(R @ R.T, np.eye(3), atol=atol)
        return bool(affine and orthonormal and np.isclose(np.linalg.det(R), 1.0, atol=atol))

    def approx_eq(self, other: Transform3, tol: float = 1e-9) -> bool:
        return np.allclose(self.matrix, other.matrix, atol=tol)

    def __repr__(self) -> str:
        return f"Transform3(matrix={self.matrix.tolist()})"
