"""Rotation utilities shared by the transform representations.

All functions take and return float64 NumPy arrays. Public functions accept
any array-like input and coerce it with ``np.asarray``.

Quaternion Convention: (w, x, y, z) - scalar first
"""

from __future__ import annotations

from typing import TypeAlias

import numpy as np

# Type aliases
ArrayLike: TypeAlias = np.ndarray | list | tuple

# Below this angle an axis-angle vector is treated as the identity rotation
_SMALL_ANGLE = 1e-12


# ============================================================================
# NumPy Implementation
# ============================================================================


def _quaternion_multiply_numpy(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Hamilton product of two quaternions.

    :param q1: First quaternion [4] (w, x, y, z)
    :param q2: Second quaternion [4] (w, x, y, z)
    :returns: Product quaternion [4]
    """
    w1, x1, y1, z1 = q1[0], q1[1], q1[2], q1[3]
    w2, x2, y2, z2 = q2[0], q2[1], q2[2], q2[3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    return np.array([w, x, y, z], dtype=np.float64)


def _quaternion_to_rotation_matrix_numpy(q: np.ndarray) -> np.ndarray:
    """Quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix
    """
    q = q / np.linalg.norm(q)
    w, x, y, z = q[0], q[1], q[2], q[3]

    R = np.zeros((3, 3), dtype=np.float64)

    R[0, 0] = 1 - 2 * (y * y + z * z)
    R[0, 1] = 2 * (x * y - w * z)
    R[0, 2] = 2 * (x * z + w * y)

    R[1, 0] = 2 * (x * y + w * z)
    R[1, 1] = 1 - 2 * (x * x + z * z)
    R[1, 2] = 2 * (y * z - w * x)

    R[2, 0] = 2 * (x * z - w * y)
    R[2, 1] = 2 * (y * z + w * x)
    R[2, 2] = 1 - 2 * (x * x + y * y)

    return R


def _axis_angle_to_quaternion_numpy(axis_angle: np.ndarray) -> np.ndarray:
    """Axis-angle to unit quaternion.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :returns: Quaternion [4] (w, x, y, z)
    """
    angle = np.linalg.norm(axis_angle)
    if angle < _SMALL_ANGLE:
        return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)

    axis = axis_angle / angle
    half_angle = angle / 2
    sin_half = np.sin(half_angle)

    w = np.cos(half_angle)
    x = axis[0] * sin_half
    y = axis[1] * sin_half
    z = axis[2] * sin_half

    return np.array([w, x, y, z], dtype=np.float64)


def _axis_angle_to_rotation_matrix_numpy(axis_angle: np.ndarray) -> np.ndarray:
    """Axis-angle to 3x3 rotation matrix via the Rodrigues formula.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :returns: 3x3 rotation matrix
    """
    angle = np.linalg.norm(axis_angle)
    if angle < _SMALL_ANGLE:
        return np.eye(3, dtype=np.float64)

    kx, ky, kz = axis_angle / angle
    K = np.array(
        [
            [0.0, -kz, ky],
            [kz, 0.0, -kx],
            [-ky, kx, 0.0],
        ],
        dtype=np.float64,
    )

    return np.eye(3, dtype=np.float64) + np.sin(angle) * K + (1.0 - np.cos(angle)) * (K @ K)


# ============================================================================
# Public API
# ============================================================================


def quaternion_multiply(q1: ArrayLike, q2: ArrayLike) -> np.ndarray:
    """Multiply quaternions.

    :param q1: First quaternion [4] (w, x, y, z)
    :param q2: Second quaternion [4] (w, x, y, z)
    :returns: Product quaternion

    Example:
        >>> q1 = np.array([1, 0, 0, 0])  # Identity
        >>> q2 = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> result = quaternion_multiply(q1, q2)
    """
    return _quaternion_multiply_numpy(
        np.asarray(q1, dtype=np.float64), np.asarray(q2, dtype=np.float64)
    )


def quaternion_conjugate(q: ArrayLike) -> np.ndarray:
    """Conjugate quaternion. For a unit quaternion this is its inverse."""
    q = np.asarray(q, dtype=np.float64)
    return np.array([q[0], -q[1], -q[2], -q[3]], dtype=np.float64)


def quaternion_to_rotation_matrix(q: ArrayLike) -> np.ndarray:
    """Convert quaternion to 3x3 rotation matrix.

    :param q: Quaternion [4] (w, x, y, z)
    :returns: 3x3 rotation matrix

    Example:
        >>> q = np.array([0.707, 0, 0.707, 0])  # 90 deg Y rotation
        >>> R = quaternion_to_rotation_matrix(q)
    """
    return _quaternion_to_rotation_matrix_numpy(np.asarray(q, dtype=np.float64))


def axis_angle_to_quaternion(axis_angle: ArrayLike) -> np.ndarray:
    """Convert axis-angle to quaternion.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :returns: Quaternion [4] (w, x, y, z)

    Example:
        >>> axis_angle = np.array([0, np.pi/2, 0])  # 90 deg Y rotation
        >>> q = axis_angle_to_quaternion(axis_angle)
    """
    return _axis_angle_to_quaternion_numpy(np.asarray(axis_angle, dtype=np.float64))


def axis_angle_to_rotation_matrix(axis_angle: ArrayLike) -> np.ndarray:
    """Convert axis-angle to 3x3 rotation matrix.

    :param axis_angle: Axis-angle vector [3] (axis * angle)
    :returns: 3x3 rotation matrix
    """
    return _axis_angle_to_rotation_matrix_numpy(np.asarray(axis_angle, dtype=np.float64))


def quaternion_identity() -> np.ndarray:
    """Return identity quaternion [1, 0, 0, 0]."""
    return np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
