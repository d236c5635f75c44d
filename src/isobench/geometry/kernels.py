"""
Numba-optimized kernels for rigid-transform operations.

Provides JIT-compiled kernels for the operations exercised by the
benchmark loops. Every kernel works on a single transform and writes into
caller-provided output buffers.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


# ============================================================================
# Quaternion kernels
# ============================================================================


@njit(fastmath=True, cache=True, nogil=True)
def quaternion_multiply_numba(
    q1: NDArray[np.float64],
    q2: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Hamilton product q1 * q2.

    Args:
        q1: First quaternion [4] (w, x, y, z)
        q2: Second quaternion [4] (w, x, y, z)
        out: Output quaternion [4] (modified in-place)
    """
    w1, x1, y1, z1 = q1[0], q1[1], q1[2], q1[3]
    w2, x2, y2, z2 = q2[0], q2[1], q2[2], q2[3]

    out[0] = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    out[1] = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    out[2] = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    out[3] = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2


@njit(fastmath=True, cache=True, nogil=True)
def quaternion_rotate_numba(
    q: NDArray[np.float64],
    v: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Rotate a vector by a unit quaternion.

    Uses v' = v + 2w(u x v) + 2u x (u x v) with u the vector part of q.

    Args:
        q: Unit quaternion [4] (w, x, y, z)
        v: Vector [3]
        out: Rotated vector [3] (modified in-place, may alias v)
    """
    w, ux, uy, uz = q[0], q[1], q[2], q[3]
    vx, vy, vz = v[0], v[1], v[2]

    # c = 2 * (u x v)
    cx = 2.0 * (uy * vz - uz * vy)
    cy = 2.0 * (uz * vx - ux * vz)
    cz = 2.0 * (ux * vy - uy * vx)

    out[0] = vx + w * cx + (uy * cz - uz * cy)
    out[1] = vy + w * cy + (uz * cx - ux * cz)
    out[2] = vz + w * cz + (ux * cy - uy * cx)


# ============================================================================
# Isometry (quaternion-backed) kernels
# ============================================================================


@njit(fastmath=True, cache=True, nogil=True)
def isometry_compose_numba(
    q1: NDArray[np.float64],
    t1: NDArray[np.float64],
    q2: NDArray[np.float64],
    t2: NDArray[np.float64],
    q_out: NDArray[np.float64],
    t_out: NDArray[np.float64],
) -> None:
    """
    Compose (q1, t1) * (q2, t2): rotation q1 q2, translation t1 + q1 t2.

    Args:
        q1, t1: Left isometry
        q2, t2: Right isometry (applied first)
        q_out: Output rotation [4]
        t_out: Output translation [3]
    """
    quaternion_rotate_numba(q1, t2, t_out)
    t_out[0] += t1[0]
    t_out[1] += t1[1]
    t_out[2] += t1[2]
    quaternion_multiply_numba(q1, q2, q_out)


@njit(fastmath=True, cache=True, nogil=True)
def isometry_inverse_numba(
    q: NDArray[np.float64],
    t: NDArray[np.float64],
    q_out: NDArray[np.float64],
    t_out: NDArray[np.float64],
) -> None:
    """
    Analytic inverse: conjugate rotation, translation -conj(q) t.

    Args:
        q: Unit quaternion [4]
        t: Translation [3]
        q_out: Output rotation [4]
        t_out: Output translation [3]
    """
    q_out[0] = q[0]
    q_out[1] = -q[1]
    q_out[2] = -q[2]
    q_out[3] = -q[3]

    quaternion_rotate_numba(q_out, t, t_out)
    t_out[0] = -t_out[0]
    t_out[1] = -t_out[1]
    t_out[2] = -t_out[2]


@njit(fastmath=True, cache=True, nogil=True)
def isometry_transform_point_numba(
    q: NDArray[np.float64],
    t: NDArray[np.float64],
    p: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Apply (q, t) to point p: q p + t."""
    quaternion_rotate_numba(q, p, out)
    out[0] += t[0]
    out[1] += t[1]
    out[2] += t[2]


# ============================================================================
# Isometry (matrix-backed) kernels
# ============================================================================


@njit(fastmath=True, cache=True, nogil=True)
def matrix_isometry_compose_numba(
    r1: NDArray[np.float64],
    t1: NDArray[np.float64],
    r2: NDArray[np.float64],
    t2: NDArray[np.float64],
    r_out: NDArray[np.float64],
    t_out: NDArray[np.float64],
) -> None:
    """
    Compose (R1, t1) * (R2, t2): rotation R1 R2, translation t1 + R1 t2.

    Args:
        r1, t1: Left isometry, r1 is [3, 3]
        r2, t2: Right isometry (applied first)
        r_out: Output rotation [3, 3]
        t_out: Output translation [3]
    """
    for i in range(3):
        for j in range(3):
            r_out[i, j] = r1[i, 0] * r2[0, j] + r1[i, 1] * r2[1, j] + r1[i, 2] * r2[2, j]
        t_out[i] = t1[i] + r1[i, 0] * t2[0] + r1[i, 1] * t2[1] + r1[i, 2] * t2[2]


@njit(fastmath=True, cache=True, nogil=True)
def matrix_isometry_inverse_numba(
    r: NDArray[np.float64],
    t: NDArray[np.float64],
    r_out: NDArray[np.float64],
    t_out: NDArray[np.float64],
) -> None:
    """Analytic inverse: transposed rotation, translation -R^T t."""
    for i in range(3):
        for j in range(3):
            r_out[i, j] = r[j, i]
    for i in range(3):
        t_out[i] = -(r[0, i] * t[0] + r[1, i] * t[1] + r[2, i] * t[2])


@njit(fastmath=True, cache=True, nogil=True)
def matrix_isometry_transform_point_numba(
    r: NDArray[np.float64],
    t: NDArray[np.float64],
    p: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Apply (R, t) to point p: R p + t."""
    px, py, pz = p[0], p[1], p[2]
    for i in range(3):
        out[i] = r[i, 0] * px + r[i, 1] * py + r[i, 2] * pz + t[i]


# ============================================================================
# Affine (4x4 homogeneous) kernels
# ============================================================================


@njit(fastmath=True, cache=True, nogil=True)
def mat4_multiply_numba(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """
    Dense 4x4 product a @ b.

    Args:
        a: Left matrix [4, 4]
        b: Right matrix [4, 4]
        out: Output matrix [4, 4] (must not alias a or b)
    """
    for i in range(4):
        for j in range(4):
            out[i, j] = (
                a[i, 0] * b[0, j] + a[i, 1] * b[1, j] + a[i, 2] * b[2, j] + a[i, 3] * b[3, j]
            )


# No fastmath: the singularity test relies on an exact zero determinant
@njit(cache=True, nogil=True)
def mat4_try_inverse_numba(
    mat: NDArray[np.float64],
    out: NDArray[np.float64],
) -> bool:
    """
    General 4x4 inverse by cofactor expansion.

    Args:
        mat: Input matrix [4, 4]
        out: Output matrix [4, 4] (modified in-place)

    Returns:
        False if the determinant is exactly zero (out is left untouched),
        True otherwise.
    """
    m = np.empty(16, dtype=np.float64)
    for k in range(16):
        m[k] = mat[k // 4, k % 4]
    inv = np.empty(16, dtype=np.float64)

    inv[0] = (
        m[5] * m[10] * m[15] - m[5] * m[11] * m[14] - m[9] * m[6] * m[15]
        + m[9] * m[7] * m[14] + m[13] * m[6] * m[11] - m[13] * m[7] * m[10]
    )
    inv[4] = (
        -m[4] * m[10] * m[15] + m[4] * m[11] * m[14] + m[8] * m[6] * m[15]
        - m[8] * m[7] * m[14] - m[12] * m[6] * m[11] + m[12] * m[7] * m[10]
    )
    inv[8] = (
        m[4] * m[9] * m[15] - m[4] * m[11] * m[13] - m[8] * m[5] * m[15]
        + m[8] * m[7] * m[13] + m[12] * m[5] * m[11] - m[12] * m[7] * m[9]
    )
    inv[12] = (
        -m[4] * m[9] * m[14] + m[4] * m[10] * m[13] + m[8] * m[5] * m[14]
        - m[8] * m[6] * m[13] - m[12] * m[5] * m[10] + m[12] * m[6] * m[9]
    )
    inv[1] = (
        -m[1] * m[10] * m[15] + m[1] * m[11] * m[14] + m[9] * m[2] * m[15]
        - m[9] * m[3] * m[14] - m[13] * m[2] * m[11] + m[13] * m[3] * m[10]
    )
    inv[5] = (
        m[0] * m[10] * m[15] - m[0] * m[11] * m[14] - m[8] * m[2] * m[15]
        + m[8] * m[3] * m[14] + m[12] * m[2] * m[11] - m[12] * m[3] * m[10]
    )
    inv[9] = (
        -m[0] * m[9] * m[15] + m[0] * m[11] * m[13] + m[8] * m[1] * m[15]
        - m[8] * m[3] * m[13] - m[12] * m[1] * m[11] + m[12] * m[3] * m[9]
    )
    inv[13] = (
        m[0] * m[9] * m[14] - m[0] * m[10] * m[13] - m[8] * m[1] * m[14]
        + m[8] * m[2] * m[13] + m[12] * m[1] * m[10] - m[12] * m[2] * m[9]
    )
    inv[2] = (
        m[1] * m[6] * m[15] - m[1] * m[7] * m[14] - m[5] * m[2] * m[15]
        + m[5] * m[3] * m[14] + m[13] * m[2] * m[7] - m[13] * m[3] * m[6]
    )
    inv[6] = (
        -m[0] * m[6] * m[15] + m[0] * m[7] * m[14] + m[4] * m[2] * m[15]
        - m[4] * m[3] * m[14] - m[12] * m[2] * m[7] + m[12] * m[3] * m[6]
    )
    inv[10] = (
        m[0] * m[5] * m[15] - m[0] * m[7] * m[13] - m[4] * m[1] * m[15]
        + m[4] * m[3] * m[13] + m[12] * m[1] * m[7] - m[12] * m[3] * m[5]
    )
    inv[14] = (
        -m[0] * m[5] * m[14] + m[0] * m[6] * m[13] + m[4] * m[1] * m[14]
        - m[4] * m[2] * m[13] - m[12] * m[1] * m[6] + m[12] * m[2] * m[5]
    )
    inv[3] = (
        -m[1] * m[6] * m[11] + m[1] * m[7] * m[10] + m[5] * m[2] * m[11]
        - m[5] * m[3] * m[10] - m[9] * m[2] * m[7] + m[9] * m[3] * m[6]
    )
    inv[7] = (
        m[0] * m[6] * m[11] - m[0] * m[7] * m[10] - m[4] * m[2] * m[11]
        + m[4] * m[3] * m[10] + m[8] * m[2] * m[7] - m[8] * m[3] * m[6]
    )
    inv[11] = (
        -m[0] * m[5] * m[11] + m[0] * m[7] * m[9] + m[4] * m[1] * m[11]
        - m[4] * m[3] * m[9] - m[8] * m[1] * m[7] + m[8] * m[3] * m[5]
    )
    inv[15] = (
        m[0] * m[5] * m[10] - m[0] * m[6] * m[9] - m[4] * m[1] * m[10]
        + m[4] * m[2] * m[9] + m[8] * m[1] * m[6] - m[8] * m[2] * m[5]
    )

    det = m[0] * inv[0] + m[1] * inv[4] + m[2] * inv[8] + m[3] * inv[12]
    if det == 0.0:
        return False

    inv_det = 1.0 / det
    for k in range(16):
        out[k // 4, k % 4] = inv[k] * inv_det
    return True


@njit(fastmath=True, cache=True, nogil=True)
def affine_transform_point_numba(
    mat: NDArray[np.float64],
    p: NDArray[np.float64],
    out: NDArray[np.float64],
) -> None:
    """Apply an affine 4x4 matrix to point p (no projective divide)."""
    px, py, pz = p[0], p[1], p[2]
    for i in range(3):
        out[i] = mat[i, 0] * px + mat[i, 1] * py + mat[i, 2] * pz + mat[i, 3]


# ============================================================================
# Warmup
# ============================================================================


def warmup_kernels() -> None:
    """Compile every kernel so JIT cost never lands in a timed loop."""
    q = np.array([1.0, 0.0, 0.0, 0.0], dtype=np.float64)
    v = np.zeros(3, dtype=np.float64)
    r = np.eye(3, dtype=np.float64)
    m = np.eye(4, dtype=np.float64)

    q_out = np.empty(4, dtype=np.float64)
    v_out = np.empty(3, dtype=np.float64)
    r_out = np.empty((3, 3), dtype=np.float64)
    m_out = np.empty((4, 4), dtype=np.float64)

    quaternion_multiply_numba(q, q, q_out)
    quaternion_rotate_numba(q, v, v_out)
    isometry_compose_numba(q, v, q, v, q_out, v_out)
    isometry_inverse_numba(q, v, q_out, v_out)
    isometry_transform_point_numba(q, v, v, v_out)
    matrix_isometry_compose_numba(r, v, r, v, r_out, v_out)
    matrix_isometry_inverse_numba(r, v, r_out, v_out)
    matrix_isometry_transform_point_numba(r, v, v, v_out)
    mat4_multiply_numba(m, m, m_out)
    mat4_try_inverse_numba(m, m_out)
    affine_transform_point_numba(m, v, v_out)

    logger.debug("[Kernels] Transform kernels warmed up")
