"""
Rigid-transform representations.

- ``Isometry3``: unit quaternion + translation
- ``IsometryMatrix3``: 3x3 rotation matrix + translation
- ``Transform3``: dense 4x4 homogeneous matrix, inversion may fail

Example:
    >>> from isobench.geometry import Isometry3, Transform3
    >>> iso = Isometry3.from_axis_angle([0, 0, 0.5], [1, 2, 3])
    >>> identity = iso * iso.inverse()
    >>> trans = Transform3.from_matrix_unchecked(iso.to_homogeneous())
"""

from isobench.geometry.affine import Transform3
from isobench.geometry.isometry import Isometry3, IsometryMatrix3, as_point
from isobench.geometry.kernels import warmup_kernels

__all__ = [
    "Isometry3",
    "IsometryMatrix3",
    "Transform3",
    "as_point",
    "warmup_kernels",
]
