"""Shared utilities for isobench.

This module contains the rotation conversions used by every transform
representation so that each one is built from identical math.
"""

from isobench.shared.rotation import (
    axis_angle_to_quaternion,
    axis_angle_to_rotation_matrix,
    quaternion_conjugate,
    quaternion_identity,
    quaternion_multiply,
    quaternion_to_rotation_matrix,
)

__all__ = [
    "quaternion_multiply",
    "quaternion_conjugate",
    "quaternion_identity",
    "quaternion_to_rotation_matrix",
    "axis_angle_to_quaternion",
    "axis_angle_to_rotation_matrix",
]
