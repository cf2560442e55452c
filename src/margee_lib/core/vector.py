"""Three-dimensional vectors used as n-vectors and great-circle normals."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Vector3d:
    """
    Immutable 3-d vector.

    In a geodesy context a vector is either an n-vector (a unit normal to the
    sphere at a point) or the normal of a great-circle plane. No unit-length
    invariant is enforced; call unit() where one is needed.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3d) -> Vector3d:
        return Vector3d(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, factor: float) -> Vector3d:
        factor = float(factor)
        return Vector3d(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Vector3d:
        divisor = float(divisor)
        return Vector3d(self.x / divisor, self.y / divisor, self.z / divisor)

    def __neg__(self) -> Vector3d:
        return self.negate()

    def dot(self, other: Vector3d) -> float:
        """Scalar product of this vector and other."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3d) -> Vector3d:
        """Vector product of this vector and other."""
        return Vector3d(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def negate(self) -> Vector3d:
        return Vector3d(-self.x, -self.y, -self.z)

    def length(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def unit(self) -> Vector3d:
        """
        Normalised copy of this vector.

        A vector that is already unit length, or has zero length, is
        returned as is.
        """
        norm = self.length()
        if norm == 1.0 or norm == 0.0:
            return self
        return Vector3d(self.x / norm, self.y / norm, self.z / norm)

    def angle_to(self, other: Vector3d, sign_reference: Vector3d | None = None) -> float:
        """
        Angle between this vector and other, in radians.

        Args:
            other: Vector to measure the angle to
            sign_reference: If given (and out of the plane of this and other),
                the angle is positive when this->other is clockwise looking
                along sign_reference and negative otherwise

        Returns:
            Angle in [0, pi], or in (-pi, pi] when a sign reference is given
        """
        cross = self.cross(other)
        sin_theta = cross.length()
        cos_theta = self.dot(other)

        if sign_reference is not None and cross.dot(sign_reference) < 0:
            sin_theta = -sin_theta

        return math.atan2(sin_theta, cos_theta)

    def rotate_around_axis(self, axis: Vector3d, theta: float) -> Vector3d:
        """
        Rotate this vector about an axis.

        Uses the quaternion-derived rotation matrix; positive theta is
        counter-clockwise looking from the tip of the axis toward the origin.

        Args:
            axis: Axis of rotation (normalised internally)
            theta: Rotation angle in radians

        Returns:
            The rotated vector
        """
        a = axis.unit()
        s = math.sin(theta)
        c = math.cos(theta)
        t = 1.0 - c

        q = np.array(
            [
                [a.x * a.x * t + c, a.x * a.y * t - a.z * s, a.x * a.z * t + a.y * s],
                [a.y * a.x * t + a.z * s, a.y * a.y * t + c, a.y * a.z * t - a.x * s],
                [a.z * a.x * t - a.y * s, a.z * a.y * t + a.x * s, a.z * a.z * t + c],
            ]
        )
        return Vector3d.from_array(q @ self.to_array())

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @staticmethod
    def from_array(arr) -> Vector3d:
        x, y, z = (float(v) for v in arr)
        return Vector3d(x, y, z)

    def to_string(self, precision: int = 3) -> str:
        """Vector formatted as [x,y,z]."""
        return f"[{self.x:.{precision}f},{self.y:.{precision}f},{self.z:.{precision}f}]"

    def __str__(self) -> str:
        return self.to_string()
