"""Quaternions for 3D rotations, with linear and spherical interpolation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real

from renderkit.vector import EPSILON, Vector3


def _is_scalar(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


@dataclass(eq=False)
class Quaternion:
    """A quaternion t + xi + yj + zk; t is the scalar part."""

    t: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_angle_axis(cls, theta: float, axis: Vector3) -> "Quaternion":
        """Build a unit quaternion rotating by theta radians around axis."""
        n = axis.normalized()
        s = math.sin(theta / 2.0)
        q = cls(math.cos(theta / 2.0), n.x * s, n.y * s, n.z * s)
        q.normalize()
        return q

    def __iter__(self):
        yield self.t
        yield self.x
        yield self.y
        yield self.z

    def normalize(self) -> None:
        """Scale this quaternion to unit norm in place."""
        self.t, self.x, self.y, self.z = self / self.norm()

    def normalized(self) -> "Quaternion":
        """Return a unit-norm copy."""
        return self / self.norm()

    def conjugate(self) -> "Quaternion":
        """Return the conjugate (t, -x, -y, -z)."""
        return Quaternion(self.t, -self.x, -self.y, -self.z)

    def inverse(self) -> "Quaternion":
        """Return the multiplicative inverse."""
        return self.conjugate() / self.quadrance()

    def quadrance(self) -> float:
        """Squared norm."""
        return self.t * self.t + self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        """Euclidean norm."""
        return math.sqrt(self.quadrance())

    def multiply(self, other: "Quaternion") -> "Quaternion":
        """Hamilton product self * other."""
        t, x, y, z = self
        return Quaternion(
            t * other.t - x * other.x - y * other.y - z * other.z,
            t * other.x + x * other.t + y * other.z - z * other.y,
            t * other.y + y * other.t + z * other.x - x * other.z,
            t * other.z + z * other.t + x * other.y - y * other.x,
        )

    def __add__(self, other):
        if not isinstance(other, Quaternion):
            return NotImplemented
        return Quaternion(*(a + b for a, b in zip(self, other)))

    def __mul__(self, other):
        if _is_scalar(other):
            return Quaternion(*(other * c for c in self))
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other):
        if _is_scalar(other):
            return Quaternion(*(c / other for c in self))
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Quaternion):
            return NotImplemented
        return all(abs(a - b) < EPSILON for a, b in zip(self, other))

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "(" + ", ".join(format(c, "g") for c in self) + ")"

    def to_angle_axis(self) -> tuple[float, Vector3]:
        """Return (theta, axis) of the rotation this quaternion describes."""
        qn = self.normalized()
        t = _clamp_unit(qn.t)
        theta = 2.0 * math.acos(t)
        s = math.sqrt(1.0 - t * t)
        if s < EPSILON:
            return theta, Vector3(1.0, 0.0, 0.0)
        return theta, Vector3(qn.x / s, qn.y / s, qn.z / s)

    def gl_rotation_matrix(self) -> tuple[float, ...]:
        """Return the 4x4 rotation matrix as 16 floats in column-major order."""
        qn = self.normalized()
        xx, xy, xz, xt = qn.x * qn.x, qn.x * qn.y, qn.x * qn.z, qn.x * qn.t
        yy, yz, yt = qn.y * qn.y, qn.y * qn.z, qn.y * qn.t
        zz, zt = qn.z * qn.z, qn.z * qn.t
        return (
            1.0 - 2.0 * (yy + zz), 2.0 * (xy + zt), 2.0 * (xz - yt), 0.0,
            2.0 * (xy - zt), 1.0 - 2.0 * (xx + zz), 2.0 * (yz + xt), 0.0,
            2.0 * (xz + yt), 2.0 * (yz - xt), 1.0 - 2.0 * (xx + yy), 0.0,
            0.0, 0.0, 0.0, 1.0,
        )


def _dot(q0: Quaternion, q1: Quaternion) -> float:
    return q0.x * q1.x + q0.y * q1.y + q0.z * q1.z + q0.t * q1.t


def q_lerp(q0: Quaternion, q1: Quaternion, k: float) -> Quaternion:
    """Normalized linear interpolation along the shorter arc."""
    cos_angle = _dot(q0, q1)
    k0 = 1.0 - k
    k1 = k if cos_angle > 0 else -k
    qi = q0 * k0 + q1 * k1
    qi.normalize()
    return qi


def q_slerp(q0: Quaternion, q1: Quaternion, k: float) -> Quaternion:
    """Spherical linear interpolation.

    Raises ZeroDivisionError when q0 and q1 are (anti)parallel.
    """
    angle = math.acos(_clamp_unit(_dot(q0, q1)))
    sin_angle = math.sin(angle)
    k0 = math.sin((1 - k) * angle) / sin_angle
    k1 = math.sin(k * angle) / sin_angle
    qi = q0 * k0 + q1 * k1
    qi.normalize()
    return qi