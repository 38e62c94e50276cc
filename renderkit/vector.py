"""Small 2-, 3- and 4-component float vectors with tolerant comparison."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Callable, Iterable, Iterator, TypeVar

PI = math.pi
TWO_PI = 2 * PI
HALF_PI = math.pi / 2
QUARTER_PI = math.pi / 4

EPSILON = 0.00001

_V = TypeVar("_V", bound="_Vector")


def float_equals(s1: float, s2: float) -> bool:
    """Return True when two scalars differ by less than EPSILON."""
    return abs(s1 - s2) < EPSILON


def _snap(value: float) -> float:
    return 0.0 if float_equals(value, 0.0) else value


def _parse(cls, text: str):
    tokens = text.split()
    count = len(cls._fields)
    if len(tokens) < count:
        raise ValueError(f"expected {count} components, got {len(tokens)}: {text!r}")
    try:
        values = [float(tok) for tok in tokens[:count]]
    except ValueError as exc:
        raise ValueError(f"invalid vector component in {text!r}") from exc
    return cls(*values)


class _Vector:
    """Arithmetic, comparison and formatting shared by all vector sizes."""

    __slots__ = ()
    _fields: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[float]:
        return (getattr(self, name) for name in self._fields)

    def _assign(self, values: Iterable[float]) -> None:
        for name, value in zip(self._fields, values):
            setattr(self, name, float(value))

    def _combine(self: _V, other, op: Callable[[float, float], float]):
        if isinstance(other, type(self)):
            return type(self)(*(op(a, b) for a, b in zip(self, other)))
        if isinstance(other, Real) and not isinstance(other, bool):
            return type(self)(*(op(a, other) for a in self))
        return NotImplemented

    def _rcombine(self: _V, other, op: Callable[[float, float], float]):
        if isinstance(other, Real) and not isinstance(other, bool):
            return type(self)(*(op(other, a) for a in self))
        return NotImplemented

    def _icombine(self: _V, other, op: Callable[[float, float], float]):
        result = self._combine(other, op)
        if result is NotImplemented:
            return NotImplemented
        self._assign(result)
        return self

    def __add__(self, other):
        return self._combine(other, lambda a, b: a + b)

    def __sub__(self, other):
        return self._combine(other, lambda a, b: a - b)

    def __mul__(self, other):
        return self._combine(other, lambda a, b: a * b)

    def __truediv__(self, other):
        return self._combine(other, lambda a, b: a / b)

    def __radd__(self, other):
        return self._rcombine(other, lambda a, b: a + b)

    def __rsub__(self, other):
        return self._rcombine(other, lambda a, b: a - b)

    def __rmul__(self, other):
        return self._rcombine(other, lambda a, b: a * b)

    def __rtruediv__(self, other):
        return self._rcombine(other, lambda a, b: a / b)

    def __iadd__(self, other):
        return self._icombine(other, lambda a, b: a + b)

    def __isub__(self, other):
        return self._icombine(other, lambda a, b: a - b)

    def __imul__(self, other):
        return self._icombine(other, lambda a, b: a * b)

    def __itruediv__(self, other):
        return self._icombine(other, lambda a, b: a / b)

    def __eq__(self, other) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return all(float_equals(a, b) for a, b in zip(self, other))

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "[" + ", ".join(format(c, "g") for c in self) + "]"


@dataclass(eq=False)
class Vector2(_Vector):
    """Two-component vector; u and v alias x and y."""

    x: float = 0.0
    y: float = 0.0

    _fields = ("x", "y")

    def dot(self, other: "Vector2") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector2":
        """Return a unit-length copy."""
        return self / self.magnitude()

    def normalize(self) -> None:
        """Scale to unit length in place."""
        self._assign(self.normalized())

    def clean_to_zero(self) -> None:
        """Snap components within EPSILON of zero to exactly zero."""
        self._assign(_snap(c) for c in self)

    @staticmethod
    def lerp(v1: "Vector2", v2: "Vector2", k: float) -> "Vector2":
        """Linear interpolation from v1 (k=0) to v2 (k=1)."""
        return v1 * (1 - k) + v2 * k

    @classmethod
    def parse(cls, text: str) -> "Vector2":
        """Read two whitespace-separated components from text."""
        return _parse(cls, text)

    @property
    def u(self) -> float:
        return self.x

    @u.setter
    def u(self, value: float) -> None:
        self.x = value

    @property
    def v(self) -> float:
        return self.y

    @v.setter
    def v(self, value: float) -> None:
        self.y = value


@dataclass(eq=False)
class Vector3(_Vector):
    """Three-component vector; r, g and b alias x, y and z."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    _fields = ("x", "y", "z")

    def dot(self, other: "Vector3") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vector3") -> "Vector3":
        """Cross product."""
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector3":
        """Return a unit-length copy."""
        return self / self.magnitude()

    def normalize(self) -> None:
        """Scale to unit length in place."""
        self._assign(self.normalized())

    def clean_to_zero(self) -> None:
        """Snap components within EPSILON of zero to exactly zero."""
        self._assign(_snap(c) for c in self)

    @staticmethod
    def lerp(v1: "Vector3", v2: "Vector3", k: float) -> "Vector3":
        """Linear interpolation from v1 (k=0) to v2 (k=1)."""
        return v1 * (1 - k) + v2 * k

    @classmethod
    def parse(cls, text: str) -> "Vector3":
        """Read three whitespace-separated components from text."""
        return _parse(cls, text)

    @classmethod
    def up(cls) -> "Vector3":
        """The world up direction (0, 1, 0)."""
        return cls(0.0, 1.0, 0.0)

    @classmethod
    def from_vector4(cls, v: "Vector4") -> "Vector3":
        """Drop w, dividing by it unless it is (nearly) zero."""
        if float_equals(v.w, 0.0):
            return cls(v.x, v.y, v.z)
        return cls(v.x / v.w, v.y / v.w, v.z / v.w)

    @property
    def r(self) -> float:
        return self.x

    @r.setter
    def r(self, value: float) -> None:
        self.x = value

    @property
    def g(self) -> float:
        return self.y

    @g.setter
    def g(self, value: float) -> None:
        self.y = value

    @property
    def b(self) -> float:
        return self.z

    @b.setter
    def b(self, value: float) -> None:
        self.z = value


@dataclass(eq=False)
class Vector4(_Vector):
    """Four-component vector; r, g, b and a alias x, y, z and w."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    _fields = ("x", "y", "z", "w")

    def dot(self, other: "Vector4") -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def magnitude(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalized(self) -> "Vector4":
        """Return a unit-length copy."""
        return self / self.magnitude()

    def normalize(self) -> None:
        """Scale to unit length in place."""
        self._assign(self.normalized())

    def clean_to_zero(self) -> None:
        """Snap components within EPSILON of zero to exactly zero."""
        self._assign(_snap(c) for c in self)

    @staticmethod
    def lerp(v1: "Vector4", v2: "Vector4", k: float) -> "Vector4":
        """Linear interpolation from v1 (k=0) to v2 (k=1)."""
        return v1 * (1 - k) + v2 * k

    @classmethod
    def parse(cls, text: str) -> "Vector4":
        """Read four whitespace-separated components from text."""
        return _parse(cls, text)

    @classmethod
    def from_vector3(cls, v: Vector3, w: float = 1.0) -> "Vector4":
        """Extend a Vector3 with the given w (1 by default)."""
        return cls(v.x, v.y, v.z, w)

    @property
    def r(self) -> float:
        return self.x

    @r.setter
    def r(self, value: float) -> None:
        self.x = value

    @property
    def g(self) -> float:
        return self.y

    @g.setter
    def g(self, value: float) -> None:
        self.y = value

    @property
    def b(self) -> float:
        return self.z

    @b.setter
    def b(self, value: float) -> None:
        self.z = value

    @property
    def a(self) -> float:
        return self.w

    @a.setter
    def a(self, value: float) -> None:
        self.w = value