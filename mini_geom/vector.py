# mini_geom/vector.py
"""
VECTORS: 2D AND 3D VALUE TYPES
==============================

PURPOSE:
--------
Vector2 and Vector3 are small immutable value types. All of the geometry
in this package (lines, arcs, polygons) is written once against Vector3;
planar input is simply the z = 0 subset, and as_vector3() turns any
"point-convertible" value (Vector2, Vector3, tuple, list, numpy array)
into a Vector3.

EQUALITY:
---------
`==` is TOLERANCE-BASED. Two vectors are equal when the distance between
them is at most epsilon():

    Vector3(0, 0, 0) == Vector3(1e-13, 0, 0)   # True with the default 1e-12

Because that relation is not transitive the vectors are deliberately
unhashable. Use exactly_equal() when a bit-exact comparison is really
what you want, and is_approx(other, tolerance) to pass an explicit
tolerance instead of the global one.

NORMALIZATION:
--------------
A zero vector has no direction. normalize() raises
DegenerateGeometryError unless the caller supplies a `fallback`
direction, which is what every internal call site does.
"""

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Union

import numpy as np

from .errors import DegenerateGeometryError, GeometryError
from .precision import resolve


class _VectorOps:
    """Arithmetic shared by Vector2 and Vector3 (subclasses define __iter__)."""

    __slots__ = ()

    def _coerce(self, other):
        raise NotImplementedError

    def __add__(self, other):
        other = self._coerce(other)
        return type(self)(*(a + b for a, b in zip(self, other)))

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        other = self._coerce(other)
        return type(self)(*(a - b for a, b in zip(self, other)))

    def __rsub__(self, other):
        other = self._coerce(other)
        return type(self)(*(b - a for a, b in zip(self, other)))

    def __mul__(self, scalar: float):
        return type(self)(*(a * scalar for a in self))

    def __rmul__(self, scalar: float):
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float):
        return type(self)(*(a / scalar for a in self))

    def __neg__(self):
        return type(self)(*(-a for a in self))

    def __eq__(self, other) -> bool:
        try:
            other = self._coerce(other)
        except (TypeError, ValueError):
            return NotImplemented
        return self.is_approx(other)

    __hash__ = None
    __array_ufunc__ = None

    def __array__(self, dtype=None, copy=None):
        return np.array(tuple(self), dtype=dtype if dtype is not None else float)

    def exactly_equal(self, other) -> bool:
        other = self._coerce(other)
        return all(a == b for a, b in zip(self, other))

    def dot(self, other) -> float:
        other = self._coerce(other)
        return sum(a * b for a, b in zip(self, other))

    def norm_squared(self) -> float:
        return sum(a * a for a in self)

    def norm(self) -> float:
        return math.sqrt(self.norm_squared())

    def normalize(self, fallback=None):
        """
        Unit vector in the same direction.

        Args:
            fallback: Direction returned when the norm is within epsilon
                of zero. Without one, a zero vector is an error.

        Raises:
            DegenerateGeometryError: If the vector is (near) zero and no
                fallback was supplied
        """
        n = self.norm()
        if n <= resolve():
            if fallback is None:
                raise DegenerateGeometryError(f"Cannot normalize zero-length vector {self!r}")
            return self._coerce(fallback)
        return self / n

    def is_approx(self, other, tolerance: Optional[float] = None) -> bool:
        """True when |self - other| <= tolerance (global epsilon if None)."""
        other = self._coerce(other)
        return (self - other).norm() <= resolve(tolerance)

    def distance(self, other) -> float:
        return (self - self._coerce(other)).norm()

    def component_min(self, other):
        other = self._coerce(other)
        return type(self)(*(min(a, b) for a, b in zip(self, other)))

    def component_max(self, other):
        other = self._coerce(other)
        return type(self)(*(max(a, b) for a, b in zip(self, other)))

    def to_array(self) -> np.ndarray:
        return np.array(tuple(self), dtype=float)


@dataclass(frozen=True, eq=False)
class Vector2(_VectorOps):
    """
    Planar vector.

    Parameters:
    -----------
    x, y : float
        Components
    """

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def _coerce(self, other) -> "Vector2":
        if isinstance(other, Vector2):
            return other
        if isinstance(other, Vector3):
            raise TypeError("Cannot combine Vector2 with Vector3; call to_3d() first")
        values = np.asarray(other, dtype=float).ravel()
        if values.shape != (2,):
            raise GeometryError(f"Expected 2 components, got {values.shape[0]}")
        return Vector2(float(values[0]), float(values[1]))

    def cross(self, other) -> float:
        """Z component of the 3D cross product (signed parallelogram area)."""
        other = self._coerce(other)
        return self.x * other.y - self.y * other.x

    def perpendicular(self) -> "Vector2":
        """Vector rotated +90 degrees."""
        return Vector2(-self.y, self.x)

    def angle_to(self, other) -> float:
        other = self._coerce(other)
        return math.atan2(abs(self.cross(other)), self.dot(other))

    def to_3d(self, z: float = 0.0) -> "Vector3":
        return Vector3(self.x, self.y, z)

    @classmethod
    def from_array(cls, values) -> "Vector2":
        values = np.asarray(values, dtype=float).ravel()
        return cls(float(values[0]), float(values[1]))


@dataclass(frozen=True, eq=False)
class Vector3(_VectorOps):
    """
    Spatial vector. `z` defaults to 0 so planar points read naturally.

    Parameters:
    -----------
    x, y, z : float
        Components

    Examples:
    ---------
    >>> Vector3(3, 4).norm()
    5.0
    >>> Vector3(1, 0, 0).cross(Vector3(0, 1, 0))
    Vector3(x=0, y=0, z=1)
    """

    x: float
    y: float
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def _coerce(self, other) -> "Vector3":
        return as_vector3(other)

    def cross(self, other) -> "Vector3":
        o = self._coerce(other)
        return Vector3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x,
        )

    def angle_to(self, other) -> float:
        """Unsigned angle in [0, pi], computed with atan2 for accuracy near 0 and pi."""
        other = self._coerce(other)
        return math.atan2(self.cross(other).norm(), self.dot(other))

    def to_2d(self) -> Vector2:
        return Vector2(self.x, self.y)

    @classmethod
    def from_array(cls, values) -> "Vector3":
        values = np.asarray(values, dtype=float).ravel()
        return cls(float(values[0]), float(values[1]), float(values[2]))


PointLike = Union[Vector2, Vector3, tuple, list, np.ndarray]


def as_vector3(value: PointLike) -> Vector3:
    """
    Convert a point-convertible value to Vector3.

    Accepts Vector3, Vector2 (z = 0), and any 2- or 3-element sequence or
    numpy array.

    Raises:
        GeometryError: If the value does not have 2 or 3 components
    """
    if isinstance(value, Vector3):
        return value
    if isinstance(value, Vector2):
        return value.to_3d()
    values = np.asarray(value, dtype=float).ravel()
    if values.shape == (3,):
        return Vector3(float(values[0]), float(values[1]), float(values[2]))
    if values.shape == (2,):
        return Vector3(float(values[0]), float(values[1]), 0.0)
    raise GeometryError(f"Cannot interpret {value!r} as a point (need 2 or 3 components)")


ORIGIN = Vector3(0.0, 0.0, 0.0)
UNIT_X = Vector3(1.0, 0.0, 0.0)
UNIT_Y = Vector3(0.0, 1.0, 0.0)
UNIT_Z = Vector3(0.0, 0.0, 1.0)
