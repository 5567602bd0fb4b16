# mini_geom/line.py
"""
LINE: FINITE SEGMENTS AND LOCAL FRAMES
======================================

PURPOSE:
--------
A Line is the segment between two points. It is the workhorse of the
kernel: polygons are loops of lines, arcs linearize into lines, and the
structural layer asks a member's line for its local coordinate frame.

PARAMETRIZATION:
----------------
    P(t) = start + t × (end - start),    t ∈ [0, 1]

Every predicate that tests a parameter range widens it by epsilon() on
both sides, so a point that is "on the endpoint" within tolerance counts.

A line may be DEGENERATE (start == end within tolerance). Nothing here
divides by its length without checking first: direction() and the frame
methods return None, closest_point() returns `start`.

LOCAL FRAME CONVENTION:
-----------------------
rotation_matrix() returns the 3×3 matrix whose columns are the local
axes expressed in global coordinates:

    ex = unit tangent (start → end)
    ez = normalize(ex × global_Y)      lies in the global XZ-plane
         (global +Z when the line is parallel to global Y)
    ey = ez × ex                       completes a right-handed basis

Reference frames that follow from this rule:

    line along +X:  ex=(1,0,0)  ey=(0,1,0)   ez=(0,0,1)   (identity)
    line along +Y:  ex=(0,1,0)  ey=(-1,0,0)  ez=(0,0,1)
    line along +Z:  ex=(0,0,1)  ey=(0,1,0)   ez=(-1,0,0)

Downstream member code relies on these exact signs, not on "some"
orthonormal frame.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .precision import RAY_TOLERANCE, epsilon
from .vector import UNIT_X, UNIT_Y, UNIT_Z, PointLike, Vector3, as_vector3

logger = logging.getLogger(__name__)


class Axis(Enum):
    """Canonical axes; the value is the column index in a rotation matrix."""

    X = 0
    Y = 1
    Z = 2

    @property
    def vector(self) -> Vector3:
        return (UNIT_X, UNIT_Y, UNIT_Z)[self.value]


def axis_angle_matrix(axis: PointLike, angle: float) -> Optional[np.ndarray]:
    """
    Rotation matrix for `angle` radians about `axis` (Rodrigues' formula).

        R = I + sin(θ) K + (1 - cos(θ)) K²

    where K is the cross-product matrix of the unit axis. Returns None for
    a zero-length axis.
    """
    axis = as_vector3(axis)
    if axis.norm() <= epsilon():
        return None
    kx, ky, kz = axis.normalize()
    K = np.array([
        [0.0, -kz, ky],
        [kz, 0.0, -kx],
        [-ky, kx, 0.0],
    ])
    return np.eye(3) + math.sin(angle) * K + (1.0 - math.cos(angle)) * (K @ K)


class LocalAxis:
    """
    A local coordinate frame: an origin plus an orthonormal basis.

    The columns of `rotation` are the local X, Y, Z axes expressed in
    global coordinates, so

        local  = Rᵀ (p - origin)
        global = origin + R local
    """

    def __init__(self, origin: PointLike, rotation: np.ndarray):
        self.origin = as_vector3(origin)
        self.rotation = np.asarray(rotation, dtype=float).reshape(3, 3)

    def __repr__(self) -> str:
        return f"LocalAxis(origin={self.origin!r}, rotation={self.rotation.tolist()!r})"

    def direction(self, axis: Axis) -> Vector3:
        return Vector3.from_array(self.rotation[:, axis.value])

    @property
    def x_axis(self) -> Vector3:
        return self.direction(Axis.X)

    @property
    def y_axis(self) -> Vector3:
        return self.direction(Axis.Y)

    @property
    def z_axis(self) -> Vector3:
        return self.direction(Axis.Z)

    def to_local(self, point: PointLike) -> Vector3:
        offset = (as_vector3(point) - self.origin).to_array()
        return Vector3.from_array(self.rotation.T @ offset)

    def to_global(self, point: PointLike) -> Vector3:
        local = as_vector3(point).to_array()
        return Vector3.from_array(self.origin.to_array() + self.rotation @ local)


@dataclass(eq=True)
class Line:
    """
    Segment between two points.

    Unlike vectors, a Line is MUTABLE: set_endpoints(), move(), rotate()
    and reverse() change it in place, because member code repositions its
    nodes and expects the line to follow.

    Parameters:
    -----------
    start : PointLike
        First endpoint (converted to Vector3)

    end : PointLike
        Second endpoint (converted to Vector3)

    Examples:
    ---------
    >>> line = Line((0, 0), (4, 0))
    >>> line.length()
    4.0
    >>> line.point_at(0.25)
    Vector3(x=1.0, y=0.0, z=0.0)
    """

    start: Vector3
    end: Vector3

    def __post_init__(self):
        self.start = as_vector3(self.start)
        self.end = as_vector3(self.end)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_endpoints(self, start: PointLike, end: PointLike) -> None:
        self.start = as_vector3(start)
        self.end = as_vector3(end)

    def move_start(self, start: PointLike) -> None:
        self.start = as_vector3(start)

    def move_end(self, end: PointLike) -> None:
        self.end = as_vector3(end)

    def move(self, offset: PointLike) -> None:
        """Translate both endpoints by `offset`."""
        offset = as_vector3(offset)
        self.start = self.start + offset
        self.end = self.end + offset

    def rotate(self, angle: float, axis: PointLike, origin: Optional[PointLike] = None) -> None:
        """
        Rigidly rotate the line about an axis.

        Args:
            angle: Rotation in radians (right-hand rule about `axis`)
            axis: Axis direction; a zero-length axis leaves the line unchanged
            origin: Point the axis passes through (defaults to the midpoint)
        """
        R = axis_angle_matrix(axis, angle)
        if R is None:
            logger.debug("rotate() called with zero-length axis; line unchanged")
            return
        pivot = self.midpoint() if origin is None else as_vector3(origin)
        p = pivot.to_array()
        self.start = Vector3.from_array(p + R @ (self.start - pivot).to_array())
        self.end = Vector3.from_array(p + R @ (self.end - pivot).to_array())

    def reverse(self) -> None:
        self.start, self.end = self.end, self.start

    def reversed(self) -> "Line":
        return Line(self.end, self.start)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def vector(self) -> Vector3:
        """end - start (not normalized)."""
        return self.end - self.start

    def direction(self) -> Optional[Vector3]:
        """Unit tangent, or None when the line is degenerate."""
        length = self.length()
        if length <= epsilon():
            return None
        return self.vector() / length

    def length(self) -> float:
        return self.vector().norm()

    def midpoint(self) -> Vector3:
        return (self.start + self.end) * 0.5

    def point_at(self, t: float) -> Vector3:
        return self.start + self.vector() * t

    def bounding_box(self) -> Tuple[Vector3, Vector3]:
        return self.start.component_min(self.end), self.start.component_max(self.end)

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def _raw_parameter(self, point: Vector3) -> Optional[float]:
        d = self.vector()
        len_sq = d.dot(d)
        if len_sq <= epsilon():
            return None
        return d.dot(point - self.start) / len_sq

    def closest_point(self, point: PointLike) -> Vector3:
        """Orthogonal projection clamped to the segment."""
        point = as_vector3(point)
        t = self._raw_parameter(point)
        if t is None:
            return self.start
        return self.point_at(min(max(t, 0.0), 1.0))

    def projection(self, point: PointLike) -> Vector3:
        return self.closest_point(point)

    def distance(self, point: PointLike) -> float:
        point = as_vector3(point)
        return (point - self.closest_point(point)).norm()

    def contains(self, point: PointLike) -> bool:
        """
        True when `point` lies on the segment within tolerance.

        Both conditions must hold: the clamped projection is within
        epsilon of the point, and the unclamped parameter is inside
        [-ε, 1 + ε].
        """
        point = as_vector3(point)
        eps = epsilon()
        t = self._raw_parameter(point)
        if t is None:
            return point.is_approx(self.start, eps)
        if t < -eps or t > 1.0 + eps:
            return False
        return point.is_approx(self.closest_point(point), eps)

    def point_parameter(self, point: PointLike) -> Optional[float]:
        """Clamped parameter of a point on the line; None if it is not on it."""
        point = as_vector3(point)
        if not self.contains(point):
            return None
        t = self._raw_parameter(point)
        if t is None:
            return 0.0
        return min(max(t, 0.0), 1.0)

    def length_at_point(self, point: PointLike) -> float:
        """Distance along the line from `start` to the projection of `point`."""
        return (self.closest_point(point) - self.start).norm()

    # ------------------------------------------------------------------
    # Splitting
    # ------------------------------------------------------------------

    def break_at(self, t: float) -> List["Line"]:
        """Split at parameter t; returns [self] when t is not strictly inside (0, 1)."""
        if t <= 0.0 or t >= 1.0:
            return [self]
        split = self.point_at(t)
        return [Line(self.start, split), Line(split, self.end)]

    def break_at_point(self, point: PointLike) -> List["Line"]:
        point = as_vector3(point)
        if not self.contains(point):
            return [self]
        eps = epsilon()
        if point.is_approx(self.start, eps) or point.is_approx(self.end, eps):
            return [self]
        return [Line(self.start, point), Line(point, self.end)]

    # ------------------------------------------------------------------
    # Intersection
    # ------------------------------------------------------------------

    def intersection(self, other: "Line", ray: bool = False) -> Optional[Vector3]:
        """
        Intersection point with another line.

        Solves the closest-approach system of the two parametric lines

            P(s) = s1 + s d1,    Q(t) = s2 + t d2

        in closed form:

            a = d1·d1   b = d1·d2   e = d2·d2   r = s1 - s2
            c = d1·r    f = d2·r    denom = a e - b²

            s = (b f - c e) / denom,    t = (a f - b c) / denom

        Segment mode (ray=False): both s and t must lie in [-ε, 1 + ε].

        Ray mode (ray=True): `self` is a half-line from its start and
        `other` is an infinite line. Only s is checked, against the looser
        RAY_TOLERANCE to absorb round-off at the ray origin; a slightly
        negative s is clamped to 0.

        Parallel or collinear lines (|denom| <= ε) return other.start if
        it lies on self, else None. Finally the two candidate points must
        agree within ε, which rejects skew lines in 3D and near-parallel
        noise.
        """
        eps = epsilon()
        d1 = self.vector()
        d2 = other.vector()

        a = d1.dot(d1)
        e = d2.dot(d2)
        b = d1.dot(d2)
        r = self.start - other.start
        c = d1.dot(r)
        f = d2.dot(r)

        denom = a * e - b * b
        if abs(denom) <= eps:
            if self.contains(other.start):
                return other.start
            return None

        s = (b * f - c * e) / denom
        t = (a * f - b * c) / denom

        if ray:
            if s < -RAY_TOLERANCE:
                return None
            s = max(s, 0.0)
        elif s < -eps or s > 1.0 + eps or t < -eps or t > 1.0 + eps:
            return None

        on_self = self.start + d1 * s
        on_other = other.start + d2 * t
        if on_self.is_approx(on_other, eps):
            return on_self
        return None

    def ray_intersection(self, other: "Line") -> Optional[Vector3]:
        return self.intersection(other, ray=True)

    # ------------------------------------------------------------------
    # Local frame
    # ------------------------------------------------------------------

    def rotation_matrix(self) -> Optional[np.ndarray]:
        """3×3 local frame [ex | ey | ez]; None for a degenerate line."""
        ex = self.direction()
        if ex is None:
            return None
        ez_raw = ex.cross(UNIT_Y)
        if ez_raw.norm() <= epsilon():
            ez = UNIT_Z
        else:
            ez = ez_raw.normalize()
        ey = ez.cross(ex)
        return np.column_stack([ex.to_array(), ey.to_array(), ez.to_array()])

    def local_axis(self) -> Optional[LocalAxis]:
        """Local frame with its origin at `start`."""
        R = self.rotation_matrix()
        if R is None:
            return None
        return LocalAxis(self.start, R)

    def axis(self, axis: Axis) -> Optional[Vector3]:
        frame = self.local_axis()
        return None if frame is None else frame.direction(axis)

    def to_local(self, point: PointLike) -> Optional[Vector3]:
        frame = self.local_axis()
        return None if frame is None else frame.to_local(point)

    def to_global(self, point: PointLike) -> Optional[Vector3]:
        frame = self.local_axis()
        return None if frame is None else frame.to_global(point)
