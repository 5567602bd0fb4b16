# mini_geom/arc.py
"""
ARC: CIRCULAR ARCS IN 3D
========================

PURPOSE:
--------
An Arc is a piece of a circle given by its center, two endpoints and a
rotational sense. It is always planar: the plane is fixed by `normal` at
construction and nothing can drift out of it afterwards.

STORED STATE:
-------------
    center, start, end : Vector3
    radius             : (|start - center| + |end - center|) / 2
    normal             : unit vector of the arc's plane
    sweep              : signed angle, start → end, about `normal`

Rotating (start - center) by `sweep` about `normal` gives (end - center).

SWEEP RESOLUTION:
-----------------
Given unit radius directions s and e:

    1. normal = normalize(s × e); if s and e are (anti)parallel the
       normal is ±Z (minus Z when clockwise). A clockwise arc flips a
       well-defined normal.
    2. sweep  = atan2(|s × e|, s·e), negated when (s × e)·normal < 0
    3. clockwise with sweep > 0          → sweep -= 2π
       counter-clockwise with sweep < 0  → sweep += 2π
    4. |sweep| <= ε (start ≈ end)        → sweep = ±π

The clockwise flag therefore controls the SIGN convention (normal and
sweep flip together); the physical arc between two distinct,
non-antipodal endpoints is always the shorter one. Step 4 is a fixed
tie-break: coincident endpoints produce a half circle, never a
zero-length arc and never a full circle.

PARAMETRIZATION:
----------------
    perp     = normal × s
    P(θ)     = center + r (cos θ s + sin θ perp)
    T(θ)     = -sin θ s + cos θ perp          (unit tangent)
    point_at(t) = P(sweep × t),   t ∈ [0, 1]
"""

import logging
import math
from typing import List, Optional, Tuple

from .errors import DegenerateGeometryError
from .line import Line
from .precision import epsilon
from .vector import UNIT_X, UNIT_Z, PointLike, Vector3, as_vector3

logger = logging.getLogger(__name__)

TWO_PI = 2.0 * math.pi


class Arc:
    """
    Circular arc from `start` to `end` around `center`.

    Parameters:
    -----------
    center : PointLike
        Circle center

    start, end : PointLike
        Endpoints, assumed to be (nearly) the same distance from center

    clockwise : bool
        Rotational sense. Clockwise arcs have a negative sweep.

    Raises:
    -------
    DegenerateGeometryError
        If the radius is within epsilon of zero

    Examples:
    ---------
    >>> quarter = Arc((0, 0), (1, 0), (0, 1))
    >>> round(quarter.length(), 6)
    1.570796
    """

    def __init__(self, center: PointLike, start: PointLike, end: PointLike, clockwise: bool = False):
        eps = epsilon()
        center = as_vector3(center)
        start = as_vector3(start)
        end = as_vector3(end)

        start_vec = start - center
        end_vec = end - center
        start_len = start_vec.norm()
        end_len = end_vec.norm()
        radius = (start_len + end_len) * 0.5
        if radius <= eps:
            raise DegenerateGeometryError(
                f"Arc radius is zero (center={center!r}, start={start!r}, end={end!r})"
            )

        cross = start_vec.cross(end_vec)
        cross_norm = cross.norm()
        if cross_norm <= eps:
            normal = -UNIT_Z if clockwise else UNIT_Z
        else:
            normal = cross / cross_norm
            if clockwise:
                normal = -normal

        start_dir = start_vec / start_len if start_len > eps else UNIT_X
        end_dir = end_vec / end_len if end_len > eps else start_dir

        cross_dir = start_dir.cross(end_dir)
        dot = min(max(start_dir.dot(end_dir), -1.0), 1.0)
        sweep = math.atan2(cross_dir.norm(), dot)
        if cross_dir.dot(normal) < 0.0:
            sweep = -sweep

        if clockwise and sweep > 0.0:
            sweep -= TWO_PI
        elif not clockwise and sweep < 0.0:
            sweep += TWO_PI

        if abs(sweep) <= eps:
            logger.debug("Arc endpoints coincide; sweep forced to a half turn")
            sweep = -math.pi if clockwise else math.pi

        self.center = center
        self.start = start
        self.end = end
        self.normal = normal.normalize(fallback=UNIT_Z)
        self.sweep = sweep
        self.radius = radius

    @classmethod
    def _from_parts(cls, center, start, end, normal, sweep, radius) -> "Arc":
        arc = cls.__new__(cls)
        arc.center = center
        arc.start = start
        arc.end = end
        arc.normal = normal
        arc.sweep = sweep
        arc.radius = radius
        return arc

    @classmethod
    def from_three_points(cls, p1: PointLike, p2: PointLike, p3: PointLike) -> Optional["Arc"]:
        """
        Arc from p1 to p3 on the circle through p1, p2 and p3.

        The circle center is found in a local 2D frame (u along p1→p2,
        v perpendicular in the plane of the three points):

            cx = x2 / 2
            cy = (x3² + y3² - x2·x3) / (2 y3)

        Returns None when two points coincide or all three are collinear.
        """
        eps = epsilon()
        p1 = as_vector3(p1)
        p2 = as_vector3(p2)
        p3 = as_vector3(p3)

        v1 = p2 - p1
        v2 = p3 - p1
        if v1.norm() <= eps or v2.norm() <= eps:
            return None

        plane_normal = v1.cross(v2)
        if plane_normal.norm() <= eps:
            return None
        plane_normal = plane_normal.normalize()

        u = v1.normalize()
        v = plane_normal.cross(u)
        x2 = v1.dot(u)
        x3 = v2.dot(u)
        y3 = v2.dot(v)
        if abs(y3) <= eps:
            return None

        cx = x2 * 0.5
        cy = (x3 * x3 + y3 * y3 - x2 * x3) / (2.0 * y3)
        center = p1 + u * cx + v * cy
        return cls(center, p1, p3, clockwise=cy < 0.0)

    def __repr__(self) -> str:
        return (
            f"Arc(center={self.center!r}, start={self.start!r}, end={self.end!r}, "
            f"radius={self.radius:g}, sweep={self.sweep:g})"
        )

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def angle(self) -> float:
        """Signed sweep in radians."""
        return self.sweep

    def is_clockwise(self) -> bool:
        return self.sweep < 0.0

    def length(self) -> float:
        return self.radius * abs(self.sweep)

    def _start_dir(self) -> Vector3:
        return (self.start - self.center).normalize(fallback=UNIT_X)

    def point_at_angle(self, angle: float) -> Vector3:
        s = self._start_dir()
        perp = self.normal.cross(s)
        rotated = s * math.cos(angle) + perp * math.sin(angle)
        return self.center + rotated * self.radius

    def angle_at(self, t: float) -> float:
        return self.sweep * t

    def point_at(self, t: float) -> Vector3:
        return self.point_at_angle(self.sweep * t)

    def midpoint(self) -> Vector3:
        return self.point_at(0.5)

    def tangent_at_angle(self, angle: float) -> Vector3:
        s = self._start_dir()
        perp = self.normal.cross(s)
        return s * -math.sin(angle) + perp * math.cos(angle)

    def start_tangent(self) -> Vector3:
        return self.tangent_at_angle(0.0)

    def end_tangent(self) -> Vector3:
        return self.tangent_at_angle(self.sweep)

    def bounding_box(self) -> Tuple[Vector3, Vector3]:
        """
        Axis-aligned bounds of the arc.

        Each global coordinate of P(θ) is c + r(cos θ s_k + sin θ p_k),
        which is extreme at θ = atan2(p_k, s_k) + mπ. Those angles that
        fall inside the sweep are evaluated together with both endpoints.
        """
        s = self._start_dir()
        perp = self.normal.cross(s)
        angles = [0.0, self.sweep]
        for s_k, p_k in zip(s, perp):
            if abs(s_k) <= epsilon() and abs(p_k) <= epsilon():
                continue
            base = math.atan2(p_k, s_k)
            for m in range(-3, 4):
                theta = base + m * math.pi
                if self._angle_in_range(theta):
                    angles.append(theta)
        points = [self.point_at_angle(a) for a in angles]
        lo = points[0]
        hi = points[0]
        for p in points[1:]:
            lo = lo.component_min(p)
            hi = hi.component_max(p)
        return lo, hi

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def angle_from_point(self, point: PointLike) -> float:
        """
        Signed angle of `point` measured from `start` about `normal`.

        Range is (-π, π]. Returns 0 for a point at the center.
        """
        vec = as_vector3(point) - self.center
        if vec.norm() <= epsilon():
            return 0.0
        s = self._start_dir()
        perp = self.normal.cross(s)
        direction = vec.normalize()
        return math.atan2(direction.dot(perp), direction.dot(s))

    def _angle_in_range(self, angle: float) -> bool:
        eps = epsilon()
        if self.sweep >= 0.0:
            return -eps <= angle <= self.sweep + eps
        return self.sweep - eps <= angle <= eps

    def _clamp_angle(self, angle: float) -> float:
        if self.sweep >= 0.0:
            return min(max(angle, 0.0), self.sweep)
        return min(max(angle, self.sweep), 0.0)

    def contains(self, point: PointLike) -> bool:
        """Angle within the sweep AND distance from center equal to radius."""
        point = as_vector3(point)
        if not self._angle_in_range(self.angle_from_point(point)):
            return False
        return abs((point - self.center).norm() - self.radius) <= epsilon()

    def closest_point(self, point: PointLike) -> Vector3:
        return self.point_at_angle(self._clamp_angle(self.angle_from_point(point)))

    def distance(self, point: PointLike) -> float:
        point = as_vector3(point)
        return (point - self.closest_point(point)).norm()

    def length_at_angle(self, angle: float) -> float:
        return self.radius * abs(angle)

    def length_at_point(self, point: PointLike) -> float:
        return self.length_at_angle(self._clamp_angle(self.angle_from_point(point)))

    # ------------------------------------------------------------------
    # Splitting and orientation
    # ------------------------------------------------------------------

    def _segment(self, start_angle: float, end_angle: float) -> "Arc":
        return Arc._from_parts(
            self.center,
            self.point_at_angle(start_angle),
            self.point_at_angle(end_angle),
            self.normal,
            end_angle - start_angle,
            self.radius,
        )

    def break_at(self, t: float) -> List["Arc"]:
        """Split at parameter t; [self] unless 0 < t < 1."""
        if t <= 0.0 or t >= 1.0:
            return [self]
        angle = self.sweep * t
        return [self._segment(0.0, angle), self._segment(angle, self.sweep)]

    def break_at_angle(self, angle: float) -> List["Arc"]:
        if abs(self.sweep) <= epsilon() or not self._angle_in_range(angle):
            return [self]
        return [self._segment(0.0, angle), self._segment(angle, self.sweep)]

    def break_at_point(self, point: PointLike) -> List["Arc"]:
        if not self.contains(point):
            return [self]
        return self.break_at_angle(self.angle_from_point(point))

    def reverse(self) -> None:
        """
        Swap the endpoints in place and run the same points backwards.

        Only the sweep changes sign. Negating the normal as well would give
        the same rotation as before, which carries the new start away from
        the new end instead of onto it.
        """
        self.start, self.end = self.end, self.start
        self.sweep = -self.sweep

    def reversed(self) -> "Arc":
        return Arc._from_parts(self.center, self.end, self.start, self.normal, -self.sweep, self.radius)

    # ------------------------------------------------------------------
    # Intersection
    # ------------------------------------------------------------------

    def intersection_with_line(self, line: Line, ray: bool = False) -> List[Vector3]:
        """
        Points where a line crosses this arc.

        Substituting P(t) = s + t d into |P - c|² = r² gives

            a t² + b t + c = 0
            a = d·d,   b = 2 d·(s - c),   c = |s - c|² - r²

        A discriminant within ε of zero is a tangent (one root).

        Segment mode keeps roots with t ∈ [-ε, 1 + ε] that also lie on
        the arc. Ray mode keeps every root with t >= -ε and does NOT
        filter by the arc's sweep: the result is the hits on the full
        circle.

        Raises:
            DegenerateGeometryError: If the line has zero length
        """
        eps = epsilon()
        origin = line.start
        direction = line.vector()
        to_center = origin - self.center

        a = direction.dot(direction)
        if a <= eps:
            raise DegenerateGeometryError(f"Cannot intersect an arc with zero-length line {line!r}")
        b = 2.0 * direction.dot(to_center)
        c = to_center.dot(to_center) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant < -eps:
            return []

        root = math.sqrt(max(discriminant, 0.0))
        if root <= eps:
            candidates = [-b / (2.0 * a)]
        else:
            candidates = [(-b - root) / (2.0 * a), (-b + root) / (2.0 * a)]

        hits = []
        for t in candidates:
            if ray:
                if t < -eps:
                    continue
            elif t < -eps or t > 1.0 + eps:
                continue
            point = origin + direction * t
            if ray or self.contains(point):
                hits.append(point)
        return hits

    def intersection_with_arc(self, other: "Arc") -> List[Vector3]:
        """
        Points shared by two coplanar arcs (radical-line construction).

            d  = |c2 - c1|
            a  = (r1² - r2² + d²) / (2d)       distance from c1 to the chord
            h  = sqrt(r1² - a²)                half chord

        Concentric circles, circles too far apart (d > r1 + r2) and one
        circle inside the other (d < |r1 - r2|) have no intersection. A
        tangency yields a single point. Every candidate must lie on BOTH
        arcs.
        """
        eps = epsilon()
        diff = other.center - self.center
        d = diff.norm()
        if d <= eps:
            return []

        r1 = self.radius
        r2 = other.radius
        if d > r1 + r2 + eps or d < abs(r1 - r2) - eps:
            return []

        a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
        h_sq = r1 * r1 - a * a
        if h_sq < -eps:
            return []
        h = math.sqrt(max(h_sq, 0.0))

        base = self.center + diff * (a / d)
        perp = self.normal.cross(diff / d)

        if h <= eps:
            candidates = [base]
        else:
            candidates = [base - perp * h, base + perp * h]
        return [p for p in candidates if self.contains(p) and other.contains(p)]

    # ------------------------------------------------------------------
    # Discretization
    # ------------------------------------------------------------------

    def linearized(self, segments: int) -> List[Line]:
        """Approximate the arc by `segments` chords (at least one)."""
        segments = max(int(segments), 1)
        lines = []
        previous = self.start
        for i in range(1, segments + 1):
            current = self.point_at(i / segments)
            lines.append(Line(previous, current))
            previous = current
        return lines
