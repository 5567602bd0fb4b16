# mini_geom/polygon.py
"""
POLYGON: PLANAR VERTEX LOOPS AND THEIR SECTION PROPERTIES
=========================================================

PURPOSE:
--------
A Polygon is an ordered, implicitly closed loop of vertices lying in a
plane somewhere in 3D. It is the representation behind every
polygon-backed cross-section (rectangle, I, C, L, T), so besides the
usual metrics it computes the quantities structural analysis needs:
area, centroid and the second moment of area (inertia) tensor.

CONSTRUCTION:
-------------
1. Consecutive duplicate vertices (within epsilon) are dropped; the loop
   is closed implicitly, so a repeated first vertex at the end is dropped
   too. At least three distinct vertices must remain.
2. PLANE: the first vertex triple (i < j < k) with a non-zero cross
   product defines the plane origin and normal. If every triple is
   collinear the normal falls back to global +Z.
3. Every vertex is projected onto that plane, so slightly non-planar
   input is silently flattened.
4. LOCAL FRAME (columns of `rotation`):
       ez = normal
       ex = first non-degenerate edge, projected into the plane
            (falls back to ez × global_Y, then to global X)
       ey = ez × ex
5. Shoelace area, centroid and perimeter in local 2D coordinates.

SECOND MOMENT OF AREA:
----------------------
For local 2D coordinates (x, y), edge i → j, c = xi·yj - xj·yi:

    A    = Σ c / 2
    Ixx0 = Σ (yi² + yi·yj + yj²) c / 12          ∫ y² dA
    Iyy0 = Σ (xi² + xi·xj + xj²) c / 12          ∫ x² dA
    Ixy0 = Σ (xi·yj + 2xi·yi + 2xj·yj + xj·yi) c / 24    ∫ x·y dA

Shift to the centroid (parallel-axis theorem):

    Ixx_c = Ixx0 - A·cy²    Iyy_c = Iyy0 - A·cx²    Ixy_c = Ixy0 - A·cx·cy

The local 2×2 matrices are [[Ixx, Ixy], [Ixy, Iyy]]. The global 3×3
tensor embeds them as a thin plate:

    J_local = [[ Ixx, -Ixy, 0       ],
               [-Ixy,  Iyy, 0       ],
               [ 0,    0,   Ixx+Iyy ]]
    J       = R · J_local · Rᵀ

Moments are always reported for a positively oriented loop, so the
winding direction of the input does not change their sign.

ORIGINS:
--------
    local_second_moment_of_area()             about the projection of the
                                              global origin onto the plane
    centroidal_local_second_moment_of_area()  about the centroid
    second_moment_of_area_at_center()         about the first vertex

Cross-section shapes are defined around the global origin, so the
"local" values are the ones section tables quote for them.
"""

import copy
import logging
import math
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .errors import DegeneratePolygonError
from .line import Axis, Line, LocalAxis
from .precision import epsilon
from .vector import ORIGIN, UNIT_X, UNIT_Y, UNIT_Z, PointLike, Vector3, as_vector3

logger = logging.getLogger(__name__)


def _dedupe(points: List[Vector3]) -> List[Vector3]:
    eps = epsilon()
    result: List[Vector3] = []
    for p in points:
        if result and p.is_approx(result[-1], eps):
            continue
        result.append(p)
    while len(result) > 1 and result[-1].is_approx(result[0], eps):
        result.pop()
    return result


def _fit_plane(points: List[Vector3]) -> Tuple[Vector3, Vector3]:
    """Origin and unit normal from the first non-collinear vertex triple."""
    eps = epsilon()
    n = len(points)
    for i in range(n):
        for j in range(i + 1, n):
            for k in range(j + 1, n):
                a = points[i]
                normal = (points[j] - a).cross(points[k] - a)
                if normal.norm() > eps:
                    return a, normal.normalize()
    logger.debug("All polygon vertices are collinear; plane normal falls back to +Z")
    return points[0], UNIT_Z


def _frame(points: List[Vector3], ez: Vector3) -> np.ndarray:
    eps = epsilon()
    ex = UNIT_X
    count = len(points)
    for i in range(count):
        edge = points[(i + 1) % count] - points[i]
        if edge.norm() > eps:
            ex = edge
            break
    ex = ex - ez * ex.dot(ez)
    if ex.norm() <= eps:
        logger.debug("No polygon edge survives projection; using a frame derived from global Y")
        ex = ez.cross(UNIT_Y).normalize(fallback=UNIT_X)
    else:
        ex = ex.normalize()
    ey = ez.cross(ex)
    return np.column_stack([ex.to_array(), ey.to_array(), ez.to_array()])


def _point_on_segment_2d(p: np.ndarray, a: np.ndarray, b: np.ndarray) -> bool:
    eps = epsilon()
    ab = b - a
    ap = p - a
    cross = ab[0] * ap[1] - ab[1] * ap[0]
    if abs(cross) > eps:
        return False
    dot = ab[0] * ap[0] + ab[1] * ap[1]
    return -eps <= dot <= ab[0] * ab[0] + ab[1] * ab[1] + eps


def _moments(xy: np.ndarray) -> Tuple[float, float, float, float, float, float]:
    """
    Area, centroid and second moments of a closed loop about the local origin.

    Returns (A, cx, cy, Ixx, Iyy, Ixy), normalized to positive orientation.
    """
    x = xy[:, 0]
    y = xy[:, 1]
    xn = np.roll(x, -1)
    yn = np.roll(y, -1)
    cross = x * yn - xn * y

    area2 = float(np.sum(cross))
    if abs(area2) * 0.5 <= epsilon():
        return 0.0, float(np.mean(x)), float(np.mean(y)), 0.0, 0.0, 0.0

    cx = float(np.sum((x + xn) * cross)) / (3.0 * area2)
    cy = float(np.sum((y + yn) * cross)) / (3.0 * area2)
    ixx = float(np.sum((y * y + y * yn + yn * yn) * cross)) / 12.0
    iyy = float(np.sum((x * x + x * xn + xn * xn) * cross)) / 12.0
    ixy = float(np.sum((x * yn + 2.0 * x * y + 2.0 * xn * yn + xn * y) * cross)) / 24.0

    orientation = 1.0 if area2 > 0.0 else -1.0
    return (
        orientation * area2 * 0.5,
        cx,
        cy,
        orientation * ixx,
        orientation * iyy,
        orientation * ixy,
    )


def _embed(matrix: np.ndarray, rotation: np.ndarray) -> np.ndarray:
    """Global 3×3 plate tensor from a local [[Ixx, Ixy], [Ixy, Iyy]] matrix."""
    ixx = matrix[0, 0]
    iyy = matrix[1, 1]
    ixy = matrix[0, 1]
    j_local = np.array([
        [ixx, -ixy, 0.0],
        [-ixy, iyy, 0.0],
        [0.0, 0.0, ixx + iyy],
    ])
    return rotation @ j_local @ rotation.T


class Polygon:
    """
    Planar polygon in 3D space.

    Parameters:
    -----------
    points : Iterable[PointLike]
        Vertices in order. 2D points get z = 0. The loop closes itself;
        do not repeat the first vertex.

    Attributes:
    -----------
    vertices : List[Vector3]
        Deduplicated vertices, projected onto the fitted plane

    normal : Vector3
        Unit plane normal (local Z axis)

    rotation : np.ndarray
        3×3 local frame; columns are ex, ey, ez in global coordinates

    signed_area : float
        Shoelace area in the local frame (sign follows the winding)

    Raises:
    -------
    DegeneratePolygonError
        If fewer than three distinct vertices are given

    Examples:
    ---------
    >>> square = Polygon([(0, 0), (2, 0), (2, 2), (0, 2)])
    >>> square.area(), square.perimeter()
    (4.0, 8.0)
    >>> square.centroid()
    Vector3(x=1.0, y=1.0, z=0.0)
    """

    def __init__(self, points: Iterable[PointLike]):
        raw = [as_vector3(p) for p in points]
        if len(raw) < 3:
            raise DegeneratePolygonError(f"Polygon requires at least 3 vertices, got {len(raw)}")
        verts = _dedupe(raw)
        if len(verts) < 3:
            raise DegeneratePolygonError(
                f"Polygon requires at least 3 distinct vertices, got {len(verts)} of {len(raw)}"
            )

        base, normal = _fit_plane(verts)
        verts = [v - normal * (v - base).dot(normal) for v in verts]

        self.vertices: List[Vector3] = verts
        self.normal: Vector3 = normal
        self.rotation: np.ndarray = _frame(verts, normal)

        xy = self._local_xy(verts[0])
        perimeter = 0.0
        for i in range(len(verts)):
            perimeter += (verts[(i + 1) % len(verts)] - verts[i]).norm()
        x = xy[:, 0]
        y = xy[:, 1]
        self.signed_area = 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))
        _, cx, cy, _, _, _ = _moments(xy)

        self._perimeter = perimeter
        self._centroid = verts[0] + Vector3.from_array(self.rotation @ np.array([cx, cy, 0.0]))

    def __repr__(self) -> str:
        return f"Polygon({len(self.vertices)} vertices, area={self.area():g}, normal={self.normal!r})"

    def __len__(self) -> int:
        return len(self.vertices)

    def _local_xy(self, origin: Vector3) -> np.ndarray:
        pts = np.array([v.to_array() for v in self.vertices]) - origin.to_array()
        return (pts @ self.rotation)[:, :2]

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def lines(self) -> List[Line]:
        n = len(self.vertices)
        return [Line(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def area(self) -> float:
        return abs(self.signed_area)

    def perimeter(self) -> float:
        return self._perimeter

    def centroid(self) -> Vector3:
        return self._centroid

    def center(self) -> Vector3:
        """First vertex (NOT the centroid)."""
        return self.vertices[0]

    def bounding_box(self) -> Tuple[Vector3, Vector3]:
        lo = self.vertices[0]
        hi = self.vertices[0]
        for v in self.vertices[1:]:
            lo = lo.component_min(v)
            hi = hi.component_max(v)
        return lo, hi

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def local_axis(self) -> LocalAxis:
        return LocalAxis(self._centroid, self.rotation)

    def axis(self, axis: Axis) -> Vector3:
        return Vector3.from_array(self.rotation[:, axis.value])

    direction = axis

    def to_local(self, point: PointLike) -> Vector3:
        """Coordinates relative to the centroid in the polygon frame (z = distance from plane)."""
        return self.local_axis().to_local(point)

    def to_global(self, point: PointLike) -> Vector3:
        return self.local_axis().to_global(point)

    # ------------------------------------------------------------------
    # Second moment of area
    # ------------------------------------------------------------------

    def _plane_origin(self) -> Vector3:
        """Projection of the global origin onto the polygon plane."""
        return ORIGIN - self.normal * (ORIGIN - self.vertices[0]).dot(self.normal)

    def _moments_about(self, origin: Vector3):
        return _moments(self._local_xy(origin))

    def centroidal_local_second_moment_of_area(self) -> np.ndarray:
        """2×2 [[Ixx, Ixy], [Ixy, Iyy]] about the centroid, local axes."""
        area, cx, cy, ixx, iyy, ixy = self._moments_about(self.vertices[0])
        if area == 0.0:
            return np.zeros((2, 2))
        ixx_c = ixx - area * cy * cy
        iyy_c = iyy - area * cx * cx
        ixy_c = ixy - area * cx * cy
        return np.array([[ixx_c, ixy_c], [ixy_c, iyy_c]])

    def local_second_moment_of_area(self) -> np.ndarray:
        """2×2 [[Ixx, Ixy], [Ixy, Iyy]] about the in-plane global origin, local axes."""
        area, cx, cy, ixx, iyy, ixy = self._moments_about(self._plane_origin())
        if area == 0.0:
            return np.zeros((2, 2))
        return np.array([[ixx, ixy], [ixy, iyy]])

    def second_moment_of_area(self) -> np.ndarray:
        """Global 3×3 tensor about the in-plane global origin."""
        return _embed(self.local_second_moment_of_area(), self.rotation)

    def centroidal_second_moment_of_area(self) -> np.ndarray:
        """Global 3×3 tensor about the centroid."""
        return _embed(self.centroidal_local_second_moment_of_area(), self.rotation)

    def second_moment_of_area_at_center(self) -> np.ndarray:
        """Global 3×3 tensor about the first vertex, without any centroid shift."""
        area, _, _, ixx, iyy, ixy = self._moments_about(self.vertices[0])
        return _embed(np.array([[ixx, ixy], [ixy, iyy]]), self.rotation)

    def local_principal_axes(self) -> np.ndarray:
        """
        2×2 matrix whose columns are the in-plane principal directions.

        Eigen-decomposition of the centroidal matrix S = [[a, b], [b, c]]:

            λ1 = (tr + sqrt(tr² - 4 det)) / 2       (major)
            v1 = normalize(b, λ1 - a)
            v2 = (-v1.y, v1.x)

        When b is negligible relative to a + c the matrix is already
        diagonal and the coordinate axis with the larger moment is v1.
        Pᵀ S P is diagonal with the major moment first.
        """
        s = self.centroidal_local_second_moment_of_area()
        a = s[0, 0]
        b = s[0, 1]
        c = s[1, 1]
        eps = epsilon()

        if abs(b) <= eps * max(abs(a) + abs(c), 1.0):
            v1 = np.array([1.0, 0.0]) if a >= c else np.array([0.0, 1.0])
        else:
            tr = a + c
            det = a * c - b * b
            l1 = 0.5 * (tr + math.sqrt(max(tr * tr - 4.0 * det, 0.0)))
            v1 = np.array([b, l1 - a])
            v1 = v1 / np.linalg.norm(v1)
        v2 = np.array([-v1[1], v1[0]])
        return np.column_stack([v1, v2])

    def principal_moments(self) -> Tuple[float, float]:
        """(major, minor) centroidal moments along the principal axes."""
        s = self.centroidal_local_second_moment_of_area()
        p = self.local_principal_axes()
        d = p.T @ s @ p
        return float(d[0, 0]), float(d[1, 1])

    def principal_axes(self) -> np.ndarray:
        """3×3 matrix: both principal directions and the normal, in global coordinates."""
        p = self.local_principal_axes()
        local = np.array([
            [p[0, 0], p[0, 1], 0.0],
            [p[1, 0], p[1, 1], 0.0],
            [0.0, 0.0, 1.0],
        ])
        return self.rotation @ local

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def _local_point(self, point: PointLike) -> Optional[np.ndarray]:
        local = self.to_local(point)
        if abs(local.z) > epsilon():
            return None
        return np.array([local.x, local.y])

    def contains(self, point: PointLike) -> bool:
        """
        Strict interior test by ray casting along local +X.

        An edge counts as crossed when it straddles the ray's y with the
        half-open rule (yi > py) != (yj > py), so a ray through a vertex
        is counted once. Points off the plane are never contained.
        """
        p = self._local_point(point)
        if p is None:
            return False
        px, py = p
        xy = self._local_xy(self._centroid)
        inside = False
        n = len(xy)
        for i in range(n):
            xi, yi = xy[i]
            xj, yj = xy[(i + 1) % n]
            straddles = (yi > py and yj <= py) or (yj > py and yi <= py)
            if straddles and xi + (py - yi) * (xj - xi) / (yj - yi + 1e-30) > px:
                inside = not inside
        return inside

    def border_contains(self, point: PointLike) -> bool:
        p = self._local_point(point)
        if p is None:
            return False
        xy = self._local_xy(self._centroid)
        n = len(xy)
        return any(_point_on_segment_2d(p, xy[i], xy[(i + 1) % n]) for i in range(n))

    def closest_point(self, point: PointLike) -> Vector3:
        """Closest point of the polygon region (interior or boundary)."""
        point = as_vector3(point)
        projected = point - self.normal * (point - self._centroid).dot(self.normal)
        if self.contains(projected) or self.border_contains(projected):
            return projected
        best = self.vertices[0]
        best_distance = math.inf
        for line in self.lines():
            candidate = line.closest_point(projected)
            d = (candidate - projected).norm()
            if d < best_distance:
                best_distance = d
                best = candidate
        return best

    def intersection_with_line(self, line: Line, ray: bool = False) -> List[Vector3]:
        """
        Point where a line pierces the polygon.

        The plane is hit at t = n·(centroid - s0) / n·d. The line is
        treated as infinite, or as a half-line from its start when `ray`
        is set. A line parallel to the plane gives no hit; so does a hit
        outside the polygon.
        """
        eps = epsilon()
        direction = line.vector()
        denom = self.normal.dot(direction)
        if abs(denom) <= eps:
            return []
        t = self.normal.dot(self._centroid - line.start) / denom
        if ray:
            if t < -eps:
                return []
            t = max(t, 0.0)
        hit = line.start + direction * t
        if self.contains(hit) or self.border_contains(hit):
            return [hit]
        return []

    # ------------------------------------------------------------------
    # Validity and orientation
    # ------------------------------------------------------------------

    def is_self_intersecting(self) -> bool:
        """True when two non-adjacent edges intersect."""
        edges = self.lines()
        n = len(edges)
        for i in range(n):
            for j in range(i + 1, n):
                if j == i + 1 or (i == 0 and j == n - 1):
                    continue
                if edges[i].intersection(edges[j]) is not None:
                    return True
        return False

    def is_valid(self) -> bool:
        return self.area() > epsilon() and not self.is_self_intersecting()

    def reverse(self) -> None:
        """
        Reverse the winding in place.

        The normal and signed area flip; ex is kept and ey is rebuilt as
        ez × ex so the frame stays right-handed.
        """
        self.vertices.reverse()
        self.normal = -self.normal
        ex = Vector3.from_array(self.rotation[:, 0])
        ey = self.normal.cross(ex)
        self.rotation = np.column_stack([ex.to_array(), ey.to_array(), self.normal.to_array()])
        self.signed_area = -self.signed_area

    def reversed(self) -> "Polygon":
        clone = copy.copy(self)
        clone.vertices = list(self.vertices)
        clone.rotation = self.rotation.copy()
        clone.reverse()
        return clone
