# mini_geom/edge.py
"""
Edge: a Line that can carry tangent directions at its two ends.

Curve-fitting code uses the tangents to remember how a polyline was
sampled from a smooth curve. The geometry itself is entirely the
underlying Line; an Edge only adds bookkeeping.
"""

from typing import List, Optional

from .line import Line
from .precision import epsilon
from .vector import PointLike, Vector3, as_vector3


class Edge:
    """
    Straight edge with optional start/end tangents.

    Parameters:
    -----------
    start, end : PointLike
        Endpoints

    start_tangent, end_tangent : PointLike, optional
        Tangent directions at the endpoints (stored as given, not normalized)
    """

    def __init__(self, start: PointLike, end: PointLike,
                 start_tangent: Optional[PointLike] = None,
                 end_tangent: Optional[PointLike] = None):
        self.line = Line(start, end)
        self._start_tangent = None if start_tangent is None else as_vector3(start_tangent)
        self._end_tangent = None if end_tangent is None else as_vector3(end_tangent)

    @classmethod
    def with_tangents(cls, start: PointLike, end: PointLike,
                      start_tangent: PointLike, end_tangent: PointLike) -> "Edge":
        return cls(start, end, start_tangent, end_tangent)

    def __repr__(self) -> str:
        return (
            f"Edge(start={self.start!r}, end={self.end!r}, "
            f"start_tangent={self._start_tangent!r}, end_tangent={self._end_tangent!r})"
        )

    @property
    def start(self) -> Vector3:
        return self.line.start

    @property
    def end(self) -> Vector3:
        return self.line.end

    def length(self) -> float:
        return self.line.length()

    def centroid(self) -> Vector3:
        return self.line.midpoint()

    def point_at(self, t: float) -> Vector3:
        return self.line.point_at(t)

    def closest_point(self, point: PointLike) -> Vector3:
        return self.line.closest_point(point)

    def contains(self, point: PointLike) -> bool:
        return self.line.contains(point)

    def length_at_point(self, point: PointLike) -> float:
        return self.line.length_at_point(point)

    def is_degenerate(self) -> bool:
        return self.length() <= epsilon()

    # Tangents

    def start_tangent(self) -> Optional[Vector3]:
        return self._start_tangent

    def end_tangent(self) -> Optional[Vector3]:
        return self._end_tangent

    def set_start_tangent(self, tangent: PointLike) -> None:
        self._start_tangent = as_vector3(tangent)

    def set_end_tangent(self, tangent: PointLike) -> None:
        self._end_tangent = as_vector3(tangent)

    # Splitting

    def break_at(self, t: float) -> List["Edge"]:
        """Split at parameter t. Both pieces keep the original tangents."""
        return [
            Edge(piece.start, piece.end, self._start_tangent, self._end_tangent)
            for piece in self.line.break_at(t)
        ]

    def break_at_point(self, point: PointLike) -> List["Edge"]:
        """Split at a point on the edge. The pieces carry no tangents."""
        return [Edge(piece.start, piece.end) for piece in self.line.break_at_point(point)]

    # Intersection

    def intersection_with_line(self, line: Line, ray: bool = False) -> Optional[Vector3]:
        return self.line.intersection(line, ray)

    def ray_intersection_with_edge(self, other: "Edge") -> Optional[Vector3]:
        """Treat this edge as a ray from its start and `other` as an infinite line."""
        return self.line.ray_intersection(other.line)

    # Orientation

    def reverse(self) -> None:
        self.line.reverse()
        self._start_tangent, self._end_tangent = self._end_tangent, self._start_tangent

    def reversed(self) -> "Edge":
        return Edge(self.end, self.start, self._end_tangent, self._start_tangent)
