# mini_geom - Computational geometry kernel for structural cross-sections
"""
MINI_GEOM: GEOMETRY KERNEL
==========================

Vectors, segments, arcs, planar polygons and parametric cross-sections,
with the algorithms structural analysis needs from them: lengths, areas,
centroids, second moments of area, containment, intersections and local
coordinate frames.

ARCHITECTURE:
-------------
    precision   one global tolerance (epsilon) used by every predicate
       │
    vector      Vector2 / Vector3 value types
       │
    line        Line segments, Axis, LocalAxis frames
       │
    arc, edge   circular arcs; lines carrying end tangents
       │
    polygon     planar polygons: area, centroid, inertia, containment
       │
    shape       Rectangle, Disk, ShapeI/C/L/T cross-sections

viz (matplotlib drawings) and testing (tolerance assertions) sit on top.

Construction problems raise GeometryError subclasses; queries without an
answer (parallel lines, disjoint circles) return None or [].
"""

from .errors import (
    DegenerateGeometryError,
    DegeneratePolygonError,
    GeometryError,
    InvalidShapeError,
    PrecisionError,
)
from .precision import (
    DEFAULT_EPSILON,
    approx_eq,
    epsilon,
    reset_epsilon,
    scoped_epsilon,
    set_epsilon,
)
from .vector import ORIGIN, UNIT_X, UNIT_Y, UNIT_Z, Vector2, Vector3, as_vector3
from .line import Axis, Line, LocalAxis
from .arc import Arc
from .edge import Edge
from .polygon import Polygon
from .shape import Disk, Rectangle, Shape, ShapeC, ShapeI, ShapeL, ShapeT

__version__ = "0.1.0"

__all__ = [
    'GeometryError', 'PrecisionError', 'DegenerateGeometryError',
    'DegeneratePolygonError', 'InvalidShapeError',
    'DEFAULT_EPSILON', 'epsilon', 'set_epsilon', 'reset_epsilon', 'approx_eq', 'scoped_epsilon',
    'Vector2', 'Vector3', 'as_vector3', 'ORIGIN', 'UNIT_X', 'UNIT_Y', 'UNIT_Z',
    'Axis', 'Line', 'LocalAxis',
    'Arc', 'Edge', 'Polygon',
    'Shape', 'Rectangle', 'Disk', 'ShapeI', 'ShapeC', 'ShapeL', 'ShapeT',
]
