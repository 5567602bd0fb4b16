# mini_geom/errors.py
"""
Exceptions raised when geometry cannot be constructed.

Only construction-time problems raise. A query that simply has no answer
(parallel lines, circles that do not meet, a zero-length direction) returns
None or an empty list instead, so callers branch on the result rather than
catching exceptions.
"""


class GeometryError(ValueError):
    """Base class for invalid geometric input."""


class PrecisionError(GeometryError):
    """Raised when a tolerance is negative or not a finite number."""


class DegenerateGeometryError(GeometryError):
    """Raised when an object would have zero length, radius or direction."""


class DegeneratePolygonError(GeometryError):
    """Raised when a polygon has fewer than three distinct vertices."""


class InvalidShapeError(GeometryError):
    """Raised when cross-section dimensions are inconsistent."""
