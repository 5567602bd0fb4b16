# mini_geom/testing.py
"""
Tolerance-aware assertions for tests that use the geometry kernel.

    assert_approx(poly.area(), 4.0)
    assert_approx(poly.centroid(), (1, 1, 0))
    assert_approx(shape.second_moment_of_area()[2, 2], 83333333.33, rel=1e-10)

Scalars, vectors, sequences and numpy arrays are all accepted; everything
goes through numpy.testing so failures show the offending entries.
"""

from typing import Optional

import numpy as np

from .precision import resolve
from .vector import PointLike, as_vector3


def assert_approx(actual, expected, tol: Optional[float] = None, rel: Optional[float] = None) -> None:
    """
    Assert that `actual` matches `expected` element-wise.

    Args:
        actual: Value under test (scalar, Vector2/3, sequence or array)
        expected: Reference value of the same shape
        tol: Absolute tolerance (global epsilon if None and rel is None)
        rel: Relative tolerance; when given, `tol` defaults to 0

    Raises:
        AssertionError: If any entry is outside the tolerance
    """
    a = np.asarray(actual, dtype=float)
    e = np.asarray(expected, dtype=float)
    if rel is None:
        np.testing.assert_allclose(a, e, rtol=0.0, atol=resolve(tol))
    else:
        np.testing.assert_allclose(a, e, rtol=rel, atol=0.0 if tol is None else tol)


def assert_vector_approx(actual: PointLike, expected: PointLike, tol: Optional[float] = None) -> None:
    """Assert |actual - expected| <= tol (Euclidean distance, not per component)."""
    a = as_vector3(actual)
    e = as_vector3(expected)
    tolerance = resolve(tol)
    distance = a.distance(e)
    assert distance <= tolerance, f"{a!r} != {e!r} (distance {distance:g} > {tolerance:g})"
