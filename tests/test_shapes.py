# tests/test_shapes.py
"""
Test parametric cross-sections against hand-calculated section properties.

Every polygon-backed section is a union of rectangles, so each expected
value below is a sum of rectangle contributions:

    A   = b h
    Ixx = ∫ y² dA = b (y2³ - y1³) / 3        about the global X axis
    Iyy = ∫ x² dA = h (x2³ - x1³) / 3        about the global Y axis
    Ixy = ∫ x y dA = A x̄ ȳ
"""

import dataclasses
import math

import numpy as np
import pytest

from mini_geom.errors import InvalidShapeError
from mini_geom.polygon import Polygon
from mini_geom.shape import (
    DISK_MIN_SIDES,
    Disk,
    PolygonShape,
    Rectangle,
    Shape,
    ShapeC,
    ShapeI,
    ShapeL,
    ShapeT,
    regular_polygon,
)
from mini_geom.testing import assert_vector_approx

REL = 1e-10


def local_moments(shape):
    m = shape.local_second_moment_of_area()
    return m[0, 0], m[1, 1], m[0, 1]


# ---------------------------------------------------------------------------
# Rectangle
# ---------------------------------------------------------------------------

def test_rectangle_section_properties():
    rect = Rectangle(200, 100)
    assert rect.area() == pytest.approx(20000.0, rel=REL)
    assert rect.perimeter() == pytest.approx(600.0, rel=REL)
    assert_vector_approx(rect.centroid(), (0, 0, 0), tol=1e-9)

    ixx, iyy, ixy = local_moments(rect)
    assert ixx == pytest.approx(200 * 100 ** 3 / 12, rel=REL)
    assert iyy == pytest.approx(100 * 200 ** 3 / 12, rel=REL)
    assert ixy == pytest.approx(0.0, abs=1e-6)

    j = rect.second_moment_of_area()
    assert j[2, 2] == pytest.approx(ixx + iyy, rel=REL)
    print(f"✓ Rectangle 200×100: Ixx = {ixx:.2f}, Iyy = {iyy:.2f}")


def test_rectangle_hole_is_metadata_only():
    rect = Rectangle(220, 140, 100, 60)
    assert rect.hole_width == 100
    assert rect.hole_height == 60
    assert rect.area() == pytest.approx(30800.0, rel=REL)
    ixx, iyy, _ = local_moments(rect)
    assert ixx == pytest.approx(50306666.666666664, rel=REL)
    assert iyy == pytest.approx(124226666.66666669, rel=REL)
    assert rect.second_moment_of_area()[2, 2] == pytest.approx(174533333.33333334, rel=REL)


# ---------------------------------------------------------------------------
# I section
# ---------------------------------------------------------------------------

def test_shape_i_section_properties():
    """
    ShapeI(120, 120, 300, 12, 12, 8):
        A   = 2·120·12 + 8·276                   = 5088
        Ixx = 120·300³/12 - 112·276³/12          = 73 770 624
        Iyy = 2·12·120³/12 + 276·8³/12           = 3 467 776
    """
    section = ShapeI(120, 120, 300, 12, 12, 8)
    assert section.area() == pytest.approx(5088.0, rel=REL)
    ixx, iyy, ixy = local_moments(section)
    assert ixx == pytest.approx(73770624.0, rel=REL)
    assert iyy == pytest.approx(3467776.0, rel=REL)
    assert ixy == pytest.approx(0.0, abs=1e-4)
    assert section.second_moment_of_area()[2, 2] == pytest.approx(77238400.0, rel=REL)
    assert section.perimeter() == pytest.approx(1064.0, rel=REL)
    assert_vector_approx(section.centroid(), (0, 0, 0), tol=1e-9)
    print("✓ I 300: A = 5088, Ixx = 73 770 624")


def test_shape_i_metre_units():
    section = ShapeI(0.18, 0.18, 0.3, 0.02, 0.02, 0.01)
    assert section.area() == pytest.approx(0.0098, rel=REL)


def test_shape_i_with_engineering_metadata():
    """Fillets, toe radii and tapers are stored but the geometry stays sharp-cornered."""
    section = ShapeI(150, 150, 360, 16, 16, 10, 12, 5, 6, math.radians(2.0), math.radians(3.0))
    assert section.fillet == 12
    assert section.top_taper_angle == pytest.approx(math.radians(2.0))
    assert section.area() == pytest.approx(8080.0, rel=REL)
    ixx, iyy, _ = local_moments(section)
    assert ixx == pytest.approx(150 * 360 ** 3 / 12 - 140 * 328 ** 3 / 12, rel=REL)
    assert iyy == pytest.approx(2 * 16 * 150 ** 3 / 12 + 328 * 10 ** 3 / 12, rel=REL)


def test_mono_symmetric_i_centroid_moves_toward_larger_flange():
    section = ShapeI(200, 100, 300, 20, 10, 8)
    assert section.centroid().y < 0.0
    assert section.centroid().x == pytest.approx(0.0, abs=1e-9)


# ---------------------------------------------------------------------------
# T section
# ---------------------------------------------------------------------------

def test_shape_t_section_properties():
    """
    ShapeT(120, 100, 12, 8): web 8 × 88 below y = 38, flange 120 × 12 above.
        A  = 704 + 1440 = 2144
        ȳ  = (704·(-6) + 1440·44) / 2144
    """
    section = ShapeT(120, 100, 12, 8)
    assert section.area() == pytest.approx(2144.0, rel=REL)
    assert_vector_approx(section.centroid(), (0.0, 27.582089552238806, 0.0), tol=1e-9)

    ixx, iyy, _ = local_moments(section)
    assert ixx == pytest.approx(8 * (38 ** 3 + 50 ** 3) / 3 + 120 * (50 ** 3 - 38 ** 3) / 3, rel=REL)
    assert iyy == pytest.approx(88 * 8 ** 3 / 12 + 12 * 120 ** 3 / 12, rel=REL)
    assert section.second_moment_of_area()[2, 2] == pytest.approx(ixx + iyy, rel=REL)

    jc = section.centroidal_second_moment_of_area()
    ybar = 59136 / 2144
    assert jc[0, 0] == pytest.approx(ixx - 2144 * ybar ** 2, rel=1e-9)
    assert jc[1, 1] == pytest.approx(iyy, rel=1e-9)
    assert jc[2, 2] == pytest.approx(ixx - 2144 * ybar ** 2 + iyy, rel=1e-9)
    print("✓ T 120×100: centroid and parallel-axis shift")


def test_shape_t_with_metadata():
    section = ShapeT(160, 140, 16, 10, 10, 4, math.radians(1.5))
    assert section.area() == pytest.approx(3800.0, rel=REL)
    assert section.centroid().y == pytest.approx(39.15789473684211, rel=REL)
    ixx, iyy, _ = local_moments(section)
    assert ixx == pytest.approx(10 * (54 ** 3 + 70 ** 3) / 3 + 160 * (70 ** 3 - 54 ** 3) / 3, rel=REL)
    assert iyy == pytest.approx(124 * 10 ** 3 / 12 + 16 * 160 ** 3 / 12, rel=REL)


def test_shape_t_metre_units():
    assert ShapeT(0.14, 0.28, 0.02, 0.01).area() == pytest.approx(0.0054, rel=REL)


# ---------------------------------------------------------------------------
# C section
# ---------------------------------------------------------------------------

def test_shape_c_section_properties():
    section = ShapeC(80, 80, 200, 10, 10, 6)
    assert section.area() == pytest.approx(2680.0, rel=REL)
    assert section.centroid().x == pytest.approx(25.08955223880597, rel=REL)
    assert section.centroid().y == pytest.approx(0.0, abs=1e-9)

    ixx, iyy, _ = local_moments(section)
    assert ixx == pytest.approx(80 * 200 ** 3 / 12 - 74 * 180 ** 3 / 12, rel=REL)
    assert iyy == pytest.approx(2 * 10 * 80 ** 3 / 3 + 180 * 6 ** 3 / 3, rel=REL)


def test_asymmetric_shape_c_has_product_of_inertia():
    """
    Unequal flanges put the centroid off the X axis and give a non-zero
    product Ixy = Σ A x̄ ȳ. The global tensor stores -Ixy off the diagonal.
    """
    section = ShapeC(110, 90, 240, 14, 12, 8)
    assert section.area() == pytest.approx(4332.0, rel=REL)
    assert_vector_approx(section.centroid(), (32.35180055401662, -11.35457063711911, 0.0), tol=1e-9)

    _, _, ixy = local_moments(section)
    assert ixy == pytest.approx(-4023852.0, rel=REL)
    j = section.second_moment_of_area()
    assert j[0, 1] == pytest.approx(4023852.0, rel=REL)
    assert j[1, 0] == pytest.approx(4023852.0, rel=REL)


def test_shape_c_metre_units():
    assert ShapeC(0.12, 0.08, 0.25, 0.015, 0.012, 0.008).area() == pytest.approx(0.004544, rel=REL)


# ---------------------------------------------------------------------------
# L section
# ---------------------------------------------------------------------------

def test_shape_l_section_properties():
    """
    ShapeL(80, 80, 8, 8): flange 80 × 8 on y ∈ [-40, -32] from x = -4,
    web 8 × 72 on x ∈ [-4, 4].
    """
    section = ShapeL(80, 80, 8, 8)
    assert section.area() == pytest.approx(1216.0, rel=REL)
    assert_vector_approx(section.centroid(), (18.94736842105263, -17.05263157894737, 0.0), tol=1e-9)

    ixx, iyy, ixy = local_moments(section)
    assert ixx == pytest.approx(80 * (40 ** 3 - 32 ** 3) / 3 + 8 * (40 ** 3 + 32 ** 3) / 3, rel=REL)
    assert iyy == pytest.approx(8 * (76 ** 3 + 4 ** 3) / 3 + 72 * (4 ** 3 + 4 ** 3) / 3, rel=REL)
    assert ixy == pytest.approx(-829440.0, rel=REL)

    j = section.second_moment_of_area()
    assert j[0, 1] == pytest.approx(829440.0, rel=REL)
    assert j[2, 2] == pytest.approx(ixx + iyy, rel=REL)


def test_unequal_shape_l():
    section = ShapeL(120, 100, 12, 10)
    assert section.area() == pytest.approx(2320.0, rel=REL)
    assert_vector_approx(section.centroid(), (34.13793103448276, -25.03448275862069, 0.0), tol=1e-9)
    ixx, iyy, ixy = local_moments(section)
    assert ixx == pytest.approx(2805120.0 + 10 * (50 ** 3 + 38 ** 3) / 3, rel=REL)
    assert iyy == pytest.approx(6084000.0 + 88 * (5 ** 3 + 5 ** 3) / 3, rel=REL)
    assert ixy == pytest.approx(-3484800.0, rel=REL)


def test_shape_l_metre_units():
    assert ShapeL(0.1, 0.12, 0.02, 0.015).area() == pytest.approx(0.0035, rel=REL)


# ---------------------------------------------------------------------------
# Disk
# ---------------------------------------------------------------------------

def test_solid_disk_is_analytic():
    disk = Disk(50)
    assert disk.area() == pytest.approx(math.pi * 50 ** 2, rel=REL)
    assert disk.circumference() == pytest.approx(2 * math.pi * 50, rel=REL)
    assert disk.perimeter() == pytest.approx(disk.circumference())
    j = disk.second_moment_of_area()
    assert j[0, 0] == pytest.approx(math.pi * 50 ** 4 / 4, rel=REL)
    assert j[2, 2] == pytest.approx(2 * math.pi * 50 ** 4 / 4, rel=REL)
    assert j[0, 1] == 0.0
    assert_vector_approx(disk.centroid(), (0, 0, 0))


def test_hollow_disk():
    tube = Disk(80, 20)
    assert tube.area() == pytest.approx(math.pi * (80 ** 2 - 20 ** 2), rel=REL)
    assert tube.second_moment_of_area()[2, 2] == pytest.approx(
        2 * math.pi * (80 ** 4 - 20 ** 4) / 4, rel=REL
    )
    np.testing.assert_allclose(tube.centroidal_second_moment_of_area(), tube.second_moment_of_area())
    np.testing.assert_allclose(tube.local_second_moment_of_area(), np.diag([math.pi * (80 ** 4 - 20 ** 4) / 4] * 2))


def test_disk_linearization_has_minimum_resolution():
    disk = Disk(10)
    coarse = disk.linearized(8)
    assert isinstance(coarse, Polygon)
    assert len(coarse) == DISK_MIN_SIDES
    assert len(disk.linearized(400)) == 400
    assert coarse.area() == pytest.approx(disk.area(), rel=1e-3)
    for v in coarse.vertices:
        assert v.norm() == pytest.approx(10.0)


def test_regular_polygon():
    square = regular_polygon(math.sqrt(2.0), 4)
    assert square.area() == pytest.approx(4.0)
    with pytest.raises(InvalidShapeError):
        regular_polygon(1.0, 2)


# ---------------------------------------------------------------------------
# Common behaviour
# ---------------------------------------------------------------------------

ALL_SECTIONS = [
    Rectangle(200, 100),
    ShapeI(120, 120, 300, 12, 12, 8),
    ShapeI(200, 100, 300, 20, 10, 8),
    ShapeC(110, 90, 240, 14, 12, 8),
    ShapeL(80, 80, 8, 8),
    ShapeT(120, 100, 12, 8),
]


@pytest.mark.parametrize("section", ALL_SECTIONS, ids=lambda s: type(s).__name__)
def test_polygon_sections_produce_valid_polygons(section):
    assert isinstance(section, Shape)
    assert isinstance(section, PolygonShape)
    polygon = section.to_polygon()
    assert polygon.is_valid()
    assert polygon.area() == pytest.approx(section.area())
    assert_vector_approx(polygon.normal, (0, 0, 1))
    assert len(section.linearized(32)) == len(section.vertices())

    # Centroidal moments are the origin moments shifted by the parallel-axis theorem
    c = section.centroid()
    j = section.second_moment_of_area()
    jc = section.centroidal_second_moment_of_area()
    a = section.area()
    assert jc[0, 0] == pytest.approx(j[0, 0] - a * c.y ** 2, rel=1e-9)
    assert jc[1, 1] == pytest.approx(j[1, 1] - a * c.x ** 2, rel=1e-9)


def test_to_polygon_returns_an_independent_copy():
    section = Rectangle(2, 1)
    polygon = section.to_polygon()
    polygon.reverse()
    assert section.to_polygon().signed_area > 0.0
    assert section.area() == pytest.approx(2.0)


def test_sections_are_immutable():
    section = ShapeT(120, 100, 12, 8)
    with pytest.raises(dataclasses.FrozenInstanceError):
        section.width = 200
    assert section == ShapeT(120, 100, 12, 8)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: Rectangle(0, 100),
        lambda: Rectangle(100, -1),
        lambda: Rectangle(100, 50, 100, 10),
        lambda: Rectangle(100, 50, -1, 10),
        lambda: Disk(0),
        lambda: Disk(10, 10),
        lambda: Disk(10, -1),
        lambda: ShapeI(120, 120, 20, 12, 12, 8),
        lambda: ShapeI(120, 120, 300, 12, 12, 130),
        lambda: ShapeI(120, 120, 300, 12, 12, 8, fillet=-1),
        lambda: ShapeI(120, 120, 300, 12, 12, 8, top_taper_angle=math.pi / 2),
        lambda: ShapeC(80, 80, 200, 10, 10, 90),
        lambda: ShapeC(80, 80, 200, 10, 10, 6, top_back_fillet=-2),
        lambda: ShapeL(8, 80, 8, 8),
        lambda: ShapeL(80, 8, 8, 8),
        lambda: ShapeT(120, 12, 12, 8),
        lambda: ShapeT(8, 100, 12, 8),
        lambda: ShapeT(120, 100, 12, 8, taper_angle=-0.1),
    ],
)
def test_invalid_dimensions_raise(factory):
    with pytest.raises(InvalidShapeError):
        factory()


def test_invalid_shape_error_is_a_value_error():
    with pytest.raises(ValueError):
        Rectangle(-1, 1)
