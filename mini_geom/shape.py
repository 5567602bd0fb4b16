# mini_geom/shape.py
"""
SHAPES: PARAMETRIC CROSS-SECTIONS
=================================

PURPOSE:
--------
Engineers describe a member's cross-section by catalogue dimensions
(width, height, flange and web thickness), not by vertices. The classes
here turn those dimensions into geometry and answer the questions
structural analysis asks of a section:

    area()                     A   (affects axial stiffness, self-weight)
    perimeter()                    (coating, fire exposure)
    centroid()                     (neutral axis location)
    second_moment_of_area()    I   (bending stiffness), 3×3 tensor
    linearized(sides)              polygon approximation of the boundary

TWO STRATEGIES:
---------------
- POLYGON-BACKED (Rectangle, ShapeI, ShapeC, ShapeL, ShapeT): the
  dimensions produce a fixed vertex list once, and every query delegates
  to that cached Polygon.
- ANALYTIC (Disk): closed-form formulas, exact for any radius.

PLACEMENT:
----------
All sections lie in the global XY plane. Rectangle, I and T are centred on
the origin (T and L by their web); C has its back on the Y axis; L has its
web centred on the Y axis with the flange running along the bottom to +X.
second_moment_of_area() is taken about the global origin in that
placement, centroidal_second_moment_of_area() about the section centroid.

ENGINEERING METADATA:
---------------------
Fillets, toe radii, back fillets and flange taper angles are validated and
stored so section data round-trips, but the geometry uses sharp corners
and parallel flanges. A Rectangle's hole is stored the same way and is not
cut from the section.
"""

import abc
import copy
import logging
import math
from dataclasses import dataclass, field
from typing import List

import numpy as np

from .errors import InvalidShapeError
from .polygon import Polygon
from .precision import epsilon
from .vector import ORIGIN, Vector3

logger = logging.getLogger(__name__)

# Lower bound on the number of sides used to linearize a Disk
DISK_MIN_SIDES = 256


def _require_positive(shape: str, **values: float) -> None:
    eps = epsilon()
    for name, value in values.items():
        if not value > eps:
            raise InvalidShapeError(f"{shape}: {name} must be positive, got {value}")


def _require_non_negative(shape: str, **values: float) -> None:
    for name, value in values.items():
        if value < 0.0:
            raise InvalidShapeError(f"{shape}: {name} must not be negative, got {value}")


def _require_taper(shape: str, **angles: float) -> None:
    for name, angle in angles.items():
        if not 0.0 <= angle < math.pi / 2.0:
            raise InvalidShapeError(f"{shape}: {name} must be in [0, pi/2) radians, got {angle}")


def regular_polygon(radius: float, sides: int) -> Polygon:
    """Regular N-gon of circumradius `radius` centred on the origin, first vertex on +X."""
    if not radius > 0.0:
        raise InvalidShapeError(f"regular polygon radius must be positive, got {radius}")
    if sides < 3:
        raise InvalidShapeError(f"regular polygon needs at least 3 sides, got {sides}")
    step = 2.0 * math.pi / sides
    return Polygon([(radius * math.cos(i * step), radius * math.sin(i * step), 0.0) for i in range(sides)])


class Shape(abc.ABC):
    """Capability shared by every cross-section."""

    @abc.abstractmethod
    def area(self) -> float:
        ...

    @abc.abstractmethod
    def perimeter(self) -> float:
        ...

    @abc.abstractmethod
    def centroid(self) -> Vector3:
        ...

    @abc.abstractmethod
    def local_second_moment_of_area(self) -> np.ndarray:
        """2×2 [[Ixx, Ixy], [Ixy, Iyy]] about the global origin."""

    @abc.abstractmethod
    def second_moment_of_area(self) -> np.ndarray:
        """3×3 inertia tensor about the global origin."""

    @abc.abstractmethod
    def centroidal_second_moment_of_area(self) -> np.ndarray:
        """3×3 inertia tensor about the centroid."""

    @abc.abstractmethod
    def linearized(self, sides: int) -> Polygon:
        ...

    def circumference(self) -> float:
        return self.perimeter()


class PolygonShape(Shape):
    """
    Base for sections defined by a vertex list.

    Subclasses implement vertices(); __post_init__ of each dataclass calls
    _build() after validating its dimensions.
    """

    def vertices(self) -> List[tuple]:
        raise NotImplementedError

    def _build(self) -> None:
        object.__setattr__(self, "_polygon", Polygon(self.vertices()))

    def to_polygon(self) -> Polygon:
        """Independent copy of the section polygon."""
        return copy.deepcopy(self._polygon)

    def area(self) -> float:
        return self._polygon.area()

    def perimeter(self) -> float:
        return self._polygon.perimeter()

    def centroid(self) -> Vector3:
        return self._polygon.centroid()

    def local_second_moment_of_area(self) -> np.ndarray:
        return self._polygon.local_second_moment_of_area()

    def centroidal_local_second_moment_of_area(self) -> np.ndarray:
        return self._polygon.centroidal_local_second_moment_of_area()

    def second_moment_of_area(self) -> np.ndarray:
        return self._polygon.second_moment_of_area()

    def centroidal_second_moment_of_area(self) -> np.ndarray:
        return self._polygon.centroidal_second_moment_of_area()

    def linearized(self, sides: int) -> Polygon:
        """Already polygonal; `sides` is ignored."""
        return self.to_polygon()


@dataclass(frozen=True)
class Rectangle(PolygonShape):
    """
    Solid rectangle centred on the origin.

    Parameters:
    -----------
    width : float
        Extent along X

    height : float
        Extent along Y

    hole_width, hole_height : float
        Optional central opening. Validated and stored; not yet subtracted
        from the section.

    Example:
    --------
    >>> Rectangle(200, 100).area()
    20000.0
    """

    width: float
    height: float
    hole_width: float = 0.0
    hole_height: float = 0.0
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _require_positive("Rectangle", width=self.width, height=self.height)
        _require_non_negative("Rectangle", hole_width=self.hole_width, hole_height=self.hole_height)
        if self.hole_width >= self.width or self.hole_height >= self.height:
            raise InvalidShapeError(
                f"Rectangle: hole ({self.hole_width} x {self.hole_height}) must be smaller "
                f"than the section ({self.width} x {self.height})"
            )
        self._build()

    def vertices(self):
        hw = self.width / 2.0
        hh = self.height / 2.0
        return [(-hw, -hh, 0.0), (hw, -hh, 0.0), (hw, hh, 0.0), (-hw, hh, 0.0)]


@dataclass(frozen=True)
class Disk(Shape):
    """
    Solid circle, optionally with a concentric hole (a tube section).

        A   = π (R² - r²)
        Ix  = Iy = π (R⁴ - r⁴) / 4
        Iz  = Ix + Iy                    (polar)
        perimeter = 2πR                  (outer boundary only)

    Parameters:
    -----------
    radius : float
        Outer radius R

    hole_radius : float
        Inner radius r (0 for a solid disk)
    """

    radius: float
    hole_radius: float = 0.0

    def __post_init__(self):
        _require_non_negative("Disk", hole_radius=self.hole_radius)
        if not self.radius > self.hole_radius:
            raise InvalidShapeError(
                f"Disk: outer radius {self.radius} must exceed hole radius {self.hole_radius}"
            )

    def area(self) -> float:
        return math.pi * (self.radius ** 2 - self.hole_radius ** 2)

    def circumference(self) -> float:
        return 2.0 * math.pi * self.radius

    def perimeter(self) -> float:
        return self.circumference()

    def centroid(self) -> Vector3:
        return ORIGIN

    def _planar_inertia(self) -> float:
        return math.pi * (self.radius ** 4 - self.hole_radius ** 4) / 4.0

    def local_second_moment_of_area(self) -> np.ndarray:
        ix = self._planar_inertia()
        return np.diag([ix, ix])

    def second_moment_of_area(self) -> np.ndarray:
        ix = self._planar_inertia()
        return np.diag([ix, ix, 2.0 * ix])

    def centroidal_second_moment_of_area(self) -> np.ndarray:
        return self.second_moment_of_area()

    def linearized(self, sides: int) -> Polygon:
        """Regular polygon on the outer circle with at least DISK_MIN_SIDES sides."""
        if sides < DISK_MIN_SIDES:
            logger.debug("Disk linearization raised from %d to %d sides", sides, DISK_MIN_SIDES)
        return regular_polygon(self.radius, max(sides, DISK_MIN_SIDES))


@dataclass(frozen=True)
class ShapeI(PolygonShape):
    """
    I (H) profile, symmetric about the Y axis, centred on the origin.

    Flanges may differ top and bottom (mono-symmetric sections).

    Parameters:
    -----------
    bottom_width, top_width : float
        Flange widths

    height : float
        Overall depth; must exceed the two flange thicknesses combined

    bottom_thickness, top_thickness : float
        Flange thicknesses

    web_thickness : float
        Web thickness; narrower than both flanges

    fillet, top_toe_radius, bottom_toe_radius : float
        Root fillet and flange toe radii (metadata)

    top_taper_angle, bottom_taper_angle : float
        Inner flange slope in radians (metadata)
    """

    bottom_width: float
    top_width: float
    height: float
    bottom_thickness: float
    top_thickness: float
    web_thickness: float
    fillet: float = 0.0
    top_toe_radius: float = 0.0
    bottom_toe_radius: float = 0.0
    top_taper_angle: float = 0.0
    bottom_taper_angle: float = 0.0
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _require_positive(
            "ShapeI",
            bottom_width=self.bottom_width,
            top_width=self.top_width,
            height=self.height,
            bottom_thickness=self.bottom_thickness,
            top_thickness=self.top_thickness,
            web_thickness=self.web_thickness,
        )
        _require_non_negative(
            "ShapeI",
            fillet=self.fillet,
            top_toe_radius=self.top_toe_radius,
            bottom_toe_radius=self.bottom_toe_radius,
        )
        _require_taper("ShapeI", top_taper_angle=self.top_taper_angle,
                       bottom_taper_angle=self.bottom_taper_angle)
        if not self.height > self.bottom_thickness + self.top_thickness:
            raise InvalidShapeError(
                f"ShapeI: height {self.height} must exceed flange thicknesses "
                f"{self.bottom_thickness} + {self.top_thickness}"
            )
        if not self.web_thickness < min(self.bottom_width, self.top_width):
            raise InvalidShapeError(
                f"ShapeI: web thickness {self.web_thickness} must be narrower than both flanges "
                f"({self.bottom_width}, {self.top_width})"
            )
        self._build()

    def vertices(self):
        hh = self.height / 2.0
        bh = self.bottom_width / 2.0
        th = self.top_width / 2.0
        wh = self.web_thickness / 2.0
        yb = -hh + self.bottom_thickness
        yt = hh - self.top_thickness
        return [
            (-bh, -hh, 0.0), (bh, -hh, 0.0), (bh, yb, 0.0), (wh, yb, 0.0),
            (wh, yt, 0.0), (th, yt, 0.0), (th, hh, 0.0), (-th, hh, 0.0),
            (-th, yt, 0.0), (-wh, yt, 0.0), (-wh, yb, 0.0), (-bh, yb, 0.0),
        ]


@dataclass(frozen=True)
class ShapeC(PolygonShape):
    """
    Channel profile with its back on the Y axis and flanges pointing to +X.

    Parameters:
    -----------
    bottom_width, top_width : float
        Flange lengths measured from the back of the web

    height : float
        Overall depth; must exceed the two flange thicknesses combined

    bottom_thickness, top_thickness, web_thickness : float
        Plate thicknesses

    fillet, top_toe_radius, bottom_toe_radius, top_back_fillet, bottom_back_fillet : float
        Corner radii (metadata)

    top_taper_angle, bottom_taper_angle : float
        Inner flange slope in radians (metadata)
    """

    bottom_width: float
    top_width: float
    height: float
    bottom_thickness: float
    top_thickness: float
    web_thickness: float
    fillet: float = 0.0
    top_toe_radius: float = 0.0
    bottom_toe_radius: float = 0.0
    top_back_fillet: float = 0.0
    bottom_back_fillet: float = 0.0
    top_taper_angle: float = 0.0
    bottom_taper_angle: float = 0.0
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _require_positive(
            "ShapeC",
            bottom_width=self.bottom_width,
            top_width=self.top_width,
            height=self.height,
            bottom_thickness=self.bottom_thickness,
            top_thickness=self.top_thickness,
            web_thickness=self.web_thickness,
        )
        _require_non_negative(
            "ShapeC",
            fillet=self.fillet,
            top_toe_radius=self.top_toe_radius,
            bottom_toe_radius=self.bottom_toe_radius,
            top_back_fillet=self.top_back_fillet,
            bottom_back_fillet=self.bottom_back_fillet,
        )
        _require_taper("ShapeC", top_taper_angle=self.top_taper_angle,
                       bottom_taper_angle=self.bottom_taper_angle)
        if not self.height > self.bottom_thickness + self.top_thickness:
            raise InvalidShapeError(
                f"ShapeC: height {self.height} must exceed flange thicknesses "
                f"{self.bottom_thickness} + {self.top_thickness}"
            )
        if not self.web_thickness < min(self.bottom_width, self.top_width):
            raise InvalidShapeError(
                f"ShapeC: web thickness {self.web_thickness} must be less than both flange widths "
                f"({self.bottom_width}, {self.top_width})"
            )
        self._build()

    def vertices(self):
        hh = self.height / 2.0
        yb = -hh + self.bottom_thickness
        yt = hh - self.top_thickness
        return [
            (0.0, -hh, 0.0), (self.bottom_width, -hh, 0.0),
            (self.bottom_width, yb, 0.0), (self.web_thickness, yb, 0.0),
            (self.web_thickness, yt, 0.0), (self.top_width, yt, 0.0),
            (self.top_width, hh, 0.0), (0.0, hh, 0.0),
        ]


@dataclass(frozen=True)
class ShapeL(PolygonShape):
    """
    Angle profile: web centred on the Y axis, flange along the bottom to +X.

    Parameters:
    -----------
    width : float
        Overall flange leg length; must exceed web_thickness

    height : float
        Overall web leg length; must exceed flange_thickness

    flange_thickness, web_thickness : float
        Leg thicknesses

    fillet, toe_radius, back_fillet : float
        Corner radii (metadata)

    taper_angle : float
        Leg taper in radians (metadata)
    """

    width: float
    height: float
    flange_thickness: float
    web_thickness: float
    fillet: float = 0.0
    toe_radius: float = 0.0
    back_fillet: float = 0.0
    taper_angle: float = 0.0
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _require_positive(
            "ShapeL",
            width=self.width,
            height=self.height,
            flange_thickness=self.flange_thickness,
            web_thickness=self.web_thickness,
        )
        _require_non_negative("ShapeL", fillet=self.fillet, toe_radius=self.toe_radius,
                              back_fillet=self.back_fillet)
        _require_taper("ShapeL", taper_angle=self.taper_angle)
        if not (self.width > self.web_thickness and self.height > self.flange_thickness):
            raise InvalidShapeError(
                f"ShapeL: legs ({self.width} x {self.height}) must exceed thicknesses "
                f"(web {self.web_thickness}, flange {self.flange_thickness})"
            )
        self._build()

    def vertices(self):
        wh = self.web_thickness / 2.0
        hh = self.height / 2.0
        yf = -hh + self.flange_thickness
        return [
            (-wh, -hh, 0.0), (self.width - wh, -hh, 0.0), (self.width - wh, yf, 0.0),
            (wh, yf, 0.0), (wh, hh, 0.0), (-wh, hh, 0.0),
        ]


@dataclass(frozen=True)
class ShapeT(PolygonShape):
    """
    Tee profile: web centred on the Y axis, flange across the top.

    Parameters:
    -----------
    width : float
        Flange width; must exceed web_thickness

    height : float
        Overall depth; must exceed flange_thickness

    flange_thickness, web_thickness : float
        Plate thicknesses

    fillet, toe_radius : float
        Corner radii (metadata)

    taper_angle : float
        Flange taper in radians (metadata)
    """

    width: float
    height: float
    flange_thickness: float
    web_thickness: float
    fillet: float = 0.0
    toe_radius: float = 0.0
    taper_angle: float = 0.0
    _polygon: Polygon = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        _require_positive(
            "ShapeT",
            width=self.width,
            height=self.height,
            flange_thickness=self.flange_thickness,
            web_thickness=self.web_thickness,
        )
        _require_non_negative("ShapeT", fillet=self.fillet, toe_radius=self.toe_radius)
        _require_taper("ShapeT", taper_angle=self.taper_angle)
        if not self.height > self.flange_thickness:
            raise InvalidShapeError(
                f"ShapeT: height {self.height} must exceed flange thickness {self.flange_thickness}"
            )
        if not self.width > self.web_thickness:
            raise InvalidShapeError(
                f"ShapeT: flange width {self.width} must exceed web thickness {self.web_thickness}"
            )
        self._build()

    def vertices(self):
        hh = self.height / 2.0
        half_w = self.width / 2.0
        wh = self.web_thickness / 2.0
        yf = hh - self.flange_thickness
        return [
            (-wh, -hh, 0.0), (wh, -hh, 0.0), (wh, yf, 0.0), (half_w, yf, 0.0),
            (half_w, hh, 0.0), (-half_w, hh, 0.0), (-half_w, yf, 0.0), (-wh, yf, 0.0),
        ]
