# mini_geom/viz.py
"""
VISUALIZATION: DRAWING SECTIONS AND CURVES
==========================================

PURPOSE:
--------
Numbers like "Ixx = 1.65e6 mm⁴" are hard to sanity-check on their own. A
drawing of the section with its centroid and principal axes shows at a
glance whether the geometry is what you meant: a flipped C, a T with the
flange on the wrong side, or a centroid outside the section all jump out.

WHAT IS DRAWN:
--------------
- plot_polygon():            filled outline, vertices, centroid
- plot_arc():                linearized arc with center and endpoints
- plot_shape():              any Shape via its linearized polygon
- plot_section_properties(): a Shape plus principal axes and a property box

Every function returns (fig, ax). Pass `ax` to draw into an existing
figure; pass `outpath` to save to disk (the figure is closed afterwards).

Polygons that do not lie in the global XY plane can be drawn in their own
local frame with `local=True`.
"""

import logging
import os
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Polygon as PolygonPatch

from .arc import Arc
from .polygon import Polygon
from .shape import Shape

logger = logging.getLogger(__name__)

# =============================================================================
# COLOR PALETTE
# =============================================================================

COLORS = {
    'section_fill': '#D6EAF8',      # Pale blue
    'section_edge': '#2C3E50',      # Dark blue-gray
    'vertex': '#2C3E50',
    'centroid': '#E74C3C',          # Coral red
    'major_axis': '#E67E22',        # Orange
    'minor_axis': '#27AE60',        # Green
    'arc': '#3498DB',               # Sky blue
    'construction': '#7F8C8D',      # Gray (centers, radii)
    'background': '#FAFAFA',
    'text': '#2C3E50',
}


def _axes(ax, title: str):
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 8), facecolor=COLORS['background'])
    else:
        fig = ax.figure
    ax.set_title(title, fontsize=14, fontweight='bold', color=COLORS['text'])
    return fig, ax


def _finish(fig, ax, outpath: Optional[str]):
    ax.grid(True, alpha=0.3, linestyle='--')
    ax.set_aspect('equal')
    ax.autoscale_view()
    if outpath:
        os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
        fig.tight_layout()
        fig.savefig(outpath, dpi=150, bbox_inches='tight', facecolor=COLORS['background'])
        plt.close(fig)
        logger.info("Plot saved to: %s", outpath)
    return fig, ax


def _outline(polygon: Polygon, local: bool) -> np.ndarray:
    if local:
        return np.array([[p.x, p.y] for p in (polygon.to_local(v) for v in polygon.vertices)])
    return np.array([[v.x, v.y] for v in polygon.vertices])


def plot_polygon(
    polygon: Polygon,
    outpath: Optional[str] = None,
    ax=None,
    title: str = "Polygon",
    show_vertices: bool = True,
    show_centroid: bool = True,
    local: bool = False,
) -> Tuple:
    """
    Draw a polygon as a filled outline.

    Parameters:
    -----------
    polygon : Polygon
        Polygon to draw

    outpath : str, optional
        Save the figure here (png, pdf, svg) and close it

    ax : matplotlib Axes, optional
        Draw into this axes instead of a new figure

    local : bool
        Use the polygon's local frame (centroid at the origin) instead of
        global X/Y. Needed for polygons that are not in the XY plane.

    Returns:
    --------
    (fig, ax)
    """
    fig, ax = _axes(ax, title)
    xy = _outline(polygon, local)

    ax.add_patch(PolygonPatch(
        xy, closed=True,
        facecolor=COLORS['section_fill'], edgecolor=COLORS['section_edge'],
        linewidth=2, label='Section',
    ))
    if show_vertices:
        ax.plot(xy[:, 0], xy[:, 1], 'o', color=COLORS['vertex'], markersize=4, zorder=3)
    if show_centroid:
        c = polygon.centroid()
        cx, cy = (0.0, 0.0) if local else (c.x, c.y)
        ax.plot(cx, cy, '+', color=COLORS['centroid'], markersize=14, markeredgewidth=2,
                label='Centroid', zorder=4)

    ax.update_datalim(xy)
    return _finish(fig, ax, outpath)


def plot_arc(
    arc: Arc,
    segments: int = 64,
    outpath: Optional[str] = None,
    ax=None,
    title: str = "Arc",
    show_construction: bool = True,
) -> Tuple:
    """Draw an arc (projected on global XY) from `segments` chords."""
    fig, ax = _axes(ax, title)
    lines = arc.linearized(segments)
    xs = [lines[0].start.x] + [line.end.x for line in lines]
    ys = [lines[0].start.y] + [line.end.y for line in lines]
    ax.plot(xs, ys, '-', color=COLORS['arc'], linewidth=2.5, label='Arc')
    ax.plot([arc.start.x], [arc.start.y], 'o', color=COLORS['arc'], markersize=7)
    ax.plot([arc.end.x], [arc.end.y], 's', color=COLORS['arc'], markersize=7)

    if show_construction:
        ax.plot([arc.center.x], [arc.center.y], 'x', color=COLORS['construction'], markersize=8)
        for p in (arc.start, arc.end):
            ax.plot([arc.center.x, p.x], [arc.center.y, p.y], '--',
                    color=COLORS['construction'], linewidth=1)
    return _finish(fig, ax, outpath)


def plot_shape(
    shape: Shape,
    sides: int = 64,
    outpath: Optional[str] = None,
    ax=None,
    title: Optional[str] = None,
) -> Tuple:
    """Draw a cross-section through its linearized boundary."""
    polygon = shape.linearized(sides)
    return plot_polygon(
        polygon,
        outpath=outpath,
        ax=ax,
        title=title or type(shape).__name__,
        show_vertices=len(polygon) <= 32,
    )


def plot_section_properties(
    shape: Shape,
    outpath: Optional[str] = None,
    ax=None,
    title: Optional[str] = None,
) -> Tuple:
    """
    Draw a cross-section with its principal axes and a property summary.

    The axes are drawn through the centroid, scaled to the section size.
    Analytic shapes (Disk) have no preferred direction; the global axes
    are drawn for them.
    """
    fig, ax = plot_shape(shape, ax=ax, title=title or f"{type(shape).__name__} section properties")

    polygon = shape.linearized(64)
    lo, hi = polygon.bounding_box()
    half = 0.6 * max(hi.x - lo.x, hi.y - lo.y)
    c = shape.centroid()

    if hasattr(shape, "to_polygon"):
        axes = shape.to_polygon().principal_axes()
    else:
        axes = np.eye(3)
    for column, color, label in ((0, COLORS['major_axis'], 'Major axis'),
                                 (1, COLORS['minor_axis'], 'Minor axis')):
        d = axes[:, column]
        ax.plot([c.x - half * d[0], c.x + half * d[0]], [c.y - half * d[1], c.y + half * d[1]],
                '-.', color=color, linewidth=1.5, label=label)

    J = shape.centroidal_second_moment_of_area()
    textstr = (
        f"A = {shape.area():.4g}\n"
        f"centroid = ({c.x:.4g}, {c.y:.4g})\n"
        f"Ixx = {J[0, 0]:.4g}\n"
        f"Iyy = {J[1, 1]:.4g}\n"
        f"Ixy = {-J[0, 1]:.4g}"
    )
    props = dict(boxstyle='round', facecolor='wheat', alpha=0.8)
    ax.text(0.02, 0.98, textstr, transform=ax.transAxes,
            fontsize=9, verticalalignment='top', bbox=props)
    ax.legend(loc='lower right', fontsize=9, framealpha=0.9)
    return _finish(fig, ax, outpath)
