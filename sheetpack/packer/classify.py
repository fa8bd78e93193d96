"""Rectangle classification against the sheet outline."""

from __future__ import annotations

from typing import Sequence

from sheetpack.geometry.polygon import Point, Polygon, distance_to_boundary, point_in_polygon

from .models import Classification, ToleranceConfig


def rect_corners(
    x: float, y: float, width: float, height: float,
) -> tuple[Point, Point, Point, Point]:
    """Corners of a lower-left-anchored rectangle, CCW from lower-left."""
    return (
        (x, y),
        (x + width, y),
        (x + width, y + height),
        (x, y + height),
    )


def max_overhang(corners: Sequence[Point], polygon: Polygon) -> float:
    """Largest boundary distance over the corners that lie outside.

    Returns 0.0 when every corner is inside.  For a convex outline the
    corners bound the overhang of the whole rectangle.
    """
    worst = 0.0
    for cx, cy in corners:
        if point_in_polygon(cx, cy, polygon):
            continue
        worst = max(worst, distance_to_boundary(cx, cy, polygon))
    return worst


def classify_rect(
    corners: Sequence[Point],
    polygon: Polygon,
    tolerance: ToleranceConfig,
) -> Classification:
    """FULL if all corners are inside, TOLERANT if the worst outside
    corner is within ``tolerance_cm`` (inclusive), else INVALID."""
    worst = max_overhang(corners, polygon)
    # outside corners are always farther than BOUNDARY_EPS from an edge
    if worst == 0.0:
        return Classification.FULL
    if worst <= tolerance.tolerance_cm:
        return Classification.TOLERANT
    return Classification.INVALID
