"""
Pure-Python polygon geometry utilities.

All coordinates in cm, origin at the middle of the bottom base, X to the
right, Y up.
"""

from __future__ import annotations
import math
from typing import Sequence

Point = tuple[float, float]  # (x, y)
Polygon = Sequence[Point]
Bounds = tuple[float, float, float, float]

BOUNDARY_EPS = 1e-9  # cm; points this close to an edge count as inside


# ── core primitives ─────────────────────────────────────────────────


def polygon_area(polygon: Polygon) -> float:
    """Signed area via shoelace formula (positive = CCW)."""
    n = len(polygon)
    if n < 3:
        return 0.0
    area = 0.0
    for i in range(n):
        x0, y0 = polygon[i]
        x1, y1 = polygon[(i + 1) % n]
        area += x0 * y1 - x1 * y0
    return area / 2.0


def polygon_centroid(polygon: Polygon) -> Point:
    """Area centroid.  Falls back to the vertex mean for degenerate input."""
    n = len(polygon)
    a = polygon_area(polygon)
    if n < 3 or abs(a) < 1e-12:
        return (
            sum(p[0] for p in polygon) / n,
            sum(p[1] for p in polygon) / n,
        )
    cx = cy = 0.0
    for i in range(n):
        x0, y0 = polygon[i]
        x1, y1 = polygon[(i + 1) % n]
        cross = x0 * y1 - x1 * y0
        cx += (x0 + x1) * cross
        cy += (y0 + y1) * cross
    return cx / (6.0 * a), cy / (6.0 * a)


def polygon_bounds(polygon: Polygon) -> Bounds:
    """Return (min_x, min_y, max_x, max_y)."""
    xs = [v[0] for v in polygon]
    ys = [v[1] for v in polygon]
    return min(xs), min(ys), max(xs), max(ys)


def expand_bounds(bounds: Bounds, margin: float) -> Bounds:
    """Grow *bounds* by *margin* on every side."""
    min_x, min_y, max_x, max_y = bounds
    return min_x - margin, min_y - margin, max_x + margin, max_y + margin


def union_bounds(a: Bounds, b: Bounds) -> Bounds:
    return min(a[0], b[0]), min(a[1], b[1]), max(a[2], b[2]), max(a[3], b[3])


# ── distances ──────────────────────────────────────────────────────


def distance_to_segment(px: float, py: float, a: Point, b: Point) -> float:
    """Shortest distance from (px, py) to the segment a–b."""
    x1, y1 = a
    x2, y2 = b
    dx, dy = x2 - x1, y2 - y1
    if dx == 0 and dy == 0:
        return math.hypot(px - x1, py - y1)
    t = max(0.0, min(1.0, ((px - x1) * dx + (py - y1) * dy) / (dx * dx + dy * dy)))
    proj_x = x1 + t * dx
    proj_y = y1 + t * dy
    return math.hypot(px - proj_x, py - proj_y)


def distance_to_boundary(px: float, py: float, polygon: Polygon) -> float:
    """Minimum distance from a point to any polygon edge."""
    n = len(polygon)
    return min(
        distance_to_segment(px, py, polygon[i], polygon[(i + 1) % n])
        for i in range(n)
    )


# ── containment ────────────────────────────────────────────────────


def on_boundary(x: float, y: float, polygon: Polygon, eps: float = BOUNDARY_EPS) -> bool:
    n = len(polygon)
    for i in range(n):
        if distance_to_segment(x, y, polygon[i], polygon[(i + 1) % n]) <= eps:
            return True
    return False


def point_in_polygon(x: float, y: float, polygon: Polygon) -> bool:
    """Ray-casting point-in-polygon test.

    Points on an edge (within BOUNDARY_EPS) are inside, so rectangles
    that abut the outline are never rejected by floating-point noise.
    """
    if on_boundary(x, y, polygon):
        return True
    n = len(polygon)
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside
        j = i
    return inside
