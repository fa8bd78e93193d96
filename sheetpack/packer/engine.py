"""Spiral packing engine — grid-aligned outward search with tolerant fits."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Callable, Iterator

from shapely.geometry import Polygon as ShapelyPolygon

from sheetpack.geometry.polygon import (
    Bounds, Polygon,
    expand_bounds, polygon_bounds, polygon_centroid, union_bounds,
)
from sheetpack.geometry.trapezoid import Trapezoid

from .classify import classify_rect, rect_corners
from .models import (
    Classification, PackingError, PackingResult, Placement, RectSpec, ToleranceConfig,
)

if TYPE_CHECKING:
    from sheetpack.config import PackingRules


log = logging.getLogger(__name__)

OVERLAP_EPS = 1e-9  # cm; shared edges between neighbouring cells are not overlap


# ── Spiral ordering ────────────────────────────────────────────────


def spiral_offset(index: int) -> tuple[int, int]:
    """Map a candidate index to a (column, row) offset from the seed cell.

    Index 0 is the seed.  Ring k >= 1 holds indices [(2k-1)², (2k+1)²)
    and is walked up the right side, left along the top, down the left
    side and right along the bottom.  Pure integer arithmetic.
    """
    if index < 0:
        raise ValueError(f"Spiral index must be non-negative, got {index}")
    if index == 0:
        return (0, 0)
    k = (math.isqrt(index) + 1) // 2
    t = index - (2 * k - 1) ** 2
    side, s = divmod(t, 2 * k)
    if side == 0:
        return (k, -k + 1 + s)
    if side == 1:
        return (k - 1 - s, k)
    if side == 2:
        return (-k, k - 1 - s)
    return (-k + 1 + s, -k)


def ring_start(k: int) -> int:
    """First spiral index of ring *k*."""
    return 0 if k == 0 else (2 * k - 1) ** 2


def spiral_cells(
    i_min: int, i_max: int, j_min: int, j_max: int,
) -> Iterator[tuple[int, int]]:
    """Yield the :func:`spiral_offset` walk restricted to a cell window.

    Cells are produced in the same order as the unrestricted spiral, but
    each ring side is clipped to ``[i_min, i_max] × [j_min, j_max]``, so
    a wide, short window costs no candidates above or below it.
    """
    if i_min <= 0 <= i_max and j_min <= 0 <= j_max:
        yield (0, 0)
    rings = max(abs(i_min), abs(i_max), abs(j_min), abs(j_max))
    for k in range(1, rings + 1):
        if i_min <= k <= i_max:
            for dj in range(max(-k + 1, j_min), min(k, j_max) + 1):
                yield (k, dj)
        if j_min <= k <= j_max:
            for di in range(min(k - 1, i_max), max(-k, i_min) - 1, -1):
                yield (di, k)
        if i_min <= -k <= i_max:
            for dj in range(min(k - 1, j_max), max(-k, j_min) - 1, -1):
                yield (-k, dj)
        if j_min <= -k <= j_max:
            for di in range(max(-k + 1, i_min), min(k, i_max) + 1):
                yield (di, -k)


# ── Helpers ────────────────────────────────────────────────────────


def _extent(hits: Callable[[int], bool], start: int, step: int) -> int:
    """Last offset in direction *step* whose column/row touches the bounds.

    *start* is an estimate; it is walked until ``hits`` turns over so the
    result agrees exactly with the float predicate.
    """
    n = start
    while not hits(n) and n * step > 0:
        n -= step
    while hits(n + step):
        n += step
    return n


def _rects_overlap(a: Bounds, b: Bounds) -> bool:
    """True when the interiors of two axis-aligned rectangles intersect."""
    ox = min(a[2], b[2]) - max(a[0], b[0])
    oy = min(a[3], b[3]) - max(a[1], b[1])
    return ox > OVERLAP_EPS and oy > OVERLAP_EPS


def _validate_inputs(
    polygon: Polygon,
    rect: RectSpec,
    tolerance: ToleranceConfig,
    max_iterations: int,
    region: Bounds | None,
) -> None:
    if len(polygon) < 3:
        raise PackingError(f"Polygon has only {len(polygon)} vertices — need at least 3.")
    shape = ShapelyPolygon(polygon)
    if not shape.is_valid or shape.area <= 0:
        raise PackingError("Polygon is self-intersecting or has zero area.")
    if not (0 < rect.width < math.inf and 0 < rect.height < math.inf):
        raise PackingError(
            f"Detail must have positive size, got {rect.width}×{rect.height}cm."
        )
    if not 0 <= tolerance.tolerance_cm < math.inf:
        raise PackingError(f"Tolerance must be non-negative, got {tolerance.tolerance_cm}.")
    if max_iterations < 0:
        raise PackingError(f"max_iterations must be non-negative, got {max_iterations}.")
    if region is not None and not all(math.isfinite(v) for v in region):
        raise PackingError(f"Search region must be finite, got {region}.")


# ── Main packing function ─────────────────────────────────────────


def pack(
    polygon: Polygon,
    rect: RectSpec,
    tolerance: ToleranceConfig,
    max_iterations: int,
    *,
    region: Bounds | None = None,
) -> PackingResult:
    """Pack identical details into *polygon* along an outward spiral.

    Candidate cells form a grid of detail-sized cells: rows start at the
    bottom of the polygon, columns are centred on its vertical mid-line.
    The search starts at the cell holding the polygon's centroid and
    walks the square spiral from :func:`spiral_offset`, clipped to the
    window of cells that touch the search bounds (see
    :func:`spiral_cells`).  Only cells inside that window are candidates
    and count against *max_iterations*; the search has converged once the
    window is used up.

    Parameters
    ----------
    polygon : Polygon
        Sheet outline (any simple polygon; convex for exact tolerances).
    rect : RectSpec
        Detail size.
    tolerance : ToleranceConfig
        Allowed corner overhang.
    max_iterations : int
        Candidate budget.  Zero yields an empty, exhausted result.
    region : Bounds, optional
        Extra search area (e.g. the trapezoid inflated by its vertical
        margin).  It is added to the tolerance-expanded polygon bounds.
        Cells are always classified against *polygon*, so a larger region
        only adds rejected candidates: it raises ``iterations_used`` and
        the candidate ``index`` values but never adds, removes or moves a
        placement.

    Returns
    -------
    PackingResult
        Accepted placements in acceptance order.

    Raises
    ------
    PackingError
        On a degenerate polygon, non-positive detail size, negative
        tolerance, negative iteration budget or non-finite region.
    """
    _validate_inputs(polygon, rect, tolerance, max_iterations, region)

    w, h = rect.width, rect.height
    poly_bounds = polygon_bounds(polygon)
    search = expand_bounds(poly_bounds, tolerance.tolerance_cm)
    if region is not None:
        search = union_bounds(search, region)
    s_min_x, s_min_y, s_max_x, s_max_y = search

    # Grid anchoring: column 0 centred on the mid-line, row 0 on the base.
    mid_x = (poly_bounds[0] + poly_bounds[2]) / 2.0
    base_y = poly_bounds[1]
    _, centroid_y = polygon_centroid(polygon)
    seed_row = math.floor((centroid_y - base_y) / h)

    def cell_origin(di: int, dj: int) -> tuple[float, float]:
        return mid_x + (di - 0.5) * w, base_y + (seed_row + dj) * h

    def col_hits(di: int) -> bool:
        x0, _ = cell_origin(di, 0)
        return x0 <= s_max_x and x0 + w >= s_min_x

    def row_hits(dj: int) -> bool:
        _, y0 = cell_origin(0, dj)
        return y0 <= s_max_y and y0 + h >= s_min_y

    # Only cells touching the search bounds are candidates; the window
    # doubles as the bounding-box pre-filter.
    window = (
        _extent(col_hits, math.ceil((s_min_x - mid_x) / w - 0.5), -1),
        _extent(col_hits, math.floor((s_max_x - mid_x) / w + 0.5), 1),
        _extent(row_hits, math.ceil((s_min_y - base_y) / h) - 1 - seed_row, -1),
        _extent(row_hits, math.floor((s_max_y - base_y) / h) - seed_row, 1),
    )

    placements: list[Placement] = []
    occupied: dict[tuple[int, int], Placement] = {}
    exhausted = False
    index = 0

    for di, dj in spiral_cells(*window):
        if index >= max_iterations:
            exhausted = True
            break
        x, y = cell_origin(di, dj)
        index += 1

        cls = classify_rect(rect_corners(x, y, w, h), polygon, tolerance)
        if cls is Classification.INVALID:
            continue

        # Same-size grid cells can only overlap their eight neighbours.
        bounds = (x, y, x + w, y + h)
        if any(
            _rects_overlap(bounds, occupied[(di + a, dj + b)].bounds)
            for a in (-1, 0, 1) for b in (-1, 0, 1)
            if (di + a, dj + b) in occupied
        ):
            continue

        placement = Placement(
            x=x, y=y, width=w, height=h,
            classification=cls, index=index - 1,
        )
        placements.append(placement)
        occupied[(di, dj)] = placement
        log.debug("Placed detail #%d at (%.2f, %.2f) %s",
                  len(placements), x, y, cls.value)

    result = PackingResult(
        placements=placements,
        iterations_used=index,
        exhausted=exhausted,
    )
    log.info(
        "Packed %d details (%d full, %d tolerant) in %d/%d iterations%s",
        len(placements), result.full_count, result.tolerant_count,
        index, max_iterations,
        " — stopped at iteration cap" if exhausted else "",
    )
    return result


def pack_trapezoid(
    trapezoid: Trapezoid,
    rect: RectSpec,
    rules: PackingRules | None = None,
) -> PackingResult:
    """Pack *trapezoid* using its margin region and the given rules."""
    if rules is None:
        from sheetpack.config import PACKING_RULES
        rules = PACKING_RULES
    return pack(
        trapezoid.polygon,
        rect,
        rules.tolerance,
        rules.max_spiral_iterations,
        region=trapezoid.region,
    )
