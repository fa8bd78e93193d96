"""Trapezoid geometry model — turns four user inputs into a sheet outline."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .polygon import Bounds, Point, polygon_area, polygon_bounds, polygon_centroid


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrapezoidSpec:
    """User-entered sheet dimensions, all in cm."""

    bottom_base: float
    top_base: float
    height: float
    vertical_margin: float


@dataclass(frozen=True)
class Trapezoid:
    """A validated isosceles trapezoid.

    ``polygon`` is ordered bottom-left, bottom-right, top-right, top-left
    (counter-clockwise with Y up).  ``region`` is the polygon's bounding
    box grown vertically by the vertical margin.  The packer searches that
    area but classifies against the outline, so the margin changes how
    many candidates are tried, never which details are placed.
    """

    spec: TrapezoidSpec
    polygon: tuple[Point, ...]
    region: Bounds

    @property
    def area(self) -> float:
        return abs(polygon_area(self.polygon))

    @property
    def centroid(self) -> Point:
        return polygon_centroid(self.polygon)


class GeometryError(Exception):
    """Base class for sheet geometry failures."""


class InvalidDimensions(GeometryError):
    """Raised when a TrapezoidSpec cannot describe a real trapezoid."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("Invalid trapezoid: " + " ".join(errors))


def validate_trapezoid(spec: TrapezoidSpec, min_base_difference: float) -> list[str]:
    """
    Validate trapezoid dimensions.

    Returns a list of error strings (empty = valid).
    """
    errors: list[str] = []

    for name in ("bottom_base", "top_base", "height", "vertical_margin"):
        value = getattr(spec, name)
        if not (math.isfinite(value) and value > 0):
            errors.append(f"{name} must be a positive finite number, got {value}.")

    diff = abs(spec.bottom_base - spec.top_base)
    if diff < min_base_difference:
        errors.append(
            f"Bases differ by {diff:.2f}cm — need at least "
            f"{min_base_difference:.2f}cm for a true trapezoid."
        )

    return errors


def compute_trapezoid(
    spec: TrapezoidSpec,
    *,
    min_base_difference: float | None = None,
) -> Trapezoid:
    """Build the sheet outline for *spec*.

    Raises
    ------
    InvalidDimensions
        If any dimension is non-positive or infinite, or the bases are too
        similar.
    """
    if min_base_difference is None:
        from sheetpack.config import MIN_BASE_DIFFERENCE
        min_base_difference = MIN_BASE_DIFFERENCE

    errors = validate_trapezoid(spec, min_base_difference)
    if errors:
        raise InvalidDimensions(errors)

    hb = spec.bottom_base / 2.0
    ht = spec.top_base / 2.0
    polygon = (
        (-hb, 0.0),
        (hb, 0.0),
        (ht, spec.height),
        (-ht, spec.height),
    )
    min_x, min_y, max_x, max_y = polygon_bounds(polygon)
    region = (
        min_x,
        min_y - spec.vertical_margin,
        max_x,
        max_y + spec.vertical_margin,
    )
    log.debug(
        "Trapezoid %.1f/%.1f x %.1f cm, region y=[%.1f, %.1f]",
        spec.bottom_base, spec.top_base, spec.height, region[1], region[3],
    )
    return Trapezoid(spec=spec, polygon=polygon, region=region)
