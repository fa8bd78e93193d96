"""sheetpack — pack identical rectangular details into a trapezoidal sheet.

Two entry points for callers:

  compute_trapezoid  — validate sheet dimensions and build the outline
  pack               — fill an outline with details along an outward spiral
"""

from sheetpack.geometry import TrapezoidSpec, Trapezoid, GeometryError, InvalidDimensions, compute_trapezoid
from sheetpack.packer import (
    RectSpec, ToleranceConfig, Classification, Placement, PackingResult, PackingError,
    pack, pack_trapezoid,
)
