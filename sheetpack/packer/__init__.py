"""Packer — fills the sheet outline with identical details.

Submodules:
  models        Input/output dataclasses (RectSpec, Placement, PackingResult).
  classify      Corner-based FULL / TOLERANT / INVALID classification.
  engine        Spiral search over a detail-sized grid.
  serialization JSON conversion (packing_to_dict, parse_packing).
"""

from .models import (
    RectSpec, ToleranceConfig, Classification, Placement, PackingResult, PackingError,
)
from .classify import classify_rect, rect_corners
from .engine import pack, pack_trapezoid, spiral_cells, spiral_offset
from .serialization import packing_to_dict, parse_packing, trapezoid_to_dict, parse_trapezoid_spec

__all__ = [
    # Models
    "RectSpec", "ToleranceConfig", "Classification", "Placement",
    "PackingResult", "PackingError",
    # Classification
    "classify_rect", "rect_corners",
    # Engine
    "pack", "pack_trapezoid", "spiral_cells", "spiral_offset",
    # Serialization
    "packing_to_dict", "parse_packing", "trapezoid_to_dict", "parse_trapezoid_spec",
]
