"""Shared packing rules for the trapezoid packer.

These values describe how far a detail may overhang the sheet, how much
vertical room the packer may search beyond the trapezoid, how different
the two bases must be, and how many spiral candidates a single run may
try.  Both the geometry model (which validates trapezoids) and the
packer (which classifies and places details) read them from here.

Each value can be overridden with a ``SHEETPACK_*`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from sheetpack.packer.models import ToleranceConfig


@dataclass(frozen=True)
class PackingRules:
    """Packing rules.

    All distances are in centimetres.
    """

    tolerance_cm: float = 0.5
    """Maximum distance a detail corner may sit outside the trapezoid
    and still count as a tolerant (cuttable) placement."""

    vertical_margin_cm: float = 2.0
    """Extra room above and below the trapezoid the packer searches."""

    min_base_difference_cm: float = 5.0
    """Smallest allowed |bottom_base - top_base|; anything closer is
    treated as a rectangle and rejected."""

    max_spiral_iterations: int = 10_000
    """Hard cap on spiral candidates per packing run."""

    # ── Derived helpers ────────────────────────────────────────────

    @property
    def tolerance(self) -> ToleranceConfig:
        return ToleranceConfig(self.tolerance_cm)

    @classmethod
    def from_env(cls) -> "PackingRules":
        """Defaults, overridden by any ``SHEETPACK_*`` variables that are set."""
        kwargs: dict = {}
        if "SHEETPACK_TOLERANCE_CM" in os.environ:
            kwargs["tolerance_cm"] = float(os.environ["SHEETPACK_TOLERANCE_CM"])
        if "SHEETPACK_VERTICAL_MARGIN_CM" in os.environ:
            kwargs["vertical_margin_cm"] = float(os.environ["SHEETPACK_VERTICAL_MARGIN_CM"])
        if "SHEETPACK_MIN_BASE_DIFFERENCE_CM" in os.environ:
            kwargs["min_base_difference_cm"] = float(os.environ["SHEETPACK_MIN_BASE_DIFFERENCE_CM"])
        if "SHEETPACK_MAX_SPIRAL_ITERATIONS" in os.environ:
            kwargs["max_spiral_iterations"] = int(float(os.environ["SHEETPACK_MAX_SPIRAL_ITERATIONS"]))
        return cls(**kwargs)


# Module-level singleton — importable everywhere.
PACKING_RULES = PackingRules.from_env()

TOLERANCE_CM = PACKING_RULES.tolerance_cm
VERTICAL_MARGIN_CM = PACKING_RULES.vertical_margin_cm
MIN_BASE_DIFFERENCE = PACKING_RULES.min_base_difference_cm
MAX_SPIRAL_ITERATIONS = PACKING_RULES.max_spiral_iterations
