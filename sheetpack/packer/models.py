"""Packer input/output dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from sheetpack.geometry.polygon import Bounds, Point


# ── Inputs ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class RectSpec:
    """Size of the repeating detail, in cm.  Rotation is not modelled."""

    width: float
    height: float


@dataclass(frozen=True)
class ToleranceConfig:
    """How far (cm) a detail corner may sit outside the sheet."""

    tolerance_cm: float


# ── Output dataclasses ─────────────────────────────────────────────


class Classification(Enum):
    FULL = "full"           # every corner inside the sheet
    TOLERANT = "tolerant"   # overhang within tolerance
    INVALID = "invalid"


@dataclass(frozen=True)
class Placement:
    """An accepted detail.  (x, y) is the lower-left corner."""

    x: float
    y: float
    width: float
    height: float
    classification: Classification
    index: int   # spiral candidate index that produced it

    @property
    def bounds(self) -> Bounds:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        x0, y0, x1, y1 = self.bounds
        return ((x0, y0), (x1, y0), (x1, y1), (x0, y1))


@dataclass
class PackingResult:
    """Outcome of one packing run.

    ``exhausted`` is True when the iteration cap stopped the search
    before the spiral left the packing region; fewer details than
    possible may have been placed.
    """

    placements: list[Placement] = field(default_factory=list)
    iterations_used: int = 0
    exhausted: bool = False

    @property
    def full_count(self) -> int:
        return sum(1 for p in self.placements if p.classification is Classification.FULL)

    @property
    def tolerant_count(self) -> int:
        return sum(1 for p in self.placements if p.classification is Classification.TOLERANT)

    @property
    def covered_area(self) -> float:
        return sum(p.width * p.height for p in self.placements)


class PackingError(ValueError):
    """Raised when packing inputs cannot describe a real search."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)
