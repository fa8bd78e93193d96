"""Packing serialization — JSON conversion."""

from __future__ import annotations

from sheetpack.geometry.trapezoid import Trapezoid, TrapezoidSpec

from .models import Classification, PackingResult, Placement


def trapezoid_to_dict(trapezoid: Trapezoid) -> dict:
    """Serialize a Trapezoid to a JSON-safe dict."""
    spec = trapezoid.spec
    return {
        "spec": {
            "bottom_base": spec.bottom_base,
            "top_base": spec.top_base,
            "height": spec.height,
            "vertical_margin": spec.vertical_margin,
        },
        "polygon": [{"x": x, "y": y} for x, y in trapezoid.polygon],
        "region": list(trapezoid.region),
        "area": trapezoid.area,
    }


def parse_trapezoid_spec(data: dict) -> TrapezoidSpec:
    """Parse a spec dict (or the ``spec`` entry of a serialized trapezoid)."""
    data = data.get("spec", data)
    return TrapezoidSpec(
        bottom_base=float(data["bottom_base"]),
        top_base=float(data["top_base"]),
        height=float(data["height"]),
        vertical_margin=float(data["vertical_margin"]),
    )


def packing_to_dict(result: PackingResult) -> dict:
    """Serialize a PackingResult to a JSON-safe dict."""
    return {
        "placements": [
            {
                "x": p.x,
                "y": p.y,
                "width": p.width,
                "height": p.height,
                "classification": p.classification.value,
                "index": p.index,
            }
            for p in result.placements
        ],
        "iterations_used": result.iterations_used,
        "exhausted": result.exhausted,
        "full_count": result.full_count,
        "tolerant_count": result.tolerant_count,
    }


def parse_packing(data: dict) -> PackingResult:
    """Parse a packing dict back into a PackingResult."""
    placements = [
        Placement(
            x=p["x"],
            y=p["y"],
            width=p["width"],
            height=p["height"],
            classification=Classification(p["classification"]),
            index=p["index"],
        )
        for p in data["placements"]
    ]
    return PackingResult(
        placements=placements,
        iterations_used=data["iterations_used"],
        exhausted=data["exhausted"],
    )
