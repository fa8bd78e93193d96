"""
FastAPI web server — JSON endpoints the sheet editor UI calls on every
geometry, detail-size or tolerance change.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from sheetpack.config import PackingRules
from sheetpack.geometry import GeometryError, TrapezoidSpec, compute_trapezoid
from sheetpack.packer import (
    PackingError, RectSpec, ToleranceConfig,
    pack, packing_to_dict, trapezoid_to_dict,
)


log = logging.getLogger(__name__)

# ── .env loader ────────────────────────────────────────────────────

def _load_env():
    root = Path(__file__).resolve().parents[2]
    for name in (".env", ".env.local"):
        p = root / name
        if p.exists():
            for line in p.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and "=" in line and not line.startswith("#"):
                    k, v = line.split("=", 1)
                    k = k.strip()
                    v = v.strip().strip('"').strip("'")
                    if k and k not in os.environ:
                        os.environ[k] = v

_load_env()

# ── App ────────────────────────────────────────────────────────────

app = FastAPI(title="sheetpack")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _rules() -> PackingRules:
    """Rules are re-read per request so environment edits apply live."""
    return PackingRules.from_env()


# ── Models ─────────────────────────────────────────────────────────

class TrapezoidRequest(BaseModel):
    bottom_base: float
    top_base: float
    height: float
    vertical_margin: float | None = None


class PackRequest(TrapezoidRequest):
    rect_width: float = Field(gt=0)
    rect_height: float = Field(gt=0)
    tolerance_cm: float | None = Field(default=None, ge=0)
    max_iterations: int | None = Field(default=None, ge=0)


def _build_trapezoid(req: TrapezoidRequest, rules: PackingRules):
    margin = rules.vertical_margin_cm if req.vertical_margin is None else req.vertical_margin
    spec = TrapezoidSpec(
        bottom_base=req.bottom_base,
        top_base=req.top_base,
        height=req.height,
        vertical_margin=margin,
    )
    try:
        return compute_trapezoid(spec, min_base_difference=rules.min_base_difference_cm)
    except GeometryError as e:
        raise HTTPException(400, {"message": str(e), "errors": getattr(e, "errors", [])})


# ── Routes ─────────────────────────────────────────────────────────

@app.get("/api/rules")
def get_rules():
    """Return the active packing rules so the UI can show its defaults."""
    return dataclasses.asdict(_rules())


@app.post("/api/trapezoid")
def trapezoid(req: TrapezoidRequest):
    """Validate sheet dimensions and return the outline."""
    return trapezoid_to_dict(_build_trapezoid(req, _rules()))


@app.post("/api/pack")
def pack_sheet(req: PackRequest):
    """Build the outline and pack it with details."""
    rules = _rules()
    trap = _build_trapezoid(req, rules)
    tolerance = ToleranceConfig(
        rules.tolerance_cm if req.tolerance_cm is None else req.tolerance_cm
    )
    max_iterations = (
        rules.max_spiral_iterations if req.max_iterations is None else req.max_iterations
    )
    try:
        result = pack(
            trap.polygon,
            RectSpec(req.rect_width, req.rect_height),
            tolerance,
            max_iterations,
            region=trap.region,
        )
    except PackingError as e:
        raise HTTPException(400, {"message": str(e), "errors": [e.reason]})
    if result.exhausted:
        log.warning("Packing hit the %d-iteration cap", max_iterations)
    return {
        "trapezoid": trapezoid_to_dict(trap),
        "packing": packing_to_dict(result),
    }


# ── Entry point ────────────────────────────────────────────────────

def main(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("sheetpack.web.server:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
