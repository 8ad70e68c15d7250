"""
gridmeasures/deployment/server/routes.py
========================================
REST API routes for the gridmeasures server.

Every request carries the grid as a plain mapping (see
``RepGrid.from_dict``) plus optional keyword parameters of the index.
Element and construct indices are 0-based.
"""
from __future__ import annotations
import inspect
from typing import Any, Callable, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from gridmeasures.api.grid_measures import GridMeasures
from gridmeasures.core.types import json_value
from gridmeasures.reporting.formatter import format_report

router = APIRouter()

# ─── Request/Response Models ────────────────────────────────────

class GridRequest(BaseModel):
    grid:   Dict[str, Any]                             # {"scale": {...}, "elements": [...], ...}
    params: Dict[str, Any] = Field(default_factory=dict)
    report: bool = False                               # include the text report

class IndexResponse(BaseModel):
    index:  str
    result: Dict[str, Any]
    report: Optional[str] = None

class SummaryResponse(BaseModel):
    n_constructs: int
    n_elements:   int
    indices:      Dict[str, Optional[float]]

# ─── Index table ────────────────────────────────────────────────

_INDICES: Dict[str, Callable[..., Any]] = {
    "bias":        GridMeasures.bias,
    "variability": GridMeasures.variability,
    "pvaff":       GridMeasures.pvaff,
    "intensity":   GridMeasures.intensity,
    "conflict1":   GridMeasures.conflict1,
    "conflict2":   GridMeasures.conflict2,
    "conflict3":   GridMeasures.conflict3,
    "dilemma":     GridMeasures.dilemma,
}

# ─── Routes ─────────────────────────────────────────────────────

@router.get("/indices")
async def list_indices() -> Dict[str, List[str]]:
    return {"indices": sorted(_INDICES)}

@router.post("/indices/{name}", response_model=IndexResponse)
async def compute_index(name: str, request: GridRequest):
    method = _INDICES.get(name)
    if method is None:
        raise HTTPException(status_code=404, detail=f"Unknown index '{name}'")
    gm = GridMeasures(request.grid)
    try:
        inspect.signature(method).bind(gm, **request.params)
    except TypeError as exc:
        raise HTTPException(status_code=422, detail=f"Invalid parameters for {name}: {exc}")
    result = method(gm, **request.params)
    return IndexResponse(
        index=name,
        result=result.to_dict(),
        report=format_report(result) if request.report else None,
    )

@router.post("/summary", response_model=SummaryResponse)
async def summary(request: GridRequest):
    gm = GridMeasures(request.grid)
    return SummaryResponse(
        n_constructs=gm.grid.construct_count(),
        n_elements=gm.grid.element_count(),
        indices={k: json_value(v) for k, v in gm.summary().items()},
    )
