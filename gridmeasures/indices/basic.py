"""
gridmeasures/indices/basic.py
=============================
Bias and variability of a grid as defined by Slater (1977).

Mathematical basis:
    p = (min + max) / 2          scale midpoint
    q = max - p                  distance from midpoint to scale limits

    Bias        = sqrt( Σ_i (mean_i - p)² / n ) / q
        mean_i = mean rating of construct i, n = number of constructs.
        Records a tendency for responses to accumulate at one end of
        the grading scale (Slater, 1977, p. 88).

    Variability = sqrt( V_tot / (n·(m - 1)) ) / q
        D = row-centred rating matrix, W = D·Dᵗ, V_tot = trace(W),
        m = number of elements. Records a tendency for responses to
        gravitate towards both ends of the scale.

Both are expressed relative to the half range q, so they are unchanged
when ratings and scale bounds are rescaled together.

Reference: Slater, P. (1977). The measurement of intrapersonal space
by Grid technique. London: Wiley.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from gridmeasures.core.exceptions import InvalidInputError
from gridmeasures.core.grid import GridAccessor
from gridmeasures.core.validators import assert_valid_grid, require_constructs, require_elements
from gridmeasures.matrices.correlation import centered_matrix

logger = logging.getLogger(__name__)


def _resolve_scale(
    grid: GridAccessor,
    scale_min: Optional[float],
    scale_max: Optional[float],
) -> Tuple[float, float, float]:
    """Fill omitted bounds from the grid; return (midpoint, half range, max)."""
    grid_min, grid_max = grid.scale_bounds()
    lo = grid_min if scale_min is None else float(scale_min)
    hi = grid_max if scale_max is None else float(scale_max)
    if lo >= hi:
        raise InvalidInputError(
            f"Scale minimum {lo} must be below maximum {hi}",
            context={"min": lo, "max": hi},
        )
    p = lo + (hi - lo) / 2
    return p, hi - p, hi


def _round(value: float, digits: Optional[int]) -> float:
    return float(value) if digits is None else round(float(value), digits)


def bias(
    grid: GridAccessor,
    scale_min: Optional[float] = None,
    scale_max: Optional[float] = None,
    digits: Optional[int] = 2,
) -> float:
    """Slater's bias index, rounded to ``digits`` (None = unrounded)."""
    assert_valid_grid(grid)
    n = require_constructs(grid, 1, "bias")
    p, q, _ = _resolve_scale(grid, scale_min, scale_max)

    row_means = np.nanmean(grid.rating_matrix(), axis=1)
    value = np.sqrt(np.sum((row_means - p) ** 2) / n) / q
    logger.debug(f"bias: {n} constructs, p={p:g}, q={q:g} → {value:.4f}")
    return _round(value, digits)


def variability(
    grid: GridAccessor,
    scale_min: Optional[float] = None,
    scale_max: Optional[float] = None,
    digits: Optional[int] = 2,
) -> float:
    """Slater's variability index, rounded to ``digits`` (None = unrounded)."""
    assert_valid_grid(grid)
    n = require_constructs(grid, 1, "variability")
    m = require_elements(grid, 2, "variability")
    _, q, _ = _resolve_scale(grid, scale_min, scale_max)

    D = centered_matrix(grid)
    W = D @ D.T                       # co-variation matrix
    v_tot = np.nansum(np.diag(W))     # total variation
    value = np.sqrt(v_tot / (n * (m - 1))) / q
    logger.debug(f"variability: {n}×{m}, V_tot={v_tot:.4f} → {value:.4f}")
    return _round(value, digits)
