"""
gridmeasures/indices/triangle.py
================================
Conflict measure based on triangle inequalities (Bell, 2004).

Instead of correlations, conflict is read from distances. Each triad
of one element i and two constructs j, k forms a triangle with sides

    d_ij   rating of element i on construct j
    d_ik   rating of element i on construct k
    d_jk   distance between constructs j and k over all other elements
           (Minkowski, power p, divided by (ne - 1)^(1/p))

The triad is conflictive when the triangle inequality fails, i.e. one
side is longer than the sum of the other two. The excess is recorded
as the discrepancy.

    potential conflicts = ne · nc · (nc - 1) / 2
    overall             = actual / potential · 100

Conflicts are attributed to elements (each triad involves one element)
and to constructs (each involves two, hence the halving):

    element %   = count_e / actual · 100
    construct % = ½ · count_c / actual · 100

An advantage over the correlation based measures is that conflict can
be reported globally and on element, construct and element-by-construct
level, with optional drill-down for selected elements or constructs.

Reference: Bell, R. C. (2004). A new approach to measuring inconsistency
or conflict in grids. Personal Construct Theory & Practice, (1), 53-59.
"""

from __future__ import annotations

import itertools
import logging
from typing import List, Optional, Sequence

import numpy as np
from scipy import stats

from gridmeasures.core.grid import GridAccessor, construct_names, element_names
from gridmeasures.core.types import (
    ChiSquareResult,
    ConstructConflictDetail,
    ElementConflictDetail,
    TriangleConflictResult,
)
from gridmeasures.core.validators import (
    assert_valid_grid,
    check_construct_index,
    check_element_index,
    require_constructs,
    require_elements,
)
from gridmeasures.matrices.distance import construct_distances

logger = logging.getLogger(__name__)


def triangle_discrepancy(d_ij: float, d_ik: float, d_jk: float) -> Optional[float]:
    """Amount by which one side exceeds the sum of the other two.

    Returns None when the triangle inequality holds.
    """
    if d_ij > d_ik + d_jk:
        return d_ij - (d_ik + d_jk)
    if d_ik > d_ij + d_jk:
        return d_ik - (d_ij + d_jk)
    if d_jk > d_ij + d_ik:
        return d_jk - (d_ij + d_ik)
    return None


# ─── STATISTICS HELPERS ───────────────────────────────────────────

def _percent(counts: np.ndarray, total: float, factor: float = 1.0) -> np.ndarray:
    if total == 0:
        return np.full(counts.shape, np.nan)
    return factor * counts / total * 100


def _sd(values: np.ndarray) -> float:
    """Sample standard deviation of the non-NaN entries."""
    finite = values[~np.isnan(values)]
    if finite.size < 2:
        return float("nan")
    return float(np.std(finite, ddof=1))


def _chi_square(counts: np.ndarray) -> ChiSquareResult:
    """Test of equal conflict counts across categories."""
    df = counts.size - 1
    if counts.sum() == 0:
        return ChiSquareResult(statistic=float("nan"), df=df, p_value=float("nan"))
    statistic, p_value = stats.chisquare(counts)
    return ChiSquareResult(statistic=float(statistic), df=df, p_value=float(p_value))


# ─── DRILL-DOWN ───────────────────────────────────────────────────

def _element_detail(disc: np.ndarray, e: int) -> ElementConflictDetail:
    matrix = disc[e]
    per_construct = np.sum(~np.isnan(matrix), axis=0)
    return ElementConflictDetail(
        element=e,
        discrepancies=matrix.copy(),
        pairs=float(per_construct.sum()) / 2,
        construct_percent=_percent(per_construct, per_construct.sum()).tolist(),
        mean=float(np.nan_to_num(matrix, nan=0.0).mean()),
        sd=_sd(matrix),
    )


def _construct_detail(disc: np.ndarray, c: int) -> ConstructConflictDetail:
    matrix = disc[:, c, :].T        # constructs × elements
    return ConstructConflictDetail(
        construct=c,
        discrepancies=matrix.copy(),
        mean=float(np.nan_to_num(matrix, nan=0.0).mean()),
        sd=_sd(matrix),
    )


def _select(
    explicit: Optional[Sequence[int]],
    threshold: Optional[float],
    percent: np.ndarray,
) -> List[int]:
    """Explicit indices win over the threshold; neither → nothing."""
    if explicit is not None:
        return list(explicit)
    if threshold is not None:
        with np.errstate(invalid="ignore"):
            return [int(i) for i in np.flatnonzero(percent > threshold)]
    return []


# ─── PUBLIC API ───────────────────────────────────────────────────

def conflict_triangle(
    grid: GridAccessor,
    power: float = 2.0,
    e_out: Optional[Sequence[int]] = None,
    e_threshold: Optional[float] = None,
    c_out: Optional[Sequence[int]] = None,
    c_threshold: Optional[float] = None,
    trim: Optional[int] = 20,
) -> TriangleConflictResult:
    """Bell's (2004) triangle-inequality conflict measure.

    Args:
        grid:        Grid to analyse.
        power:       Minkowski power (2 = euclidean, 1 = city block).
        e_out:       0-based elements to report in detail.
        e_threshold: Detail for elements with a conflict share above
                     this percentage (ignored when ``e_out`` is given).
        c_out:       0-based constructs to report in detail.
        c_threshold: Detail for constructs with a conflict share above
                     this percentage (ignored when ``c_out`` is given).
        trim:        Label length in the result (None = untrimmed).
    """
    assert_valid_grid(grid)
    nc = require_constructs(grid, 2, "conflict3")
    ne = require_elements(grid, 2, "conflict3")
    e_select_in = None if e_out is None else [check_element_index(grid, e) for e in e_out]
    c_select_in = None if c_out is None else [check_construct_index(grid, c) for c in c_out]

    s = grid.rating_matrix()
    disc = np.full((ne, nc, nc), np.nan)
    e_count = np.zeros(ne, dtype=int)
    c_count = np.zeros(nc, dtype=int)

    for e in range(ne):
        dc = construct_distances(grid, excluded_element=e, power=power)
        for c1, c2 in itertools.combinations(range(nc), 2):
            value = triangle_discrepancy(s[c1, e], s[c2, e], dc[c1, c2])
            if value is None:
                continue
            disc[e, c1, c2] = disc[e, c2, c1] = value
            e_count[e] += 1
            c_count[c1] += 1
            c_count[c2] += 1

    actual = int(e_count.sum())
    potential = ne * nc * (nc - 1) // 2
    e_perc = _percent(e_count, actual)
    c_perc = _percent(c_count, actual, factor=0.5)

    e_select = _select(e_select_in, e_threshold, e_perc)
    c_select = _select(c_select_in, c_threshold, c_perc)

    logger.debug(
        f"conflict3: {actual}/{potential} conflicts (p={power}), "
        f"details for {len(e_select)} elements, {len(c_select)} constructs"
    )
    return TriangleConflictResult(
        potential=potential,
        actual=actual,
        power=power,
        element_names=element_names(grid, trim=trim, index=True),
        construct_names=construct_names(grid, trim=trim, index=True),
        element_counts=e_count.tolist(),
        construct_counts=c_count.tolist(),
        element_percent=e_perc.tolist(),
        construct_percent=c_perc.tolist(),
        discrepancies=disc,
        element_details=[_element_detail(disc, e) for e in e_select],
        construct_details=[_construct_detail(disc, c) for c in c_select],
        e_threshold=e_threshold,
        c_threshold=c_threshold,
        element_chi2=_chi_square(e_count),
        construct_chi2=_chi_square(c_count),
    )
