"""
gridmeasures/indices/intensity.py
=================================
Intensity index (Bannister, 1960).

A measure of the amount of construct linkage, thought to reflect the
degree of organisation of a construct system. Implementation as in the
Gridcor programme: "the sum of the squared values of the correlations of
each construct with the rest of the constructs, averaged by the total
number of constructs minus one. This process is repeated with each
element, and the overall Intensity is calculated by averaging the
intensity scores of constructs and elements."

    int(c) = Σ_{k≠c} r²(c, k) / (nc - 1)
    int(e) = Σ_{k≠e} r²(e, k) / (ne - 1)
    total  = mean( int(c₁..c_nc) ⧺ int(e₁..e_ne) )

Undefined (NaN) correlations are skipped in every sum and mean. An
entity whose own correlations are all undefined scores NaN.

Reference: Bannister, D. (1960). Conceptual structure in
thought-disordered schizophrenics. The Journal of Mental Science,
106, 1230-49.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from gridmeasures.core.grid import GridAccessor, construct_names, element_names
from gridmeasures.core.types import IntensityResult
from gridmeasures.core.validators import assert_valid_grid
from gridmeasures.matrices.correlation import construct_correlation, element_correlation

logger = logging.getLogger(__name__)


def _nanmean(values: np.ndarray) -> float:
    finite = values[~np.isnan(values)]
    return float(finite.mean()) if finite.size else float("nan")


def _entity_intensity(r: np.ndarray) -> np.ndarray:
    """Σ r² over each row with the diagonal zeroed, divided by (n - 1)."""
    r = np.array(r, dtype=float)
    np.fill_diagonal(r, 0.0)
    n = r.shape[0]
    squared = r ** 2
    scores = np.nansum(squared, axis=1) / (n - 1)
    off_diagonal = ~np.eye(n, dtype=bool)
    undefined = np.all(np.isnan(squared) | ~off_diagonal, axis=1)
    scores[undefined] = np.nan
    return scores


def intensity(
    grid: GridAccessor,
    rc: bool = False,
    trim: Optional[int] = 30,
) -> IntensityResult:
    """Intensity scores by construct, by element and overall.

    Args:
        grid: Grid to analyse.
        rc:   Use Cohen's rc for the element correlations.
        trim: Label length in the result (None = untrimmed).
    """
    assert_valid_grid(grid)
    c_int = _entity_intensity(construct_correlation(grid))
    e_int = _entity_intensity(element_correlation(grid, rc=rc))

    result = IntensityResult(
        construct_labels=construct_names(grid, trim=trim),
        per_construct=c_int.tolist(),
        element_labels=element_names(grid, trim=trim),
        per_element=e_int.tolist(),
        construct_mean=_nanmean(c_int),
        element_mean=_nanmean(e_int),
        total=_nanmean(np.concatenate([c_int, e_int])),
    )
    logger.debug(
        f"intensity: {len(c_int)} constructs, {len(e_int)} elements, "
        f"total={result.total:.4f}"
    )
    return result
