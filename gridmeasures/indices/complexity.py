"""
gridmeasures/indices/complexity.py
==================================
Percentage of Variance Accounted for by the First Factor (PVAFF).

A measure of cognitive complexity introduced by Jones (1954, cit.
Bonarius, 1965). The construct correlation matrix R is decomposed by
SVD; the share of the first component is

    PVAFF = s₁² / Σ sᵢ²

If one linear component explains the grid (PVAFF → 1) the construct
system is regarded as simple (Bell, 2003). For n constructs
PVAFF ∈ [1/n, 1].

References:
    Bell, R. C. (2003). An evaluation of indices used to represent
    construct structure. In G. Chiari & M. L. Nuzzo (Eds.),
    Psychological Constructivism and the Social World (pp. 297-305).

    Bonarius, J. C. J. (1965). Research in the personal construct
    theory of George A. Kelly. Progress in experimental personality
    research (Vol. 2).
"""

from __future__ import annotations

import logging

import numpy as np

from gridmeasures.core.grid import GridAccessor
from gridmeasures.core.types import PvaffResult
from gridmeasures.core.validators import assert_valid_grid
from gridmeasures.matrices.correlation import construct_correlation

logger = logging.getLogger(__name__)


def pvaff(grid: GridAccessor) -> PvaffResult:
    """PVAFF of the construct correlation matrix.

    A construct without variance leaves R undefined; the result is then
    NaN rather than an error.
    """
    assert_valid_grid(grid)
    r = construct_correlation(grid)
    n = r.shape[0]

    if np.isnan(r).any():
        logger.warning("pvaff: correlation matrix contains NaN, PVAFF undefined")
        return PvaffResult(value=float("nan"), n_constructs=n)

    sv = np.linalg.svd(r, compute_uv=False)
    value = float(sv[0] ** 2 / np.sum(sv ** 2))
    logger.debug(f"pvaff: {n} constructs, s1={sv[0]:.4f} → {value:.4f}")
    return PvaffResult(value=value, n_constructs=n, singular_values=sv.tolist())
