"""
gridmeasures/matrices/correlation.py
====================================
Correlation structures of a grid.

    construct_correlation   Pearson r between construct rows (across elements)
    element_correlation     r between element columns (across constructs),
                            optionally Cohen's rc
    centered_matrix         ratings minus their construct (row) mean
    fisher_z                z = atanh(r)

Cohen's rc (Cohen, 1969) removes the arbitrariness of construct pole
direction from element correlations: every construct is entered twice,
once as rated and once reflected (min + max - rating), and Pearson's r
is taken over the resulting double-entry grid.

A construct or element without variance has no defined correlation.
Its row/column becomes NaN and an ``UndefinedCorrelationWarning`` is
issued; nothing is raised.
"""

from __future__ import annotations

import logging
import warnings
from typing import Sequence, Union

import numpy as np

from gridmeasures.core.exceptions import UndefinedCorrelationWarning
from gridmeasures.core.grid import GridAccessor
from gridmeasures.core.validators import require_constructs, require_elements

logger = logging.getLogger(__name__)


def _pearson_rows(matrix: np.ndarray) -> np.ndarray:
    """Pearson correlations between the rows of ``matrix``."""
    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.corrcoef(matrix)
    return np.atleast_2d(r)


def _warn_undefined(matrix: np.ndarray, what: str) -> None:
    """Announce zero-variance rows that produced NaN correlations."""
    constant = np.flatnonzero(np.ptp(matrix, axis=1) == 0)
    if constant.size:
        labels = ", ".join(str(i + 1) for i in constant)
        message = (
            f"{what} {labels} without variance; their correlations are undefined (NaN)"
        )
        logger.warning(message)
        warnings.warn(message, UndefinedCorrelationWarning, stacklevel=3)


def construct_correlation(grid: GridAccessor) -> np.ndarray:
    """Construct × construct Pearson correlation matrix."""
    require_constructs(grid, 2, "construct correlation")
    require_elements(grid, 2, "construct correlation")
    ratings = grid.rating_matrix()
    _warn_undefined(ratings, "Construct(s)")
    return _pearson_rows(ratings)


def double_entry(grid: GridAccessor) -> np.ndarray:
    """Ratings stacked on top of their reflected copy (2·nc × ne)."""
    scale_min, scale_max = grid.scale_bounds()
    ratings = grid.rating_matrix()
    return np.vstack([ratings, scale_min + scale_max - ratings])


def element_correlation(grid: GridAccessor, rc: bool = False) -> np.ndarray:
    """Element × element correlation matrix.

    Args:
        grid: Grid to correlate.
        rc:   Use Cohen's rc (double-entry grid) instead of plain Pearson.
    """
    require_constructs(grid, 2, "element correlation")
    require_elements(grid, 2, "element correlation")
    columns = (double_entry(grid) if rc else grid.rating_matrix()).T
    _warn_undefined(columns, "Element(s)")
    return _pearson_rows(columns)


def centered_matrix(grid: GridAccessor) -> np.ndarray:
    """Ratings with each construct's mean subtracted from its row."""
    ratings = grid.rating_matrix()
    return ratings - ratings.mean(axis=1, keepdims=True)


def correlate(a: Sequence[float], b: Sequence[float]) -> float:
    """Pearson r of two equally long vectors (NaN if either is constant)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.corrcoef(np.asarray(a, dtype=float), np.asarray(b, dtype=float))[0, 1]
    return float(r)


def fisher_z(r: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Fisher's z-transformation, z = ½·ln((1+r)/(1-r)) = atanh(r).

    |r| = 1 maps to ±inf, NaN stays NaN.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        z = np.arctanh(np.asarray(r, dtype=float))
    if z.ndim == 0:
        return float(z)
    return z
