"""
gridmeasures/matrices/distance.py
=================================
Minkowski distances between the rows or columns of a grid.

    d_p(x, y) = (Σ |x_i - y_i|^p)^(1/p)

p = 2 gives euclidean, p = 1 city-block distances.

For the triangle-inequality conflict measure (Bell, 2004) the distance
between two constructs is computed without the element under
consideration and averaged over the remaining coordinates:

    d_jk = d_p(row_j, row_k) / (ne - 1)^(1/p)

Bell's Fortran code averages unsquared euclidean distances this way;
the same divisor is used for any power.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from gridmeasures.core.exceptions import InsufficientDataError, InvalidInputError
from gridmeasures.core.grid import GridAccessor
from gridmeasures.core.validators import check_element_index

logger = logging.getLogger(__name__)


def minkowski(matrix: np.ndarray, power: float = 2.0) -> np.ndarray:
    """Pairwise Minkowski distances between the rows of ``matrix``."""
    if not power > 0:
        raise InvalidInputError(
            f"Minkowski power must be positive, got {power}",
            context={"power": power},
        )
    data = np.asarray(matrix, dtype=float)
    diff = np.abs(data[:, None, :] - data[None, :, :])
    return np.sum(diff ** power, axis=2) ** (1.0 / power)


def _normalised(matrix: np.ndarray, power: float) -> np.ndarray:
    n_coords = matrix.shape[1]
    if n_coords < 1:
        raise InsufficientDataError(
            "No coordinates left to compute distances on",
            required=1,
            actual=n_coords,
        )
    return minkowski(matrix, power) / n_coords ** (1.0 / power)


def construct_distances(
    grid: GridAccessor,
    excluded_element: Optional[int] = None,
    power: float = 2.0,
) -> np.ndarray:
    """Construct × construct distances over the element columns, leaving
    out ``excluded_element`` and dividing by ``n_used^(1/p)``."""
    ratings = grid.rating_matrix()
    if excluded_element is not None:
        col = check_element_index(grid, excluded_element, "excluded element")
        ratings = np.delete(ratings, col, axis=1)
    return _normalised(ratings, power)


def element_distances(
    grid: GridAccessor,
    excluded_element: Optional[int] = None,
    power: float = 2.0,
) -> np.ndarray:
    """Element × element distances over the construct rows.

    ``excluded_element`` drops that element from the result; distances
    are divided by ``nc^(1/p)``.
    """
    columns = grid.rating_matrix().T
    if excluded_element is not None:
        col = check_element_index(grid, excluded_element, "excluded element")
        columns = np.delete(columns, col, axis=0)
    return _normalised(columns, power)
