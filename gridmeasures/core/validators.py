"""
gridmeasures/core/validators.py
===============================
Input validation utilities for gridmeasures.

Validates:
    - Rating matrix layout (2-D, numeric, finite, inside the scale)
    - Scale bounds (min < max)
    - Label / dimension agreement
    - Grid objects handed to the indices (GridAccessor contract)
    - Minimum grid size per index

These validators run at API boundaries, before an index touches the
data. ``validate_*`` functions return every problem found as a list of
strings; ``assert_*`` / ``require_*`` raise typed exceptions carrying
structured context.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any, List

import numpy as np

from gridmeasures.core.exceptions import InsufficientDataError, InvalidInputError

if TYPE_CHECKING:
    from gridmeasures.core.grid import GridAccessor


_ACCESSOR_METHODS = (
    "rating_matrix",
    "scale_bounds",
    "construct_count",
    "element_count",
    "construct_labels",
    "element_labels",
    "subgrid",
)


# ─── LAYOUT VALIDATION ────────────────────────────────────────────

def validate_rating_layout(
    ratings: np.ndarray,
    scale_min: float,
    scale_max: float,
    n_constructs: int,
    n_elements: int,
) -> List[str]:
    """Validate a rating matrix against its scale and labels.

    Checks:
        1. matrix is 2-D
        2. shape is (n_constructs, n_elements)
        3. scale bounds are finite and min < max
        4. every rating is finite and inside [min, max]
    """
    errors: List[str] = []

    if ratings.ndim != 2:
        errors.append(f"Ratings must be a 2-D matrix, got {ratings.ndim} dimension(s)")
        return errors

    rows, cols = ratings.shape
    if rows != n_constructs:
        errors.append(f"Ratings have {rows} rows but {n_constructs} constructs are labelled")
    if cols != n_elements:
        errors.append(f"Ratings have {cols} columns but {n_elements} elements are named")

    if not (math.isfinite(scale_min) and math.isfinite(scale_max)):
        errors.append(f"Scale bounds must be finite, got ({scale_min}, {scale_max})")
    elif scale_min >= scale_max:
        errors.append(f"Scale minimum {scale_min} must be below maximum {scale_max}")

    if ratings.size:
        if not np.all(np.isfinite(ratings)):
            errors.append(f"Ratings contain {int(np.sum(~np.isfinite(ratings)))} non-finite value(s)")
        elif not errors:
            outside = (ratings < scale_min) | (ratings > scale_max)
            if np.any(outside):
                r, c = np.argwhere(outside)[0]
                errors.append(
                    f"{int(outside.sum())} rating(s) outside scale [{scale_min:g}, {scale_max:g}], "
                    f"first at construct {r + 1}, element {c + 1} ({ratings[r, c]:g})"
                )
    return errors


# ─── GRID VALIDATION ──────────────────────────────────────────────

def validate_grid(grid: Any) -> List[str]:
    """Validate an object claiming to be a grid. Returns list of errors."""
    missing = [m for m in _ACCESSOR_METHODS if not callable(getattr(grid, m, None))]
    if missing:
        return [
            f"Object of type '{type(grid).__name__}' is not a repertory grid "
            f"(missing {', '.join(missing)})"
        ]

    try:
        ratings = np.asarray(grid.rating_matrix(), dtype=float)
        scale_min, scale_max = (float(v) for v in grid.scale_bounds())
    except (TypeError, ValueError) as exc:
        return [f"Grid accessors returned unusable data: {exc}"]

    errors = validate_rating_layout(
        ratings,
        scale_min,
        scale_max,
        n_constructs=grid.construct_count(),
        n_elements=grid.element_count(),
    )
    if len(grid.construct_labels()) != grid.construct_count():
        errors.append("Number of construct labels does not match construct count")
    if len(grid.element_labels()) != grid.element_count():
        errors.append("Number of element labels does not match element count")
    return errors


def assert_valid_grid(grid: Any) -> None:
    """Validate grid and raise InvalidInputError on any violation."""
    errors = validate_grid(grid)
    if errors:
        raise InvalidInputError(
            f"Invalid grid: {'; '.join(errors)}",
            context={"error_count": len(errors), "type": type(grid).__name__},
        )


# ─── SIZE REQUIREMENTS ────────────────────────────────────────────

def require_constructs(grid: "GridAccessor", minimum: int, index: str = "index") -> int:
    """Return the construct count, raising if it is below ``minimum``."""
    n = grid.construct_count()
    if n < minimum:
        raise InsufficientDataError(
            f"{index} needs at least {minimum} constructs, grid has {n}",
            required=minimum,
            actual=n,
            context={"index": index},
        )
    return n


def require_elements(grid: "GridAccessor", minimum: int, index: str = "index") -> int:
    """Return the element count, raising if it is below ``minimum``."""
    n = grid.element_count()
    if n < minimum:
        raise InsufficientDataError(
            f"{index} needs at least {minimum} elements, grid has {n}",
            required=minimum,
            actual=n,
            context={"index": index},
        )
    return n


def check_element_index(grid: "GridAccessor", index: int, label: str = "element") -> int:
    """Normalise a (possibly negative) element index, raising if out of range."""
    n = grid.element_count()
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise InvalidInputError(
            f"{label} index must be an integer, got {index!r}",
            context={"label": label, "index": repr(index)},
        )
    if not -n <= index < n:
        raise InvalidInputError(
            f"{label} index {index} out of range for {n} elements",
            context={"label": label, "index": int(index), "n_elements": n},
        )
    return int(index) % n


def check_construct_index(grid: "GridAccessor", index: int, label: str = "construct") -> int:
    """Normalise a (possibly negative) construct index, raising if out of range."""
    n = grid.construct_count()
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise InvalidInputError(
            f"{label} index must be an integer, got {index!r}",
            context={"label": label, "index": repr(index)},
        )
    if not -n <= index < n:
        raise InvalidInputError(
            f"{label} index {index} out of range for {n} constructs",
            context={"label": label, "index": int(index), "n_constructs": n},
        )
    return int(index) % n
