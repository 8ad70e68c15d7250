"""
gridmeasures/core/exceptions.py
===============================
Exception hierarchy for gridmeasures.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

Structural problems (bad grid, too few constructs, unknown mode) are
raised before any computation starts. Numerical edge cases are not
errors: a zero-variance construct or element only produces NaN
correlations, announced through ``UndefinedCorrelationWarning``.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence


class GridMeasuresError(Exception):
    """Base exception for all gridmeasures errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class InvalidInputError(GridMeasuresError):
    """Raised when the input is not a usable repertory grid.

    Covers wrong types, ragged or non-numeric rating matrices,
    ratings outside the scale bounds and label/dimension mismatches.
    """

    pass


class InsufficientDataError(GridMeasuresError):
    """Raised when a grid is too small for the requested index,
    e.g. fewer than 3 constructs for the triad based conflict measures."""

    def __init__(
        self,
        message: str,
        required: int,
        actual: int,
        context: Optional[dict] = None,
    ):
        super().__init__(message, context)
        self.required = required
        self.actual = actual


class UnsupportedModeError(GridMeasuresError):
    """Raised when the dilemma detector receives an unknown
    classification mode."""

    def __init__(self, message: str, mode: Any, supported: Sequence[Any]):
        super().__init__(message, context={"mode": mode, "supported": list(supported)})
        self.mode = mode
        self.supported = tuple(supported)


class UndefinedCorrelationWarning(UserWarning):
    """A construct or element without variance yields NaN correlations.

    Not fatal: NaN values propagate into the result and every aggregate
    uses NaN-skipping reductions.
    """
