"""
tests/unit/test_basic.py
========================
Tests for Slater's bias and variability indices.
"""
import math

import pytest

from gridmeasures.core.exceptions import InsufficientDataError, InvalidInputError
from gridmeasures.core.grid import RepGrid
from gridmeasures.indices.basic import bias, variability


def _grid(ratings, scale=(1, 5)):
    n, m = len(ratings), len(ratings[0])
    return RepGrid.from_lists(
        ratings=ratings,
        constructs=[(f"l{i}", f"r{i}") for i in range(n)],
        elements=[f"e{j}" for j in range(m)],
        scale=scale,
    )


class TestBias:
    def test_extreme_rows(self):
        # row means 1 and 5 on 1..5: both two units from the midpoint
        assert bias(_grid([[1, 1], [5, 5]])) == pytest.approx(1.0)

    def test_balanced_rows(self):
        assert bias(_grid([[1, 5], [5, 1]])) == pytest.approx(0.0)

    def test_rounding(self, correlated_grid):
        raw = bias(correlated_grid, digits=None)
        assert bias(correlated_grid, digits=2) == round(raw, 2)

    def test_explicit_scale_overrides_grid(self):
        grid = _grid([[3, 3]], scale=(1, 5))
        # midpoint of 1..9 is 5, half range 4
        assert bias(grid, 1, 9, digits=None) == pytest.approx(0.5)

    def test_invalid_scale(self, correlated_grid):
        with pytest.raises(InvalidInputError):
            bias(correlated_grid, 7, 1)

    def test_scale_invariant(self, correlated_grid):
        ratings = correlated_grid.rating_matrix() * 2 - 1
        rescaled = _grid(ratings.tolist(), scale=(1, 13))
        assert bias(rescaled, digits=None) == pytest.approx(bias(correlated_grid, digits=None))


class TestVariability:
    def test_no_spread(self):
        assert variability(_grid([[1, 1], [5, 5]])) == pytest.approx(0.0)

    def test_full_spread(self):
        # V_tot = 16, n = 2, m = 2, q = 2
        expected = math.sqrt(16 / 2) / 2
        assert variability(_grid([[1, 5], [5, 1]]), digits=None) == pytest.approx(expected)

    def test_scale_invariant(self, correlated_grid):
        ratings = correlated_grid.rating_matrix() * 2 - 1
        rescaled = _grid(ratings.tolist(), scale=(1, 13))
        assert variability(rescaled, digits=None) == pytest.approx(
            variability(correlated_grid, digits=None)
        )

    def test_requires_two_elements(self):
        with pytest.raises(InsufficientDataError):
            variability(_grid([[1], [2]]))

    def test_rejects_non_grid(self):
        with pytest.raises(InvalidInputError):
            variability({"ratings": [[1, 2]]})
