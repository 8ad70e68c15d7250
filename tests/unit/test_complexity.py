"""
tests/unit/test_complexity.py
=============================
Tests for PVAFF.
"""
import math

import pytest

from gridmeasures.core.exceptions import UndefinedCorrelationWarning
from gridmeasures.core.grid import RepGrid
from gridmeasures.indices.complexity import pvaff


class TestPvaff:
    def test_within_bounds(self, cyclic_grid):
        result = pvaff(cyclic_grid)
        n = result.n_constructs
        assert 1 / n - 1e-12 <= result.value <= 1 + 1e-12

    def test_single_factor_grid(self):
        grid = RepGrid.from_lists(
            ratings=[[1, 2, 3, 4], [2, 3, 4, 5], [5, 4, 3, 2]],
            constructs=[("a", "b"), ("c", "d"), ("e", "f")],
            elements=["w", "x", "y", "z"],
            scale=(1, 5),
        )
        assert pvaff(grid).value == pytest.approx(1.0)

    def test_percent(self, correlated_grid):
        result = pvaff(correlated_grid)
        assert result.percent == pytest.approx(result.value * 100)
        assert len(result.singular_values) == 4

    def test_dominant_first_factor(self, correlated_grid):
        assert pvaff(correlated_grid).value > 0.5

    def test_undefined_correlation_gives_nan(self, constant_row_grid):
        with pytest.warns(UndefinedCorrelationWarning):
            result = pvaff(constant_row_grid)
        assert math.isnan(result.value)

    def test_to_dict(self, correlated_grid):
        d = pvaff(correlated_grid).to_dict()
        assert d["index"] == "pvaff"
        assert d["n_constructs"] == 4
