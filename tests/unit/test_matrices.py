"""
tests/unit/test_matrices.py
===========================
Tests for correlation and distance structures.
"""
import math

import numpy as np
import pytest

from gridmeasures.core.exceptions import (
    InsufficientDataError,
    InvalidInputError,
    UndefinedCorrelationWarning,
)
from gridmeasures.matrices.correlation import (
    centered_matrix,
    construct_correlation,
    correlate,
    double_entry,
    element_correlation,
    fisher_z,
)
from gridmeasures.matrices.distance import (
    construct_distances,
    element_distances,
    minkowski,
)


class TestConstructCorrelation:
    def test_symmetric_unit_diagonal(self, correlated_grid):
        r = construct_correlation(correlated_grid)
        assert r.shape == (4, 4)
        np.testing.assert_allclose(r, r.T)
        np.testing.assert_allclose(np.diag(r), 1.0)

    def test_matches_pairwise_pearson(self, dilemma_grid):
        r = construct_correlation(dilemma_grid)
        assert r[0, 1] == pytest.approx(13 / math.sqrt(398.6667), abs=1e-4)
        assert r[0, 3] == pytest.approx(-0.42733, abs=1e-4)

    def test_zero_variance_warns_and_gives_nan(self, constant_row_grid):
        with pytest.warns(UndefinedCorrelationWarning):
            r = construct_correlation(constant_row_grid)
        assert np.isnan(r[1, 0])
        assert np.isnan(r[0, 1])
        assert r[0, 2] == pytest.approx(-1.0)

    def test_requires_two_constructs(self):
        from gridmeasures.core.grid import RepGrid
        grid = RepGrid.from_lists([[1, 2, 3]], [("a", "b")], ["x", "y", "z"], (1, 5))
        with pytest.raises(InsufficientDataError):
            construct_correlation(grid)


class TestElementCorrelation:
    def test_shape(self, correlated_grid):
        assert element_correlation(correlated_grid).shape == (6, 6)

    def test_double_entry_stacks_reflection(self, triangle_grid):
        de = double_entry(triangle_grid)
        assert de.shape == (4, 3)
        np.testing.assert_array_equal(de[2], [1, 7, 7])

    def test_rc_uses_double_entry(self, correlated_grid):
        rc = element_correlation(correlated_grid, rc=True)
        expected = np.corrcoef(double_entry(correlated_grid).T)
        np.testing.assert_allclose(rc, expected)

    def test_rc_ignores_pole_direction(self, correlated_grid):
        flipped = correlated_grid.invert_construct(0).invert_construct(2)
        np.testing.assert_allclose(
            element_correlation(flipped, rc=True),
            element_correlation(correlated_grid, rc=True),
        )


class TestHelpers:
    def test_centered_rows_sum_to_zero(self, correlated_grid):
        np.testing.assert_allclose(centered_matrix(correlated_grid).sum(axis=1), 0.0, atol=1e-12)

    def test_correlate(self):
        assert correlate([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
        assert correlate([1, 2, 3], [3, 2, 1]) == pytest.approx(-1.0)
        assert math.isnan(correlate([1, 1, 1], [1, 2, 3]))

    def test_fisher_z_scalar(self):
        assert fisher_z(0.5) == pytest.approx(0.5493, abs=1e-4)
        assert fisher_z(0.0) == 0.0
        assert math.isinf(fisher_z(1.0))

    def test_fisher_z_array(self):
        z = fisher_z(np.array([-0.3, 0.3]))
        assert z[0] == pytest.approx(-z[1])


class TestDistances:
    def test_minkowski_euclidean_and_city_block(self):
        m = np.array([[0.0, 0.0], [3.0, 4.0]])
        assert minkowski(m, 2)[0, 1] == pytest.approx(5.0)
        assert minkowski(m, 1)[0, 1] == pytest.approx(7.0)

    def test_power_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            minkowski(np.ones((2, 2)), 0)

    def test_construct_distance_normalised(self, triangle_grid):
        d = construct_distances(triangle_grid)
        assert d[0, 1] == pytest.approx(6 / math.sqrt(3))

    def test_construct_distance_excluding_element(self, triangle_grid):
        assert construct_distances(triangle_grid, excluded_element=0)[0, 1] == pytest.approx(0.0)
        assert construct_distances(triangle_grid, excluded_element=1)[0, 1] == pytest.approx(
            6 / math.sqrt(2)
        )

    def test_element_distances(self, triangle_grid):
        d = element_distances(triangle_grid)
        assert d.shape == (3, 3)
        assert d[0, 1] == pytest.approx(6 / math.sqrt(2))
        assert element_distances(triangle_grid, excluded_element=0).shape == (2, 2)

    def test_exclusion_index_checked(self, triangle_grid):
        with pytest.raises(InvalidInputError):
            construct_distances(triangle_grid, excluded_element=3)
