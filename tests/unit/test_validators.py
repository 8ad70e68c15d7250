"""
tests/unit/test_validators.py
=============================
Tests for grid validation and size requirements.
"""
import numpy as np
import pytest

from gridmeasures.core.exceptions import (
    GridMeasuresError,
    InsufficientDataError,
    InvalidInputError,
)
from gridmeasures.core.validators import (
    assert_valid_grid,
    check_construct_index,
    check_element_index,
    require_constructs,
    require_elements,
    validate_grid,
    validate_rating_layout,
)


class _BrokenGrid:
    """Claims to be a grid but reports ratings outside its scale."""

    def rating_matrix(self):
        return np.array([[1.0, 9.0], [2.0, 3.0]])

    def scale_bounds(self):
        return 1.0, 5.0

    def construct_count(self):
        return 2

    def element_count(self):
        return 2

    def construct_labels(self, trim=None):
        return [("a", "b"), ("c", "d")]

    def element_labels(self, trim=None):
        return ["x"]

    def subgrid(self, excluded_element_indices):
        return self


class TestValidateRatingLayout:
    def test_valid(self):
        assert validate_rating_layout(np.ones((2, 3)), 1, 5, 2, 3) == []

    def test_not_two_dimensional(self):
        errors = validate_rating_layout(np.ones(3), 1, 5, 1, 3)
        assert "2-D" in errors[0]

    def test_bad_scale(self):
        errors = validate_rating_layout(np.ones((1, 2)), 5, 1, 1, 2)
        assert any("below maximum" in e for e in errors)

    def test_non_finite(self):
        errors = validate_rating_layout(np.array([[1.0, np.nan]]), 1, 5, 1, 2)
        assert any("non-finite" in e for e in errors)


class TestValidateGrid:
    def test_valid_grid(self, correlated_grid):
        assert validate_grid(correlated_grid) == []

    def test_not_a_grid(self):
        errors = validate_grid([[1, 2], [3, 4]])
        assert len(errors) == 1
        assert "not a repertory grid" in errors[0]

    def test_collects_all_problems(self):
        errors = validate_grid(_BrokenGrid())
        assert any("outside scale" in e for e in errors)
        assert any("element labels" in e for e in errors)

    def test_assert_raises_with_context(self):
        with pytest.raises(InvalidInputError) as exc:
            assert_valid_grid("grid")
        assert exc.value.context["type"] == "str"
        assert isinstance(exc.value, GridMeasuresError)


class TestRequirements:
    def test_require_constructs(self, triangle_grid):
        assert require_constructs(triangle_grid, 2) == 2
        with pytest.raises(InsufficientDataError) as exc:
            require_constructs(triangle_grid, 3, "conflict1")
        assert exc.value.required == 3
        assert exc.value.actual == 2
        assert "conflict1" in str(exc.value)

    def test_require_elements(self, triangle_grid):
        assert require_elements(triangle_grid, 3) == 3
        with pytest.raises(InsufficientDataError):
            require_elements(triangle_grid, 4)


class TestIndexChecks:
    def test_negative_element_index(self, dilemma_grid):
        assert check_element_index(dilemma_grid, -1) == 5

    def test_element_out_of_range(self, dilemma_grid):
        with pytest.raises(InvalidInputError, match="out of range"):
            check_element_index(dilemma_grid, 6, "self")

    def test_element_index_type(self, dilemma_grid):
        with pytest.raises(InvalidInputError, match="integer"):
            check_element_index(dilemma_grid, "1")
        with pytest.raises(InvalidInputError):
            check_element_index(dilemma_grid, True)

    def test_construct_index(self, dilemma_grid):
        assert check_construct_index(dilemma_grid, -5) == 0
        with pytest.raises(InvalidInputError):
            check_construct_index(dilemma_grid, 5)
