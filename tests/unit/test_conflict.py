"""
tests/unit/test_conflict.py
===========================
Tests for the correlation based conflict measures (Slade & Sheehan,
Bassler et al.).
"""
import pytest

from gridmeasures.core.exceptions import InsufficientDataError, InvalidInputError
from gridmeasures.indices.conflict import (
    conflict_bassler,
    conflict_correlation,
    is_balanced_bassler,
    is_balanced_sign,
    iter_triads,
    triad_z_values,
)
from gridmeasures.matrices.correlation import construct_correlation, fisher_z


def z(*rs):
    return [fisher_z(r) for r in rs]


class TestTriadClassifiers:
    def test_mixed_triad_imbalanced_by_both(self):
        zs = z(0.5, 0.3, -0.1)
        assert is_balanced_sign(zs) is False
        assert is_balanced_bassler(zs, crit=0) is False

    def test_all_positive_balanced(self):
        zs = z(0.5, 0.4, 0.3)
        assert is_balanced_sign(zs) is True
        assert is_balanced_bassler(zs) is True

    def test_two_negative_balanced(self):
        zs = z(0.5, -0.4, -0.3)
        assert is_balanced_sign(zs) is True
        assert is_balanced_bassler(zs) is True

    def test_one_negative_imbalanced(self):
        zs = z(0.5, 0.4, -0.3)
        assert is_balanced_sign(zs) is False
        assert is_balanced_bassler(zs) is False

    def test_near_zero_correlation_tolerated_by_bassler(self):
        zs = z(0.1, 0.1, -0.005)
        assert is_balanced_sign(zs) is False
        assert is_balanced_bassler(zs, crit=0.03) is True
        assert is_balanced_bassler(zs, crit=0.0) is False

    def test_order_of_z_values_irrelevant_for_bassler(self):
        assert is_balanced_bassler(z(-0.1, 0.3, 0.5), crit=0) is False

    def test_nan_never_balanced(self):
        zs = [float("nan"), 0.5, 0.5]
        assert is_balanced_sign(zs) is False
        assert is_balanced_bassler(zs) is False


class TestTriadEnumeration:
    def test_five_constructs_give_ten_triads(self):
        triads = list(iter_triads(5))
        assert len(triads) == 10
        assert triads[0] == (0, 1, 2)
        assert triads[-1] == (2, 3, 4)

    def test_z_value_order(self, dilemma_grid):
        zm = fisher_z(construct_correlation(dilemma_grid))
        assert triad_z_values(zm, (0, 1, 3)) == (zm[0, 1], zm[0, 3], zm[1, 3])


class TestConflictCorrelation:
    def test_counts(self, dilemma_grid):
        result = conflict_correlation(dilemma_grid)
        assert result.method == "conflict1"
        assert result.total == 10
        assert result.balanced + result.imbalanced == result.total
        assert result.prop_balanced + result.prop_imbalanced == pytest.approx(1.0)

    def test_matches_triad_classifier(self, cyclic_grid):
        zm = fisher_z(construct_correlation(cyclic_grid))
        expected = sum(
            not is_balanced_sign(triad_z_values(zm, t)) for t in iter_triads(6)
        )
        result = conflict_correlation(cyclic_grid)
        assert result.total == 20
        assert result.imbalanced == expected

    def test_requires_three_constructs(self, triangle_grid):
        with pytest.raises(InsufficientDataError):
            conflict_correlation(triangle_grid)


class TestConflictBassler:
    def test_lists_imbalanced_triads(self, cyclic_grid):
        result = conflict_bassler(cyclic_grid)
        assert result.method == "conflict2"
        assert result.crit == 0.03
        assert len(result.imbalanced_triads) == result.imbalanced
        zm = fisher_z(construct_correlation(cyclic_grid))
        for triad in result.imbalanced_triads:
            assert not is_balanced_bassler(triad_z_values(zm, triad))

    def test_large_crit_balances_everything(self, cyclic_grid):
        assert conflict_bassler(cyclic_grid, crit=100).imbalanced == 0

    @pytest.mark.parametrize("chunk_size", [1, 3, 7, 20, 1000])
    def test_chunking_does_not_change_result(self, cyclic_grid, chunk_size):
        whole = conflict_bassler(cyclic_grid)
        split = conflict_bassler(cyclic_grid, chunk_size=chunk_size)
        assert split.total == whole.total
        assert split.imbalanced_triads == whole.imbalanced_triads
        assert conflict_correlation(cyclic_grid, chunk_size=chunk_size).imbalanced == \
            conflict_correlation(cyclic_grid).imbalanced

    def test_invalid_chunk_size(self, cyclic_grid):
        with pytest.raises(InvalidInputError):
            conflict_bassler(cyclic_grid, chunk_size=0)

    def test_to_dict(self, dilemma_grid):
        d = conflict_bassler(dilemma_grid).to_dict()
        assert d["index"] == "conflict2"
        assert d["total"] == 10
        assert all(len(t) == 3 for t in d["imbalanced_triads"])
