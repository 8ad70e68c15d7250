"""
tests/unit/test_api.py
======================
Tests for the GridMeasures facade.
"""
import pytest

from gridmeasures import GridMeasures, MeasuresConfig, RepGrid
from gridmeasures.core.exceptions import InvalidInputError
from gridmeasures.core.types import (
    ConflictTriadResult,
    DilemmaResult,
    ScalarIndexResult,
    TriangleConflictResult,
)
from gridmeasures.indices.basic import bias


class TestConstruction:
    def test_from_grid(self, dilemma_grid):
        gm = GridMeasures(dilemma_grid)
        assert gm.grid is dilemma_grid
        assert "5 constructs" in repr(gm)

    def test_from_dict(self, grid_dict):
        gm = GridMeasures(grid_dict)
        assert isinstance(gm.grid, RepGrid)

    def test_rejects_invalid_grid(self):
        with pytest.raises(InvalidInputError):
            GridMeasures([[1, 2], [3, 4]])


class TestIndices:
    def test_scalar_results(self, dilemma_grid):
        gm = GridMeasures(dilemma_grid)
        result = gm.bias()
        assert isinstance(result, ScalarIndexResult)
        assert result.value == bias(dilemma_grid)
        assert gm.bias(digits=4).digits == 4
        assert gm.variability().name == "variability"

    def test_conflict_methods(self, dilemma_grid):
        gm = GridMeasures(dilemma_grid)
        assert isinstance(gm.conflict1(), ConflictTriadResult)
        assert gm.conflict2(crit=0.5).crit == 0.5
        assert isinstance(gm.conflict3(), TriangleConflictResult)

    def test_config_defaults_used(self, dilemma_grid):
        cfg = MeasuresConfig()
        cfg.conflict.crit = 0.2
        cfg.conflict.power = 1.0
        cfg.conflict.chunk_size = 2
        cfg.dilemma.r_min = 0.5
        gm = GridMeasures(dilemma_grid, config=cfg)
        assert gm.conflict2().crit == 0.2
        assert gm.conflict3().power == 1.0
        assert gm.dilemma().count == 1

    def test_dilemma_overrides(self, dilemma_grid):
        gm = GridMeasures(dilemma_grid)
        result = gm.dilemma(mode=0)
        assert isinstance(result, DilemmaResult)
        assert result.count == 3
        assert gm.dilemma(r_min=None).r_min == 0.35

    def test_dilemma_unknown_option(self, dilemma_grid):
        with pytest.raises(TypeError, match="threshold"):
            GridMeasures(dilemma_grid).dilemma(threshold=0.3)

    def test_correlation_distribution(self, dilemma_grid):
        dist = GridMeasures(dilemma_grid).correlation_distribution()
        assert len(dist.including) == 5


class TestSummary:
    def test_all_scalars(self, dilemma_grid):
        summary = GridMeasures(dilemma_grid).summary()
        assert set(summary) == {
            "bias", "variability", "pvaff", "intensity",
            "conflict1", "conflict2", "conflict3",
        }
        assert all(isinstance(v, float) for v in summary.values())

    def test_small_grid_skips_triad_measures(self, triangle_grid):
        summary = GridMeasures(triangle_grid).summary()
        assert summary["conflict1"] is None
        assert summary["conflict2"] is None
        assert summary["conflict3"] == pytest.approx(100.0)


class TestExplain:
    def test_explain_delegates_to_formatter(self, dilemma_grid):
        gm = GridMeasures(dilemma_grid)
        assert gm.explain(gm.bias()).startswith("Bias:")
        assert "Implicative Dilemma" in gm.explain(gm.dilemma())
        assert "Constructs that form imbalanced triads" in gm.explain(gm.conflict2(), output=2)
