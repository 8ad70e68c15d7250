"""
tests/unit/test_formatter.py
============================
Tests for the plain-text reports.
"""
import numpy as np
import pytest

from gridmeasures.core.types import ScalarIndexResult
from gridmeasures.indices import (
    conflict_bassler,
    conflict_correlation,
    conflict_triangle,
    dilemma,
    intensity,
    pvaff,
)
from gridmeasures.reporting.formatter import format_matrix, format_report


class TestScalarReports:
    def test_scalar(self):
        assert format_report(ScalarIndexResult("bias", 0.12345)) == "Bias: 0.12"
        assert format_report(ScalarIndexResult("bias", 0.12345), digits=3) == "Bias: 0.123"

    def test_nan_scalar(self):
        assert format_report(ScalarIndexResult("variability", float("nan"))) == "Variability: NA"

    def test_pvaff(self, correlated_grid):
        text = format_report(pvaff(correlated_grid))
        assert "First Factor" in text
        assert "PVAFF:" in text and "%" in text

    def test_intensity(self, correlated_grid):
        text = format_report(intensity(correlated_grid))
        assert "Total intensity" in text
        assert "warm - cold" in text
        assert "ideal self" in text


class TestConflictReports:
    def test_conflict1(self, dilemma_grid):
        text = format_report(conflict_correlation(dilemma_grid))
        assert "Slade & Sheehan (1979)" in text
        assert "Total number of triads:      10" in text

    def test_conflict2_output_levels(self, cyclic_grid):
        result = conflict_bassler(cyclic_grid, crit=0)
        summary = format_report(result)
        detailed = format_report(result, output=2)
        assert "Bassler et al. (1992)" in summary
        assert "imbalanced triads ─" not in summary.lower()
        assert "Constructs that form imbalanced triads" in detailed
        if result.imbalanced_triads:
            a, b, c = result.imbalanced_triads[0]
            assert f"  {a + 1}  {b + 1}  {c + 1}" in detailed

    def test_conflict3_summary(self, triangle_grid):
        text = format_report(conflict_triangle(triangle_grid))
        assert "Potential conflicts in grid: 3" in text
        assert "Overall percentage of conflict in grid: 100.00 %" in text
        assert "Chi-square test" in text

    def test_conflict3_details(self, triangle_grid):
        result = conflict_triangle(triangle_grid, e_out=[0], c_out=[1])
        full = format_report(result)
        only_details = format_report(result, output=2)
        no_matrices = format_report(result, discrepancies=False)
        assert "### Element: (1) self" in full
        assert "### Construct: (2) kind - cruel" in full
        assert "Potential conflicts" not in only_details
        assert "### Element" in only_details
        assert "Construct conflict discrepancies" in full
        assert "Construct conflict discrepancies" not in no_matrices

    def test_conflict3_threshold_note(self, triangle_grid):
        text = format_report(conflict_triangle(triangle_grid, e_threshold=30))
        assert "conflict > 30 %" in text


class TestDilemmaReport:
    def test_difference_mode(self, dilemma_grid):
        text = format_report(dilemma(dilemma_grid))
        assert "Actual Self Position: (1) self" in text
        assert "Discrepant Difference: >= 4" in text
        assert "Congruent Difference:  <= 1" in text
        assert "Number of Implicative Dilemmas found: 2" in text
        assert "Rtot was used as criterion" in text
        assert "Congruents on the left - Discrepants on the right" in text

    def test_midpoint_mode_and_exclude(self, dilemma_grid):
        text = format_report(dilemma(dilemma_grid, mode=0, exclude=True))
        assert "Using Midpoint rating criterion" in text
        assert "excludes Self & Ideal" in text
        assert "RexSI was used as criterion" in text

    def test_no_dilemmas(self, dilemma_grid):
        text = format_report(dilemma(dilemma_grid, r_min=0.99))
        assert "No implicative dilemmas detected" in text
        assert "n/a" not in text

    def test_unavailable_correlation_shown(self, dilemma_grid):
        assert "RexSI = n/a" in format_report(dilemma(dilemma_grid))


class TestMatrix:
    def test_lower_only(self):
        m = np.array([[np.nan, 1.0], [1.0, np.nan]])
        lines = format_matrix(m, digits=1, lower_only=True)
        assert len(lines) == 3
        assert "1.0" in lines[2]
        assert "1.0" not in lines[1]

    def test_labels(self):
        lines = format_matrix(np.ones((2, 3)), 0, ["c1", "c2"], ["e1", "e2", "e3"])
        assert lines[0].split() == ["e1", "e2", "e3"]
        assert lines[1].split() == ["c1", "1", "1", "1"]


class TestDispatch:
    def test_unknown_type(self):
        with pytest.raises(TypeError, match="No report format"):
            format_report({"index": "bias"})
