"""
gridmeasures/reporting/formatter.py
===================================
Plain-text reports for every index result.

``format_report(result, digits=None, **options)`` dispatches on the
result type. Each formatter is pure: it reads the result and returns a
string, nothing is printed or logged. ``digits=None`` selects the
default precision of the index (1 for the triad conflict measures,
2 otherwise).

Options:
    output         conflict2: 1 = summary, 2 = also list imbalanced triads
                   conflict3: 1 = summary and details, 2 = details only
    discrepancies  conflict3: include discrepancy matrices (default True)
"""

from __future__ import annotations

import math
from functools import singledispatch
from typing import Any, List, Optional, Sequence

import numpy as np

from gridmeasures.core.types import (
    ChiSquareResult,
    ClassificationMode,
    ConflictTriadResult,
    DilemmaResult,
    IntensityResult,
    PvaffResult,
    ScalarIndexResult,
    TriangleConflictResult,
)

_WIDTH = 60


def _header(title: str) -> List[str]:
    return ["=" * _WIDTH, f"  {title}", "=" * _WIDTH, ""]


def _section(title: str) -> str:
    return f"── {title} " + "─" * max(3, _WIDTH - len(title) - 4)


def _num(value: Optional[float], digits: int) -> str:
    if value is None:
        return "n/a"
    value = float(value)
    if math.isnan(value):
        return "NA"
    return f"{value:.{digits}f}"


def format_matrix(
    matrix: np.ndarray,
    digits: int = 2,
    row_labels: Optional[Sequence[str]] = None,
    col_labels: Optional[Sequence[str]] = None,
    lower_only: bool = False,
) -> List[str]:
    """Render a numeric matrix as aligned text lines (NaN shown blank).

    ``lower_only`` keeps the part below the diagonal.
    """
    n_rows, n_cols = matrix.shape
    row_labels = list(row_labels) if row_labels is not None else [str(i) for i in range(1, n_rows + 1)]
    col_labels = list(col_labels) if col_labels is not None else [str(j) for j in range(1, n_cols + 1)]

    cells = []
    for i in range(n_rows):
        row = []
        for j in range(n_cols):
            v = matrix[i, j]
            hidden = lower_only and j >= i
            row.append("" if hidden or np.isnan(v) else f"{v:.{digits}f}")
        cells.append(row)

    width = max([len(c) for row in cells for c in row] + [len(c) for c in col_labels] + [1])
    label_width = max(len(r) for r in row_labels) if row_labels else 0
    lines = [" " * label_width + " " + " ".join(c.rjust(width) for c in col_labels)]
    for label, row in zip(row_labels, cells):
        lines.append(label.ljust(label_width) + " " + " ".join(c.rjust(width) for c in row))
    return lines


@singledispatch
def format_report(result: Any, digits: Optional[int] = None, **options: Any) -> str:
    raise TypeError(f"No report format for objects of type '{type(result).__name__}'")


# ─── SIMPLE INDICES ───────────────────────────────────────────────

@format_report.register
def _(result: ScalarIndexResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = result.digits if digits is None else digits
    return f"{result.name.capitalize()}: {_num(result.value, digits)}"


@format_report.register
def _(result: PvaffResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = 2 if digits is None else digits
    lines = _header("Percentage of Variance Accounted for by the First Factor")
    lines.append(f"PVAFF: {_num(result.percent, digits)} %")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


@format_report.register
def _(result: IntensityResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = 2 if digits is None else digits
    lines = _header("Intensity index")
    lines.append(f"Total intensity: {_num(result.total, digits)}")
    lines.append("")
    lines.append(_section("Constructs"))
    lines.append(f"  Average intensity of constructs: {_num(result.construct_mean, digits)}")
    for label, value in zip(result.construct_labels, result.per_construct):
        lines.append(f"    {label}: {_num(value, digits)}")
    lines.append("")
    lines.append(_section("Elements"))
    lines.append(f"  Average intensity of elements: {_num(result.element_mean, digits)}")
    for label, value in zip(result.element_labels, result.per_element):
        lines.append(f"    {label}: {_num(value, digits)}")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


# ─── CONFLICT ─────────────────────────────────────────────────────

_AUTHORS = {
    "conflict1": "Slade & Sheehan (1979)",
    "conflict2": "Bassler et al. (1992)",
}


@format_report.register
def _(result: ConflictTriadResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = 1 if digits is None else digits
    lines = _header("Conflicts based on correlations")
    lines.append(f"As devised by {_AUTHORS.get(result.method, result.method)}")
    lines.append("")
    lines.append(f"Total number of triads:      {result.total}")
    lines.append(f"Number of imbalanced triads: {result.imbalanced}")
    lines.append("")
    lines.append(f"Proportion of balanced triads:   {_num(result.prop_balanced * 100, digits)} %")
    lines.append(f"Proportion of imbalanced triads: {_num(result.prop_imbalanced * 100, digits)} %")

    if options.get("output", 1) == 2 and result.method == "conflict2":
        lines.append("")
        lines.append(_section("Constructs that form imbalanced triads"))
        for triad in result.imbalanced_triads:
            lines.append("  " + "  ".join(str(c + 1) for c in triad))
    lines.append("=" * _WIDTH)
    return "\n".join(lines)


def _chi_lines(test: Optional[ChiSquareResult], what: str) -> List[str]:
    if test is None:
        return []
    return [
        f"  Chi-square test of equal count of conflicts for {what}:",
        f"    X-squared = {_num(test.statistic, 4)}, df = {test.df}, "
        f"p-value = {_num(test.p_value, 4)}",
    ]


@format_report.register
def _(result: TriangleConflictResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = 2 if digits is None else digits
    output = options.get("output", 1)
    show_disc = options.get("discrepancies", True)
    lines: List[str] = []

    if output == 1:
        lines += _header("Conflict or inconsistencies based on triangle inequalities")
        lines.append(f"Potential conflicts in grid: {result.potential}")
        lines.append(f"Actual conflicts in grid:    {result.actual}")
        lines.append(f"Overall percentage of conflict in grid: {_num(result.overall, digits)} %")
        lines.append("")
        lines.append(_section("Elements"))
        lines.append("  Percent of conflict attributable to element:")
        for name, pct in zip(result.element_names, result.element_percent):
            lines.append(f"    {name}: {_num(pct, digits)}")
        lines += _chi_lines(result.element_chi2, "elements")
        lines.append("")
        lines.append(_section("Constructs"))
        lines.append("  Percent of conflict attributable to construct:")
        for name, pct in zip(result.construct_names, result.construct_percent):
            lines.append(f"    {name}: {_num(pct, digits)}")
        lines += _chi_lines(result.construct_chi2, "constructs")

    if result.element_details:
        lines.append("")
        lines.append(_section("Conflicts by element"))
        if result.e_threshold is not None:
            lines.append(f"  (Details for elements with conflict > {result.e_threshold:g} %)")
        for d in result.element_details:
            lines.append("")
            lines.append(f"  ### Element: {result.element_names[d.element]}")
            lines.append(f"  Number of conflicting construct pairs: {d.pairs:g}")
            if show_disc:
                lines.append("  Construct conflict discrepancies:")
                lines += ["    " + l for l in format_matrix(d.discrepancies, digits, lower_only=True)]
            lines.append("  Percent of conflict attributable to each construct:")
            for name, pct in zip(result.construct_names, d.construct_percent):
                lines.append(f"    {name}: {_num(pct, digits)}")
            lines.append(f"  Av. level of discrepancy:   {_num(d.mean, digits)}")
            lines.append(f"  Std. dev. of discrepancies: {_num(d.sd, digits + 1)}")

    if result.construct_details:
        lines.append("")
        lines.append(_section("Conflicts by construct"))
        if result.c_threshold is not None:
            lines.append(f"  (Details for constructs with conflict > {result.c_threshold:g} %)")
        for d in result.construct_details:
            lines.append("")
            lines.append(f"  ### Construct: {result.construct_names[d.construct]}")
            if show_disc:
                n_rows, n_cols = d.discrepancies.shape
                lines.append("  Element-construct conflict discrepancies:")
                lines += ["    " + l for l in format_matrix(
                    d.discrepancies,
                    digits,
                    row_labels=[f"c{i}" for i in range(1, n_rows + 1)],
                    col_labels=[f"e{j}" for j in range(1, n_cols + 1)],
                )]
            lines.append(f"  Av. level of discrepancy:   {_num(d.mean, digits)}")
            lines.append(f"  Std. dev. of discrepancies: {_num(d.sd, digits + 1)}")

    if lines and output == 1:
        lines.append("=" * _WIDTH)
    return "\n".join(lines)


# ─── DILEMMA ──────────────────────────────────────────────────────

@format_report.register
def _(result: DilemmaResult, digits: Optional[int] = None, **options: Any) -> str:
    digits = 2 if digits is None else digits
    lines = _header("Implicative Dilemma")
    lines.append(f"Actual Self Position: {result.self_name}")
    lines.append(f"Ideal Self Position:  {result.ideal_name}")
    lines.append("")
    lines.append("A Priori Criteria (for classification):")
    if result.mode == ClassificationMode.DIFFERENCE:
        lines.append(f"  Discrepant Difference: >= {result.diff_discrepant:g}")
        lines.append(f"  Congruent Difference:  <= {result.diff_congruent:g}")
    else:
        lines.append("  Using Midpoint rating criterion")
    lines.append("")
    lines.append(f"Correlation Criterion: >= {result.r_min:g}")
    if result.exclude:
        lines.append("Criterion Correlation excludes Self & Ideal")
    else:
        lines.append("Criterion Correlation includes Self & Ideal")
    lines.append("")
    lines.append(f"Number of Implicative Dilemmas found: {result.count}")
    lines.append("")

    lines.append(_section("Classification of Constructs"))
    name_width = max([len(c.name) for c in result.classifications] + [1])
    lines.append(f"  {'':<{name_width}}  {'A priori':<10} {'Self':>5} {'Ideal':>5}")
    for c in result.classifications:
        lines.append(
            f"  {c.name:<{name_width}}  {c.type.value:<10} "
            f"{c.self_rating:>5g} {c.ideal_rating:>5g}"
        )
    lines.append(f"  Note: if Self's score is not {result.midpoint:g}, left pole corresponds to Self")
    lines.append("")

    lines.append(_section("Dilemmatic Self-Ideal Construct Pairs"))
    if result.dilemmas:
        lines.append("  Congruents on the left - Discrepants on the right")
        for d in result.dilemmas:
            lines.append(
                f"  {d.congruent_name}  <==>  {d.discrepant_name}   "
                f"Rtot = {_num(d.r_total, digits)}   RexSI = {_num(d.r_excluding, digits)}"
            )
        lines.append("")
        lines.append("  RexSI = Correlations excluding Self & ideal")
        lines.append("  Rtot  = Correlations including Self & ideal")
        lines.append(f"  {'RexSI' if result.exclude else 'Rtot'} was used as criterion")
    else:
        lines.append("  No implicative dilemmas detected")
    lines.append("=" * _WIDTH)
    return "\n".join(lines)
