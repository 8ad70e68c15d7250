"""
gridmeasures/api/grid_measures.py
=================================
The developer-facing entry point: one grid, every index.

Public API:
    gm = GridMeasures(grid)
    gm.bias(), gm.variability(), gm.pvaff(), gm.intensity()
    gm.conflict1(), gm.conflict2(), gm.conflict3()
    result = gm.dilemma(self_index=0, ideal_index=-1)
    print(gm.explain(result))

The grid is validated once on construction. Every method takes its
defaults from the ``MeasuresConfig`` given (or ``DEFAULT_CONFIG``);
keyword arguments override them for a single call.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence, Union

from gridmeasures.core.config import DEFAULT_CONFIG, MeasuresConfig
from gridmeasures.core.exceptions import InsufficientDataError
from gridmeasures.core.grid import GridAccessor, RepGrid
from gridmeasures.core.types import (
    ConflictTriadResult,
    CorrelationDistribution,
    DilemmaResult,
    IntensityResult,
    PvaffResult,
    ScalarIndexResult,
    TriangleConflictResult,
)
from gridmeasures.core.validators import assert_valid_grid
from gridmeasures.indices.basic import bias as _bias
from gridmeasures.indices.basic import variability as _variability
from gridmeasures.indices.complexity import pvaff as _pvaff
from gridmeasures.indices.conflict import conflict_bassler, conflict_correlation
from gridmeasures.indices.dilemma import correlation_distribution, dilemma as _dilemma
from gridmeasures.indices.intensity import intensity as _intensity
from gridmeasures.indices.triangle import conflict_triangle
from gridmeasures.reporting.formatter import format_report

logger = logging.getLogger(__name__)


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


class GridMeasures:
    """All indices of one repertory grid.

    Quick start:
        from gridmeasures import GridMeasures, RepGrid

        grid = RepGrid.from_lists(
            ratings=[[1, 5, 3], [2, 6, 7], [4, 4, 1]],
            constructs=[("warm", "cold"), ("calm", "anxious"), ("open", "closed")],
            elements=["self", "mother", "ideal self"],
            scale=(1, 7),
        )
        gm = GridMeasures(grid)
        print(gm.summary())
        print(gm.explain(gm.conflict3()))
    """

    def __init__(
        self,
        grid: Union[GridAccessor, Dict[str, Any]],
        config: Optional[MeasuresConfig] = None,
    ):
        if isinstance(grid, dict):
            grid = RepGrid.from_dict(grid)
        assert_valid_grid(grid)
        self.grid = grid
        self.config = config or DEFAULT_CONFIG
        logger.debug(
            f"GridMeasures: {grid.construct_count()} constructs × "
            f"{grid.element_count()} elements, scale {grid.scale_bounds()}"
        )

    # ─── SIMPLE INDICES ────────────────────────────────────────────

    def bias(
        self,
        scale_min: Optional[float] = None,
        scale_max: Optional[float] = None,
        digits: Optional[int] = None,
    ) -> ScalarIndexResult:
        digits = _pick(digits, self.config.output.digits)
        value = _bias(self.grid, scale_min, scale_max, digits=digits)
        return ScalarIndexResult(name="bias", value=value, digits=digits)

    def variability(
        self,
        scale_min: Optional[float] = None,
        scale_max: Optional[float] = None,
        digits: Optional[int] = None,
    ) -> ScalarIndexResult:
        digits = _pick(digits, self.config.output.digits)
        value = _variability(self.grid, scale_min, scale_max, digits=digits)
        return ScalarIndexResult(name="variability", value=value, digits=digits)

    def pvaff(self) -> PvaffResult:
        return _pvaff(self.grid)

    def intensity(self, rc: Optional[bool] = None, trim: Optional[int] = None) -> IntensityResult:
        return _intensity(
            self.grid,
            rc=_pick(rc, self.config.correlation.element_rc),
            trim=_pick(trim, self.config.output.trim),
        )

    # ─── CONFLICT ──────────────────────────────────────────────────

    def conflict1(self) -> ConflictTriadResult:
        """Slade & Sheehan (1979): sign-balance of correlation triads."""
        return conflict_correlation(self.grid, chunk_size=self.config.conflict.chunk_size)

    def conflict2(self, crit: Optional[float] = None) -> ConflictTriadResult:
        """Bassler et al. (1992): magnitude-aware triad balance."""
        return conflict_bassler(
            self.grid,
            crit=_pick(crit, self.config.conflict.crit),
            chunk_size=self.config.conflict.chunk_size,
        )

    def conflict3(
        self,
        power: Optional[float] = None,
        e_out: Optional[Sequence[int]] = None,
        e_threshold: Optional[float] = None,
        c_out: Optional[Sequence[int]] = None,
        c_threshold: Optional[float] = None,
        trim: Optional[int] = None,
    ) -> TriangleConflictResult:
        """Bell (2004): triangle-inequality violations."""
        cfg = self.config.conflict
        return conflict_triangle(
            self.grid,
            power=_pick(power, cfg.power),
            e_out=e_out,
            e_threshold=_pick(e_threshold, cfg.e_threshold),
            c_out=c_out,
            c_threshold=_pick(c_threshold, cfg.c_threshold),
            trim=_pick(trim, cfg.trim),
        )

    # ─── DILEMMA ───────────────────────────────────────────────────

    def dilemma(
        self,
        self_index: int = 0,
        ideal_index: int = -1,
        mode: Optional[int] = None,
        diff_congruent: Optional[float] = None,
        diff_discrepant: Optional[float] = None,
        r_min: Optional[float] = None,
        exclude: Optional[bool] = None,
        trim: Optional[int] = None,
        index: Optional[bool] = None,
    ) -> DilemmaResult:
        """Implicative dilemmas; options left at None come from ``DilemmaConfig``."""
        cfg = self.config.dilemma
        return _dilemma(
            self.grid,
            self_index=self_index,
            ideal_index=ideal_index,
            mode=_pick(mode, cfg.mode),
            diff_congruent=_pick(diff_congruent, cfg.diff_congruent),
            diff_discrepant=_pick(diff_discrepant, cfg.diff_discrepant),
            r_min=_pick(r_min, cfg.r_min),
            exclude=_pick(exclude, cfg.exclude),
            trim=_pick(trim, cfg.trim),
            index=_pick(index, cfg.index),
        )

    def correlation_distribution(
        self,
        self_index: int = 0,
        ideal_index: int = -1,
    ) -> CorrelationDistribution:
        return correlation_distribution(self.grid, self_index, ideal_index)

    # ─── SUMMARY / EXPLAIN ─────────────────────────────────────────

    def summary(self) -> Dict[str, Optional[float]]:
        """All scalar indices of the grid.

        Indices the grid is too small for are reported as None.
        """
        out: Dict[str, Optional[float]] = {}
        scalar = {
            "bias":        lambda: self.bias().value,
            "variability": lambda: self.variability().value,
            "pvaff":       lambda: self.pvaff().value,
            "intensity":   lambda: self.intensity().total,
            "conflict1":   lambda: self.conflict1().prop_imbalanced,
            "conflict2":   lambda: self.conflict2().prop_imbalanced,
            "conflict3":   lambda: self.conflict3().overall,
        }
        for name, compute in scalar.items():
            try:
                out[name] = float(compute())
            except InsufficientDataError as exc:
                logger.info(f"summary: {name} skipped ({exc})")
                out[name] = None
        return out

    def explain(self, result: Any, digits: Optional[int] = None, **options: Any) -> str:
        """Human-readable report of any result returned by this class."""
        return format_report(result, digits=digits, **options)

    def __repr__(self) -> str:
        return (
            f"GridMeasures({self.grid.construct_count()} constructs × "
            f"{self.grid.element_count()} elements)"
        )
