"""
gridmeasures/core/config.py
===========================
Configuration for gridmeasures.
All tunable parameters of the indices in one place.

Scale dependent defaults (dilemma thresholds) are resolved from the
scale bounds explicitly via ``MeasuresConfig.for_scale``; nothing is
read from a grid behind the caller's back.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class OutputConfig:
    digits:         int           = 2
    trim:           Optional[int] = 30     # None → labels are not trimmed
    percent_digits: int           = 1


@dataclass
class CorrelationConfig:
    element_rc: bool = False    # Cohen's rc instead of Pearson for elements


@dataclass
class ConflictConfig:
    crit:        float           = 0.03   # Bassler et al. sensitivity band
    power:       float           = 2.0    # Minkowski power, 2 = euclidean
    e_threshold: Optional[float] = None   # % of conflict → element drill-down
    c_threshold: Optional[float] = None   # % of conflict → construct drill-down
    trim:        Optional[int]   = 20
    chunk_size:  Optional[int]   = None   # triads per reduction chunk


@dataclass
class DilemmaConfig:
    mode:            int             = 1      # 1 = score difference, 0 = midpoint
    diff_congruent:  Optional[int]   = None   # None → floor(range * .25)
    diff_discrepant: Optional[int]   = None   # None → ceil(range * .6)
    r_min:           float           = 0.35
    exclude:         bool            = False  # correlations without self/ideal
    trim:            Optional[int]   = 20
    index:           bool            = True


@dataclass
class MeasuresConfig:
    output:      OutputConfig      = field(default_factory=OutputConfig)
    correlation: CorrelationConfig = field(default_factory=CorrelationConfig)
    conflict:    ConflictConfig    = field(default_factory=ConflictConfig)
    dilemma:     DilemmaConfig     = field(default_factory=DilemmaConfig)

    @classmethod
    def for_scale(cls, scale_min: float, scale_max: float) -> "MeasuresConfig":
        """Config with the a priori dilemma criteria derived from the scale.

        For a 1-7 scale this yields congruent <= 1 and discrepant >= 4.
        """
        cfg = cls()
        cfg.dilemma.diff_congruent, cfg.dilemma.diff_discrepant = default_dilemma_criteria(
            scale_min, scale_max
        )
        return cfg


def default_dilemma_criteria(scale_min: float, scale_max: float) -> tuple:
    """(diff_congruent, diff_discrepant) for a rating scale.

        diff_congruent  = floor(range × 0.25)
        diff_discrepant = ceil(range × 0.6)
    """
    rng = scale_max - scale_min
    return int(math.floor(rng * 0.25)), int(math.ceil(rng * 0.6))


# Singleton default config
DEFAULT_CONFIG = MeasuresConfig()
