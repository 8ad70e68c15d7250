"""gridmeasures/indices — the grid indices: bias, variability, PVAFF,
intensity, conflict (three measures) and implicative dilemmas."""

from gridmeasures.indices.basic import bias, variability
from gridmeasures.indices.complexity import pvaff
from gridmeasures.indices.conflict import conflict_bassler, conflict_correlation
from gridmeasures.indices.dilemma import correlation_distribution, dilemma
from gridmeasures.indices.intensity import intensity
from gridmeasures.indices.triangle import conflict_triangle

__all__ = [
    "bias",
    "variability",
    "pvaff",
    "intensity",
    "conflict_correlation",
    "conflict_bassler",
    "conflict_triangle",
    "dilemma",
    "correlation_distribution",
]
