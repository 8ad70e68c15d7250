"""gridmeasures/matrices — correlation and distance structures derived from a grid."""

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

__all__ = [
    "centered_matrix",
    "construct_correlation",
    "correlate",
    "double_entry",
    "element_correlation",
    "fisher_z",
    "construct_distances",
    "element_distances",
    "minkowski",
]
