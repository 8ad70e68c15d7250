"""
gridmeasures/__init__.py — Public API exports
"""

from gridmeasures.api.grid_measures import GridMeasures
from gridmeasures.core.config import DEFAULT_CONFIG, MeasuresConfig
from gridmeasures.core.exceptions import (
    GridMeasuresError,
    InsufficientDataError,
    InvalidInputError,
    UndefinedCorrelationWarning,
    UnsupportedModeError,
)
from gridmeasures.core.grid import Construct, GridAccessor, RepGrid
from gridmeasures.core.types import (
    ClassificationMode,
    ConflictTriadResult,
    ConstructType,
    DilemmaResult,
    IntensityResult,
    PvaffResult,
    ScalarIndexResult,
    TriangleConflictResult,
)
from gridmeasures.indices import (
    bias,
    conflict_bassler,
    conflict_correlation,
    conflict_triangle,
    correlation_distribution,
    dilemma,
    intensity,
    pvaff,
    variability,
)
from gridmeasures.reporting import format_report
from gridmeasures.version import __version__

__all__ = [
    "GridMeasures",
    "RepGrid",
    "Construct",
    "GridAccessor",
    "MeasuresConfig",
    "DEFAULT_CONFIG",
    "bias",
    "variability",
    "pvaff",
    "intensity",
    "conflict_correlation",
    "conflict_bassler",
    "conflict_triangle",
    "dilemma",
    "correlation_distribution",
    "format_report",
    "ClassificationMode",
    "ConstructType",
    "ScalarIndexResult",
    "PvaffResult",
    "IntensityResult",
    "ConflictTriadResult",
    "TriangleConflictResult",
    "DilemmaResult",
    "GridMeasuresError",
    "InvalidInputError",
    "InsufficientDataError",
    "UnsupportedModeError",
    "UndefinedCorrelationWarning",
    "__version__",
]
