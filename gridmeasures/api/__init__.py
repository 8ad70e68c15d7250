"""gridmeasures/api — High-level developer API."""

from gridmeasures.api.grid_measures import GridMeasures

__all__ = ["GridMeasures"]
