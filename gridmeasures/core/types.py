"""
gridmeasures/core/types.py
==========================
Foundation type system for gridmeasures.
Every index returns one of the result dataclasses below; the
reporting layer formats exactly this closed set of variants.

All results are plain, read-only outputs of a single index call.
``to_dict()`` turns each into JSON-safe primitives (NaN → None).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


# ─────────────────────────────────────────────
#  ENUMERATIONS
# ─────────────────────────────────────────────

class ConstructType(Enum):
    """Classification of a construct relative to (self, ideal self).

    Congruent:  self is construed as the person would like to be
    Discrepant: self and ideal self are construed differently
    Neither:    undifferentiated, e.g. self rated on the scale midpoint
    """
    CONGRUENT  = "congruent"
    DISCREPANT = "discrepant"
    NEITHER    = "neither"


class ClassificationMode(IntEnum):
    """Criterion used to tell congruent from discrepant constructs.

    MIDPOINT   (0): self and ideal on the same / opposite side of the
                    scale midpoint (Grice, Idiogrid)
    DIFFERENCE (1): absolute self–ideal rating difference against two
                    a priori thresholds (Feixas & Saul, 2004)
    """
    MIDPOINT   = 0
    DIFFERENCE = 1


class PairOrientation(Enum):
    """How a construct pair is oriented before correlating.

    Keyed on (sign(self[c1] - midpoint), sign(self[c2] - midpoint)).
    Constructs are turned so the self rating sits on the left pole.
    """
    SAME_ABOVE    = "same_above"      # (+, +) both reversed, r unchanged
    SAME_BELOW    = "same_below"      # (-, -) none reversed
    INVERT_FIRST  = "invert_first"    # (+, -) c1 reversed, r sign flips
    INVERT_SECOND = "invert_second"   # (-, +) c2 reversed, r sign flips
    UNORIENTED    = "unoriented"      # a self rating sits on the midpoint


def json_value(value: Any) -> Any:
    """Convert numpy scalars/arrays and NaN to JSON friendly values."""
    if isinstance(value, np.ndarray):
        return [json_value(v) for v in value.tolist()]
    if isinstance(value, (list, tuple)):
        return [json_value(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (np.integer,)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        value = float(value)
        return None if math.isnan(value) or math.isinf(value) else value
    return value


# ─────────────────────────────────────────────
#  SIMPLE INDICES
# ─────────────────────────────────────────────

@dataclass
class ScalarIndexResult:
    """A single scalar index (bias, variability) with its label."""
    name:   str
    value:  float
    digits: int = 2

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.name, "value": json_value(self.value)}


@dataclass
class PvaffResult:
    """Percentage of variance accounted for by the first factor.

    ``value`` is a proportion in [1/n_constructs, 1].
    """
    value:        float
    n_constructs: int
    singular_values: List[float] = field(default_factory=list)

    @property
    def percent(self) -> float:
        return self.value * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":           "pvaff",
            "value":           json_value(self.value),
            "percent":         json_value(self.percent),
            "n_constructs":    self.n_constructs,
            "singular_values": json_value(self.singular_values),
        }


@dataclass
class IntensityResult:
    """Bannister's intensity scores by construct, by element and overall."""
    construct_labels: List[str]
    per_construct:    List[float]
    element_labels:   List[str]
    per_element:      List[float]
    construct_mean:   float
    element_mean:     float
    total:            float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":          "intensity",
            "constructs":     [
                {"label": l, "intensity": json_value(v)}
                for l, v in zip(self.construct_labels, self.per_construct)
            ],
            "elements":       [
                {"label": l, "intensity": json_value(v)}
                for l, v in zip(self.element_labels, self.per_element)
            ],
            "construct_mean": json_value(self.construct_mean),
            "element_mean":   json_value(self.element_mean),
            "total":          json_value(self.total),
        }


# ─────────────────────────────────────────────
#  CONFLICT
# ─────────────────────────────────────────────

@dataclass
class ConflictTriadResult:
    """Balance of construct-correlation triads (conflict v1 / v2).

    ``imbalanced_triads`` holds 0-based construct index triples and is
    only filled by the Bassler et al. measure.
    """
    method:            str
    total:             int
    imbalanced:        int
    imbalanced_triads: List[Tuple[int, int, int]] = field(default_factory=list)
    crit:              Optional[float] = None

    @property
    def balanced(self) -> int:
        return self.total - self.imbalanced

    @property
    def prop_balanced(self) -> float:
        return self.balanced / self.total if self.total else float("nan")

    @property
    def prop_imbalanced(self) -> float:
        return self.imbalanced / self.total if self.total else float("nan")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":             self.method,
            "total":             self.total,
            "imbalanced":        self.imbalanced,
            "balanced":          self.balanced,
            "prop_balanced":     json_value(self.prop_balanced),
            "prop_imbalanced":   json_value(self.prop_imbalanced),
            "imbalanced_triads": [list(t) for t in self.imbalanced_triads],
            "crit":              self.crit,
        }


@dataclass
class ChiSquareResult:
    """Goodness-of-fit test of equal conflict counts."""
    statistic: float
    df:        int
    p_value:   float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statistic": json_value(self.statistic),
            "df":        self.df,
            "p_value":   json_value(self.p_value),
        }


@dataclass
class ElementConflictDetail:
    """Drill-down for one element of the triangle-inequality measure.

    discrepancies:     (constructs × constructs), NaN where no conflict
    pairs:             number of conflicting construct pairs
    construct_percent: share of this element's conflicts per construct
    mean:              average discrepancy, non-conflicts counted as 0
    sd:                standard deviation of the actual discrepancies
    """
    element:           int
    discrepancies:     np.ndarray
    pairs:             float
    construct_percent: List[float]
    mean:              float
    sd:                float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "element":           self.element,
            "discrepancies":     json_value(self.discrepancies),
            "pairs":             json_value(self.pairs),
            "construct_percent": json_value(self.construct_percent),
            "mean":              json_value(self.mean),
            "sd":                json_value(self.sd),
        }


@dataclass
class ConstructConflictDetail:
    """Drill-down for one construct: discrepancies (constructs × elements)."""
    construct:     int
    discrepancies: np.ndarray
    mean:          float
    sd:            float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "construct":     self.construct,
            "discrepancies": json_value(self.discrepancies),
            "mean":          json_value(self.mean),
            "sd":            json_value(self.sd),
        }


@dataclass
class TriangleConflictResult:
    """Conflict measure based on triangle inequalities (Bell, 2004).

    ``discrepancies`` is indexed [element, construct_j, construct_k],
    symmetric in (j, k), NaN where the triangle inequality holds.
    """
    potential:         int
    actual:            int
    power:             float
    element_names:     List[str]
    construct_names:   List[str]
    element_counts:    List[int]
    construct_counts:  List[int]
    element_percent:   List[float]
    construct_percent: List[float]
    discrepancies:     np.ndarray
    element_details:   List[ElementConflictDetail] = field(default_factory=list)
    construct_details: List[ConstructConflictDetail] = field(default_factory=list)
    e_threshold:       Optional[float] = None
    c_threshold:       Optional[float] = None
    element_chi2:      Optional[ChiSquareResult] = None
    construct_chi2:    Optional[ChiSquareResult] = None

    @property
    def overall(self) -> float:
        """Percentage of potential conflicts that are actual conflicts."""
        return self.actual / self.potential * 100 if self.potential else float("nan")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":             "conflict3",
            "potential":         self.potential,
            "actual":            self.actual,
            "overall":           json_value(self.overall),
            "power":             self.power,
            "elements":          [
                {"label": n, "count": c, "percent": json_value(p)}
                for n, c, p in zip(self.element_names, self.element_counts, self.element_percent)
            ],
            "constructs":        [
                {"label": n, "count": c, "percent": json_value(p)}
                for n, c, p in zip(self.construct_names, self.construct_counts, self.construct_percent)
            ],
            "element_details":   [d.to_dict() for d in self.element_details],
            "construct_details": [d.to_dict() for d in self.construct_details],
            "e_threshold":       self.e_threshold,
            "c_threshold":       self.c_threshold,
            "element_chi2":      self.element_chi2.to_dict() if self.element_chi2 else None,
            "construct_chi2":    self.construct_chi2.to_dict() if self.construct_chi2 else None,
        }


# ─────────────────────────────────────────────
#  IMPLICATIVE DILEMMAS
# ─────────────────────────────────────────────

@dataclass
class ConstructClassification:
    """Level (a): a construct's a priori type.

    ``name`` already reflects pole relabelling; when ``inverted`` is set
    the self and ideal ratings are reversed (``scale_max - rating + 1``).
    """
    index:        int
    name:         str
    type:         ConstructType
    self_rating:  float
    ideal_rating: float
    inverted:     bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":        self.index,
            "name":         self.name,
            "type":         self.type.value,
            "self":         json_value(self.self_rating),
            "ideal":        json_value(self.ideal_rating),
            "inverted":     self.inverted,
        }


@dataclass
class DilemmaCandidate:
    """Level (b): one construct pair checked for a dilemma.

    ``r_exclude`` is None when the correlation without self and ideal
    is not available (pairs needing cross inversion).
    """
    c1:            int
    c2:            int
    r_include:     Optional[float]
    r_exclude:     Optional[float]
    exceeds_r_min: Optional[bool]
    type_c1:       ConstructType
    type_c2:       ConstructType
    opposed_types: Optional[bool]
    name_c1:       str
    name_c2:       str
    orientation:   PairOrientation

    @property
    def is_dilemma(self) -> bool:
        return bool(self.exceeds_r_min) and bool(self.opposed_types)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "c1":            self.c1,
            "c2":            self.c2,
            "r_include":     json_value(self.r_include),
            "r_exclude":     json_value(self.r_exclude),
            "exceeds_r_min": self.exceeds_r_min,
            "type_c1":       self.type_c1.value,
            "type_c2":       self.type_c2.value,
            "opposed_types": self.opposed_types,
            "is_dilemma":    self.is_dilemma,
            "name_c1":       self.name_c1,
            "name_c2":       self.name_c2,
            "orientation":   self.orientation.value,
        }


@dataclass
class DilemmaPair:
    """Level (c): an implicative dilemma, congruent construct on the left,
    discrepant construct on the right."""
    congruent:       int
    discrepant:      int
    congruent_name:  str
    discrepant_name: str
    r_total:         Optional[float]
    r_excluding:     Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "congruent":       self.congruent,
            "discrepant":      self.discrepant,
            "congruent_name":  self.congruent_name,
            "discrepant_name": self.discrepant_name,
            "r_total":         json_value(self.r_total),
            "r_excluding":     json_value(self.r_excluding),
        }


@dataclass
class CorrelationDistribution:
    """Quantiles of absolute construct correlations with and without
    the self and ideal elements."""
    probs:     List[float]
    including: List[float]
    excluding: List[float]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "probs":     list(self.probs),
            "including": json_value(self.including),
            "excluding": json_value(self.excluding),
        }


@dataclass
class DilemmaResult:
    """Complete implicative dilemma analysis."""
    self_index:      int
    ideal_index:     int
    self_name:       str
    ideal_name:      str
    mode:            ClassificationMode
    diff_congruent:  Optional[float]
    diff_discrepant: Optional[float]
    r_min:           float
    exclude:         bool
    midpoint:        float
    classifications: List[ConstructClassification]
    candidates:      List[DilemmaCandidate]
    dilemmas:        List[DilemmaPair]

    @property
    def count(self) -> int:
        return len(self.dilemmas)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index":           "dilemma",
            "self":            {"index": self.self_index, "name": self.self_name},
            "ideal":           {"index": self.ideal_index, "name": self.ideal_name},
            "mode":            int(self.mode),
            "diff_congruent":  self.diff_congruent,
            "diff_discrepant": self.diff_discrepant,
            "r_min":           self.r_min,
            "exclude":         self.exclude,
            "midpoint":        self.midpoint,
            "classifications": [c.to_dict() for c in self.classifications],
            "candidates":      [c.to_dict() for c in self.candidates],
            "dilemmas":        [d.to_dict() for d in self.dilemmas],
            "count":           self.count,
        }
