"""
gridmeasures/indices/dilemma.py
===============================
Implicative dilemmas (Feixas & Saul, 2004).

An implicative dilemma arises when a desired change on one construct is
associated with an undesired implication on another. A timid person may
want to become socially skilled but associates being socially skilled
with being selfish: moving towards the ideal on the first construct
implies an unwanted move on the second (cf. Winter, 1982).

Detection runs in two steps.

1. Classify constructs relative to the elements self and ideal self.

   mode 1 — minimal / maximal score difference (Feixas & Saul, 2004)
       congruent   |self - ideal| ≤ diff_congruent and neither rating on
                   the scale midpoint
       discrepant  |self - ideal| ≥ diff_discrepant
   mode 0 — scale midpoint criterion (Grice, Idiogrid 2.4)
       congruent   self and ideal strictly on the same side of the midpoint
       discrepant  strictly on opposite sides
   Anything else is "neither". Default thresholds derive from the scale
   range: floor(range·.25) and ceil(range·.6), i.e. ≤1 / ≥4 on 1-7.

2. Check every construct pair for implication. Each construct is turned
   so that the self rating lies on its left pole, i.e. constructs with
   the self rated above the midpoint are reversed. The correlation of
   the oriented rows must reach ``r_min`` (default .35) and the pair
   must combine one congruent and one discrepant construct.

   Orientation decision table, keyed on the side of the self ratings:

       self[c1]  self[c2]   orientation     correlation used
          +         +       SAME_ABOVE      r (both reversed)
          -         -       SAME_BELOW      r
          +         -       INVERT_FIRST    r(rev(c1), c2)
          -         +       INVERT_SECOND   r(c1, rev(c2))
          0       any       UNORIENTED      pair not evaluated

   A reversed rating is scale_max - rating + 1; inverted constructs are
   shown that way in the report. For inverted pairs the correlation
   excluding self and ideal is not available and reported as None.

References:
    Feixas, G., & Saul, L. A. (2004). The Multi-Center Dilemma Project.
    The Spanish Journal of Psychology, 7(1), 69-78.

    Grice, J. W. (2008). Idiogrid: Idiographic Analysis with Repertory
    Grids (Version 2.4). Oklahoma State University.
"""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from gridmeasures.core.config import default_dilemma_criteria
from gridmeasures.core.exceptions import InsufficientDataError, InvalidInputError, UnsupportedModeError
from gridmeasures.core.grid import GridAccessor, element_names, trim_label
from gridmeasures.core.types import (
    ClassificationMode,
    ConstructClassification,
    ConstructType,
    CorrelationDistribution,
    DilemmaCandidate,
    DilemmaPair,
    DilemmaResult,
    PairOrientation,
)
from gridmeasures.core.validators import (
    assert_valid_grid,
    check_element_index,
    require_constructs,
    require_elements,
)
from gridmeasures.matrices.correlation import construct_correlation, correlate

logger = logging.getLogger(__name__)

_ORIENTATION: Dict[Tuple[int, int], PairOrientation] = {
    (1, 1):   PairOrientation.SAME_ABOVE,
    (-1, -1): PairOrientation.SAME_BELOW,
    (1, -1):  PairOrientation.INVERT_FIRST,
    (-1, 1):  PairOrientation.INVERT_SECOND,
}

# constructs reversed for each orientation: (c1, c2)
_REVERSED: Dict[PairOrientation, Tuple[bool, bool]] = {
    PairOrientation.SAME_ABOVE:    (True, True),
    PairOrientation.SAME_BELOW:    (False, False),
    PairOrientation.INVERT_FIRST:  (True, False),
    PairOrientation.INVERT_SECOND: (False, True),
    PairOrientation.UNORIENTED:    (False, False),
}


def _sign(value: float) -> int:
    return int(value > 0) - int(value < 0)


def reverse_ratings(values, scale_max: float) -> np.ndarray:
    """Ratings of an inverted construct: ``scale_max - rating + 1``."""
    return scale_max - np.asarray(values, dtype=float) + 1


def resolve_mode(mode: Union[int, ClassificationMode]) -> ClassificationMode:
    """Map a mode selector to ``ClassificationMode`` or raise."""
    supported = [m.value for m in ClassificationMode]
    if isinstance(mode, bool) or mode not in supported:
        raise UnsupportedModeError(
            f"No differentiation method for mode {mode!r}; use one of {supported}",
            mode=mode,
            supported=supported,
        )
    return ClassificationMode(mode)


def pair_orientation(self_c1: float, self_c2: float, midpoint: float) -> PairOrientation:
    """Orientation of a construct pair from the self ratings' sides."""
    key = (_sign(self_c1 - midpoint), _sign(self_c2 - midpoint))
    return _ORIENTATION.get(key, PairOrientation.UNORIENTED)


def classify_construct(
    self_rating: float,
    ideal_rating: float,
    midpoint: float,
    mode: ClassificationMode = ClassificationMode.DIFFERENCE,
    diff_congruent: Optional[float] = None,
    diff_discrepant: Optional[float] = None,
) -> ConstructType:
    """A priori type of one construct.

    In difference mode a construct meeting both thresholds counts as
    discrepant.
    """
    if mode == ClassificationMode.DIFFERENCE:
        diff = abs(self_rating - ideal_rating)
        if diff >= diff_discrepant:
            return ConstructType.DISCREPANT
        oriented = self_rating != midpoint and ideal_rating != midpoint
        if oriented and diff <= diff_congruent:
            return ConstructType.CONGRUENT
        return ConstructType.NEITHER

    side_self = _sign(self_rating - midpoint)
    side_ideal = _sign(ideal_rating - midpoint)
    if side_self == 0 or side_ideal == 0:
        return ConstructType.NEITHER
    if side_self == side_ideal:
        return ConstructType.CONGRUENT
    return ConstructType.DISCREPANT


def _excluding_correlation(grid: GridAccessor, self_index: int, ideal_index: int, required: bool):
    """Construct correlations without self and ideal (NaN if too few elements)."""
    remaining = grid.element_count() - 2
    if remaining >= 2:
        return construct_correlation(grid.subgrid([self_index, ideal_index]))
    if required:
        raise InsufficientDataError(
            "Correlations excluding self and ideal need at least 2 other elements",
            required=4,
            actual=grid.element_count(),
            context={"index": "dilemma"},
        )
    logger.warning("dilemma: too few elements to correlate without self and ideal")
    n = grid.construct_count()
    return np.full((n, n), np.nan)


def _pair_correlation(
    ratings: np.ndarray,
    reversed_r: np.ndarray,
    c1: int,
    c2: int,
    orientation: PairOrientation,
    rc_include: np.ndarray,
    rc_exclude: np.ndarray,
) -> Tuple[float, Optional[float]]:
    """(r including self/ideal, r excluding self/ideal or None)."""
    if orientation == PairOrientation.INVERT_FIRST:
        return correlate(reversed_r[c1], ratings[c2]), None
    if orientation == PairOrientation.INVERT_SECOND:
        return correlate(ratings[c1], reversed_r[c2]), None
    return float(rc_include[c1, c2]), float(rc_exclude[c1, c2])


def dilemma(
    grid: GridAccessor,
    self_index: int = 0,
    ideal_index: int = -1,
    mode: Union[int, ClassificationMode] = ClassificationMode.DIFFERENCE,
    diff_congruent: Optional[float] = None,
    diff_discrepant: Optional[float] = None,
    r_min: float = 0.35,
    exclude: bool = False,
    trim: Optional[int] = 20,
    index: bool = True,
) -> DilemmaResult:
    """Detect implicative dilemmas between self and ideal self.

    Args:
        grid:            Grid to analyse.
        self_index:      0-based index of the self element (default first).
        ideal_index:     0-based index of the ideal self (default last).
        mode:            1 = score difference, 0 = midpoint criterion.
        diff_congruent:  Max. self–ideal difference for congruent (mode 1).
        diff_discrepant: Min. self–ideal difference for discrepant (mode 1).
        r_min:           Minimal correlation indicating implication.
        exclude:         Use correlations computed without self and ideal
                         as the criterion.
        trim:            Label length (None = untrimmed).
        index:           Prefix construct labels with their number.
    """
    mode = resolve_mode(mode)
    assert_valid_grid(grid)
    nc = require_constructs(grid, 2, "dilemma")
    require_elements(grid, 2, "dilemma")
    self_index = check_element_index(grid, self_index, "self")
    ideal_index = check_element_index(grid, ideal_index, "ideal")
    if self_index == ideal_index:
        raise InvalidInputError(
            "Self and ideal self must be different elements",
            context={"self": self_index, "ideal": ideal_index},
        )

    scale_min, scale_max = grid.scale_bounds()
    midpoint = (scale_min + scale_max) / 2
    if mode == ClassificationMode.DIFFERENCE:
        auto_congruent, auto_discrepant = default_dilemma_criteria(scale_min, scale_max)
        diff_congruent = auto_congruent if diff_congruent is None else diff_congruent
        diff_discrepant = auto_discrepant if diff_discrepant is None else diff_discrepant

    ratings = grid.rating_matrix()
    reversed_r = reverse_ratings(ratings, scale_max)
    self_r = ratings[:, self_index]
    ideal_r = ratings[:, ideal_index]

    types = [
        classify_construct(self_r[c], ideal_r[c], midpoint, mode, diff_congruent, diff_discrepant)
        for c in range(nc)
    ]

    rc_include = construct_correlation(grid)
    rc_exclude = _excluding_correlation(grid, self_index, ideal_index, required=exclude)
    rc_use = rc_exclude if exclude else rc_include

    # ─── pairs ────────────────────────────────────────────────────
    pairs = []
    reversed_construct = [False] * nc
    for c1, c2 in itertools.combinations(range(nc), 2):
        orientation = pair_orientation(self_r[c1], self_r[c2], midpoint)
        rev1, rev2 = _REVERSED[orientation]
        reversed_construct[c1] |= rev1
        reversed_construct[c2] |= rev2

        r_inc, r_exc = _pair_correlation(
            ratings, reversed_r, c1, c2, orientation, rc_include, rc_exclude
        )
        if orientation == PairOrientation.UNORIENTED:
            exceeds = opposed = None
        else:
            cross = orientation in (PairOrientation.INVERT_FIRST, PairOrientation.INVERT_SECOND)
            criterion = r_inc if cross else float(rc_use[c1, c2])
            exceeds = bool(criterion >= r_min)
            opposed = {types[c1], types[c2]} == {ConstructType.CONGRUENT, ConstructType.DISCREPANT}
        pairs.append((c1, c2, orientation, r_inc, r_exc, exceeds, opposed))

    # ─── pole relabelling ─────────────────────────────────────────
    names = []
    for c, (left, right) in enumerate(grid.construct_labels()):
        if reversed_construct[c]:
            left, right = right, left
        label = trim_label(f"{left} - {right}", trim)
        names.append(f"({c + 1}) {label}" if index else label)

    classifications = [
        ConstructClassification(
            index=c,
            name=names[c],
            type=types[c],
            self_rating=float(reversed_r[c, self_index] if reversed_construct[c] else self_r[c]),
            ideal_rating=float(reversed_r[c, ideal_index] if reversed_construct[c] else ideal_r[c]),
            inverted=reversed_construct[c],
        )
        for c in range(nc)
    ]

    candidates = [
        DilemmaCandidate(
            c1=c1,
            c2=c2,
            r_include=r_inc,
            r_exclude=r_exc,
            exceeds_r_min=exceeds,
            type_c1=types[c1],
            type_c2=types[c2],
            opposed_types=opposed,
            name_c1=names[c1],
            name_c2=names[c2],
            orientation=orientation,
        )
        for c1, c2, orientation, r_inc, r_exc, exceeds, opposed in pairs
    ]

    dilemmas = []
    for cand in candidates:
        if not cand.is_dilemma:
            continue
        if cand.type_c1 == ConstructType.DISCREPANT:
            congruent, discrepant = cand.c2, cand.c1
        else:
            congruent, discrepant = cand.c1, cand.c2
        dilemmas.append(DilemmaPair(
            congruent=congruent,
            discrepant=discrepant,
            congruent_name=names[congruent],
            discrepant_name=names[discrepant],
            r_total=cand.r_include,
            r_excluding=cand.r_exclude,
        ))

    enames = element_names(grid, trim=trim, index=True)
    logger.debug(
        f"dilemma: {nc} constructs, mode={int(mode)}, "
        f"{sum(t == ConstructType.CONGRUENT for t in types)} congruent, "
        f"{sum(t == ConstructType.DISCREPANT for t in types)} discrepant, "
        f"{len(dilemmas)} dilemmas"
    )
    return DilemmaResult(
        self_index=self_index,
        ideal_index=ideal_index,
        self_name=enames[self_index],
        ideal_name=enames[ideal_index],
        mode=mode,
        diff_congruent=diff_congruent,
        diff_discrepant=diff_discrepant,
        r_min=r_min,
        exclude=exclude,
        midpoint=midpoint,
        classifications=classifications,
        candidates=candidates,
        dilemmas=dilemmas,
    )


def correlation_distribution(
    grid: GridAccessor,
    self_index: int = 0,
    ideal_index: int = -1,
    probs: Sequence[float] = (0.2, 0.4, 0.6, 0.8, 0.9),
) -> CorrelationDistribution:
    """Quantiles of the absolute construct correlations, including and
    excluding self and ideal, to help choose ``r_min``."""
    assert_valid_grid(grid)
    require_constructs(grid, 2, "correlation distribution")
    self_index = check_element_index(grid, self_index, "self")
    ideal_index = check_element_index(grid, ideal_index, "ideal")

    lower = np.tril_indices(grid.construct_count(), k=-1)
    including = np.abs(construct_correlation(grid)[lower])
    excluding = np.abs(
        _excluding_correlation(grid, self_index, ideal_index, required=True)[lower]
    )

    def quantiles(values: np.ndarray) -> List[float]:
        if np.all(np.isnan(values)):
            return [float("nan")] * len(probs)
        return np.nanquantile(values, list(probs)).tolist()

    return CorrelationDistribution(
        probs=list(probs),
        including=quantiles(including),
        excluding=quantiles(excluding),
    )
