"""
gridmeasures/indices/conflict.py
================================
Conflict measures based on triads of construct correlations.

Every combination of three constructs {A, B, C} forms a triad of
correlations r(A,B), r(A,C), r(B,C), Fisher z-transformed.

Slade & Sheehan (1979) — ``conflict_correlation``
    Following Lauterbach's (1975) use of balance theory (Heider, 1958),
    a triad is balanced iff the product of its three z-values is
    positive:

        r(A,B)  r(A,C)  r(B,C)   triad
          +       +       +      balanced
          +       +       -      imbalanced
          +       -       +      imbalanced
          +       -       -      balanced
          -       +       +      imbalanced
          -       +       -      balanced
          -       -       +      balanced
          -       -       -      imbalanced

    Winter (1982) showed this to be flawed: near-zero correlations flip
    sign by chance alone.

Bassler et al. (1992) — ``conflict_bassler``
    Order the z-values by absolute magnitude, z_max ≥ z_mdn ≥ z_min.
        z_max·z_mdn > 0:  balanced iff z_max·z_mdn - z_min ≤ crit
        otherwise:        balanced iff z_min - z_max·z_mdn ≤ crit
    ``crit`` (default 0.03) is a sensitivity band; larger values mark
    fewer triads as imbalanced.

Triads with undefined correlations never compare as balanced, so
balanced + imbalanced = C(nc, 3) always holds. Triads are reduced in
independent chunks; the counts do not depend on the chunk size.

References:
    Bassler, M., Krauthauser, H., & Hoffmann, S. O. (1992). A new approach
    to the identification of cognitive conflicts in the repertory grid.
    Journal of Constructivist Psychology, 5(1), 95-111.

    Slade, P. D., & Sheehan, M. J. (1979). The measurement of 'conflict'
    in repertory grids. British Journal of Psychology, 70(4), 519-524.
"""

from __future__ import annotations

import itertools
import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from gridmeasures.core.exceptions import InvalidInputError
from gridmeasures.core.grid import GridAccessor
from gridmeasures.core.types import ConflictTriadResult
from gridmeasures.core.validators import assert_valid_grid, require_constructs
from gridmeasures.matrices.correlation import construct_correlation, fisher_z

logger = logging.getLogger(__name__)

Triad = Tuple[int, int, int]


# ─── TRIAD CLASSIFIERS ────────────────────────────────────────────

def is_balanced_sign(z_values: Sequence[float]) -> bool:
    """Slade & Sheehan: balanced iff the product of the z-values is positive."""
    z1, z2, z3 = z_values
    return bool(z1 * z2 * z3 > 0)


def is_balanced_bassler(z_values: Sequence[float], crit: float = 0.03) -> bool:
    """Bassler et al.: magnitude-aware balance test with sensitivity ``crit``."""
    z_max, z_mdn, z_min = sorted(z_values, key=abs, reverse=True)
    z_12 = z_max * z_mdn
    if z_12 > 0:
        return bool(z_12 - z_min <= crit)
    return bool(z_min - z_12 <= crit)


# ─── ENUMERATION ──────────────────────────────────────────────────

def iter_triads(n_constructs: int) -> Iterator[Triad]:
    """All C(n, 3) construct triads in lexicographic order."""
    return itertools.combinations(range(n_constructs), 3)


def triad_z_values(z: np.ndarray, triad: Triad) -> Tuple[float, float, float]:
    """z-values of a triad in the order (A,B), (A,C), (B,C)."""
    a, b, c = triad
    return float(z[a, b]), float(z[a, c]), float(z[b, c])


def _chunks(items: Iterable[Triad], size: Optional[int]) -> Iterator[List[Triad]]:
    iterator = iter(items)
    while True:
        chunk = list(itertools.islice(iterator, size)) if size else list(iterator)
        if not chunk:
            return
        yield chunk


def _reduce_chunk(
    z: np.ndarray,
    triads: Sequence[Triad],
    balanced: Callable[[Sequence[float]], bool],
) -> Tuple[int, List[Triad]]:
    """Classify one chunk: (number of triads, imbalanced triads)."""
    imbalanced = [t for t in triads if not balanced(triad_z_values(z, t))]
    return len(triads), imbalanced


def _count_triads(
    grid: GridAccessor,
    balanced: Callable[[Sequence[float]], bool],
    chunk_size: Optional[int],
    name: str,
) -> Tuple[int, List[Triad]]:
    assert_valid_grid(grid)
    nc = require_constructs(grid, 3, name)
    if chunk_size is not None and chunk_size < 1:
        raise InvalidInputError(
            f"chunk_size must be a positive integer, got {chunk_size}",
            context={"chunk_size": chunk_size},
        )
    z = fisher_z(construct_correlation(grid))

    total = 0
    imbalanced: List[Triad] = []
    for chunk in _chunks(iter_triads(nc), chunk_size):
        n, imb = _reduce_chunk(z, chunk, balanced)
        total += n
        imbalanced.extend(imb)
    return total, imbalanced


# ─── PUBLIC API ───────────────────────────────────────────────────

def conflict_correlation(
    grid: GridAccessor,
    chunk_size: Optional[int] = None,
) -> ConflictTriadResult:
    """Conflict measure of Slade & Sheehan (1979)."""
    total, imbalanced = _count_triads(grid, is_balanced_sign, chunk_size, "conflict1")
    logger.debug(f"conflict1: {len(imbalanced)}/{total} triads imbalanced")
    return ConflictTriadResult(method="conflict1", total=total, imbalanced=len(imbalanced))


def conflict_bassler(
    grid: GridAccessor,
    crit: float = 0.03,
    chunk_size: Optional[int] = None,
) -> ConflictTriadResult:
    """Conflict measure of Bassler et al. (1992), listing imbalanced triads."""
    total, imbalanced = _count_triads(
        grid,
        lambda zs: is_balanced_bassler(zs, crit),
        chunk_size,
        "conflict2",
    )
    logger.debug(f"conflict2: {len(imbalanced)}/{total} triads imbalanced (crit={crit})")
    return ConflictTriadResult(
        method="conflict2",
        total=total,
        imbalanced=len(imbalanced),
        imbalanced_triads=imbalanced,
        crit=crit,
    )
