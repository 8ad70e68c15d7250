"""
gridmeasures/core/grid.py
=========================
The repertory grid as seen by the index engine.

The engine only talks to a grid through the read-only ``GridAccessor``
protocol. ``RepGrid`` is the in-memory implementation shipped with the
package: a (constructs × elements) rating matrix, uniform scale bounds,
bipolar construct labels and element names.

Layout:
    rows    = constructs   (bipolar dimensions, e.g. "warm - cold")
    columns = elements     (people / objects being rated)

Every method returns fresh objects; a grid is never mutated once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np

from gridmeasures.core.exceptions import InvalidInputError


def trim_label(label: str, trim: Optional[int] = None) -> str:
    """Cut ``label`` to ``trim`` characters. ``None`` keeps it whole."""
    if trim is None or trim <= 0:
        return label
    return label[:trim]


def construct_names(grid: "GridAccessor", trim: Optional[int] = None, index: bool = False) -> List[str]:
    """Construct labels as ``"left - right"`` trimmed to ``trim`` characters,
    optionally prefixed by the 1-based construct number."""
    names = []
    for i, (left, right) in enumerate(grid.construct_labels(), 1):
        label = trim_label(f"{left} - {right}", trim)
        names.append(f"({i}) {label}" if index else label)
    return names


def element_names(grid: "GridAccessor", trim: Optional[int] = None, index: bool = False) -> List[str]:
    """Element names trimmed to ``trim`` characters, optionally numbered."""
    names = []
    for i, name in enumerate(grid.element_labels(trim), 1):
        names.append(f"({i}) {name}" if index else name)
    return names



@runtime_checkable
class GridAccessor(Protocol):
    """Read-only contract every grid handed to an index must satisfy."""

    def rating_matrix(self) -> np.ndarray: ...

    def scale_bounds(self) -> Tuple[float, float]: ...

    def construct_count(self) -> int: ...

    def element_count(self) -> int: ...

    def construct_labels(self, trim: Optional[int] = None) -> List[Tuple[str, str]]: ...

    def element_labels(self, trim: Optional[int] = None) -> List[str]: ...

    def subgrid(self, excluded_element_indices: Sequence[int]) -> "GridAccessor": ...


@dataclass(frozen=True)
class Construct:
    """A bipolar construct, e.g. Construct("warm", "cold")."""
    left:  str
    right: str

    def label(self, trim: Optional[int] = None) -> str:
        return trim_label(f"{self.left} - {self.right}", trim)

    def reversed(self) -> "Construct":
        return Construct(left=self.right, right=self.left)

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True, eq=False)
class RepGrid:
    """In-memory repertory grid implementing ``GridAccessor``.

    Example:
        grid = RepGrid.from_lists(
            ratings=[[1, 5, 7], [2, 2, 6]],
            constructs=[("warm", "cold"), ("calm", "tense")],
            elements=["self", "mother", "ideal self"],
            scale=(1, 7),
        )
    """
    ratings:    np.ndarray
    scale_min:  float
    scale_max:  float
    constructs: Tuple[Construct, ...]
    elements:   Tuple[str, ...]

    def __post_init__(self):
        # Imported here: validators needs this module for type hints.
        from gridmeasures.core.validators import validate_rating_layout

        try:
            data = np.array(self.ratings, dtype=float)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"Ratings are not a numeric matrix: {exc}",
                context={"ratings_type": type(self.ratings).__name__},
            ) from exc
        data.setflags(write=False)
        object.__setattr__(self, "ratings", data)
        object.__setattr__(self, "constructs", tuple(self.constructs))
        object.__setattr__(self, "elements", tuple(str(e) for e in self.elements))

        errors = validate_rating_layout(
            data,
            self.scale_min,
            self.scale_max,
            n_constructs=len(self.constructs),
            n_elements=len(self.elements),
        )
        if errors:
            raise InvalidInputError(
                f"Invalid grid: {'; '.join(errors)}",
                context={"error_count": len(errors)},
            )

    # ─── CONSTRUCTION ──────────────────────────────────────────────

    @classmethod
    def from_lists(
        cls,
        ratings: Sequence[Sequence[float]],
        constructs: Sequence[Tuple[str, str]],
        elements: Sequence[str],
        scale: Tuple[float, float],
    ) -> "RepGrid":
        return cls(
            ratings=ratings,
            scale_min=float(scale[0]),
            scale_max=float(scale[1]),
            constructs=tuple(Construct(str(l), str(r)) for l, r in constructs),
            elements=tuple(elements),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RepGrid":
        """Build a grid from a plain mapping.

        Expected shape::

            {
              "scale": {"min": 1, "max": 7},
              "elements": ["self", "mother", "ideal self"],
              "constructs": [{"left": "warm", "right": "cold"}, ...]
                            or [["warm", "cold"], ...],
              "ratings": [[1, 5, 7], ...]
            }
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                "Grid data must be a mapping",
                context={"type": type(data).__name__},
            )
        missing = [k for k in ("scale", "elements", "constructs", "ratings") if k not in data]
        if missing:
            raise InvalidInputError(
                f"Grid data is missing keys: {missing}",
                context={"missing": missing},
            )
        scale = data["scale"]
        try:
            if isinstance(scale, Mapping):
                scale_min, scale_max = float(scale["min"]), float(scale["max"])
            else:
                scale_min, scale_max = float(scale[0]), float(scale[1])
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            raise InvalidInputError(
                f"Invalid scale specification: {scale!r}",
                context={"scale": repr(scale)},
            ) from exc

        constructs: List[Construct] = []
        for i, item in enumerate(data["constructs"]):
            if isinstance(item, Mapping):
                left, right = item.get("left"), item.get("right")
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                left, right = item
            else:
                left = right = None
            if left is None or right is None:
                raise InvalidInputError(
                    f"Construct {i + 1} needs a left and a right pole",
                    context={"construct": repr(item)},
                )
            constructs.append(Construct(str(left), str(right)))

        return cls(
            ratings=data["ratings"],
            scale_min=scale_min,
            scale_max=scale_max,
            constructs=tuple(constructs),
            elements=tuple(data["elements"]),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return plain dict suitable for ``json.dumps()``."""
        return {
            "scale":      {"min": self.scale_min, "max": self.scale_max},
            "elements":   list(self.elements),
            "constructs": [{"left": c.left, "right": c.right} for c in self.constructs],
            "ratings":    self.ratings.tolist(),
        }

    # ─── GridAccessor ──────────────────────────────────────────────

    def rating_matrix(self) -> np.ndarray:
        return np.array(self.ratings, dtype=float)

    def scale_bounds(self) -> Tuple[float, float]:
        return self.scale_min, self.scale_max

    def construct_count(self) -> int:
        return self.ratings.shape[0]

    def element_count(self) -> int:
        return self.ratings.shape[1]

    def construct_labels(self, trim: Optional[int] = None) -> List[Tuple[str, str]]:
        return [(trim_label(c.left, trim), trim_label(c.right, trim)) for c in self.constructs]

    def element_labels(self, trim: Optional[int] = None) -> List[str]:
        return [trim_label(e, trim) for e in self.elements]

    def subgrid(self, excluded_element_indices: Sequence[int]) -> "RepGrid":
        n = self.element_count()
        excluded = set()
        for idx in excluded_element_indices:
            if not -n <= idx < n:
                raise InvalidInputError(
                    f"Element index {idx} out of range for {n} elements",
                    context={"index": idx, "n_elements": n},
                )
            excluded.add(idx % n)
        keep = [j for j in range(n) if j not in excluded]
        return RepGrid(
            ratings=self.ratings[:, keep],
            scale_min=self.scale_min,
            scale_max=self.scale_max,
            constructs=self.constructs,
            elements=tuple(self.elements[j] for j in keep),
        )

    # ─── CONVENIENCE ───────────────────────────────────────────────

    @property
    def midpoint(self) -> float:
        return (self.scale_min + self.scale_max) / 2

    def reflect(self, values: np.ndarray) -> np.ndarray:
        """Reflect ratings within the scale (``min + max - rating``).

        Stays inside the scale for any lower bound; on a 1-based scale
        it equals the dilemma reversal ``max - rating + 1``.
        """
        return self.scale_min + self.scale_max - np.asarray(values, dtype=float)

    def invert_construct(self, index: int) -> "RepGrid":
        """New grid with construct ``index`` reversed: poles swapped and
        ratings reflected. Inverting twice restores the original grid."""
        n = self.construct_count()
        if not -n <= index < n:
            raise InvalidInputError(
                f"Construct index {index} out of range for {n} constructs",
                context={"index": index, "n_constructs": n},
            )
        index %= n
        ratings = self.rating_matrix()
        ratings[index] = self.reflect(ratings[index])
        constructs = list(self.constructs)
        constructs[index] = constructs[index].reversed()
        return RepGrid(
            ratings=ratings,
            scale_min=self.scale_min,
            scale_max=self.scale_max,
            constructs=tuple(constructs),
            elements=self.elements,
        )

    def __repr__(self) -> str:
        return (
            f"RepGrid({self.construct_count()} constructs × {self.element_count()} elements, "
            f"scale {self.scale_min:g}-{self.scale_max:g})"
        )
