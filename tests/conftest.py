"""
tests/conftest.py
=================
Shared pytest fixtures for all gridmeasures tests.
"""

import pytest
from gridmeasures.core.grid import RepGrid


# ─── GRIDS ────────────────────────────────────────────────────────


@pytest.fixture
def dilemma_grid():
    """Client who wants to be socially skilled but sees skilled people as selfish.

    Scale 1-7 (midpoint 4), self = first element, ideal self = last.
    Construct 5 has the self on the midpoint.
    """
    return RepGrid.from_lists(
        ratings=[
            [2, 6, 5, 3, 6, 6],
            [2, 6, 5, 2, 7, 2],
            [5, 3, 2, 4, 3, 2],
            [6, 3, 4, 5, 2, 7],
            [4, 2, 5, 6, 3, 1],
        ],
        constructs=[
            ("timid", "socially skilled"),
            ("considerate", "selfish"),
            ("relaxed", "anxious"),
            ("lazy", "hard-working"),
            ("open", "closed"),
        ],
        elements=["self", "mother", "father", "friend", "partner", "ideal self"],
        scale=(1, 7),
    )


@pytest.fixture
def correlated_grid():
    """4 constructs × 6 elements; constructs 1-3 strongly related."""
    return RepGrid.from_lists(
        ratings=[
            [1, 3, 2, 6, 7, 5],
            [2, 3, 1, 7, 6, 6],
            [6, 5, 7, 2, 1, 3],
            [4, 2, 5, 3, 6, 4],
        ],
        constructs=[
            ("warm", "cold"),
            ("open", "reserved"),
            ("tense", "relaxed"),
            ("practical", "dreamy"),
        ],
        elements=["self", "mother", "father", "boss", "rival", "ideal self"],
        scale=(1, 7),
    )


@pytest.fixture
def cyclic_grid():
    """6 constructs × 10 elements, every row uses the whole 1-7 scale."""
    ratings = [[(3 * i + 5 * j) % 7 + 1 for j in range(10)] for i in range(6)]
    return RepGrid.from_lists(
        ratings=ratings,
        constructs=[(f"left {i}", f"right {i}") for i in range(1, 7)],
        elements=[f"element {j}" for j in range(1, 11)],
        scale=(1, 7),
    )


@pytest.fixture
def constant_row_grid():
    """Construct 2 has no variance."""
    return RepGrid.from_lists(
        ratings=[
            [1, 2, 4, 5],
            [3, 3, 3, 3],
            [5, 4, 2, 1],
        ],
        constructs=[("a", "b"), ("c", "d"), ("e", "f")],
        elements=["w", "x", "y", "z"],
        scale=(1, 5),
    )


@pytest.fixture
def triangle_grid():
    """2 constructs × 3 elements with a conflict in every triad."""
    return RepGrid.from_lists(
        ratings=[
            [7, 1, 1],
            [1, 1, 1],
        ],
        constructs=[("bold", "shy"), ("kind", "cruel")],
        elements=["self", "sister", "brother"],
        scale=(1, 7),
    )


@pytest.fixture
def grid_dict(dilemma_grid):
    return dilemma_grid.to_dict()
