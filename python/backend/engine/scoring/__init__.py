from backend.engine.scoring.disjoint_set import DisjointSet
from backend.engine.scoring.score import (
    MAX_SCORE,
    cycle_penalty,
    dangling_connectors,
    is_perfect,
    largest_tree,
    score,
)

__all__ = [
    "MAX_SCORE",
    "DisjointSet",
    "cycle_penalty",
    "dangling_connectors",
    "is_perfect",
    "largest_tree",
    "score",
]
