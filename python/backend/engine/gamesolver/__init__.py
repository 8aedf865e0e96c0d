from backend.engine.gamesolver.annealing import (
    MoveSearch,
    TwoStageSearch,
    anneal_moves,
    anneal_target,
)
from backend.engine.gamesolver.beam import BeamSearch
from backend.engine.gamesolver.constructive import Construction, construct
from backend.engine.gamesolver.solver import Solver, Strategy

__all__ = [
    "BeamSearch",
    "Construction",
    "MoveSearch",
    "Solver",
    "Strategy",
    "TwoStageSearch",
    "anneal_moves",
    "anneal_target",
    "construct",
]
