"""Entry point tying the search strategies together."""

from __future__ import annotations

from enum import StrEnum

from backend.engine.gamesolver.annealing import MoveSearch, TwoStageSearch, anneal_target
from backend.engine.gamesolver.beam import BeamSearch
from backend.engine.timing import Deadline
from backend.models.board import Board
from backend.models.config import SearchConfig
from backend.models.problem import Problem
from backend.models.solution import Solution


class Strategy(StrEnum):
    ANNEALING = "annealing"
    BEAM = "beam"
    MOVES = "moves"


class Solver:
    """Stateless facade — all methods are static."""

    @staticmethod
    def solve(
        problem: Problem,
        strategy: Strategy = Strategy.ANNEALING,
        config: SearchConfig | None = None,
    ) -> Solution:
        """Return the best move sequence found within the time limit."""
        config = config if config is not None else SearchConfig()
        if strategy is Strategy.BEAM:
            return BeamSearch(config).run(problem)
        if strategy is Strategy.MOVES:
            return MoveSearch(config).run(problem)
        return TwoStageSearch(config).run(problem)

    @staticmethod
    def target(problem: Problem, config: SearchConfig | None = None) -> Board:
        """Return the best tile layout found, ignoring move legality."""
        config = config if config is not None else SearchConfig()
        return anneal_target(
            problem.board,
            config.make_rng(),
            config.target_schedule,
            Deadline(config.time_limit),
        )
