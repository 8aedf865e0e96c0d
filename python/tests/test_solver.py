"""Solver facade — end-to-end runs of every strategy.

Every test is hard-killed by ``pytest-timeout`` (configured in
``pyproject.toml``).  Returned move lists are replayed through the real
board engine to verify legality and the reported result.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import BoardGenerator
from backend.engine.gameplay import Replay
from backend.engine.gamesolver import Solver, Strategy
from backend.engine.scoring import largest_tree, score
from backend.models.board import Direction
from backend.models.config import SearchConfig
from backend.models.problem import Problem, parse_problem

_CONFIG = SearchConfig(seed=0, time_limit=0.8)

_PROBLEMS = [
    pytest.param(BoardGenerator.generate(size, random.Random(seed)), id=f"{size}x{size}-{seed}")
    for size, seed in ((3, 0), (4, 1), (6, 2))
]


# -- helpers ------------------------------------------------------------------


def _assert_solution(problem: Problem, strategy: Strategy) -> None:
    solution = Solver.solve(problem, strategy, _CONFIG)

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(solution.moves, list)
    assert all(isinstance(m, Direction) for m in solution.moves)
    assert len(solution.moves) <= problem.max_moves

    # ---- replay via the real engine and compare -----------------------------
    game = Replay(problem.board)
    for i, direction in enumerate(solution.moves):
        ok = game.move(direction)
        assert ok, (
            f"Move {i} ({direction.value}) was invalid at empty "
            f"{game.board.empty_pos}"
        )
    assert game.board == solution.board
    assert solution.score >= score(problem.board, 0, problem.max_moves)


# -- tests --------------------------------------------------------------------


@pytest.mark.parametrize("problem", _PROBLEMS)
def test_solve_annealing(problem: Problem) -> None:
    _assert_solution(problem, Strategy.ANNEALING)


@pytest.mark.parametrize("problem", _PROBLEMS)
def test_solve_beam(problem: Problem) -> None:
    _assert_solution(problem, Strategy.BEAM)


@pytest.mark.parametrize("problem", _PROBLEMS)
def test_solve_moves(problem: Problem) -> None:
    _assert_solution(problem, Strategy.MOVES)


def test_moves_strategy_starts_from_empty_sequence() -> None:
    problem = parse_problem("3 10\ncd9\naa2\n220\n")
    solution = Solver.solve(problem, Strategy.MOVES, SearchConfig(time_limit=0.3))
    assert solution.strategy == "moves"
    # already perfect: any move would lower the score
    assert solution.moves == []
    assert solution.board == problem.board


def test_target_keeps_tiles() -> None:
    problem = parse_problem("3 10\ncd9\naa2\n220\n")
    board = Solver.target(problem, _CONFIG)
    assert sorted(board.cells) == sorted(problem.board.cells)
    assert largest_tree(board) == 8


def test_default_strategy_is_annealing() -> None:
    problem = BoardGenerator.generate(3, random.Random(4))
    solution = Solver.solve(problem, config=SearchConfig(time_limit=0.3))
    assert solution.strategy == "annealing"
