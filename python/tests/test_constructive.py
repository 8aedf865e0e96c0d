"""Greedy constructive solver.

Every returned move list is replayed through the real board engine to
verify legality and the reported end state.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import BoardGenerator
from backend.engine.gameplay import replay
from backend.engine.gamesolver.constructive import construct
from backend.models.board import Board, Direction


def _target_3x3() -> Board:
    return Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 8, 0])


def _shifted(board: Board, moves: list[Direction]) -> Board:
    moved = board.copy()
    for d in moves:
        assert moved.move_empty(d)
    return moved


def _assert_complete(board: Board, target: Board) -> list[Direction]:
    built = construct(board, target)
    reached = replay(board, built.moves)
    assert reached is not None, "construction produced an illegal move"
    assert reached == built.board
    assert built.complete
    assert reached == target
    return built.moves


# -- trivial targets ----------------------------------------------------------


def test_already_at_target_needs_no_moves() -> None:
    target = _target_3x3()
    built = construct(target.copy(), target)
    assert built.complete
    assert built.moves == []


def test_single_move_away() -> None:
    target = BoardGenerator.solved(5, random.Random(3))
    board = _shifted(target, [Direction.LEFT])
    built = construct(board, target)
    assert built.complete
    assert built.moves == [Direction.RIGHT]


def test_final_block_rotation() -> None:
    target = _target_3x3()
    board = _shifted(target, [Direction.UP, Direction.LEFT])
    built = construct(board, target)
    assert built.complete
    assert replay(board, built.moves) == target


# -- full constructions -------------------------------------------------------


def test_rebuilds_shifted_row() -> None:
    target = _target_3x3()
    board = _shifted(
        target, [Direction.UP, Direction.UP, Direction.LEFT, Direction.LEFT]
    )
    assert board.to_hex_rows() == ["012", "453", "786"]
    built = construct(board, target)
    assert built.complete
    assert replay(board, built.moves) == target


@pytest.mark.parametrize("seed", range(6))
def test_distinct_tiles_3x3(seed: int) -> None:
    rng = random.Random(seed)
    target = _target_3x3()
    board = target.copy()
    BoardGenerator.scramble(board, 60, rng)
    _assert_complete(board, target)


@pytest.mark.parametrize("seed", range(4))
def test_distinct_tiles_4x4(seed: int) -> None:
    rng = random.Random(100 + seed)
    target = Board.from_flat(4, list(range(1, 16)) + [0])
    board = target.copy()
    BoardGenerator.scramble(board, 200, rng)
    _assert_complete(board, target)


@pytest.mark.parametrize("size", [4, 6, 8])
def test_generated_boards(size: int) -> None:
    rng = random.Random(size)
    target = BoardGenerator.solved(size, rng)
    board = target.copy()
    BoardGenerator.scramble(board, size ** 3, rng)
    moves = _assert_complete(board, target)
    assert len(moves) < 20 * size ** 3


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("size", [4, 5, 6])
def test_scrambled_trees_always_complete(size: int, seed: int) -> None:
    rng = random.Random(1000 * size + seed)
    target = BoardGenerator.solved(size, rng)
    board = target.copy()
    BoardGenerator.scramble(board, size ** 3, rng)
    _assert_complete(board, target)


# -- final block parity -------------------------------------------------------


def test_identical_tiles_fix_final_block_parity() -> None:
    # 7 and 8 trade places; only swapping the two 1s as well makes it reachable
    board = Board.from_flat(3, [1, 1, 3, 4, 5, 6, 7, 8, 0])
    target = Board.from_flat(3, [1, 1, 3, 4, 5, 6, 8, 7, 0])
    _assert_complete(board, target)


def test_distinct_tiles_with_odd_parity_stay_incomplete() -> None:
    board = _target_3x3()
    target = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 8, 7, 0])
    built = construct(board, target)
    assert not built.complete
    assert replay(board, built.moves) == built.board
    outside = [0, 1, 2, 3, 6]
    assert [built.board.cells[i] for i in outside] == [target.cells[i] for i in outside]


# -- preconditions ------------------------------------------------------------


def test_rejects_different_tiles() -> None:
    board = _target_3x3()
    target = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 7, 0])
    with pytest.raises(ValueError):
        construct(board, target)


def test_rejects_target_empty_outside_final_block() -> None:
    board = _target_3x3()
    target = Board.from_flat(3, [0, 2, 3, 4, 5, 6, 7, 8, 1])
    with pytest.raises(ValueError):
        construct(board, target)
