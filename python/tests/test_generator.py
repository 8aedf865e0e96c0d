"""Random problem generation."""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import BoardGenerator
from backend.engine.scoring import is_perfect, largest_tree


@pytest.mark.parametrize("size", [2, 3, 6, 10])
def test_solved_board_is_spanning_tree(size: int) -> None:
    board = BoardGenerator.solved(size, random.Random(size))
    assert board.empty_pos == (size - 1, size - 1)
    assert board.cells.count(0) == 1
    assert largest_tree(board) == size * size - 1
    assert is_perfect(board)


def test_scramble_keeps_tiles() -> None:
    rng = random.Random(1)
    board = BoardGenerator.solved(5, rng)
    tiles = sorted(board.cells)
    BoardGenerator.scramble(board, 200, rng)
    assert sorted(board.cells) == tiles
    assert board.get(*board.empty_pos) == 0


def test_generate_defaults() -> None:
    problem = BoardGenerator.generate(4, random.Random(2))
    assert problem.max_moves == 2 * 4 ** 3
    assert problem.size == 4


def test_generate_is_reproducible() -> None:
    a = BoardGenerator.generate(6, random.Random(9))
    b = BoardGenerator.generate(6, random.Random(9))
    assert a.board == b.board
