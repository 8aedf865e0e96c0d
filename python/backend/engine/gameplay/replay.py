"""Replaying move sequences against a board."""

from __future__ import annotations

from collections.abc import Iterable

from backend.models.board import Board, Direction


class Replay:
    """Applies moves to a private copy of a board and counts them."""

    def __init__(self, board: Board) -> None:
        self.board = board.copy()
        self.moves: int = 0

    def move(self, direction: Direction) -> bool:
        """Slide the empty slot; returns False if the move is illegal."""
        if not self.board.move_empty(direction):
            return False
        self.moves += 1
        return True

    def play(self, moves: Iterable[Direction]) -> bool:
        """Apply *moves* in order, stopping at the first illegal one."""
        for direction in moves:
            if not self.move(direction):
                return False
        return True


def replay(board: Board, moves: Iterable[Direction]) -> Board | None:
    """Return the board reached by *moves*, or None if any move is illegal.

    *board* itself is never modified.
    """
    game = Replay(board)
    if not game.play(moves):
        return None
    return game.board
