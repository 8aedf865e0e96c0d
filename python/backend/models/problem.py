"""Problem description: the initial board plus its move budget."""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.board import Board, BoardError


class ProblemError(BoardError):
    """Raised when the textual problem description is malformed."""


@dataclass
class Problem:
    board: Board
    max_moves: int

    @property
    def size(self) -> int:
        return self.board.size

    def to_text(self) -> str:
        """Render the problem in the same format :func:`parse_problem` reads."""
        lines = [f"{self.board.size} {self.max_moves}", *self.board.to_hex_rows()]
        return "\n".join(lines) + "\n"


def parse_problem(text: str) -> Problem:
    """Parse ``N T`` followed by N rows of N hex digits.

    Tokens may be separated by any whitespace.
    """
    tokens = text.split()
    if len(tokens) < 2:
        raise ProblemError("Expected a header with board size and move limit.")
    try:
        size = int(tokens[0])
        max_moves = int(tokens[1])
    except ValueError:
        raise ProblemError(
            f"Header must be two integers, got {tokens[0]!r} {tokens[1]!r}."
        ) from None
    if max_moves < 0:
        raise ProblemError(f"Move limit must not be negative, got {max_moves}.")

    rows = tokens[2:]
    if len(rows) != size:
        raise ProblemError(f"Expected {size} board rows, got {len(rows)}.")
    try:
        board = Board.from_hex_rows(rows)
    except BoardError as exc:
        raise ProblemError(str(exc)) from exc
    return Problem(board=board, max_moves=max_moves)
