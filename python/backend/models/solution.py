"""Search result: a move sequence and the board it leads to."""

from __future__ import annotations

from dataclasses import dataclass, field

from backend.models.board import Board, Direction


@dataclass
class Solution:
    moves: list[Direction]
    board: Board
    score: float
    strategy: str = ""
    stats: dict[str, int] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.moves)

    def to_string(self) -> str:
        return "".join(m.value for m in self.moves)
