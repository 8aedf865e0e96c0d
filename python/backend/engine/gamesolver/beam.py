"""Randomised beam search over boards reachable by legal moves."""

from __future__ import annotations

import heapq
import logging
import random

from backend.engine.scoring import dangling_connectors, score
from backend.engine.timing import Deadline
from backend.models.board import DIRECTIONS, Board, Direction
from backend.models.config import SearchConfig
from backend.models.problem import Problem
from backend.models.solution import Solution

logger = logging.getLogger(__name__)

State = tuple[int, ...]
# state -> (move that first reached it, previous state); the root maps to None
Record = dict[State, tuple[Direction, State] | None]


class BeamSearch:
    """Keeps the best ``beam_width`` new states at each depth.

    A state is expanded at most once: the first time it is reached
    decides its recorded predecessor.  Priorities carry random jitter to
    break ties.
    """

    def __init__(self, config: SearchConfig) -> None:
        self.config = config
        self.record: Record = {}

    def run(
        self,
        problem: Problem,
        rng: random.Random | None = None,
        deadline: Deadline | None = None,
    ) -> Solution:
        config = self.config
        rng = rng if rng is not None else config.make_rng()
        deadline = deadline if deadline is not None else Deadline(config.time_limit)
        max_moves = problem.max_moves
        width = config.beam_width(problem.size)

        root = problem.board.copy()
        record: Record = {root.key(): None}
        self.record = record
        best_board = root
        best_score = score(root, 0, max_moves)

        beam = [root]
        # last fully expanded level
        depth = 0
        while beam and depth < max_moves:
            level = depth + 1
            expired = False
            candidates: list[tuple[float, int, Board]] = []
            for node in beam:
                if deadline.expired():
                    expired = True
                    break
                parent = node.key()
                for direction in DIRECTIONS:
                    child = node.copy()
                    if not child.move_empty(direction):
                        continue
                    key = child.key()
                    if key in record:
                        continue
                    record[key] = (direction, parent)

                    value = score(child, level, max_moves)
                    if value > best_score:
                        best_score = value
                        best_board = child
                    priority = (
                        value
                        - config.boundary_penalty * dangling_connectors(child)
                        + rng.uniform(0.0, config.jitter)
                    )
                    candidates.append((priority, len(candidates), child))
            if expired:
                break
            depth = level
            beam = [child for _, _, child in heapq.nlargest(width, candidates)]

        moves = self.reconstruct(record, best_board.key())
        logger.info(
            "beam: score=%.1f moves=%d depth=%d visited=%d",
            best_score, len(moves), depth, len(record),
        )
        return Solution(
            moves=moves,
            board=best_board.copy(),
            score=best_score,
            strategy="beam",
            stats={"depth": depth, "visited": len(record), "width": width},
        )

    @staticmethod
    def reconstruct(record: Record, key: State) -> list[Direction]:
        """Walk predecessors from *key* back to the root."""
        moves: list[Direction] = []
        entry = record[key]
        while entry is not None:
            direction, key = entry
            moves.append(direction)
            entry = record[key]
        moves.reverse()
        return moves
