"""Generates random problems whose perfect tree is reachable."""

from __future__ import annotations

import random

from backend.engine.scoring.disjoint_set import DisjointSet
from backend.models.board import DIRECTIONS, Board
from backend.models.problem import Problem


class BoardGenerator:
    """Builds a random spanning tree, then shuffles it with legal moves."""

    @staticmethod
    def solved(size: int, rng: random.Random) -> Board:
        """Return a board whose connectors form a spanning tree.

        The tree covers every cell except the bottom-right one, which is
        left empty.
        """
        n = size
        blank = n * n - 1
        edges: list[tuple[int, int, int, int]] = []
        for i in range(n * n):
            if i == blank:
                continue
            r, c = divmod(i, n)
            if c + 1 < n and i + 1 != blank:
                edges.append((i, i + 1, 4, 1))
            if r + 1 < n and i + n != blank:
                edges.append((i, i + n, 8, 2))
        rng.shuffle(edges)

        cells = [0] * (n * n)
        dsu = DisjointSet(n * n)
        for a, b, bit_a, bit_b in edges:
            if dsu.union(a, b):
                cells[a] |= bit_a
                cells[b] |= bit_b
        return Board(size=n, cells=cells, empty_pos=(n - 1, n - 1))

    @staticmethod
    def scramble(board: Board, num_moves: int, rng: random.Random) -> None:
        """Scramble *board* in-place using random legal moves."""
        prev = None
        for _ in range(num_moves):
            options = [
                d for d in DIRECTIONS
                if board.in_bounds(
                    board.empty_pos[0] + d.delta[0],
                    board.empty_pos[1] + d.delta[1],
                )
            ]
            if prev is not None and prev.opposite in options and len(options) > 1:
                options.remove(prev.opposite)
            direction = rng.choice(options)
            board.move_empty(direction)
            prev = direction

    @staticmethod
    def generate(
        size: int,
        rng: random.Random,
        max_moves: int | None = None,
        shuffles: int | None = None,
    ) -> Problem:
        """Return a random problem of the given size.

        ``max_moves`` defaults to ``2·N³`` and ``shuffles`` to ``N³``.
        """
        if max_moves is None:
            max_moves = 2 * size ** 3
        if shuffles is None:
            shuffles = size ** 3
        board = BoardGenerator.solved(size, rng)
        BoardGenerator.scramble(board, shuffles, rng)
        return Problem(board=board, max_moves=max_moves)
