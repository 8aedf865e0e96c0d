"""Greedy constructive solver — drives a board towards a target layout.

Row-by-row, then column-by-column placement:
  - Rows ``0..N-3``: each cell left to right, the last two of a row via
    a rotated staging position finished with ``L, D``.
  - Last two rows: column pairs, staged rotated and finished with
    ``U, R``.
  - Final 2×2: cycled (at most 12 moves) until it matches the target.
    When identical tiles were placed with the wrong parity, the whole
    construction is redone with two of them trading destinations.

Tiles are not unique, so every placement considers all unfixed tiles
carrying the wanted connector value, nearest first.  A tile is dragged
one step at a time: its own path is found with masked BFS, then the
empty slot is routed in front of it with the tile's cell locked.
Each attempt snapshots board, mask and move count and rolls back on
failure before the next candidate is tried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from backend.engine.pathfinding import shortest_path
from backend.engine.scoring import largest_tree
from backend.models.board import Board, Direction

logger = logging.getLogger(__name__)

_ROW_FINISH = (Direction.LEFT, Direction.DOWN)
_COL_FINISH = (Direction.UP, Direction.RIGHT)
_BLOCK_CYCLE = (Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT)

# Extra tries for a rotated pair after parking its second tile.
_PARK_ATTEMPTS = 3

Pos = tuple[int, int]


@dataclass
class Construction:
    moves: list[Direction]
    board: Board
    complete: bool


def construct(board: Board, target: Board) -> Construction:
    """Build a move sequence turning *board* into *target*.

    Aborts at the first unreachable placement; the moves produced so
    far are still returned, with ``complete`` set to False.

    Raises ValueError if the boards hold different tiles or if the
    target's empty slot is outside the bottom-right 2×2 block.
    """
    n = board.size
    if target.size != n or sorted(board.cells) != sorted(target.cells):
        raise ValueError("Target must be a permutation of the board's tiles.")
    er, ec = target.empty_pos
    if er < n - 2 or ec < n - 2:
        raise ValueError(
            f"Target empty slot {target.empty_pos} must lie in the "
            "bottom-right 2×2 block."
        )

    builder = _Builder(board, target)
    complete = builder.run()
    if not complete and builder.reached_block:
        complete, builder = _retry_with_other_copies(board, target, builder)
    logger.debug(
        "construction %s after %d moves",
        "complete" if complete else "aborted",
        len(builder.moves),
    )
    return Construction(moves=builder.moves, board=builder.board, complete=complete)


def _retry_with_other_copies(
    board: Board, target: Board, failed: _Builder
) -> tuple[bool, _Builder]:
    """Rebuild with two copies of one value trading destinations.

    *failed* placed every cell outside the final block, but its block is
    an odd permutation of the target's.  Tiles are given unique labels, the
    labelled goal is read off where *failed* put each tile, and two
    labels sharing a connector value are exchanged in that goal.  This
    flips the permutation parity, so the labelled goal is reachable and
    the moves found for it reach *target* on the real board.
    """
    n = board.size
    labels = [i + 1 if v else 0 for i, v in enumerate(board.cells)]
    start = Board(size=n, cells=labels, empty_pos=board.empty_pos)
    placed = start.copy()
    for direction in failed.moves:
        placed.move_empty(direction)

    goal = placed.cells[:]
    block = [r * n + c for r in (n - 2, n - 1) for c in (n - 2, n - 1)]
    spare = [goal[i] for i in block if goal[i]]
    for i in block:
        want = target.cells[i]
        if not want:
            goal[i] = 0
            continue
        label = next(x for x in spare if board.cells[x - 1] == want)
        spare.remove(label)
        goal[i] = label

    seen: dict[int, int] = {}
    pair = None
    for i, label in enumerate(goal):
        if not label:
            continue
        value = target.cells[i]
        if value in seen:
            pair = (seen[value], i)
            break
        seen[value] = i
    if pair is None:
        # all values distinct: the target really is unreachable
        return False, failed

    i, j = pair
    goal[i], goal[j] = goal[j], goal[i]
    relabelled = _Builder(
        start, Board(size=n, cells=goal, empty_pos=target.empty_pos)
    )
    if not relabelled.run():
        return False, failed

    result = board.copy()
    for direction in relabelled.moves:
        result.move_empty(direction)
    relabelled.board = result
    relabelled.target = target
    return True, relabelled


class _Builder:
    __slots__ = ("n", "board", "target", "fixed", "moves", "reached_block")

    def __init__(self, board: Board, target: Board) -> None:
        self.n = board.size
        self.board = board.copy()
        self.target = target
        self.fixed = bytearray(self.n * self.n)
        self.moves: list[Direction] = []
        self.reached_block = False

    # -- primitives -----------------------------------------------------------

    def _idx(self, pos: Pos) -> int:
        return pos[0] * self.n + pos[1]

    def _step(self, direction: Direction) -> None:
        self.board.move_empty(direction)
        self.moves.append(direction)

    def _blank_to(self, goal: Pos) -> bool:
        path = shortest_path(self.n, self.board.empty_pos, goal, self.fixed)
        if path is None:
            return False
        for direction in path:
            self._step(direction)
        return True

    def _drag(self, src: Pos, dst: Pos) -> bool:
        """Walk the tile at *src* to *dst* without disturbing fixed cells."""
        while src != dst:
            path = shortest_path(self.n, src, dst, self.fixed)
            if not path:
                return False
            first = path[0]
            nxt = (src[0] + first.delta[0], src[1] + first.delta[1])
            i = self._idx(src)
            self.fixed[i] = 1
            reached = self._blank_to(nxt)
            self.fixed[i] = 0
            if not reached:
                return False
            # empty slot sits in front of the tile; pull the tile forward
            self._step(first.opposite)
            src = nxt
        return True

    def _snapshot(self) -> tuple[Board, bytes, int]:
        return self.board.copy(), bytes(self.fixed), len(self.moves)

    def _restore(self, snap: tuple[Board, bytes, int]) -> None:
        board, fixed, count = snap
        self.board = board.copy()
        self.fixed[:] = fixed
        del self.moves[count:]

    def _candidates(self, value: int, near: Pos) -> list[Pos]:
        n = self.n
        cells = self.board.cells
        found = [
            divmod(i, n)
            for i in range(n * n)
            if cells[i] == value and not self.fixed[i]
        ]
        found.sort(key=lambda p: abs(p[0] - near[0]) + abs(p[1] - near[1]))
        return found

    # -- placements -----------------------------------------------------------

    def _place(self, value: int, dst: Pos) -> bool:
        """Bring some tile of *value* to *dst* and lock it there."""
        for src in self._candidates(value, dst):
            snap = self._snapshot()
            if self._drag(src, dst):
                self.fixed[self._idx(dst)] = 1
                return True
            self._restore(snap)
        return False

    def _place_pair(
        self,
        first: Pos,
        second: Pos,
        stage: Pos,
        finish: tuple[Direction, Direction],
        park: Pos,
    ) -> bool:
        """Place the two tiles owed to *first* and *second*.

        The *second* tile is staged on *first* and the *first* tile on
        *stage*; with the empty slot on *second*, the two *finish* moves
        rotate both into their true cells.
        """
        a = self.target.get(*first)
        b = self.target.get(*second)
        if self.board.get(*first) == a and self.board.get(*second) == b:
            self.fixed[self._idx(first)] = 1
            self.fixed[self._idx(second)] = 1
            return True

        for attempt in range(_PARK_ATTEMPTS + 1):
            snap = self._snapshot()
            if (
                self._place(b, first)
                and self._place(a, stage)
                and self._blank_to(second)
            ):
                for direction in finish:
                    self._step(direction)
                self.fixed[self._idx(first)] = 1
                self.fixed[self._idx(second)] = 1
                self.fixed[self._idx(stage)] = 0
                return True
            self._restore(snap)
            if attempt == _PARK_ATTEMPTS:
                break
            # the first tile got trapped next to the notch; move it away
            near = self._candidates(a, second)
            if not near or not self._park(near[0], park):
                break
        return False

    def _park(self, src: Pos, park: Pos) -> bool:
        snap = self._snapshot()
        if self._drag(src, park):
            return True
        self._restore(snap)
        return False

    def _finish_block(self) -> bool:
        """Cycle the bottom-right 2×2 block until it matches the target.

        Identical tiles may have been placed in either order, so the
        wanted arrangement can be out of reach (wrong parity); the
        rotation with the largest tree is kept then and False returned.
        """
        n = self.n
        block = [(r, c) for r in (n - 2, n - 1) for c in (n - 2, n - 1)]
        wanted = [self.target.get(r, c) for r, c in block]
        if not self._blank_to((n - 1, n - 1)):
            return False

        snap = self._snapshot()
        best_steps = 0
        best_tree = largest_tree(self.board)
        for i in range(3 * len(_BLOCK_CYCLE)):
            if [self.board.get(r, c) for r, c in block] == wanted:
                return True
            self._step(_BLOCK_CYCLE[i % len(_BLOCK_CYCLE)])
            tree = largest_tree(self.board)
            if tree > best_tree:
                best_steps = i + 1
                best_tree = tree
        self._restore(snap)
        for i in range(best_steps):
            self._step(_BLOCK_CYCLE[i % len(_BLOCK_CYCLE)])
        return False

    # -- full run -------------------------------------------------------------

    def run(self) -> bool:
        n = self.n
        target = self.target
        for r in range(n - 2):
            for c in range(n - 2):
                if not self._place(target.get(r, c), (r, c)):
                    return False
            if not self._place_pair(
                first=(r, n - 2),
                second=(r, n - 1),
                stage=(r + 1, n - 2),
                finish=_ROW_FINISH,
                park=(n - 1, 0),
            ):
                return False
        for c in range(n - 2):
            if not self._place_pair(
                first=(n - 2, c),
                second=(n - 1, c),
                stage=(n - 2, c + 1),
                finish=_COL_FINISH,
                park=(n - 2, n - 1),
            ):
                return False
        self.reached_block = True
        return self._finish_block()
