"""Scoring engine — size of the largest tree traced by the connectors.

Two neighbouring cells are joined only when both of them carry the
connector pointing at the other one.  The board is swept with BFS; every
undirected edge is fed once to a :class:`DisjointSet`, and a failed union
marks the component as cyclic.  Cyclic components are pushed below any
acyclic one by :data:`CYCLE_PENALTY` per board cell.

Everything here is a pure function of the board.
"""

from __future__ import annotations

from collections import deque

from backend.engine.scoring.disjoint_set import DisjointSet
from backend.models.board import Board

MAX_SCORE = 500_000.0

# (bit, opposite bit, dr, dc) in L, U, R, D order.
_LINKS = (
    (1, 4, 0, -1),
    (2, 8, -1, 0),
    (4, 1, 0, 1),
    (8, 2, 1, 0),
)


def cycle_penalty(size: int) -> int:
    """Amount subtracted from a cyclic component's size."""
    return size * size


def largest_tree(board: Board) -> int:
    """Return the size of the largest component, cyclic ones penalised."""
    n = board.size
    cells = board.cells
    seen = bytearray(n * n)
    dsu = DisjointSet(n * n)
    penalty = cycle_penalty(n)
    queue: deque[int] = deque()
    best = 0

    for root in range(n * n):
        if seen[root]:
            continue
        seen[root] = 1
        queue.append(root)
        size = 0
        cyclic = False
        while queue:
            cur = queue.popleft()
            size += 1
            v = cells[cur]
            if not v:
                continue
            r, c = divmod(cur, n)
            for bit, back, dr, dc in _LINKS:
                if not v & bit:
                    continue
                tr, tc = r + dr, c + dc
                if not (0 <= tr < n and 0 <= tc < n):
                    continue
                nxt = tr * n + tc
                if not cells[nxt] & back:
                    continue
                # each undirected edge is seen from both ends; count it once
                if cur < nxt and not dsu.union(cur, nxt):
                    cyclic = True
                if not seen[nxt]:
                    seen[nxt] = 1
                    queue.append(nxt)
        if cyclic:
            size -= penalty
        if size > best:
            best = size
    return best


def is_perfect(board: Board) -> bool:
    return largest_tree(board) == board.size * board.size - 1


def score(
    board: Board,
    moves_used: int | None = None,
    max_moves: int | None = None,
) -> float:
    """Normalised tree score in ``[0, MAX_SCORE]``.

    A perfect spanning tree is further scaled by
    ``2 - moves_used / max_moves`` when both move counts are given, so
    shorter solutions win among perfect boards.
    """
    n = board.size
    tree = largest_tree(board)
    total = n * n - 1
    value = MAX_SCORE * max(tree, 0) / total
    if tree == total and moves_used is not None and max_moves:
        value *= 2.0 - moves_used / max_moves
    return value


def dangling_connectors(board: Board) -> int:
    """Count connectors that point off the edge of the board."""
    n = board.size
    cells = board.cells
    last = n - 1
    count = 0
    for c in range(n):
        count += (cells[c] >> 1) & 1
        count += (cells[last * n + c] >> 3) & 1
    for r in range(n):
        count += cells[r * n] & 1
        count += (cells[r * n + last] >> 2) & 1
    return count
