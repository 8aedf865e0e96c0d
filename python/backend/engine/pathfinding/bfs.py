"""Breadth-first shortest paths on the grid, avoiding fixed cells."""

from __future__ import annotations

from collections import deque

from backend.models.board import DIRECTIONS, Direction


def shortest_path(
    size: int,
    start: tuple[int, int],
    goal: tuple[int, int],
    fixed: bytearray | bytes,
) -> list[Direction] | None:
    """Return the directions leading from *start* to *goal*.

    Cells whose ``fixed`` flag is set are never entered.  The start cell
    itself may be fixed.  Returns ``[]`` if start is goal and ``None`` if
    the goal cannot be reached.
    """
    si = start[0] * size + start[1]
    gi = goal[0] * size + goal[1]
    if si == gi:
        return []
    if fixed[gi]:
        return None

    # came_from[i] = (previous cell, direction taken)
    came_from: dict[int, tuple[int, Direction]] = {si: (-1, Direction.LEFT)}
    queue = deque([si])
    while queue:
        cur = queue.popleft()
        r, c = divmod(cur, size)
        for d in DIRECTIONS:
            dr, dc = d.delta
            tr, tc = r + dr, c + dc
            if not (0 <= tr < size and 0 <= tc < size):
                continue
            nxt = tr * size + tc
            if nxt in came_from or fixed[nxt]:
                continue
            came_from[nxt] = (cur, d)
            if nxt == gi:
                return _walk_back(came_from, si, gi)
            queue.append(nxt)
    return None


def _walk_back(
    came_from: dict[int, tuple[int, Direction]], start: int, goal: int
) -> list[Direction]:
    path: list[Direction] = []
    cur = goal
    while cur != start:
        prev, d = came_from[cur]
        path.append(d)
        cur = prev
    path.reverse()
    return path
