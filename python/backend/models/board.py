"""Board model for the connector-tile sliding puzzle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class BoardError(ValueError):
    """Raised when a board cannot be built from the given cells."""


class Direction(StrEnum):
    """Direction the *empty slot* moves in.

    The value is the move character; the declaration order (L, U, R, D)
    is also the connector bit order.
    """

    LEFT = "L"
    UP = "U"
    RIGHT = "R"
    DOWN = "D"

    @property
    def bit(self) -> int:
        return _BITS[self]

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def from_char(cls, ch: str) -> Direction:
        try:
            return cls(ch.upper())
        except ValueError:
            raise ValueError(f"Unknown move character {ch!r}.") from None


_BITS = {
    Direction.LEFT: 1,
    Direction.UP: 2,
    Direction.RIGHT: 4,
    Direction.DOWN: 8,
}
_DELTAS = {
    Direction.LEFT: (0, -1),
    Direction.UP: (-1, 0),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
}
_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
}

# Directions in connector bit order, indexable by bit position.
DIRECTIONS: tuple[Direction, ...] = tuple(Direction)


@dataclass(eq=False)
class Board:
    """An N×N grid of connector tiles.

    Cells are stored as a flat row-major list of ints.  0 is the empty
    slot; any other value is a 4-bit connector mask (L=1, U=2, R=4, D=8).
    Equality and hashing look at the cells only.
    """

    size: int
    cells: list[int]
    empty_pos: tuple[int, int]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major cell list.

        Example::

            Board.from_flat(3, [6, 5, 12, 7, 15, 13, 3, 11, 0])
        """
        if size < 2:
            raise BoardError(f"Board size must be at least 2, got {size}.")
        if len(flat) != size * size:
            raise BoardError(
                f"Expected {size * size} cells for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        bad = [v for v in flat if not 0 <= v <= 15]
        if bad:
            raise BoardError(f"Cell values must be in 0..15, got {bad[0]}.")
        empties = [i for i, v in enumerate(flat) if v == 0]
        if len(empties) != 1:
            raise BoardError(
                f"A board needs exactly one empty cell, found {len(empties)}."
            )
        return cls(size=size, cells=list(flat), empty_pos=divmod(empties[0], size))

    @classmethod
    def from_hex_rows(cls, rows: list[str]) -> Board:
        """Create a board from N strings of N hexadecimal digits."""
        size = len(rows)
        flat: list[int] = []
        for r, row in enumerate(rows):
            if len(row) != size:
                raise BoardError(
                    f"Row {r} has {len(row)} digits, expected {size}."
                )
            try:
                flat.extend(int(ch, 16) for ch in row)
            except ValueError:
                raise BoardError(f"Row {r} is not hexadecimal: {row!r}.") from None
        return cls.from_flat(size, flat)

    # -- queries --------------------------------------------------------------

    def index(self, row: int, col: int) -> int:
        return row * self.size + col

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        return self.cells[row * self.size + col]

    def set(self, row: int, col: int, value: int) -> None:
        self.cells[row * self.size + col] = value

    def key(self) -> tuple[int, ...]:
        """Hashable snapshot of the cells, used for state deduplication."""
        return tuple(self.cells)

    def to_hex_rows(self) -> list[str]:
        n = self.size
        return [
            "".join(f"{v:x}" for v in self.cells[r * n : (r + 1) * n])
            for r in range(n)
        ]

    # -- mutation -------------------------------------------------------------

    def move_empty(self, direction: Direction) -> bool:
        """Slide the empty slot one cell in *direction*.

        Returns False (and leaves the board untouched) when the
        destination is off the grid.
        """
        er, ec = self.empty_pos
        dr, dc = direction.delta
        tr, tc = er + dr, ec + dc
        if not (0 <= tr < self.size and 0 <= tc < self.size):
            return False
        self.swap((er, ec), (tr, tc))
        self.empty_pos = (tr, tc)
        return True

    def swap(self, a: tuple[int, int], b: tuple[int, int]) -> None:
        """Exchange two cells without touching ``empty_pos``.

        Call :meth:`sync_empty` afterwards if either cell was empty.
        """
        i = a[0] * self.size + a[1]
        j = b[0] * self.size + b[1]
        self.cells[i], self.cells[j] = self.cells[j], self.cells[i]

    def sync_empty(self) -> None:
        self.empty_pos = divmod(self.cells.index(0), self.size)

    def copy(self) -> Board:
        return Board(size=self.size, cells=self.cells[:], empty_pos=self.empty_pos)

    # -- value semantics ------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __hash__(self) -> int:
        return hash(self.key())
