"""Board representation for the playfield."""

from __future__ import annotations

import random
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .piece import Piece


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

# Value stored in a cell that holds no block.  Any other value is an opaque
# colour token.
EMPTY = 0

Grid = NDArray[np.uint8]


def create_empty_grid(cols: int = WIDTH, rows: int = HEIGHT) -> Grid:
    """Return a new empty ``rows x cols`` grid filled with zeros."""

    return np.zeros((rows, cols), dtype=np.uint8)


class Board:
    """Grid of locked blocks, indexed ``grid[y, x]``.

    Dimensions are fixed for the lifetime of a board; clearing a row always
    inserts a fresh empty row so the shape of ``grid`` never changes.
    """

    def __init__(self, cols: int = WIDTH, rows: int = HEIGHT) -> None:
        if cols <= 0 or rows <= 0:
            raise ValueError("Board dimensions must be positive")
        self.grid: Grid = create_empty_grid(cols, rows)

    @classmethod
    def create(cls, cols: int, rows: int) -> "Board":
        """Return a board of ``cols x rows`` with every cell empty."""

        return cls(cols, rows)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell(self, x: int, y: int) -> int:
        """Return the token at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            return int(self.grid[y, x])
        raise IndexError(f"Cell ({x}, {y}) out of bounds")

    def set_cell(self, x: int, y: int, token: int) -> None:
        """Store ``token`` at ``(x, y)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(x, y):
            self.grid[y, x] = np.uint8(token)
        else:
            raise IndexError(f"Cell ({x}, {y}) out of bounds")

    def is_row_full(self, y: int) -> bool:
        """Return ``True`` if every cell in row ``y`` is occupied."""

        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of bounds")
        return bool(np.all(self.grid[y] != EMPTY))

    def clear_row(self, y: int) -> None:
        """Remove row ``y`` and push an empty row in at the top.

        Rows above ``y`` shift down by one; rows below are untouched.
        """

        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of bounds")
        remaining = np.delete(self.grid, y, axis=0)
        new_row = np.zeros((1, self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((new_row, remaining))

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        Rows are scanned from the bottom up.  After a clear the same index is
        tested again since the row that just shifted into it may be full too.
        """

        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.clear_row(y)
                cleared += 1
            else:
                y -= 1
        return cleared

    def seed_random_fill(
        self,
        fill_probability: float,
        start_row: int,
        palette: Sequence[int],
        rng: random.Random,
    ) -> None:
        """Scatter obstacle blocks over rows ``start_row`` to the bottom.

        Each cell independently receives a random token from ``palette`` with
        probability ``fill_probability`` and is left empty otherwise.
        """

        if not palette:
            raise ValueError("palette must not be empty")
        for y in range(max(start_row, 0), self.height):
            for x in range(self.width):
                if rng.random() < fill_probability:
                    self.grid[y, x] = np.uint8(rng.choice(palette))

    def lock_piece(self, piece: Piece) -> None:
        """Write the piece's colour into the grid.

        Blocks still above the top row are discarded.

        Raises:
            IndexError: If any block lies beside or below the board.
        """

        for x, y in piece.cells():
            if y < 0:
                continue
            self.set_cell(x, y, piece.color)

    def rows_as_tuples(self) -> Tuple[Tuple[int, ...], ...]:
        """Return an immutable copy of the grid for snapshots."""

        return tuple(tuple(int(v) for v in row) for row in self.grid)
