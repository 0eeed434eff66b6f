"""Collision checks for candidate piece placements."""

from __future__ import annotations

from .board import EMPTY, Board
from .piece import occupied_offsets
from .shapes import Matrix


def can_place(board: Board, matrix: Matrix, x: int, y: int) -> bool:
    """Return ``True`` if ``matrix`` anchored at ``(x, y)`` fits on ``board``.

    A placement is rejected when any occupied cell would land beside the board,
    below the bottom row, or on a locked block.  Cells above the top row are
    allowed so freshly spawned pieces can poke out of the playfield.  The
    function has no side effects and never raises for any coordinates, which
    makes it suitable for previewing moves and rotation kicks.
    """

    grid = board.grid
    rows, cols = grid.shape
    for dx, dy in occupied_offsets(matrix):
        col = x + dx
        row = y + dy
        if col < 0 or col >= cols or row >= rows:
            return False
        if row >= 0 and grid[row, col] != EMPTY:
            return False
    return True
