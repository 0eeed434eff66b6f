"""The active falling piece and its rotation transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .shapes import COLOR_TOKENS, Matrix, ShapeType, template


def rotate_matrix(matrix: Matrix) -> Matrix:
    """Return ``matrix`` rotated 90 degrees clockwise.

    An ``R x C`` matrix becomes ``C x R`` with ``out[i][j] == matrix[R-1-j][i]``,
    i.e. the rows are reversed and the result transposed.
    """

    return tuple(tuple(row) for row in zip(*matrix[::-1]))


def occupied_offsets(matrix: Matrix) -> Iterator[Tuple[int, int]]:
    """Yield ``(dx, dy)`` for every occupied cell of ``matrix``."""

    for dy, row in enumerate(matrix):
        for dx, value in enumerate(row):
            if value:
                yield dx, dy


@dataclass
class Piece:
    """Currently falling piece.

    ``x``/``y`` is the top-left corner of ``matrix`` in board coordinates.  The
    shape identity is only kept for display purposes; once locked, the board
    stores nothing but ``color``.
    """

    shape: ShapeType
    matrix: Matrix
    color: int
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, shape: ShapeType, cols: int) -> "Piece":
        """Create ``shape`` in its base orientation, centred on the top row."""

        matrix = template(shape)
        width = len(matrix[0])
        return cls(shape, matrix, COLOR_TOKENS[shape], x=cols // 2 - width // 2, y=0)

    def rotated(self) -> Matrix:
        """Return the clockwise rotation of the current orientation."""

        return rotate_matrix(self.matrix)

    def move(self, dx: int, dy: int) -> None:
        """Translate the piece by ``dx`` columns and ``dy`` rows."""

        self.x += dx
        self.y += dy

    def cells(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` board coordinates of every block."""

        return [(self.x + dx, self.y + dy) for dx, dy in occupied_offsets(self.matrix)]
