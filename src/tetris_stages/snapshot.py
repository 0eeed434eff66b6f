"""Read-only views handed to renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

from .piece import occupied_offsets
from .shapes import TOKEN_COLORS, Matrix


@dataclass(frozen=True)
class PieceView:
    """Immutable copy of the active piece."""

    shape: str
    matrix: Matrix
    color: int
    x: int
    y: int

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.x + dx, self.y + dy) for dx, dy in occupied_offsets(self.matrix)]


@dataclass(frozen=True)
class GameSnapshot:
    """Everything a renderer needs to paint one frame."""

    grid: Tuple[Tuple[int, ...], ...]
    piece: Optional[PieceView]
    score: int
    stage: int
    status: str
    message: str = ""
    paused: bool = False
    block_size: int = 30
    # Static per token; left out of equality and hashing.
    colors: Mapping[int, str] = field(
        default_factory=lambda: MappingProxyType(dict(TOKEN_COLORS)), compare=False
    )

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def composite(self) -> List[List[int]]:
        """Return the grid with the active piece overlaid."""

        return render_grid(self.grid, self.piece)


def render_grid(
    grid: Tuple[Tuple[int, ...], ...], piece: Optional[PieceView] = None
) -> List[List[int]]:
    """Return a copy of ``grid`` with ``piece`` drawn on top.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Blocks of the piece above the top row are
    skipped.
    """

    out = [list(row) for row in grid]
    if piece is not None:
        rows = len(out)
        cols = len(out[0]) if out else 0
        for x, y in piece.cells():
            if 0 <= y < rows and 0 <= x < cols:
                out[y][x] = piece.color
    return out
