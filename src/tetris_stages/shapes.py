"""Shape library for the seven tetrominoes.

Every shape is stored once, in its spawn orientation, as a small matrix of
``0``/``1`` values.  Rotated orientations are derived at runtime by
:func:`tetris_stages.piece.rotate_matrix`; nothing here is ever mutated.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple

Matrix = Tuple[Tuple[int, ...], ...]


class ShapeType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Spawn orientation of each shape, top row first.
TEMPLATES: Dict[ShapeType, Matrix] = {
    ShapeType.I: ((1, 1, 1, 1),),
    ShapeType.O: ((1, 1), (1, 1)),
    ShapeType.T: ((0, 1, 0), (1, 1, 1)),
    ShapeType.S: ((0, 1, 1), (1, 1, 0)),
    ShapeType.Z: ((1, 1, 0), (0, 1, 1)),
    ShapeType.J: ((1, 0, 0), (1, 1, 1)),
    ShapeType.L: ((0, 0, 1), (1, 1, 1)),
}

# Colour names understood by both pygame and HTML canvases.
SHAPE_COLORS: Dict[ShapeType, str] = {
    ShapeType.I: "cyan",
    ShapeType.O: "yellow",
    ShapeType.T: "purple",
    ShapeType.S: "green",
    ShapeType.Z: "red",
    ShapeType.J: "blue",
    ShapeType.L: "orange",
}

# Mapping from ``ShapeType`` to the token stored in the board grid.  ``0`` is
# reserved for an empty cell.
COLOR_TOKENS: Dict[ShapeType, int] = {t: i + 1 for i, t in enumerate(ShapeType)}

# Reverse lookup used by renderers: grid token -> colour name.
TOKEN_COLORS: Dict[int, str] = {
    token: SHAPE_COLORS[shape] for shape, token in COLOR_TOKENS.items()
}

# Every token a seeded obstacle block may take.
PALETTE: Tuple[int, ...] = tuple(TOKEN_COLORS)


def template(shape: ShapeType) -> Matrix:
    """Return the spawn orientation matrix for ``shape``."""

    return TEMPLATES[shape]


__all__ = [
    "Matrix",
    "ShapeType",
    "TEMPLATES",
    "SHAPE_COLORS",
    "COLOR_TOKENS",
    "TOKEN_COLORS",
    "PALETTE",
    "template",
]
