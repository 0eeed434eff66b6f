"""High level game session container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import random

from .board import Board
from .config import GameConfig
from .piece import Piece
from .shapes import PALETTE, ShapeType


class GameStatus(str, Enum):
    """States of the game controller."""

    STOPPED = "stopped"
    SPAWNING = "spawning"
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    STAGE_ADVANCE = "stage_advance"
    STAGE_CLEAR = "stage_clear"
    GAME_OVER = "game_over"


@dataclass
class GameSession:
    """Mutable state for a single game session.

    ``rng`` drives both piece selection and terrain seeding; pass a seeded
    :class:`random.Random` to get a reproducible game.
    """

    config: GameConfig = field(default_factory=GameConfig)
    rng: random.Random = field(default_factory=random.Random)
    board: Board = field(init=False)
    active: Optional[Piece] = None
    score: int = 0
    stage: int = 1
    status: GameStatus = GameStatus.STOPPED
    message: str = ""
    lines: int = 0
    pieces: int = 0

    def __post_init__(self) -> None:
        self.board = Board(self.config.cols, self.config.rows)

    def _random_shape(self) -> ShapeType:
        """Return a uniformly random shape."""

        return self.rng.choice(list(ShapeType))

    def spawn_piece(self, shape: Optional[ShapeType] = None) -> Piece:
        """Create and return a new active piece centred on the top row."""

        self.active = Piece.spawn(shape or self._random_shape(), self.board.width)
        return self.active

    def new_board(self) -> Board:
        """Replace the board with a fresh one seeded for the current stage."""

        board = Board(self.config.cols, self.config.rows)
        board.seed_random_fill(
            self.config.fill_probability,
            self.config.seed_start_row(self.stage),
            PALETTE,
            self.rng,
        )
        self.board = board
        return board

    def reset(self) -> None:
        """Reset score, stage and counters and build a new seeded board."""

        self.score = 0
        self.stage = 1
        self.lines = 0
        self.pieces = 0
        self.active = None
        self.message = ""
        self.new_board()
