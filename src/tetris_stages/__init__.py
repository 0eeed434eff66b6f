"""Falling-block puzzle game with stage progression."""

from .board import Board
from .shapes import ShapeType, TEMPLATES, SHAPE_COLORS, COLOR_TOKENS, TOKEN_COLORS
from .piece import Piece, rotate_matrix
from .collision import can_place
from .config import GameConfig, GameOverPolicy, StageClearPolicy
from .scheduler import Scheduler, TimerSlot
from .session import GameSession, GameStatus
from .snapshot import GameSnapshot, PieceView, render_grid
from .controller import GameController

__all__ = [
    "Board",
    "ShapeType",
    "TEMPLATES",
    "SHAPE_COLORS",
    "COLOR_TOKENS",
    "TOKEN_COLORS",
    "Piece",
    "rotate_matrix",
    "can_place",
    "GameConfig",
    "GameOverPolicy",
    "StageClearPolicy",
    "Scheduler",
    "TimerSlot",
    "GameSession",
    "GameStatus",
    "GameSnapshot",
    "PieceView",
    "render_grid",
    "GameController",
]
