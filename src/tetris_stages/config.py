"""Game configuration and stage-derived timing helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class GameOverPolicy(str, Enum):
    """What happens when a new piece cannot be placed at its spawn position."""

    RESTART = "restart"
    HALT = "halt"


class StageClearPolicy(str, Enum):
    """What happens when the score reaches the winning threshold."""

    ADVANCE = "advance"
    FREEZE = "freeze"
    CONTINUE = "continue"


@dataclass(frozen=True)
class GameConfig:
    """Constants fixed for the lifetime of a game session.

    Durations are in milliseconds.  ``fill_probability`` is the chance that a
    cell inside the pre-seeded region starts occupied.
    """

    cols: int = 10
    rows: int = 20
    block_size: int = 30
    winning_score: int = 100
    points_per_line: int = 10
    base_tick_ms: float = 500.0
    tick_step_ms: float = 50.0
    min_tick_ms: float = 100.0
    fill_probability: float = 0.5
    seed_rows_divisor: int = 3
    min_seed_rows: int = 2
    stage_delay_ms: float = 2000.0
    game_over_policy: GameOverPolicy = GameOverPolicy.HALT
    stage_clear_policy: StageClearPolicy = StageClearPolicy.ADVANCE

    def __post_init__(self) -> None:
        if self.cols <= 0 or self.rows <= 0:
            raise ValueError("Board dimensions must be positive")
        if self.block_size <= 0:
            raise ValueError("block_size must be positive")
        if self.winning_score <= 0 or self.points_per_line <= 0:
            raise ValueError("Scoring constants must be positive")
        if self.min_tick_ms <= 0:
            raise ValueError("min_tick_ms must be positive")
        if self.base_tick_ms < self.min_tick_ms:
            raise ValueError("base_tick_ms must not be below min_tick_ms")
        if self.tick_step_ms < 0:
            raise ValueError("tick_step_ms must not be negative")
        if not 0.0 <= self.fill_probability <= 1.0:
            raise ValueError("fill_probability must be within [0, 1]")
        if self.seed_rows_divisor <= 0 or self.min_seed_rows < 0:
            raise ValueError("Invalid seeded region settings")
        if self.min_seed_rows > self.rows:
            raise ValueError("min_seed_rows exceeds the board height")
        if self.stage_delay_ms < 0:
            raise ValueError("stage_delay_ms must not be negative")
        # Accept plain strings, e.g. straight from the command line.
        object.__setattr__(self, "game_over_policy", GameOverPolicy(self.game_over_policy))
        object.__setattr__(self, "stage_clear_policy", StageClearPolicy(self.stage_clear_policy))

    def tick_interval_ms(self, stage: int) -> float:
        """Return the gravity period for ``stage``.

        The period shrinks by ``tick_step_ms`` per stage after the first and is
        floored at ``min_tick_ms`` so it never reaches zero.
        """

        return max(self.min_tick_ms, self.base_tick_ms - (stage - 1) * self.tick_step_ms)

    def seeded_rows(self, stage: int) -> int:
        """Return how many bottom rows are pre-seeded with obstacles at ``stage``."""

        return max(self.rows // self.seed_rows_divisor - stage, self.min_seed_rows)

    def seed_start_row(self, stage: int) -> int:
        return self.rows - self.seeded_rows(stage)
