"""Game state machine driving spawn, gravity, locking and stage progression."""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from .collision import can_place
from .config import GameConfig, GameOverPolicy, StageClearPolicy
from .scheduler import Scheduler, TimerSlot
from .session import GameSession, GameStatus
from .snapshot import GameSnapshot, PieceView


LOGGER = logging.getLogger(__name__)

GAME_OVER_MESSAGE = "Game over"
STAGE_CLEAR_MESSAGE = "Stage clear!"

# Horizontal offsets tried, in order, when a rotation collides.
KICK_OFFSETS = (0, 1, -1)

Listener = Callable[[GameSnapshot], None]


class GameController:
    """Own a :class:`GameSession` and advance it one atomic step at a time.

    Gravity is driven by a single :class:`TimerSlot`.  The stage-advance pause
    re-uses the same slot, so at most one timer is ever pending.  Player
    commands are applied immediately and report whether they changed anything.
    Every mutation is followed by a snapshot pushed to subscribed listeners.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.session = GameSession(self.config, rng or random.Random())
        self._timer = TimerSlot(scheduler)
        self._listeners: List[Listener] = []
        self._busy = False
        self.paused = False
        self.games_over = 0

    # ----------------------------------------------------------------- state
    @property
    def status(self) -> GameStatus:
        return self.session.status

    @property
    def running(self) -> bool:
        return self.session.status is not GameStatus.STOPPED

    @property
    def timer(self) -> TimerSlot:
        return self._timer

    def subscribe(self, listener: Listener) -> None:
        """Call ``listener`` with a fresh snapshot after every mutation."""

        self._listeners.append(listener)

    def snapshot(self) -> GameSnapshot:
        """Return a read-only view of the current frame."""

        s = self.session
        piece = None
        if s.active is not None:
            a = s.active
            piece = PieceView(a.shape.value, a.matrix, a.color, a.x, a.y)
        return GameSnapshot(
            grid=s.board.rows_as_tuples(),
            piece=piece,
            score=s.score,
            stage=s.stage,
            status=s.status.value,
            message=s.message,
            paused=self.paused,
            block_size=self.config.block_size,
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in self._listeners:
            listener(snap)

    # ------------------------------------------------------------- lifecycle
    def start(self) -> None:
        """Start a new session: seeded board, first piece and gravity."""

        if self.running:
            LOGGER.info("Start ignored: game already running")
            return
        self.paused = False
        self._new_game()
        LOGGER.info("Game started")
        self._notify()

    def restart(self) -> None:
        """Throw the current session away and start over from stage one."""

        self._timer.cancel()
        self.paused = False
        self._new_game()
        LOGGER.info("Game restarted")
        self._notify()

    def stop(self) -> None:
        if not self.running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._timer.cancel()
        self.paused = False
        self.session.status = GameStatus.STOPPED
        LOGGER.info("Game stopped")
        self._notify()

    def pause(self) -> None:
        if self.paused:
            LOGGER.info("Pause ignored: game already paused")
            return
        if self.session.status is not GameStatus.FALLING:
            LOGGER.info("Pause ignored: game not falling")
            return
        self.paused = True
        self._timer.cancel()
        LOGGER.info("Paused")
        self._notify()

    def resume(self) -> None:
        if not self.paused:
            LOGGER.info("Resume ignored: game not paused")
            return
        self.paused = False
        self._start_ticking()
        LOGGER.info("Resumed")
        self._notify()

    # ------------------------------------------------------------------ tick
    def tick(self) -> None:
        """Advance gravity by one row, locking the piece if it cannot fall."""

        if self._busy or self.paused or self.session.status is not GameStatus.FALLING:
            return
        self._busy = True
        try:
            board, piece = self.session.board, self.session.active
            if piece is not None and can_place(board, piece.matrix, piece.x, piece.y + 1):
                piece.move(0, 1)
            else:
                self._lock_and_continue()
        finally:
            self._busy = False
        self._notify()

    def _lock_and_continue(self) -> None:
        s = self.session
        if s.active is not None:
            s.status = GameStatus.LOCKING
            s.board.lock_piece(s.active)
            s.active = None
            s.pieces += 1

        s.status = GameStatus.CLEARING
        cleared = s.board.clear_full_rows()
        if cleared:
            previous = s.score
            s.score += cleared * self.config.points_per_line
            s.lines += cleared
            LOGGER.debug("Cleared %d row(s). Score: %d", cleared, s.score)
            if previous < self.config.winning_score <= s.score:
                self._stage_cleared()
                return
        self._spawn_next()

    def _spawn_next(self, *, allow_restart: bool = True) -> None:
        s = self.session
        s.status = GameStatus.SPAWNING
        piece = s.spawn_piece()
        LOGGER.debug("Spawned %s at (%d, %d)", piece.shape.value, piece.x, piece.y)
        if can_place(s.board, piece.matrix, piece.x, piece.y):
            s.status = GameStatus.FALLING
        else:
            self._game_over(allow_restart=allow_restart)

    def _game_over(self, *, allow_restart: bool = True) -> None:
        self.games_over += 1
        LOGGER.info(
            "Game over at stage %d with score %d", self.session.stage, self.session.score
        )
        if allow_restart and self.config.game_over_policy is GameOverPolicy.RESTART:
            LOGGER.info("Resetting.")
            self._new_game(message=GAME_OVER_MESSAGE)
            return
        self._timer.cancel()
        self.session.status = GameStatus.GAME_OVER
        self.session.message = GAME_OVER_MESSAGE

    def _new_game(self, message: str = "") -> None:
        self.session.reset()
        self.session.message = message
        # A board that is already blocked right after a reset would restart
        # forever, so that case always halts.
        self._spawn_next(allow_restart=False)
        if self.session.status is GameStatus.FALLING:
            self._start_ticking()

    # ---------------------------------------------------------------- stages
    def _stage_cleared(self) -> None:
        s = self.session
        policy = self.config.stage_clear_policy
        if policy is StageClearPolicy.ADVANCE:
            s.stage += 1
            s.status = GameStatus.STAGE_ADVANCE
            s.message = f"Stage {s.stage}"
            LOGGER.info("Stage cleared, advancing to stage %d", s.stage)
            self._timer.once(self.config.stage_delay_ms, self._finish_stage_advance)
        elif policy is StageClearPolicy.FREEZE:
            self._timer.cancel()
            s.status = GameStatus.STAGE_CLEAR
            s.message = STAGE_CLEAR_MESSAGE
            LOGGER.info("Stage cleared, game frozen")
        else:
            s.message = STAGE_CLEAR_MESSAGE
            LOGGER.info("Stage cleared, play continues")
            self._spawn_next()

    def _finish_stage_advance(self) -> None:
        if self.session.status is not GameStatus.STAGE_ADVANCE:
            return
        s = self.session
        s.new_board()
        s.score = 0
        s.message = ""
        games_over = self.games_over
        self._spawn_next()
        if self.games_over == games_over and s.status is GameStatus.FALLING:
            self._start_ticking()
            LOGGER.info(
                "Stage %d started, tick interval %.0f ms",
                s.stage,
                self.config.tick_interval_ms(s.stage),
            )
        self._notify()

    def _start_ticking(self) -> None:
        self._timer.every(self.config.tick_interval_ms(self.session.stage), self.tick)

    # ----------------------------------------------------------------- input
    def _accepts_input(self) -> bool:
        return (
            not self._busy
            and not self.paused
            and self.session.status is GameStatus.FALLING
            and self.session.active is not None
        )

    def _shift(self, dx: int, dy: int) -> bool:
        if not self._accepts_input():
            return False
        piece = self.session.active
        if not can_place(self.session.board, piece.matrix, piece.x + dx, piece.y + dy):
            return False
        piece.move(dx, dy)
        self._notify()
        return True

    def move_left(self) -> bool:
        return self._shift(-1, 0)

    def move_right(self) -> bool:
        return self._shift(1, 0)

    def soft_drop(self) -> bool:
        """Move the piece one row down.  A blocked soft drop never locks."""

        return self._shift(0, 1)

    def rotate(self) -> bool:
        """Rotate clockwise, trying the piece's column then one step right, then left."""

        if not self._accepts_input():
            return False
        piece = self.session.active
        rotated = piece.rotated()
        for dx in KICK_OFFSETS:
            if can_place(self.session.board, rotated, piece.x + dx, piece.y):
                piece.matrix = rotated
                piece.x += dx
                self._notify()
                return True
        return False
