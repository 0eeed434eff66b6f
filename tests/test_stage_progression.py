import logging
import random

from tetris_stages.config import GameConfig
from tetris_stages.controller import STAGE_CLEAR_MESSAGE, GameController
from tetris_stages.piece import Piece
from tetris_stages.session import GameStatus
from tetris_stages.shapes import ShapeType


def _controller(scheduler, **overrides) -> GameController:
    config = GameConfig(fill_probability=0.0, winning_score=10, **overrides)
    controller = GameController(scheduler, config, rng=random.Random(1))
    controller.start()
    return controller


def _clear_one_line(controller: GameController) -> None:
    """Drop an O piece into a two-cell gap in the bottom row."""

    board = controller.session.board
    for x in range(board.width):
        if x not in (5, 6):
            board.set_cell(x, board.height - 1, 3)
    piece = Piece.spawn(ShapeType.O, board.width)
    piece.x = 5
    controller.session.active = piece
    pieces = controller.session.pieces
    while controller.session.pieces == pieces:
        controller.tick()


def test_reaching_winning_score_pauses_and_advances_stage(scheduler):
    controller = _controller(scheduler)
    _clear_one_line(controller)

    session = controller.session
    assert session.score == 10
    assert session.stage == 2
    assert controller.status is GameStatus.STAGE_ADVANCE
    assert session.message == "Stage 2"
    assert session.active is None
    assert scheduler.pending == 1
    assert not controller.timer.repeating
    assert controller.move_left() is False

    scheduler.advance(1.9)
    assert controller.status is GameStatus.STAGE_ADVANCE

    scheduler.advance(0.2)
    assert controller.status is GameStatus.FALLING
    assert session.score == 0
    assert session.message == ""
    assert session.active is not None
    assert not session.board.grid.any()
    assert controller.timer.repeating
    assert controller.timer.interval_ms == 450
    assert scheduler.pending == 1


def test_stage_advance_resumes_gravity_at_faster_interval(scheduler):
    controller = _controller(scheduler)
    _clear_one_line(controller)
    scheduler.advance(2.0)
    piece = controller.session.active
    start_y = piece.y

    scheduler.advance(0.45)
    assert piece.y == start_y + 1


def test_stage_advance_reseeds_board_for_new_stage(scheduler):
    config = GameConfig(fill_probability=1.0, winning_score=10)
    controller = GameController(scheduler, config, rng=random.Random(4))
    controller.start()
    # Stage one seeds the bottom five rows solid; empty them for a clean clear.
    controller.session.board.grid[:] = 0
    _clear_one_line(controller)
    scheduler.advance(2.0)

    grid = controller.session.board.grid
    seeded = config.seeded_rows(2)
    assert seeded == 4
    assert grid[-seeded:].all()
    assert not grid[:-seeded].any()


def test_freeze_policy_stops_the_game_on_clear(scheduler):
    controller = _controller(scheduler, stage_clear_policy="freeze")
    _clear_one_line(controller)

    assert controller.status is GameStatus.STAGE_CLEAR
    assert controller.session.message == STAGE_CLEAR_MESSAGE
    assert controller.session.stage == 1
    assert scheduler.pending == 0
    scheduler.advance(10)
    assert controller.status is GameStatus.STAGE_CLEAR
    assert controller.rotate() is False


def test_continue_policy_keeps_playing(scheduler):
    controller = _controller(scheduler, stage_clear_policy="continue")
    _clear_one_line(controller)

    assert controller.status is GameStatus.FALLING
    assert controller.session.message == STAGE_CLEAR_MESSAGE
    assert controller.session.stage == 1
    assert controller.session.score == 10
    assert controller.timer.repeating


def test_only_one_timer_pending_through_a_full_stage_cycle(scheduler):
    controller = _controller(scheduler)
    pending = [scheduler.pending]
    _clear_one_line(controller)
    pending.append(scheduler.pending)
    for _ in range(30):
        scheduler.advance(0.1)
        pending.append(scheduler.pending)
    assert set(pending) == {1}


def test_stage_advance_into_blocked_spawn_does_not_announce_stage(scheduler, monkeypatch, caplog):
    controller = _controller(scheduler)
    _clear_one_line(controller)
    session = controller.session
    real_new_board = session.new_board

    def blocked_board():
        board = real_new_board()
        for y in (0, 1):
            for x in range(3, 7):
                board.set_cell(x, y, 2)
        return board

    monkeypatch.setattr(session, "new_board", blocked_board)
    with caplog.at_level(logging.INFO, logger="tetris_stages.controller"):
        scheduler.advance(2.0)

    assert controller.status is GameStatus.GAME_OVER
    assert scheduler.pending == 0
    assert not any("started" in message for message in caplog.messages)
