import pytest

from tetris_stages.board import Board
from tetris_stages.collision import can_place
from tetris_stages.shapes import TEMPLATES, ShapeType


I = TEMPLATES[ShapeType.I]
O = TEMPLATES[ShapeType.O]


def test_empty_board_accepts_in_bounds_placement():
    board = Board.create(10, 20)
    assert can_place(board, I, 0, 0)
    assert can_place(board, I, 6, 19)


def test_side_and_bottom_bounds_reject():
    board = Board.create(10, 20)
    assert not can_place(board, I, -1, 0)
    assert not can_place(board, I, 7, 0)
    assert not can_place(board, O, 0, 19)


def test_rows_above_board_never_collide():
    board = Board.create(10, 20)
    assert can_place(board, O, 4, -1)
    assert can_place(board, I, 0, -5)


def test_occupied_cell_rejects():
    board = Board.create(10, 20)
    board.set_cell(5, 10, 1)
    assert not can_place(board, O, 4, 9)
    assert can_place(board, O, 6, 9)


def test_out_of_range_queries_never_raise():
    board = Board.create(10, 20)
    assert not can_place(board, O, 100, 100)
    assert not can_place(board, O, -100, 3)
    assert can_place(board, O, 3, -100)


@pytest.mark.parametrize(
    "x, y, dx, dy",
    [
        (-1, 5, -1, 0),  # left wall
        (7, 5, 1, 0),  # right wall
        (3, 20, 0, 1),  # floor
    ],
)
def test_boundary_collision_is_monotonic(x, y, dx, dy):
    board = Board.create(10, 20)
    assert not can_place(board, I, x, y)
    for step in range(1, 10):
        assert not can_place(board, I, x + dx * step, y + dy * step)


def test_collision_has_no_side_effects():
    board = Board.create(10, 20)
    before = board.grid.copy()
    can_place(board, I, 3, 19)
    can_place(board, I, 3, 25)
    assert (board.grid == before).all()
