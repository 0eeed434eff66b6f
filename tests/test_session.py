import random
from collections import Counter

from tetris_stages.config import GameConfig
from tetris_stages.session import GameSession
from tetris_stages.shapes import ShapeType


def test_spawned_shapes_are_uniform_over_all_seven():
    session = GameSession(GameConfig(), random.Random(0))
    counts = Counter(session.spawn_piece().shape for _ in range(7000))

    assert set(counts) == set(ShapeType)
    for shape in ShapeType:
        assert 850 <= counts[shape] <= 1150, counts


def test_same_seed_spawns_same_sequence():
    a = GameSession(GameConfig(), random.Random(11))
    b = GameSession(GameConfig(), random.Random(11))
    seq_a = [a.spawn_piece().shape for _ in range(50)]
    seq_b = [b.spawn_piece().shape for _ in range(50)]
    assert seq_a == seq_b


def test_spawn_draws_from_session_rng():
    rng = random.Random(3)
    session = GameSession(GameConfig(), rng)
    expected = random.Random(3)
    for _ in range(20):
        assert session.spawn_piece().shape is expected.choice(list(ShapeType))
