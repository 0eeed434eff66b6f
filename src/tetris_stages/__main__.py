"""Command line entry point.

Run with: `python -m tetris_stages`

By default this opens the pygame window.  ``--ascii`` instead prints a single
frame composed of the seeded board plus the first piece, which is useful as a
smoke test on machines without a display.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional, Sequence

from .config import GameConfig, GameOverPolicy, StageClearPolicy
from .session import GameSession
from .snapshot import PieceView, render_grid


def _format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


def ascii_frame(config: GameConfig, seed: Optional[int] = None) -> str:
    """Return the opening frame of a session as text."""

    session = GameSession(config, random.Random(seed))
    session.reset()
    piece = session.spawn_piece()
    view = PieceView(piece.shape.value, piece.matrix, piece.color, piece.x, piece.y)
    return _format_grid(render_grid(session.board.rows_as_tuples(), view))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tetris_stages", description=__doc__.splitlines()[0])
    parser.add_argument("--ascii", action="store_true", help="print one frame and exit")
    parser.add_argument("--seed", type=int, default=None, help="seed for pieces and terrain")
    parser.add_argument(
        "--game-over-policy",
        choices=[p.value for p in GameOverPolicy],
        default=GameOverPolicy.HALT.value,
    )
    parser.add_argument(
        "--stage-clear-policy",
        choices=[p.value for p in StageClearPolicy],
        default=StageClearPolicy.ADVANCE.value,
    )
    parser.add_argument("--fill-probability", type=float, default=0.5)
    parser.add_argument("--winning-score", type=int, default=100)
    parser.add_argument("--log-level", default="INFO")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = GameConfig(
        fill_probability=args.fill_probability,
        winning_score=args.winning_score,
        game_over_policy=args.game_over_policy,
        stage_clear_policy=args.stage_clear_policy,
    )
    if args.ascii:
        print(ascii_frame(config, args.seed))
        return

    from .run_pygame import main as run_window

    run_window(config, args.seed)


if __name__ == "__main__":
    main()
