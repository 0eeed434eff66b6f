"""Simple pygame front-end for the game engine.

The window only draws :class:`~tetris_stages.snapshot.GameSnapshot` frames and
turns key presses into controller commands.  Gravity runs on the asyncio event
loop, which doubles as the controller's scheduler.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

import pygame

from .config import GameConfig
from .controller import GameController
from .snapshot import GameSnapshot


LOGGER = logging.getLogger(__name__)

# Frames per second to redraw the window at
FPS = 60
# Width of the score/stage panel to the right of the board
PANEL_WIDTH = 160

BACKGROUND = (0, 0, 0)
GRID_LINE = (51, 51, 51)
TEXT_COLOR = (230, 230, 230)


def draw_block(screen: pygame.Surface, x: int, y: int, color: str, size: int) -> None:
    rect = pygame.Rect(x * size, y * size, size, size)
    pygame.draw.rect(screen, pygame.Color(color), rect)
    pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_snapshot(screen: pygame.Surface, font: pygame.font.Font, snap: GameSnapshot) -> None:
    """Paint the board, the active piece and the side panel."""

    size = snap.block_size
    screen.fill(BACKGROUND)
    for y, row in enumerate(snap.composite()):
        for x, token in enumerate(row):
            if token:
                draw_block(screen, x, y, snap.colors[token], size)

    left = snap.cols * size + 10
    lines = [f"Score: {snap.score}", f"Stage: {snap.stage}"]
    if snap.paused:
        lines.append("Paused")
    if snap.message:
        lines.append(snap.message)
    for i, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (left, 10 + i * 28))


def handle_key(event: pygame.event.Event, controller: GameController) -> None:
    """Process keyboard events for piece movement and game control."""

    key = event.key
    if key == pygame.K_LEFT:
        controller.move_left()
    elif key == pygame.K_RIGHT:
        controller.move_right()
    elif key == pygame.K_DOWN:
        controller.soft_drop()
    elif key in (pygame.K_UP, pygame.K_SPACE):
        controller.rotate()
    elif key == pygame.K_p:
        if controller.paused:
            controller.resume()
        else:
            controller.pause()
    elif key == pygame.K_r:
        controller.restart()


class GameRunner:
    """Own the window and the controller for one desktop session."""

    def __init__(self, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:
        self.config = config or GameConfig()
        self.seed = seed
        self.controller: Optional[GameController] = None
        self._running = False

    async def run(self) -> None:
        pygame.init()
        try:
            width = self.config.cols * self.config.block_size + PANEL_WIDTH
            height = self.config.rows * self.config.block_size
            screen = pygame.display.set_mode((width, height))
            pygame.display.set_caption("Tetris Stages")
            font = pygame.font.SysFont(None, 28)

            loop = asyncio.get_running_loop()
            self.controller = GameController(loop, self.config, rng=random.Random(self.seed))
            self.controller.start()
            self._running = True
            while self._running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            self._running = False
                        else:
                            handle_key(event, self.controller)

                draw_snapshot(screen, font, self.controller.snapshot())
                pygame.display.flip()
                # Yield to the event loop so gravity callbacks get to run
                await asyncio.sleep(1 / FPS)
        except Exception:
            LOGGER.exception("Game loop crashed")
            raise
        finally:
            self._running = False
            if self.controller is not None and self.controller.running:
                self.controller.stop()
            pygame.quit()


def main(config: Optional[GameConfig] = None, seed: Optional[int] = None) -> None:
    """Open the window and block until it is closed."""

    asyncio.run(GameRunner(config, seed).run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
