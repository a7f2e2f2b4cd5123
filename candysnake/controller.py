"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate arrow keys into the latched direction the game reads each frame.
  - Pause on focus loss (or P), resume on focus gain (or P again).
  - Push real elapsed time into the game's scheduler.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the engine's job).

The controller is the only layer that imports pygame directly for events.
"""

from __future__ import annotations

import logging
import random
import sys

import pygame

from .audio import SoundBoard
from .config import FPS, GameConfig
from .game import SnakeGame
from .model import Direction, Phase
from .scheduler import Scheduler
from .view import GameView

logger = logging.getLogger(__name__)

_DIRECTION_KEYS = {
    pygame.K_LEFT:  Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP:    Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,
}


class GameController:
    """
    Owns the main loop.
    Glues SnakeGame <-> GameView without them knowing about each other, and
    serves as the game's input source.
    """

    def __init__(self, config: GameConfig, seed: int | None = None):
        pygame.init()
        self.config = config
        self.screen = pygame.display.set_mode(GameView.window_size(config))
        pygame.display.set_caption(f"CANDY SNAKE — {config.label}")
        self.clock = pygame.time.Clock()
        self.sounds = SoundBoard()
        self.view = GameView(self.screen, config, self.sounds)
        self.scheduler = Scheduler()
        self._last_direction: Direction | None = None
        self.game = SnakeGame(
            config,
            renderer=self.view,
            input_source=self,
            scheduler=self.scheduler,
            rng=random.Random(seed),
        )

    # ── Input source ─────────────────────────────────────────────
    def last_direction(self) -> Direction | None:
        return self._last_direction

    # ── Public entry point ───────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        while True:
            dt = self.clock.tick(FPS)
            self._handle_events()
            self.scheduler.advance(dt)
            self.view.present(self.game.phase)

    # ── Event dispatch ───────────────────────────────────────────
    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.WINDOWFOCUSLOST:
                self._pause()
            elif event.type == pygame.WINDOWFOCUSGAINED:
                self._resume()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

    def _handle_keydown(self, key: int) -> None:
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self._quit()
        elif key in _DIRECTION_KEYS:
            self._last_direction = _DIRECTION_KEYS[key]
            self.game.start_moving()
        elif key == pygame.K_p:
            if self.game.phase is Phase.PAUSED:
                self._resume()
            else:
                self._pause()

    def _pause(self) -> None:
        was_playing = self.game.phase is Phase.PLAYING
        self.game.pause()
        if was_playing:
            self.sounds.pause_music()

    def _resume(self) -> None:
        was_paused = self.game.phase is Phase.PAUSED
        self.game.resume()
        if was_paused:
            self.sounds.resume_music()

    # ── Utilities ────────────────────────────────────────────────
    def _quit(self) -> None:
        logger.info("quitting; high score %d", self.game.get_high_score())
        self.sounds.stop()
        pygame.quit()
        sys.exit()
