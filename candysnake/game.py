"""
game.py — Phase controller and public entry point of the core.

SnakeGame owns the game phase (ready, playing, paused, game over) and the two
timer chains that drive it:
  - the frame clock, a single repeating timer ticking the round engine
  - the death sequence, a chain of one-shot timers that retracts the dead
    snake into its head and then brings it back

Only one chain runs at a time; starting one cancels the other.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from .config import DEATH_PAUSE_FRAMES, TAIL_REMOVAL_DIVISOR, GameConfig
from .engine import FrameOutcome, RoundEngine
from .errors import PlacementError
from .model import Direction, Phase
from .renderer import AudioCue, Renderer
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class InputSource(Protocol):
    def last_direction(self) -> Direction | None: ...


class SnakeGame:
    """
    Top-level game object.
    The input collaborator calls start_moving() on every direction key and
    pause()/resume() on focus changes; the renderer receives every frame.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        renderer: Renderer | None = None,
        input_source: InputSource | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
        auto_init: bool = True,
    ):
        self.config = config or GameConfig()
        self.renderer = renderer or Renderer()
        self.input = input_source
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self.engine: RoundEngine | None = None
        self.phase: Phase | None = None
        self._frame_timers = self.scheduler.group()
        self._death_timers = self.scheduler.group()
        if auto_init:
            self.init_game()

    # ── Public API ───────────────────────────────────────────────
    def init_game(self) -> None:
        """Build a fresh engine and first round, and wait for input."""
        self._frame_timers.cancel_all()
        self._death_timers.cancel_all()
        if self.engine is not None:
            self.engine.cancel_pending()

        self.engine = RoundEngine(self.config, self.scheduler, self.renderer, self.rng)
        self.engine.on_board_full = self._board_full
        self.engine.reset_round()
        self.engine.draw()
        self.renderer.cue(AudioCue.BACKGROUND)
        self.phase = Phase.READY
        logger.info("game ready: %dx%d grid, %s, target %d",
                    self.config.grid_width, self.config.grid_height,
                    self.config.label, self.config.round_target)

    def start_moving(self) -> None:
        """First direction input after READY starts the frame clock."""
        if self.phase is Phase.READY:
            self._start_frames()
            self.phase = Phase.PLAYING

    def pause(self) -> None:
        if self.phase is Phase.PLAYING:
            self._frame_timers.cancel_all()
            self.phase = Phase.PAUSED

    def resume(self) -> None:
        if self.phase is Phase.PAUSED:
            self._start_frames()
            self.phase = Phase.PLAYING

    def get_high_score(self) -> int:
        return self.engine.high_score if self.engine is not None else 0

    # ── Frame clock ──────────────────────────────────────────────
    def _start_frames(self) -> None:
        self._death_timers.cancel_all()
        self._frame_timers.cancel_all()
        self._frame_timers.call_every(self.config.frame_interval, self._next_frame)

    def _next_frame(self) -> None:
        desired = self.input.last_direction() if self.input is not None else None
        if self.engine.next_frame(desired) is FrameOutcome.DIED:
            self._game_over()

    # ── Death sequence ───────────────────────────────────────────
    @property
    def _death_pause(self) -> float:
        return self.config.frame_interval * DEATH_PAUSE_FRAMES

    def _game_over(self) -> None:
        self.phase = Phase.GAME_OVER
        self._frame_timers.cancel_all()
        self.engine.cancel_pending()
        self._death_timers.cancel_all()
        self._death_timers.call_later(self._death_pause, self._remove_tail)

    def _remove_tail(self) -> None:
        if self.engine.snake.shrink():
            self.engine.draw()
            self._death_timers.call_later(
                self.config.frame_interval / TAIL_REMOVAL_DIVISOR, self._remove_tail,
            )
        else:
            self._death_timers.call_later(self._death_pause, self._resurrect)

    def _resurrect(self) -> None:
        self.engine.resurrect()
        self.phase = Phase.READY
        logger.info("snake resurrected (high score %d)", self.get_high_score())

    def _board_full(self, exc: PlacementError) -> None:
        logger.warning("ending life, no room for new candy: %s", exc)
        self.engine.snake.kill()
        self.engine.draw()
        self.renderer.cue(AudioCue.GAME_OVER)
        self._game_over()
