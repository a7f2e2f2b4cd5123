"""
engine.py — Round engine.

Owns the grid, the snake, the active candies and the score. The phase
controller calls next_frame() once per frame tick; everything that happens
inside a frame (moving, collisions, eating, winning or losing a round) is
decided here and reported to the renderer.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable

from .candy import compose_round, place_candy
from .config import (
    LOSS_PENALTY, PENALTY_THRESHOLD, ROUND_FEEDBACK_MS,
    TIME_BONUS_TIERS, WIN_BONUS,
    GameConfig,
)
from .errors import PlacementError
from .model import Candy, Direction, Grid, RoundState, Snake
from .renderer import AudioCue, Renderer, StatusSignal
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class FrameOutcome(Enum):
    MOVED = "moved"     # the snake took a step
    HELD  = "held"      # the step was blocked but tolerance absorbed it
    DIED  = "died"      # the step was blocked and tolerance ran out


def time_bonus(elapsed_ms: float) -> int:
    """Extra points for finishing a round quickly."""
    for limit, bonus in TIME_BONUS_TIERS:
        if elapsed_ms < limit:
            return bonus
    return 0


class RoundEngine:
    """
    One game's worth of rules.
    The phase controller drives it; it never schedules frames itself, only the
    delayed round reset after a win or a loss.
    """

    def __init__(
        self,
        config: GameConfig,
        scheduler: Scheduler,
        renderer: Renderer | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config
        self.scheduler = scheduler
        self.renderer = renderer or Renderer()
        self.rng = rng or random.Random()
        self.grid = Grid(config.grid_width, config.grid_height)
        self.snake = Snake(
            [self.grid.random_point(self.rng)],
            growth_pending=config.initial_growth,
        )
        self.round = RoundState(target=config.round_target)
        self.collision_frames_left: int = config.collision_tolerance
        self.on_board_full: Callable[[PlacementError], None] | None = None
        self._round_timers = scheduler.group()

    # ── Accessors ────────────────────────────────────────────────
    @property
    def score(self) -> int:
        return self.round.score

    @property
    def high_score(self) -> int:
        return self.round.high_score

    @property
    def candies(self) -> list[Candy]:
        return self.round.candies

    @property
    def round_pending(self) -> bool:
        """True while a won or lost round waits for its reset."""
        return self._round_timers.active

    # ── Frame ────────────────────────────────────────────────────
    def next_frame(self, desired: Direction | None) -> FrameOutcome:
        """Advance one frame towards the latched direction."""
        snake = self.snake
        if desired is None:
            desired = snake.direction
        actual = snake.resolve_direction(desired)
        new_head = self.grid.wrap(snake.move(actual))

        if snake.collides_with(new_head, simulate_tail_removal=True):
            if self.collision_frames_left > 0:
                self.collision_frames_left -= 1
                return FrameOutcome.HELD
            snake.kill()
            self.draw()
            self.renderer.cue(AudioCue.GAME_OVER)
            logger.info("snake died at %s (length %d, score %d)",
                        snake.head, len(snake), self.score)
            return FrameOutcome.DIED

        if actual is not snake.direction:
            self.renderer.cue(AudioCue.DIRECTION_CHANGED)
        snake.direction = actual
        snake.apply_move(new_head)
        self.collision_frames_left = self.config.collision_tolerance

        # Find every candy under the head first, then rebuild the list.
        eaten = [c for c in self.round.candies if c.position == new_head]
        if eaten:
            self.round.candies = [c for c in self.round.candies if c.position != new_head]
            for candy in eaten:
                self._eat(candy)
            self._settle_round()

        self.draw()
        return FrameOutcome.MOVED

    # ── Round lifecycle ──────────────────────────────────────────
    def reset_round(self) -> None:
        """Fresh candies for the same target, count back to zero, clock restarted."""
        values = compose_round(self.round.target, self.config.arity, self.rng)
        candies = [place_candy(v, self.grid, self.snake, self.rng) for v in values]
        self.round.candies = candies
        self.round.count = 0
        self.round.started_at = self.scheduler.now
        logger.debug("new round: target %d, candies %s", self.round.target, values)

    def resurrect(self) -> None:
        """Back to life after a death: score cleared, high score kept."""
        self.cancel_pending()
        self.round.score = 0
        self.snake.resurrect(self.config.initial_growth)
        self.collision_frames_left = self.config.collision_tolerance
        self.renderer.set_status(StatusSignal.NEUTRAL)
        self.reset_round()
        self.draw()

    def cancel_pending(self) -> None:
        self._round_timers.cancel_all()

    def draw(self) -> None:
        r = self.renderer
        r.clear()
        r.draw_snake(tuple(self.snake.body), self.snake.alive, self.snake.direction)
        for candy in self.round.candies:
            r.draw_candy(candy.position, candy.value)
        r.draw_score(self.round.score, self.round.high_score,
                     self.round.target, self.round.count)

    # ── Private helpers ──────────────────────────────────────────
    def _eat(self, candy: Candy) -> None:
        self.round.count += candy.value
        self.round.high_score = max(self.round.score, self.round.high_score)
        self.snake.eat(candy)
        self.renderer.cue(AudioCue.CANDY_EATEN)

    def _settle_round(self) -> None:
        state = self.round
        if state.won:
            elapsed = self.scheduler.now - state.started_at
            bonus = time_bonus(elapsed)
            state.score += WIN_BONUS + bonus
            logger.info("round won in %.1fs: +%d (score %d)",
                        elapsed / 1000, WIN_BONUS + bonus, state.score)
            self._end_round(StatusSignal.HAPPY, AudioCue.ROUND_WON)
        elif state.overshot:
            if state.score > PENALTY_THRESHOLD:
                state.score -= LOSS_PENALTY
            logger.info("round lost: count %d over target %d (score %d)",
                        state.count, state.target, state.score)
            self._end_round(StatusSignal.SAD, AudioCue.ROUND_LOST)

    def _end_round(self, status: StatusSignal, cue: AudioCue) -> None:
        self.round.candies = []
        self.renderer.cue(cue)
        self.renderer.set_status(status)
        self._round_timers.cancel_all()
        self._round_timers.call_later(ROUND_FEEDBACK_MS, self._finish_round)

    def _finish_round(self) -> None:
        self.renderer.set_status(StatusSignal.NEUTRAL)
        try:
            self.reset_round()
        except PlacementError as exc:
            if self.on_board_full is None:
                raise
            self.on_board_full(exc)
            return
        self.draw()
