"""
renderer.py — What the core tells the outside world.

Renderer is the collaborator the engine draws through and fires audio cues
at. Every method is a no-op here, so a headless game (or a test) can pass a
bare Renderer and subclasses only override what they care about.
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from .model import Direction, Point


class StatusSignal(Enum):
    NEUTRAL = 0
    SAD     = 1
    HAPPY   = 2


class AudioCue(Enum):
    BACKGROUND        = "background"
    DIRECTION_CHANGED = "direction"
    CANDY_EATEN       = "eat"
    ROUND_WON         = "win"
    ROUND_LOST        = "fail"
    GAME_OVER         = "game_over"


class Renderer:
    """Base collaborator. One frame is clear, snake, candies, score."""

    def clear(self) -> None:
        pass

    def draw_snake(self, body: Sequence[Point], alive: bool, direction: Direction) -> None:
        pass

    def draw_candy(self, position: Point, value: int) -> None:
        pass

    def draw_score(self, score: int, high_score: int, target: int, count: int) -> None:
        pass

    def set_status(self, status: StatusSignal) -> None:
        pass

    def cue(self, cue: AudioCue) -> None:
        pass
