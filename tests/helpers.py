from __future__ import annotations

import random
from collections.abc import Sequence
from typing import Any

from candysnake.config import GameConfig
from candysnake.engine import RoundEngine
from candysnake.model import Candy, Direction, Point, Snake
from candysnake.renderer import AudioCue, Renderer, StatusSignal
from candysnake.scheduler import Scheduler


class RecordingRenderer(Renderer):
    """Renderer that remembers every call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.cues: list[AudioCue] = []
        self.statuses: list[StatusSignal] = []
        self.snakes: list[tuple[tuple[Point, ...], bool, Direction]] = []
        self.scores: list[tuple[int, int, int, int]] = []

    def clear(self) -> None:
        self.calls.append(("clear", None))

    def draw_snake(self, body: Sequence[Point], alive: bool, direction: Direction) -> None:
        self.snakes.append((tuple(body), alive, direction))
        self.calls.append(("snake", len(body)))

    def draw_candy(self, position: Point, value: int) -> None:
        self.calls.append(("candy", (position, value)))

    def draw_score(self, score: int, high_score: int, target: int, count: int) -> None:
        self.scores.append((score, high_score, target, count))
        self.calls.append(("score", score))

    def set_status(self, status: StatusSignal) -> None:
        self.statuses.append(status)

    def cue(self, cue: AudioCue) -> None:
        self.cues.append(cue)


class LatchedInput:
    """Input source holding a single direction, like the keyboard latch."""

    def __init__(self, direction: Direction | None = None) -> None:
        self.direction = direction

    def last_direction(self) -> Direction | None:
        return self.direction


def make_engine(
    *,
    config: GameConfig | None = None,
    body: Sequence[tuple[int, int]] = ((5, 5),),
    direction: Direction = Direction.RIGHT,
    growth: int = 0,
    candies: Sequence[tuple[tuple[int, int], int]] = (),
    seed: int = 1,
) -> tuple[RoundEngine, Scheduler, RecordingRenderer]:
    """Engine with a hand-placed snake and candies on a 10x10 grid by default."""
    config = config or GameConfig(grid_width=10, grid_height=10, difficulty=1)
    scheduler = Scheduler()
    renderer = RecordingRenderer()
    engine = RoundEngine(config, scheduler, renderer, random.Random(seed))
    engine.snake = Snake([Point(x, y) for x, y in body], direction, growth)
    engine.round.candies = [Candy(Point(x, y), value) for (x, y), value in candies]
    return engine, scheduler, renderer
