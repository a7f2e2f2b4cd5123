"""
model.py — Model layer.

Game data and the movement rules that belong to it. Zero rendering, zero
input handling, zero timing.

Classes:
    Direction   — closed enum of unit steps; opposite is derived from the value
    Point       — immutable grid coordinate
    Grid        — toroidal coordinate space
    Snake       — body, direction, growth, alive flag, self-collision test
    Candy       — a numbered item on the grid
    RoundState  — count/target/score bookkeeping for the running round
    Phase       — top-level game phase
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from itertools import islice
from typing import Iterable, Iterator

from .config import GROW_ON_EAT


# ─────────────────────────── Direction ───────────────────────────
class Direction(Enum):
    """Unit step (dx, dy) on the grid. y grows downwards."""

    UP    = (0, -1)
    DOWN  = (0,  1)
    LEFT  = (-1, 0)
    RIGHT = (1,  0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.dx, -self.dy))

    def is_opposite(self, other: "Direction") -> bool:
        return other is self.opposite


DEFAULT_DIRECTION = Direction.RIGHT


# ───────────────────────────── Point ─────────────────────────────
@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def step(self, direction: Direction) -> "Point":
        return Point(self.x + direction.dx, self.y + direction.dy)


# ───────────────────────────── Grid ──────────────────────────────
@dataclass(frozen=True)
class Grid:
    """Fixed-size toroidal grid: coordinates wrap around every edge."""

    width: int
    height: int

    def wrap(self, point: Point) -> Point:
        # Python's % is already non-negative for a positive modulus.
        return Point(point.x % self.width, point.y % self.height)

    def is_inside(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def random_point(self, rng: random.Random) -> Point:
        return Point(rng.randrange(self.width), rng.randrange(self.height))

    def cells(self) -> Iterator[Point]:
        for y in range(self.height):
            for x in range(self.width):
                yield Point(x, y)


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure game data for the snake.
    No rendering. No input handling.
    """

    def __init__(
        self,
        body: Iterable[Point],
        direction: Direction = DEFAULT_DIRECTION,
        growth_pending: int = 0,
    ):
        self.body: deque[Point] = deque(body)
        if not self.body:
            raise ValueError("a snake needs at least one segment")
        self.direction: Direction = direction
        self.growth_pending: int = growth_pending
        self.alive: bool = True

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Point:
        return self.body[0]

    @property
    def tail(self) -> Point:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    # ── Queries ──────────────────────────────────────────────────
    def move(self, direction: Direction) -> Point:
        """Raw next head position one step towards direction. Not wrapped."""
        return self.head.step(direction)

    def resolve_direction(self, desired: Direction) -> Direction:
        """
        The direction the snake will actually take this frame.

        A one-segment snake turns freely. A longer one ignores a request to
        reverse into its own neck and keeps going.
        """
        if len(self.body) == 1:
            return desired
        if desired.is_opposite(self.direction):
            return self.direction
        return desired

    def collides_with(self, point: Point, simulate_tail_removal: bool = False) -> bool:
        """
        True if point lies on the body.

        With simulate_tail_removal the tail is left out when it is about to
        be vacated, i.e. when no growth is pending.
        """
        segments = len(self.body)
        if simulate_tail_removal and self.growth_pending == 0:
            segments -= 1
        return point in islice(self.body, segments)

    # ── Commands ─────────────────────────────────────────────────
    def apply_move(self, new_head: Point) -> None:
        self.body.appendleft(new_head)
        if self.growth_pending > 0:
            self.growth_pending -= 1
        else:
            self.body.pop()

    def eat(self, candy: "Candy") -> None:
        self.growth_pending += candy.calories

    def shrink(self) -> bool:
        """Drop the last segment. Returns False once only the head is left."""
        if len(self.body) > 1:
            self.body.pop()
            return True
        return False

    def kill(self) -> None:
        self.alive = False

    def resurrect(self, initial_growth: int) -> None:
        self.growth_pending = initial_growth
        self.alive = True


# ──────────────────────────── Candy ──────────────────────────────
class CandyKind(Enum):
    REGULAR = 1


@dataclass(frozen=True)
class Candy:
    position: Point
    value: int
    kind: CandyKind = CandyKind.REGULAR
    calories: int = GROW_ON_EAT

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError(f"candy value must be positive, got {self.value}")


# ────────────────────────── RoundState ───────────────────────────
@dataclass
class RoundState:
    target: int
    count: int = 0
    score: int = 0
    high_score: int = 0
    started_at: float = 0.0
    candies: list[Candy] = field(default_factory=list)

    @property
    def won(self) -> bool:
        return self.count == self.target

    @property
    def overshot(self) -> bool:
        return self.count > self.target


# ──────────────────────────── Phase ──────────────────────────────
class Phase(Enum):
    READY     = "ready"
    PLAYING   = "playing"
    PAUSED    = "paused"
    GAME_OVER = "over"
