"""
candy.py — Candy generation.

Completely isolated from rendering, input and timing.
Receives read-only references to model objects and returns new candies.

Strategy:
  - Split the round target into `arity` positive parts (a random composition).
  - Do it twice per round, giving two independent groups of candies.
  - Drop each candy on a random cell that the snake doesn't occupy.
    Candies are not checked against each other, so two may share a cell.
"""

from __future__ import annotations

import logging
import random

from .config import PLACEMENT_ATTEMPTS
from .errors import ConfigError, PlacementError
from .model import Candy, Grid, Point, Snake

logger = logging.getLogger(__name__)

GROUPS_PER_ROUND = 2


def compose(target: int, arity: int, rng: random.Random) -> tuple[int, ...]:
    """
    Return `arity` positive integers summing exactly to `target`.

    Parameters
    ----------
    target : the round target, at least `arity`
    arity  : 2 (pairs) or 3 (triples)
    rng    : source of randomness
    """
    if arity not in (2, 3):
        raise ConfigError(f"arity must be 2 or 3, got {arity}", field="arity")
    if target < arity:
        raise ConfigError(
            f"target {target} cannot be split into {arity} positive parts",
            field="target",
        )

    if arity == 2:
        return _split(target, rng)

    while True:
        a, b = _split(target, rng)
        if a >= b:
            a, c = _split(a, rng)
        else:
            b, c = _split(b, rng)
        parts = (a, b, c)
        if min(parts) >= 1 and sum(parts) == target:
            return parts


def compose_round(target: int, arity: int, rng: random.Random) -> list[int]:
    """Both candy groups of a round; group two sits at indices [arity, 2*arity)."""
    values: list[int] = []
    for _ in range(GROUPS_PER_ROUND):
        values.extend(compose(target, arity, rng))
    return values


def place_candy(value: int, grid: Grid, snake: Snake, rng: random.Random) -> Candy:
    """A candy of the given value on a random cell free of the snake."""
    return Candy(_free_point(grid, snake, rng), value)


# ── Internal helpers ──────────────────────────────────────────────

def _split(total: int, rng: random.Random) -> tuple[int, int]:
    """Two positive parts of total. total must be at least 2."""
    v = rng.randint(1, total - 1)
    return v, total - v


def _free_point(grid: Grid, snake: Snake, rng: random.Random) -> Point:
    """
    Rejection-sample a cell off the snake body.

    Sampling gives up after PLACEMENT_ATTEMPTS draws; the free cells are then
    enumerated so a crowded board still gets a uniform pick, and a full one
    raises PlacementError instead of spinning forever.
    """
    for _ in range(PLACEMENT_ATTEMPTS):
        point = grid.random_point(rng)
        if not snake.collides_with(point):
            return point

    occupied = set(snake.body)
    free = [p for p in grid.cells() if p not in occupied]
    if not free:
        raise PlacementError(
            f"no free cell for a candy on a {grid.width}x{grid.height} grid"
        )
    logger.debug("random placement exhausted; picking from %d free cells", len(free))
    return rng.choice(free)
