"""
config.py — Shared constants and the validated game configuration.
No logic beyond validation, no imports from internal modules except errors.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import ConfigError

# ── Window ────────────────────────────────────────────────────────
SCOREBOARD_H    = 110
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
BG          = (224, 182, 135)
GRID_COL    = (117, 76,  36)
SNAKE_COL   = (237, 32,  36)
SNAKE_ALT   = (247, 148, 29)
EYE_COL     = (255, 255, 255)
CANDY_COL   = (177, 28,  28)
BOARD_COL   = (192, 201, 107)
TEXT_COL    = (75,  67,  18)
LINE_COL    = (255, 255, 255)

# ── Gameplay ──────────────────────────────────────────────────────
GROW_ON_EAT          = 1      # segments added per candy, whatever its value
WIN_BONUS            = 10
LOSS_PENALTY         = 5
PENALTY_THRESHOLD    = 4      # no penalty unless score is above this
TIME_BONUS_TIERS     = ((10_000, 3), (20_000, 2), (30_000, 1))
ROUND_FEEDBACK_MS    = 1000
DEATH_PAUSE_FRAMES   = 10     # frames before the tail retracts, and before resurrection
TAIL_REMOVAL_DIVISOR = 4      # tail retracts at frame_interval / 4
PLACEMENT_ATTEMPTS   = 1000

DIFFICULTIES = {
    1: {"label": "EASY",   "target": 10, "arity": 2},
    2: {"label": "NORMAL", "target": 20, "arity": 2},
    3: {"label": "HARD",   "target": 10, "arity": 3},
}


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass; True would pass as 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"must be an integer, got {value!r}", field=name)


@dataclass(frozen=True)
class GameConfig:
    """
    Everything a game instance is built from. Validated on construction.

    The core reads the grid size, frame interval, difficulty, target,
    collision tolerance and initial growth. point_size and the colors are
    only used by the pygame view.
    """

    grid_width: int = 30
    grid_height: int = 20
    frame_interval: float = 150
    difficulty: int = 3
    target: int | None = None           # overrides the difficulty's target
    collision_tolerance: int = 1
    initial_growth: int = 1
    point_size: int = 24
    background_color: tuple = BG
    snake_color: tuple = SNAKE_COL
    candy_color: tuple = CANDY_COL
    score_text_color: tuple = TEXT_COL

    def __post_init__(self) -> None:
        for name in ("grid_width", "grid_height", "difficulty", "collision_tolerance",
                     "initial_growth", "point_size"):
            _require_int(name, getattr(self, name))
        if self.target is not None:
            _require_int("target", self.target)
        if isinstance(self.frame_interval, bool) or not isinstance(self.frame_interval, (int, float)):
            raise ConfigError(f"must be a number, got {self.frame_interval!r}",
                              field="frame_interval")
        if self.grid_width < 1:
            raise ConfigError("must be at least 1", field="grid_width")
        if self.grid_height < 1:
            raise ConfigError("must be at least 1", field="grid_height")
        if self.frame_interval <= 0:
            raise ConfigError("must be positive", field="frame_interval")
        if self.difficulty not in DIFFICULTIES:
            raise ConfigError(
                f"must be one of {sorted(DIFFICULTIES)}, got {self.difficulty!r}",
                field="difficulty",
            )
        if self.round_target < 2:
            raise ConfigError("round target must be at least 2", field="target")
        if self.round_target < self.arity:
            raise ConfigError(
                f"round target {self.round_target} cannot be split into {self.arity} candies",
                field="target",
            )
        if self.collision_tolerance < 0:
            raise ConfigError("must not be negative", field="collision_tolerance")
        if self.initial_growth < 0:
            raise ConfigError("must not be negative", field="initial_growth")
        if self.point_size < 1:
            raise ConfigError("must be at least 1", field="point_size")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "GameConfig":
        """Build a config from a flat dict, rejecting keys it doesn't know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigError(f"unknown config keys: {', '.join(unknown)}")
        return cls(**mapping)

    @property
    def round_target(self) -> int:
        if self.target is not None:
            return self.target
        return DIFFICULTIES[self.difficulty]["target"]

    @property
    def arity(self) -> int:
        return DIFFICULTIES[self.difficulty]["arity"]

    @property
    def label(self) -> str:
        return DIFFICULTIES[self.difficulty]["label"]
