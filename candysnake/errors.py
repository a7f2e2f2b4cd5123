"""
errors.py — Exceptions raised by the game core.
"""

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when a GameConfig value is out of range or unknown."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        prefix = f"{field}: " if field is not None else ""
        super().__init__(prefix + str(message))


class PlacementError(RuntimeError):
    """Raised when no grid cell is free of the snake for a new candy."""
