"""
main.py — Entry point.

Run with:
    python main.py [--difficulty {1,2,3}]

Requires:
    pip install pygame
"""

from __future__ import annotations

import argparse
import logging

from candysnake.config import DIFFICULTIES, GameConfig
from candysnake.controller import GameController
from candysnake.errors import ConfigError


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    levels = ", ".join(f"{k}={v['label'].lower()}" for k, v in DIFFICULTIES.items())
    parser = argparse.ArgumentParser(
        prog="candysnake",
        description="Steer the snake to candies that add up to the target.",
    )
    parser.add_argument("--difficulty", type=int, default=3, help=f"Difficulty ({levels}).")
    parser.add_argument("--width", type=int, default=30, help="Grid width in cells.")
    parser.add_argument("--height", type=int, default=20, help="Grid height in cells.")
    parser.add_argument("--frame-interval", type=float, default=120,
                        help="Milliseconds between snake steps.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible candies.")
    parser.add_argument("--log-level", default="INFO", type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    ns = _parse_args(argv)
    logging.basicConfig(
        level=ns.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = GameConfig(
            grid_width=ns.width,
            grid_height=ns.height,
            frame_interval=ns.frame_interval,
            difficulty=ns.difficulty,
        )
    except ConfigError as exc:
        raise SystemExit(f"error: {exc}")
    GameController(config, seed=ns.seed).run()


if __name__ == "__main__":
    main()
