"""
view.py — View layer.

Draws what the engine reports onto an off-screen scene surface; the
controller presents that scene (plus a phase overlay) once per display frame.
Engine frames and display frames run at different rates, so the scene keeps
the last engine frame until the next one replaces it.

Public API:
    GameView(screen, config, sounds)  — bind to a pygame surface
    GameView.window_size(config)      — pixel size needed for a config
    view.present(phase)               — show the current scene
plus the Renderer methods the engine calls.
"""

from __future__ import annotations

from typing import Sequence

import pygame

from .audio import SoundBoard
from .config import (
    SCOREBOARD_H, GRID_COL, SNAKE_ALT, EYE_COL, BOARD_COL, LINE_COL,
    GameConfig,
)
from .model import Direction, Phase, Point
from .renderer import AudioCue, Renderer, StatusSignal

_STATUS_FACES = {
    StatusSignal.NEUTRAL: ":|",
    StatusSignal.SAD:     ":(",
    StatusSignal.HAPPY:   ":D",
}

_MARGIN = 15


class GameView(Renderer):
    """Renders the board, the snake, the candies and the number-line scoreboard."""

    # ── Construction ─────────────────────────────────────────────
    def __init__(self, screen: pygame.Surface, config: GameConfig,
                 sounds: SoundBoard | None = None):
        self.screen = screen
        self.config = config
        self.sounds = sounds
        self.status = StatusSignal.NEUTRAL
        self.cell = config.point_size
        self.field_w = config.grid_width * self.cell
        self.field_h = config.grid_height * self.cell
        self.scene = pygame.Surface(self.window_size(config), 0, 32)
        self._init_fonts()
        self._build_static_surfaces()

    @staticmethod
    def window_size(config: GameConfig) -> tuple[int, int]:
        return (config.grid_width * config.point_size,
                config.grid_height * config.point_size + SCOREBOARD_H)

    # ── Renderer ─────────────────────────────────────────────────
    def clear(self) -> None:
        self.scene.fill(self.config.background_color,
                        (0, SCOREBOARD_H, self.field_w, self.field_h))
        self.scene.blit(self._grid_surf, (0, SCOREBOARD_H))

    def draw_snake(self, body: Sequence[Point], alive: bool, direction: Direction) -> None:
        radius = max(1, int(self.cell * 0.45))
        for i, point in enumerate(body):
            color = self.config.snake_color if i % 2 == 0 else SNAKE_ALT
            center = self._center(point)
            pygame.draw.circle(self.scene, color, center, radius)
            pygame.draw.circle(self.scene, (0, 0, 0), center, radius, 1)
        if body:
            self._draw_eye(body[0], alive, direction)

    def draw_candy(self, position: Point, value: int) -> None:
        center = self._center(position)
        pygame.draw.circle(self.scene, self.config.candy_color, center,
                           max(1, int(self.cell * 0.45)))
        label = self.font_small.render(str(value), True, self.config.score_text_color)
        self.scene.blit(label, label.get_rect(center=center))

    def draw_score(self, score: int, high_score: int, target: int, count: int) -> None:
        pygame.draw.rect(self.scene, BOARD_COL, (0, 0, self.field_w, SCOREBOARD_H))
        text_col = self.config.score_text_color

        # High score top-left, score top-right, status face in the middle
        hs = self.font_big.render(str(high_score), True, text_col)
        self.scene.blit(hs, hs.get_rect(topleft=(_MARGIN, 8)))
        sc = self.font_big.render(str(score), True, text_col)
        self.scene.blit(sc, sc.get_rect(topright=(self.field_w - _MARGIN, 8)))
        face = self.font_big.render(_STATUS_FACES[self.status], True, text_col)
        self.scene.blit(face, face.get_rect(midtop=(self.field_w // 2, 8)))

        # Number line 0..target with a marker at the running count
        line_y = SCOREBOARD_H - 40
        x0, x1 = _MARGIN, self.field_w - _MARGIN
        tick_w = (x1 - x0) / target
        pygame.draw.line(self.scene, LINE_COL, (x0, line_y), (x1, line_y), 2)
        for i in range(target + 1):
            x = int(x0 + tick_w * i)
            pygame.draw.line(self.scene, LINE_COL, (x, line_y - 5), (x, line_y + 5), 1)
            num = self.font_tiny.render(str(i), True, text_col)
            self.scene.blit(num, num.get_rect(midtop=(x, line_y + 8)))
        marker_x = int(x0 + tick_w * min(count, target))
        marker_col = self.config.candy_color if count > target else self.config.snake_color
        pygame.draw.circle(self.scene, marker_col, (marker_x, line_y), 7)

    def set_status(self, status: StatusSignal) -> None:
        self.status = status

    def cue(self, cue: AudioCue) -> None:
        if self.sounds is not None:
            self.sounds.play(cue)

    # ── Presentation ─────────────────────────────────────────────
    def present(self, phase: Phase | None) -> None:
        self.screen.blit(self.scene, (0, 0))
        if phase is Phase.READY:
            self._draw_overlay("READY", "PRESS AN ARROW KEY")
        elif phase is Phase.PAUSED:
            self._draw_overlay("PAUSED", "PRESS  P  TO RESUME")
        pygame.display.flip()

    # ── Private helpers ──────────────────────────────────────────
    def _center(self, point: Point) -> tuple[int, int]:
        return (point.x * self.cell + self.cell // 2,
                SCOREBOARD_H + point.y * self.cell + self.cell // 2)

    def _draw_eye(self, head: Point, alive: bool, direction: Direction) -> None:
        cx, cy = self._center(head)
        # Nudge the eye forward and to the snake's left
        along, side = self.cell * 0.125, self.cell * 0.15
        ex = int(cx + direction.dx * along + direction.dy * side)
        ey = int(cy + direction.dy * along - direction.dx * side)
        r = max(1, int(self.cell * 0.125))
        if alive:
            pygame.draw.circle(self.scene, EYE_COL, (ex, ey), r)
        else:
            pygame.draw.line(self.scene, EYE_COL, (ex - r, ey - r), (ex + r, ey + r), 2)
            pygame.draw.line(self.scene, EYE_COL, (ex + r, ey - r), (ex - r, ey + r), 2)

    def _draw_overlay(self, title: str, hint: str) -> None:
        surf = pygame.Surface((self.field_w, self.field_h), pygame.SRCALPHA)
        surf.fill((5, 5, 12, 140))
        self.screen.blit(surf, (0, SCOREBOARD_H))
        cy = SCOREBOARD_H + self.field_h // 2
        t = self.font_big.render(title, True, EYE_COL)
        self.screen.blit(t, t.get_rect(center=(self.field_w // 2, cy - 16)))
        h = self.font_small.render(hint, True, EYE_COL)
        self.screen.blit(h, h.get_rect(center=(self.field_w // 2, cy + 16)))

    def _build_static_surfaces(self) -> None:
        # Grid (drawn once, alpha so BG shows through slightly)
        self._grid_surf = pygame.Surface((self.field_w, self.field_h), pygame.SRCALPHA)
        for x in range(self.config.grid_width + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (x * self.cell, 0), (x * self.cell, self.field_h))
        for y in range(self.config.grid_height + 1):
            pygame.draw.line(self._grid_surf, (*GRID_COL, 160),
                             (0, y * self.cell), (self.field_w, y * self.cell))

    def _init_fonts(self) -> None:
        specs = [
            ("font_big",   "courier", 24, True),
            ("font_small", "courier", 16, True),
            ("font_tiny",  "courier", 11, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
