"""
audio.py — Sound effects and background music.

Sound files are optional and expected next to this module in sounds/:
  - background.mp3  looping music, started with the game
  - <cue>.wav       one effect per AudioCue (direction, eat, win, fail, game_over)

Anything missing is logged once and the game runs without it.
"""

from __future__ import annotations

import logging
import os

import pygame

from .renderer import AudioCue

logger = logging.getLogger(__name__)

_SOUND_DIR = os.path.join(os.path.dirname(__file__), "sounds")
_MUSIC_FILE = "background.mp3"


class SoundBoard:
    """Owns the pygame mixer so the audio lifecycle stays in one place."""

    def __init__(self, sound_dir: str = _SOUND_DIR):
        self.sound_dir = sound_dir
        self._sounds: dict[AudioCue, pygame.mixer.Sound] = {}
        self._music_ok = False
        self.enabled = self._init_mixer()
        if self.enabled:
            self._load_effects()
            self._music_ok = self._load_music()

    # ── Public API ───────────────────────────────────────────────
    def play(self, cue: AudioCue) -> None:
        if cue is AudioCue.BACKGROUND:
            self.play_music()
            return
        sound = self._sounds.get(cue)
        if sound is not None:
            sound.play()

    def play_music(self) -> None:
        """Start looping playback from the beginning."""
        if self._music_ok:
            pygame.mixer.music.play(loops=-1)

    def pause_music(self) -> None:
        """Freeze playback at current position."""
        if self._music_ok and pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()

    def resume_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.unpause()

    def stop(self) -> None:
        if self._music_ok:
            pygame.mixer.music.stop()

    # ── Loading ──────────────────────────────────────────────────
    def _init_mixer(self) -> bool:
        try:
            pygame.mixer.init()
            return True
        except pygame.error as exc:
            logger.warning("[audio] no mixer available (%s); running silent", exc)
            return False

    def _load_effects(self) -> None:
        for cue in AudioCue:
            if cue is AudioCue.BACKGROUND:
                continue
            path = os.path.join(self.sound_dir, f"{cue.value}.wav")
            if not os.path.isfile(path):
                logger.debug("[audio] %s not found; no sound for %s", path, cue.name)
                continue
            try:
                self._sounds[cue] = pygame.mixer.Sound(path)
            except pygame.error as exc:
                logger.warning("[audio] could not load %s: %s", path, exc)

    def _load_music(self) -> bool:
        """Load the background track. Returns True on success, False on any failure."""
        path = os.path.join(self.sound_dir, _MUSIC_FILE)
        if not os.path.isfile(path):
            logger.warning("[audio] %s not found; running without music", path)
            return False
        try:
            pygame.mixer.music.load(path)
            pygame.mixer.music.set_volume(0.6)
            return True
        except pygame.error as exc:
            logger.warning("[audio] could not load %s: %s", path, exc)
            return False
