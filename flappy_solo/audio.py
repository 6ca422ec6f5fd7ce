"""
audio.py: Best-effort sound effects. Nothing here may fail the game.
"""

import os
from typing import Dict, Optional, Set

import pygame

from .constants import SOUND_FILES


class SoundBoard:
    """Fire-and-forget sound triggers keyed by sound id."""

    def __init__(self, sound_dir: Optional[str] = None, enabled: bool = True):
        self.enabled = enabled
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._reported: Set[str] = set()
        if enabled and sound_dir:
            self.load(sound_dir)

    def load(self, sound_dir: str):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as e:
            print(f"Audio unavailable: {e}")
            self.enabled = False
            return

        for sound_id, filename in SOUND_FILES.items():
            path = os.path.join(sound_dir, filename)
            if not os.path.exists(path):
                continue
            try:
                self.sounds[sound_id] = pygame.mixer.Sound(path)
            except (pygame.error, OSError) as e:
                self._report(sound_id, f"Could not load sound '{sound_id}': {e}")

    def play(self, sound_id: str):
        if not self.enabled:
            return
        sound = self.sounds.get(sound_id)
        if sound is None:
            return
        try:
            sound.stop()
            sound.play()
        except pygame.error as e:
            self._report(sound_id, f"Sound '{sound_id}' play failed: {e}")

    def _report(self, sound_id: str, message: str):
        # One line per sound id is enough
        if sound_id not in self._reported:
            self._reported.add(sound_id)
            print(message)
