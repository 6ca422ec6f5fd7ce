"""
score.py: Current score, persisted best score and the games-played counter.
"""

import sqlite3
from typing import Dict, List, Optional

from .audio import SoundBoard
from .constants import (
    BEST_SCORE_KEY, GAMES_PLAYED_KEY, SCORE_PER_PIPE, SOUND_SCORE
)
from .data_models import ScorePopup
from .score_db import Database


class ScoreTracker:
    """
    Keeps score for one session of runs.

    The best score is read once from `store` at construction; reads that fail
    give 0 and writes that fail are reported and dropped, so scoring always
    carries on in memory.
    """

    def __init__(self, store: Optional[Database] = None,
                 sound: Optional[SoundBoard] = None,
                 score_per_pipe: int = SCORE_PER_PIPE):
        self.store = store
        self.sound = sound
        self.score_per_pipe = score_per_pipe
        self.current_score = 0
        self.best_score = self._load_int(BEST_SCORE_KEY)
        self.popups: List[ScorePopup] = []

    # ---------- Scoring ----------

    def increment(self):
        """Adds one pipe's worth and raises/persists the best score in the same step."""
        self.current_score += self.score_per_pipe
        self.popups.append(ScorePopup(value=f"+{self.score_per_pipe}"))
        if self.sound:
            self.sound.play(SOUND_SCORE)

        if self.current_score > self.best_score:
            self.best_score = self.current_score
            self._save_int(BEST_SCORE_KEY, self.best_score)

    def reset(self):
        self.current_score = 0
        self.popups = []

    def is_new_best(self) -> bool:
        # A positive tie counts: increment() has already raised the best
        return (self.current_score > self.best_score
                or (self.current_score == self.best_score and self.current_score > 0))

    def get_current_score(self) -> int:
        return self.current_score

    def get_best_score(self) -> int:
        return self.best_score

    def set_best(self, score: int):
        self.best_score = max(0, int(score))
        self._save_int(BEST_SCORE_KEY, self.best_score)

    # ---------- Games played ----------

    def games_played(self) -> int:
        return self._load_int(GAMES_PLAYED_KEY)

    def increment_games_played(self):
        self._save_int(GAMES_PLAYED_KEY, self.games_played() + 1)

    def stats(self) -> Dict:
        return {
            "current_score": self.current_score,
            "best_score": self.best_score,
            "is_new_best": self.is_new_best(),
            "games_played": self.games_played(),
        }

    @staticmethod
    def format_score(score: int) -> str:
        return f"{score:,}"

    # ---------- Popups ----------

    def update_popups(self, delta_ms: float):
        """Ages popups by elapsed time and floats them upward one pixel per tick."""
        for popup in self.popups:
            popup.age_ms += delta_ms
            popup.y -= 1
        self.popups = [p for p in self.popups if not p.expired]

    # ---------- Persistence ----------

    def _load_int(self, key: str) -> int:
        if self.store is None:
            return 0
        try:
            saved = self.store.get(key)
            return max(0, int(saved)) if saved is not None else 0
        except (sqlite3.Error, ValueError) as e:
            print(f"Could not load '{key}': {e}")
            return 0

    def _save_int(self, key: str, value: int):
        if self.store is None:
            return
        try:
            self.store.set(key, str(value))
        except sqlite3.Error as e:
            print(f"Could not save '{key}': {e}")
