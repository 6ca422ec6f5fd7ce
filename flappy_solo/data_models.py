"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass

from .constants import SCORE_POPUP_MS, SCORE_POPUP_X, SCORE_POPUP_Y


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box, top-left anchored."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Pipe:
    """A top/bottom barrier pair; gap_y is the top edge of the gap."""
    id: int
    x: float
    gap_y: float
    scored: bool = False


@dataclass(frozen=True)
class CollisionPoint:
    """Where the bird was when the run ended (presentation only)."""
    x: float
    y: float


@dataclass
class ScorePopup:
    """Floating "+1" shown after a pipe is cleared."""
    value: str = "+1"
    x: float = SCORE_POPUP_X
    y: float = SCORE_POPUP_Y
    age_ms: float = 0.0
    lifetime_ms: float = SCORE_POPUP_MS

    @property
    def progress(self) -> float:
        return min(self.age_ms / self.lifetime_ms, 1.0)

    @property
    def expired(self) -> bool:
        return self.age_ms >= self.lifetime_ms
