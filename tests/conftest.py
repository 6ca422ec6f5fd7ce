"""Shared fixtures for the flappy_solo test suite."""
import os
import random
import sys
from pathlib import Path

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flappy_solo.game_states import PhaseController
from flappy_solo.input_router import InputRouter
from flappy_solo.physics_core import Bird
from flappy_solo.pipe_field import PipeField
from flappy_solo.renderer import Canvas
from flappy_solo.score import ScoreTracker
from flappy_solo.score_db import Database


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingCanvas(Canvas):
    """Canvas that remembers every draw call instead of drawing."""

    def __init__(self, width: int = 320, height: int = 568):
        self.width = width
        self.height = height
        self.calls = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def clear(self, color):
        self._record("clear", color)

    def fill_rect(self, x, y, w, h, color):
        self._record("fill_rect", x, y, w, h, color)

    def stroke_rect(self, x, y, w, h, color, width=1):
        self._record("stroke_rect", x, y, w, h, color, width)

    def circle(self, center, radius, color, width=0):
        self._record("circle", center, radius, color, width)

    def ellipse(self, x, y, w, h, color):
        self._record("ellipse", x, y, w, h, color)

    def path(self, points, color, closed=True):
        self._record("path", list(points), color, closed)

    def text(self, message, pos, size, color, center=False):
        self._record("text", message, pos, size, color, center)

    def texts(self):
        return [args[0] for name, args in self.calls if name == "text"]


class RecordingSound:
    def __init__(self):
        self.played = []

    def play(self, sound_id):
        self.played.append(sound_id)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def clock():
    return FakeClock(100.0)


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.close()


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def sound():
    return RecordingSound()


@pytest.fixture
def router(clock):
    return InputRouter(clock=clock)


@pytest.fixture
def controller(rng, db, canvas, sound, router):
    bird = Bird()
    pipes = PipeField(rng=rng)
    score = ScoreTracker(store=db, sound=sound)
    return PhaseController(bird, pipes, score, router, canvas=canvas, sound=sound, rng=rng)
