"""
pipe_field.py: Procedural pipe generation, scrolling, collision and scoring.
"""

import itertools
import random
from typing import List, Optional, Set

from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, GROUND_HEIGHT,
    PIPE_WIDTH, PIPE_GAP, PIPE_SPEED, PIPE_SPACING, PIPE_MIN_MARGIN
)
from .data_models import Bounds, Pipe


class PipeField:
    """
    Ordered pipes scrolling left. Generation is append-only, so the list is
    sorted by ascending x and pipes[0] is the oldest survivor.

    Spawning is driven by the last pipe's x rather than a timer, so spacing
    does not depend on frame timing.
    """

    def __init__(self, canvas_width: float = CANVAS_WIDTH,
                 canvas_height: float = CANVAS_HEIGHT,
                 ground_height: float = GROUND_HEIGHT,
                 pipe_width: float = PIPE_WIDTH,
                 gap_size: float = PIPE_GAP,
                 speed: float = PIPE_SPEED,
                 spacing: float = PIPE_SPACING,
                 min_margin: float = PIPE_MIN_MARGIN,
                 rng: Optional[random.Random] = None):
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height
        self.ground_height = ground_height
        self.pipe_width = pipe_width
        self.gap_size = gap_size
        self.speed = speed
        self.spacing = spacing
        self.min_margin = min_margin
        self.rng = rng or random.Random()

        self.min_gap_y = min_margin
        self.max_gap_y = canvas_height - min_margin - gap_size - ground_height
        if self.max_gap_y < self.min_gap_y:
            raise ValueError(
                f"Canvas height {canvas_height} leaves no room for a {gap_size}px gap "
                f"with {min_margin}px margins (max gap y {self.max_gap_y} < {self.min_gap_y})")

        self.pipes: List[Pipe] = []
        self.scored_ids: Set[int] = set()
        self._ids = itertools.count(1)

    def generate(self) -> Pipe:
        """Appends a new pipe at the right edge with a random gap."""
        gap_y = self.min_gap_y + self.rng.random() * (self.max_gap_y - self.min_gap_y)
        pipe = Pipe(id=next(self._ids), x=float(self.canvas_width), gap_y=gap_y)
        self.pipes.append(pipe)
        return pipe

    def advance(self):
        """Scrolls every pipe, drops the ones fully off-screen, then spawns."""
        for pipe in self.pipes:
            pipe.x -= self.speed

        # Removal must come before the spacing check below
        kept = []
        for pipe in self.pipes:
            if pipe.x + self.pipe_width < 0:
                self.scored_ids.discard(pipe.id)
            else:
                kept.append(pipe)
        self.pipes = kept

        if not self.pipes or self.pipes[-1].x < self.canvas_width - self.spacing:
            self.generate()

    def pipe_hit(self, box: Bounds, pipe: Pipe) -> bool:
        if box.right > pipe.x and box.left < pipe.x + self.pipe_width:
            return box.top < pipe.gap_y or box.bottom > pipe.gap_y + self.gap_size
        return False

    def collides_with(self, box: Bounds) -> bool:
        """
        Strict box overlap against the live pipes, sampled once per tick.
        No sub-stepping: a displacement larger than a pipe's width in one
        tick can pass through it.
        """
        return any(self.pipe_hit(box, pipe) for pipe in self.pipes)

    def check_score(self, bird_x: float) -> Optional[Pipe]:
        """Marks and returns at most one newly passed pipe, oldest first."""
        for pipe in self.pipes:
            if bird_x > pipe.x + self.pipe_width and pipe.id not in self.scored_ids:
                pipe.scored = True
                self.scored_ids.add(pipe.id)
                return pipe
        return None

    def next_ahead(self, bird_x: float) -> Optional[Pipe]:
        for pipe in self.pipes:
            if pipe.x + self.pipe_width > bird_x:
                return pipe
        return None

    def first_pipe(self) -> Optional[Pipe]:
        return self.pipes[0] if self.pipes else None

    def all_pipes(self) -> List[Pipe]:
        return list(self.pipes)

    def has_visible_pipes(self) -> bool:
        return bool(self.pipes)

    def reset(self):
        self.pipes = []
        self.scored_ids.clear()
