"""
renderer.py: Drawing surface abstraction and the scene painters built on it.

The simulation only ever talks to a Canvas; PygameCanvas is the one real
implementation and owns nothing beyond a borrowed pygame.Surface.
"""

import math
from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Sequence, Tuple

import pygame

from .constants import CANVAS_WIDTH, CANVAS_HEIGHT, GROUND_HEIGHT, PIPE_GAP, PIPE_WIDTH
from .data_models import CollisionPoint, Pipe, ScorePopup
from .physics_core import Bird

Color = Tuple[int, int, int]
Point = Tuple[float, float]

SKY = (112, 197, 206)
GROUND = (139, 115, 85)
GROUND_LINE = (74, 74, 74)
PIPE_BODY = (34, 139, 34)
PIPE_BORDER = (0, 100, 0)
PIPE_HIGHLIGHT = (50, 205, 50)
BIRD_BODY = (255, 215, 0)
BIRD_BEAK = (255, 165, 0)
OUTLINE = (51, 51, 51)
WHITE = (255, 255, 255)
GOLD = (255, 215, 0)
HIT = (255, 100, 100)
PANEL = (20, 30, 45)

PIPE_CAP_HEIGHT = 25
PIPE_CAP_OVERHANG = 4


class Canvas(ABC):
    """Abstract drawing capability handed to the game core."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT

    @abstractmethod
    def clear(self, color: Color):
        ...

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color):
        ...

    @abstractmethod
    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color, width: int = 1):
        ...

    @abstractmethod
    def circle(self, center: Point, radius: float, color: Color, width: int = 0):
        ...

    @abstractmethod
    def ellipse(self, x: float, y: float, w: float, h: float, color: Color):
        ...

    @abstractmethod
    def path(self, points: Sequence[Point], color: Color, closed: bool = True):
        ...

    @abstractmethod
    def text(self, message: str, pos: Point, size: int, color: Color, center: bool = False):
        ...


class PygameCanvas(Canvas):
    def __init__(self, surface: "pygame.Surface"):
        self.surface = surface
        self.width, self.height = surface.get_size()
        self._fonts: Dict[int, "pygame.font.Font"] = {}

    def _font(self, size: int) -> "pygame.font.Font":
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def clear(self, color: Color):
        self.surface.fill(color)

    def fill_rect(self, x, y, w, h, color):
        if w > 0 and h > 0:
            pygame.draw.rect(self.surface, color, (round(x), round(y), round(w), round(h)))

    def stroke_rect(self, x, y, w, h, color, width=1):
        if w > 0 and h > 0:
            pygame.draw.rect(self.surface, color, (round(x), round(y), round(w), round(h)), width)

    def circle(self, center, radius, color, width=0):
        pygame.draw.circle(self.surface, color, (round(center[0]), round(center[1])), round(radius), width)

    def ellipse(self, x, y, w, h, color):
        pygame.draw.ellipse(self.surface, color, (round(x), round(y), round(w), round(h)))

    def path(self, points, color, closed=True):
        pts = [(round(px), round(py)) for px, py in points]
        if closed:
            pygame.draw.polygon(self.surface, color, pts)
        else:
            pygame.draw.lines(self.surface, color, False, pts, 2)

    def text(self, message, pos, size, color, center=False):
        surf = self._font(size).render(message, True, color)
        rect = surf.get_rect()
        if center:
            rect.center = (round(pos[0]), round(pos[1]))
        else:
            rect.topleft = (round(pos[0]), round(pos[1]))
        self.surface.blit(surf, rect)


# ---------- Scene painters ----------

def draw_background(canvas: Canvas, ground_height: float = GROUND_HEIGHT):
    floor_y = canvas.height - ground_height
    canvas.clear(SKY)
    canvas.fill_rect(0, floor_y, canvas.width, ground_height, GROUND)
    canvas.path([(0, floor_y), (canvas.width, floor_y)], GROUND_LINE, closed=False)


def _pipe_segment(canvas: Canvas, x: float, y: float, w: float, h: float, is_top: bool):
    canvas.fill_rect(x, y, w, h, PIPE_BODY)
    canvas.stroke_rect(x, y, w, h, PIPE_BORDER, 2)
    canvas.fill_rect(x + 2, y + 2, w - 4, min(10, h - 4), PIPE_HIGHLIGHT)

    cap_x = x - PIPE_CAP_OVERHANG
    cap_w = w + 2 * PIPE_CAP_OVERHANG
    cap_y = y + h - PIPE_CAP_HEIGHT if is_top else y
    canvas.fill_rect(cap_x, cap_y, cap_w, PIPE_CAP_HEIGHT, PIPE_BODY)
    canvas.stroke_rect(cap_x, cap_y, cap_w, PIPE_CAP_HEIGHT, PIPE_BORDER, 2)
    canvas.fill_rect(cap_x + 2, cap_y + 2, cap_w - 4, 8, PIPE_HIGHLIGHT)


def draw_pipes(canvas: Canvas, pipes: Iterable[Pipe], pipe_width: float = PIPE_WIDTH,
               gap_size: float = PIPE_GAP, ground_height: float = GROUND_HEIGHT):
    for pipe in pipes:
        _pipe_segment(canvas, pipe.x, 0, pipe_width, pipe.gap_y, True)
        bottom_y = pipe.gap_y + gap_size
        _pipe_segment(canvas, pipe.x, bottom_y, pipe_width,
                      canvas.height - bottom_y - ground_height, False)


def draw_bird(canvas: Canvas, bird: Bird, x: Optional[float] = None, y: Optional[float] = None,
              rotation: Optional[float] = None):
    """Body circle plus eye/beak/wing offsets rotated about the centre."""
    cx = bird.x if x is None else x
    cy = bird.y if y is None else y
    angle = math.radians(bird.rotation if rotation is None else rotation)
    cos_a, sin_a = math.cos(angle), math.sin(angle)

    def at(dx: float, dy: float) -> Point:
        return cx + dx * cos_a - dy * sin_a, cy + dx * sin_a + dy * cos_a

    canvas.circle((cx, cy), bird.width / 2, BIRD_BODY)
    canvas.circle((cx, cy), bird.width / 2, OUTLINE, 1)
    canvas.circle(at(5, -3), 3, WHITE)
    canvas.circle(at(6, -3), 1.5, OUTLINE)
    canvas.path([at(8, 0), at(14, 2), at(8, 4)], BIRD_BEAK)
    wx, wy = at(-3, 2)
    canvas.ellipse(wx - 6, wy - 4, 12, 8, BIRD_BEAK)


def draw_score(canvas: Canvas, score: int):
    if score > 0:
        canvas.text(str(score), (canvas.width / 2, 40), 36, WHITE, center=True)


def draw_popups(canvas: Canvas, popups: Iterable[ScorePopup]):
    for popup in popups:
        size = round(20 * (0.5 + popup.progress * 0.5)) + 8
        canvas.text(popup.value, (popup.x, popup.y), size, GOLD, center=True)


def draw_collision(canvas: Canvas, point: CollisionPoint, ticks: int):
    """Pulsing ring of dots at the collision point."""
    max_radius = 30
    radius = (math.sin(ticks * 0.16) + 1) * max_radius / 2
    for i in range(8):
        angle = math.pi * 2 / 8 * i
        canvas.circle((point.x + math.cos(angle) * radius, point.y + math.sin(angle) * radius), 3, HIT)


def draw_start_screen(canvas: Canvas, best_score: int):
    mid = canvas.width / 2
    canvas.text("FLAPPY", (mid, canvas.height * 0.35), 48, WHITE, center=True)
    canvas.text("Space / Click to flap", (mid, canvas.height * 0.48), 22, WHITE, center=True)
    canvas.text("Enter / Click to start", (mid, canvas.height * 0.53), 22, WHITE, center=True)
    canvas.text(f"Best: {best_score:,}", (mid, canvas.height * 0.60), 26, GOLD, center=True)


def draw_game_over(canvas: Canvas, score: int, best_score: int, new_best: bool):
    mid = canvas.width / 2
    top = canvas.height * 0.30
    canvas.fill_rect(mid - 120, top, 240, 170, PANEL)
    canvas.stroke_rect(mid - 120, top, 240, 170, WHITE, 2)
    canvas.text("GAME OVER", (mid, top + 30), 40, HIT, center=True)
    canvas.text(f"Score: {score:,}", (mid, top + 70), 28, WHITE, center=True)
    if new_best:
        canvas.text(f"NEW HIGH SCORE: {best_score:,}", (mid, top + 100), 26, GOLD, center=True)
    else:
        canvas.text(f"Best: {best_score:,}", (mid, top + 100), 26, WHITE, center=True)
    canvas.text("Enter / Click / R to restart", (mid, top + 140), 20, WHITE, center=True)


def draw_debug(canvas: Canvas, fps: float, state: str, score: int):
    canvas.fill_rect(5, 5, 150, 60, PANEL)
    for i, line in enumerate((f"FPS: {fps:.0f}", f"State: {state}", f"Score: {score}")):
        canvas.text(line, (10, 10 + i * 16), 18, WHITE)
