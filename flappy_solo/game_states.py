"""
game_states.py: Menu / playing / game-over state machine driving the simulation.
"""

import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, ClassVar, Dict, Optional, Union

from . import renderer
from .audio import SoundBoard
from .constants import (
    BIRD_START_X, BIRD_START_Y, CANVAS_HEIGHT, FLOOR_Y, GRAVITY_ACCEL,
    MENU_BIRD_X, MENU_BIRD_START_Y, MENU_BIRD_FLOOR_Y, MENU_BIRD_REBOUND,
    MENU_PIPE_CHANCE, SOUND_HIT, SOUND_JUMP
)
from .data_models import CollisionPoint
from .input_router import InputRouter, PRIMARY, RESTART, START
from .physics_core import Bird
from .pipe_field import PipeField
from .renderer import Canvas
from .score import ScoreTracker


class Phase(Enum):
    MENU = "menu"
    PLAYING = "playing"
    ENDED = "game_over"


@dataclass
class MenuState:
    """Decorative preview bird; shares gravity with the real one but nothing else."""
    phase: ClassVar[Phase] = Phase.MENU
    preview_y: float = MENU_BIRD_START_Y
    preview_velocity: float = 0.0


@dataclass
class PlayingState:
    phase: ClassVar[Phase] = Phase.PLAYING


@dataclass
class EndedState:
    phase: ClassVar[Phase] = Phase.ENDED
    collision_point: Optional[CollisionPoint] = None
    new_best: bool = False


GameState = Union[MenuState, PlayingState, EndedState]


class PhaseController:
    """
    Owns phase transitions and dispatches update()/render() to the current
    phase. The bird, pipes, score and input router are built by the host and
    only referenced here.

    Input callbacks mutate the bird and the phase directly, whenever they
    arrive. No invariant spans more than one field, so a callback landing
    between two ticks leaves the model consistent.
    """

    def __init__(self, bird: Bird, pipes: PipeField, score: ScoreTracker,
                 router: InputRouter, canvas: Optional[Canvas] = None,
                 sound: Optional[SoundBoard] = None,
                 floor_y: float = FLOOR_Y, screen_bottom: float = CANVAS_HEIGHT,
                 start_pos=(BIRD_START_X, BIRD_START_Y),
                 rng: Optional[random.Random] = None):
        self.bird = bird
        self.pipes = pipes
        self.score = score
        self.router = router
        self.canvas = canvas
        self.sound = sound
        self.floor_y = floor_y
        self.screen_bottom = screen_bottom
        self.start_pos = start_pos
        self.rng = rng or random.Random()
        self.ticks = 0

        self._updaters: Dict[Phase, Callable[[float], None]] = {
            Phase.MENU: self._update_menu,
            Phase.PLAYING: self._update_playing,
            Phase.ENDED: self._update_ended,
        }
        self._renderers: Dict[Phase, Callable[[Canvas], None]] = {
            Phase.MENU: self._render_menu,
            Phase.PLAYING: self._render_playing,
            Phase.ENDED: self._render_ended,
        }

        self.state: GameState = MenuState()
        self._setup_input_callbacks()
        self._enter_menu()

    # ---------- Input ----------

    def _setup_input_callbacks(self):
        self.router.on(START, self._on_start)
        self.router.on(RESTART, self._on_restart)
        self.router.on(PRIMARY, self._on_primary)
        self.router.confirm_resolver = self._confirm_target

    def _on_start(self):
        if self.phase is Phase.MENU:
            self.start_game()

    def _on_restart(self):
        if self.phase is Phase.ENDED:
            self.restart_game()

    def _on_primary(self):
        if self.phase is Phase.PLAYING:
            self.bird.apply_jump()
            self._play(SOUND_JUMP)

    def _confirm_target(self) -> Optional[str]:
        if self.phase is Phase.MENU:
            return START
        if self.phase is Phase.ENDED:
            return RESTART
        return None

    # ---------- Transitions ----------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def collision_point(self) -> Optional[CollisionPoint]:
        return self.state.collision_point if isinstance(self.state, EndedState) else None

    @property
    def celebrating_best(self) -> bool:
        return isinstance(self.state, EndedState) and self.state.new_best

    def _set_state(self, state: GameState):
        previous = self.state.phase
        self.state = state
        print(f"State changed: {previous.value} -> {state.phase.value}")

    def _enter_menu(self):
        self._reset_game_objects()
        self.state = MenuState()

    def start_game(self):
        """Menu -> playing. Pipes already on screen stay where they are."""
        self.router.reset()
        self._set_state(PlayingState())
        self._enter_playing()

    def restart_game(self):
        self._reset_game_objects()
        self.router.reset()
        self._set_state(PlayingState())
        self._enter_playing()

    def _enter_playing(self):
        self.score.reset()
        self.score.increment_games_played()

    def _end_run(self, point: Optional[CollisionPoint]):
        self._set_state(EndedState(collision_point=point, new_best=self.score.is_new_best()))
        self._play(SOUND_HIT)

    def _reset_game_objects(self):
        self.bird.reset(*self.start_pos)
        self.pipes.reset()
        self.score.reset()

    def close(self):
        self.router.clear()
        self.router.confirm_resolver = None

    # ---------- Update ----------

    def update(self, delta_ms: float):
        self.ticks += 1
        self._updaters[self.phase](delta_ms)

    def _update_menu(self, delta_ms: float):
        menu = self.state
        menu.preview_velocity += GRAVITY_ACCEL
        menu.preview_y += menu.preview_velocity
        if menu.preview_y > MENU_BIRD_FLOOR_Y:
            menu.preview_y = MENU_BIRD_FLOOR_Y
            menu.preview_velocity = MENU_BIRD_REBOUND

        # Background pipes only; nothing here scores or collides
        if self.rng.random() < MENU_PIPE_CHANCE:
            self.pipes.generate()
        self.pipes.advance()

    def _update_playing(self, delta_ms: float):
        self.bird.integrate()
        self.pipes.advance()

        if self.pipes.check_score(self.bird.x):
            self.score.increment()
        self.score.update_popups(delta_ms)

        point = self._check_collisions()
        if point is not None:
            self._end_run(point)

    def _check_collisions(self) -> Optional[CollisionPoint]:
        hit = (self.pipes.collides_with(self.bird.bounds())
               or self.bird.is_grounded(self.floor_y)
               or self.bird.is_out_of_bounds(self.screen_bottom))
        return CollisionPoint(self.bird.x, self.bird.y) if hit else None

    def _update_ended(self, delta_ms: float):
        self.score.update_popups(delta_ms)
        # Let the bird drop to the ground, then keep bouncing in place
        if not self.bird.is_grounded(self.floor_y):
            self.bird.integrate()
        else:
            self.bird.settle()

    # ---------- Render ----------

    def render(self):
        if self.canvas is None:
            return
        renderer.draw_background(self.canvas, self.screen_bottom - self.floor_y)
        self._renderers[self.phase](self.canvas)

    def _render_menu(self, canvas: Canvas):
        renderer.draw_pipes(canvas, self.pipes.pipes, self.pipes.pipe_width, self.pipes.gap_size,
                            self.pipes.ground_height)
        wobble = math.degrees(math.sin(self.ticks * 0.033) * 0.1)
        renderer.draw_bird(canvas, self.bird, x=MENU_BIRD_X, y=self.state.preview_y, rotation=wobble)
        renderer.draw_start_screen(canvas, self.score.get_best_score())

    def _render_playing(self, canvas: Canvas):
        renderer.draw_pipes(canvas, self.pipes.pipes, self.pipes.pipe_width, self.pipes.gap_size,
                            self.pipes.ground_height)
        renderer.draw_bird(canvas, self.bird)
        renderer.draw_score(canvas, self.score.get_current_score())
        renderer.draw_popups(canvas, self.score.popups)

    def _render_ended(self, canvas: Canvas):
        self._render_playing(canvas)
        if self.state.collision_point is not None:
            renderer.draw_collision(canvas, self.state.collision_point, self.ticks)
        renderer.draw_game_over(canvas, self.score.get_current_score(),
                                self.score.get_best_score(), self.state.new_best)

    # ---------- Queries ----------

    def is_playing(self) -> bool:
        return self.phase is Phase.PLAYING

    def is_game_over(self) -> bool:
        return self.phase is Phase.ENDED

    def is_in_menu(self) -> bool:
        return self.phase is Phase.MENU

    def _play(self, sound_id: str):
        if self.sound:
            self.sound.play(sound_id)
