"""
physics_core.py: The player-controlled bird and its tick-based kinematics.
"""

from dataclasses import dataclass

from .constants import (
    BIRD_START_X, BIRD_START_Y, BIRD_WIDTH, BIRD_HEIGHT,
    GRAVITY_ACCEL, JUMP_IMPULSE, MAX_FALL_VELOCITY, JUMP_ROTATION,
    ROTATION_PER_VELOCITY, ROTATION_MIN, ROTATION_MAX, ROTATION_EASING,
    SETTLE_DAMPING
)
from .data_models import Bounds


@dataclass
class Bird:
    """
    Gravity-driven body with a fixed x. (x, y) is the centre of its box.
    All physics is per tick: one integrate() call is one frame.
    """
    x: float = BIRD_START_X
    y: float = BIRD_START_Y
    velocity: float = 0.0
    rotation: float = 0.0
    target_rotation: float = 0.0

    width: float = BIRD_WIDTH
    height: float = BIRD_HEIGHT
    gravity: float = GRAVITY_ACCEL
    jump_velocity: float = JUMP_IMPULSE
    max_fall_velocity: float = MAX_FALL_VELOCITY

    def integrate(self):
        """Advances one tick of forward-Euler motion under gravity."""
        self.velocity += self.gravity
        self.velocity = min(self.velocity, self.max_fall_velocity)
        self.y += self.velocity

        # Ceiling: the bird cannot leave through the top of the screen
        if self.y < 0:
            self.y = 0.0
            self.velocity = 0.0

        self.target_rotation = max(ROTATION_MIN, min(self.velocity * ROTATION_PER_VELOCITY, ROTATION_MAX))
        self.rotation += (self.target_rotation - self.rotation) * ROTATION_EASING

    def apply_jump(self):
        """Overwrites velocity with the jump impulse; no airborne limit."""
        self.velocity = self.jump_velocity
        self.rotation = JUMP_ROTATION

    def bounds(self) -> Bounds:
        return Bounds(
            x=self.x - self.width / 2,
            y=self.y - self.height / 2,
            width=self.width,
            height=self.height,
        )

    def is_grounded(self, floor_y: float) -> bool:
        return self.y + self.height / 2 >= floor_y

    def is_out_of_bounds(self, floor_y: float) -> bool:
        """True once the whole box has dropped below floor_y."""
        return self.y - self.height / 2 > floor_y

    def reset(self, x: float = BIRD_START_X, y: float = BIRD_START_Y):
        self.x = x
        self.y = y
        self.velocity = 0.0
        self.rotation = 0.0
        self.target_rotation = 0.0

    def settle(self):
        """Damped bounce used after death instead of gravity."""
        self.velocity = -self.velocity * SETTLE_DAMPING
        self.rotation = 0.0
