"""
flappy_solo: single-player flappy game built on a small tick-based simulation.
"""

from .game_states import Phase, PhaseController
from .input_router import InputRouter
from .physics_core import Bird
from .pipe_field import PipeField
from .score import ScoreTracker
from .score_db import Database

__version__ = "0.1.0"
