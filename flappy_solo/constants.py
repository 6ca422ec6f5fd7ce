"""
constants.py: Centralized configuration for the game simulation and host.
"""

# -------- Display Config --------
CANVAS_WIDTH = 320
CANVAS_HEIGHT = 568
GROUND_HEIGHT = 50
FLOOR_Y = CANVAS_HEIGHT - GROUND_HEIGHT   # y of the ground line
RENDER_FPS = 60

# -------- Bird Config (per tick, not per second) --------
BIRD_START_X = 80
BIRD_START_Y = 200
BIRD_WIDTH = 20
BIRD_HEIGHT = 20
GRAVITY_ACCEL = 0.5             # Velocity gained every tick
JUMP_IMPULSE = -8.0             # Velocity set (not added) on a flap
MAX_FALL_VELOCITY = 12.0        # Clamp on downward velocity
JUMP_ROTATION = -20.0           # Degrees, snapped to on a flap
ROTATION_PER_VELOCITY = 3.0
ROTATION_MIN = -30.0
ROTATION_MAX = 90.0
ROTATION_EASING = 0.1           # Tick-based smoothing factor
SETTLE_DAMPING = 0.3            # Post-death bounce on the ground

# -------- Pipe Config --------
PIPE_WIDTH = 40
PIPE_GAP = 100                  # Vertical size of the passable gap
PIPE_SPEED = 2                  # Pixels per tick
PIPE_SPACING = 200              # Distance kept between pipe spawns
PIPE_MIN_MARGIN = 120           # Minimum distance of the gap from the edges

# -------- Input Config --------
PRIMARY_COOLDOWN_S = 0.1        # Monotonic seconds between accepted flaps

# -------- Menu Animation Config --------
MENU_BIRD_X = 160
MENU_BIRD_START_Y = 100
MENU_BIRD_FLOOR_Y = 150
MENU_BIRD_REBOUND = -5.0
MENU_PIPE_CHANCE = 0.01         # Per tick probability of a decorative pipe

# -------- Score Config --------
SCORE_PER_PIPE = 1
SCORE_POPUP_MS = 1000
SCORE_POPUP_X = 160
SCORE_POPUP_Y = 100

# -------- Persistence Config --------
DB_FILE = "flappy_solo.db"
BEST_SCORE_KEY = "bestScore"
GAMES_PLAYED_KEY = "gamesPlayed"

# -------- Audio Config --------
SOUND_JUMP = "jump"
SOUND_SCORE = "score"
SOUND_HIT = "hit"
SOUND_FILES = {
    SOUND_JUMP: "jump.wav",
    SOUND_SCORE: "score.wav",
    SOUND_HIT: "hit.wav",
}

# -------- Debug Config --------
PERF_LOG_EVERY_FRAMES = 600
