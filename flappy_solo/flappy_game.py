#!/usr/bin/env python3
"""
flappy_game.py

Host for the single-player game: pygame window, frame clock, event pump.
Calls PhaseController.update(dt) then render() once per frame.
"""

import argparse
import random
import sqlite3
import sys
import time
from typing import Optional

import pygame

from .audio import SoundBoard
from .constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, DB_FILE, PERF_LOG_EVERY_FRAMES, RENDER_FPS
)
from .game_states import PhaseController
from .input_router import InputRouter
from .physics_core import Bird
from .pipe_field import PipeField
from .renderer import PygameCanvas, draw_debug
from .score import ScoreTracker
from .score_db import Database


def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="flappy-solo")
    p.add_argument("--seed", type=int, default=None,
                   help="Seed for pipe placement. Omit for a random run.")
    p.add_argument("--db", default=DB_FILE,
                   help="SQLite file for the best score (':memory:' to keep nothing).")
    p.add_argument("--sounds", default=None,
                   help="Directory holding jump.wav / score.wav / hit.wav.")
    p.add_argument("--mute", action="store_true", help="Disable sound effects.")
    p.add_argument("--debug", action="store_true", help="Show FPS/state overlay and log performance.")
    return p.parse_args(argv)


def open_database(db_file: str) -> Database:
    """Opens the score database, falling back to memory if the file is unusable."""
    try:
        return Database(db_file)
    except sqlite3.Error as e:
        print(f"Could not open {db_file} ({e}); scores will not be saved.")
        return Database(":memory:")


class FlappyGame:
    def __init__(self, seed: Optional[int] = None, db_file: str = DB_FILE,
                 sound_dir: Optional[str] = None, mute: bool = False, debug: bool = False):
        pygame.init()
        self.screen = pygame.display.set_mode((CANVAS_WIDTH, CANVAS_HEIGHT))
        pygame.display.set_caption("Flappy")
        self.canvas = PygameCanvas(self.screen)

        rng = random.Random(seed)
        self.db = open_database(db_file)
        self.sound = SoundBoard(sound_dir, enabled=not mute)

        # --- Game Logic ---
        self.bird = Bird()
        self.pipes = PipeField(canvas_width=CANVAS_WIDTH, canvas_height=CANVAS_HEIGHT, rng=rng)
        self.score = ScoreTracker(store=self.db, sound=self.sound)
        self.router = InputRouter()
        self.controller = PhaseController(
            self.bird, self.pipes, self.score, self.router,
            canvas=self.canvas, sound=self.sound, rng=rng)

        # Time Management
        self.clock = pygame.time.Clock()
        self.debug = debug
        self.running = False
        self.paused = False
        self.fps = 0.0
        self.frame_count = 0
        self.perf_start = 0.0

    def run(self):
        """The main execution loop."""
        print("Starting game...")
        self.running = True
        self.perf_start = time.perf_counter()

        try:
            while self.running:
                delta_ms = self.clock.tick(RENDER_FPS)
                self._pump_events()
                if self.paused:
                    continue

                self.controller.update(delta_ms)
                self.controller.render()
                if self.debug:
                    self._debug_frame()
                pygame.display.flip()
        finally:
            self.running = False
            self.stop()

    def _pump_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.WINDOWMINIMIZED and self.controller.is_playing():
                print("Game paused (window minimized)")
                self.paused = True
            elif event.type == pygame.WINDOWRESTORED and self.paused:
                print("Game resumed")
                self.paused = False
                self.clock.tick()
            else:
                self.router.handle_event(event)

    def _debug_frame(self):
        self.frame_count += 1
        self.fps = self.clock.get_fps()
        draw_debug(self.canvas, self.fps, self.controller.phase.value,
                   self.score.get_current_score())

        if self.frame_count % PERF_LOG_EVERY_FRAMES == 0:
            elapsed_ms = (time.perf_counter() - self.perf_start) * 1000
            avg_frame = elapsed_ms / self.frame_count
            print(f"Performance: Avg FPS: {1000 / avg_frame:.2f}, Frame Time: {avg_frame:.2f}ms")

    def stop(self):
        print("Stopping game...")
        self.controller.close()
        self.db.close()
        pygame.quit()


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        game = FlappyGame(seed=args.seed, db_file=args.db, sound_dir=args.sounds,
                          mute=args.mute, debug=args.debug)
    except pygame.error as e:
        print(f"Failed to initialize game: {e}")
        return 1
    game.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
