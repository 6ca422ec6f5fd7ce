"""
input_router.py: Maps raw pygame input onto the logical game events.
"""

import time
from typing import Callable, Dict, List, Optional

import pygame

from .constants import PRIMARY_COOLDOWN_S

PRIMARY = "primary"
START = "start"
RESTART = "restart"
EVENTS = (PRIMARY, START, RESTART)


class InputRouter:
    """
    Publish/subscribe hub for three events: primary (flap), start, restart.

    Callbacks run synchronously when the event is fed in, possibly between
    frame ticks. Primary events closer together than `cooldown` seconds on
    the monotonic clock are dropped, not queued.
    """

    def __init__(self, cooldown: float = PRIMARY_COOLDOWN_S,
                 clock: Callable[[], float] = time.monotonic):
        self.cooldown = cooldown
        self.clock = clock
        self.callbacks: Dict[str, List[Callable[[], None]]] = {name: [] for name in EVENTS}
        self.enabled = True
        self.is_touching = False
        self.last_primary_time: Optional[float] = None

        # Which event the confirm source (Enter / overlay click) stands for
        # right now; set by whoever owns the overlay.
        self.confirm_resolver: Optional[Callable[[], Optional[str]]] = None

    # ---------- Subscription ----------

    def on(self, event: str, callback: Callable[[], None]):
        self._check_event(event)
        self.callbacks[event].append(callback)

    def off(self, event: str, callback: Callable[[], None]):
        self._check_event(event)
        if callback in self.callbacks[event]:
            self.callbacks[event].remove(callback)

    def clear(self):
        """Drops every subscriber."""
        self.callbacks = {name: [] for name in EVENTS}

    def trigger(self, event: str):
        """Invokes subscribers in order; one failing callback doesn't stop the rest."""
        for callback in list(self.callbacks.get(event, [])):
            try:
                callback()
            except Exception as e:
                print(f"Error in {event} callback: {e!r}")

    @staticmethod
    def _check_event(event: str):
        if event not in EVENTS:
            raise ValueError(f"Unknown input event '{event}', expected one of {EVENTS}")

    # ---------- Logical sources ----------

    def primary(self) -> bool:
        """Fires `primary` unless still cooling down. Returns True if accepted."""
        if not self.enabled:
            return False
        now = self.clock()
        if self.last_primary_time is not None and now - self.last_primary_time < self.cooldown:
            return False
        self.last_primary_time = now
        self.trigger(PRIMARY)
        return True

    def start(self):
        if self.enabled:
            self.trigger(START)

    def restart(self):
        if self.enabled:
            self.trigger(RESTART)

    def confirm(self):
        """Enter key / overlay click: start on the menu, restart on game over."""
        if not self.enabled or self.confirm_resolver is None:
            return
        event = self.confirm_resolver()
        if event is not None:
            self.trigger(event)

    def is_on_cooldown(self) -> bool:
        if self.last_primary_time is None:
            return False
        return self.clock() - self.last_primary_time < self.cooldown

    def set_enabled(self, enabled: bool):
        self.enabled = enabled

    def reset(self):
        """Clears timing and touch state; subscribers are kept."""
        self.last_primary_time = None
        self.is_touching = False

    # ---------- pygame mapping ----------

    def handle_event(self, event: "pygame.event.Event"):
        """Routes one pygame event. Unrelated events are ignored."""
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.primary()
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.confirm()
            elif event.key == pygame.K_r:
                self.restart()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            # SDL mirrors every touch as a left click; FINGERDOWN already covers it
            if event.button == 1 and not getattr(event, "touch", False):
                # The canvas and the overlay share the window: a click flaps
                # while playing and confirms on the menu / game-over screens.
                self.primary()
                self.confirm()
        elif event.type == pygame.FINGERDOWN:
            self.is_touching = True
            self.primary()
            self.confirm()
        elif event.type == pygame.FINGERUP:
            self.is_touching = False
