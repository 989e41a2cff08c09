"""Keyboard state tracking across frames."""

from __future__ import annotations

from collections import defaultdict

import pygame

KEY_SEEN = 1
KEY_DOWN = 2

TICK_EVENT = pygame.USEREVENT


class Keyboard:
    """Tracks which keys are held, keeping short taps visible for one frame."""

    def __init__(self) -> None:
        self._keys: defaultdict[int, int] = defaultdict(int)

    def press(self, key: int) -> None:
        """Record that *key* went down."""
        self._keys[key] = KEY_DOWN | KEY_SEEN

    def release(self, key: int) -> None:
        """Record that *key* went up."""
        self._keys[key] &= ~KEY_DOWN

    def tick(self) -> None:
        """Mark the end of a frame: taps already seen are forgotten."""
        for key in self._keys:
            self._keys[key] &= ~KEY_SEEN

    def handle(self, event: pygame.event.Event) -> None:
        """Update the state from a key or frame-tick event."""
        if event.type == TICK_EVENT:
            self.tick()
        elif event.type == pygame.KEYDOWN:
            self.press(event.key)
        elif event.type == pygame.KEYUP:
            self.release(event.key)

    def is_down(self, key: int) -> bool:
        """True while *key* is held or was tapped since the last tick."""
        return self._keys.get(key, 0) != 0