"""Shared helpers: hitboxes, easing curves, random ranges and image masks."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from itertools import product

import pygame


class InitError(RuntimeError):
    """Raised when a resource the game needs could not be created."""


def require(condition, description: str) -> None:
    """Raise InitError naming *description* unless *condition* is truthy."""
    if not condition:
        raise InitError(f"could not initialise {description}")


@dataclass
class Hitbox:
    """Axis-aligned rectangle given by two corners, edges inclusive."""

    x1: int = 0
    y1: int = 0
    x2: int = 0
    y2: int = 0

    def collides(self, other: Hitbox) -> bool:
        """Return True when the two boxes overlap or touch."""
        return not (
            self.x1 > other.x2
            or self.x2 < other.x1
            or self.y1 > other.y2
            or self.y2 < other.y1
        )


def collides(first: Hitbox, second: Hitbox) -> bool:
    """Return True when *first* and *second* overlap or touch."""
    return first.collides(second)


def ease_in_out_sine(t: float) -> float:
    """Sine ease-in-out curve over [0, 1]."""
    return -(math.cos(math.pi * t) - 1) / 2


def ease_in_quad(t: float) -> float:
    """Quadratic ease-in curve."""
    return t * t


def random_int(low: int, high: int) -> int:
    """Random integer between *low* and *high*, both included."""
    if high < low:
        raise ValueError(f"empty range: {low}..{high}")
    return random.randint(low, high)


def random_float(low: float, high: float) -> float:
    """Random float between *low* and *high*."""
    return low + random.random() * (high - low)


def alpha_mask(surface: pygame.Surface) -> pygame.Surface:
    """Return a white surface whose alpha follows the grey level of *surface*."""
    width, height = surface.get_size()
    mask = pygame.Surface((width, height), pygame.SRCALPHA)
    for y, x in product(range(height), range(width)):
        r, g, b, _ = surface.get_at((x, y))
        intensity = (r + g + b) / 3.0 / 255.0
        mask.set_at((x, y), (255, 255, 255, int(intensity * 255)))
    return mask