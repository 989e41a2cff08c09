"""Destructible barriers and the scan line at the bottom of the screen."""

from __future__ import annotations

from itertools import product

import pygame

from .util import Hitbox, alpha_mask

BUFFER_W = 224
BUFFER_H = 256

SCAN_LINE_Y = 233

BARRIER_POSITIONS = ((31, 192), (76, 192), (121, 192), (166, 192))
BARRIER_WIDTH = 24
BARRIER_HEIGHT = 16

_WHITE = (255, 255, 255, 255)


def _rgba_copy(surface: pygame.Surface) -> pygame.Surface:
    copy = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    copy.blit(surface, (0, 0), special_flags=pygame.BLEND_RGBA_ADD)
    return copy


class ScanLine:
    """One-pixel line that enemy shots chip away when they hit the ground."""

    def __init__(self) -> None:
        self.original = pygame.Surface((BUFFER_W, 1), pygame.SRCALPHA)
        self.original.fill(_WHITE)
        self.surface = self.original.copy()
        self.visible = False

    def damage(self, x: int) -> None:
        """Erase a two-pixel gap starting at *x*, clamped to the line."""
        x = min(max(x, 0), BUFFER_W - 2)
        self.surface.fill((0, 0, 0, 0), pygame.Rect(x, 0, 2, 1))

    def is_intact(self, x: int) -> bool:
        """True when the pixel at *x* has not been erased."""
        if not 0 <= x < BUFFER_W:
            return False
        return self.surface.get_at((x, 0)).a == 255

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the line onto *surface* when it is visible."""
        if self.visible:
            surface.blit(self.surface, (0, SCAN_LINE_Y))


class Barrier:
    """A shield whose pixels are erased where shots explode."""

    def __init__(self, surface: pygame.Surface, x: int, y: int) -> None:
        self.original = surface
        self.surface = _rgba_copy(surface)
        self.x = x
        self.y = y
        self.hitbox = Hitbox(x, y, x + BARRIER_WIDTH, y + BARRIER_HEIGHT)

    def damage(self, mask: pygame.Surface, x: int, y: int) -> bool:
        """Erase the barrier under *mask* placed at screen position (x, y).

        Brighter mask pixels erase more. Returns False when the mask misses.
        """
        alpha = alpha_mask(mask)
        mask_w, mask_h = alpha.get_size()
        width, height = self.surface.get_size()
        local_x, local_y = x - self.x, y - self.y

        src_x, src_y = max(0, -local_x), max(0, -local_y)
        dest_x, dest_y = max(0, local_x), max(0, local_y)
        draw_w = min(mask_w - src_x, width - dest_x)
        draw_h = min(mask_h - src_y, height - dest_y)
        if draw_w <= 0 or draw_h <= 0:
            return False

        for dy, dx in product(range(draw_h), range(draw_w)):
            strength = alpha.get_at((src_x + dx, src_y + dy)).a
            if not strength:
                continue
            keep = 1 - strength / 255
            target = (dest_x + dx, dest_y + dy)
            pixel = self.surface.get_at(target)
            self.surface.set_at(target, tuple(round(channel * keep) for channel in pixel))
        return True

    def is_solid(self, x: int, y: int) -> bool:
        """True when the screen point (x, y) lies on an opaque barrier pixel."""
        local_x, local_y = x - self.x, y - self.y
        width, height = self.surface.get_size()
        if not (0 <= local_x < width and 0 <= local_y < height):
            return False
        return self.surface.get_at((local_x, local_y)).a == 255

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the barrier in its current state."""
        surface.blit(self.surface, (self.x, self.y))


def create_barriers(sprite) -> list[Barrier]:
    """Create the four barriers from the barrier sprite."""
    return [Barrier(sprite.surface, x, y) for x, y in BARRIER_POSITIONS]