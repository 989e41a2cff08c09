"""Bitmap font drawing and the typewriter effect."""

from __future__ import annotations

from typing import Sequence

import pygame

from .util import require

FONT_WIDTH = 8
FONT_HEIGHT = 8
NUM_GLYPHS = 43

GLYPH_ORDER = "abcdefghijklmnopqrstuvwxyz0123456789<>=*?- "


def glyph_index(char: str) -> int:
    """Index of the glyph for *char*, case-insensitive."""
    index = GLYPH_ORDER.find(char.lower()) if len(char) == 1 else -1
    if index < 0:
        raise ValueError(f"no glyph for {char!r}")
    return index


def text_width(text: str, spacing: int = 0) -> int:
    """Horizontal advance of *text* drawn with *spacing* between glyphs."""
    return len(text) * (FONT_WIDTH + spacing)


class Font:
    """A fixed-width font made of one surface per glyph."""

    def __init__(self, glyphs: Sequence[pygame.Surface]) -> None:
        glyphs = tuple(glyphs)
        require(len(glyphs) == NUM_GLYPHS, "font")
        self.glyphs = glyphs

    @classmethod
    def from_sprites(cls, sprites) -> Font:
        """Build the font from the glyph sprites of a sprite sheet."""
        return cls(sprite.surface for sprite in sprites.glyphs)

    def draw(self, surface: pygame.Surface, text: str, x: int, y: int, spacing: int = 0) -> None:
        """Draw *text* onto *surface* with its top-left corner at (x, y)."""
        for char in text:
            surface.blit(self.glyphs[glyph_index(char)], (x, y))
            x += FONT_WIDTH + spacing


class Typewriter:
    """Reveals a text one character at a time, pausing between characters."""

    def __init__(self, text: str, delay: int = 10) -> None:
        self.text = text
        self.delay = delay
        self.count = 0
        self._waited = 0

    def visible_text(self) -> str:
        """The part of the text revealed so far."""
        return self.text[: self.count]

    def step(self, font: Font, surface: pygame.Surface, x: int, y: int, spacing: int = 0) -> bool:
        """Draw the revealed part and advance; True once the whole text is shown."""
        font.draw(surface, self.visible_text(), x, y, spacing)
        if self._waited < self.delay:
            self._waited += 1
            return False
        self._waited = 0
        if self.count < len(self.text):
            self.count += 1
            return False
        return True