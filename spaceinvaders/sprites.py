"""Sprite sheet slicing."""

from __future__ import annotations

from dataclasses import dataclass

import pygame

from .util import InitError, require

CANNON_X = 1
CANNON_Y = 49
CANNON_WIDTH = 16
CANNON_HEIGHT = 8

CANNON_SHOT_X = 55
CANNON_SHOT_Y = 49
CANNON_SHOT_WIDTH = 1
CANNON_SHOT_HEIGHT = 8

CANNON_SHOT_EXPLOSION_X = 58
CANNON_SHOT_EXPLOSION_Y = 49
CANNON_SHOT_EXPLOSION_WIDTH = 8
CANNON_SHOT_EXPLOSION_HEIGHT = 8

INVADER_EXPLOSION_X = 55
INVADER_EXPLOSION_Y = 1
INVADER_EXPLOSION_WIDTH = 16
INVADER_EXPLOSION_HEIGHT = 8

GLYPH_COUNT = 43
_GLYPH_ORIGIN_X = 1
_GLYPH_ORIGIN_Y = 69
_GLYPH_STEP = 10
_GLYPHS_PER_ROW = 8


@dataclass
class Sprite:
    """A region of the sprite sheet with its size."""

    surface: pygame.Surface
    width: int
    height: int


def cut_sprite(sheet: pygame.Surface, x: int, y: int, width: int, height: int) -> Sprite:
    """Return the sprite at the given rectangle of *sheet*."""
    try:
        surface = sheet.subsurface(pygame.Rect(x, y, width, height))
    except ValueError as exc:
        raise InitError("could not initialise sprite region") from exc
    return Sprite(surface, width, height)


@dataclass
class Sprites:
    """Every sprite the game draws, cut from one sheet."""

    sheet: pygame.Surface
    cannon: Sprite
    invader_1: tuple[Sprite, Sprite]
    invader_2: tuple[Sprite, Sprite]
    invader_3: tuple[Sprite, Sprite]
    mystery: tuple[Sprite, Sprite]
    cannon_shot: tuple[Sprite, Sprite]
    invader_explosion: Sprite
    shot_1: tuple[Sprite, ...]
    shot_2: tuple[Sprite, ...]
    shot_3: tuple[Sprite, ...]
    shot_explosion: Sprite
    barrier: Sprite
    glyphs: tuple[Sprite, ...]
    cannon_hit: tuple[Sprite, Sprite]

    @classmethod
    def from_sheet(cls, sheet: pygame.Surface) -> Sprites:
        """Cut all sprites out of an already loaded sheet."""

        def cut(x: int, y: int, w: int, h: int) -> Sprite:
            return cut_sprite(sheet, x, y, w, h)

        def shot_frames(kind: int) -> tuple[Sprite, ...]:
            return tuple(cut(1 + 20 * kind + 5 * frame, 21, 3, 8) for frame in range(4))

        def glyph(index: int) -> Sprite:
            row, col = divmod(index, _GLYPHS_PER_ROW)
            return cut(
                _GLYPH_ORIGIN_X + _GLYPH_STEP * col,
                _GLYPH_ORIGIN_Y + _GLYPH_STEP * row,
                8,
                8,
            )

        return cls(
            sheet=sheet,
            cannon=cut(CANNON_X, CANNON_Y, CANNON_WIDTH, CANNON_HEIGHT),
            invader_1=(cut(1, 1, 16, 8), cut(1, 11, 16, 8)),
            invader_2=(cut(19, 1, 16, 8), cut(19, 11, 16, 8)),
            invader_3=(cut(37, 1, 16, 8), cut(37, 11, 16, 8)),
            mystery=(cut(1, 39, 16, 8), cut(19, 39, 24, 8)),
            cannon_shot=(
                cut(CANNON_SHOT_X, CANNON_SHOT_Y, CANNON_SHOT_WIDTH, CANNON_SHOT_HEIGHT),
                cut(
                    CANNON_SHOT_EXPLOSION_X,
                    CANNON_SHOT_EXPLOSION_Y,
                    CANNON_SHOT_EXPLOSION_WIDTH,
                    CANNON_SHOT_EXPLOSION_HEIGHT,
                ),
            ),
            invader_explosion=cut(
                INVADER_EXPLOSION_X,
                INVADER_EXPLOSION_Y,
                INVADER_EXPLOSION_WIDTH,
                INVADER_EXPLOSION_HEIGHT,
            ),
            shot_1=shot_frames(0),
            shot_2=shot_frames(1),
            shot_3=shot_frames(2),
            shot_explosion=cut(61, 21, 6, 8),
            barrier=cut(45, 31, 24, 16),
            glyphs=tuple(glyph(i) for i in range(GLYPH_COUNT)),
            cannon_hit=(cut(19, 49, 16, 8), cut(37, 49, 16, 8)),
        )

    @classmethod
    def load(cls, path) -> Sprites:
        """Load the sheet image at *path* and cut it."""
        try:
            sheet = pygame.image.load(str(path))
        except (pygame.error, FileNotFoundError, OSError) as exc:
            raise InitError("could not initialise spritesheet") from exc
        require(sheet, "spritesheet")
        return cls.from_sheet(sheet)