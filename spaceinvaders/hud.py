"""Lives, score and high score drawn around the playfield."""

from __future__ import annotations

import pygame

from .barrier import BUFFER_W
from .text import FONT_HEIGHT, FONT_WIDTH, text_width

LIVES_TEXT_X = 8
LIVES_TEXT_Y = 234
SCORE_TEXT_X = 25
SCORE_TEXT_Y = 15

SCORE_LABEL = "Score<1>"
HIGHSCORE_LABEL = "HI-Score"
SCORE_DIGITS = 4


def format_score(value: int) -> str:
    """Score as shown on screen: zero-padded to four digits."""
    return f"{value:0{SCORE_DIGITS}d}"


class Hud:
    """Draws the live values of a cannon and a score."""

    def __init__(self, cannon, score, font, sprites) -> None:
        self.cannon = cannon
        self.score = score
        self.font = font
        self.cannon_sprite = sprites.cannon

    def draw(self, surface: pygame.Surface) -> None:
        """Draw lives, score and high score onto *surface*."""
        lives = self.cannon.lives
        self.font.draw(surface, str(lives), LIVES_TEXT_X, LIVES_TEXT_Y)
        x = LIVES_TEXT_X + FONT_WIDTH * 2
        for _ in range(lives - 1):
            surface.blit(self.cannon_sprite.surface, (x, LIVES_TEXT_Y))
            x += self.cannon_sprite.width

        value_y = SCORE_TEXT_Y + FONT_HEIGHT + 1
        self.font.draw(surface, SCORE_LABEL, SCORE_TEXT_X, SCORE_TEXT_Y)
        self.font.draw(surface, format_score(self.score.current), SCORE_TEXT_X, value_y)

        label_x = BUFFER_W - text_width(HIGHSCORE_LABEL) - SCORE_TEXT_X
        value_x = BUFFER_W - SCORE_DIGITS * FONT_WIDTH - SCORE_TEXT_X
        self.font.draw(surface, HIGHSCORE_LABEL, label_x, SCORE_TEXT_Y)
        self.font.draw(surface, format_score(self.score.highscore), value_x, value_y)