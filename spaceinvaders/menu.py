"""Cabinet power-on animation, the main menu and the game-over screen."""

from __future__ import annotations

import pygame

from .barrier import BUFFER_W
from .display import draw_color_bands
from .text import FONT_HEIGHT, Typewriter, text_width
from .util import ease_in_quad

BLACK_FRAMES = 30
GROW_FRAMES = 15
FADE_FRAMES = 60
BLOOM_WIDTH = 5
TYPE_DELAY = 10

TITLE = "SPACE INVADERS"
TITLE_Y = 60
PLAY_TEXT = "<Enter>Jogar"
PLAY_Y = 130
QUIT_TEXT = "<ESC>Sair"
QUIT_Y = PLAY_Y + FONT_HEIGHT + 20

GAME_OVER_TEXT = "GAME OVER"
GAME_OVER_Y = 50
BACK_TEXT = "<ENTER>MENU"
BACK_Y = 80


def _centered_x(text: str) -> int:
    return (BUFFER_W - text_width(text)) // 2


def _fill_band(surface: pygame.Surface, top: float, bottom: float, alpha: float) -> None:
    top_px, bottom_px = round(top), round(bottom)
    if bottom_px <= top_px:
        return
    band = pygame.Surface((surface.get_width(), bottom_px - top_px), pygame.SRCALPHA)
    band.fill((255, 255, 255, round(255 * min(max(alpha, 0.0), 1.0))))
    surface.blit(band, (0, top_px))


def power_on_animation(audio, display, overlay, zoom: float, zoom_max: float) -> None:
    """Play the CRT switch-on: darkness, a growing white line, then a fade to black."""
    _, height = display.buffer.get_size()

    for _ in range(BLACK_FRAMES):
        display.pre_draw()
        display.post_draw(overlay, zoom, zoom_max)

    audio.play("arcade_on", 1.0)
    middle = height / 2
    for frame in range(GROW_FRAMES):
        t = frame / GROW_FRAMES
        half = ease_in_quad(t) * height / 2
        display.pre_draw()
        for spread in range(BLOOM_WIDTH, 0, -1):
            _fill_band(display.buffer, middle - half - spread, middle + half + spread, 0.05 * spread * t)
        _fill_band(display.buffer, middle - half, middle + half, t)
        display.post_draw(overlay, zoom, zoom_max)

    for frame in range(FADE_FRAMES):
        level = round(255 * (1.0 - frame / FADE_FRAMES))
        display.pre_draw()
        display.buffer.fill((level, level, level))
        display.post_draw(overlay, zoom, zoom_max)

    audio.start_static()


def typewrite_main_menu(font, display, overlay, zoom: float, zoom_max: float, completed: bool) -> bool:
    """Type out the title and menu options unless already done; returns True."""
    if completed:
        return True
    shown: list[tuple[str, int, int]] = []
    for text, y in ((TITLE, TITLE_Y), (PLAY_TEXT, PLAY_Y), (QUIT_TEXT, QUIT_Y)):
        x = _centered_x(text)
        writer = Typewriter(text, TYPE_DELAY)
        finished = False
        while not finished:
            display.pre_draw()
            for done_text, done_x, done_y in shown:
                font.draw(display.buffer, done_text, done_x, done_y)
            finished = writer.step(font, display.buffer, x, y)
            display.post_draw(overlay, zoom, zoom_max)
        shown.append((text, x, y))
    return True


def typewrite_game_over(font, display, overlay, zoom: float, zoom_max: float) -> None:
    """Type the game-over message over the frozen last frame of the round."""
    for text, y in ((GAME_OVER_TEXT, GAME_OVER_Y), (BACK_TEXT, BACK_Y)):
        x = _centered_x(text)
        writer = Typewriter(text, TYPE_DELAY)
        finished = False
        while not finished:
            finished = writer.step(font, display.buffer, x, y)
            draw_color_bands(display.buffer)
            display.post_draw(overlay, zoom, zoom_max)