"""The game window, its low-resolution buffer and the colour bands."""

from __future__ import annotations

from pathlib import Path

import pygame

from .barrier import BUFFER_H, BUFFER_W
from .overlay import draw_buffer_and_overlay
from .util import InitError, require

WINDOW_TITLE = "Space Invaders"
DEFAULT_ICON_PATH = Path("assets/img/icon.png")
FRAME_RATE = 60

_GREEN = (0, 255, 0, 255)
_RED = (255, 0, 0, 255)

# (x, y, width, height, colour) of each tinted band.
_BANDS = (
    (0, 190, BUFFER_W, 45, _GREEN),
    (20, 235, BUFFER_W - 20, 10, _GREEN),
    (0, 32, BUFFER_W, 32, _RED),
)


class Display:
    """A window and the fixed-size buffer the game draws into."""

    def __init__(self, window: pygame.Surface, buffer: pygame.Surface) -> None:
        self.window = window
        self.buffer = buffer
        self._clock = pygame.time.Clock()

    @classmethod
    def create(cls, icon_path=DEFAULT_ICON_PATH) -> Display:
        """Open a full-screen window at the desktop resolution."""
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise InitError("could not initialise display") from exc
        icon_path = Path(icon_path)
        if icon_path.is_file():
            try:
                pygame.display.set_icon(pygame.image.load(str(icon_path)))
            except pygame.error:
                pass
        try:
            window = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        except pygame.error as exc:
            raise InitError("could not initialise display") from exc
        require(window, "display")
        pygame.display.set_caption(WINDOW_TITLE)
        buffer = pygame.Surface((BUFFER_W, BUFFER_H))
        return cls(window, buffer)

    def _on_screen(self) -> bool:
        return pygame.display.get_init() and pygame.display.get_surface() is self.window

    def pre_draw(self) -> None:
        """Clear the buffer to black before drawing a frame."""
        self.buffer.fill((0, 0, 0))

    def post_draw(self, overlay, zoom: float, zoom_max: float) -> None:
        """Compose the buffer and overlay into the window and present it."""
        draw_buffer_and_overlay(overlay, self, zoom, zoom_max)
        if self._on_screen():
            pygame.display.flip()
            self._clock.tick(FRAME_RATE)

    def close(self) -> None:
        """Close the window."""
        if self._on_screen():
            pygame.display.quit()


def draw_color_bands(surface: pygame.Surface) -> None:
    """Tint the screen in the cellophane bands of the original cabinet."""
    for x, y, width, height, colour in _BANDS:
        surface.fill(colour, pygame.Rect(x, y, width, height), special_flags=pygame.BLEND_RGBA_MULT)