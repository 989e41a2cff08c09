"""The arcade cabinet artwork and the placement of the game screen inside it."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pygame

from .barrier import BUFFER_H, BUFFER_W
from .util import InitError, ease_in_out_sine

DEFAULT_OVERLAY_PATH = Path("assets/img/arcade-overlay.png")
ZOOM_MIN = 1.0
SCREEN_VARIANCE = 10


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    return int(numerator / denominator)


@dataclass
class Overlay:
    """Cabinet image and the rectangle of its screen, in image pixels."""

    surface: pygame.Surface
    img_w: int = 1920
    img_h: int = 1080
    screen_w: int = 786
    screen_h: int = 538
    screen_x: int = 543
    screen_y: int = 367
    _cache: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def load(cls, path=DEFAULT_OVERLAY_PATH) -> Overlay:
        """Load the cabinet image at *path*."""
        try:
            surface = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise InitError("could not initialise overlay") from exc
        return cls(surface)

    def _scaled(self, size: tuple[int, int]) -> pygame.Surface:
        scaled = self._cache.get(size)
        if scaled is None:
            scaled = pygame.transform.scale(self.surface, size)
            self._cache.clear()
            self._cache[size] = scaled
        return scaled


@dataclass(frozen=True)
class Layout:
    """Where the overlay and the game buffer go on the window."""

    offset_x: int
    offset_y: int
    overlay_w: int
    overlay_h: int
    screen_x: int
    screen_y: int
    screen_w: int
    screen_h: int
    draw_x: int
    draw_y: int
    draw_w: int
    draw_h: int


def compute_layout(overlay: Overlay, screen_width: int, screen_height: int,
                   zoom: float, zoom_max: float) -> Layout:
    """Place the overlay and game buffer on a window of the given size.

    At the minimum zoom the whole cabinet is centred; at *zoom_max* the
    cabinet's screen is centred instead.
    """
    if zoom_max <= ZOOM_MIN:
        raise ValueError(f"zoom_max must exceed {ZOOM_MIN}, got {zoom_max}")
    progress = (zoom - ZOOM_MIN) / (zoom_max - ZOOM_MIN)
    progress = min(max(progress, 0.0), 1.0)
    curve = ease_in_out_sine(progress)
    eased_zoom = ZOOM_MIN + (zoom_max - ZOOM_MIN) * curve

    base_scale = min(screen_width / overlay.img_w, screen_height / overlay.img_h)
    scale = base_scale * eased_zoom

    overlay_w = int(overlay.img_w * scale)
    overlay_h = int(overlay.img_h * scale)
    screen_x = int(overlay.screen_x * scale)
    screen_y = int(overlay.screen_y * scale)
    screen_w = int(overlay.screen_w * scale)
    screen_h = int(overlay.screen_h * scale)

    centre_x = screen_x + screen_w // 2
    centre_y = screen_y + screen_h // 2

    min_offset_x = _trunc_div(screen_width - overlay_w, 2)
    min_offset_y = _trunc_div(screen_height - overlay_h, 2)
    max_offset_x = screen_width // 2 - centre_x
    max_offset_y = screen_height // 2 - centre_y

    offset_x = int(min_offset_x + (max_offset_x - min_offset_x) * curve)
    offset_y = int(min_offset_y + (max_offset_y - min_offset_y) * curve)

    game_scale = min(screen_w / BUFFER_W, screen_h / BUFFER_H)
    draw_w = int(BUFFER_W * game_scale)
    draw_h = int(BUFFER_H * game_scale)
    draw_x = offset_x + screen_x + _trunc_div(screen_w - draw_w, 2)
    draw_y = offset_y + screen_y + _trunc_div(screen_h - draw_h, 2) - SCREEN_VARIANCE

    return Layout(
        offset_x=offset_x,
        offset_y=offset_y,
        overlay_w=overlay_w,
        overlay_h=overlay_h,
        screen_x=screen_x,
        screen_y=screen_y,
        screen_w=screen_w,
        screen_h=screen_h,
        draw_x=draw_x,
        draw_y=draw_y,
        draw_w=draw_w,
        draw_h=draw_h,
    )


def draw_buffer_and_overlay(overlay: Overlay, display, zoom: float, zoom_max: float) -> Layout:
    """Draw the display's buffer scaled into the cabinet screen, then the cabinet."""
    window = display.window
    layout = compute_layout(overlay, *window.get_size(), zoom, zoom_max)
    window.fill((0, 0, 0))
    if layout.draw_w > 0 and layout.draw_h > 0:
        scaled = pygame.transform.scale(display.buffer, (layout.draw_w, layout.draw_h))
        window.blit(scaled, (layout.draw_x, layout.draw_y))
    if layout.overlay_w > 0 and layout.overlay_h > 0:
        window.blit(
            overlay._scaled((layout.overlay_w, layout.overlay_h)),
            (layout.offset_x, layout.offset_y),
        )
    return layout