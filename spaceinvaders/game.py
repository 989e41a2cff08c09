"""The game loop: main menu, rounds and the command-line entry point."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import pygame

from .barrier import ScanLine, create_barriers
from .cannon import Cannon
from .display import Display, draw_color_bands
from .hud import Hud
from .invaders import Fleet, Outcome
from .keyboard import TICK_EVENT, Keyboard
from .menu import power_on_animation, typewrite_game_over, typewrite_main_menu
from .overlay import Overlay
from .score import HIGHSCORE_FILE, Score
from .sounds import Audio
from .sprites import Sprites
from .text import Font
from .util import InitError

FPS = 60
ZOOM_MAX = 2.0
ZOOM_IN = 1.6
ZOOM_OUT = 1.0
START_DELAY = 120
SPEED_FACTOR = 1.5
SHUTDOWN_PAUSE_MS = 2000

DEFAULT_ASSETS_DIR = Path("assets")
SPRITESHEET_FILE = "space-invaders-og-spritesheet.png"
OVERLAY_FILE = "arcade-overlay.png"
ICON_FILE = "icon.png"


class Game:
    """Owns the shared resources and runs menu, rounds and game over."""

    def __init__(self, assets_dir=DEFAULT_ASSETS_DIR, highscore_path=HIGHSCORE_FILE) -> None:
        self.assets_dir = Path(assets_dir)
        self.highscore_path = Path(highscore_path)
        self.display: Display | None = None
        self.sprites: Sprites | None = None
        self.keyboard = Keyboard()
        self.overlay: Overlay | None = None
        self.font: Font | None = None
        self.audio: Audio = Audio.silent()
        self.zoom = ZOOM_OUT
        self.frames = 0
        self.quit_requested = False
        self.cannon: Cannon | None = None
        self.fleet: Fleet | None = None
        self.barriers: list = []
        self.scan_line: ScanLine | None = None
        self.hud: Hud | None = None

    def _open(self) -> None:
        images = self.assets_dir / "img"
        self.display = Display.create(images / ICON_FILE)
        self.sprites = Sprites.load(images / SPRITESHEET_FILE)
        self.keyboard = Keyboard()
        self.overlay = Overlay.load(images / OVERLAY_FILE)
        self.font = Font.from_sprites(self.sprites)
        self.audio = Audio.load(self.assets_dir / "audio")

    def _present(self) -> None:
        self.display.post_draw(self.overlay, self.zoom, ZOOM_MAX)

    def _draw_round(self, with_fleet: bool = True) -> None:
        buffer = self.display.buffer
        self.display.pre_draw()
        for barrier in self.barriers:
            barrier.draw(buffer)
        if with_fleet:
            self.fleet.draw(buffer)
            self.cannon.draw(buffer)
        self.scan_line.draw(buffer)
        self.hud.draw(buffer)
        draw_color_bands(buffer)

    def play_round(self, score: Score, speed: float) -> Outcome:
        """Play one wave; WON, LOST, or PLAYING when the player quit."""
        self.cannon = Cannon(self.sprites)
        self.fleet = Fleet(self.sprites, speed)
        self.scan_line = ScanLine()
        self.barriers = create_barriers(self.sprites.barrier)
        self.hud = Hud(self.cannon, score, self.font, self.sprites)

        self._draw_round(with_fleet=False)
        self._present()
        self.fleet.spawn_animation(self.display, self.overlay, self.zoom, ZOOM_MAX)

        lost = False
        won = False
        redraw = False
        start_delay = 0
        while True:
            event = pygame.event.wait()
            if event.type == TICK_EVENT:
                if start_delay < START_DELAY:
                    start_delay += 1
                else:
                    if self.keyboard.is_down(pygame.K_ESCAPE):
                        self.quit_requested = True
                    if self.cannon.update(self.audio, self.keyboard, self.fleet, self.barriers):
                        lost = True
                    outcome = self.fleet.update(
                        self.audio, self.cannon, self.sprites, self.barriers, self.scan_line, score
                    )
                    if outcome is Outcome.LOST:
                        lost = True
                    elif outcome is Outcome.WON:
                        won = True
                redraw = True
                self.frames += 1
            elif event.type == pygame.QUIT:
                self.quit_requested = True

            if self.quit_requested:
                return Outcome.PLAYING
            if lost or won:
                break

            self.keyboard.handle(event)

            if redraw and not pygame.event.peek():
                self._draw_round()
                self._present()
                redraw = False

        if won:
            return Outcome.WON

        score.check_highscore()
        self._draw_round()
        typewrite_game_over(self.font, self.display, self.overlay, self.zoom, ZOOM_MAX)
        while True:
            event = pygame.event.wait()
            if event.type == TICK_EVENT:
                self.frames += 1
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN:
                break
            elif event.type == pygame.QUIT:
                self.quit_requested = True
                break
        return Outcome.LOST

    def play(self) -> Score:
        """Zoom into the screen and play waves, faster each time, until lost."""
        speed = 1.0
        score = Score(self.highscore_path)

        while self.zoom < ZOOM_IN:
            self.zoom += 1 / FPS
            self._present()

        while True:
            outcome = self.play_round(score, speed)
            speed *= SPEED_FACTOR
            if self.quit_requested:
                return score
            if outcome is Outcome.LOST:
                break

        while self.zoom > ZOOM_OUT:
            self.zoom -= 1 / FPS
            self._present()
        return score

    def main_menu(self) -> None:
        """Switch the cabinet on and run the menu until the player quits."""
        power_on_animation(self.audio, self.display, self.overlay, self.zoom, ZOOM_MAX)
        pygame.event.clear()
        redraw = False
        completed = False
        while True:
            event = pygame.event.wait()
            if event.type == TICK_EVENT:
                if self.keyboard.is_down(pygame.K_ESCAPE):
                    self.quit_requested = True
                redraw = True
                self.frames += 1
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_RETURN:
                self.play()
                completed = False
            elif event.type == pygame.QUIT:
                self.quit_requested = True

            if redraw and not pygame.event.peek():
                redraw = False
                self.display.pre_draw()
                completed = typewrite_main_menu(
                    self.font, self.display, self.overlay, self.zoom, ZOOM_MAX, completed
                )

            if self.quit_requested:
                self.audio.stop_static()
                self.audio.play("arcade_off", 1.0)
                self.display.pre_draw()
                self._present()
                pygame.time.wait(SHUTDOWN_PAUSE_MS)
                return

            self.keyboard.handle(event)

    def run(self) -> None:
        """Load every resource, run the menu and release everything afterwards."""
        pygame.init()
        try:
            self._open()
            pygame.time.set_timer(TICK_EVENT, round(1000 / FPS))
            while not self.quit_requested:
                self.main_menu()
        finally:
            pygame.time.set_timer(TICK_EVENT, 0)
            if self.display is not None:
                self.display.close()
            pygame.quit()


def main(argv=None) -> int:
    """Start the game; returns the process exit status."""
    parser = argparse.ArgumentParser(prog="spaceinvaders", description="Play Space Invaders.")
    parser.add_argument("--assets", default=str(DEFAULT_ASSETS_DIR), help="directory holding img/ and audio/")
    parser.add_argument("--highscore", default=HIGHSCORE_FILE, help="file keeping the high score")
    args = parser.parse_args(argv)
    try:
        Game(args.assets, args.highscore).run()
    except InitError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())