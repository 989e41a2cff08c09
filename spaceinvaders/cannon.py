"""The player's laser cannon and its shot."""

from __future__ import annotations

from dataclasses import dataclass, field

import pygame

from .barrier import BUFFER_H, BUFFER_W
from .sprites import (
    CANNON_HEIGHT,
    CANNON_SHOT_EXPLOSION_HEIGHT,
    CANNON_SHOT_EXPLOSION_WIDTH,
    CANNON_SHOT_HEIGHT,
    CANNON_SHOT_WIDTH,
    CANNON_WIDTH,
)
from .util import Hitbox

LIMIT_SHOT_Y = 35
MAX_LIVES = 6
STARTING_LIVES = 3
CANNON_SPEED = 1
CANNON_MAX_X = BUFFER_W - CANNON_WIDTH
HIT_CYCLES = 6
SHOTS_PER_MYSTERY = 15

_SMOOTHING_OFFSETS = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


@dataclass
class CannonShot:
    """The cannon's single shot; frame 0 is the bolt, frame 1 the explosion."""

    sprites: tuple
    x: int = 0
    y: int = 0
    frame: int = 0
    active: bool = False
    vel_y: int = 4
    exploding: bool = False
    count: int = 0
    count_max: int = 15
    hitbox: Hitbox = field(default_factory=Hitbox)
    hit: bool = False
    shots_fired: int = 0
    impact_x: int = 0
    impact_y: int = 0

    def _refresh(self) -> None:
        self.hitbox = Hitbox(
            self.x,
            self.y,
            self.x + CANNON_SHOT_EXPLOSION_WIDTH,
            self.y + CANNON_SHOT_EXPLOSION_HEIGHT,
        )
        self.impact_x = self.x + CANNON_SHOT_WIDTH // 2
        self.impact_y = self.y


class Cannon:
    """The player's cannon: movement, firing and the hit animation."""

    def __init__(self, sprites) -> None:
        self.sprite = sprites.cannon
        self.x = (BUFFER_W - self.sprite.width) // 2
        self.y = BUFFER_H - 39
        self.lives = STARTING_LIVES
        self.shot = CannonShot(sprites=tuple(sprites.cannon_shot), x=self.x, y=self.y)
        self.shot._refresh()
        self.hitbox = Hitbox()
        self._refresh_hitbox()
        self.active = True
        self.was_hit = False
        self.hit_sprites = tuple(sprites.cannon_hit)
        self.hit_frame = 0
        self.hit_counter = 0
        self.hit_counter_max = 5
        self.hit_cycles = 0

    def _refresh_hitbox(self) -> None:
        self.hitbox = Hitbox(self.x, self.y, self.x + CANNON_WIDTH, self.y + CANNON_HEIGHT)

    def update(self, audio, keyboard, fleet, barriers) -> bool:
        """Advance one frame; True when the cannon has run out of lives."""
        if not self.active:
            return False
        if self.was_hit:
            fleet.stunned = True
            if self.hit_cycles < HIT_CYCLES:
                if self.hit_counter < self.hit_counter_max:
                    self.hit_counter += 1
                else:
                    if self.hit_frame == 0:
                        self.hit_frame = 1
                    else:
                        self.hit_frame = 0
                        self.hit_cycles += 1
                    self.hit_counter = 0
            elif self.lives > 0:
                self.was_hit = False
                fleet.stunned = False
            else:
                self.active = False
                return True
            return False

        if keyboard.is_down(pygame.K_RIGHT):
            self.x += CANNON_SPEED
        if keyboard.is_down(pygame.K_LEFT):
            self.x -= CANNON_SPEED
        if keyboard.is_down(pygame.K_SPACE) or keyboard.is_down(pygame.K_z):
            self.fire(audio)
            self.check_mystery_ship(fleet, audio)
        self.check_barrier_collision(barriers)
        self.update_shot()
        self.x = min(max(self.x, 0), CANNON_MAX_X)
        self._refresh_hitbox()
        return False

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the cannon, its shot, or the hit animation."""
        if not self.active:
            return
        if self.was_hit:
            surface.blit(self.hit_sprites[self.hit_frame].surface, (self.x, self.y))
            return
        self.draw_shot(surface)
        surface.blit(self.sprite.surface, (self.x, self.y))

    def fire(self, audio) -> bool:
        """Launch the shot unless one is already in flight; True if fired."""
        shot = self.shot
        if shot.active or shot.hit:
            return False
        audio.play("cannon_shot", 0.5)
        shot.shots_fired += 1
        shot.frame = 0
        shot.count = 0
        shot.active = True
        shot.x = self.x + CANNON_WIDTH // 2
        shot.y = self.y - CANNON_SHOT_HEIGHT // 2
        shot._refresh()
        return True

    def update_shot(self) -> None:
        """Move the shot up, or run its explosion countdown."""
        shot = self.shot
        if not shot.active:
            return
        if shot.exploding:
            shot.count += 1
            if shot.count >= shot.count_max:
                shot.exploding = False
                shot.count = 0
                shot.active = False
            return
        shot.y -= shot.vel_y
        shot._refresh()
        if shot.y <= LIMIT_SHOT_Y:
            shot.exploding = True
            shot.frame = 1

    def shot_hit(self) -> None:
        """Remove the shot after it struck a target."""
        self.shot.active = False
        self.shot.hit = True

    def shot_collision_ended(self) -> None:
        """Allow firing again once the target's explosion is over."""
        self.shot.hit = False

    def draw_shot(self, surface: pygame.Surface) -> None:
        """Draw the shot if it is in flight."""
        shot = self.shot
        if shot.active:
            surface.blit(shot.sprites[shot.frame].surface, (shot.x, shot.y))

    def check_mystery_ship(self, fleet, audio) -> None:
        """Send the mystery ship after every fifteenth shot."""
        if fleet.mystery.alive:
            self.shot.shots_fired = 0
        fired = self.shot.shots_fired
        if fired and fired % SHOTS_PER_MYSTERY == 0:
            fleet.spawn_mystery(audio)

    def hit(self, audio) -> None:
        """Lose a life and start the hit animation."""
        if self.lives <= 0:
            return
        self.lives -= 1
        self.was_hit = True
        self.hit_cycles = 0
        self.hit_counter = 0
        self.hit_frame = 0
        audio.play("cannon_explosion", 0.5)

    def check_barrier_collision(self, barriers) -> bool:
        """Explode the shot on any barrier pixel it touches; True on impact."""
        shot = self.shot
        if not shot.active:
            return False
        hitbox = shot.hitbox
        impact_x, impact_y = shot.impact_x, shot.impact_y
        base_x = shot.x
        explosion = shot.sprites[1].surface
        collided = False
        for barrier in barriers:
            if not hitbox.collides(barrier.hitbox):
                continue
            if not barrier.is_solid(impact_x, impact_y):
                continue
            shot.y -= 2
            for dx, dy in _SMOOTHING_OFFSETS:
                barrier.damage(explosion, base_x + dx, shot.y + dy)
            shot.exploding = True
            shot.frame = 1
            collided = True
        return collided