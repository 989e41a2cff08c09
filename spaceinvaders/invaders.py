"""The invader fleet, the mystery ship and the invaders' shots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from itertools import chain

import pygame

from .barrier import BUFFER_H, BUFFER_W, SCAN_LINE_Y
from .sounds import MOVE_SOUNDS
from .util import Hitbox, random_int

ROWS = 5
COLUMNS = 11
START_X = 24
START_Y = 64
FINAL_Y = BUFFER_H - 17
VERTICAL_SPACING = 8

INVADER_WIDTH = 16
INVADER_HEIGHT = 8

MAX_SHOTS = 4
SHOT_WIDTH = 3
SHOT_HEIGHT = 8
SHOT_SPEED = 2
FIRE_CHANCE = 10
FRAMES_PER_SPRITE = 10
SHOT_ANIMATION_LENGTH = 3 * FRAMES_PER_SPRITE
EXPLOSION_FRAME = 4 * FRAMES_PER_SPRITE

MYSTERY_Y = 50
SPAWN_PAUSE_MS = 20

_SMOOTHING_OFFSETS = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


class ShotType(IntEnum):
    """The three animations an invader shot can have."""

    TYPE_1 = 1
    TYPE_2 = 2
    TYPE_3 = 3


class InvaderKind(IntEnum):
    """Invader rows by point value, plus the mystery ship."""

    INVADER_1 = 1
    INVADER_2 = 2
    INVADER_3 = 3
    MYSTERY = 4


class Outcome(Enum):
    """State of the round after a fleet update."""

    PLAYING = "playing"
    LOST = "lost"
    WON = "won"


@dataclass
class Invader:
    """One invader; frames 0 and 1 animate, the last sprite is its explosion."""

    kind: InvaderKind
    sprites: tuple
    x: int = 0
    y: int = 0
    w: int = INVADER_WIDTH
    h: int = INVADER_HEIGHT
    frame: int = 0
    alive: bool = True
    hitbox: Hitbox = field(default_factory=Hitbox)
    hit: bool = False

    def _refresh_hitbox(self) -> None:
        self.hitbox = Hitbox(self.x + 2, self.y, self.x + 2 + self.w - 4, self.y + self.h)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the invader while alive or exploding."""
        if not self.hit and not self.alive:
            return
        surface.blit(self.sprites[self.frame].surface, (self.x, self.y))


@dataclass
class InvaderShot:
    """A falling shot; *frame* counts ticks, a sprite lasts ten of them."""

    sprites: tuple = ()
    x: int = 0
    y: int = 0
    w: int = SHOT_WIDTH
    h: int = SHOT_HEIGHT
    active: bool = False
    hitbox: Hitbox = field(default_factory=Hitbox)
    frame: int = 0
    explosion_max: int = 15
    explosion_counter: int = 0
    hit: bool = False
    impact_x: int = 0
    impact_y: int = 0

    def _refresh(self) -> None:
        self.hitbox = Hitbox(self.x, self.y, self.x + self.w, self.y + self.h)
        self.impact_x = self.x + self.w // 2
        self.impact_y = self.y + self.h

    def _explode(self) -> None:
        self.hit = True
        self.explosion_counter = self.explosion_max
        self.frame = EXPLOSION_FRAME


class InvaderShots:
    """A fixed pool of shots the invaders can have on screen at once."""

    def __init__(self) -> None:
        self.max_shots = MAX_SHOTS
        self.active_count = 0
        self.shots = [InvaderShot() for _ in range(self.max_shots)]

    def try_fire(self, invader: Invader, sprites) -> bool:
        """Maybe fire a shot from *invader*; True when one was launched."""
        if self.active_count >= self.max_shots:
            return False
        if random_int(0, 1000) > FIRE_CHANCE:
            return False
        shot_type = ShotType(random_int(1, 3))
        frames = {
            ShotType.TYPE_1: sprites.shot_1,
            ShotType.TYPE_2: sprites.shot_2,
            ShotType.TYPE_3: sprites.shot_3,
        }[shot_type]
        shot = next((s for s in self.shots if not s.active), None)
        if shot is None:
            return False
        shot.active = True
        shot.w = SHOT_WIDTH
        shot.h = SHOT_HEIGHT
        shot.x = invader.x + invader.w // 2 - shot.w
        shot.y = invader.y + invader.h
        shot.sprites = (*frames[:4], sprites.shot_explosion)
        shot.frame = 0
        shot.explosion_counter = 0
        shot.explosion_max = 15
        shot.hit = False
        shot._refresh()
        self.active_count += 1
        return True

    def update(self, cannon, barriers, line, audio) -> None:
        """Move the shots and resolve hits on barriers, ground, cannon and its shot."""
        self.check_barrier_collision(barriers)
        for shot in self.shots:
            if shot.explosion_counter > 0:
                shot.explosion_counter -= 1
                continue
            if shot.hit:
                self.active_count -= 1
                shot.active = False
                shot.hit = False
                continue
            if not shot.active:
                continue
            shot.y += SHOT_SPEED
            shot.frame += 1
            shot._refresh()
            if shot.frame >= SHOT_ANIMATION_LENGTH:
                shot.frame = 0

            if shot.y + shot.h >= SCAN_LINE_Y:
                shot._explode()
                line.damage(shot.x)

            if shot.hitbox.collides(cannon.hitbox):
                shot._explode()
                cannon.hit(audio)

            if cannon.shot.active and shot.hitbox.collides(cannon.shot.hitbox):
                cannon.shot.active = False
                shot._explode()

    def draw(self, surface: pygame.Surface) -> None:
        """Draw every active shot."""
        for shot in self.shots:
            if shot.active:
                sprite = shot.sprites[shot.frame // FRAMES_PER_SPRITE]
                surface.blit(sprite.surface, (shot.x, shot.y))

    def check_barrier_collision(self, barriers) -> bool:
        """Explode shots whose tip reaches an intact barrier pixel; True on impact."""
        collided = False
        for shot in self.shots:
            if shot.hit or not shot.active:
                continue
            for barrier in barriers:
                if not shot.hitbox.collides(barrier.hitbox):
                    continue
                if not barrier.is_solid(shot.impact_x, shot.impact_y):
                    continue
                shot.y += shot.h
                explosion = shot.sprites[4].surface
                for dx, dy in _SMOOTHING_OFFSETS:
                    barrier.damage(explosion, shot.x + dx, shot.y + dy)
                shot._explode()
                collided = True
        return collided


class Fleet:
    """The grid of invaders, the mystery ship and their shots."""

    def __init__(self, sprites, game_speed: float = 1.0) -> None:
        row_sprites = {
            InvaderKind.INVADER_1: sprites.invader_1,
            InvaderKind.INVADER_2: sprites.invader_2,
            InvaderKind.INVADER_3: sprites.invader_3,
        }
        self.invaders: list[list[Invader]] = []
        y = START_Y
        for row in range(ROWS):
            if row == 0:
                kind = InvaderKind.INVADER_1
            elif row <= 2:
                kind = InvaderKind.INVADER_2
            else:
                kind = InvaderKind.INVADER_3
            frames = row_sprites[kind]
            line = []
            for col in range(COLUMNS):
                invader = Invader(
                    kind=kind,
                    sprites=(frames[0], frames[1], sprites.invader_explosion),
                    x=START_X + col * INVADER_WIDTH,
                    y=y,
                )
                invader._refresh_hitbox()
                line.append(invader)
            self.invaders.append(line)
            y += INVADER_HEIGHT + VERTICAL_SPACING

        self.vel_x = 4
        self.vel_y = 16
        self.min_delay = 5
        self.max_delay = 60
        self.move_delay = self.max_delay
        self.move_counter = 0
        self.alive_count = ROWS * COLUMNS
        self.moving = True
        self.explosion_max = 15
        self.explosion_counter = 0

        self.mystery = Invader(
            kind=InvaderKind.MYSTERY,
            sprites=tuple(sprites.mystery),
            alive=False,
        )
        self.mystery_delay = 0
        self.mystery_counter = 0
        self.mystery_dir = 1
        self.mystery_explosion_max = 15
        self.mystery_explosion_counter = 0

        self.game_speed = game_speed
        self.shots = InvaderShots()
        self.stunned = False
        self.move_sound = 0

    def _each(self):
        return chain.from_iterable(self.invaders)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the shots, the invaders and the mystery ship."""
        self.shots.draw(surface)
        for invader in self._each():
            invader.draw(surface)
        self.mystery.draw(surface)

    def _shooters(self) -> list[Invader]:
        shooters = []
        for col in range(COLUMNS):
            column = [row[col] for row in self.invaders if row[col].alive]
            if column:
                shooters.append(column[-1])
        return shooters

    def update(self, audio, cannon, sprites, barriers, line, score) -> Outcome:
        """Advance one frame and report whether the round was won or lost."""
        self.update_mystery(cannon, score, audio)
        self.shots.update(cannon, barriers, line, audio)
        if self.stunned:
            return Outcome.PLAYING
        if self.explosion_counter > 0:
            self.explosion_counter -= 1
            return Outcome.PLAYING
        if cannon.shot.hit:
            cannon.shot_collision_ended()

        shooters = self._shooters()
        if shooters:
            shooter = shooters[random_int(0, len(shooters) - 1)]
            self.shots.try_fire(shooter, sprites)

        for invader in self._each():
            invader.hit = False
            if not invader.alive or not cannon.shot.active:
                continue
            if invader.hitbox.collides(cannon.shot.hitbox):
                invader.alive = False
                self.alive_count -= 1
                cannon.shot_hit()
                self.explosion_counter = self.explosion_max
                invader.hit = True
                invader.frame = 2
                score.add(invader.kind, cannon, audio)
                audio.play("invader_explosion", 0.5)

        won = not any(invader.alive for invader in self._each())
        outcome = Outcome.WON if won else Outcome.PLAYING

        if not self.moving:
            return outcome
        self.move_counter += 1
        if self.move_counter < self.move_delay:
            return outcome
        self.move_counter = 0

        self.move_sound = self.move_sound + 1 if self.move_sound < 3 else 0
        audio.play(MOVE_SOUNDS[self.move_sound], 0.7)

        jump = False
        for invader in self._each():
            if not invader.alive:
                continue
            next_x = invader.x + self.vel_x
            if (next_x + invader.w > BUFFER_W or next_x < 0) and not jump:
                self.vel_x = -self.vel_x
                jump = True
            if jump and invader.y + self.vel_y + invader.h > FINAL_Y:
                self.moving = False
                self.stunned = True
                return Outcome.LOST
            ahead = Hitbox(
                invader.x + 2 + self.vel_x,
                invader.y - 4,
                invader.x + 2 + invader.w - 4 + self.vel_x,
                invader.y + invader.h,
            )
            if ahead.collides(cannon.hitbox):
                self.stunned = True
                self.moving = False
                return Outcome.LOST

        for invader in self._each():
            if jump:
                invader.y += self.vel_y
            if invader.frame in (0, 1):
                invader.frame = 1 - invader.frame
            invader.x += self.vel_x
            invader._refresh_hitbox()

        fraction = self.alive_count / (ROWS * COLUMNS)
        intensity = 0.8 * self.game_speed
        ease = (1 - intensity) * fraction + intensity * fraction * fraction
        self.move_delay = int(self.min_delay + (self.max_delay - self.min_delay) * ease)
        return outcome

    def spawn_mystery(self, audio) -> bool:
        """Send the mystery ship from a random side; False if it is already out."""
        if self.mystery.alive:
            return False
        audio.play("mystery", 0.7)
        if random_int(0, 1) == 0:
            self.mystery_dir = 1
            self.mystery.x = -self.mystery.w
        else:
            self.mystery_dir = -1
            self.mystery.x = BUFFER_W + self.mystery.w
        self.mystery.y = MYSTERY_Y
        self.mystery_explosion_counter = 0
        self.mystery.frame = 0
        self.mystery_counter = 0
        self.mystery.alive = True
        return True

    def update_mystery(self, cannon, score, audio) -> bool:
        """Move the mystery ship; True when the cannon's shot destroyed it."""
        if self.mystery_explosion_counter > 0:
            self.mystery_explosion_counter -= 1
            return False
        ship = self.mystery
        if ship.hit:
            ship.hit = False
            cannon.shot_collision_ended()
        if not ship.alive:
            return False
        if self.mystery_counter < self.mystery_delay:
            self.mystery_counter += 1
            return False
        ship.hitbox = Hitbox(ship.x, ship.y, ship.x + ship.w, ship.y + ship.h)
        self.mystery_counter = 0
        ship.x += self.mystery_dir
        if (ship.x > BUFFER_W and self.mystery_dir == 1) or (
            ship.x + ship.w < 0 and self.mystery_dir == -1
        ):
            ship.alive = False

        if not cannon.shot.active or not ship.hitbox.collides(cannon.shot.hitbox):
            return False
        ship.alive = False
        ship.hit = True
        ship.frame = 1
        self.mystery_explosion_counter = self.mystery_explosion_max
        score.add(InvaderKind.MYSTERY, cannon, audio)
        cannon.shot_hit()
        audio.play("invader_explosion", 0.5)
        return True

    def spawn_animation(self, display, overlay, zoom, zoom_max) -> None:
        """Draw the invaders one by one, bottom row first."""
        for row in reversed(self.invaders):
            for invader in row:
                display.buffer.blit(invader.sprites[0].surface, (invader.x, invader.y))
                display.post_draw(overlay, zoom, zoom_max)
                pygame.time.wait(SPAWN_PAUSE_MS)