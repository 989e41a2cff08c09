import random
from unittest import mock

import pygame
import pytest

from spaceinvaders.barrier import BUFFER_W, SCAN_LINE_Y, ScanLine, create_barriers
from spaceinvaders.cannon import Cannon
from spaceinvaders.invaders import (
    COLUMNS,
    EXPLOSION_FRAME,
    FINAL_Y,
    ROWS,
    Fleet,
    InvaderKind,
    InvaderShots,
    Outcome,
)
from spaceinvaders.score import POINTS_INVADER_1, Score
from spaceinvaders.sounds import Audio
from spaceinvaders.sprites import Sprites
from spaceinvaders.util import Hitbox


@pytest.fixture
def sprites():
    sheet = pygame.Surface((80, 130), pygame.SRCALPHA)
    sheet.fill((255, 255, 255, 255))
    return Sprites.from_sheet(sheet)


@pytest.fixture
def audio():
    return Audio.silent()


@pytest.fixture
def cannon(sprites):
    return Cannon(sprites)


@pytest.fixture
def score(tmp_path):
    return Score(tmp_path / "highscore.txt")


@pytest.fixture
def fleet(sprites):
    random.seed(7)
    return Fleet(sprites, 1.0)


@pytest.fixture
def barriers(sprites):
    return create_barriers(sprites.barrier)


@pytest.fixture
def line():
    return ScanLine()


def keep_only(fleet, row, col):
    for invader in (inv for r in fleet.invaders for inv in r):
        invader.alive = False
    target = fleet.invaders[row][col]
    target.alive = True
    fleet.alive_count = 1
    return target


def test_fleet_layout(fleet):
    assert len(fleet.invaders) == ROWS
    assert all(len(row) == COLUMNS for row in fleet.invaders)
    kinds = [row[0].kind for row in fleet.invaders]
    assert kinds == [
        InvaderKind.INVADER_1,
        InvaderKind.INVADER_2,
        InvaderKind.INVADER_2,
        InvaderKind.INVADER_3,
        InvaderKind.INVADER_3,
    ]
    first = fleet.invaders[0][0]
    assert (first.x, first.y) == (24, 64)
    assert fleet.alive_count == ROWS * COLUMNS
    assert fleet.move_delay == fleet.max_delay


def test_fleet_rows_are_evenly_spaced(fleet):
    for row in fleet.invaders:
        assert len({inv.y for inv in row}) == 1
        xs = [inv.x for inv in row]
        assert all(b - a == row[0].w for a, b in zip(xs, xs[1:]))


def test_invader_hitbox_is_narrower_than_sprite(fleet):
    inv = fleet.invaders[2][3]
    assert inv.hitbox == Hitbox(inv.x + 2, inv.y, inv.x + inv.w - 2, inv.y + inv.h)


def test_invader_draw_alive_and_dead(fleet):
    surface = pygame.Surface((BUFFER_W, 256))
    inv = fleet.invaders[0][0]
    inv.draw(surface)
    assert surface.get_at((inv.x, inv.y))[:3] == (255, 255, 255)

    other = fleet.invaders[1][1]
    other.alive = False
    blank = pygame.Surface((BUFFER_W, 256))
    other.draw(blank)
    assert blank.get_at((other.x, other.y))[:3] == (0, 0, 0)


def test_fleet_draw_paints_invaders(fleet):
    surface = pygame.Surface((BUFFER_W, 256))
    fleet.draw(surface)
    last = fleet.invaders[4][10]
    assert surface.get_at((last.x, last.y))[:3] == (255, 255, 255)


def test_spawn_mystery_from_left(fleet, audio):
    with mock.patch("random.randint", return_value=0):
        assert fleet.spawn_mystery(audio) is True
    assert fleet.mystery.alive
    assert fleet.mystery_dir == 1
    assert fleet.mystery.x == -fleet.mystery.w
    assert fleet.mystery.y == 50


def test_spawn_mystery_from_right(fleet, audio):
    with mock.patch("random.randint", return_value=1):
        fleet.spawn_mystery(audio)
    assert fleet.mystery_dir == -1
    assert fleet.mystery.x == BUFFER_W + fleet.mystery.w


def test_spawn_mystery_ignored_when_alive(fleet, audio):
    with mock.patch("random.randint", return_value=0):
        fleet.spawn_mystery(audio)
    fleet.mystery.x = 100
    assert fleet.spawn_mystery(audio) is False
    assert fleet.mystery.x == 100


def test_mystery_moves_and_leaves(fleet, cannon, score, audio):
    with mock.patch("random.randint", return_value=0):
        fleet.spawn_mystery(audio)
    start = fleet.mystery.x
    assert fleet.update_mystery(cannon, score, audio) is False
    assert fleet.mystery.x == start + 1
    assert fleet.mystery.hitbox.x1 == start

    fleet.mystery.x = BUFFER_W
    fleet.update_mystery(cannon, score, audio)
    assert not fleet.mystery.alive


def test_mystery_destroyed_by_shot(fleet, cannon, score, audio):
    with mock.patch("random.randint", return_value=0):
        fleet.spawn_mystery(audio)
    ship = fleet.mystery
    ship.x = 100
    cannon.shot.active = True
    cannon.shot.hitbox = Hitbox(ship.x, ship.y, ship.x + 8, ship.y + 8)

    assert fleet.update_mystery(cannon, score, audio) is True
    assert not ship.alive and ship.hit and ship.frame == 1
    assert score.current in {50, 100, 150, 300}
    assert cannon.shot.hit and not cannon.shot.active
    assert fleet.mystery_explosion_counter == fleet.mystery_explosion_max

    for _ in range(fleet.mystery_explosion_max):
        fleet.update_mystery(cannon, score, audio)
    assert ship.hit
    fleet.update_mystery(cannon, score, audio)
    assert not ship.hit
    assert not cannon.shot.hit


def test_update_kills_invader_hit_by_shot(fleet, cannon, sprites, barriers, line, score, audio):
    target = fleet.invaders[0][0]
    cannon.shot.active = True
    cannon.shot.hitbox = Hitbox(target.hitbox.x1, target.hitbox.y1, target.hitbox.x2, target.hitbox.y2)

    outcome = fleet.update(audio, cannon, sprites, barriers, line, score)

    assert outcome is Outcome.PLAYING
    assert not target.alive
    assert target.hit and target.frame == 2
    assert fleet.alive_count == ROWS * COLUMNS - 1
    assert score.current == POINTS_INVADER_1
    assert fleet.explosion_counter == fleet.explosion_max
    assert cannon.shot.hit

    for _ in range(fleet.explosion_max):
        fleet.update(audio, cannon, sprites, barriers, line, score)
    assert cannon.shot.hit
    fleet.update(audio, cannon, sprites, barriers, line, score)
    assert not cannon.shot.hit
    assert not target.hit


def test_stunned_fleet_does_not_move(fleet, cannon, sprites, barriers, line, score, audio):
    fleet.stunned = True
    fleet.move_counter = fleet.move_delay - 1
    before = [(inv.x, inv.y) for row in fleet.invaders for inv in row]
    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.PLAYING
    after = [(inv.x, inv.y) for row in fleet.invaders for inv in row]
    assert before == after


def test_fleet_steps_sideways(fleet, cannon, sprites, barriers, line, score, audio):
    fleet.move_counter = fleet.move_delay - 1
    before = [(inv.x, inv.y) for row in fleet.invaders for inv in row]
    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.PLAYING
    after = [(inv.x, inv.y) for row in fleet.invaders for inv in row]
    assert all(ax == bx + fleet.vel_x and ay == by for (bx, by), (ax, ay) in zip(before, after))
    assert all(inv.frame == 1 for row in fleet.invaders for inv in row)
    assert fleet.move_counter == 0
    assert fleet.move_delay == fleet.max_delay


def test_fleet_reverses_and_drops_at_edge(fleet, cannon, sprites, barriers, line, score, audio):
    inv = keep_only(fleet, 4, 10)
    inv.x = BUFFER_W - inv.w
    old_x, old_y, old_vel = inv.x, inv.y, fleet.vel_x
    fleet.move_counter = fleet.move_delay - 1

    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.PLAYING
    assert fleet.vel_x == -old_vel
    assert inv.y == old_y + fleet.vel_y
    assert inv.x == old_x + fleet.vel_x
    assert fleet.move_delay == fleet.min_delay


def test_fleet_reaching_ground_loses(fleet, cannon, sprites, barriers, line, score, audio):
    inv = keep_only(fleet, 4, 10)
    inv.x = BUFFER_W - inv.w
    inv.y = FINAL_Y - inv.h
    fleet.move_counter = fleet.move_delay - 1

    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.LOST
    assert fleet.stunned
    assert not fleet.moving


def test_fleet_touching_cannon_loses(fleet, cannon, sprites, barriers, line, score, audio):
    inv = keep_only(fleet, 0, 5)
    inv.x = cannon.x
    inv.y = cannon.y - 2
    fleet.move_counter = fleet.move_delay - 1

    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.LOST
    assert fleet.stunned


def test_fleet_all_dead_wins(fleet, cannon, sprites, barriers, line, score, audio):
    for inv in (inv for row in fleet.invaders for inv in row):
        inv.alive = False
    assert fleet.update(audio, cannon, sprites, barriers, line, score) is Outcome.WON


def test_spawn_animation_draws_every_invader(fleet):
    class FakeDisplay:
        def __init__(self):
            self.buffer = pygame.Surface((BUFFER_W, 256))
            self.calls = []

        def post_draw(self, overlay, zoom, zoom_max):
            self.calls.append((overlay, zoom, zoom_max))

    display = FakeDisplay()
    with mock.patch("pygame.time.wait") as wait:
        fleet.spawn_animation(display, "overlay", 1.5, 2.0)
    assert len(display.calls) == ROWS * COLUMNS
    assert wait.call_count == ROWS * COLUMNS
    first = fleet.invaders[0][0]
    assert display.buffer.get_at((first.x, first.y))[:3] == (255, 255, 255)


def test_shots_start_inactive():
    shots = InvaderShots()
    assert shots.active_count == 0
    assert len(shots.shots) == shots.max_shots == 4
    assert not any(shot.active for shot in shots.shots)


def test_try_fire_launches_shot(fleet, sprites):
    shots = InvaderShots()
    invader = fleet.invaders[4][3]
    with mock.patch("random.randint", side_effect=[0, 2]):
        assert shots.try_fire(invader, sprites) is True
    shot = shots.shots[0]
    assert shot.active
    assert shots.active_count == 1
    assert shot.y == invader.y + invader.h
    assert shot.sprites[:4] == tuple(sprites.shot_2)
    assert shot.sprites[4] is sprites.shot_explosion
    assert shot.frame == 0


def test_try_fire_respects_chance(fleet, sprites):
    shots = InvaderShots()
    with mock.patch("random.randint", return_value=11):
        assert shots.try_fire(fleet.invaders[0][0], sprites) is False
    assert shots.active_count == 0


def test_try_fire_never_exceeds_pool(fleet, sprites):
    random.seed(1234)
    shots = InvaderShots()
    for _ in range(5000):
        shots.try_fire(fleet.invaders[4][0], sprites)
        assert shots.active_count <= shots.max_shots
    assert shots.active_count == shots.max_shots
    assert all(shot.active for shot in shots.shots)


def _fire(shots, fleet, sprites):
    with mock.patch("random.randint", side_effect=[0, 1]):
        shots.try_fire(fleet.invaders[4][0], sprites)
    return shots.shots[0]


def test_shot_falls(fleet, sprites, cannon, barriers, line, audio):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    y = shot.y
    shots.update(cannon, barriers, line, audio)
    assert shot.y == y + 2
    assert shot.frame == 1
    assert shot.hitbox.y1 == shot.y


def test_shot_hits_scan_line_then_expires(fleet, sprites, cannon, barriers, line, audio):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    shot.x = 0
    shot.y = SCAN_LINE_Y - shot.h - 2
    shots.update(cannon, barriers, line, audio)
    assert shot.hit
    assert shot.frame == EXPLOSION_FRAME
    assert not line.is_intact(0)

    for _ in range(shot.explosion_max):
        shots.update(cannon, barriers, line, audio)
    assert shot.active
    shots.update(cannon, barriers, line, audio)
    assert not shot.active
    assert shots.active_count == 0


def test_shot_hits_cannon(fleet, sprites, cannon, barriers, line, audio):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    shot.x = cannon.x + 4
    shot.y = cannon.y - shot.h
    lives = cannon.lives
    shots.update(cannon, barriers, line, audio)
    assert cannon.lives == lives - 1
    assert cannon.was_hit
    assert shot.hit


def test_shot_hits_cannon_shot(fleet, sprites, cannon, barriers, line, audio):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    cannon.shot.active = True
    cannon.shot.hitbox = Hitbox(0, 100, 8, 108)
    shot.x = 2
    shot.y = 95
    shots.update(cannon, barriers, line, audio)
    assert not cannon.shot.active
    assert shot.hit


def test_shot_damages_barrier(fleet, sprites, barriers):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    barrier = barriers[0]
    shot.x = barrier.x + 5
    shot.y = barrier.y
    shot.hitbox = Hitbox(shot.x, shot.y, shot.x + shot.w, shot.y + shot.h)
    shot.impact_x = shot.x + shot.w // 2
    shot.impact_y = shot.y + shot.h
    assert barrier.is_solid(shot.x, barrier.y + shot.h)

    assert shots.check_barrier_collision(barriers) is True
    assert shot.hit
    assert shot.frame == EXPLOSION_FRAME
    assert shot.y == barrier.y + shot.h
    assert not barrier.is_solid(shot.x, shot.y)
    assert barrier.is_solid(barrier.x, barrier.y)


def test_barrier_check_skips_shots_already_hit(fleet, sprites, barriers):
    shots = InvaderShots()
    shot = _fire(shots, fleet, sprites)
    barrier = barriers[0]
    shot.x, shot.y = barrier.x + 5, barrier.y
    shot.hitbox = Hitbox(shot.x, shot.y, shot.x + shot.w, shot.y + shot.h)
    shot.impact_x, shot.impact_y = shot.x + 1, shot.y + shot.h
    shot.hit = True
    assert shots.check_barrier_collision(barriers) is False
    assert shot.y == barrier.y