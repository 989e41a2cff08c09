"""Score keeping, extra lives and the persisted high score."""

from __future__ import annotations

import re
from pathlib import Path

from .cannon import MAX_LIVES
from .util import random_int

HIGHSCORE_FILE = "highscore.txt"
EXTRA_LIFE_POINTS = 1000
MAX_SCORE = 9990

POINTS_INVADER_1 = 30
POINTS_INVADER_2 = 20
POINTS_INVADER_3 = 10

_INVADER_POINTS = {1: POINTS_INVADER_1, 2: POINTS_INVADER_2, 3: POINTS_INVADER_3}
# (highest roll, points) for the mystery ship; rolls above the last limit score 50.
_MYSTERY_TABLE = ((10, 300), (30, 150), (60, 100))
_MYSTERY_DEFAULT = 50

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def read_highscore(path=HIGHSCORE_FILE) -> int:
    """Read the high score from *path*, creating the file with 0 if missing."""
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError:
        path.write_text("0")
        return 0
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def points_for(kind, roll: int | None = None) -> int:
    """Points for destroying an invader of *kind*; other kinds roll 1..100."""
    points = _INVADER_POINTS.get(int(kind))
    if points is not None:
        return points
    if roll is None:
        roll = random_int(1, 100)
    return next((value for limit, value in _MYSTERY_TABLE if roll <= limit), _MYSTERY_DEFAULT)


class Score:
    """Current score, high score and the threshold for the next extra life."""

    def __init__(self, path=HIGHSCORE_FILE) -> None:
        self.path = Path(path)
        self.highscore = read_highscore(self.path)
        self.current = 0
        self.next_life = EXTRA_LIFE_POINTS

    def add(self, kind, cannon, audio) -> int:
        """Score a destroyed invader of *kind* and return the points gained."""
        points = points_for(kind)
        self.current += points
        self.check_extra_life(cannon, audio)
        return points

    def check_highscore(self) -> bool:
        """Store the current score as high score if it beats it."""
        if self.current <= self.highscore:
            return False
        self.highscore = self.current
        self.save_highscore()
        return True

    def save_highscore(self) -> None:
        """Write the high score to its file."""
        self.path.write_text(str(self.highscore))

    def check_extra_life(self, cannon, audio) -> bool:
        """Grant a life each time the score passes the next threshold."""
        if self.current < self.next_life:
            return False
        self.next_life += EXTRA_LIFE_POINTS
        if cannon.lives >= MAX_LIVES:
            return False
        audio.play("extra_life", 0.7)
        cannon.lives += 1
        return True