"""Sound effects and the looping cabinet static."""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

import pygame

from .util import InitError, require

DEFAULT_AUDIO_DIR = Path("assets/audio")

SAMPLE_FILES = {
    "arcade_on": "ligar_arcade.wav",
    "arcade_off": "desligar_arcade.wav",
    "cannon_shot": "canhao_tiro.wav",
    "cannon_explosion": "canhao_explosao.wav",
    "mystery": "nave_misterio.wav",
    "invader_explosion": "nave_explosao.wav",
    "invader_move_0": "nave_movimento_0.wav",
    "invader_move_1": "nave_movimento_1.wav",
    "invader_move_2": "nave_movimento_2.wav",
    "invader_move_3": "nave_movimento_3.wav",
    "extra_life": "nova_vida.wav",
}

MOVE_SOUNDS = tuple(f"invader_move_{i}" for i in range(4))

STATIC_FILE = "estatica_arcade.wav"
STATIC_VOLUME = 0.6
RESERVED_CHANNELS = 128


def load_sample(directory, filename: str) -> pygame.mixer.Sound:
    """Load the sound file *filename* from *directory*."""
    path = Path(directory) / filename
    require(path.is_file(), f"audio {filename}")
    try:
        return pygame.mixer.Sound(str(path))
    except pygame.error as exc:
        raise InitError(f"could not initialise audio {filename}") from exc


class Audio:
    """The game's sound effects, addressed by name."""

    def __init__(self, samples: Mapping[str, object], static_path=None) -> None:
        unknown = set(samples) - set(SAMPLE_FILES)
        if unknown:
            raise KeyError(f"unknown sounds: {sorted(unknown)}")
        self.samples = dict(samples)
        self.static_path = Path(static_path) if static_path is not None else None
        self.static_playing = False

    @classmethod
    def load(cls, directory=DEFAULT_AUDIO_DIR) -> Audio:
        """Start the mixer and load every sound from *directory*."""
        directory = Path(directory)
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.set_num_channels(RESERVED_CHANNELS)
        except pygame.error as exc:
            raise InitError("could not initialise audio") from exc
        samples = {name: load_sample(directory, filename) for name, filename in SAMPLE_FILES.items()}
        static_path = directory / STATIC_FILE
        require(static_path.is_file(), "audio stream")
        return cls(samples, static_path)

    @classmethod
    def silent(cls) -> Audio:
        """An instance that knows every sound name but plays nothing."""
        return cls({}, None)

    def play(self, name: str, volume: float = 1.0) -> bool:
        """Play the sound *name* once; False when it is not loaded."""
        if name not in SAMPLE_FILES:
            raise KeyError(name)
        sample = self.samples.get(name)
        if sample is None:
            return False
        sample.set_volume(volume)
        sample.play()
        return True

    def start_static(self) -> bool:
        """Start the looping static noise; False when there is none."""
        if self.static_path is None:
            return False
        try:
            pygame.mixer.music.load(str(self.static_path))
            pygame.mixer.music.set_volume(STATIC_VOLUME)
            pygame.mixer.music.play(loops=-1)
        except pygame.error as exc:
            raise InitError("could not initialise audio stream") from exc
        self.static_playing = True
        return True

    def stop_static(self) -> None:
        """Stop the static noise if it is playing."""
        if self.static_playing and pygame.mixer.get_init():
            pygame.mixer.music.stop()
        self.static_playing = False