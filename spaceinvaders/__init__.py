"""Arcade-style Space Invaders game drawn inside a cabinet overlay."""

__version__ = "1.0.0"