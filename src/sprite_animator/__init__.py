"""Sprite animator: a keyboard-driven sprite sheet character."""

__version__ = "0.1.0"
