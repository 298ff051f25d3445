"""Renderer package for the sprite animator."""

from __future__ import annotations

from .sprite_loader import SpriteSheetLoader
from .sprite_renderer import BlitRecord, SpriteRenderer
from .display import TerminalPresenter, detect_graphics_protocol
from .terminal_size import get_terminal_pixel_size

__all__ = [
    "SpriteSheetLoader",
    "BlitRecord",
    "SpriteRenderer",
    "TerminalPresenter",
    "detect_graphics_protocol",
    "get_terminal_pixel_size",
]
