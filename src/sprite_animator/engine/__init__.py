"""Animation engine for the sprite animator."""

from __future__ import annotations

from .animator import CharacterAnimator, FrameSurface
from .catalog import AnimationCatalog
from .input_mapping import (
    DEFAULT_WALK_SPEED,
    MOVE_RIGHT_KEY_CODE,
    MOVE_RIGHT_KEYS,
    InputCommand,
    InputMapper,
)

__all__ = [
    "CharacterAnimator",
    "FrameSurface",
    "AnimationCatalog",
    "DEFAULT_WALK_SPEED",
    "MOVE_RIGHT_KEY_CODE",
    "MOVE_RIGHT_KEYS",
    "InputCommand",
    "InputMapper",
]
