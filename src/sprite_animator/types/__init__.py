"""Type definitions for the sprite animator."""

from .character import (
    AnimatorState,
    CharacterState,
    Position,
)
from .canvas import (
    BACKGROUND_COLOR,
    CanvasContext,
)
from .sprites import (
    AnimationClip,
)

__all__ = [
    # Character
    "AnimatorState",
    "CharacterState",
    "Position",
    # Canvas
    "BACKGROUND_COLOR",
    "CanvasContext",
    # Sprites
    "AnimationClip",
]
