"""Asset definitions for the sprite animator."""

from __future__ import annotations

from .animation_definitions import (
    ANIMATION_DEFINITIONS,
    DEFAULT_ASSET_ROOT,
    get_animation_definition,
)
from .placeholder_generator import PlaceholderGenerator, generate_placeholders

__all__ = [
    "ANIMATION_DEFINITIONS",
    "DEFAULT_ASSET_ROOT",
    "get_animation_definition",
    "PlaceholderGenerator",
    "generate_placeholders",
]
