"""Sprite sheet definitions for the character's animations."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

DEFAULT_ASSET_ROOT = Path("assets")

# One horizontal strip per state. Frame width is derived from the loaded
# sheet's pixel width, sheet_size is what the art is expected to measure.
ANIMATION_DEFINITIONS: dict[str, dict] = {
    "idle": {
        "path": "2/IDLE/all.png",
        "sheet_size": (889, 176),
        "frame_count": 6,
        "frame_delay": 8,
    },
    "walk": {
        "path": "2/WALK/ALL.png",
        "sheet_size": (1251, 184),
        "frame_count": 8,
        "frame_delay": 6,  # a little quicker than idle
    },
}


def get_animation_definition(name: str) -> Optional[dict]:
    """Get an animation definition by state name.

    Args:
        name: The state name, e.g. "idle".

    Returns:
        The definition dict or None.
    """
    return ANIMATION_DEFINITIONS.get(name)
