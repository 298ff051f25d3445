"""Pytest configuration and fixtures."""

from __future__ import annotations

import pytest
import numpy as np
from PIL import Image

from sprite_animator.engine import AnimationCatalog, CharacterAnimator
from sprite_animator.types import (
    AnimationClip,
    AnimatorState,
    CanvasContext,
    CharacterState,
    Position,
)

MARKER = (255, 255, 255, 255)
MARKER_WIDTH = 10


def frame_color(frame: int) -> tuple[int, int, int, int]:
    """Solid color used for a test sheet frame."""
    return (20 + frame * 25, 200 - frame * 20, 60 + frame * 15, 255)


def make_sheet(width: int, height: int, frame_count: int) -> Image.Image:
    """Create a strip sheet with one solid color per frame.

    The leftmost MARKER_WIDTH columns of every frame are white, so mirroring
    is visible. Columns past frame_width * frame_count stay transparent.
    """
    frame_width = width // frame_count
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    for frame in range(frame_count):
        x0 = frame * frame_width
        pixels[:, x0:x0 + frame_width] = frame_color(frame)
        pixels[:, x0:x0 + MARKER_WIDTH] = MARKER
    return Image.fromarray(pixels)


@pytest.fixture
def idle_sheet() -> Image.Image:
    """An 889x176 idle sheet of 6 frames."""
    return make_sheet(889, 176, 6)


@pytest.fixture
def walk_sheet() -> Image.Image:
    """A 1251x184 walk sheet of 8 frames."""
    return make_sheet(1251, 184, 8)


@pytest.fixture
def sheets(idle_sheet, walk_sheet) -> dict[str, Image.Image]:
    """Loaded sheets keyed by animation name."""
    return {"idle": idle_sheet, "walk": walk_sheet}


@pytest.fixture
def idle_clip(idle_sheet) -> AnimationClip:
    """Idle clip: 148 wide, 6 frames, delay 8."""
    return AnimationClip.from_sheet(idle_sheet.size, frame_count=6, frame_delay=8, sheet=idle_sheet)


@pytest.fixture
def walk_clip(walk_sheet) -> AnimationClip:
    """Walk clip: 156 wide, 8 frames, delay 6."""
    return AnimationClip.from_sheet(walk_sheet.size, frame_count=8, frame_delay=6, sheet=walk_sheet)


@pytest.fixture
def catalog(idle_clip, walk_clip) -> AnimationCatalog:
    """Catalog with idle and walk clips."""
    return AnimationCatalog({CharacterState.IDLE: idle_clip, CharacterState.WALK: walk_clip})


@pytest.fixture
def animator(catalog) -> CharacterAnimator:
    """Animator over the test catalog."""
    return CharacterAnimator(catalog)


@pytest.fixture
def canvas() -> CanvasContext:
    """An 800x600 canvas."""
    return CanvasContext(width=800, height=600)


@pytest.fixture
def character() -> AnimatorState:
    """A character idling at x=100."""
    return AnimatorState(position=Position(100, 400))
