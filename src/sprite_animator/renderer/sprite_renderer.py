"""Pillow frame buffer the character is drawn into."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image, ImageOps

from sprite_animator.types import BACKGROUND_COLOR, Position


@dataclass
class BlitRecord:
    """What the last blit drew and where."""

    source_rect: tuple[int, int, int, int]
    dest_box: tuple[int, int, int, int]  # left, top, right, bottom
    mirrored: bool


class SpriteRenderer:
    """Draws sprite frames into an RGBA frame buffer."""

    def __init__(
        self,
        width: int,
        height: int,
        background: tuple[int, int, int] = BACKGROUND_COLOR,
    ):
        """Initialize the renderer.

        Args:
            width: Frame buffer width in pixels.
            height: Frame buffer height in pixels.
            background: Fill color used on creation, clear and resize.
        """
        self.width = width
        self.height = height
        self.background = background
        self.frame = Image.new("RGBA", (width, height), (*background, 255))

        self.last_blit: Optional[BlitRecord] = None
        self.blit_count = 0

    def clear(self, color: Optional[tuple[int, int, int]] = None) -> None:
        """Fill the whole frame buffer with a color, the background by default."""
        if color is None:
            color = self.background
        self.frame.paste((*color, 255), (0, 0, self.width, self.height))
        self.last_blit = None

    def resize(self, width: int, height: int) -> None:
        """Replace the frame buffer with one of a new size."""
        self.frame.close()
        self.width = width
        self.height = height
        self.frame = Image.new("RGBA", (width, height), (*self.background, 255))

    def blit_frame(
        self,
        sheet: Image.Image,
        source_rect: tuple[int, int, int, int],
        position: Position,
        facing: int,
        scale: float,
    ) -> None:
        """Draw one frame of a sheet.

        Equivalent to translating to position, scaling by
        (facing * scale, scale), then drawing the frame at the local origin.
        A left-facing frame therefore extends to the left of position.x.

        Args:
            sheet: The sprite sheet.
            source_rect: (x, y, w, h) of the frame within the sheet.
            position: Anchor in canvas space.
            facing: 1 for right, -1 for mirrored.
            scale: Uniform scale.
        """
        sx, sy, sw, sh = source_rect
        image = sheet.crop((sx, sy, sx + sw, sy + sh))

        dest_w = max(1, round(sw * scale))
        dest_h = max(1, round(sh * scale))
        if (dest_w, dest_h) != (sw, sh):
            image = image.resize((dest_w, dest_h), Image.Resampling.NEAREST)

        mirrored = facing < 0
        if mirrored:
            image = ImageOps.mirror(image)
            left = round(position.x - dest_w)
        else:
            left = round(position.x)
        top = round(position.y)

        self.frame.paste(image, (left, top), image)
        self.last_blit = BlitRecord(
            source_rect=source_rect,
            dest_box=(left, top, left + dest_w, top + dest_h),
            mirrored=mirrored,
        )
        self.blit_count += 1

    def to_array(self) -> np.ndarray:
        """Get the frame buffer as an (height, width, 4) uint8 array."""
        return np.asarray(self.frame)

    def save(self, path: Union[str, Path]) -> None:
        """Save the frame buffer as PNG."""
        self.frame.save(path, format="PNG")
