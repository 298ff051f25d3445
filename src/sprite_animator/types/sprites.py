"""Sprite sheet and animation clip types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AnimationClip:
    """One horizontal strip of equally sized frames.

    The sheet handle is borrowed from whoever loaded it; the clip never
    mutates or closes it.
    """

    frame_width: int
    frame_height: int
    frame_count: int
    frame_delay: int  # ticks each frame is held
    sheet: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.frame_count < 1:
            raise ValueError(f"frame_count must be >= 1, got {self.frame_count}")
        if self.frame_delay < 1:
            raise ValueError(f"frame_delay must be >= 1, got {self.frame_delay}")
        if self.frame_width <= 0 or self.frame_height <= 0:
            raise ValueError(
                f"frame size must be positive, got {self.frame_width}x{self.frame_height}"
            )

    @classmethod
    def from_sheet(
        cls,
        sheet_size: tuple[int, int],
        frame_count: int,
        frame_delay: int,
        sheet: Any = None,
    ) -> "AnimationClip":
        """Slice a sheet of the given pixel size into frame_count frames.

        Frame width is truncated, so frame_width * frame_count may fall
        short of the sheet width.

        Args:
            sheet_size: Raw (width, height) of the sheet in pixels.
            frame_count: Number of frames laid out left to right.
            frame_delay: Ticks each frame is held.
            sheet: The loaded image, if any.

        Returns:
            The derived AnimationClip.
        """
        if frame_count < 1:
            raise ValueError(f"frame_count must be >= 1, got {frame_count}")
        sheet_width, sheet_height = sheet_size
        return cls(
            frame_width=sheet_width // frame_count,
            frame_height=sheet_height,
            frame_count=frame_count,
            frame_delay=frame_delay,
            sheet=sheet,
        )

    def source_rect(self, frame: int) -> tuple[int, int, int, int]:
        """Get the (x, y, w, h) region of a frame within the sheet."""
        return (frame * self.frame_width, 0, self.frame_width, self.frame_height)
