"""Canvas types."""

from __future__ import annotations

from dataclasses import dataclass

# Mid gray, matching the sketch the art was made for
BACKGROUND_COLOR: tuple[int, int, int] = (128, 128, 128)


@dataclass
class CanvasContext:
    """Dimensions and clear color of the render surface."""

    width: int
    height: int
    background: tuple[int, int, int] = BACKGROUND_COLOR

    def resize(self, width: int, height: int) -> None:
        """Update the canvas dimensions."""
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @property
    def size(self) -> tuple[int, int]:
        """Get (width, height)."""
        return (self.width, self.height)
