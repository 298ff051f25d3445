"""Generate placeholder sprite sheets for running without the real art."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageDraw

from .animation_definitions import ANIMATION_DEFINITIONS

logger = logging.getLogger(__name__)


# Base color per animation
SHEET_COLORS: dict[str, Tuple[int, int, int]] = {
    "idle": (100, 180, 180),  # Teal
    "walk": (200, 150, 100),  # Tan
}


class PlaceholderGenerator:
    """Generates horizontal strip sheets matching the animation definitions."""

    def __init__(self, output_dir: Optional[Path] = None):
        """Initialize the generator.

        Args:
            output_dir: Root directory the definition paths are resolved against.
        """
        self.output_dir = output_dir or Path("assets")

    def generate_all(self) -> dict[str, Path]:
        """Generate a sheet for every animation definition.

        Returns:
            Dictionary of animation name to generated file path.
        """
        generated = {}
        for name, definition in ANIMATION_DEFINITIONS.items():
            generated[name] = self.generate_sheet(name, definition)
        return generated

    def generate_sheet(self, name: str, definition: dict) -> Path:
        """Generate and save a single placeholder sheet.

        Args:
            name: The animation name.
            definition: Animation definition dict.

        Returns:
            Path to the generated file.
        """
        image = self.render_sheet(name, definition)
        output_path = self.output_dir / definition["path"]
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(output_path)
        logger.info("Generated placeholder sheet %s (%dx%d)", output_path, *image.size)
        return output_path

    def render_sheet(self, name: str, definition: dict) -> Image.Image:
        """Render a placeholder sheet in memory.

        Each frame holds a simple figure whose color and lean change with
        the frame index, so frame stepping is visible on screen.

        Args:
            name: The animation name.
            definition: Animation definition dict.

        Returns:
            An RGBA image of the definition's sheet size.
        """
        sheet_width, sheet_height = definition["sheet_size"]
        frame_count = definition["frame_count"]
        frame_width = sheet_width // frame_count
        base = SHEET_COLORS.get(name, (200, 200, 200))

        pixels = np.zeros((sheet_height, sheet_width, 4), dtype=np.uint8)
        for frame in range(frame_count):
            color = self._frame_color(base, frame, frame_count)
            self._draw_figure(pixels, frame * frame_width, frame_width, sheet_height, frame, color)

        image = Image.fromarray(pixels)
        draw = ImageDraw.Draw(image)
        for frame in range(frame_count):
            draw.text((frame * frame_width + 4, 4), str(frame), fill=(255, 255, 255, 255))
        return image

    @staticmethod
    def _frame_color(
        base: Tuple[int, int, int], frame: int, frame_count: int
    ) -> Tuple[int, int, int]:
        """Shade the base color by frame index."""
        t = frame / max(1, frame_count - 1)
        shade = 0.6 + 0.4 * t
        return tuple(int(min(255, c * shade)) for c in base)

    @staticmethod
    def _draw_figure(
        pixels: np.ndarray,
        x0: int,
        w: int,
        h: int,
        frame: int,
        color: Tuple[int, int, int],
    ) -> None:
        """Draw a head and body into one frame cell of the pixel array."""
        ys, xs = np.ogrid[0:h, 0:w]
        lean = (frame % 4 - 1.5) * w * 0.03
        rgba = np.array([*color, 255], dtype=np.uint8)
        outline = np.array([c // 2 for c in color] + [255], dtype=np.uint8)

        # Body ellipse in the lower two thirds
        cx, cy = w / 2 + lean, h * 0.62
        rx, ry = w * 0.3, h * 0.33
        body = ((xs - cx) / rx) ** 2 + ((ys - cy) / ry) ** 2
        cell = pixels[:, x0:x0 + w]
        cell[body <= 1.0] = outline
        cell[body <= 0.85] = rgba

        # Head circle above it
        hr = min(w, h) * 0.16
        hx, hy = w / 2 + lean * 1.5, h * 0.2
        head = (xs - hx) ** 2 + (ys - hy) ** 2
        cell[head <= hr ** 2] = outline
        cell[head <= (hr * 0.85) ** 2] = rgba


def generate_placeholders(output_dir: Optional[Path] = None) -> dict[str, Path]:
    """Convenience function to generate all placeholder sheets.

    Args:
        output_dir: Output root directory.

    Returns:
        Dictionary of animation name to generated file path.
    """
    generator = PlaceholderGenerator(output_dir)
    return generator.generate_all()
