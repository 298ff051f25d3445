"""Sprite sheet loading and caching."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Mapping, Optional

from PIL import Image, UnidentifiedImageError

from sprite_animator.assets import DEFAULT_ASSET_ROOT
from sprite_animator.engine.catalog import AnimationCatalog

logger = logging.getLogger(__name__)


class SpriteSheetLoader:
    """Loads and caches sprite sheets."""

    def __init__(self, asset_root: Optional[Path] = None):
        """Initialize the sprite sheet loader.

        Args:
            asset_root: Directory the definition paths are relative to.
        """
        self._asset_root = Path(asset_root) if asset_root is not None else DEFAULT_ASSET_ROOT
        self._cache: dict[str, Image.Image] = {}

    @property
    def asset_root(self) -> Path:
        return self._asset_root

    def load(self, name: str, definition: dict) -> Image.Image:
        """Load one sheet, decoded to RGBA.

        Args:
            name: Animation name the sheet is cached under.
            definition: Animation definition with a "path" entry.

        Returns:
            The loaded image.
        """
        if name in self._cache:
            return self._cache[name]

        path = self._asset_root / definition["path"]
        if not path.exists():
            raise FileNotFoundError(f"Sprite sheet for '{name}' not found: {path}")

        try:
            with Image.open(path) as img:
                sheet = img.convert("RGBA")
        except UnidentifiedImageError as e:
            raise ValueError(f"Cannot decode sprite sheet {path}") from e

        logger.info("Loaded sprite sheet %s (%dx%d)", path, *sheet.size)
        self._cache[name] = sheet
        return sheet

    def register(self, name: str, sheet: Image.Image) -> None:
        """Put an already loaded sheet in the cache."""
        self._cache[name] = sheet

    def get(self, name: str) -> Optional[Image.Image]:
        """Get a sheet from cache."""
        return self._cache.get(name)

    async def load_all(self, definitions: Mapping[str, dict]) -> dict[str, Image.Image]:
        """Load every sheet in the definitions off the event loop.

        Args:
            definitions: Animation definitions keyed by name.

        Returns:
            Loaded sheets keyed by name, all decoded.
        """
        sheets = {}
        for name, definition in definitions.items():
            sheets[name] = await asyncio.to_thread(self.load, name, definition)
        return sheets

    async def load_catalog(self, definitions: Mapping[str, dict]) -> AnimationCatalog:
        """Load every sheet and build the catalog from them.

        Args:
            definitions: Animation definitions keyed by name.

        Returns:
            A catalog whose clips reference the loaded sheets.
        """
        sheets = await self.load_all(definitions)
        catalog = AnimationCatalog.from_definitions(definitions, sheets)
        logger.info("Animation catalog ready: %s", ", ".join(s.value for s in catalog))
        return catalog

    def close(self) -> None:
        """Release all cached sheets."""
        for sheet in self._cache.values():
            sheet.close()
        self._cache.clear()
