"""Tests for sheet loading, the frame buffer and terminal presentation."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from conftest import MARKER, MARKER_WIDTH, frame_color, make_sheet
from sprite_animator.assets import ANIMATION_DEFINITIONS
from sprite_animator.renderer import SpriteRenderer, SpriteSheetLoader, TerminalPresenter
from sprite_animator.renderer import display, terminal_size
from sprite_animator.types import BACKGROUND_COLOR, CharacterState, Position

GRAY = (*BACKGROUND_COLOR, 255)


def write_sheets(root):
    """Write test sheets at the definition paths under root."""
    for name, definition in ANIMATION_DEFINITIONS.items():
        path = root / definition["path"]
        path.parent.mkdir(parents=True, exist_ok=True)
        width, height = definition["sheet_size"]
        make_sheet(width, height, definition["frame_count"]).save(path)


class TestSpriteSheetLoader:
    """Tests for sprite sheet loading."""

    def test_load(self, tmp_path):
        """Test a sheet loads as RGBA."""
        write_sheets(tmp_path)
        loader = SpriteSheetLoader(tmp_path)

        sheet = loader.load("idle", ANIMATION_DEFINITIONS["idle"])

        assert sheet.size == (889, 176)
        assert sheet.mode == "RGBA"

    def test_load_is_cached(self, tmp_path):
        """Test repeated loads return the same image."""
        write_sheets(tmp_path)
        loader = SpriteSheetLoader(tmp_path)

        first = loader.load("walk", ANIMATION_DEFINITIONS["walk"])
        assert loader.load("walk", ANIMATION_DEFINITIONS["walk"]) is first
        assert loader.get("walk") is first

    def test_missing_sheet(self, tmp_path):
        """Test a missing file raises FileNotFoundError."""
        loader = SpriteSheetLoader(tmp_path)
        with pytest.raises(FileNotFoundError, match="idle"):
            loader.load("idle", ANIMATION_DEFINITIONS["idle"])

    def test_undecodable_sheet(self, tmp_path):
        """Test a file that is not an image raises ValueError."""
        path = tmp_path / ANIMATION_DEFINITIONS["idle"]["path"]
        path.parent.mkdir(parents=True)
        path.write_bytes(b"not a png")

        with pytest.raises(ValueError):
            SpriteSheetLoader(tmp_path).load("idle", ANIMATION_DEFINITIONS["idle"])

    def test_register(self, idle_sheet):
        """Test registering an in-memory sheet."""
        loader = SpriteSheetLoader()
        loader.register("idle", idle_sheet)
        assert loader.load("idle", ANIMATION_DEFINITIONS["idle"]) is idle_sheet

    def test_close_clears_cache(self, tmp_path):
        """Test close releases cached sheets."""
        write_sheets(tmp_path)
        loader = SpriteSheetLoader(tmp_path)
        loader.load("idle", ANIMATION_DEFINITIONS["idle"])
        loader.close()
        assert loader.get("idle") is None

    @pytest.mark.asyncio
    async def test_load_all(self, tmp_path):
        """Test every definition is loaded."""
        write_sheets(tmp_path)
        sheets = await SpriteSheetLoader(tmp_path).load_all(ANIMATION_DEFINITIONS)
        assert {name: sheet.size for name, sheet in sheets.items()} == {
            "idle": (889, 176),
            "walk": (1251, 184),
        }

    @pytest.mark.asyncio
    async def test_load_catalog(self, tmp_path, caplog):
        """Test the catalog is built only from fully loaded sheets."""
        write_sheets(tmp_path)
        with caplog.at_level(logging.INFO):
            catalog = await SpriteSheetLoader(tmp_path).load_catalog(ANIMATION_DEFINITIONS)

        assert catalog.clip_for(CharacterState.IDLE).frame_width == 148
        assert catalog.clip_for(CharacterState.WALK).frame_width == 156
        assert catalog.clip_for(CharacterState.WALK).sheet.size == (1251, 184)
        assert "Animation catalog ready" in caplog.text

    @pytest.mark.asyncio
    async def test_load_catalog_missing_sheet(self, tmp_path):
        """Test a missing sheet fails the whole load."""
        with pytest.raises(FileNotFoundError):
            await SpriteSheetLoader(tmp_path).load_catalog(ANIMATION_DEFINITIONS)


class TestSpriteRenderer:
    """Tests for the Pillow frame buffer."""

    def test_starts_gray(self):
        """Test the buffer starts filled with the background."""
        renderer = SpriteRenderer(40, 30)
        pixels = renderer.to_array()
        assert pixels.shape == (30, 40, 4)
        assert (pixels == GRAY).all()

    def test_clear(self):
        """Test clear fills with the given color."""
        renderer = SpriteRenderer(20, 10)
        renderer.clear((10, 20, 30))
        assert (renderer.to_array() == (10, 20, 30, 255)).all()

    def test_blit_draws_frame_at_position(self, idle_clip):
        """Test the frame's top-left lands at the position."""
        renderer = SpriteRenderer(800, 600)

        renderer.blit_frame(idle_clip.sheet, idle_clip.source_rect(1), Position(100, 50), 1, 1.0)

        pixels = renderer.to_array()
        assert tuple(pixels[50, 100]) == MARKER
        assert tuple(pixels[50, 100 + MARKER_WIDTH]) == frame_color(1)
        assert tuple(pixels[225, 247]) == frame_color(1)
        assert tuple(pixels[50, 99]) == GRAY
        assert tuple(pixels[50, 248]) == GRAY
        assert tuple(pixels[226, 150]) == GRAY
        assert renderer.last_blit.dest_box == (100, 50, 248, 226)
        assert renderer.last_blit.mirrored is False

    def test_blit_mirrored_extends_left(self, idle_clip):
        """Test a left-facing frame is flipped and drawn left of x."""
        renderer = SpriteRenderer(800, 600)

        renderer.blit_frame(idle_clip.sheet, idle_clip.source_rect(0), Position(300, 0), -1, 1.0)

        pixels = renderer.to_array()
        assert renderer.last_blit.dest_box == (152, 0, 300, 176)
        assert renderer.last_blit.mirrored is True
        assert tuple(pixels[10, 299]) == MARKER
        assert tuple(pixels[10, 300 - MARKER_WIDTH]) == MARKER
        assert tuple(pixels[10, 152]) == frame_color(0)
        assert tuple(pixels[10, 300]) == GRAY

    def test_blit_scaled(self, walk_clip):
        """Test scale changes the drawn size."""
        renderer = SpriteRenderer(800, 600)

        renderer.blit_frame(walk_clip.sheet, walk_clip.source_rect(2), Position(10, 20), 1, 0.5)

        assert renderer.last_blit.dest_box == (10, 20, 88, 112)
        pixels = renderer.to_array()
        assert tuple(pixels[50, 60]) == frame_color(2)
        assert tuple(pixels[50, 88]) == GRAY

    def test_transparent_pixels_keep_background(self):
        """Test transparent sheet pixels do not overwrite the buffer."""
        sheet = make_sheet(31, 10, 3)  # one transparent slack column
        renderer = SpriteRenderer(50, 20)

        renderer.blit_frame(sheet, (30, 0, 1, 10), Position(5, 5), 1, 1.0)

        assert tuple(renderer.to_array()[6, 5]) == GRAY

    def test_clear_resets_last_blit(self, idle_clip):
        """Test clearing forgets the previous blit."""
        renderer = SpriteRenderer(800, 600)
        renderer.blit_frame(idle_clip.sheet, idle_clip.source_rect(0), Position(0, 0), 1, 1.0)
        renderer.clear()
        assert renderer.last_blit is None
        assert renderer.blit_count == 1

    def test_resize(self):
        """Test resizing replaces the buffer."""
        renderer = SpriteRenderer(40, 30)
        renderer.resize(60, 20)
        assert renderer.frame.size == (60, 20)
        assert renderer.to_array().shape == (20, 60, 4)

    def test_resize_keeps_background(self):
        """Test a resized buffer is filled with the renderer's own background."""
        renderer = SpriteRenderer(40, 30, background=(10, 20, 30))
        renderer.resize(60, 20)
        assert (renderer.to_array() == (10, 20, 30, 255)).all()

    def test_clear_defaults_to_background(self):
        """Test clear without a color uses the renderer's background."""
        renderer = SpriteRenderer(20, 10, background=(200, 0, 0))
        renderer.clear((0, 0, 0))
        renderer.clear()
        assert (renderer.to_array() == (200, 0, 0, 255)).all()

    def test_save(self, tmp_path, idle_clip):
        """Test saving the buffer as PNG."""
        from PIL import Image

        renderer = SpriteRenderer(200, 200)
        renderer.blit_frame(idle_clip.sheet, idle_clip.source_rect(0), Position(0, 0), 1, 1.0)
        path = tmp_path / "frame.png"
        renderer.save(path)

        with Image.open(path) as img:
            assert np.array_equal(np.asarray(img.convert("RGBA")), renderer.to_array())


class TestTerminalPresenter:
    """Tests for terminal presentation without a graphics protocol."""

    def test_fallback_saves_frame(self, tmp_path, monkeypatch, caplog):
        """Test frames are saved to disk and the fallback is logged once."""
        fallback = tmp_path / "frame.png"
        monkeypatch.setattr(display, "FALLBACK_FRAME_PATH", fallback)
        presenter = TerminalPresenter(protocol="none")
        renderer = SpriteRenderer(20, 20)

        with caplog.at_level(logging.WARNING):
            presenter(renderer)
            presenter(renderer)

        assert fallback.exists()
        assert caplog.text.count("no terminal graphics protocol detected") == 1

    def test_detect_protocol_from_env(self, monkeypatch):
        """Test protocol detection from terminal environment variables."""
        monkeypatch.delenv("TMUX", raising=False)
        monkeypatch.setenv("TERM", "xterm-kitty")
        assert display.detect_graphics_protocol() == "kitty"


class TestTerminalSize:
    """Tests for terminal pixel size detection."""

    def test_reported_pixels(self, monkeypatch):
        """Test pixel sizes reported by the terminal are used."""
        monkeypatch.setattr(terminal_size, "_query_winsize", lambda: (24, 80, 1280, 720))
        assert terminal_size.get_terminal_pixel_size() == (1280, 720)

    def test_cell_fallback(self, monkeypatch):
        """Test columns and rows are scaled by the default cell size."""
        monkeypatch.setattr(terminal_size, "_query_winsize", lambda: (0, 0, 0, 0))
        monkeypatch.setattr(terminal_size.shutil, "get_terminal_size", lambda: (80, 24))
        assert terminal_size.get_terminal_pixel_size() == (800, 480)
