"""Presenting frames in the terminal through graphics protocols."""

from __future__ import annotations

import base64
import io
import logging
import os
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image

    from .sprite_renderer import SpriteRenderer

logger = logging.getLogger(__name__)

FALLBACK_FRAME_PATH = Path(tempfile.gettempdir()) / "sprite_animator_frame.png"


def is_inside_tmux() -> bool:
    """Check if we're running inside tmux."""
    return "TMUX" in os.environ


def tmux_wrap(sequence: str) -> str:
    """Wrap an escape sequence for tmux passthrough."""
    if not is_inside_tmux():
        return sequence
    escaped = sequence.replace("\033", "\033\033")
    return f"\033Ptmux;{escaped}\033\\"


def detect_graphics_protocol() -> str:
    """Detect which graphics protocol the terminal supports."""
    term = os.environ.get("TERM", "").lower()
    term_program = os.environ.get("TERM_PROGRAM", "")

    if is_inside_tmux():
        return "sixel"
    if "kitty" in term:
        return "kitty"
    if term_program == "iTerm.app":
        return "iterm2"
    if "xterm" in term or "mlterm" in term:
        return "sixel"
    return "none"


def _encode_png(frame: Image.Image) -> str:
    buf = io.BytesIO()
    try:
        frame.save(buf, format="PNG")
        return base64.b64encode(buf.getvalue()).decode("ascii")
    finally:
        buf.close()


def _home_cursor(first_frame: bool) -> None:
    if first_frame:
        sys.stdout.write("\033[2J\033[H\033[?25l")
    else:
        sys.stdout.write("\033[H")


def display_kitty(frame: Image.Image, first_frame: bool) -> None:
    """Display using the Kitty graphics protocol."""
    _home_cursor(first_frame)
    data = _encode_png(frame)

    chunk_size = 4096
    for i in range(0, len(data), chunk_size):
        chunk = data[i:i + chunk_size]
        m = 1 if i + chunk_size < len(data) else 0
        if i == 0:
            sys.stdout.write(f"\033_Ga=T,f=100,m={m};{chunk}\033\\")
        else:
            sys.stdout.write(f"\033_Gm={m};{chunk}\033\\")
    sys.stdout.flush()


def display_iterm2(frame: Image.Image, first_frame: bool) -> None:
    """Display using iTerm2 inline images."""
    _home_cursor(first_frame)
    width, height = frame.size
    data = _encode_png(frame)
    sequence = (
        f"\033]1337;File=inline=1;width={width}px;height={height}px;"
        f"preserveAspectRatio=0:{data}\007"
    )
    sys.stdout.write(tmux_wrap(sequence))
    sys.stdout.flush()


def display_sixel(frame: Image.Image, first_frame: bool) -> bool:
    """Display using Sixel graphics via img2sixel.

    Returns:
        False if img2sixel is unavailable and the frame was only saved.
    """
    frame.save(FALLBACK_FRAME_PATH, format="PNG")
    if not shutil.which("img2sixel"):
        return False

    _home_cursor(first_frame)
    sys.stdout.flush()

    width, height = frame.size
    result = subprocess.run(
        ["img2sixel", "-w", str(width), "-h", str(height), str(FALLBACK_FRAME_PATH)],
        capture_output=True,
    )
    if result.returncode == 0:
        sys.stdout.buffer.write(result.stdout)
        sys.stdout.flush()
    else:
        logger.warning("img2sixel failed: %s", result.stderr.decode(errors="replace").strip())
    return True


def cleanup_terminal() -> None:
    """Restore terminal state."""
    sys.stdout.write("\033[2J\033[H\033[?25h")
    sys.stdout.flush()


class TerminalPresenter:
    """Writes each rendered frame to the terminal."""

    def __init__(self, protocol: str | None = None):
        """Initialize the presenter.

        Args:
            protocol: "kitty", "iterm2", "sixel" or "none". Detected if omitted.
        """
        self.protocol = protocol or detect_graphics_protocol()
        self._first_frame = True
        self._warned = False

    def __call__(self, renderer: SpriteRenderer) -> None:
        """Present the renderer's current frame buffer."""
        frame = renderer.frame
        if self.protocol == "kitty":
            display_kitty(frame, self._first_frame)
        elif self.protocol == "iterm2":
            display_iterm2(frame, self._first_frame)
        elif self.protocol == "sixel":
            if not display_sixel(frame, self._first_frame):
                self._warn_fallback("img2sixel not found")
        else:
            frame.save(FALLBACK_FRAME_PATH, format="PNG")
            self._warn_fallback("no terminal graphics protocol detected")
        self._first_frame = False

    def force_clear(self) -> None:
        """Clear the screen before the next frame."""
        self._first_frame = True

    def cleanup(self) -> None:
        """Restore terminal state."""
        if not self._first_frame:
            cleanup_terminal()

    def _warn_fallback(self, reason: str) -> None:
        if not self._warned:
            logger.warning("%s, frames are saved to %s", reason, FALLBACK_FRAME_PATH)
            self._warned = True
