"""Terminal size detection."""

from __future__ import annotations

import shutil
import struct
import sys

# Used when the terminal does not report pixel dimensions
DEFAULT_CELL_SIZE = (10, 20)


def _query_winsize() -> tuple[int, int, int, int]:
    """Get (rows, cols, xpixel, ypixel) from the terminal, zeros on failure."""
    import fcntl
    import termios

    try:
        result = fcntl.ioctl(sys.stdout.fileno(), termios.TIOCGWINSZ, b"\x00" * 8)
        return struct.unpack("HHHH", result)
    except (OSError, ValueError):
        return (0, 0, 0, 0)


def get_terminal_pixel_size() -> tuple[int, int]:
    """Get terminal size in pixels.

    Falls back to columns and rows times the default cell size when the
    terminal does not report pixels.
    """
    _, _, xpixel, ypixel = _query_winsize()
    if xpixel > 0 and ypixel > 0:
        return xpixel, ypixel

    cols, rows = shutil.get_terminal_size()
    cell_w, cell_h = DEFAULT_CELL_SIZE
    return cols * cell_w, rows * cell_h
