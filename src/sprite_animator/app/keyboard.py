"""Keyboard sources polled once per frame."""

from __future__ import annotations

import os
import re
import select
import sys
import time
from typing import Callable, Iterable, Optional, Protocol

QUIT_KEYS = frozenset({"q", "Q"})  # Ctrl-C stays a signal, cbreak keeps ISIG

# CSI (ESC [ params final) and SS3 (ESC O x) sequences, plus Alt-prefixed keys
ESCAPE_SEQUENCE = re.compile(r"\x1b(?:\[[0-?]*[ -/]*[@-~]|O.|.)?", re.DOTALL)


class Keyboard(Protocol):
    """Source of held keys."""

    quit_requested: bool

    def pressed_keys(self) -> set[str]: ...


class ScriptedKeyboard:
    """Replays a fixed sequence of held-key sets, one per frame."""

    def __init__(self, frames: Iterable[Iterable[str]], stop_when_done: bool = False):
        """Initialize the scripted keyboard.

        Args:
            frames: Keys held on each successive frame.
            stop_when_done: Request quit once the script runs out.
        """
        self._frames = [set(keys) for keys in frames]
        self._index = 0
        self.stop_when_done = stop_when_done
        self.quit_requested = False

    @classmethod
    def walk_then_idle(cls, walk_frames: int, idle_frames: int) -> "ScriptedKeyboard":
        """Hold "d" for walk_frames, then release for idle_frames."""
        return cls([{"d"}] * walk_frames + [set()] * idle_frames, stop_when_done=True)

    @property
    def remaining(self) -> int:
        return len(self._frames) - self._index

    def pressed_keys(self) -> set[str]:
        """Get the keys held this frame and advance the script."""
        if self._index >= len(self._frames):
            if self.stop_when_done:
                self.quit_requested = True
            return set()
        keys = self._frames[self._index]
        self._index += 1
        return set(keys)


class TerminalKeyboard:
    """Reads keys from a terminal in cbreak mode.

    Terminals only report key presses and auto-repeats, not releases, so a
    key counts as held while its events keep arriving within hold_timeout.
    """

    def __init__(
        self,
        hold_timeout: float = 0.55,
        fd: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the keyboard.

        Args:
            hold_timeout: Seconds a key stays held after its last event.
                Must exceed the terminal's initial auto-repeat delay.
            fd: File descriptor to read, stdin by default.
            clock: Monotonic time source.
        """
        self.hold_timeout = hold_timeout
        self._fd = fd if fd is not None else sys.stdin.fileno()
        self._clock = clock
        self._last_seen: dict[str, float] = {}
        self._saved_attrs = None
        self.quit_requested = False

    def __enter__(self) -> "TerminalKeyboard":
        import termios
        import tty

        if os.isatty(self._fd):
            self._saved_attrs = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        import termios

        if self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

    def feed(self, data: str) -> None:
        """Record key events from raw input.

        Escape sequences (arrows, function keys, Alt combinations) are
        dropped whole so their trailing bytes do not read as plain keys.
        """
        now = self._clock()
        for char in ESCAPE_SEQUENCE.sub("", data):
            if char in QUIT_KEYS:
                self.quit_requested = True
            self._last_seen[char] = now

    def _read_available(self) -> str:
        chunks = []
        while True:
            ready, _, _ = select.select([self._fd], [], [], 0)
            if not ready:
                break
            data = os.read(self._fd, 1024)
            if not data:
                break
            chunks.append(data.decode(errors="ignore"))
        return "".join(chunks)

    def pressed_keys(self) -> set[str]:
        """Get the keys currently considered held."""
        data = self._read_available()
        if data:
            self.feed(data)
        now = self._clock()
        return {key for key, seen in self._last_seen.items() if now - seen <= self.hold_timeout}
