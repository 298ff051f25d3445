"""Main application package."""

from __future__ import annotations

from .keyboard import Keyboard, ScriptedKeyboard, TerminalKeyboard
from .game_loop import GameLoop
from .application import Application

__all__ = [
    "Keyboard",
    "ScriptedKeyboard",
    "TerminalKeyboard",
    "GameLoop",
    "Application",
]
