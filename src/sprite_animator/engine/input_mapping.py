"""Keyboard input to character command mapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from sprite_animator.types import CharacterState

MOVE_RIGHT_KEY_CODE = 68  # 'D'
MOVE_RIGHT_KEYS: frozenset[str] = frozenset({"d", "D"})
DEFAULT_WALK_SPEED = 3.0  # pixels per tick


@dataclass(frozen=True)
class InputCommand:
    """The state and velocity a frame's input asks for."""

    state: CharacterState
    velocity: float


class InputMapper:
    """Maps the set of held keys to an InputCommand."""

    def __init__(
        self,
        move_right_keys: Iterable[str] = MOVE_RIGHT_KEYS,
        walk_speed: float = DEFAULT_WALK_SPEED,
        move_right_key_codes: Iterable[int] = (MOVE_RIGHT_KEY_CODE,),
    ):
        """Initialize the mapper.

        Args:
            move_right_keys: Characters that count as "move right".
            walk_speed: Velocity while walking, in pixels per tick.
            move_right_key_codes: Integer key codes that count as "move right".
        """
        self.move_right_keys = frozenset(move_right_keys)
        self.move_right_key_codes = frozenset(move_right_key_codes)
        self.walk_speed = walk_speed

    def map(self, pressed_keys: Iterable[Union[str, int]]) -> InputCommand:
        """Get the command for the keys held this frame.

        Args:
            pressed_keys: Held keys, as characters or key codes.

        Returns:
            WALK at walk_speed while "move right" is held, otherwise IDLE at rest.
        """
        for key in pressed_keys:
            bindings = self.move_right_key_codes if isinstance(key, int) else self.move_right_keys
            if key in bindings:
                return InputCommand(CharacterState.WALK, self.walk_speed)
        return InputCommand(CharacterState.IDLE, 0.0)
