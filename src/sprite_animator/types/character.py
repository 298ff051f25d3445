"""Character and animation state types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CharacterState(Enum):
    """Animation states a character can be in."""

    IDLE = "idle"
    WALK = "walk"
    RUN = "run"
    ATTACK = "attack"


@dataclass
class Position:
    """2D position in canvas pixel space."""

    x: float
    y: float

    def copy(self) -> "Position":
        """Create a copy of this position."""
        return Position(self.x, self.y)


@dataclass
class AnimatorState:
    """Mutable state of one on-screen character."""

    position: Position
    velocity: float = 0.0  # pixels per tick, signed
    current_state: CharacterState = CharacterState.IDLE
    current_frame: int = 0
    frame_counter: int = 0  # ticks since the last frame advance
    facing: int = 1  # 1 = right, -1 = left
    scale: float = 1.0

    def __post_init__(self):
        if self.facing not in (1, -1):
            raise ValueError(f"facing must be 1 or -1, got {self.facing}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")

    def set_state(self, new_state: CharacterState) -> bool:
        """Switch animation state.

        Re-assigning the current state keeps the frame and counter, so a
        held key animates continuously instead of restarting every tick.

        Args:
            new_state: The state to switch to.

        Returns:
            True if the state changed.
        """
        if self.current_state == new_state:
            return False
        self.current_state = new_state
        self.current_frame = 0
        self.frame_counter = 0
        return True

    def set_velocity(self, velocity: float) -> None:
        """Set horizontal speed in pixels per tick."""
        self.velocity = velocity

    def copy(self) -> "AnimatorState":
        """Create a copy of this state."""
        return AnimatorState(
            position=self.position.copy(),
            velocity=self.velocity,
            current_state=self.current_state,
            current_frame=self.current_frame,
            frame_counter=self.frame_counter,
            facing=self.facing,
            scale=self.scale,
        )
