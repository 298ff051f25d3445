"""Per-tick character update and frame rendering."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from sprite_animator.types import AnimatorState, CanvasContext, CharacterState, Position

if TYPE_CHECKING:
    from .catalog import AnimationCatalog

logger = logging.getLogger(__name__)


class FrameSurface(Protocol):
    """Anything a frame can be blitted onto."""

    def blit_frame(
        self,
        sheet: Any,
        source_rect: tuple[int, int, int, int],
        position: Position,
        facing: int,
        scale: float,
    ) -> None: ...


class CharacterAnimator:
    """Advances and draws characters using a shared animation catalog.

    The animator holds no per-character data; every call takes the
    AnimatorState and canvas it acts on.
    """

    def __init__(self, catalog: AnimationCatalog):
        """Initialize the animator.

        Args:
            catalog: Clips for each renderable state.
        """
        self.catalog = catalog

    def set_state(self, character: AnimatorState, new_state: CharacterState) -> None:
        """Switch a character's state, keeping its frame if unchanged."""
        if character.set_state(new_state):
            logger.debug("State -> %s", new_state.value)

    def set_velocity(self, character: AnimatorState, velocity: float) -> None:
        """Set a character's horizontal speed."""
        character.set_velocity(velocity)

    def movement_bound(self, character: AnimatorState, canvas: CanvasContext) -> float:
        """Get the largest x the character may reach.

        Always uses the IDLE frame width, whatever the active state.
        """
        return canvas.width - self.catalog.base_clip.frame_width * character.scale

    def tick(self, character: AnimatorState, canvas: CanvasContext) -> None:
        """Advance one tick: move, clamp, then step the animation.

        Args:
            character: The character to update.
            canvas: The canvas bounding movement.
        """
        position = character.position
        position.x += character.velocity
        position.x = max(0, min(position.x, self.movement_bound(character, canvas)))

        character.frame_counter += 1

        clip = self.catalog.clip_for(character.current_state)
        if clip is None:
            return

        if character.frame_counter >= clip.frame_delay:
            character.current_frame = (character.current_frame + 1) % clip.frame_count
            character.frame_counter = 0

    def render(self, character: AnimatorState, surface: FrameSurface) -> bool:
        """Draw the character's current frame.

        Args:
            character: The character to draw.
            surface: Target surface.

        Returns:
            True if a frame was drawn, False for states without a clip.
        """
        clip = self.catalog.clip_for(character.current_state)
        if clip is None:
            return False

        surface.blit_frame(
            clip.sheet,
            clip.source_rect(character.current_frame),
            character.position,
            character.facing,
            character.scale,
        )
        return True
