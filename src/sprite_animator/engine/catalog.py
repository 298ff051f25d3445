"""Lookup table from character state to animation clip."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterator, Mapping, Optional

from sprite_animator.types import AnimationClip, CharacterState

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


class AnimationCatalog:
    """Read-only mapping of states to their clips.

    States without a clip (RUN, ATTACK) are expected; clip_for returns None
    for them.
    """

    def __init__(self, clips: Mapping[CharacterState, AnimationClip]):
        """Initialize the catalog.

        Args:
            clips: One clip per state that has visual data. Must include IDLE,
                whose frame width bounds character movement.
        """
        if CharacterState.IDLE not in clips:
            raise ValueError("catalog requires an IDLE clip")
        self._clips: dict[CharacterState, AnimationClip] = dict(clips)

    @classmethod
    def from_definitions(
        cls,
        definitions: Mapping[str, dict],
        sheets: Mapping[str, "Image.Image"],
    ) -> "AnimationCatalog":
        """Build a catalog from definitions and their loaded sheets.

        Frame sizes come from each sheet's raw pixel dimensions.

        Args:
            definitions: Animation definitions keyed by state name.
            sheets: Loaded sheet images keyed by the same names.

        Returns:
            The built catalog.
        """
        clips: dict[CharacterState, AnimationClip] = {}
        for name, definition in definitions.items():
            state = CharacterState(name)
            if name not in sheets:
                raise KeyError(f"No sheet loaded for animation '{name}'")
            sheet = sheets[name]
            expected = tuple(definition.get("sheet_size", sheet.size))
            if tuple(sheet.size) != expected:
                logger.warning(
                    "Sheet for '%s' is %dx%d, expected %dx%d",
                    name, sheet.size[0], sheet.size[1], expected[0], expected[1],
                )
            clips[state] = AnimationClip.from_sheet(
                sheet.size,
                frame_count=definition["frame_count"],
                frame_delay=definition["frame_delay"],
                sheet=sheet,
            )
            logger.debug(
                "Clip %s: %d frames of %dx%d, delay %d",
                state.value,
                clips[state].frame_count,
                clips[state].frame_width,
                clips[state].frame_height,
                clips[state].frame_delay,
            )
        return cls(clips)

    def clip_for(self, state: CharacterState) -> Optional[AnimationClip]:
        """Get the clip for a state, or None if it has no visual data."""
        return self._clips.get(state)

    @property
    def base_clip(self) -> AnimationClip:
        """The IDLE clip, used for the movement bound."""
        return self._clips[CharacterState.IDLE]

    def states(self) -> list[CharacterState]:
        """Get the states that have clips."""
        return list(self._clips)

    def __contains__(self, state: Any) -> bool:
        return state in self._clips

    def __len__(self) -> int:
        return len(self._clips)

    def __iter__(self) -> Iterator[CharacterState]:
        return iter(self._clips)
