#!/usr/bin/env python3
"""Save a single rendered frame to view."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sprite_animator.assets import ANIMATION_DEFINITIONS, PlaceholderGenerator
from sprite_animator.engine import AnimationCatalog, CharacterAnimator
from sprite_animator.renderer import SpriteRenderer
from sprite_animator.types import AnimatorState, CanvasContext, CharacterState, Position


def main():
    # Build a catalog from in-memory placeholder sheets
    generator = PlaceholderGenerator()
    sheets = {
        name: generator.render_sheet(name, definition)
        for name, definition in ANIMATION_DEFINITIONS.items()
    }
    catalog = AnimationCatalog.from_definitions(ANIMATION_DEFINITIONS, sheets)

    canvas = CanvasContext(width=800, height=500)
    character = AnimatorState(position=Position(200, 300))
    animator = CharacterAnimator(catalog)
    renderer = SpriteRenderer(canvas.width, canvas.height)

    # Walk for a few frames
    animator.set_state(character, CharacterState.WALK)
    animator.set_velocity(character, 3)
    for _ in range(20):
        animator.tick(character, canvas)

    renderer.clear(canvas.background)
    animator.render(character, renderer)

    # Save to file
    output = Path(__file__).parent.parent / "frame.png"
    renderer.save(output)
    print(f"Saved frame to {output}")
    print(f"State: {character.current_state.value} frame {character.current_frame} x={character.position.x:.0f}")


if __name__ == "__main__":
    main()
