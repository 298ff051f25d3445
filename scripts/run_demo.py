#!/usr/bin/env python3
"""Headless demo: walk right, hit the edge, then stand still."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sprite_animator.app import GameLoop, ScriptedKeyboard
from sprite_animator.assets import ANIMATION_DEFINITIONS, PlaceholderGenerator
from sprite_animator.engine import AnimationCatalog
from sprite_animator.renderer import SpriteRenderer
from sprite_animator.types import AnimatorState, CanvasContext, Position


async def load_catalog() -> AnimationCatalog:
    """Build the catalog from placeholder sheets."""
    generator = PlaceholderGenerator()
    sheets = {
        name: await asyncio.to_thread(generator.render_sheet, name, definition)
        for name, definition in ANIMATION_DEFINITIONS.items()
    }
    return AnimationCatalog.from_definitions(ANIMATION_DEFINITIONS, sheets)


def print_state(loop: GameLoop) -> None:
    """Print the character's state."""
    c = loop.character
    print(
        f"  frame {loop.frame_count:4d}  {c.current_state.value:5s} "
        f"anim={c.current_frame} counter={c.frame_counter} x={c.position.x:6.1f}"
    )


async def run_demo():
    """Run the demo."""
    print("=" * 60)
    print("Sprite Animator Demo")
    print("=" * 60)

    canvas = CanvasContext(width=400, height=300)
    keyboard = ScriptedKeyboard.walk_then_idle(walk_frames=90, idle_frames=20)
    loop = GameLoop(
        character=AnimatorState(position=Position(canvas.width / 4, canvas.height * 0.7)),
        canvas=canvas,
        renderer=SpriteRenderer(canvas.width, canvas.height),
        keyboard=keyboard,
    )

    await loop.wait_for_assets(load_catalog())

    while not keyboard.quit_requested:
        loop.tick()
        if loop.frame_count % 10 == 0:
            print_state(loop)

    print("\n[Resize to 600x300]")
    loop.resize(600, 300)
    print_state(loop)


def main():
    """Main entry point."""
    asyncio.run(run_demo())


if __name__ == "__main__":
    main()
