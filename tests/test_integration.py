"""End-to-end tests from loaded sheets to drawn frames."""

from __future__ import annotations

import pytest

from conftest import frame_color
from sprite_animator.app import GameLoop, ScriptedKeyboard
from sprite_animator.assets import ANIMATION_DEFINITIONS, PlaceholderGenerator
from sprite_animator.engine import AnimationCatalog, CharacterAnimator
from sprite_animator.renderer import SpriteRenderer, SpriteSheetLoader
from sprite_animator.types import AnimatorState, CanvasContext, CharacterState, Position


class TestWalkScenario:
    """Walking from rest advances the walk clip and moves right."""

    def test_six_ticks_of_walking(self, animator, canvas):
        character = AnimatorState(position=Position(100, 400))

        animator.set_state(character, CharacterState.WALK)
        animator.set_velocity(character, 3)
        for _ in range(6):
            animator.tick(character, canvas)
            assert character.current_state == CharacterState.WALK

        assert character.current_frame == 1
        assert character.frame_counter == 0
        assert character.position.x == 118

    def test_walk_frame_is_drawn(self, animator, canvas):
        """Test the rendered pixels come from the advanced walk frame."""
        character = AnimatorState(position=Position(100, 400))
        renderer = SpriteRenderer(canvas.width, canvas.height)
        animator.set_state(character, CharacterState.WALK)
        animator.set_velocity(character, 3)
        for _ in range(6):
            animator.tick(character, canvas)

        renderer.clear(canvas.background)
        animator.render(character, renderer)

        assert tuple(renderer.to_array()[450, 118 + 50]) == frame_color(1)


class TestClampScenario:
    """Walking into the right edge stops at the idle frame bound."""

    def test_clamps_at_652(self, animator):
        canvas = CanvasContext(width=800, height=600)
        character = AnimatorState(position=Position(799, 400), velocity=3)

        for _ in range(100):
            animator.tick(character, canvas)
            assert character.position.x <= 652

        assert character.position.x == 652


class TestIndependentCharacters:
    """Several characters share one catalog without interfering."""

    def test_two_characters(self, animator, canvas):
        walker = AnimatorState(position=Position(0, 0))
        idler = AnimatorState(position=Position(300, 0))
        walker.set_state(CharacterState.WALK)
        walker.set_velocity(4)

        for _ in range(8):
            animator.tick(walker, canvas)
            animator.tick(idler, canvas)

        assert walker.position.x == 32
        assert walker.current_frame == 1
        assert idler.position.x == 300
        assert idler.current_frame == 1
        assert idler.current_state == CharacterState.IDLE


class TestPlaceholderPipeline:
    """Placeholder sheets go through the same loading path as real art."""

    @pytest.mark.asyncio
    async def test_loop_on_placeholder_sheets(self, tmp_path):
        PlaceholderGenerator(tmp_path).generate_all()
        loader = SpriteSheetLoader(tmp_path)
        canvas = CanvasContext(width=800, height=500)
        character = AnimatorState(position=Position(200, 300))
        loop = GameLoop(
            character=character,
            canvas=canvas,
            renderer=SpriteRenderer(800, 500),
            keyboard=ScriptedKeyboard([{"d"}] * 12 + [set()] * 3, stop_when_done=True),
            target_fps=1000,
        )

        await loop.run_async(loader.load_catalog(ANIMATION_DEFINITIONS))

        assert loop.frame_count == 16
        assert character.position.x == 236
        assert character.current_state == CharacterState.IDLE
        assert loop.renderer.blit_count == 16
        assert isinstance(loop.animator, CharacterAnimator)
        assert isinstance(loop.animator.catalog, AnimationCatalog)
        loader.close()
