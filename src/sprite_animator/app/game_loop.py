"""Frame loop driving input, update and render."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from sprite_animator.engine import CharacterAnimator, InputMapper

if TYPE_CHECKING:
    from sprite_animator.app.keyboard import Keyboard
    from sprite_animator.engine import AnimationCatalog
    from sprite_animator.renderer import SpriteRenderer
    from sprite_animator.types import AnimatorState, CanvasContext

logger = logging.getLogger(__name__)


class GameLoop:
    """Runs one input -> update -> render cycle per frame."""

    def __init__(
        self,
        character: AnimatorState,
        canvas: CanvasContext,
        renderer: SpriteRenderer,
        keyboard: Keyboard,
        input_mapper: Optional[InputMapper] = None,
        target_fps: int = 60,
        present: Optional[Callable[[SpriteRenderer], None]] = None,
    ):
        """Initialize the game loop.

        Args:
            character: The character being animated.
            canvas: Canvas the character is clamped to.
            renderer: Frame buffer to draw into.
            keyboard: Input polled once per frame.
            input_mapper: Maps held keys to state and velocity.
            target_fps: Target frames per second.
            present: Called with the renderer after each frame is drawn.
        """
        self.character = character
        self.canvas = canvas
        self.renderer = renderer
        self.keyboard = keyboard
        self.input_mapper = input_mapper or InputMapper()
        self.target_fps = target_fps
        self.target_frame_time = 1.0 / target_fps
        self.present = present

        self.animator: Optional[CharacterAnimator] = None

        self._running = False
        self._last_time = 0.0
        self._frame_count = 0
        self._fps_frames = 0
        self._fps = 0.0
        self._fps_update_time = 0.0

    def attach_catalog(self, catalog: AnimationCatalog) -> None:
        """Start animating with a fully loaded catalog."""
        self.animator = CharacterAnimator(catalog)

    async def wait_for_assets(self, assets_ready: Awaitable[AnimationCatalog]) -> None:
        """Wait for sprite sheets to finish loading, then attach them.

        Args:
            assets_ready: Resolves to the loaded catalog.
        """
        catalog = await assets_ready
        self.attach_catalog(catalog)
        logger.info("Assets ready, entering frame loop")

    def tick(self, dt: float = 0.0) -> None:
        """Process a single frame.

        Args:
            dt: Seconds since the previous frame, for FPS tracking only.
        """
        if self.animator is None:
            raise RuntimeError("Sprite sheets must be loaded before the first tick")

        command = self.input_mapper.map(self.keyboard.pressed_keys())
        self.animator.set_state(self.character, command.state)
        self.animator.set_velocity(self.character, command.velocity)

        self.animator.tick(self.character, self.canvas)

        self.renderer.clear(self.canvas.background)
        self.animator.render(self.character, self.renderer)
        if self.present is not None:
            self.present(self.renderer)

        self._frame_count += 1
        self._fps_frames += 1
        self._fps_update_time += dt
        if self._fps_update_time >= 1.0:
            self._fps = self._fps_frames / self._fps_update_time
            self._fps_frames = 0
            self._fps_update_time = 0.0

    def resize(self, width: int, height: int) -> None:
        """Resize the canvas and keep the character a quarter of the way across.

        Args:
            width: New canvas width in pixels.
            height: New canvas height in pixels.
        """
        self.canvas.resize(width, height)
        self.renderer.resize(width, height)
        self.character.position.x = width / 4
        logger.debug("Canvas resized to %dx%d", width, height)

    def start(self) -> None:
        """Start the game loop."""
        self._running = True
        self._last_time = time.perf_counter()

    def stop(self) -> None:
        """Stop the game loop."""
        self._running = False

    @property
    def is_running(self) -> bool:
        """Check if loop is running."""
        return self._running

    @property
    def fps(self) -> float:
        """Get current FPS."""
        return self._fps

    @property
    def frame_count(self) -> int:
        """Get the number of frames processed."""
        return self._frame_count

    def process_frame(self) -> float:
        """Process a single frame with timing.

        Returns:
            Delta time used for this frame.
        """
        current_time = time.perf_counter()
        dt = current_time - self._last_time
        self._last_time = current_time

        # Cap delta time after stalls
        if dt > 0.25:
            dt = 0.25

        self.tick(dt)
        return dt

    async def run_async(
        self,
        assets_ready: Optional[Awaitable[AnimationCatalog]] = None,
        max_frames: Optional[int] = None,
    ) -> None:
        """Run the game loop until stopped.

        Args:
            assets_ready: Awaited before the first frame if given.
            max_frames: Stop after this many frames.
        """
        if assets_ready is not None:
            await self.wait_for_assets(assets_ready)

        self.start()
        while self._running:
            frame_start = time.perf_counter()

            self.process_frame()

            if self.keyboard.quit_requested:
                self.stop()
            if max_frames is not None and self._frame_count >= max_frames:
                self.stop()

            frame_time = time.perf_counter() - frame_start
            sleep_time = max(0, self.target_frame_time - frame_time)
            await asyncio.sleep(sleep_time)
