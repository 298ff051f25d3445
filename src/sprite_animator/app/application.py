"""Main application entry point."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import tempfile
from pathlib import Path
from typing import Optional, Union

from sprite_animator.assets import ANIMATION_DEFINITIONS, PlaceholderGenerator
from sprite_animator.engine import DEFAULT_WALK_SPEED, AnimationCatalog, InputMapper
from sprite_animator.renderer import (
    SpriteRenderer,
    SpriteSheetLoader,
    TerminalPresenter,
    get_terminal_pixel_size,
)
from sprite_animator.types import AnimatorState, CanvasContext, Position

from .game_loop import GameLoop
from .keyboard import ScriptedKeyboard, TerminalKeyboard

logger = logging.getLogger(__name__)


class Application:
    """Sprite animator application."""

    def __init__(
        self,
        headless: bool = False,
        width: int = 0,
        height: int = 0,
        target_fps: int = 60,
        asset_root: Optional[Path] = None,
        scale: float = 1.0,
        walk_speed: float = DEFAULT_WALK_SPEED,
        placeholder: bool = False,
        max_frames: Optional[int] = None,
        save_frame: Optional[Path] = None,
    ):
        """Initialize the application.

        Args:
            headless: Run without a terminal display, on scripted input.
            width: Canvas width in pixels. 0 follows the terminal, also on resize.
            height: Canvas height in pixels. 0 follows the terminal, also on resize.
            target_fps: Target frames per second.
            asset_root: Directory holding the sprite sheets.
            scale: Character render scale.
            walk_speed: Walk velocity in pixels per tick.
            placeholder: Generate placeholder sheets instead of loading art.
            max_frames: Stop after this many frames.
            save_frame: Save the last frame as PNG on shutdown.
        """
        self.headless = headless
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.asset_root = asset_root
        self.scale = scale
        self.walk_speed = walk_speed
        self.placeholder = placeholder
        self.max_frames = max_frames
        self.save_frame = save_frame

        # Components (created in initialize)
        self.canvas: Optional[CanvasContext] = None
        self.character: Optional[AnimatorState] = None
        self.renderer: Optional[SpriteRenderer] = None
        self.loader: Optional[SpriteSheetLoader] = None
        self.keyboard: Optional[Union[ScriptedKeyboard, TerminalKeyboard]] = None
        self.presenter: Optional[TerminalPresenter] = None
        self.game_loop: Optional[GameLoop] = None
        self.assets_ready: Optional[asyncio.Task[AnimationCatalog]] = None

        self._placeholder_dir: Optional[tempfile.TemporaryDirectory] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Create all components and start loading sprite sheets."""
        if self._initialized:
            return

        width, height = self._canvas_size()

        self.canvas = CanvasContext(width=width, height=height)
        self.character = AnimatorState(
            position=Position(width / 4, height * 0.7),
            scale=self.scale,
        )
        self.renderer = SpriteRenderer(width, height, self.canvas.background)

        if self.placeholder:
            self._placeholder_dir = tempfile.TemporaryDirectory(prefix="sprite_animator_")
            asset_root = Path(self._placeholder_dir.name)
        else:
            asset_root = self.asset_root
        self.loader = SpriteSheetLoader(asset_root)
        self.assets_ready = asyncio.create_task(self._load_assets())

        if self.headless:
            # Walk right for two seconds, then stand for one
            self.keyboard = ScriptedKeyboard.walk_then_idle(
                walk_frames=self.target_fps * 2,
                idle_frames=self.target_fps,
            )
        else:
            self.keyboard = TerminalKeyboard()
            self.presenter = TerminalPresenter()

        self.game_loop = GameLoop(
            character=self.character,
            canvas=self.canvas,
            renderer=self.renderer,
            keyboard=self.keyboard,
            input_mapper=InputMapper(walk_speed=self.walk_speed),
            target_fps=self.target_fps,
            present=self.presenter,
        )

        self._initialized = True

    async def _load_assets(self) -> AnimationCatalog:
        if self.placeholder:
            generator = PlaceholderGenerator(self.loader.asset_root)
            await asyncio.to_thread(generator.generate_all)
        return await self.loader.load_catalog(ANIMATION_DEFINITIONS)

    @property
    def follows_terminal(self) -> bool:
        """Whether any canvas dimension tracks the terminal size."""
        return self.width <= 0 or self.height <= 0

    def _canvas_size(self) -> tuple[int, int]:
        """Get the canvas size, taking unset dimensions from the terminal."""
        if not self.follows_terminal:
            return self.width, self.height
        term_w, term_h = get_terminal_pixel_size()
        width = self.width if self.width > 0 else term_w
        height = self.height if self.height > 0 else term_h
        return width, height

    def _handle_resize(self) -> None:
        if not self.follows_terminal:
            return
        width, height = self._canvas_size()
        self.game_loop.resize(width, height)
        if self.presenter is not None:
            self.presenter.force_clear()

    async def run(self) -> None:
        """Run until the input asks to quit or the frame budget is spent."""
        await self.initialize()

        event_loop = asyncio.get_running_loop()
        watch_resize = not self.headless and self.follows_terminal and hasattr(signal, "SIGWINCH")
        if watch_resize:
            event_loop.add_signal_handler(signal.SIGWINCH, self._handle_resize)

        keyboard_context = (
            self.keyboard if isinstance(self.keyboard, TerminalKeyboard)
            else contextlib.nullcontext()
        )
        try:
            with keyboard_context:
                await self.game_loop.run_async(self.assets_ready, self.max_frames)
        finally:
            if watch_resize:
                event_loop.remove_signal_handler(signal.SIGWINCH)
            await self.shutdown()

    async def shutdown(self) -> None:
        """Stop the loop and release resources."""
        if self.game_loop is not None:
            self.game_loop.stop()

        if self.assets_ready is not None and not self.assets_ready.done():
            self.assets_ready.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.assets_ready

        if self.save_frame is not None and self.renderer is not None:
            self.renderer.save(self.save_frame)
            logger.info("Saved last frame to %s", self.save_frame)

        if self.presenter is not None:
            self.presenter.cleanup()
        if self.loader is not None:
            self.loader.close()
        if self._placeholder_dir is not None:
            self._placeholder_dir.cleanup()
            self._placeholder_dir = None


def main() -> None:
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Sprite Animator - walk a character with the D key")
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a display, on scripted input",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=0,
        help="Canvas width in pixels (default: follow the terminal)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=0,
        help="Canvas height in pixels (default: follow the terminal)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=60,
        help="Target FPS",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=None,
        help="Directory containing the sprite sheets",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="Character scale",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=DEFAULT_WALK_SPEED,
        help="Walk speed in pixels per frame",
    )
    parser.add_argument(
        "--placeholder",
        action="store_true",
        help="Use generated placeholder sheets",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many frames",
    )
    parser.add_argument(
        "--save-frame",
        type=Path,
        default=None,
        help="Save the last frame to this PNG path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs here instead of stderr",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        filename=args.log_file,
    )

    app = Application(
        headless=args.headless,
        width=args.width,
        height=args.height,
        target_fps=args.fps,
        asset_root=args.assets,
        scale=args.scale,
        walk_speed=args.speed,
        placeholder=args.placeholder,
        max_frames=args.frames,
        save_frame=args.save_frame,
    )

    try:
        asyncio.run(app.run())
    except FileNotFoundError as e:
        parser.exit(1, f"{e}\nPass --assets DIR or --placeholder.\n")
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
