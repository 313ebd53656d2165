"""
Main entry point for BEAR RUN.

Loads settings (environment and .env), wires the event bus, game, driver,
audio and window, then runs the display loop.
"""

import asyncio
import logging
import random
import sys

from bearrun.config.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_game(settings: Settings) -> None:
    """Build every component and run the window until it closes."""
    from bearrun.audio.cues import AudioCues
    from bearrun.audio.engine import AudioEngine
    from bearrun.core.events import EventBus
    from bearrun.game.driver import FrameDriver
    from bearrun.game.session import BearRunGame
    from bearrun.graphics.scene import SceneRenderer
    from bearrun.simulator.window import GameWindow, WindowConfig

    event_bus = EventBus()
    audio = AudioEngine(
        sample_rate=settings.audio.sample_rate,
        volume=settings.audio.volume,
        enabled=settings.audio.enabled,
    )
    cues = AudioCues(event_bus, audio)

    game = BearRunGame(
        settings=settings.game,
        event_bus=event_bus,
        rng=random.Random(settings.seed),
        audio=audio,
    )
    driver = FrameDriver(game)

    renderer = SceneRenderer(
        width=settings.display.field_width,
        height=settings.display.field_height,
        star_count=settings.display.star_count,
        seed=settings.seed,
    )
    window = GameWindow(
        game=game,
        driver=driver,
        renderer=renderer,
        config=WindowConfig(
            width=settings.display.window_width,
            height=settings.display.window_height,
            title=settings.title,
            fullscreen=settings.display.fullscreen,
            fps=settings.display.fps,
        ),
        event_bus=event_bus,
    )

    try:
        await window.run()
    finally:
        cues.detach()
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv
    from pydantic import ValidationError

    # Load environment variables
    load_dotenv()

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging()
        logging.getLogger(__name__).error(f"Invalid settings: {e}")
        sys.exit(1)

    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("BEAR RUN starting...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("BEAR RUN stopped")


if __name__ == "__main__":
    main()
