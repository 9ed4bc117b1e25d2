"""
Main entry point for Ski Chase.

Loads settings, resolves every image, then hands the game to the pygame
simulator window.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from skichase.config.settings import get_settings
from skichase.core.events import Event, EventBus, EventType
from skichase.core.game import Game
from skichase.graphics.images import AssetLoadError

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure console logging, plus a file when one is configured."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Placement details are too chatty even for debug runs
    logging.getLogger("skichase.entities.obstacle_manager").setLevel(logging.INFO)


def log_event(event: Event) -> None:
    """Trace bus traffic in debug runs; ticks are left out."""
    if event.type != EventType.TICK:
        logger.debug(f"Event {event.type.name} from {event.source}: {event.data}")


async def run() -> int:
    """Load the game and run it until the window closes."""
    from skichase.simulator.window import SimulatorWindow, WindowConfig

    settings = get_settings()
    event_bus = EventBus()
    if settings.debug:
        event_bus.subscribe_all(log_event)
    game = Game(settings=settings, event_bus=event_bus)

    try:
        await game.load()
    except AssetLoadError as e:
        logger.error(f"Could not load game assets: {e}")
        return 1

    config = WindowConfig(
        width=settings.display.width,
        height=settings.display.height,
        scale=settings.display.scale,
        fps=settings.display.fps,
    )
    window = SimulatorWindow(game.canvas.buffer, config=config, event_bus=event_bus)
    await window.run()
    return 0


def main() -> None:
    """Main entry point."""
    settings = get_settings()
    setup_logging(debug=settings.debug, log_file=settings.log_file)

    logger.info("Starting Ski Chase")

    try:
        exit_code = asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        exit_code = 0
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
