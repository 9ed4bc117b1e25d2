"""
Desktop window for playing Ski Chase, using pygame.

Translates pygame key presses into key identifiers on the event bus, emits
one TICK per frame and blits the game's framebuffer scaled to the window.
"""

import pygame
import asyncio
import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from skichase.constants import Key
from skichase.core.events import Event, EventBus, EventType, key_down_event, tick_event

logger = logging.getLogger(__name__)


# pygame key -> key identifier delivered to the game
KEY_MAP: dict[int, str] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_SPACE: Key.SPACE,
    pygame.K_f: Key.FLIP,
    pygame.K_p: Key.P,
    pygame.K_ESCAPE: Key.ESC,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_KP_ENTER: Key.ENTER,
    pygame.K_r: Key.RESTART,
}


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 800
    height: int = 600
    scale: int = 1
    title: str = "Ski Chase"
    fps: int = 60


class SimulatorWindow:
    """
    Window hosting the game loop.

    Keyboard Mapping:
        ARROWS: Steer the skier
        SPACE: Jump (on a ramp)
        F: Flip while airborne
        P / ESC: Pause and resume
        RETURN / R: Restart after game over
        Q: Quit
    """

    def __init__(
        self,
        framebuffer: NDArray[np.uint8],
        config: WindowConfig | None = None,
        event_bus: EventBus | None = None
    ) -> None:
        self.framebuffer = framebuffer
        self.config = config or WindowConfig()
        self.event_bus = event_bus or EventBus()

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._frame_count = 0

        self.event_bus.subscribe(EventType.SKIER_STATE_CHANGED, self._on_skier_state_changed)
        self.event_bus.subscribe(EventType.QUIT, lambda event: self.stop())

        logger.info("SimulatorWindow created")

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        self._screen = pygame.display.set_mode(
            (self.config.width * self.config.scale, self.config.height * self.config.scale),
            pygame.DOUBLEBUF
        )
        self._clock = pygame.time.Clock()

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height} x{self.config.scale}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.event_bus.emit(Event(EventType.QUIT, source="window"))

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        if event.key == pygame.K_q:
            self.event_bus.emit(Event(EventType.QUIT, source="keyboard"))
            return

        key = KEY_MAP.get(event.key)
        if key is not None:
            self.event_bus.emit(key_down_event(key))

    def _render(self) -> None:
        """Blit the game framebuffer to the window."""
        if not self._screen:
            return

        # pygame surfaces are indexed (x, y), numpy buffers (y, x)
        surface = pygame.surfarray.make_surface(self.framebuffer.swapaxes(0, 1))
        if self.config.scale != 1:
            surface = pygame.transform.scale(surface, self._screen.get_size())
        self._screen.blit(surface, (0, 0))

        pygame.display.flip()

    def _on_skier_state_changed(self, event: Event) -> None:
        if self._screen:
            state = event.data["new"]
            pygame.display.set_caption(f"{self.config.title} - {state.name.title()}")

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()

            # Game updates and draws into the framebuffer on tick
            self.event_bus.emit(tick_event(pygame.time.get_ticks(), self._frame_count))

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
