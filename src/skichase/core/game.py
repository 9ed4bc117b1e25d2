"""
The game orchestrator.

Owns the canvas, the skier, the rhino and the obstacle manager, keeps the
game window centred on the skier and runs one update and draw pass per
tick. Input and ticks arrive over the event bus; pause, reset and entity
state changes are published back on it.
"""

from typing import Optional
import logging
import random

from skichase.config.settings import Settings, get_settings
from skichase.constants import (
    IMAGES,
    Key,
    RHINO_START_X,
    RHINO_START_Y,
    SCORE_FLIPPING,
    SCORE_JUMPING,
    SCORE_SKIING,
)
from skichase.core.events import Event, EventBus, EventType
from skichase.core.geometry import Rect
from skichase.entities.obstacle_manager import ObstacleManager
from skichase.entities.rhino import Rhino, RhinoState
from skichase.entities.skier import Skier, SkierState
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager
from skichase.graphics.primitives import Color

logger = logging.getLogger(__name__)

SCORE_BY_STATE: dict[SkierState, int] = {
    SkierState.SKIING: SCORE_SKIING,
    SkierState.JUMPING: SCORE_JUMPING,
    SkierState.FLIPPING: SCORE_FLIPPING,
}

SCORE_COLOR: Color = (0, 0, 0)
MENU_TEXT_COLOR: Color = (255, 255, 255)

PAUSED_OPACITY = 0.5
CRASHED_OPACITY = 0.2
GAME_OVER_OPACITY = 0.5


class Game:
    """
    Runs the skiing game.

    Call ``await load()`` once before the first tick; it resolves every
    image and builds the starting slope. After that the host drives the
    game with ``tick(current_time)`` and ``handle_key_down(key)``, either
    directly or through KEY_DOWN and TICK events on the bus.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        image_manager: Optional[ImageManager] = None,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.width = self.settings.display.width
        self.height = self.settings.display.height

        self.canvas = Canvas(self.width, self.height)
        self.image_manager = image_manager or ImageManager(self.settings.assets_path)
        self.event_bus = event_bus or EventBus()
        self.rng = rng or random.Random(self.settings.seed)

        self.obstacle_manager = ObstacleManager(self.image_manager, self.canvas, rng=self.rng)
        self.skier: Optional[Skier] = None
        self.rhino: Optional[Rhino] = None
        self.game_window: Optional[Rect] = None

        self.game_time = 0.0
        self.score = 0
        self.paused = False

        self.event_bus.subscribe(EventType.KEY_DOWN, self._on_key_down)
        self.event_bus.subscribe(EventType.TICK, self._on_tick)

    @property
    def is_started(self) -> bool:
        return self.skier is not None

    async def load(self) -> None:
        """Load every image, then set up the first run.

        Raises:
            AssetLoadError: if any image cannot be resolved
        """
        await self.image_manager.load_images(IMAGES)
        self.reset()

    def reset(self) -> None:
        """Start a fresh run: new slope, skier at the origin, rhino far uphill."""
        self.obstacle_manager.clear()

        self.skier = Skier(0, 0, self.image_manager, self.obstacle_manager, self.canvas)
        self.skier.add_state_listener(self._on_skier_state_changed)

        self.rhino = Rhino(RHINO_START_X, RHINO_START_Y, self.image_manager, self.canvas)
        self.rhino.add_state_listener(self._on_rhino_state_changed)

        self.game_window = self.calculate_game_window()
        self.obstacle_manager.place_initial_obstacles(self.game_window, avoid=self.skier.get_bounds())

        self.score = 0
        self.paused = False

        logger.info("Game reset")
        self.event_bus.emit(Event(EventType.GAME_RESET, source="game"))

    def calculate_game_window(self) -> Rect:
        """The world rectangle drawn to the screen, centred on the skier."""
        position = self.skier.get_position()
        left = position.x - self.width / 2
        top = position.y - self.height / 2
        return Rect(left, top, left + self.width, top + self.height)

    # Loop

    def tick(self, current_time: float) -> None:
        """One frame: clear, update, draw."""
        self.canvas.clear_canvas()
        self.update(current_time)
        self.draw()

    def update(self, current_time: float) -> None:
        if self.paused:
            return
        self.game_time = current_time

        self._update_score()

        previous_game_window = self.game_window
        self.game_window = self.calculate_game_window()
        self.obstacle_manager.place_new_obstacle(
            self.game_window, previous_game_window, avoid=self.skier.get_bounds()
        )

        if not self.skier.removed:
            self.skier.update(current_time)
        if not self.rhino.removed:
            self.rhino.update(current_time, self.skier)

    def _update_score(self) -> None:
        self.score += SCORE_BY_STATE.get(self.skier.state, 0)

    def draw(self) -> None:
        self.canvas.set_draw_offset(self.game_window.left, self.game_window.top)

        if not self.skier.removed:
            self.skier.draw()
        if not self.rhino.removed:
            self.rhino.draw()
        self.obstacle_manager.draw_obstacles()

        self._draw_score()
        self._draw_menu_messages()

    def _draw_score(self) -> None:
        self.canvas.draw_text(f"SCORE: {self.score}", 10, 10, SCORE_COLOR, scale=3)

    def _draw_menu_message(self, message: str, opacity: float) -> None:
        self.canvas.fill_overlay(opacity)
        self.canvas.draw_centered_text(message, self.height // 2, MENU_TEXT_COLOR, scale=2)

    def _draw_menu_messages(self) -> None:
        if self.paused:
            self._draw_menu_message(f"Game paused! Your score is {self.score}!", PAUSED_OPACITY)

        state = self.skier.state
        if state == SkierState.CRASHED:
            self._draw_menu_message(
                "You crashed! You can keep moving. Be aware of the obstacles!", CRASHED_OPACITY
            )
        elif state == SkierState.DEAD:
            self._draw_menu_message(f"Game over! Your score was {self.score}!", GAME_OVER_OPACITY)

    # Input

    def handle_key_down(self, key: str) -> bool:
        """Route a key press. Returns True if anything consumed it."""
        if key in (Key.P, Key.ESC):
            if self.paused:
                self.resume()
            else:
                self.pause()
            return True

        if key in (Key.ENTER, Key.RESTART) and self.skier.state == SkierState.DEAD:
            self.reset()
            return True

        if self.paused:
            return False
        return self.skier.handle_input(key)

    def pause(self) -> None:
        if self.paused:
            return
        self.paused = True
        logger.info(f"Game paused at score {self.score}")
        self.event_bus.emit(Event(EventType.PAUSED, data={"score": self.score}, source="game"))

    def resume(self) -> None:
        if not self.paused:
            return
        self.paused = False
        logger.info("Game resumed")
        self.event_bus.emit(Event(EventType.RESUMED, data={"score": self.score}, source="game"))

    # Event bus wiring

    def _on_key_down(self, event: Event) -> None:
        if not self.is_started:
            return
        self.handle_key_down(event.data["key"])

    def _on_tick(self, event: Event) -> None:
        if not self.is_started:
            logger.debug("Tick before load, ignoring")
            return
        self.tick(event.data["time"])

    def _on_skier_state_changed(self, old: SkierState, new: SkierState) -> None:
        if new == SkierState.DEAD:
            logger.info(f"Game over with score {self.score}")
        self.event_bus.emit(Event(
            EventType.SKIER_STATE_CHANGED,
            data={"old": old, "new": new, "score": self.score},
            source="skier",
        ))

    def _on_rhino_state_changed(self, old: RhinoState, new: RhinoState) -> None:
        self.event_bus.emit(Event(
            EventType.RHINO_STATE_CHANGED,
            data={"old": old, "new": new},
            source="rhino",
        ))
