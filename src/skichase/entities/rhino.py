"""
The rhino that hunts the skier down the slope.

It starts far up the mountain and runs straight at the skier, a little
faster than the skier can ski. Catching a crashed skier ends the game.
"""

from enum import Enum, auto
from typing import Optional, Sequence
import logging

from skichase.constants import (
    ImageName,
    RHINO_CELEBRATE_FRAME_MS,
    RHINO_EAT_FRAME_MS,
    RHINO_RUN_FRAME_MS,
    RHINO_SPEED,
)
from skichase.core.state import Listener, StateMachine
from skichase.entities.base import Entity
from skichase.entities.skier import Skier, SkierState
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager

logger = logging.getLogger(__name__)


class RhinoState(Enum):
    RUNNING = auto()
    EATING = auto()
    CELEBRATING = auto()


RHINO_TRANSITIONS: list[tuple[RhinoState, RhinoState]] = [
    (RhinoState.RUNNING, RhinoState.EATING),
    (RhinoState.RUNNING, RhinoState.CELEBRATING),
    (RhinoState.EATING, RhinoState.RUNNING),
    (RhinoState.EATING, RhinoState.CELEBRATING),
]

RUN_LEFT_IMAGES = (ImageName.RHINO_RUN_LEFT1, ImageName.RHINO_RUN_LEFT2)
RUN_RIGHT_IMAGES = (ImageName.RHINO_RUN_RIGHT1, ImageName.RHINO_RUN_RIGHT2)
EAT_IMAGES = (
    ImageName.RHINO_LIFT,
    ImageName.RHINO_LIFT_MOUTH_OPEN,
    ImageName.RHINO_LIFT_EAT1,
    ImageName.RHINO_LIFT_EAT2,
    ImageName.RHINO_LIFT_EAT3,
    ImageName.RHINO_LIFT_EAT4,
)
CELEBRATE_IMAGES = (ImageName.RHINO_LIFT_EAT3, ImageName.RHINO_LIFT_EAT4)


class Rhino(Entity):
    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        canvas: Canvas,
        speed: float = RHINO_SPEED,
    ):
        super().__init__(x, y, image_manager, canvas)
        self.speed = speed
        self._machine: StateMachine[RhinoState] = StateMachine(
            "rhino", RhinoState.RUNNING, RHINO_TRANSITIONS
        )

        self.frame = 0
        self._frame_time: Optional[float] = None
        self._facing_left = False

    @property
    def state(self) -> RhinoState:
        return self._machine.state

    def add_state_listener(self, callback: Listener) -> None:
        self._machine.add_listener(callback)

    @property
    def image_name(self) -> str:
        frames = self.frames()
        if self.state == RhinoState.EATING:
            # Hold the last bite until the state changes
            return frames[min(self.frame, len(frames) - 1)]
        return frames[self.frame % len(frames)]

    def update(self, current_time: float, skier: Skier) -> None:
        """Advance one tick: chase, eat or celebrate depending on state."""
        state = self.state

        if state == RhinoState.RUNNING:
            if skier.state == SkierState.DEAD:
                self._set_state(RhinoState.CELEBRATING, current_time)
                return
            self._move_toward(skier)
            self._advance_frame(current_time, RHINO_RUN_FRAME_MS)
            if self.get_bounds().intersects(skier.get_bounds()):
                self._set_state(RhinoState.EATING, current_time)
                if skier.caught_by(self):
                    logger.info("Rhino caught the skier")

        elif state == RhinoState.EATING:
            if self._advance_frame(current_time, RHINO_EAT_FRAME_MS) and self.frame >= len(EAT_IMAGES):
                if skier.state == SkierState.DEAD:
                    self._set_state(RhinoState.CELEBRATING, current_time)
                else:
                    self._set_state(RhinoState.RUNNING, current_time)

        else:
            self._advance_frame(current_time, RHINO_CELEBRATE_FRAME_MS)

    def _move_toward(self, skier: Skier) -> None:
        target = skier.get_position()
        dx = target.x - self.position.x
        dy = target.y - self.position.y
        distance = self.position.distance_to(target)

        if dx:
            self._facing_left = dx < 0

        if distance <= self.speed:
            self.position = target
            return
        step = self.speed / distance
        self.position = self.position.translate(dx * step, dy * step)

    def _advance_frame(self, current_time: float, period: float) -> bool:
        """Step the animation once per period. Returns True if it stepped."""
        if self._frame_time is None:
            self._frame_time = current_time
            return False
        if current_time - self._frame_time < period:
            return False
        self._frame_time = current_time
        self.frame += 1
        return True

    def _set_state(self, state: RhinoState, current_time: float) -> None:
        if self._machine.transition(state):
            self.frame = 0
            self._frame_time = current_time

    def frames(self) -> Sequence[str]:
        """Image names of the animation the rhino is currently playing."""
        state = self.state
        if state == RhinoState.EATING:
            return EAT_IMAGES
        if state == RhinoState.CELEBRATING:
            return CELEBRATE_IMAGES
        return RUN_LEFT_IMAGES if self._facing_left else RUN_RIGHT_IMAGES
