"""The player-controlled skier.

States:
    SKIING: On the ground, steered by input, crashes into obstacles
    JUMPING: Airborne off a jump ramp, immune to crashes
    FLIPPING: Doing a flip mid-jump, scores more, otherwise like JUMPING
    CRASHED: Down after hitting an obstacle, recovers on directional input
    DEAD: Caught by the rhino while crashed; terminal
"""

from enum import Enum, IntEnum, auto
from typing import Optional
import logging

from skichase.constants import (
    DIAGONAL_SPEED_REDUCER,
    FLIP_DURATION_TICKS,
    ImageName,
    JUMP_FRAME_MS,
    Key,
    STARTING_SPEED,
)
from skichase.core.state import Listener, StateMachine
from skichase.entities.base import Entity
from skichase.entities.obstacle import Obstacle
from skichase.entities.obstacle_manager import ObstacleManager
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager

logger = logging.getLogger(__name__)


class SkierState(Enum):
    SKIING = auto()
    JUMPING = auto()
    CRASHED = auto()
    DEAD = auto()
    FLIPPING = auto()


class Direction(IntEnum):
    """Facing directions, ordered left to right so turning is +/- 1."""

    LEFT = 0
    LEFT_DOWN = 1
    DOWN = 2
    RIGHT_DOWN = 3
    RIGHT = 4


SKIER_TRANSITIONS: list[tuple[SkierState, SkierState]] = [
    (SkierState.SKIING, SkierState.JUMPING),
    (SkierState.SKIING, SkierState.CRASHED),
    (SkierState.JUMPING, SkierState.SKIING),
    (SkierState.JUMPING, SkierState.FLIPPING),
    (SkierState.FLIPPING, SkierState.JUMPING),
    (SkierState.FLIPPING, SkierState.SKIING),  # Landing mid-flip
    (SkierState.CRASHED, SkierState.SKIING),
    (SkierState.CRASHED, SkierState.DEAD),
]

AIRBORNE_STATES = frozenset({SkierState.JUMPING, SkierState.FLIPPING})
MOVING_STATES = frozenset({SkierState.SKIING}) | AIRBORNE_STATES

# Unit velocity per direction; multiplied by the skier's speed
DIRECTION_VELOCITY: dict[Direction, tuple[float, float]] = {
    Direction.LEFT: (0.0, 0.0),
    Direction.LEFT_DOWN: (-1 / DIAGONAL_SPEED_REDUCER, 1 / DIAGONAL_SPEED_REDUCER),
    Direction.DOWN: (0.0, 1.0),
    Direction.RIGHT_DOWN: (1 / DIAGONAL_SPEED_REDUCER, 1 / DIAGONAL_SPEED_REDUCER),
    Direction.RIGHT: (0.0, 0.0),
}

DIRECTION_IMAGES: dict[Direction, str] = {
    Direction.LEFT: ImageName.SKIER_LEFT,
    Direction.LEFT_DOWN: ImageName.SKIER_LEFTDOWN,
    Direction.DOWN: ImageName.SKIER_DOWN,
    Direction.RIGHT_DOWN: ImageName.SKIER_RIGHTDOWN,
    Direction.RIGHT: ImageName.SKIER_RIGHT,
}

JUMP_IMAGES: tuple[str, ...] = (
    ImageName.SKIER_JUMP1,
    ImageName.SKIER_JUMP2,
    ImageName.SKIER_JUMP3,
    ImageName.SKIER_JUMP4,
    ImageName.SKIER_JUMP5,
)

FLIP_IMAGES: tuple[str, ...] = (
    ImageName.SKIER_FLIP1,
    ImageName.SKIER_FLIP2,
    ImageName.SKIER_FLIP3,
    ImageName.SKIER_FLIP4,
)
FLIP_TICKS_PER_FRAME = 4


class Skier(Entity):
    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        obstacle_manager: ObstacleManager,
        canvas: Canvas,
    ):
        super().__init__(x, y, image_manager, canvas)
        self.obstacle_manager = obstacle_manager
        self.direction = Direction.DOWN
        self.speed = STARTING_SPEED

        self._machine: StateMachine[SkierState] = StateMachine(
            "skier", SkierState.SKIING, SKIER_TRANSITIONS
        )

        # Jump sequencing
        self.jump_frame = 0
        self._jump_frame_time: Optional[float] = None
        self.flip_ticks = 0

        # Obstacles the skier is allowed to overlap until it leaves them
        self._passed: set[Obstacle] = set()

    @property
    def state(self) -> SkierState:
        return self._machine.state

    @property
    def is_airborne(self) -> bool:
        return self.state in AIRBORNE_STATES

    def add_state_listener(self, callback: Listener) -> None:
        self._machine.add_listener(callback)

    @property
    def image_name(self) -> str:
        state = self.state
        if state == SkierState.JUMPING:
            return JUMP_IMAGES[self.jump_frame]
        if state == SkierState.FLIPPING:
            return FLIP_IMAGES[(self.flip_ticks // FLIP_TICKS_PER_FRAME) % len(FLIP_IMAGES)]
        if state in (SkierState.CRASHED, SkierState.DEAD):
            return ImageName.SKIER_CRASH
        return DIRECTION_IMAGES[self.direction]

    @property
    def velocity(self) -> tuple[float, float]:
        if self.state not in MOVING_STATES:
            return 0.0, 0.0
        dx, dy = DIRECTION_VELOCITY[self.direction]
        return dx * self.speed, dy * self.speed

    # Per-tick update

    def update(self, current_time: float) -> None:
        if self.state not in MOVING_STATES:
            return

        dx, dy = self.velocity
        self.position = self.position.translate(dx, dy)

        if self.is_airborne:
            self._update_jump(current_time)
        else:
            self.check_if_hit_obstacle()

    def _update_jump(self, current_time: float) -> None:
        if self.state == SkierState.FLIPPING:
            self.flip_ticks += 1
            if self.flip_ticks >= FLIP_DURATION_TICKS:
                self._machine.transition(SkierState.JUMPING)

        if self._jump_frame_time is None:
            self._jump_frame_time = current_time
            return
        if current_time - self._jump_frame_time < JUMP_FRAME_MS:
            return

        self._jump_frame_time = current_time
        if self.jump_frame >= len(JUMP_IMAGES) - 1:
            self._land()
        else:
            self.jump_frame += 1

    def _land(self) -> None:
        self._machine.transition(SkierState.SKIING)
        self.jump_frame = 0
        self._jump_frame_time = None
        # Whatever we land on was cleared in the air
        self._passed = set(self.obstacle_manager.get_colliding_obstacles(self.get_bounds()))

    def check_if_hit_obstacle(self) -> Optional[Obstacle]:
        """Crash into the first collidable obstacle under the skier, if any."""
        colliding = self.obstacle_manager.get_colliding_obstacles(self.get_bounds())
        self._passed &= set(colliding)

        for obstacle in colliding:
            if obstacle in self._passed or not obstacle.is_collidable:
                continue
            logger.info(f"Skier hit {obstacle}")
            self.crash()
            return obstacle
        return None

    def is_on_jump_ramp(self) -> bool:
        return any(
            o.is_jump_ramp
            for o in self.obstacle_manager.get_colliding_obstacles(self.get_bounds())
        )

    # State changes

    def crash(self) -> bool:
        return self._machine.transition(SkierState.CRASHED)

    def caught_by(self, enemy: Entity) -> bool:
        """Die if crashed and overlapping the enemy right now."""
        if self.state != SkierState.CRASHED:
            return False
        if not self.get_bounds().intersects(enemy.get_bounds()):
            return False
        return self._machine.transition(SkierState.DEAD)

    def _recover(self, direction: Direction) -> bool:
        self.direction = direction
        if not self._machine.transition(SkierState.SKIING):
            return False
        # Don't crash straight back into the obstacle we're lying on
        self._passed = set(self.obstacle_manager.get_colliding_obstacles(self.get_bounds()))
        return True

    # Input

    def handle_input(self, key: str) -> bool:
        """Apply a key press. Returns True if the key was consumed."""
        if key == Key.LEFT:
            return self.turn_left()
        if key == Key.RIGHT:
            return self.turn_right()
        if key == Key.UP:
            return self.turn_up()
        if key == Key.DOWN:
            return self.turn_down()
        if key == Key.SPACE:
            return self.jump()
        if key == Key.FLIP:
            return self.flip()
        return False

    def turn_left(self) -> bool:
        if self.state == SkierState.CRASHED:
            return self._recover(Direction.LEFT)
        if self.state != SkierState.SKIING:
            return False

        if self.direction == Direction.LEFT:
            self.position = self.position.translate(-self.speed, 0)
        else:
            self.direction = Direction(self.direction - 1)
        return True

    def turn_right(self) -> bool:
        if self.state == SkierState.CRASHED:
            return self._recover(Direction.RIGHT)
        if self.state != SkierState.SKIING:
            return False

        if self.direction == Direction.RIGHT:
            self.position = self.position.translate(self.speed, 0)
        else:
            self.direction = Direction(self.direction + 1)
        return True

    def turn_up(self) -> bool:
        """Side-step uphill; only possible while stopped sideways."""
        if self.state != SkierState.SKIING:
            return False
        if self.direction not in (Direction.LEFT, Direction.RIGHT):
            return False
        self.position = self.position.translate(0, -self.speed)
        return True

    def turn_down(self) -> bool:
        if self.state == SkierState.CRASHED:
            return self._recover(Direction.DOWN)
        if self.state != SkierState.SKIING:
            return False
        self.direction = Direction.DOWN
        return True

    def jump(self) -> bool:
        """Take off, but only from a jump ramp."""
        if self.state != SkierState.SKIING or not self.is_on_jump_ramp():
            return False
        if not self._machine.transition(SkierState.JUMPING):
            return False
        self.jump_frame = 0
        self._jump_frame_time = None
        return True

    def flip(self) -> bool:
        """Start a flip while jumping, or stop one in progress."""
        if self.state == SkierState.JUMPING:
            self.flip_ticks = 0
            return self._machine.transition(SkierState.FLIPPING)
        if self.state == SkierState.FLIPPING:
            return self._machine.transition(SkierState.JUMPING)
        return False

    def draw(self) -> None:
        # A dead skier is inside the rhino
        if self.state == SkierState.DEAD:
            return
        super().draw()
