"""
An obstacle that appears on the mountain. Its type is picked at random from
the obstacle catalog, weighted by each type's spawn weight.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence
import random

from skichase.constants import ImageName
from skichase.entities.base import Entity
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager


class ObstacleKind(Enum):
    """How the skier reacts on contact."""

    COLLIDABLE = auto()  # Crashes a skier on the ground
    JUMP_RAMP = auto()   # Lets the skier jump


@dataclass(frozen=True)
class ObstacleType:
    image_name: str
    weight: float
    kind: ObstacleKind = ObstacleKind.COLLIDABLE


OBSTACLE_TYPES: tuple[ObstacleType, ...] = (
    ObstacleType(ImageName.TREE, 30),
    ObstacleType(ImageName.TREE_CLUSTER, 30),
    ObstacleType(ImageName.ROCK1, 20),
    ObstacleType(ImageName.ROCK2, 10),
    ObstacleType(ImageName.JUMP_RAMP, 10, ObstacleKind.JUMP_RAMP),
)


def get_random_obstacle_type(
    catalog: Sequence[ObstacleType] = OBSTACLE_TYPES,
    rng: Optional[random.Random] = None,
) -> ObstacleType:
    """Pick a catalog entry with probability weight / total weight.

    Raises:
        ValueError: if the catalog is empty or its total weight is not positive
    """
    if not catalog:
        raise ValueError("Obstacle catalog is empty")
    total_weight = sum(entry.weight for entry in catalog)
    if total_weight <= 0:
        raise ValueError(f"Obstacle catalog total weight must be positive, got {total_weight}")

    rng = rng or random
    roll = rng.random() * total_weight

    accumulated = 0.0
    for entry in catalog:
        if roll < accumulated + entry.weight:
            return entry
        accumulated += entry.weight

    # Only reachable through float rounding at the very top of the range
    return catalog[-1]


class Obstacle(Entity):
    """An immobile hazard; its type never changes once placed."""

    def __init__(
        self,
        x: float,
        y: float,
        image_manager: ImageManager,
        canvas: Canvas,
        obstacle_type: Optional[ObstacleType] = None,
        catalog: Sequence[ObstacleType] = OBSTACLE_TYPES,
        rng: Optional[random.Random] = None,
    ):
        super().__init__(x, y, image_manager, canvas)
        self.obstacle_type = obstacle_type or get_random_obstacle_type(catalog, rng)

    @property
    def image_name(self) -> str:
        return self.obstacle_type.image_name

    @property
    def is_jump_ramp(self) -> bool:
        return self.obstacle_type.kind is ObstacleKind.JUMP_RAMP

    @property
    def is_collidable(self) -> bool:
        return self.obstacle_type.kind is ObstacleKind.COLLIDABLE

    def die(self) -> None:
        """Obstacles can't be destroyed."""

    def __repr__(self) -> str:
        return f"Obstacle({self.image_name!r}, x={self.position.x:.0f}, y={self.position.y:.0f})"
