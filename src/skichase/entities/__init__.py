"""Everything placed on the slope."""

from skichase.entities.base import Entity
from skichase.entities.obstacle import (
    OBSTACLE_TYPES,
    Obstacle,
    ObstacleKind,
    ObstacleType,
    get_random_obstacle_type,
)
from skichase.entities.obstacle_manager import ObstacleManager
from skichase.entities.skier import Direction, Skier, SkierState
from skichase.entities.rhino import Rhino, RhinoState

__all__ = [
    "Entity",
    # Obstacles
    "OBSTACLE_TYPES",
    "Obstacle",
    "ObstacleKind",
    "ObstacleType",
    "get_random_obstacle_type",
    "ObstacleManager",
    # Characters
    "Direction",
    "Skier",
    "SkierState",
    "Rhino",
    "RhinoState",
]
