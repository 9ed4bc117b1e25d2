"""Base class for everything placed on the slope."""

from abc import ABC, abstractmethod
import logging

from skichase.core.geometry import Position, Rect
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager

logger = logging.getLogger(__name__)


class Entity(ABC):
    """Shared position, bounds and drawing for obstacles, skier and rhino.

    The entity's position is the midpoint of the bottom edge of its current
    image. Bounds and drawing both need the image to be resolved by the
    ImageManager first; asking before that raises KeyError.
    """

    def __init__(self, x: float, y: float, image_manager: ImageManager, canvas: Canvas):
        self.position = Position(x, y)
        self.image_manager = image_manager
        self.canvas = canvas
        self.removed = False

    @property
    @abstractmethod
    def image_name(self) -> str:
        """Name of the image currently representing this entity."""

    def get_position(self) -> Position:
        return self.position

    def get_bounds(self) -> Rect:
        """Axis-aligned box of the current image, anchored at the position."""
        width, height = self.image_manager.get_size(self.image_name)
        x, y = self.position.x, self.position.y
        return Rect(x - width / 2, y - height, x + width / 2, y)

    def draw(self) -> None:
        bounds = self.get_bounds()
        self.canvas.draw_image(
            self.image_manager.get_image(self.image_name), bounds.left, bounds.top
        )

    def die(self) -> None:
        """Mark the entity for removal by whatever owns it."""
        self.removed = True
        logger.debug(f"{type(self).__name__} removed at {self.position}")
