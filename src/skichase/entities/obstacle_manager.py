"""
Owns every obstacle on the slope: initial scatter, spawning obstacles as
new ground comes into view, dropping obstacles far behind, collision
queries and drawing.

Explored ground is a set of grid cells (SPAWN_CELL_SIZE square). A cell is
explored once it overlaps a window grown by SPAWN_MARGIN, so obstacles
appear just off screen. The cells revealed on a tick share that tick's
single spawn attempt. Cells outside the retained region are forgotten
together with their obstacles, so ground seen again gets a fresh attempt.
"""

from math import ceil, floor
from typing import Optional, Sequence
import logging
import random

from skichase.constants import (
    MAX_PLACEMENT_ATTEMPTS,
    NEW_OBSTACLE_CHANCE,
    SPAWN_CELL_SIZE,
    SPAWN_MARGIN,
    STARTING_OBSTACLE_REDUCER,
)
from skichase.core.geometry import Rect
from skichase.entities.obstacle import OBSTACLE_TYPES, Obstacle, ObstacleType, get_random_obstacle_type
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


def cells_in(area: Rect) -> set[Cell]:
    """Grid cells overlapping the given rect."""
    return {
        (cx, cy)
        for cx in range(floor(area.left / SPAWN_CELL_SIZE), ceil(area.right / SPAWN_CELL_SIZE))
        for cy in range(floor(area.top / SPAWN_CELL_SIZE), ceil(area.bottom / SPAWN_CELL_SIZE))
    }


def cell_rect(cell: Cell) -> Rect:
    left = cell[0] * SPAWN_CELL_SIZE
    top = cell[1] * SPAWN_CELL_SIZE
    return Rect(left, top, left + SPAWN_CELL_SIZE, top + SPAWN_CELL_SIZE)


class ObstacleManager:
    def __init__(
        self,
        image_manager: ImageManager,
        canvas: Canvas,
        catalog: Sequence[ObstacleType] = OBSTACLE_TYPES,
        rng: Optional[random.Random] = None,
    ):
        self.image_manager = image_manager
        self.canvas = canvas
        self.catalog = catalog
        self.rng = rng or random.Random()
        self._obstacles: list[Obstacle] = []
        self._explored: set[Cell] = set()

    def get_obstacles(self) -> tuple[Obstacle, ...]:
        return tuple(self._obstacles)

    def add_obstacle(self, obstacle: Obstacle) -> None:
        self._obstacles.append(obstacle)

    def clear(self) -> None:
        """Forget every obstacle and all explored ground."""
        self._obstacles.clear()
        self._explored.clear()

    def get_colliding_obstacles(self, bounds: Rect) -> list[Obstacle]:
        """Obstacles whose bounds overlap the given rect."""
        return [o for o in self._obstacles if o.get_bounds().intersects(bounds)]

    def place_initial_obstacles(self, game_window: Rect, avoid: Optional[Rect] = None) -> int:
        """Scatter the starting obstacles around the first game window.

        Args:
            game_window: The window the game starts with
            avoid: Area that must stay clear, normally the skier's bounds

        Returns:
            Number of obstacles actually placed
        """
        count = ceil(
            (game_window.width / STARTING_OBSTACLE_REDUCER)
            * (game_window.height / STARTING_OBSTACLE_REDUCER)
        )
        area = game_window.inflate(SPAWN_MARGIN, SPAWN_MARGIN)

        placed = 0
        for _ in range(count):
            if self._place_random_obstacle(area, avoid) is not None:
                placed += 1

        self._explored |= cells_in(area)
        logger.info(f"Placed {placed} of {count} initial obstacles")
        return placed

    def place_new_obstacle(
        self,
        game_window: Rect,
        previous_game_window: Rect,
        avoid: Optional[Rect] = None,
    ) -> Optional[Obstacle]:
        """Maybe spawn one obstacle in ground revealed since the last tick.

        Returns:
            The new obstacle, or None when nothing was spawned
        """
        window = game_window.inflate(SPAWN_MARGIN, SPAWN_MARGIN)
        if not self._explored:
            self._explored = cells_in(previous_game_window.inflate(SPAWN_MARGIN, SPAWN_MARGIN))

        regions = self._revealed_regions(window)
        self._drop_distant(game_window)

        if not regions:
            return None
        if self.rng.randint(1, NEW_OBSTACLE_CHANCE) != NEW_OBSTACLE_CHANCE:
            return None

        return self._place_random_obstacle(self._pick_region(regions), avoid)

    def draw_obstacles(self) -> None:
        """Draw the obstacles inside the canvas viewport, top to bottom."""
        viewport = self.canvas.get_viewport()
        visible = [o for o in self._obstacles if o.get_bounds().intersects(viewport)]
        for obstacle in sorted(visible, key=lambda o: (o.position.y, o.position.x)):
            obstacle.draw()

    def _revealed_regions(self, window: Rect) -> list[Rect]:
        """Mark unexplored cells under window as explored; return their parts inside window."""
        revealed = cells_in(window) - self._explored
        self._explored |= revealed

        regions = [cell_rect(cell).intersection(window) for cell in sorted(revealed)]
        return [r for r in regions if r is not None]

    def _pick_region(self, regions: list[Rect]) -> Rect:
        """Choose a region with probability proportional to its area."""
        if len(regions) == 1:
            return regions[0]
        areas = [r.width * r.height for r in regions]
        return self.rng.choices(regions, weights=areas, k=1)[0]

    def _place_random_obstacle(self, region: Rect, avoid: Optional[Rect]) -> Optional[Obstacle]:
        obstacle_type = get_random_obstacle_type(self.catalog, self.rng)

        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            x = self.rng.uniform(region.left, region.right)
            y = self.rng.uniform(region.top, region.bottom)
            candidate = Obstacle(x, y, self.image_manager, self.canvas, obstacle_type)
            bounds = candidate.get_bounds()

            if avoid is not None and bounds.intersects(avoid):
                continue
            if any(bounds.intersects(o.get_bounds()) for o in self._obstacles):
                continue

            self.add_obstacle(candidate)
            logger.debug(f"Placed {candidate}")
            return candidate

        logger.debug(
            f"No open spot for {obstacle_type.image_name} after "
            f"{MAX_PLACEMENT_ATTEMPTS} attempts, skipping"
        )
        return None

    def _drop_distant(self, game_window: Rect) -> None:
        retained = game_window.inflate(game_window.width, game_window.height)
        kept = [o for o in self._obstacles if o.get_bounds().intersects(retained)]
        dropped = len(self._obstacles) - len(kept)
        if dropped:
            self._obstacles = kept
            logger.debug(f"Dropped {dropped} obstacles outside the retained region")

        self._explored &= cells_in(retained)
