"""Shared fixtures for the Ski Chase test suite."""

import os
import random

# Headless pygame; must be set before anything imports pygame
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import numpy as np
import pytest

from skichase.config.settings import DisplaySettings, Settings
from skichase.constants import IMAGES, ImageName
from skichase.core.events import EventBus
from skichase.entities.obstacle_manager import ObstacleManager
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import ImageManager


# Fixed sprite sizes (width, height) so bounds are easy to reason about.
# Anything not listed is 20x20.
SPRITE_SIZES = {
    ImageName.TREE: (20, 30),
    ImageName.TREE_CLUSTER: (40, 40),
    ImageName.ROCK1: (20, 16),
    ImageName.ROCK2: (24, 12),
    ImageName.JUMP_RAMP: (30, 10),
}
DEFAULT_SIZE = (20, 20)


def make_image(width: int, height: int, color=(255, 0, 0), opaque: bool = True) -> np.ndarray:
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = color
    image[:, :, 3] = 255 if opaque else 0
    return image


class RecordingCanvas(Canvas):
    """Canvas that remembers every image draw call."""

    def __init__(self, width: int = 800, height: int = 600) -> None:
        super().__init__(width, height)
        self.draws: list[tuple[int, float, float]] = []

    def draw_image(self, image, x, y):
        self.draws.append((id(image), x, y))
        super().draw_image(image, x, y)


# ------------------------------------------------------------------
# Factories
# ------------------------------------------------------------------

@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def image_manager():
    """ImageManager with every asset pre-registered at a fixed size."""
    manager = ImageManager()
    for name in IMAGES:
        width, height = SPRITE_SIZES.get(name, DEFAULT_SIZE)
        manager.register_image(name, make_image(width, height))
    return manager


@pytest.fixture
def canvas():
    return RecordingCanvas()


@pytest.fixture
def obstacle_manager(image_manager, canvas, rng):
    return ObstacleManager(image_manager, canvas, rng=rng)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def events(event_bus):
    """Every event emitted on the bus, in order."""
    received = []
    event_bus.subscribe_all(received.append)
    return received


@pytest.fixture
def settings():
    return Settings(display=DisplaySettings(width=800, height=600))
