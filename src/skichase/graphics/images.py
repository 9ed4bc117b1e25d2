"""Image asset lookup.

Resolves asset names to RGBA pixel arrays. A PNG named ``<asset>.png`` in
the configured assets directory wins; otherwise the built-in sprite is
used. Loading is all-or-nothing: one unresolvable name rejects the batch.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from skichase.graphics.primitives import Buffer
from skichase.graphics.sprites import build_sprite

logger = logging.getLogger(__name__)


class AssetLoadError(Exception):
    """Raised when a batch of images cannot be loaded."""


def _read_png(path: Path) -> Buffer:
    """Decode an image file into an RGBA array."""
    try:
        surface = pygame.image.load(str(path))
    except (pygame.error, OSError) as e:
        raise AssetLoadError(f"Failed to load image {path}: {e}") from e

    width, height = surface.get_size()
    raw = pygame.image.tobytes(surface, "RGBA")
    return np.frombuffer(raw, dtype=np.uint8).reshape(height, width, 4).copy()


class ImageManager:
    """Holds every resolved image and answers size queries for entities."""

    def __init__(self, assets_path: Optional[Path] = None) -> None:
        self._assets_path = assets_path
        self._images: dict[str, Buffer] = {}

    async def load_images(self, names: Iterable[str]) -> None:
        """Resolve every named image before the game loop starts.

        Raises:
            AssetLoadError: if any name cannot be resolved; nothing from
                the batch is registered in that case
        """
        names = list(names)
        results = await asyncio.gather(
            *(self._resolve(name) for name in names),
            return_exceptions=True,
        )

        failures = [
            (name, result) for name, result in zip(names, results)
            if isinstance(result, BaseException)
        ]
        if failures:
            for name, error in failures:
                logger.error(f"Image {name} failed to load: {error}")
            raise AssetLoadError(
                f"{len(failures)} of {len(names)} images failed to load: "
                + ", ".join(name for name, _ in failures)
            )

        for name, image in zip(names, results):
            self.register_image(name, image)
        logger.info(f"Loaded {len(names)} images")

    async def _resolve(self, name: str) -> Buffer:
        if self._assets_path is not None:
            path = self._assets_path / f"{name}.png"
            if path.is_file():
                logger.debug(f"Loading {name} from {path}")
                return await asyncio.to_thread(_read_png, path)

        try:
            return build_sprite(name)
        except KeyError:
            raise AssetLoadError(f"No image available for asset: {name}") from None

    def register_image(self, name: str, image: Buffer) -> None:
        self._images[name] = image

    def get_image(self, name: str) -> Buffer:
        """Get a resolved image. Unknown names raise KeyError."""
        return self._images[name]

    def get_size(self, name: str) -> Tuple[int, int]:
        """(width, height) in pixels of a resolved image."""
        image = self._images[name]
        return image.shape[1], image.shape[0]
