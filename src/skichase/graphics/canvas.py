"""Drawing surface the game renders into.

The canvas owns one RGB framebuffer and a draw offset. Entity draw calls
use world coordinates and the canvas subtracts the offset; overlay text
and menu boxes use screen coordinates.
"""

import numpy as np
from numpy.typing import NDArray

from skichase.core.geometry import Rect
from skichase.graphics.primitives import (
    Color,
    darken,
    draw_image,
    draw_text,
    fill,
    measure_text,
    new_buffer,
)

SNOW_COLOR: Color = (255, 255, 255)


class Canvas:
    """RGB framebuffer with a world-to-screen draw offset."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.buffer: NDArray[np.uint8] = new_buffer(width, height)
        self._offset_x = 0.0
        self._offset_y = 0.0

    def clear_canvas(self, color: Color = SNOW_COLOR) -> None:
        fill(self.buffer, color)

    def set_draw_offset(self, x: float, y: float) -> None:
        self._offset_x = x
        self._offset_y = y

    def get_viewport(self) -> Rect:
        """World-space rectangle currently visible on the canvas."""
        return Rect(
            self._offset_x,
            self._offset_y,
            self._offset_x + self.width,
            self._offset_y + self.height,
        )

    def draw_image(self, image: NDArray[np.uint8], x: float, y: float) -> None:
        """Draw an image whose top-left corner sits at world (x, y)."""
        draw_image(
            self.buffer,
            image,
            int(round(x - self._offset_x)),
            int(round(y - self._offset_y)),
        )

    def fill_overlay(self, opacity: float) -> None:
        darken(self.buffer, opacity)

    def draw_text(self, text: str, x: int, y: int, color: Color, scale: int = 1) -> None:
        """Draw text at screen coordinates."""
        draw_text(self.buffer, text, x, y, color, scale=scale)

    def draw_centered_text(self, text: str, y: int, color: Color, scale: int = 1) -> None:
        """Draw text horizontally centred at screen row y."""
        text_width, _ = measure_text(text, scale)
        draw_text(self.buffer, text, (self.width - text_width) // 2, y, color, scale=scale)
