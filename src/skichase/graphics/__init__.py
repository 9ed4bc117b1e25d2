"""Graphics module: framebuffer primitives, canvas and images."""

from skichase.graphics.primitives import (
    draw_rect,
    draw_circle,
    draw_line,
    draw_text,
    draw_image,
    fill,
)
from skichase.graphics.canvas import Canvas
from skichase.graphics.images import AssetLoadError, ImageManager

__all__ = [
    "Canvas",
    "AssetLoadError",
    "ImageManager",
    # Primitives
    "draw_rect",
    "draw_circle",
    "draw_line",
    "draw_text",
    "draw_image",
    "fill",
]
