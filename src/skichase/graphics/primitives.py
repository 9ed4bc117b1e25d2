"""Drawing primitives for numpy framebuffers and sprites.

Buffers are (height, width, channels) uint8 arrays. The game canvas uses
3 channels; sprites use 4 (RGBA), so colors may carry an alpha component.
"""

from typing import Optional, Sequence, Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, ...]
Buffer = NDArray[np.uint8]

FONT_HEIGHT = 5


def new_buffer(width: int, height: int, channels: int = 3) -> Buffer:
    """Allocate a zeroed buffer."""
    return np.zeros((height, width, channels), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target array
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: Color tuple matching the buffer's channel count
        filled: If False, draw a one pixel outline only
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    buffer[y1, x1:x2] = color
    buffer[y2 - 1, x1:x2] = color
    buffer[y1:y2, x1] = color
    buffer[y1:y2, x2 - 1] = color


def draw_circle(buffer: Buffer, cx: int, cy: int, radius: int, color: Color) -> None:
    """Draw a filled circle."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    buffer[mask] = color


def draw_polygon(buffer: Buffer, points: Sequence[Tuple[int, int]], color: Color) -> None:
    """Draw a filled convex polygon using half-plane tests."""
    h, w = buffer.shape[:2]
    ys, xs = np.mgrid[:h, :w]
    inside_pos = np.ones((h, w), dtype=bool)
    inside_neg = np.ones((h, w), dtype=bool)

    count = len(points)
    for i in range(count):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % count]
        cross = (x2 - x1) * (ys - y1) - (y2 - y1) * (xs - x1)
        inside_pos &= cross >= 0
        inside_neg &= cross <= 0

    buffer[inside_pos | inside_neg] = color


def draw_line(
    buffer: Buffer,
    x1: int,
    y1: int,
    x2: int,
    y2: int,
    color: Color,
) -> None:
    """Draw a line using Bresenham's algorithm."""
    h, w = buffer.shape[:2]

    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx - dy

    while True:
        if 0 <= x1 < w and 0 <= y1 < h:
            buffer[y1, x1] = color
        if x1 == x2 and y1 == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x1 += sx
        if e2 < dx:
            err += dx
            y1 += sy


def darken(buffer: Buffer, opacity: float) -> None:
    """Blend the whole buffer towards black, like a translucent overlay."""
    opacity = max(0.0, min(1.0, opacity))
    buffer[:, :] = (buffer * (1.0 - opacity)).astype(np.uint8)


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Width and height in pixels of text drawn with the built-in font."""
    font = _get_default_font()
    width = 0
    for char in text:
        glyph = font.get(char.upper())
        width += (len(glyph[0]) + 1) * scale if glyph else 4 * scale
    return max(0, width - scale), FONT_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using the built-in 3x5 bitmap font.

    Unknown characters render as '?', spaces advance the cursor.

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    font = _get_default_font()
    h, w = buffer.shape[:2]
    cursor_x = x

    for char in text:
        if char == ' ':
            cursor_x += 4 * scale
            continue

        glyph = font.get(char.upper(), font['?'])
        for row_idx, row in enumerate(glyph):
            for col_idx, pixel in enumerate(row):
                if not pixel:
                    continue
                px = cursor_x + col_idx * scale
                py = y + row_idx * scale
                x1, y1 = max(0, px), max(0, py)
                x2, y2 = min(w, px + scale), min(h, py + scale)
                if x2 > x1 and y2 > y1:
                    buffer[y1:y2, x1:x2] = color

        cursor_x += (len(glyph[0]) + 1) * scale

    return cursor_x - x, FONT_HEIGHT * scale


def draw_image(
    buffer: Buffer,
    image: Buffer,
    x: int,
    y: int,
    alpha: float = 1.0,
) -> None:
    """Draw an image onto the buffer with optional alpha blending.

    Args:
        buffer: Target RGB array
        image: Source image array (height, width, 3 or 4)
        x: Top-left x coordinate
        y: Top-left y coordinate
        alpha: Global alpha multiplier (0.0 to 1.0)
    """
    buf_h, buf_w = buffer.shape[:2]
    img_h, img_w = image.shape[:2]

    src_x1 = max(0, -x)
    src_y1 = max(0, -y)
    src_x2 = min(img_w, buf_w - x)
    src_y2 = min(img_h, buf_h - y)

    dst_x1 = max(0, x)
    dst_y1 = max(0, y)
    dst_x2 = dst_x1 + (src_x2 - src_x1)
    dst_y2 = dst_y1 + (src_y2 - src_y1)

    if src_x2 <= src_x1 or src_y2 <= src_y1:
        return

    src_region = image[src_y1:src_y2, src_x1:src_x2]

    if alpha >= 1.0 and image.shape[2] == 3:
        buffer[dst_y1:dst_y2, dst_x1:dst_x2] = src_region
        return

    dst_region = buffer[dst_y1:dst_y2, dst_x1:dst_x2]
    if image.shape[2] == 4:
        img_alpha = (src_region[:, :, 3:4] / 255.0) * alpha
        src_rgb = src_region[:, :, :3]
    else:
        img_alpha = alpha
        src_rgb = src_region

    blended = (src_rgb * img_alpha + dst_region * (1 - img_alpha)).astype(np.uint8)
    buffer[dst_y1:dst_y2, dst_x1:dst_x2] = blended


_FONT: Optional[dict] = None


def _get_default_font() -> dict:
    """Return the 3x5 bitmap font (char -> rows of 0/1 pixels)."""
    global _FONT
    if _FONT is None:
        _FONT = {
            'A': [[0,1,0], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
            'B': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,1,0]],
            'C': [[0,1,1], [1,0,0], [1,0,0], [1,0,0], [0,1,1]],
            'D': [[1,1,0], [1,0,1], [1,0,1], [1,0,1], [1,1,0]],
            'E': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,1,1]],
            'F': [[1,1,1], [1,0,0], [1,1,0], [1,0,0], [1,0,0]],
            'G': [[0,1,1], [1,0,0], [1,0,1], [1,0,1], [0,1,1]],
            'H': [[1,0,1], [1,0,1], [1,1,1], [1,0,1], [1,0,1]],
            'I': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [1,1,1]],
            'J': [[0,0,1], [0,0,1], [0,0,1], [1,0,1], [0,1,0]],
            'K': [[1,0,1], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
            'L': [[1,0,0], [1,0,0], [1,0,0], [1,0,0], [1,1,1]],
            'M': [[1,0,1], [1,1,1], [1,0,1], [1,0,1], [1,0,1]],
            'N': [[1,0,1], [1,1,1], [1,1,1], [1,0,1], [1,0,1]],
            'O': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
            'P': [[1,1,0], [1,0,1], [1,1,0], [1,0,0], [1,0,0]],
            'Q': [[0,1,0], [1,0,1], [1,0,1], [1,1,1], [0,1,1]],
            'R': [[1,1,0], [1,0,1], [1,1,0], [1,0,1], [1,0,1]],
            'S': [[0,1,1], [1,0,0], [0,1,0], [0,0,1], [1,1,0]],
            'T': [[1,1,1], [0,1,0], [0,1,0], [0,1,0], [0,1,0]],
            'U': [[1,0,1], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
            'V': [[1,0,1], [1,0,1], [1,0,1], [0,1,0], [0,1,0]],
            'W': [[1,0,1], [1,0,1], [1,0,1], [1,1,1], [1,0,1]],
            'X': [[1,0,1], [1,0,1], [0,1,0], [1,0,1], [1,0,1]],
            'Y': [[1,0,1], [1,0,1], [0,1,0], [0,1,0], [0,1,0]],
            'Z': [[1,1,1], [0,0,1], [0,1,0], [1,0,0], [1,1,1]],
            '0': [[0,1,0], [1,0,1], [1,0,1], [1,0,1], [0,1,0]],
            '1': [[0,1,0], [1,1,0], [0,1,0], [0,1,0], [1,1,1]],
            '2': [[0,1,0], [1,0,1], [0,0,1], [0,1,0], [1,1,1]],
            '3': [[1,1,0], [0,0,1], [0,1,0], [0,0,1], [1,1,0]],
            '4': [[1,0,1], [1,0,1], [1,1,1], [0,0,1], [0,0,1]],
            '5': [[1,1,1], [1,0,0], [1,1,0], [0,0,1], [1,1,0]],
            '6': [[0,1,1], [1,0,0], [1,1,0], [1,0,1], [0,1,0]],
            '7': [[1,1,1], [0,0,1], [0,1,0], [0,1,0], [0,1,0]],
            '8': [[0,1,0], [1,0,1], [0,1,0], [1,0,1], [0,1,0]],
            '9': [[0,1,0], [1,0,1], [0,1,1], [0,0,1], [1,1,0]],
            '?': [[0,1,0], [1,0,1], [0,0,1], [0,0,0], [0,1,0]],
            '!': [[0,1,0], [0,1,0], [0,1,0], [0,0,0], [0,1,0]],
            '.': [[0], [0], [0], [0], [1]],
            ',': [[0,0], [0,0], [0,0], [0,1], [1,0]],
            ':': [[0], [1], [0], [1], [0]],
            '-': [[0,0,0], [0,0,0], [1,1,1], [0,0,0], [0,0,0]],
            "'": [[1], [1], [0], [0], [0]],
        }
    return _FONT
