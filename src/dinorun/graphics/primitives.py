"""Basic drawing primitives for numpy frame buffers."""

import math
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def dim(buffer: Buffer, factor: float) -> None:
    """Darken the whole buffer in place (0.0 = black, 1.0 = unchanged)."""
    buffer[:, :, :] = (buffer.astype(np.float32) * factor).astype(np.uint8)


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
) -> None:
    """Draw a filled rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if x1 >= x2 or y1 >= y2:
        return

    buffer[y1:y2, x1:x2] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle on the buffer."""
    h, w = buffer.shape[:2]
    if radius <= 0:
        return

    # Only touch the bounding box of the circle
    x1, x2 = max(0, cx - radius), min(w, cx + radius + 1)
    y1, y2 = max(0, cy - radius), min(h, cy + radius + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    buffer[y1:y2, x1:x2][mask] = color


def draw_hline(
    buffer: Buffer,
    x: int,
    y: int,
    length: int,
    color: Color,
    thickness: int = 1,
) -> None:
    """Draw a horizontal line starting at (x, y)."""
    draw_rect(buffer, x, y, length, thickness, color)


def draw_rotated_rect(
    buffer: Buffer,
    cx: float,
    cy: float,
    width: float,
    height: float,
    angle: float,
    color: Color,
) -> None:
    """Draw a filled rectangle centered on (cx, cy), rotated by ``angle`` radians."""
    h, w = buffer.shape[:2]
    if width <= 0 or height <= 0:
        return

    reach = int(math.ceil(math.hypot(width, height) / 2))
    x1, x2 = max(0, int(cx) - reach), min(w, int(cx) + reach + 1)
    y1, y2 = max(0, int(cy) - reach), min(h, int(cy) + reach + 1)
    if x1 >= x2 or y1 >= y2:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    dx = x_indices - cx
    dy = y_indices - cy
    cos_a, sin_a = math.cos(angle), math.sin(angle)

    # Rotate pixel offsets back into the rectangle's own frame
    u = dx * cos_a + dy * sin_a
    v = dy * cos_a - dx * sin_a
    mask = (np.abs(u) <= width / 2) & (np.abs(v) <= height / 2)
    buffer[y1:y2, x1:x2][mask] = color
