"""Basic drawing primitives on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def _clip_rect(buffer: Buffer, x: float, y: float, width: float, height: float) -> Tuple[int, int, int, int]:
    h, w = buffer.shape[:2]
    x1 = max(0, min(int(round(x)), w))
    y1 = max(0, min(int(round(y)), h))
    x2 = max(0, min(int(round(x + width)), w))
    y2 = max(0, min(int(round(y + height)), h))
    return x1, y1, x2, y2


def draw_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw a filled rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
    """
    x1, y1, x2, y2 = _clip_rect(buffer, x, y, width, height)
    if x2 > x1 and y2 > y1:
        buffer[y1:y2, x1:x2] = color


def blend_rect(
    buffer: Buffer,
    x: float,
    y: float,
    width: float,
    height: float,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a solid rectangle over the buffer."""
    alpha = max(0.0, min(1.0, alpha))
    if alpha <= 0.0:
        return
    x1, y1, x2, y2 = _clip_rect(buffer, x, y, width, height)
    if x2 <= x1 or y2 <= y1:
        return
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    region = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = np.clip(region, 0, 255).astype(np.uint8)


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    alpha: float = 1.0,
) -> None:
    """Draw a filled circle (distance test over its bounding box)."""
    h, w = buffer.shape[:2]
    x1, x2 = max(0, int(cx - radius)), min(w, int(cx + radius) + 1)
    y1, y2 = max(0, int(cy - radius)), min(h, int(cy + radius) + 1)
    if x2 <= x1 or y2 <= y1:
        return

    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    mask = (x_indices - cx) ** 2 + (y_indices - cy) ** 2 <= radius ** 2
    region = buffer[y1:y2, x1:x2]
    if alpha >= 1.0:
        region[mask] = color
    else:
        blended = region[mask].astype(np.float32) * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
        region[mask] = np.clip(blended, 0, 255).astype(np.uint8)


def draw_triangle(
    buffer: Buffer,
    left: float,
    base_y: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Draw an isosceles triangle standing on ``base_y``.

    The apex sits at ``(left + width / 2, base_y - height)``.
    """
    h, w = buffer.shape[:2]
    x1, x2 = max(0, int(left)), min(w, int(left + width) + 1)
    y1, y2 = max(0, int(base_y - height)), min(h, int(base_y))
    if x2 <= x1 or y2 <= y1:
        return

    half = width / 2.0
    apex_x = left + half
    y_indices, x_indices = np.ogrid[y1:y2, x1:x2]
    # Half-width of the slice at each row grows linearly down from the apex
    row_half = (y_indices - (base_y - height)) / height * half
    mask = np.abs(x_indices - apex_x) <= row_half
    buffer[y1:y2, x1:x2][mask] = color
