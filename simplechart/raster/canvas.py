from __future__ import annotations

from functools import lru_cache

import numpy as np
from PIL import ImageColor


RGBA = tuple[int, int, int, int]


@lru_cache(maxsize=256)
def parse_color(color: str, alpha: float = 1.0) -> RGBA:
    """CSS-style color (`#C00`, `#aabbcc`, `rgb(1,2,3)`, names) to RGBA255."""
    rgb = ImageColor.getrgb(color)
    a = int(max(0.0, min(1.0, alpha)) * (rgb[3] if len(rgb) == 4 else 255))
    return (int(rgb[0]), int(rgb[1]), int(rgb[2]), a)


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = 255


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Blend `color` over the half-open box `[x0, x1) x [y0, y1)`, clipped to the canvas."""
    left = max(0, min(x0, x1))
    right = min(dst.shape[1], max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0], max(y0, y1))
    if right <= left or bottom <= top:
        return
    patch = dst[top:bottom, left:right]
    a = color[3] / 255.0
    inv = 1.0 - a
    src = np.asarray(color[0:3], dtype=np.float32)
    patch[:, :, :3] = (src * a + patch[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    patch[:, :, 3] = 255
