from __future__ import annotations

import numpy as np

from simplechart.raster.canvas import RGBA, draw_pixel


def draw_dot(dst: np.ndarray, x: int, y: int, color: RGBA, radius: int = 2) -> None:
    r2 = radius * radius
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            if (xx - x) * (xx - x) + (yy - y) * (yy - y) <= r2:
                draw_pixel(dst, xx, yy, color)
