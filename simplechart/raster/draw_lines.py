from __future__ import annotations

import math

import numpy as np

from simplechart.overlap import DashPattern
from simplechart.raster.canvas import RGBA, draw_pixel


def draw_segment(
    dst: np.ndarray,
    x0: int,
    y0: int,
    x1: int,
    y1: int,
    color: RGBA,
    *,
    width: int = 1,
    dash: DashPattern | None = None,
) -> None:
    """Bresenham segment; with a dash only pixels whose distance from `(x0, y0)` is "on" are drawn."""
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    ox, oy = x0, y0

    while True:
        if dash is None or dash.is_on(math.hypot(x0 - ox, y0 - oy)):
            _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
