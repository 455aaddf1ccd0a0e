from __future__ import annotations

import numpy as np

from simplechart.overlap import DashPattern
from simplechart.raster.canvas import fill_rect, new_canvas, parse_color
from simplechart.raster.draw_lines import draw_segment
from simplechart.raster.draw_markers import draw_dot
from simplechart.raster.draw_text import DEFAULT_FONT_FAMILY, draw_text, text_size


class RasterSink:
    """`RenderSink` backed by an RGBA255 numpy canvas."""

    def __init__(self, *, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = 12.0) -> None:
        self.font_family = font_family
        self.font_size_px = font_size_px
        self._canvas = new_canvas(1, 1)

    def frame(self) -> np.ndarray:
        return self._canvas

    def begin_frame(self, width: int, height: int, background: str) -> None:
        self._canvas = new_canvas(int(width), int(height), color=parse_color(background))

    def draw_segment(
        self,
        p1: tuple[float, float],
        p2: tuple[float, float],
        color: str,
        dash: DashPattern | None,
        width: int = 1,
    ) -> None:
        x0, y0 = (int(round(v)) for v in p1)
        x1, y1 = (int(round(v)) for v in p2)
        draw_segment(self._canvas, x0, y0, x1, y1, parse_color(color), width=width, dash=dash)

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str, alpha: float = 1.0) -> None:
        x0 = int(round(x))
        y0 = int(round(y))
        fill_rect(self._canvas, x0, y0, x0 + int(round(width)), y0 + int(round(height)), parse_color(color, alpha))

    def draw_text(self, x: float, y: float, text: str, color: str) -> None:
        draw_text(
            self._canvas,
            int(round(x)),
            int(round(y)),
            text,
            parse_color(color),
            font_family=self.font_family,
            font_size_px=self.font_size_px,
        )

    def measure_text_width(self, text: str) -> int:
        return text_size(text, font_family=self.font_family, font_size_px=self.font_size_px)[0]

    def draw_dot(self, x: float, y: float, radius: int, color: str) -> None:
        draw_dot(self._canvas, int(round(x)), int(round(y)), parse_color(color), radius=radius)
