from __future__ import annotations

from typing import Protocol

from simplechart.overlap import DashPattern


Point = tuple[float, float]


class RenderSink(Protocol):
    """Primitive drawing operations the scene renderer emits into."""

    def begin_frame(self, width: int, height: int, background: str) -> None:
        ...

    def draw_segment(self, p1: Point, p2: Point, color: str, dash: DashPattern | None, width: int = 1) -> None:
        ...

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str, alpha: float = 1.0) -> None:
        ...

    def draw_text(self, x: float, y: float, text: str, color: str) -> None:
        ...

    def measure_text_width(self, text: str) -> int:
        ...

    def draw_dot(self, x: float, y: float, radius: int, color: str) -> None:
        ...
