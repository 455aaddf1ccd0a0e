from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import Any, Callable

import numpy as np

from simplechart.compile import changed_rect, compile_full_rewrite_batch, compile_replace_rect_batch
from simplechart.config import DEFAULT_CONFIG, ChartConfig
from simplechart.events import InputEvent, PointerEventSource
from simplechart.hit_test import hit_test
from simplechart.raster import RasterSink
from simplechart.renderer import draw_scene
from simplechart.scene import Scene, build_scene
from simplechart.series import Highlight
from simplechart.sink import RenderSink
from simplechart.surface import ChartSurface


LOGGER = logging.getLogger(__name__)


class Chart:
    """Multi-series line chart bound to one surface.

    `set_data` rebuilds the whole scene; pointer events only move the highlight.
    Every state change that is visible triggers exactly one render.
    """

    def __init__(
        self,
        surface: ChartSurface,
        *,
        config: ChartConfig = DEFAULT_CONFIG,
        sink: RenderSink | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._surface = surface
        self._config = config
        self._sink: RenderSink = sink if sink is not None else RasterSink(font_size_px=config.font_size_px)
        self._rng = rng
        self._scene: Scene | None = None
        self._highlight: Highlight | None = None
        self._render_count = 0
        self._unsubscribers: list[Callable[[], None]] = []
        self._committed: np.ndarray | None = None

    @property
    def surface(self) -> ChartSurface:
        return self._surface

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def scene(self) -> Scene | None:
        return self._scene

    @property
    def highlight(self) -> Highlight | None:
        return self._highlight

    @property
    def render_count(self) -> int:
        return self._render_count

    def set_data(self, series_list: Sequence[Any], domain_min: int, domain_max: int) -> Scene:
        scene = build_scene(
            series_list,
            domain_min,
            domain_max,
            self._surface.width,
            self._surface.height,
            config=self._config,
            rng=self._rng,
        )
        self._scene = scene
        self._highlight = None
        self.render()
        return scene

    def pointer_move(self, px: float, py: float) -> bool:
        """Update the highlight from surface coordinates; True when a render happened."""
        if self._scene is None:
            return False
        try:
            x = float(px)
            y = float(py)
        except (TypeError, ValueError):
            return self.unfocus()
        hit = hit_test(self._scene, x, y)
        if hit is None:
            return self.unfocus()
        if hit == self._highlight:
            return False
        self._highlight = hit
        self.render()
        return True

    def unfocus(self) -> bool:
        if self._highlight is None:
            return False
        self._highlight = None
        self.render()
        return True

    def handle_event(self, event: InputEvent) -> None:
        if event.event_type == "pointer_move":
            if event.x is None or event.y is None:
                self.unfocus()
                return
            self.pointer_move(event.x, event.y)
        elif event.event_type == "pointer_leave":
            self.unfocus()

    def listen(self, source: PointerEventSource) -> Callable[[], None]:
        unsubscribe = source.subscribe(self.handle_event)
        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def close(self) -> None:
        while self._unsubscribers:
            self._unsubscribers.pop()()

    def render(self) -> None:
        if self._scene is None:
            return
        draw_scene(self._scene, self._highlight, self._sink, self._config)
        if isinstance(self._sink, RasterSink):
            self._commit(self._sink.frame())
        self._render_count += 1
        LOGGER.debug("chart rendered; count=%d highlight=%s", self._render_count, self._highlight)

    def _commit(self, frame: np.ndarray) -> None:
        # after the first frame only the region differing from the last commit is rewritten
        previous = self._committed
        if previous is None or previous.shape != frame.shape:
            batch = compile_full_rewrite_batch(frame)
        else:
            rect = changed_rect(previous, frame)
            if rect is None:
                return
            batch = compile_replace_rect_batch(frame, *rect)
        self._surface.submit_write_batch(batch)
        self._committed = frame.copy()
