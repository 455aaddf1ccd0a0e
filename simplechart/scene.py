from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from typing import Any

import numpy as np

from simplechart.config import DEFAULT_CONFIG, ChartConfig
from simplechart.labels import pack_label_slots
from simplechart.ordering import order_series
from simplechart.overlap import DashPattern, analyze_overlaps
from simplechart.scales import (
    Padding,
    PlotArea,
    VerticalBounds,
    assign_colors,
    build_plot_area,
    build_x_index,
    compute_bounds,
    compute_padding,
    map_lines,
    value_to_pixel_y,
)
from simplechart.series import Highlight, Series, normalize_series


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    width: int
    height: int
    domain_min: int
    domain_max: int
    bounds: VerticalBounds
    padding: Padding
    area: PlotArea
    slot_height: int
    series: tuple[Series, ...]
    order: tuple[int, ...]
    x_index: np.ndarray = field(repr=False, compare=False)
    lines: np.ndarray = field(repr=False, compare=False)
    dash_patterns: tuple[tuple[DashPattern | None, ...], ...] = field(repr=False)
    zero_y: int = 0

    @property
    def sample_count(self) -> int:
        return self.domain_max - self.domain_min + 1

    @property
    def last_sample_index(self) -> int:
        return self.sample_count - 1

    @property
    def label_x(self) -> int:
        return int(self.x_index[-1]) + (self.padding.base >> 2)

    def dash_for(self, series_index: int, segment: int, highlight: Highlight | None = None) -> DashPattern | None:
        if highlight is not None and highlight.includes_series(series_index):
            return None
        return self.dash_patterns[series_index][segment]


def build_scene(
    raw_series: Sequence[Any],
    domain_min: int,
    domain_max: int,
    width: int,
    height: int,
    config: ChartConfig = DEFAULT_CONFIG,
    rng: np.random.Generator | None = None,
) -> Scene:
    """Run the whole layout pipeline; raises before anything is published."""
    inputs = normalize_series(raw_series, domain_min, domain_max)
    domain_min = int(domain_min)
    domain_max = int(domain_max)
    samples = [item.samples for item in inputs]

    colors = assign_colors(inputs, config.palette, rng)
    bounds = compute_bounds(samples, step=config.bound_step)

    padding = compute_padding(width, height, config)
    area = build_plot_area(width, height, padding)
    x_index = build_x_index(domain_min, domain_max, area)
    lines = map_lines(samples, bounds, area)

    order = order_series(samples, top_index=config.order_top_index, bottom_index=config.order_bottom_index)
    slot_height = config.slot_height
    lowest_anchor = max(0, int(height) - slot_height)
    anchors = [int(np.clip(lines[i, -1], 0, lowest_anchor)) for i in range(len(inputs))]
    slots = pack_label_slots(
        anchors,
        order,
        slot_height,
        iteration_factor=config.pack_iteration_factor,
        bottom_limit=lowest_anchor + slot_height,
    )

    dash_patterns = analyze_overlaps(
        lines,
        x_index,
        tolerance=config.overlap_tolerance,
        cycles_per_segment=config.dash_cycles_per_segment,
        min_cycle=config.min_dash_cycle_px,
    )

    series = tuple(
        Series(label=item.label, color=colors[i], samples=item.samples, label_slot=slots[i])
        for i, item in enumerate(inputs)
    )
    LOGGER.debug(
        "scene built: series=%d domain=[%d, %d] range=[%g, %g]",
        len(series),
        domain_min,
        domain_max,
        bounds.range_min,
        bounds.range_max,
    )
    return Scene(
        width=int(width),
        height=int(height),
        domain_min=domain_min,
        domain_max=domain_max,
        bounds=bounds,
        padding=padding,
        area=area,
        slot_height=slot_height,
        series=series,
        order=tuple(order),
        x_index=x_index,
        lines=lines,
        dash_patterns=dash_patterns,
        zero_y=value_to_pixel_y(0.0, bounds, area),
    )
