from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
import logging
import math

import numpy as np

from simplechart.config import ChartConfig
from simplechart.errors import ChartConfigurationError, DegenerateRangeError
from simplechart.series import SeriesInput


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerticalBounds:
    range_min: float
    range_max: float

    @property
    def span(self) -> float:
        return self.range_max - self.range_min


@dataclass(frozen=True)
class Padding:
    base: int
    bottom: int
    right: int


@dataclass(frozen=True)
class PlotArea:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top


def compute_bounds(samples: Sequence[np.ndarray], step: float = 10.0) -> VerticalBounds:
    """Vertical range covering zero and every sample, rounded outward to `step`."""
    if step <= 0:
        raise ValueError("step must be > 0")
    ymin = 0.0
    ymax = 0.0
    for values in samples:
        if values.size == 0:
            continue
        ymin = min(ymin, float(np.min(values)))
        ymax = max(ymax, float(np.max(values)))

    range_min = math.floor(ymin / step) * step
    range_max = math.ceil(ymax / step) * step
    if range_max <= range_min:
        # all-zero data; keep a drawable band above the zero line
        range_max = range_min + step
    return VerticalBounds(range_min=float(range_min), range_max=float(range_max))


def assign_colors(
    inputs: Sequence[SeriesInput],
    palette: Sequence[str],
    rng: np.random.Generator | None = None,
) -> list[str]:
    """Resolve unset colors: palette entries in input order, then random `rgb(...)` triples."""
    colors: list[str] = []
    palette_index = 0
    for item in inputs:
        if item.color:
            colors.append(item.color)
            continue
        if palette_index < len(palette):
            colors.append(palette[palette_index])
            palette_index += 1
            continue
        if rng is None:
            rng = np.random.default_rng()
        r, g, b = (int(v) for v in rng.integers(0, 256, size=3))
        LOGGER.debug("palette exhausted; series %r gets random color", item.label)
        colors.append(f"rgb({r},{g},{b})")
    return colors


def compute_padding(width: int, height: int, config: ChartConfig) -> Padding:
    base = max(1, int(math.floor(min(width, height) * config.padding_ratio)))
    return Padding(
        base=base,
        bottom=base * config.bottom_padding_factor,
        right=base * config.right_padding_factor,
    )


def build_plot_area(width: int, height: int, padding: Padding) -> PlotArea:
    area = PlotArea(
        left=padding.base,
        top=padding.base,
        right=width - padding.right,
        bottom=height - padding.bottom,
    )
    if area.width <= 0 or area.height <= 0:
        raise ChartConfigurationError(f"surface {width}x{height} too small for plotting area")
    return area


def build_x_index(domain_min: int, domain_max: int, area: PlotArea) -> np.ndarray:
    """Pixel column for each integer domain value, in domain order."""
    if domain_max < domain_min:
        raise DegenerateRangeError(f"empty domain: [{domain_min}, {domain_max}]")
    count = domain_max - domain_min + 1
    hview = domain_max - domain_min
    if hview == 0:
        return np.full(1, area.left, dtype=np.int32)
    offsets = np.arange(count, dtype=np.int64)
    cols = area.left + np.floor_divide(area.width * offsets, hview)
    return cols.astype(np.int32)


def map_lines(samples: Sequence[np.ndarray], bounds: VerticalBounds, area: PlotArea) -> np.ndarray:
    """Pixel rows `(series, sample)`; the lowest value maps to the bottom of the band."""
    if bounds.range_max == bounds.range_min:
        raise DegenerateRangeError("vertical range is empty")
    if not samples:
        return np.zeros((0, 0), dtype=np.int32)
    values = np.vstack([np.asarray(s, dtype=np.float64) for s in samples])
    rows = area.bottom - area.height * (values - bounds.range_min) / bounds.span
    return np.rint(rows).astype(np.int32)


def value_to_pixel_y(value: float, bounds: VerticalBounds, area: PlotArea) -> int:
    if bounds.range_max == bounds.range_min:
        raise DegenerateRangeError("vertical range is empty")
    return int(round(area.bottom - area.height * (value - bounds.range_min) / bounds.span))
