from __future__ import annotations

import numpy as np

from simplechart.chart import Chart
from simplechart.config import DEFAULT_CONFIG, ChartConfig
from simplechart.errors import ChartConfigurationError
from simplechart.raster import parse_color
from simplechart.scales import build_plot_area, compute_padding
from simplechart.sink import RenderSink
from simplechart.surface import DEFAULT_REGISTRY, ChartSurface, ContainerRegistry


def create_chart(
    container_handle: str,
    width: int,
    height: int,
    *,
    registry: ContainerRegistry = DEFAULT_REGISTRY,
    config: ChartConfig = DEFAULT_CONFIG,
    sink: RenderSink | None = None,
    rng: np.random.Generator | None = None,
) -> Chart:
    """Create a chart whose `width` x `height` surface is attached to the container `container_handle`."""
    container = registry.resolve(container_handle)
    if int(width) != width or int(height) != height:
        raise ChartConfigurationError("width and height must be integers")
    if width <= 0 or height <= 0:
        raise ChartConfigurationError("width and height must be > 0")
    # no room for a plotting band is a construction error, not a set_data one
    build_plot_area(int(width), int(height), compute_padding(int(width), int(height), config))
    surface = ChartSurface(int(width), int(height), background=parse_color(config.background))
    container.attach(surface)
    return Chart(surface, config=config, sink=sink, rng=rng)
