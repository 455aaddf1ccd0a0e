from simplechart.api import create_chart
from simplechart.chart import Chart
from simplechart.config import DEFAULT_CONFIG, ChartConfig
from simplechart.errors import (
    ChartConfigurationError,
    ChartError,
    ChartInputError,
    ChartInternalError,
    DegenerateRangeError,
    EmptySeriesListError,
    MalformedSeriesError,
    MissingContainerError,
)
from simplechart.events import InputEvent, PointerEventSource
from simplechart.scene import Scene, build_scene
from simplechart.series import Highlight, HighlightPoint, Series, SeriesInput
from simplechart.surface import DEFAULT_REGISTRY, ChartContainer, ChartSurface, ContainerRegistry

__all__ = [
    "Chart",
    "ChartConfig",
    "ChartConfigurationError",
    "ChartContainer",
    "ChartError",
    "ChartInputError",
    "ChartInternalError",
    "ChartSurface",
    "ContainerRegistry",
    "DEFAULT_CONFIG",
    "DEFAULT_REGISTRY",
    "DegenerateRangeError",
    "EmptySeriesListError",
    "Highlight",
    "HighlightPoint",
    "InputEvent",
    "MalformedSeriesError",
    "MissingContainerError",
    "PointerEventSource",
    "Scene",
    "Series",
    "SeriesInput",
    "build_scene",
    "create_chart",
]
