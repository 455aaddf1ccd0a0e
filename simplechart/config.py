from __future__ import annotations

from dataclasses import dataclass

from simplechart.errors import ChartConfigurationError


DEFAULT_COLORS = (
    "#C00",
    "#00C",
    "#080",
    "#888",
    "#808",
    "#088",
    "#C80",
    "#600",
    "#006",
    "#040",
    "#333",
    "#404",
    "#840",
    "#044",
)


@dataclass(frozen=True)
class ChartConfig:
    palette: tuple[str, ...] = DEFAULT_COLORS

    # layout
    padding_ratio: float = 0.02
    bottom_padding_factor: int = 2
    right_padding_factor: int = 8
    bound_step: float = 10.0
    slot_height: int = 14

    # label stacking order scans sample indices top..bottom (inclusive)
    order_top_index: int = 6
    order_bottom_index: int = 2

    overlap_tolerance: float = 0.01
    dash_cycles_per_segment: int = 4
    min_dash_cycle_px: float = 4.0
    pack_iteration_factor: int = 4

    # style
    background: str = "#ffffff"
    foreground: str = "#000000"
    guide_color: str = "#dddddd"
    tooltip_color: str = "#CCCCCC"
    tooltip_alpha: float = 0.5
    tooltip_padding: int = 5
    font_size_px: float = 12.0
    line_width: int = 2
    highlight_line_width: int = 3

    def __post_init__(self) -> None:
        if not self.palette:
            raise ChartConfigurationError("palette must include at least one color")
        if not 0.0 < self.padding_ratio < 0.5:
            raise ChartConfigurationError("padding_ratio must be in (0, 0.5)")
        if self.bottom_padding_factor < 1 or self.right_padding_factor < 1:
            raise ChartConfigurationError("padding factors must be >= 1")
        if self.bound_step <= 0:
            raise ChartConfigurationError("bound_step must be > 0")
        if self.slot_height <= 0:
            raise ChartConfigurationError("slot_height must be > 0")
        if self.order_bottom_index < 0 or self.order_top_index < self.order_bottom_index:
            raise ChartConfigurationError("order indices must satisfy 0 <= bottom <= top")
        if self.overlap_tolerance < 0:
            raise ChartConfigurationError("overlap_tolerance must be >= 0")
        if self.dash_cycles_per_segment <= 0 or self.min_dash_cycle_px <= 0:
            raise ChartConfigurationError("dash cycle settings must be > 0")
        if self.pack_iteration_factor <= 0:
            raise ChartConfigurationError("pack_iteration_factor must be > 0")
        if not 0.0 <= self.tooltip_alpha <= 1.0:
            raise ChartConfigurationError("tooltip_alpha must be in [0, 1]")
        if self.font_size_px <= 0 or self.line_width <= 0 or self.highlight_line_width <= 0:
            raise ChartConfigurationError("font size and line widths must be > 0")


DEFAULT_CONFIG = ChartConfig()
