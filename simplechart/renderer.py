from __future__ import annotations

from simplechart.config import DEFAULT_CONFIG, ChartConfig
from simplechart.overlap import DashPattern
from simplechart.scene import Scene
from simplechart.series import Highlight
from simplechart.sink import RenderSink


def format_value(value: float) -> str:
    rounded = round(float(value), 2)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:g}"


def draw_scene(
    scene: Scene,
    highlight: Highlight | None,
    sink: RenderSink,
    config: ChartConfig = DEFAULT_CONFIG,
) -> None:
    """Emit the full frame for `scene` (plus the highlight overlay) into `sink`."""
    sink.begin_frame(scene.width, scene.height, config.background)
    _draw_axes(scene, sink, config)
    _draw_lines(scene, highlight, sink, config)
    _draw_labels(scene, highlight, sink, config)
    if highlight is not None:
        _draw_highlight(scene, highlight, sink, config)


def _draw_axes(scene: Scene, sink: RenderSink, config: ChartConfig) -> None:
    pad = scene.padding.base
    tick = pad >> 2
    area = scene.area
    fg = config.foreground

    sink.draw_segment((pad - tick, pad), (pad + tick, pad), fg, None)
    sink.draw_text((pad * 3) >> 1, pad, format_value(scene.bounds.range_max), fg)

    guide = DashPattern(cycle=float(2 + pad), on_start=0.0, on_stop=2.0)
    for i, col in enumerate(scene.x_index.tolist()):
        sink.draw_text(col - tick, area.bottom + (tick << 1), str(scene.domain_min + i), fg)
        if i == 0:
            continue
        sink.draw_segment((col, pad), (col, area.bottom), config.guide_color, guide)
        sink.draw_segment((col, scene.zero_y - tick), (col, scene.zero_y + tick), fg, None)

    sink.draw_segment((pad, pad), (pad, area.bottom), fg, None, config.line_width)
    sink.draw_segment((pad, scene.zero_y), (area.right, scene.zero_y), fg, None, config.line_width)


def _draw_lines(scene: Scene, highlight: Highlight | None, sink: RenderSink, config: ChartConfig) -> None:
    cols = scene.x_index.tolist()
    for s, series in enumerate(scene.series):
        focused = highlight is not None and highlight.includes_series(s)
        width = config.highlight_line_width if focused else config.line_width
        rows = scene.lines[s].tolist()
        for segment in range(len(cols) - 1):
            sink.draw_segment(
                (cols[segment], rows[segment]),
                (cols[segment + 1], rows[segment + 1]),
                series.color,
                scene.dash_for(s, segment, highlight),
                width,
            )


def _draw_labels(scene: Scene, highlight: Highlight | None, sink: RenderSink, config: ChartConfig) -> None:
    for s, series in enumerate(scene.series):
        if highlight is not None and highlight.includes_series(s):
            continue  # drawn on top by the highlight overlay
        sink.draw_text(scene.label_x, series.label_slot, series.label, config.foreground)


def _draw_highlight(scene: Scene, highlight: Highlight, sink: RenderSink, config: ChartConfig) -> None:
    tp = config.tooltip_padding
    text_h = int(round(config.font_size_px))
    for point in highlight.points:
        series = scene.series[point.series_index]
        px = int(scene.x_index[point.sample_index])
        py = int(scene.lines[point.series_index, point.sample_index])
        sink.draw_dot(px, py, max(2, config.line_width), series.color)

        text = format_value(series.samples[point.sample_index])
        box_w = sink.measure_text_width(text) + (tp << 1)
        box_h = text_h + (tp << 1)
        box_x = px - (box_w >> 1)
        box_y = py - box_h
        sink.fill_rect(box_x, box_y, box_w, box_h, config.tooltip_color, config.tooltip_alpha)
        sink.draw_text(box_x + tp, box_y + tp, text, config.foreground)

    for s in sorted(highlight.series_indices()):
        series = scene.series[s]
        label_w = sink.measure_text_width(series.label)
        sink.fill_rect(scene.label_x - tp, series.label_slot - tp, label_w + (tp << 1), text_h + (tp << 1), config.tooltip_color)
        sink.draw_text(scene.label_x, series.label_slot, series.label, config.foreground)
