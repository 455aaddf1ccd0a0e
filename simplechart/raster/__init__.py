from .canvas import fill_rect, new_canvas, parse_color
from .draw_lines import draw_segment
from .draw_markers import draw_dot
from .draw_text import draw_text, text_size
from .sink import RasterSink

__all__ = [
    "RasterSink",
    "draw_dot",
    "draw_segment",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "parse_color",
    "text_size",
]
