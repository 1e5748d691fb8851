from .canvas import new_canvas, parse_color
from .draw_lines import clip_segment, draw_polyline
from .draw_polygon import fill_polygon
from .draw_text import draw_text, parse_font, text_box

__all__ = [
    "clip_segment",
    "draw_polyline",
    "draw_text",
    "fill_polygon",
    "new_canvas",
    "parse_color",
    "parse_font",
    "text_box",
]
