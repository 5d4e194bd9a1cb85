from .canvas import draw_hline, draw_pixel, draw_segment, draw_vline, new_canvas
from .draw_text import capital_height, draw_aligned_text, draw_text, text_size

__all__ = [
    "capital_height",
    "draw_aligned_text",
    "draw_hline",
    "draw_pixel",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "new_canvas",
    "text_size",
]
