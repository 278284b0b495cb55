from .canvas import blend_coverage, blit, draw_hline, draw_pixel, draw_pixels, draw_vline, fill_rect, new_canvas
from .draw_fill import fill_to_baseline
from .draw_lines import clip_segment, draw_polyline
from .draw_markers import draw_markers
from .draw_text import draw_text, text_size
from .layers import LayerCache

__all__ = [
    "LayerCache",
    "blend_coverage",
    "blit",
    "clip_segment",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_pixels",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "fill_to_baseline",
    "new_canvas",
    "text_size",
]
