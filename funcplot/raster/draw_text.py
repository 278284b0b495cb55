from __future__ import annotations

from functools import lru_cache

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from funcplot.raster.canvas import RGBA, blend_coverage, fill_rect


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
LINE_SPACING_PX = 2

# Pillow resolves bare file names against the platform font directories.
_FONT_FILES = {
    "dejavu sans": ("DejaVuSans.ttf",),
    "liberation sans": ("LiberationSans-Regular.ttf",),
    "arial": ("Arial.ttf", "arial.ttf"),
    "helvetica": ("Helvetica.ttc",),
}
_FALLBACK_FILES = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf", "Helvetica.ttc")

FontType = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    background_color: RGBA | None = None,
    padding: int = 0,
) -> None:
    """Blend ``text`` (may span several lines) with its top-left corner at ``(x, y)``.

    With ``background_color`` a box ``padding`` pixels larger than the text
    is filled first, which keeps labels readable over the curve.
    """
    if not text:
        return
    mask = _text_mask(text, _font(font_family, _size_key(font_size_px)))
    if background_color is not None:
        h, w = mask.shape
        fill_rect(dst, x - padding, y - padding, x + w - 1 + padding, y + h - 1 + padding, background_color)
    blend_coverage(dst, x, y, mask, color)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> tuple[int, int]:
    size = _size_key(font_size_px)
    if not text:
        return (0, size)
    h, w = _text_mask(text, _font(font_family, size)).shape
    return (w, h)


def _size_key(font_size_px: float) -> int:
    return max(1, int(round(font_size_px)))


@lru_cache(maxsize=256)
def _text_mask(text: str, font: FontType) -> np.ndarray:
    left, top, right, bottom = ImageDraw.Draw(Image.new("L", (1, 1))).multiline_textbbox(
        (0, 0), text, font=font, spacing=LINE_SPACING_PX
    )
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).multiline_text((-left, -top), text, fill=255, font=font, spacing=LINE_SPACING_PX)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def _font(font_family: str, size: int) -> FontType:
    family = font_family.strip().lower() or DEFAULT_FONT_FAMILY.lower()
    for name in _FONT_FILES.get(family, ()) + _FALLBACK_FILES:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        # Pillow < 10.1 has no sized default font.
        return ImageFont.load_default()
