from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 0)) -> np.ndarray:
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    """Alpha-composite ``src`` over ``dst`` with its top-left corner at ``(x0, y0)``."""
    h, w, _ = src.shape
    dx0 = max(0, x0)
    dy0 = max(0, y0)
    dx1 = min(dst.shape[1], x0 + w)
    dy1 = min(dst.shape[0], y0 + h)
    if dx0 >= dx1 or dy0 >= dy1:
        return
    patch = src[dy0 - y0 : dy1 - y0, dx0 - x0 : dx1 - x0]
    _composite(dst[dy0:dy1, dx0:dx1], patch[:, :, :3].astype(np.float32), patch[:, :, 3].astype(np.float32) / 255.0)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    _blend_span(dst[y : y + 1, x], color)


def draw_pixels(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA) -> None:
    """Blend ``color`` once into every distinct in-bounds ``(x, y)``."""
    if xs.size == 0:
        return
    keep = (xs >= 0) & (xs < dst.shape[1]) & (ys >= 0) & (ys < dst.shape[0])
    if not np.any(keep):
        return
    flat = np.unique(ys[keep].astype(np.int64) * dst.shape[1] + xs[keep].astype(np.int64))
    rows = flat // dst.shape[1]
    cols = flat % dst.shape[1]
    view = dst[rows, cols]
    _blend_span(view, color)
    dst[rows, cols] = view


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend_span(dst[y, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend_span(dst[ya : yb + 1, x], color)


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    left = max(0, min(x0, x1))
    right = min(dst.shape[1] - 1, max(x0, x1))
    top = max(0, min(y0, y1))
    bottom = min(dst.shape[0] - 1, max(y0, y1))
    if right < left or bottom < top:
        return
    _blend_span(dst[top : bottom + 1, left : right + 1], color)


def _blend_span(view: np.ndarray, color: RGBA) -> None:
    src_rgb = np.asarray(color[:3], dtype=np.float32)
    src_a = np.full(view.shape[:-1], color[3] / 255.0, dtype=np.float32)
    _composite(view, src_rgb, src_a)


def _composite(view: np.ndarray, src_rgb: np.ndarray, src_a: np.ndarray) -> None:
    # Straight-alpha "over": keeps transparent layers transparent where nothing was drawn.
    dst_rgb = view[..., :3].astype(np.float32)
    dst_a = view[..., 3].astype(np.float32) / 255.0
    out_a = src_a + dst_a * (1.0 - src_a)
    num = src_rgb * src_a[..., None] + dst_rgb * (dst_a * (1.0 - src_a))[..., None]
    safe = np.where(out_a > 1e-6, out_a, 1.0)
    view[..., :3] = np.clip(num / safe[..., None] + 0.5, 0, 255).astype(np.uint8)
    view[..., 3] = np.clip(out_a * 255.0 + 0.5, 0, 255).astype(np.uint8)


def blend_coverage(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGBA) -> None:
    """Composite ``color`` through an 8-bit coverage mask placed at ``(x, y)``."""
    h, w = coverage.shape
    dx0 = max(0, x)
    dy0 = max(0, y)
    dx1 = min(dst.shape[1], x + w)
    dy1 = min(dst.shape[0], y + h)
    if dx0 >= dx1 or dy0 >= dy1:
        return
    cov = coverage[dy0 - y : dy1 - y, dx0 - x : dx1 - x].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    src_a = cov * (color[3] / 255.0)
    _composite(dst[dy0:dy1, dx0:dx1], np.asarray(color[:3], dtype=np.float32), src_a)
