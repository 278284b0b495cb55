from __future__ import annotations

import math

import numpy as np

from funcplot.raster.canvas import RGBA, draw_pixels


def draw_polyline(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    width: int = 1,
    *,
    dash: tuple[int, int] | None = None,
) -> None:
    """Rasterize a polyline given in (possibly off-canvas) float pixel coordinates.

    Every span is clipped to the canvas before stepping, so far-away points
    near an asymptote cost nothing. ``dash`` is an ``(on, off)`` pixel pattern
    measured along the unclipped path.
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.size < 2:
        return
    h, w = dst.shape[0], dst.shape[1]
    px_chunks: list[np.ndarray] = []
    py_chunks: list[np.ndarray] = []
    travelled = 0.0
    for i in range(xs.size - 1):
        x0, y0, x1, y1 = float(xs[i]), float(ys[i]), float(xs[i + 1]), float(ys[i + 1])
        if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
            continue
        seg_len = math.hypot(x1 - x0, y1 - y0)
        clipped = clip_segment(x0, y0, x1, y1, w, h)
        if clipped is not None:
            t0, t1 = clipped
            cx0, cy0 = x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0
            cx1, cy1 = x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1
            steps = int(max(abs(cx1 - cx0), abs(cy1 - cy0))) + 1
            t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
            sx = cx0 + (cx1 - cx0) * t
            sy = cy0 + (cy1 - cy0) * t
            if dash is not None:
                along = travelled + (t0 + (t1 - t0) * t) * seg_len
                on, off = dash
                keep = np.mod(along, float(on + off)) < float(on)
                sx = sx[keep]
                sy = sy[keep]
            px_chunks.append(np.rint(sx).astype(np.int32))
            py_chunks.append(np.rint(sy).astype(np.int32))
        travelled += seg_len
    if not px_chunks:
        return
    px, py = _apply_brush(np.concatenate(px_chunks), np.concatenate(py_chunks), width)
    draw_pixels(dst, px, py, color)


def clip_segment(x0: float, y0: float, x1: float, y1: float, width: int, height: int) -> tuple[float, float] | None:
    """Liang-Barsky clip against ``[0, width-1] x [0, height-1]``; returns the kept ``(t0, t1)``."""
    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in (
        (-dx, x0),
        (dx, (width - 1) - x0),
        (-dy, y0),
        (dy, (height - 1) - y0),
    ):
        if p == 0:
            if q < 0:
                return None
            continue
        r = q / p
        if p < 0:
            if r > t1:
                return None
            t0 = max(t0, r)
        else:
            if r < t0:
                return None
            t1 = min(t1, r)
    if not (math.isfinite(t0) and math.isfinite(t1)):
        return None
    return (t0, t1)


def _apply_brush(px: np.ndarray, py: np.ndarray, width: int) -> tuple[np.ndarray, np.ndarray]:
    radius = max(0, width // 2)
    if width <= 1:
        return px, py
    lo = -radius if width % 2 == 1 else -radius + 1
    offsets = np.arange(lo, radius + 1, dtype=np.int32)
    ox, oy = np.meshgrid(offsets, offsets)
    return (
        (px[:, None] + ox.ravel()[None, :]).ravel(),
        (py[:, None] + oy.ravel()[None, :]).ravel(),
    )
