from __future__ import annotations

import numpy as np

from funcplot.raster.canvas import RGBA, draw_pixels


def fill_to_baseline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, baseline_y: float, color: RGBA) -> None:
    """Shade between a curve (float pixel coords, x ascending) and a horizontal baseline.

    Each pixel column spanned by the curve is filled from the linearly
    interpolated curve height to ``baseline_y``, clipped to the canvas.
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if xs.size == 0:
        return
    h, w = dst.shape[0], dst.shape[1]
    order = np.argsort(xs, kind="stable")
    xs = xs[order]
    ys = ys[order]

    col0 = max(0, int(np.ceil(xs[0] - 0.5)))
    col1 = min(w - 1, int(np.floor(xs[-1] + 0.5)))
    if col1 < col0:
        return
    cols = np.arange(col0, col1 + 1, dtype=np.int32)
    if xs.size == 1:
        curve = np.full(cols.shape, ys[0], dtype=np.float64)
    else:
        curve = np.interp(np.clip(cols.astype(np.float64), xs[0], xs[-1]), xs, ys)
    visible = (np.maximum(curve, baseline_y) >= -0.5) & (np.minimum(curve, baseline_y) <= h - 0.5)
    if not np.any(visible):
        return
    cols = cols[visible]
    curve = curve[visible]
    top = np.clip(np.rint(np.minimum(curve, baseline_y)), 0, h - 1).astype(np.int32)
    bottom = np.clip(np.rint(np.maximum(curve, baseline_y)), 0, h - 1).astype(np.int32)
    lengths = bottom - top + 1
    px = np.repeat(cols, lengths)
    starts = np.repeat(top - np.concatenate(([0], np.cumsum(lengths)[:-1])), lengths)
    py = starts + np.arange(int(lengths.sum()), dtype=np.int32)
    draw_pixels(dst, px, py, color)
