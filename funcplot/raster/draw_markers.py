from __future__ import annotations

from typing import Literal

import numpy as np

from funcplot.raster.canvas import RGBA, draw_pixels


MarkerShape = Literal["square", "circle"]


def draw_markers(
    dst: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    color: RGBA,
    size: int = 1,
    *,
    shape: MarkerShape = "square",
) -> None:
    if np.asarray(xs).size == 0:
        return
    radius = max(0, size // 2)
    offsets = np.arange(-radius, radius + 1, dtype=np.int32)
    ox, oy = np.meshgrid(offsets, offsets)
    ox = ox.ravel()
    oy = oy.ravel()
    if shape == "circle":
        inside = ox * ox + oy * oy <= radius * radius + radius
        ox = ox[inside]
        oy = oy[inside]
    fx = np.asarray(xs, dtype=np.float64)
    fy = np.asarray(ys, dtype=np.float64)
    finite = np.isfinite(fx) & np.isfinite(fy)
    h, w = dst.shape[0], dst.shape[1]
    # Centres far off-canvas collapse onto the margin, where the whole stamp stays hidden.
    cx = np.rint(np.clip(fx[finite], -radius - 1, w + radius)).astype(np.int32)
    cy = np.rint(np.clip(fy[finite], -radius - 1, h + radius)).astype(np.int32)
    draw_pixels(
        dst,
        (cx[:, None] + ox[None, :]).ravel(),
        (cy[:, None] + oy[None, :]).ravel(),
        color,
    )
