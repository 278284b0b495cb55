from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
import logging
import math

import numpy as np

from funcplot.config import (
    DEFAULT_FALLBACK_VIEWPORT,
    DEFAULT_FLAT_EPSILON,
    DEFAULT_PADDING_RATIO,
    DEFAULT_Y_VISUAL_LIMIT,
)


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class AxisBounds:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def x_range(self) -> float:
        return self.xmax - self.xmin

    @property
    def y_range(self) -> float:
        return self.ymax - self.ymin

    @property
    def y_mid(self) -> float:
        return (self.ymin + self.ymax) / 2.0


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float


def resolve_x_range(xmin: float, xmax: float) -> tuple[float, float]:
    xmin = float(xmin)
    xmax = float(xmax)
    if not (math.isfinite(xmin) and math.isfinite(xmax)):
        raise ValueError(f"x range must be finite, got [{xmin}, {xmax}]")
    if not math.isfinite(xmax - xmin):
        raise ValueError(f"x range [{xmin}, {xmax}] is too wide to draw")
    if xmin > xmax:
        xmin, xmax = xmax, xmin
    if xmin == xmax:
        xmin -= 1.0
        xmax += 1.0
    return xmin, xmax


def compute_y_limits(
    y: np.ndarray,
    *,
    y_visual_limit: float = DEFAULT_Y_VISUAL_LIMIT,
    flat_epsilon: float = DEFAULT_FLAT_EPSILON,
    padding_ratio: float = DEFAULT_PADDING_RATIO,
) -> tuple[float, float]:
    """y-limits from the samples with ``|y| <= y_visual_limit``.

    Near-asymptote spikes are ignored so they cannot flatten the rest of the
    curve. No candidates gives ``(-1, 1)``; a flat candidate set grows by 1 on
    each side; anything else gets ``padding_ratio`` of its span at both ends.
    """
    values = np.asarray(y, dtype=np.float64)
    candidates = values[np.isfinite(values) & (np.abs(values) <= y_visual_limit)]
    if candidates.size == 0:
        return -1.0, 1.0

    ymin = float(np.min(candidates))
    ymax = float(np.max(candidates))
    if ymax - ymin < flat_epsilon:
        return ymin - 1.0, ymax + 1.0
    pad = (ymax - ymin) * padding_ratio
    return ymin - pad, ymax + pad


def lock_aspect(
    bounds: AxisBounds,
    viewport: tuple[int, int],
    *,
    fallback_viewport: tuple[int, int] = DEFAULT_FALLBACK_VIEWPORT,
) -> AxisBounds:
    """Grow the y-range about its midpoint so one x unit and one y unit share a pixel length.

    Only y ever adapts: when the data is already taller than the viewport the
    bounds are returned unchanged.
    """
    x_range = bounds.x_range
    y_range = bounds.y_range
    if y_range <= 0:
        y_range = 1.0

    width, height = viewport
    if width <= 0 or height <= 0:
        width, height = fallback_viewport
    plot_aspect = float(width) / float(height)
    data_aspect = x_range / y_range
    if data_aspect <= plot_aspect:
        return bounds

    new_y_range = x_range / plot_aspect
    y_mid = bounds.y_mid
    return AxisBounds(
        xmin=bounds.xmin,
        xmax=bounds.xmax,
        ymin=y_mid - new_y_range / 2.0,
        ymax=y_mid + new_y_range / 2.0,
    )


def compute_axis_bounds(
    y: np.ndarray,
    xmin: float,
    xmax: float,
    *,
    viewport: tuple[int, int],
    aspect_locked: bool = False,
    y_visual_limit: float = DEFAULT_Y_VISUAL_LIMIT,
    flat_epsilon: float = DEFAULT_FLAT_EPSILON,
    padding_ratio: float = DEFAULT_PADDING_RATIO,
    fallback_viewport: tuple[int, int] = DEFAULT_FALLBACK_VIEWPORT,
) -> AxisBounds:
    x0, x1 = resolve_x_range(xmin, xmax)
    y0, y1 = compute_y_limits(
        y,
        y_visual_limit=y_visual_limit,
        flat_epsilon=flat_epsilon,
        padding_ratio=padding_ratio,
    )
    bounds = AxisBounds(xmin=x0, xmax=x1, ymin=y0, ymax=y1)
    if aspect_locked:
        bounds = lock_aspect(bounds, viewport, fallback_viewport=fallback_viewport)
    check_drawable(bounds)
    LOGGER.debug("computed axis bounds %s (aspect_locked=%s)", bounds, aspect_locked)
    return bounds


def check_drawable(bounds: AxisBounds) -> None:
    """Raise ``ValueError`` unless both axes have a finite, positive span."""
    values = (bounds.xmin, bounds.xmax, bounds.ymin, bounds.ymax, bounds.x_range, bounds.y_range)
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"axis bounds must be finite, got {bounds}")
    if bounds.x_range <= 0 or bounds.y_range <= 0:
        raise ValueError(f"axis bounds must have a positive span on both axes, got {bounds}")


def build_transform(bounds: AxisBounds, width: int, height: int) -> PlotTransform:
    if width <= 1 or height <= 1:
        raise ValueError("plot viewport width/height must be > 1")
    if bounds.x_range <= 0 or bounds.y_range <= 0:
        raise ValueError("axis bounds must have a positive span on both axes")
    sx = (width - 1) / bounds.x_range
    tx = -bounds.xmin * sx
    sy = (height - 1) / bounds.y_range
    ty = -bounds.ymin * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def project(x: np.ndarray, y: np.ndarray, transform: PlotTransform, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Unrounded, unclipped pixel coordinates with the y axis pointing down."""
    px = np.asarray(x, dtype=np.float64) * transform.sx + transform.tx
    py = (height - 1) - (np.asarray(y, dtype=np.float64) * transform.sy + transform.ty)
    return px, py


def map_to_pixels(x: np.ndarray, y: np.ndarray, transform: PlotTransform, width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    fx, fy = project(x, y, transform, height)
    px = np.rint(fx).astype(np.int32)
    py = np.rint(fy).astype(np.int32)
    np.clip(px, 0, width - 1, out=px)
    np.clip(py, 0, height - 1, out=py)
    return px, py


# (upper bound on the normalized fraction, nice multiplier)
_NICE_SPANS = ((1.0, 1.0), (2.0, 2.0), (5.0, 5.0))
_NICE_STEPS = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0))


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Round-valued ticks inside ``[vmin, vmax]``, roughly ``target`` of them."""
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, _NICE_SPANS, inclusive=True)
    if not math.isfinite(span):
        span = vmax - vmin
    step = _nice_number(span / max(target - 1, 1), _NICE_STEPS, inclusive=False)
    first = math.ceil(vmin / step)
    last = math.floor(vmax / step)
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    ticks[np.abs(ticks) < step * 1e-9] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude != 0.0 and (magnitude >= 1e6 or magnitude < 1e-6 or (step is not None and abs(step) < 1e-4)):
        return f"{value:.4e}"
    text = f"{value:.{_decimals_from_step(step)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    """Labels sharing the precision implied by the tick spacing."""
    if ticks.size == 0:
        return []
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else None
    return [format_tick(float(v), step=step) for v in ticks]


def _nice_number(value: float, table: tuple[tuple[float, float], ...], *, inclusive: bool) -> float:
    scale = 10.0 ** math.floor(math.log10(value))
    frac = value / scale
    for bound, nice in table:
        if frac < bound or (inclusive and frac == bound):
            return nice * scale
    return 10.0 * scale


def _decimals_from_step(step: float | None) -> int:
    if step is None or step <= 0 or not math.isfinite(step):
        return 6
    exponent = Decimal(repr(step)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))
