from __future__ import annotations

from enum import Enum

import numpy as np


DEFAULT_SPLINE_TENSION = 0.5
DEFAULT_SPLINE_STEPS = 8


class InterpolationMode(str, Enum):
    LINEAR = "linear"
    SMOOTHED = "smoothed"

    @classmethod
    def parse(cls, value: "InterpolationMode | str") -> "InterpolationMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unsupported interpolation mode: {value!r}") from exc


def canonical_spline(
    x: np.ndarray,
    y: np.ndarray,
    *,
    tension: float = DEFAULT_SPLINE_TENSION,
    steps: int = DEFAULT_SPLINE_STEPS,
) -> tuple[np.ndarray, np.ndarray]:
    """Densify a polyline with a cardinal spline passing through every point.

    Tangents are ``tension * (p[i+1] - p[i-1])`` with the end points repeated,
    so ``tension=0.5`` gives the Catmull-Rom curve. Each of the ``n - 1`` spans
    is sampled ``steps`` times and the final input point is appended, so the
    output always starts and ends on the input end points.
    """
    if steps <= 0:
        raise ValueError("steps must be > 0")
    xs = np.asarray(x, dtype=np.float64)
    ys = np.asarray(y, dtype=np.float64)
    if xs.shape != ys.shape or xs.ndim != 1:
        raise ValueError("x and y must be 1-D arrays of equal length")
    if xs.size < 3:
        return xs.copy(), ys.copy()

    px = np.concatenate(([xs[0]], xs, [xs[-1]]))
    py = np.concatenate(([ys[0]], ys, [ys[-1]]))
    mx = tension * (px[2:] - px[:-2])
    my = tension * (py[2:] - py[:-2])

    t = np.linspace(0.0, 1.0, steps, endpoint=False, dtype=np.float64)
    t2 = t * t
    t3 = t2 * t
    h00 = (2.0 * t3 - 3.0 * t2 + 1.0)[None, :]
    h10 = (t3 - 2.0 * t2 + t)[None, :]
    h01 = (-2.0 * t3 + 3.0 * t2)[None, :]
    h11 = (t3 - t2)[None, :]

    out_x = h00 * xs[:-1, None] + h10 * mx[:-1, None] + h01 * xs[1:, None] + h11 * mx[1:, None]
    out_y = h00 * ys[:-1, None] + h10 * my[:-1, None] + h01 * ys[1:, None] + h11 * my[1:, None]
    return (
        np.append(out_x.ravel(), xs[-1]),
        np.append(out_y.ravel(), ys[-1]),
    )
