from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any, ClassVar, TypeAlias

import numpy as np

from funcplot.samples import normalize_samples


LOGGER = logging.getLogger(__name__)


class OverlayKind(str, Enum):
    TANGENT = "tangent"
    INTEGRAL = "integral"


@dataclass(frozen=True)
class TangentOverlay:
    x0: float
    fx0: float
    slope: float
    start: tuple[float, float]
    end: tuple[float, float]

    kind: ClassVar[OverlayKind] = OverlayKind.TANGENT

    @property
    def marker(self) -> tuple[float, float]:
        return (self.x0, self.fx0)

    @property
    def label(self) -> str:
        return "Tangent"


@dataclass(frozen=True)
class IntegralOverlay:
    x: np.ndarray
    y: np.ndarray
    a: float
    b: float
    area: float
    expression: str
    label: str

    kind: ClassVar[OverlayKind] = OverlayKind.INTEGRAL
    baseline: ClassVar[float] = 0.0

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0


Overlay: TypeAlias = TangentOverlay | IntegralOverlay


def tangent_overlay(x0: float, fx0: float, slope: float, xmin: float, xmax: float) -> TangentOverlay:
    x0 = float(x0)
    fx0 = float(fx0)
    slope = float(slope)
    xmin = float(xmin)
    xmax = float(xmax)
    y1 = fx0 + slope * (xmin - x0)
    y2 = fx0 + slope * (xmax - x0)
    return TangentOverlay(x0=x0, fx0=fx0, slope=slope, start=(xmin, y1), end=(xmax, y2))


def integral_overlay(
    samples: Any,
    a: float,
    b: float,
    area_value: float,
    expression: str,
    *,
    precision: int = 6,
) -> IntegralOverlay:
    a = float(a)
    b = float(b)
    data = normalize_samples(samples)
    keep = data.finite_mask & (data.x >= a) & (data.x <= b)
    return IntegralOverlay(
        x=data.x[keep].copy(),
        y=data.y[keep].copy(),
        a=a,
        b=b,
        area=float(area_value),
        expression=expression,
        label=format_integral_label(a, b, float(area_value), expression, precision=precision),
    )


def format_integral_label(a: float, b: float, area: float, expression: str, *, precision: int = 6) -> str:
    return f"∫[{a:g}, {b:g}] {expression} dx\n≈ {area:.{precision}f}"


class OverlayManager:
    """Ordered overlay list; entries only change through add/clear calls."""

    def __init__(self, *, precision: int = 6) -> None:
        self._precision = precision
        self._overlays: list[Overlay] = []

    def __len__(self) -> int:
        return len(self._overlays)

    @property
    def overlays(self) -> tuple[Overlay, ...]:
        return tuple(self._overlays)

    def of_kind(self, kind: OverlayKind) -> tuple[Overlay, ...]:
        return tuple(o for o in self._overlays if o.kind is kind)

    def add_tangent(self, x0: float, fx0: float, slope: float, xmin: float, xmax: float) -> TangentOverlay:
        overlay = tangent_overlay(x0, fx0, slope, xmin, xmax)
        self._overlays.append(overlay)
        LOGGER.debug("added tangent at x0=%g (slope=%g)", overlay.x0, overlay.slope)
        return overlay

    def add_integral_area(
        self,
        samples: Any,
        a: float,
        b: float,
        area_value: float,
        label: str,
    ) -> IntegralOverlay:
        if a > b:
            LOGGER.warning("integral range [%g, %g] is reversed; no samples will be shaded", a, b)
        overlay = integral_overlay(samples, a, b, area_value, label, precision=self._precision)
        self._overlays.append(overlay)
        LOGGER.debug("added integral area over [%g, %g] with %d samples", overlay.a, overlay.b, len(overlay))
        return overlay

    def clear(self, kind: OverlayKind) -> int:
        kept = [o for o in self._overlays if o.kind is not kind]
        removed = len(self._overlays) - len(kept)
        if removed:
            self._overlays = kept
            LOGGER.debug("cleared %d %s overlays", removed, kind.value)
        return removed
