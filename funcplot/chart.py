from __future__ import annotations

import logging
from typing import Any

from funcplot.axis_state import AxisScaler, AxisState
from funcplot.config import ChartConfig
from funcplot.interpolation import InterpolationMode
from funcplot.overlays import IntegralOverlay, Overlay, OverlayKind, OverlayManager, TangentOverlay
from funcplot.samples import normalize_samples
from funcplot.scales import AxisBounds
from funcplot.scene import ChartScene
from funcplot.segmenter import Segment, segment_samples
from funcplot.surface import DrawingSurface


LOGGER = logging.getLogger(__name__)


class Chart:
    """Function chart bound to one drawing surface.

    ``plot`` replaces the base curve wholesale; overlays survive it and are
    only removed through ``clear_tangents``/``clear_integrals``. Axis bounds
    are computed on the first ``plot`` and kept until ``reset_axes``. Every
    call runs synchronously on the caller's thread.
    """

    def __init__(self, surface: DrawingSurface, *, config: ChartConfig | None = None) -> None:
        self._surface = surface
        self._config = config or ChartConfig()
        self._scaler = AxisScaler(self._config)
        self._overlays = OverlayManager(precision=self._config.integral_precision)
        self._segments: tuple[Segment, ...] = ()
        self._has_discontinuity = False
        self._smoothing_active = False
        self._aspect_locked = self._config.aspect_locked
        self._interpolation = self._config.interpolation

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    @property
    def bounds(self) -> AxisBounds | None:
        return self._scaler.bounds

    @property
    def axis_state(self) -> AxisState:
        return self._scaler.state

    @property
    def overlays(self) -> tuple[Overlay, ...]:
        return self._overlays.overlays

    @property
    def has_discontinuity(self) -> bool:
        return self._has_discontinuity

    @property
    def smoothing_active(self) -> bool:
        return self._smoothing_active

    @property
    def aspect_locked(self) -> bool:
        return self._aspect_locked

    @property
    def interpolation(self) -> InterpolationMode:
        return self._interpolation

    def plot(self, samples: Any, xmin: float, xmax: float) -> bool:
        """Redraw the base curve from ``samples``; returns False if the surface is not laid out yet."""
        if not self._surface.is_ready():
            LOGGER.debug("plot skipped: surface viewport %s is not ready", self._surface.viewport)
            return False

        data = normalize_samples(samples)
        result = segment_samples(data.x, data.y, jump_threshold=self._config.jump_threshold)
        self._scaler.resolve(
            result.y_values(),
            xmin,
            xmax,
            viewport=self._surface.viewport,
            aspect_locked=self._aspect_locked,
        )
        self._segments = result.segments
        self._has_discontinuity = result.has_discontinuity
        self._smoothing_active = self._interpolation is InterpolationMode.SMOOTHED and not result.has_discontinuity
        if self._interpolation is InterpolationMode.SMOOTHED and result.has_discontinuity:
            LOGGER.debug("smoothing disabled for this redraw: samples contain discontinuities")
        self._present()
        return True

    def reset_axes(self) -> None:
        self._scaler.reset()

    def set_aspect_locked(self, locked: bool) -> None:
        self._aspect_locked = bool(locked)

    def set_interpolation_mode(self, mode: InterpolationMode | str) -> None:
        self._interpolation = InterpolationMode.parse(mode)

    def add_tangent(self, x0: float, fx0: float, slope: float, xmin: float, xmax: float) -> TangentOverlay:
        overlay = self._overlays.add_tangent(x0, fx0, slope, xmin, xmax)
        self._present()
        return overlay

    def clear_tangents(self) -> int:
        return self._clear(OverlayKind.TANGENT)

    def add_integral_area(self, samples: Any, a: float, b: float, area_value: float, label: str) -> IntegralOverlay:
        overlay = self._overlays.add_integral_area(samples, a, b, area_value, label)
        self._present()
        return overlay

    def clear_integrals(self) -> int:
        return self._clear(OverlayKind.INTEGRAL)

    def _clear(self, kind: OverlayKind) -> int:
        removed = self._overlays.clear(kind)
        self._present()
        return removed

    def scene(self) -> ChartScene | None:
        bounds = self._scaler.bounds
        if bounds is None:
            return None
        return ChartScene(
            segments=self._segments,
            bounds=bounds,
            overlays=self._overlays.overlays,
            smoothed=self._smoothing_active,
            title=self._config.title,
            style=self._config.style,
        )

    def _present(self) -> None:
        scene = self.scene()
        if scene is None or not self._surface.is_ready():
            return
        self._surface.present(scene)
