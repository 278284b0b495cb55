from __future__ import annotations

from dataclasses import dataclass, field
import math
import unittest

import numpy as np

from funcplot.axis_state import AxisState
from funcplot.chart import Chart
from funcplot.config import ChartConfig
from funcplot.interpolation import InterpolationMode
from funcplot.overlays import IntegralOverlay, TangentOverlay
from funcplot.scene import ChartScene


@dataclass
class _RecordingSurface:
    width: int = 800
    height: int = 600
    scenes: list[ChartScene] = field(default_factory=list)

    @property
    def viewport(self) -> tuple[int, int]:
        return (self.width, self.height)

    def is_ready(self) -> bool:
        return self.width > 1 and self.height > 1

    def present(self, scene: ChartScene) -> None:
        self.scenes.append(scene)


def _line(n: int = 11) -> list[tuple[float, float]]:
    return [(float(i), float(i) * 0.5) for i in range(n)]


class ChartPlotTests(unittest.TestCase):
    def test_plot_segments_scales_and_presents(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        self.assertTrue(chart.plot(_line(), 0.0, 10.0))
        self.assertEqual(len(chart.segments), 1)
        self.assertIs(chart.axis_state, AxisState.SCALED)
        self.assertEqual(len(surface.scenes), 1)
        scene = surface.scenes[0]
        self.assertEqual(scene.bounds, chart.bounds)
        self.assertEqual(scene.segments, chart.segments)

    def test_axis_bounds_frozen_across_plots(self) -> None:
        chart = Chart(_RecordingSurface())
        chart.plot(_line(), 0.0, 10.0)
        before = chart.bounds
        chart.plot([(x, x * x) for x in np.linspace(-3.0, 3.0, 31).tolist()], -3.0, 3.0)
        self.assertEqual(chart.bounds, before)

    def test_reset_axes_rescales_on_next_plot(self) -> None:
        chart = Chart(_RecordingSurface())
        chart.plot(_line(), 0.0, 10.0)
        before = chart.bounds
        chart.reset_axes()
        self.assertIs(chart.axis_state, AxisState.UNSCALED)
        self.assertIsNone(chart.bounds)
        chart.plot([(-1.0, 2.0), (1.0, 2.0)], -1.0, 1.0)
        self.assertNotEqual(chart.bounds, before)
        self.assertEqual((chart.bounds.ymin, chart.bounds.ymax), (1.0, 3.0))

    def test_plot_is_noop_on_unready_viewport(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        chart.plot(_line(), 0.0, 10.0)
        bounds = chart.bounds
        segments = chart.segments
        surface.width = 1
        self.assertFalse(chart.plot([(0.0, 100.0), (1.0, math.nan)], -50.0, 50.0))
        self.assertEqual(chart.bounds, bounds)
        self.assertIs(chart.segments, segments)
        self.assertEqual(len(surface.scenes), 1)

    def test_plot_before_layout_computes_nothing(self) -> None:
        surface = _RecordingSurface(width=0, height=0)
        chart = Chart(surface)
        self.assertFalse(chart.plot(_line(), 0.0, 10.0))
        self.assertIs(chart.axis_state, AxisState.UNSCALED)
        self.assertEqual(chart.segments, ())

    def test_undrawable_range_leaves_chart_untouched(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        with self.assertRaises(ValueError):
            chart.plot([(0.0, 1.0), (1.0, 2.0)], -1e308, 1e308)
        self.assertIs(chart.axis_state, AxisState.UNSCALED)
        self.assertEqual(chart.segments, ())
        self.assertEqual(surface.scenes, [])

        self.assertTrue(chart.plot(_line(), 0.0, 10.0))
        bounds = chart.bounds
        segments = chart.segments
        chart.reset_axes()
        with self.assertRaises(ValueError):
            chart.plot(_line(), 1e308, -1e308)
        self.assertIsNone(chart.bounds)
        self.assertIs(chart.segments, segments)
        self.assertTrue(chart.plot(_line(), 0.0, 10.0))
        self.assertEqual(chart.bounds, bounds)

    def test_empty_plot_uses_default_scale(self) -> None:
        chart = Chart(_RecordingSurface())
        self.assertTrue(chart.plot([], -2.0, 2.0))
        self.assertEqual(chart.segments, ())
        self.assertEqual((chart.bounds.ymin, chart.bounds.ymax), (-1.0, 1.0))

    def test_aspect_lock_uses_surface_viewport(self) -> None:
        chart = Chart(_RecordingSurface(width=800, height=400), config=ChartConfig(padding_ratio=0.0))
        chart.set_aspect_locked(True)
        chart.plot([(0.0, 0.0), (10.0, 2.0)], 0.0, 10.0)
        self.assertAlmostEqual(chart.bounds.y_range, 5.0)
        self.assertAlmostEqual(chart.bounds.y_mid, 1.0)


class ChartSmoothingTests(unittest.TestCase):
    def test_smoothing_active_for_continuous_data(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        chart.set_interpolation_mode("smoothed")
        chart.plot(_line(), 0.0, 10.0)
        self.assertIs(chart.interpolation, InterpolationMode.SMOOTHED)
        self.assertTrue(chart.smoothing_active)
        self.assertTrue(surface.scenes[-1].smoothed)

    def test_discontinuity_disables_smoothing_for_that_redraw_only(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface, config=ChartConfig(interpolation=InterpolationMode.SMOOTHED))
        chart.plot([(0.0, 0.0), (1.0, math.nan), (2.0, 0.0), (3.0, 1.0)], 0.0, 3.0)
        self.assertTrue(chart.has_discontinuity)
        self.assertFalse(chart.smoothing_active)
        self.assertFalse(surface.scenes[-1].smoothed)

        chart.plot(_line(), 0.0, 10.0)
        self.assertFalse(chart.has_discontinuity)
        self.assertTrue(chart.smoothing_active)

    def test_linear_mode_never_smooths(self) -> None:
        chart = Chart(_RecordingSurface())
        chart.plot(_line(), 0.0, 10.0)
        self.assertFalse(chart.smoothing_active)

    def test_rejects_unknown_interpolation_mode(self) -> None:
        chart = Chart(_RecordingSurface())
        with self.assertRaises(ValueError):
            chart.set_interpolation_mode("cubic")


class ChartOverlayTests(unittest.TestCase):
    def test_overlays_survive_base_redraw(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        chart.plot(_line(), 0.0, 10.0)
        tangent = chart.add_tangent(2.0, 1.0, 0.5, 0.0, 10.0)
        area = chart.add_integral_area(_line(), 2.0, 4.0, 3.0, "x/2")
        chart.plot(_line(5), 0.0, 10.0)
        self.assertEqual(chart.overlays, (tangent, area))
        self.assertEqual(surface.scenes[-1].overlays, (tangent, area))

    def test_overlays_do_not_touch_bounds_or_segments(self) -> None:
        chart = Chart(_RecordingSurface())
        chart.plot(_line(), 0.0, 10.0)
        bounds = chart.bounds
        segments = chart.segments
        chart.add_tangent(5.0, 100.0, 40.0, 0.0, 10.0)
        chart.add_integral_area([(0.0, 500.0), (1.0, 500.0)], 0.0, 1.0, 500.0, "500")
        self.assertEqual(chart.bounds, bounds)
        self.assertIs(chart.segments, segments)

    def test_clear_by_kind_is_independent(self) -> None:
        chart = Chart(_RecordingSurface())
        chart.plot(_line(), 0.0, 10.0)
        chart.add_tangent(2.0, 1.0, 0.5, 0.0, 10.0)
        self.assertEqual(chart.clear_integrals(), 0)
        self.assertEqual(len(chart.overlays), 1)
        self.assertIsInstance(chart.overlays[0], TangentOverlay)

        chart.add_integral_area(_line(), 0.0, 2.0, 1.0, "x/2")
        self.assertEqual(chart.clear_tangents(), 1)
        self.assertEqual(len(chart.overlays), 1)
        self.assertIsInstance(chart.overlays[0], IntegralOverlay)

    def test_overlay_calls_repaint_once_axes_exist(self) -> None:
        surface = _RecordingSurface()
        chart = Chart(surface)
        chart.add_tangent(0.0, 0.0, 1.0, -1.0, 1.0)
        self.assertEqual(surface.scenes, [])
        self.assertEqual(len(chart.overlays), 1)

        chart.plot(_line(), 0.0, 10.0)
        chart.clear_tangents()
        self.assertEqual(len(surface.scenes), 2)
        self.assertEqual(surface.scenes[-1].overlays, ())


if __name__ == "__main__":
    unittest.main()
