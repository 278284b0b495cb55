from __future__ import annotations

import unittest

import numpy as np

from funcplot.interpolation import InterpolationMode, canonical_spline


class CanonicalSplineTests(unittest.TestCase):
    def test_curve_passes_through_every_sample(self) -> None:
        x = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
        y = np.array([0.0, 1.0, 0.0, -1.0, 0.0])
        sx, sy = canonical_spline(x, y, steps=6)
        self.assertEqual(sx.size, 4 * 6 + 1)
        np.testing.assert_allclose(sx[::6], x)
        np.testing.assert_allclose(sy[::6], y)

    def test_straight_line_stays_straight(self) -> None:
        x = np.linspace(0.0, 5.0, 6)
        sx, sy = canonical_spline(x, 2.0 * x + 1.0)
        np.testing.assert_allclose(sy, 2.0 * sx + 1.0, atol=1e-12)

    def test_short_inputs_pass_through(self) -> None:
        x = np.array([0.0, 1.0])
        y = np.array([3.0, 4.0])
        sx, sy = canonical_spline(x, y)
        np.testing.assert_array_equal(sx, x)
        np.testing.assert_array_equal(sy, y)
        self.assertIsNot(sx, x)

    def test_rejects_mismatched_inputs(self) -> None:
        with self.assertRaises(ValueError):
            canonical_spline(np.zeros(3), np.zeros(4))
        with self.assertRaises(ValueError):
            canonical_spline(np.zeros(3), np.zeros(3), steps=0)


class InterpolationModeTests(unittest.TestCase):
    def test_parse_accepts_names_case_insensitively(self) -> None:
        self.assertIs(InterpolationMode.parse("Smoothed"), InterpolationMode.SMOOTHED)
        self.assertIs(InterpolationMode.parse(" linear "), InterpolationMode.LINEAR)
        self.assertIs(InterpolationMode.parse(InterpolationMode.LINEAR), InterpolationMode.LINEAR)

    def test_parse_rejects_unknown(self) -> None:
        with self.assertRaises(ValueError):
            InterpolationMode.parse("bezier")


if __name__ == "__main__":
    unittest.main()
