from __future__ import annotations

from decimal import Decimal
import math
import unittest

import numpy as np
import torch

from funcplot.errors import ChartError, SampleDataError
from funcplot.samples import SampleArrays, normalize_samples


class NormalizeSamplesTests(unittest.TestCase):
    def test_pairs_become_float64_columns(self) -> None:
        data = normalize_samples([(0, 1), (1, 2.5), (2, -3)])
        self.assertEqual(data.x.dtype, np.float64)
        self.assertEqual(data.x.tolist(), [0.0, 1.0, 2.0])
        self.assertEqual(data.y.tolist(), [1.0, 2.5, -3.0])
        self.assertEqual(len(data), 3)

    def test_none_means_undefined(self) -> None:
        data = normalize_samples([(0.0, 1.0), (1.0, None)])
        self.assertTrue(math.isnan(data.y[1]))
        self.assertEqual(data.finite_mask.tolist(), [True, False])

    def test_decimal_values_are_accepted(self) -> None:
        data = normalize_samples([(Decimal("0.5"), Decimal("1.25"))])
        self.assertEqual(data.pairs(), [(0.5, 1.25)])

    def test_tensor_and_ndarray_inputs(self) -> None:
        arr = np.array([[0.0, 1.0], [1.0, np.inf]])
        from_arr = normalize_samples(arr)
        from_tensor = normalize_samples(torch.tensor([[0.0, 1.0], [1.0, float("inf")]]))
        self.assertEqual(from_arr.x.tolist(), from_tensor.x.tolist())
        self.assertTrue(math.isinf(from_tensor.y[1]))

    def test_separate_columns(self) -> None:
        data = normalize_samples(x=torch.arange(3), y=[0.0, None, 4.0])
        self.assertEqual(data.x.tolist(), [0.0, 1.0, 2.0])
        self.assertTrue(math.isnan(data.y[1]))

    def test_existing_arrays_pass_through(self) -> None:
        data = normalize_samples([(1.0, 2.0)])
        self.assertIs(normalize_samples(data), data)

    def test_empty_inputs(self) -> None:
        self.assertEqual(len(normalize_samples([])), 0)
        self.assertEqual(len(normalize_samples()), 0)
        self.assertEqual(len(normalize_samples(np.empty((0, 2)))), 0)
        self.assertIsInstance(normalize_samples(), SampleArrays)

    def test_rejects_bad_shapes(self) -> None:
        with self.assertRaises(SampleDataError):
            normalize_samples(np.zeros((3, 3)))
        with self.assertRaises(SampleDataError):
            normalize_samples([1.0, 2.0, 3.0])
        with self.assertRaises(SampleDataError):
            normalize_samples(x=[1.0, 2.0], y=[1.0])
        with self.assertRaises(SampleDataError):
            normalize_samples(x=[1.0])

    def test_rejects_strings(self) -> None:
        with self.assertRaises(SampleDataError):
            normalize_samples([(0.0, "1.0")])
        with self.assertRaises(SampleDataError):
            normalize_samples("0,1")

    def test_sample_errors_are_chart_and_value_errors(self) -> None:
        with self.assertRaises(ChartError):
            normalize_samples([(0.0, object())])
        with self.assertRaises(ValueError):
            normalize_samples([(0.0, object())])


if __name__ == "__main__":
    unittest.main()
