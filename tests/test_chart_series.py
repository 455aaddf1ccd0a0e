from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np
import torch

from simplechart.errors import DegenerateRangeError, EmptySeriesListError, MalformedSeriesError
from simplechart.series import Highlight, HighlightPoint, SeriesInput, normalize_series


class NormalizeSeriesTests(unittest.TestCase):
    def test_tuples_are_coerced_to_float_arrays(self) -> None:
        out = normalize_series([("a", "", [1, 2, 3]), ("b", "#00C", (4.5, 5.0, 6.0))], 0, 2)
        self.assertEqual([s.label for s in out], ["a", "b"])
        self.assertIsNone(out[0].color)
        self.assertEqual(out[1].color, "#00C")
        self.assertEqual(out[0].samples.dtype, np.float64)
        self.assertEqual(out[1].samples.tolist(), [4.5, 5.0, 6.0])

    def test_decimal_torch_and_record_inputs(self) -> None:
        out = normalize_series(
            [
                ("dec", None, [Decimal("1.5"), Decimal("2.25")]),
                ("torch", None, torch.tensor([1, 2], dtype=torch.int64)),
                SeriesInput(label="rec", color=None, samples=np.asarray([7, 8])),
            ],
            10,
            11,
        )
        self.assertEqual(out[0].samples.tolist(), [1.5, 2.25])
        self.assertEqual(out[1].samples.tolist(), [1.0, 2.0])
        self.assertEqual(out[2].samples.tolist(), [7.0, 8.0])

    def test_normalized_samples_do_not_alias_caller_arrays(self) -> None:
        raw = np.asarray([1.0, 2.0])
        out = normalize_series([("a", "", raw)], 0, 1)
        raw[0] = 99.0
        self.assertEqual(out[0].samples.tolist(), [1.0, 2.0])

    def test_length_mismatch_is_malformed(self) -> None:
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("a", "", [1, 2, 3]), ("b", "", [1, 2])], 0, 2)

    def test_non_numeric_and_non_finite_samples_are_malformed(self) -> None:
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("a", "", [1, None, 3])], 0, 2)
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("a", "", [1, "x", 3])], 0, 2)
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("a", "", [1.0, float("nan"), 3.0])], 0, 2)
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("a", "", [[1, 2], [3, 4]])], 0, 3)

    def test_bad_record_shape_is_malformed(self) -> None:
        with self.assertRaises(MalformedSeriesError):
            normalize_series([("only-label",)], 0, 0)

    def test_empty_series_list(self) -> None:
        with self.assertRaises(EmptySeriesListError):
            normalize_series([], 0, 2)

    def test_inverted_domain(self) -> None:
        with self.assertRaises(DegenerateRangeError):
            normalize_series([("a", "", [1, 2])], 3, 1)


class HighlightTests(unittest.TestCase):
    def test_highlight_equality_and_membership(self) -> None:
        a = Highlight(points=(HighlightPoint(0, 1, 1), HighlightPoint(2, 1, 1)))
        b = Highlight(points=(HighlightPoint(0, 1, 1), HighlightPoint(2, 1, 1)))
        self.assertEqual(a, b)
        self.assertTrue(a.includes_series(2))
        self.assertFalse(a.includes_series(1))
        self.assertEqual(a.series_indices(), frozenset({0, 2}))
        self.assertNotEqual(a, Highlight(points=a.points, label_index=0))


if __name__ == "__main__":
    unittest.main()
