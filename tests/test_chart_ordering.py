from __future__ import annotations

import functools
import unittest

import numpy as np

from simplechart.ordering import compare_series, order_key, order_series


def _arr(*values: float) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


class SeriesOrderingTests(unittest.TestCase):
    def test_first_differing_index_from_top_decides(self) -> None:
        a = _arr(0, 0, 1, 2, 3, 4, 9)
        b = _arr(0, 0, 1, 2, 3, 4, 5)
        self.assertEqual(compare_series(a, b), 1)
        self.assertEqual(compare_series(b, a), -1)

    def test_lower_index_breaks_tie_at_top(self) -> None:
        a = _arr(0, 0, 1, 2, 3, 1, 5)
        b = _arr(0, 0, 1, 2, 3, 4, 5)
        self.assertEqual(compare_series(a, b), -1)

    def test_first_two_samples_never_break_ties(self) -> None:
        a = _arr(-100, 100, 1, 2, 3, 4, 5)
        b = _arr(100, -100, 1, 2, 3, 4, 5)
        self.assertEqual(compare_series(a, b), 0)

    def test_indices_past_scan_window_are_ignored(self) -> None:
        a = _arr(0, 0, 1, 1, 1, 1, 1, 50)
        b = _arr(0, 0, 1, 1, 1, 1, 1, -50)
        self.assertEqual(compare_series(a, b), 0)

    def test_short_series_are_guarded(self) -> None:
        self.assertEqual(compare_series(_arr(1, 2, 3), _arr(1, 2, 4)), -1)
        self.assertEqual(compare_series(_arr(1, 2), _arr(5, 6)), 0)
        self.assertEqual(order_key(_arr(1, 2)), ())

    def test_order_is_ascending_and_stable_on_ties(self) -> None:
        samples = [_arr(9, 9, 5), _arr(0, 0, 1), _arr(1, 1, 5), _arr(0, 0, 3)]
        self.assertEqual(order_series(samples), [1, 3, 0, 2])

    def test_key_order_agrees_with_comparator(self) -> None:
        rng = np.random.default_rng(13)
        for _ in range(50):
            samples = [rng.integers(0, 3, size=8).astype(np.float64) for _ in range(6)]
            order = order_series(samples)
            by_cmp = sorted(
                range(len(samples)),
                key=functools.cmp_to_key(lambda i, j: compare_series(samples[i], samples[j])),
            )
            self.assertEqual(order, by_cmp)
            for first, second in zip(order, order[1:]):
                self.assertLessEqual(compare_series(samples[first], samples[second]), 0)


if __name__ == "__main__":
    unittest.main()
