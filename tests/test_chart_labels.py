from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from simplechart.errors import ChartInternalError
from simplechart.labels import LabelSlotPacker, lift_into_band, pack_label_slots


H = 14


def _assert_disjoint(test: unittest.TestCase, slots: list[int], height: int) -> None:
    ordered = sorted(slots)
    for upper, lower in zip(ordered, ordered[1:]):
        test.assertGreaterEqual(lower - upper, height)


class LabelSlotPackerTests(unittest.TestCase):
    def test_free_anchor_is_reserved_in_place(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(100)
        self.assertEqual(packer.intervals, ((100, 114),))
        self.assertEqual(packer.assign([0]), {0: 100})

    def test_request_touching_interval_start_grows_it_upward(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(100)
        packer.reserve(86)
        self.assertEqual(packer.intervals, ((86, 114),))

    def test_request_inside_interval_shifts_below_it(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(100)
        packer.reserve(105)
        self.assertEqual(packer.intervals, ((100, 128),))

    def test_request_straddling_interval_start_shifts_above_it(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(100)
        packer.reserve(90)
        self.assertEqual(packer.intervals, ((86, 114),))

    def test_shift_into_narrow_gap_folds_neighbours(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(0)
        packer.reserve(20)
        self.assertEqual(packer.intervals, ((0, 14), (20, 34)))
        packer.reserve(10)
        self.assertEqual(packer.intervals, ((0, 42),))

    def test_exact_gap_is_filled(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(0)
        packer.reserve(28)
        packer.reserve(5)
        self.assertEqual(packer.intervals, ((0, 42),))

    def test_reserved_length_is_whole_slots(self) -> None:
        rng = np.random.default_rng(21)
        for _ in range(100):
            packer = LabelSlotPacker(H)
            anchors = rng.integers(0, 200, size=int(rng.integers(1, 25)))
            for anchor in anchors.tolist():
                packer.reserve(anchor)
            total = sum(hi - lo for lo, hi in packer.intervals)
            self.assertEqual(total, anchors.size * H)
            for (lo, hi), (next_lo, _) in zip(packer.intervals, packer.intervals[1:]):
                self.assertGreater(next_lo, hi)
            for lo, hi in packer.intervals:
                self.assertEqual((hi - lo) % H, 0)

    def test_iteration_cap_falls_back_to_sequential_stacking(self) -> None:
        packer = LabelSlotPacker(H)
        with mock.patch.object(LabelSlotPacker, "_reserve", side_effect=ChartInternalError("cap")):
            with self.assertLogs("simplechart.labels", level="WARNING"):
                packer.reserve(50)
                packer.reserve(50)
        self.assertEqual(packer.intervals, ((50, 78),))
        self.assertEqual(packer.fallback_count, 2)
        self.assertEqual(sorted(packer.assign([0, 1]).values()), [50, 64])

    def test_assign_rejects_mismatched_series_count(self) -> None:
        packer = LabelSlotPacker(H)
        packer.reserve(10)
        with self.assertRaises(ChartInternalError):
            packer.assign([0, 1])


class PackLabelSlotsTests(unittest.TestCase):
    def test_clustered_anchors_stack_top_priority_first(self) -> None:
        slots = pack_label_slots([100, 100, 100], [0, 1, 2], H)
        self.assertEqual(slots, [128, 114, 100])

    def test_slots_follow_distinct_anchors(self) -> None:
        slots = pack_label_slots([200, 40], [0, 1], H)
        self.assertEqual(slots, [200, 40])

    def test_slots_never_overlap_and_packing_is_idempotent(self) -> None:
        rng = np.random.default_rng(99)
        for _ in range(200):
            n = int(rng.integers(1, 30))
            center = int(rng.integers(0, 300))
            anchors = (center + rng.integers(-20, 20, size=n)).tolist()
            order = rng.permutation(n).tolist()
            first = pack_label_slots(anchors, order, H)
            second = pack_label_slots(anchors, order, H)
            self.assertEqual(first, second)
            self.assertEqual(len(first), n)
            _assert_disjoint(self, first, H)


class BottomLimitTests(unittest.TestCase):
    def test_labels_pushed_past_the_bottom_are_lifted(self) -> None:
        self.assertEqual(pack_label_slots([286, 286], [0, 1], H), [300, 286])
        self.assertEqual(pack_label_slots([286, 286], [0, 1], H, bottom_limit=300), [286, 272])

    def test_lift_only_moves_the_overflowing_run(self) -> None:
        lifted = lift_into_band({0: 300, 1: 286, 2: 100, 3: 258}, 300, H)
        self.assertEqual(lifted, {0: 286, 1: 272, 2: 100, 3: 258})

    def test_lifted_run_pushes_touching_neighbours_up(self) -> None:
        lifted = lift_into_band({0: 300, 1: 286, 2: 272}, 300, H)
        self.assertEqual(lifted, {0: 286, 1: 272, 2: 258})

    def test_slots_stay_inside_the_band(self) -> None:
        rng = np.random.default_rng(21)
        for _ in range(200):
            count = int(rng.integers(1, 12))
            anchors = [int(v) for v in rng.integers(200, 287, size=count)]
            order = [int(v) for v in rng.permutation(count)]
            slots = pack_label_slots(anchors, order, H, bottom_limit=300)
            for slot in slots:
                self.assertLessEqual(slot + H, 300)
            _assert_disjoint(self, slots, H)


if __name__ == "__main__":
    unittest.main()
