from __future__ import annotations

from bisect import bisect_left
from collections.abc import Sequence
import logging

from simplechart.errors import ChartInternalError


LOGGER = logging.getLogger(__name__)

Interval = tuple[int, int]


class LabelSlotPacker:
    """Reserves fixed-height vertical label slots without overlap.

    Reserved space is kept as a sorted list of disjoint, non-touching `[start, stop)`
    intervals. Each interval's length is a whole number of slots and the total
    reserved length is always `reservations * slot_height`.
    """

    def __init__(self, slot_height: int, *, iteration_factor: int = 4) -> None:
        if slot_height <= 0:
            raise ValueError("slot_height must be > 0")
        if iteration_factor <= 0:
            raise ValueError("iteration_factor must be > 0")
        self._slot_height = int(slot_height)
        self._iteration_factor = int(iteration_factor)
        self._intervals: list[Interval] = []
        self._count = 0
        self._fallbacks = 0

    @property
    def slot_height(self) -> int:
        return self._slot_height

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return tuple(self._intervals)

    @property
    def fallback_count(self) -> int:
        return self._fallbacks

    def reserve(self, anchor: int) -> None:
        try:
            self._intervals = self._reserve(int(anchor), list(self._intervals))
        except ChartInternalError as exc:
            LOGGER.warning("label packing fell back to sequential stacking: %s", exc)
            self._stack_after_last(int(anchor))
            self._fallbacks += 1
        self._count += 1

    def _reserve(self, anchor: int, intervals: list[Interval]) -> list[Interval]:
        start = anchor
        size = self._slot_height
        limit = self._iteration_factor * (len(intervals) + 1) + 8
        for _ in range(limit):
            stop = start + size
            i = bisect_left(intervals, start, key=lambda iv: iv[1])
            if i == len(intervals) or intervals[i][0] > stop:
                intervals.insert(i, (start, stop))
                return intervals
            lo, hi = intervals[i]
            if lo == stop:
                # touches the next interval's start: grow it upward
                intervals[i] = (start, hi)
                return intervals
            if lo > start:
                # an interval begins inside the request: retry just above it
                start = lo - size
                continue
            # start lies inside [lo, hi]: continue below this interval
            if i + 1 < len(intervals):
                next_lo, next_hi = intervals[i + 1]
                gap = next_lo - hi
                if gap <= size:
                    intervals[i : i + 2] = [(lo, next_hi)]
                    size -= gap
                    if size == 0:
                        return intervals
                    start = next_hi
                    continue
            intervals[i] = (lo, hi + size)
            return intervals
        raise ChartInternalError(f"label reservation at {anchor} exceeded {limit} iterations")

    def _stack_after_last(self, anchor: int) -> None:
        if not self._intervals:
            self._intervals.append((anchor, anchor + self._slot_height))
            return
        lo, hi = self._intervals[-1]
        self._intervals[-1] = (lo, hi + self._slot_height)

    def assign(self, order: Sequence[int]) -> dict[int, int]:
        """Concrete slot top per series, highest priority (end of `order`) placed topmost."""
        if len(order) != self._count:
            raise ChartInternalError(f"{len(order)} series for {self._count} reservations")
        slots: dict[int, int] = {}
        intervals = sorted(self._intervals)
        idx = -1
        cursor = 0
        stop = 0
        for series_index in reversed(order):
            while cursor + self._slot_height > stop:
                idx += 1
                if idx >= len(intervals):
                    raise ChartInternalError("reserved label space exhausted")
                cursor, stop = intervals[idx]
            slots[series_index] = cursor
            cursor += self._slot_height
        return slots


def lift_into_band(slots: dict[int, int], bottom_limit: int, slot_height: int) -> dict[int, int]:
    """Slide slots that run past `bottom_limit` upward, pushing the runs above them along.

    Relative order and spacing of at least `slot_height` are kept; slots already inside
    the band and clear of the lifted run do not move.
    """
    lifted = dict(slots)
    ceiling = bottom_limit
    for series_index in sorted(lifted, key=lambda s: lifted[s], reverse=True):
        lifted[series_index] = min(lifted[series_index], ceiling - slot_height)
        ceiling = lifted[series_index]
    return lifted


def pack_label_slots(
    anchors: Sequence[int],
    order: Sequence[int],
    slot_height: int,
    *,
    iteration_factor: int = 4,
    bottom_limit: int | None = None,
) -> list[int]:
    """Label slot top for each series (by input index); `anchors` are indexed by input index too.

    With `bottom_limit` set, no slot extends past it.
    """
    packer = LabelSlotPacker(slot_height, iteration_factor=iteration_factor)
    for series_index in order:
        packer.reserve(anchors[series_index])
    slots = packer.assign(order)
    if bottom_limit is not None:
        slots = lift_into_band(slots, bottom_limit, slot_height)
    return [slots[i] for i in range(len(anchors))]
