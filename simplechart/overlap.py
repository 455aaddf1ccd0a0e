from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
import math

import numpy as np

from simplechart.errors import ChartInternalError


@dataclass(frozen=True)
class DashPattern:
    """One dash cycle of a segment; the line is drawn ("on") only inside `[on_start, on_stop)`."""

    cycle: float
    on_start: float
    on_stop: float

    @property
    def starts_on(self) -> bool:
        return self.on_start <= 0.0

    def phases(self) -> tuple[float, ...]:
        """Alternating run lengths for one cycle, beginning with "on" when `starts_on`.

        A window at the start of the cycle gives `(on, off)`, one at the end gives
        `(off, on)` and an interior window gives `(off, on, off)`.
        """
        on = self.on_stop - self.on_start
        if self.on_start <= 0.0:
            return (on, self.cycle - on)
        if self.on_stop >= self.cycle:
            return (self.on_start, on)
        return (self.on_start, on, self.cycle - self.on_stop)

    def is_on(self, distance: float) -> bool:
        pos = math.fmod(distance, self.cycle)
        if pos < 0:
            pos += self.cycle
        return self.on_start <= pos < self.on_stop


class DisjointSet:
    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> None:
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1

    def groups(self) -> list[tuple[int, ...]]:
        members: dict[int, list[int]] = {}
        for item in range(len(self._parent)):
            members.setdefault(self.find(item), []).append(item)
        return sorted((tuple(m) for m in members.values()), key=lambda g: g[0])


def _close(a: float, b: float, tolerance: float) -> bool:
    return abs(a - b) <= tolerance * max(abs(a), abs(b))


def segments_overlap(
    a_left: float,
    a_right: float,
    b_left: float,
    b_right: float,
    tolerance: float = 0.01,
) -> bool:
    """Relative-tolerance coincidence at both segment endpoints."""
    return _close(a_left, b_left, tolerance) and _close(a_right, b_right, tolerance)


def overlap_groups(lines: np.ndarray, segment: int, tolerance: float = 0.01) -> list[tuple[int, ...]]:
    """Transitively closed overlap groups (size >= 2) of series on one segment."""
    count = lines.shape[0]
    left = lines[:, segment].astype(np.float64)
    right = lines[:, segment + 1].astype(np.float64)
    sets = DisjointSet(count)
    for a in range(count):
        for b in range(a + 1, count):
            if segments_overlap(left[a], right[a], left[b], right[b], tolerance):
                sets.union(a, b)
    partition = sets.groups()
    _check_partition(partition, count)
    return [g for g in partition if len(g) > 1]


def _check_partition(groups: Iterable[tuple[int, ...]], count: int) -> None:
    seen: set[int] = set()
    for group in groups:
        for member in group:
            if member in seen or not 0 <= member < count:
                raise ChartInternalError(f"overlap grouping is not a partition (member {member})")
            seen.add(member)
    if len(seen) != count:
        raise ChartInternalError(f"overlap grouping covers {len(seen)} of {count} series")


def synthesize_dashes(
    group: tuple[int, ...],
    segment_length: float,
    *,
    cycles_per_segment: int = 4,
    min_cycle: float = 4.0,
) -> dict[int, DashPattern]:
    """Split one dash cycle into equal windows, one per group member in group order."""
    n = len(group)
    cycle = max(min_cycle, float(n), segment_length / cycles_per_segment)
    sub = cycle / n
    out: dict[int, DashPattern] = {}
    for ordinal, series_index in enumerate(group):
        on_start = 0.0 if ordinal == 0 else ordinal * sub
        on_stop = cycle if ordinal == n - 1 else (ordinal + 1) * sub
        out[series_index] = DashPattern(cycle=cycle, on_start=on_start, on_stop=on_stop)
    return out


def analyze_overlaps(
    lines: np.ndarray,
    x_index: np.ndarray,
    *,
    tolerance: float = 0.01,
    cycles_per_segment: int = 4,
    min_cycle: float = 4.0,
) -> tuple[tuple[DashPattern | None, ...], ...]:
    """Dash pattern per `[series][segment]`; `None` is a solid segment."""
    count, samples = lines.shape if lines.ndim == 2 else (0, 0)
    segments = max(0, samples - 1)
    table: list[list[DashPattern | None]] = [[None] * segments for _ in range(count)]
    for segment in range(segments):
        groups = overlap_groups(lines, segment, tolerance)
        if not groups:
            continue
        dx = float(x_index[segment + 1] - x_index[segment])
        for group in groups:
            # the group shares (approximately) one geometry; size the cycle off its first member
            lead = group[0]
            dy = float(lines[lead, segment + 1] - lines[lead, segment])
            patterns = synthesize_dashes(
                group,
                math.hypot(dx, dy),
                cycles_per_segment=cycles_per_segment,
                min_cycle=min_cycle,
            )
            for series_index, pattern in patterns.items():
                table[series_index][segment] = pattern
    return tuple(tuple(row) for row in table)
