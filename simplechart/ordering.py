from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def _scan_indices(length_a: int, length_b: int, top_index: int, bottom_index: int) -> range:
    # series shorter than the scan window only contribute the indices they have
    start = min(top_index, length_a - 1, length_b - 1)
    return range(start, bottom_index - 1, -1)


def compare_series(a: np.ndarray, b: np.ndarray, *, top_index: int = 6, bottom_index: int = 2) -> int:
    """Three-way compare on the first differing sample scanned from `top_index` down to `bottom_index`.

    Indices below `bottom_index` never break ties; series equal across the window compare equal.
    """
    for i in _scan_indices(a.size, b.size, top_index, bottom_index):
        av = float(a[i])
        bv = float(b[i])
        if av < bv:
            return -1
        if av > bv:
            return 1
    return 0


def order_key(samples: np.ndarray, *, top_index: int = 6, bottom_index: int = 2) -> tuple[float, ...]:
    start = min(top_index, samples.size - 1)
    return tuple(float(samples[i]) for i in range(start, bottom_index - 1, -1))


def order_series(samples: Sequence[np.ndarray], *, top_index: int = 6, bottom_index: int = 2) -> list[int]:
    """Series indices in label-stacking priority order (ascending by scanned values).

    All series of one scene share a length, so the tuple key orders exactly like
    `compare_series`. The sort is stable: ties keep input order.
    """
    keys = [order_key(s, top_index=top_index, bottom_index=bottom_index) for s in samples]
    return sorted(range(len(keys)), key=lambda i: keys[i])
