from __future__ import annotations

import math

from simplechart.scene import Scene
from simplechart.series import Highlight, HighlightPoint


def in_label_gutter(scene: Scene, px: float) -> bool:
    return px >= scene.area.right + scene.padding.base


def hit_label(scene: Scene, py: float) -> Highlight | None:
    last = scene.last_sample_index
    for s, series in enumerate(scene.series):
        if series.label_slot <= py < series.label_slot + scene.slot_height:
            point = HighlightPoint(series_index=s, sample_index=last, domain_value=scene.domain_max)
            return Highlight(points=(point,), label_index=s)
    return None


def nearest_column(scene: Scene, px: float) -> int | None:
    """First sample index whose pixel column is within padding of `px`."""
    tolerance = scene.padding.base
    for i, col in enumerate(scene.x_index.tolist()):
        if abs(px - col) < tolerance:
            return i
    return None


def hit_test(scene: Scene, px: float, py: float) -> Highlight | None:
    """Highlight under surface coordinates `(px, py)`, or `None` when nothing is hit."""
    if not (math.isfinite(px) and math.isfinite(py)):
        return None
    if in_label_gutter(scene, px):
        hit = hit_label(scene, py)
        if hit is not None:
            return hit

    sample_index = nearest_column(scene, px)
    if sample_index is None:
        return None

    tolerance = scene.padding.base
    column = scene.lines[:, sample_index].tolist()
    points = tuple(
        HighlightPoint(series_index=s, sample_index=sample_index, domain_value=scene.domain_min + sample_index)
        for s, y in enumerate(column)
        if abs(py - y) < tolerance
    )
    if not points:
        return None
    return Highlight(points=points)
