from __future__ import annotations

import numpy as np
import torch

from simplechart.surface import FullRewrite, ReplaceRect, WriteBatch


def _check_rgba(frame_rgba: np.ndarray) -> None:
    if frame_rgba.dtype != np.uint8:
        raise ValueError("frame_rgba must be uint8")
    if frame_rgba.ndim != 3 or frame_rgba.shape[2] != 4:
        raise ValueError("frame_rgba must have shape (H, W, 4)")


def compile_full_rewrite_batch(frame_rgba: np.ndarray) -> WriteBatch:
    _check_rgba(frame_rgba)
    tensor = torch.from_numpy(np.ascontiguousarray(frame_rgba))
    return WriteBatch([FullRewrite(tensor)])


def compile_replace_rect_batch(frame_rgba: np.ndarray, x: int, y: int, width: int, height: int) -> WriteBatch:
    _check_rgba(frame_rgba)
    if width <= 0 or height <= 0:
        raise ValueError("rect width/height must be > 0")
    if x < 0 or y < 0:
        raise ValueError("rect x/y must be >= 0")
    if x + width > frame_rgba.shape[1] or y + height > frame_rgba.shape[0]:
        raise ValueError("rect exceeds frame bounds")
    patch = torch.from_numpy(np.ascontiguousarray(frame_rgba[y : y + height, x : x + width]))
    return WriteBatch([ReplaceRect(x=x, y=y, width=width, height=height, rect_h_w_4=patch)])


def changed_rect(previous: np.ndarray, current: np.ndarray) -> tuple[int, int, int, int] | None:
    """Bounding `(x, y, width, height)` of pixels that differ, or `None` for identical frames."""
    if previous.shape != current.shape:
        raise ValueError("frames must share a shape")
    diff = np.any(previous != current, axis=-1)
    rows = np.flatnonzero(np.any(diff, axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(np.any(diff, axis=0))
    y0, y1 = int(rows[0]), int(rows[-1]) + 1
    x0, x1 = int(cols[0]), int(cols[-1]) + 1
    return (x0, y0, x1 - x0, y1 - y0)
