from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

import numpy as np
import torch

from simplechart.errors import DegenerateRangeError, EmptySeriesListError, MalformedSeriesError


@dataclass(frozen=True)
class SeriesInput:
    label: str
    color: str | None
    samples: np.ndarray = field(repr=False, compare=False)


@dataclass(frozen=True)
class Series:
    label: str
    color: str
    samples: np.ndarray = field(repr=False, compare=False)
    label_slot: int


@dataclass(frozen=True)
class HighlightPoint:
    series_index: int
    sample_index: int
    domain_value: int


@dataclass(frozen=True)
class Highlight:
    """Points (and optionally one end-of-line label) under the pointer."""

    points: tuple[HighlightPoint, ...]
    label_index: int | None = None

    def series_indices(self) -> frozenset[int]:
        return frozenset(p.series_index for p in self.points)

    def includes_series(self, series_index: int) -> bool:
        return any(p.series_index == series_index for p in self.points)


def domain_length(domain_min: int, domain_max: int) -> int:
    if int(domain_min) != domain_min or int(domain_max) != domain_max:
        raise DegenerateRangeError("domain bounds must be integers")
    if domain_max < domain_min:
        raise DegenerateRangeError(f"empty domain: [{domain_min}, {domain_max}]")
    return int(domain_max) - int(domain_min) + 1


def normalize_series(raw: Sequence[Any], domain_min: int, domain_max: int) -> list[SeriesInput]:
    """Coerce caller series (records or `(label, color, samples)` tuples) into validated inputs."""
    expected = domain_length(domain_min, domain_max)
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise MalformedSeriesError(f"series list must be a sequence, got {type(raw)!r}")
    if len(raw) == 0:
        raise EmptySeriesListError("series list is empty")

    out: list[SeriesInput] = []
    for i, item in enumerate(raw):
        label, color, samples = _unpack(item, index=i)
        arr = _coerce_samples(samples, label=label)
        if arr.size != expected:
            raise MalformedSeriesError(
                f"series {label!r} has {arr.size} samples, expected {expected} for domain [{domain_min}, {domain_max}]"
            )
        if not np.all(np.isfinite(arr)):
            raise MalformedSeriesError(f"series {label!r} contains non-finite samples")
        out.append(SeriesInput(label=label, color=color or None, samples=arr))
    return out


def _unpack(item: Any, *, index: int) -> tuple[str, str | None, Any]:
    if isinstance(item, (SeriesInput, Series)):
        return str(item.label), item.color, item.samples
    if isinstance(item, Sequence) and not isinstance(item, (str, bytes)) and len(item) in (3, 4):
        # a trailing label slot from a previous scene is ignored
        label, color, samples = item[0], item[1], item[2]
        if color is not None and not isinstance(color, str):
            raise MalformedSeriesError(f"series {index} color must be a string")
        return str(label), color, samples
    raise MalformedSeriesError(f"series {index} must be (label, color, samples), got {type(item)!r}")


def _coerce_samples(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise MalformedSeriesError(f"samples of {label!r} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy().copy()

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise MalformedSeriesError(f"samples of {label!r} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise MalformedSeriesError(f"samples of {label!r} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise MalformedSeriesError(f"unsupported samples type for {label!r}: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None or isinstance(raw, (bool, str, bytes)):
            raise MalformedSeriesError(f"series {label!r} contains non-numeric value at index {i}: {raw!r}")
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise MalformedSeriesError(f"series {label!r} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
