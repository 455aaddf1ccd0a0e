from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TypeAlias

import torch

from simplechart.errors import ChartConfigurationError, MissingContainerError


LOGGER = logging.getLogger(__name__)

TensorLike: TypeAlias = torch.Tensor


@dataclass(frozen=True)
class FullRewrite:
    tensor_h_w_4: TensorLike


@dataclass(frozen=True)
class ReplaceRect:
    x: int
    y: int
    width: int
    height: int
    rect_h_w_4: TensorLike


WriteOp: TypeAlias = FullRewrite | ReplaceRect


@dataclass(frozen=True)
class WriteBatch:
    operations: list[WriteOp]


class ChartSurface:
    """RGBA255 drawing surface with atomic write-batch commits."""

    def __init__(self, width: int, height: int, background: tuple[int, int, int, int] = (255, 255, 255, 255)) -> None:
        if width <= 0 or height <= 0:
            raise ChartConfigurationError("width and height must be > 0")
        self.width = int(width)
        self.height = int(height)
        self._revision = 0
        bg = torch.tensor(background, dtype=torch.uint8).view(1, 1, 4)
        self._matrix = bg.expand(self.height, self.width, 4).clone()

    @property
    def revision(self) -> int:
        return self._revision

    def read_snapshot(self) -> torch.Tensor:
        return self._matrix.clone()

    def submit_write_batch(self, batch: WriteBatch) -> int:
        if not batch.operations:
            raise ValueError("write batch must include at least one operation")
        staged = self._matrix.clone()
        offending = 0
        for op in batch.operations:
            staged, op_offending = self._apply_operation(staged, op)
            offending += op_offending
        if offending > 0:
            LOGGER.warning("surface write batch clamped invalid RGBA channels; offending_pixels=%d", offending)
        self._matrix = staged
        self._revision += 1
        return self._revision

    def _apply_operation(self, matrix: torch.Tensor, op: WriteOp) -> tuple[torch.Tensor, int]:
        if isinstance(op, FullRewrite):
            return _sanitize_rgba_tensor(op.tensor_h_w_4, (self.height, self.width, 4))
        if isinstance(op, ReplaceRect):
            if op.width <= 0 or op.height <= 0:
                raise ValueError("rect width/height must be > 0")
            if op.x < 0 or op.y < 0 or op.x + op.width > self.width or op.y + op.height > self.height:
                raise ValueError("rect exceeds surface bounds")
            patch, offending = _sanitize_rgba_tensor(op.rect_h_w_4, (op.height, op.width, 4))
            matrix[op.y : op.y + op.height, op.x : op.x + op.width, :] = patch
            return matrix, offending
        raise TypeError(f"Unsupported write op: {type(op)!r}")


def _sanitize_rgba_tensor(tensor: TensorLike, shape: tuple[int, ...]) -> tuple[torch.Tensor, int]:
    if not isinstance(tensor, torch.Tensor):
        raise TypeError("write payload must be a torch.Tensor")
    if tuple(tensor.shape) != shape:
        raise ValueError(f"expected shape {shape}, got {tuple(tensor.shape)}")
    if tensor.dtype == torch.uint8:
        return tensor.clone(), 0
    values = tensor.to(torch.float32)
    invalid = ~torch.isfinite(values) | (values < 0) | (values > 255)
    offending = int(invalid.any(dim=-1).sum().item())
    values = torch.nan_to_num(values, nan=0.0, posinf=255.0, neginf=0.0)
    return torch.clamp(torch.round(values), 0, 255).to(torch.uint8), offending


class ChartContainer:
    """Host-side container that charts attach their surfaces to."""

    def __init__(self, handle: str) -> None:
        self.handle = handle
        self._surfaces: list[ChartSurface] = []

    @property
    def surfaces(self) -> tuple[ChartSurface, ...]:
        return tuple(self._surfaces)

    def attach(self, surface: ChartSurface) -> None:
        self._surfaces.append(surface)


class ContainerRegistry:
    def __init__(self) -> None:
        self._containers: dict[str, ChartContainer] = {}

    def register(self, handle: str) -> ChartContainer:
        if not handle or not isinstance(handle, str):
            raise ChartConfigurationError("container handle must be a non-empty string")
        container = self._containers.get(handle)
        if container is None:
            container = ChartContainer(handle)
            self._containers[handle] = container
        return container

    def unregister(self, handle: str) -> None:
        self._containers.pop(handle, None)

    def resolve(self, handle: str) -> ChartContainer:
        container = self._containers.get(handle) if isinstance(handle, str) else None
        if container is None:
            raise MissingContainerError(f"Could not find container {handle!r}")
        return container


DEFAULT_REGISTRY = ContainerRegistry()
