from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

import numpy as np
import torch

from funcplot.errors import SampleDataError


@dataclass(frozen=True)
class SampleArrays:
    """Aligned float64 ``x``/``y`` arrays; ``y`` may hold NaN or +/-inf."""

    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def finite_mask(self) -> np.ndarray:
        return np.isfinite(self.x) & np.isfinite(self.y)

    def pairs(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist()))


def empty_samples() -> SampleArrays:
    return SampleArrays(x=np.empty(0, dtype=np.float64), y=np.empty(0, dtype=np.float64))


def normalize_samples(samples: Any = None, *, x: Any = None, y: Any = None) -> SampleArrays:
    """Coerce ``(x, y)`` pairs or separate ``x``/``y`` columns into float64 arrays.

    ``samples`` may be a sequence of pairs, an ``(N, 2)`` ndarray or tensor, or
    an existing :class:`SampleArrays`. Alternatively pass ``x=`` and ``y=``.
    """
    if isinstance(samples, SampleArrays):
        return samples
    if samples is not None:
        if x is not None or y is not None:
            raise SampleDataError("pass either samples or x=/y=, not both")
        return _normalize_pairs(samples)
    if x is None and y is None:
        return empty_samples()
    if x is None or y is None:
        raise SampleDataError("x and y must be given together")

    x_arr = _coerce_1d_numeric(x, label="x")
    y_arr = _coerce_1d_numeric(y, label="y")
    if x_arr.shape != y_arr.shape:
        raise SampleDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    return SampleArrays(x=x_arr, y=y_arr)


def _normalize_pairs(samples: Any) -> SampleArrays:
    if isinstance(samples, torch.Tensor):
        samples = _tensor_to_ndarray(samples)

    if isinstance(samples, np.ndarray):
        if samples.size == 0:
            return empty_samples()
        if samples.ndim != 2 or samples.shape[1] != 2:
            raise SampleDataError(f"sample array must have shape (N, 2), got {samples.shape}")
        return SampleArrays(
            x=_coerce_ndarray(samples[:, 0], label="x"),
            y=_coerce_ndarray(samples[:, 1], label="y"),
        )

    if isinstance(samples, (str, bytes, bytearray)) or not isinstance(samples, Iterable):
        raise SampleDataError(f"unsupported samples input type: {type(samples)!r}")

    xs: list[Any] = []
    ys: list[Any] = []
    for i, pair in enumerate(samples):
        try:
            px, py = pair
        except (TypeError, ValueError) as exc:
            raise SampleDataError(f"sample at index {i} is not an (x, y) pair: {pair!r}") from exc
        xs.append(px)
        ys.append(py)
    if not xs:
        return empty_samples()
    return SampleArrays(
        x=_coerce_ndarray(np.asarray(xs, dtype=object), label="x"),
        y=_coerce_ndarray(np.asarray(ys, dtype=object), label="y"),
    )


def _tensor_to_ndarray(tensor: torch.Tensor) -> np.ndarray:
    detached = tensor.detach()
    if detached.is_cuda:
        detached = detached.cpu()
    return detached.to(torch.float64).numpy()


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        if value.ndim != 1:
            raise SampleDataError(f"{label} must be 1-D")
        return _tensor_to_ndarray(value)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise SampleDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(list(value), dtype=object)
        if arr.ndim != 1:
            raise SampleDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise SampleDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)):
            raise SampleDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise SampleDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
