from __future__ import annotations

from dataclasses import dataclass
import logging
import math

import numpy as np

from funcplot.config import DEFAULT_JUMP_THRESHOLD


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    """A non-empty run of finite samples with no jump above the threshold."""

    x: np.ndarray
    y: np.ndarray

    def __len__(self) -> int:
        return int(self.x.size)

    @property
    def x_span(self) -> tuple[float, float]:
        return (float(self.x[0]), float(self.x[-1]))

    def points(self) -> list[tuple[float, float]]:
        return list(zip(self.x.tolist(), self.y.tolist()))


@dataclass(frozen=True)
class SegmentationResult:
    segments: tuple[Segment, ...]
    has_discontinuity: bool
    break_count: int = 0

    @property
    def sample_count(self) -> int:
        return sum(len(seg) for seg in self.segments)

    def y_values(self) -> np.ndarray:
        if not self.segments:
            return np.empty(0, dtype=np.float64)
        return np.concatenate([seg.y for seg in self.segments])

    def x_values(self) -> np.ndarray:
        if not self.segments:
            return np.empty(0, dtype=np.float64)
        return np.concatenate([seg.x for seg in self.segments])


def segment_samples(
    x: np.ndarray,
    y: np.ndarray,
    *,
    jump_threshold: float = DEFAULT_JUMP_THRESHOLD,
) -> SegmentationResult:
    """Split an ordered sample stream into drawable segments.

    A sample whose ``y`` (or ``x``) is NaN/inf is dropped and closes the running
    segment. Between two consecutive finite samples, ``|dy| > jump_threshold``
    starts a new segment at the second sample. Either event marks the whole
    result as discontinuous. Input order is preserved and each finite sample
    lands in exactly one segment.
    """
    if math.isnan(jump_threshold) or jump_threshold <= 0:
        raise ValueError("jump_threshold must be > 0")
    xs = np.asarray(x, dtype=np.float64)
    ys = np.asarray(y, dtype=np.float64)
    if xs.shape != ys.shape or xs.ndim != 1:
        raise ValueError("x and y must be 1-D arrays of equal length")
    if xs.size == 0:
        return SegmentationResult(segments=(), has_discontinuity=False)

    valid = np.isfinite(xs) & np.isfinite(ys)
    jumps = np.zeros(xs.size, dtype=bool)
    if xs.size > 1:
        with np.errstate(invalid="ignore", over="ignore"):
            steps = np.abs(np.diff(ys))
        jumps[1:] = valid[1:] & valid[:-1] & (steps > jump_threshold)

    invalid_count = int(np.count_nonzero(~valid))
    jump_count = int(np.count_nonzero(jumps))
    segments = tuple(
        Segment(x=xs[start:end].copy(), y=ys[start:end].copy())
        for start, end in _split_runs(valid, jumps)
    )
    result = SegmentationResult(
        segments=segments,
        has_discontinuity=invalid_count > 0 or jump_count > 0,
        break_count=invalid_count + jump_count,
    )
    LOGGER.debug(
        "segmented %d samples into %d segments (%d undefined, %d jumps)",
        xs.size,
        len(segments),
        invalid_count,
        jump_count,
    )
    return result


def _split_runs(valid: np.ndarray, breaks: np.ndarray) -> list[tuple[int, int]]:
    # Half-open [start, end) runs of valid indices, cut wherever an index is
    # not adjacent to its predecessor or carries a break flag.
    idx = np.flatnonzero(valid)
    if idx.size == 0:
        return []
    cut = (np.diff(idx) != 1) | breaks[idx[1:]]
    split_at = np.flatnonzero(cut) + 1
    starts = np.concatenate(([idx[0]], idx[split_at]))
    ends = np.concatenate((idx[split_at - 1] + 1, [idx[-1] + 1]))
    return [(int(s), int(e)) for s, e in zip(starts.tolist(), ends.tolist())]
