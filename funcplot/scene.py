from __future__ import annotations

from dataclasses import dataclass

from funcplot.config import ChartStyle
from funcplot.overlays import Overlay
from funcplot.scales import AxisBounds
from funcplot.segmenter import Segment


@dataclass(frozen=True)
class ChartScene:
    """Everything a drawing surface needs for one repaint.

    Segments are the backmost layer; overlays draw on top in list order.
    """

    segments: tuple[Segment, ...]
    bounds: AxisBounds
    overlays: tuple[Overlay, ...]
    smoothed: bool
    title: str
    style: ChartStyle
