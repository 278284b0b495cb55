from funcplot.api import chart
from funcplot.axis_state import AxisScaler, AxisState
from funcplot.chart import Chart
from funcplot.config import ChartConfig, ChartStyle, load_chart_config
from funcplot.errors import ChartConfigError, ChartError, SampleDataError
from funcplot.interpolation import InterpolationMode
from funcplot.overlays import IntegralOverlay, Overlay, OverlayKind, OverlayManager, TangentOverlay
from funcplot.samples import SampleArrays, normalize_samples
from funcplot.scales import AxisBounds, compute_axis_bounds
from funcplot.scene import ChartScene
from funcplot.segmenter import Segment, SegmentationResult, segment_samples
from funcplot.surface import DrawingSurface, RasterSurface

__all__ = [
    "AxisBounds",
    "AxisScaler",
    "AxisState",
    "Chart",
    "ChartConfig",
    "ChartConfigError",
    "ChartError",
    "ChartScene",
    "ChartStyle",
    "DrawingSurface",
    "IntegralOverlay",
    "InterpolationMode",
    "Overlay",
    "OverlayKind",
    "OverlayManager",
    "RasterSurface",
    "SampleArrays",
    "SampleDataError",
    "Segment",
    "SegmentationResult",
    "TangentOverlay",
    "chart",
    "compute_axis_bounds",
    "load_chart_config",
    "normalize_samples",
    "segment_samples",
]
