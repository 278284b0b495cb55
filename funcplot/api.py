from __future__ import annotations

from pathlib import Path

from funcplot.chart import Chart
from funcplot.config import ChartConfig, load_chart_config
from funcplot.surface import RasterSurface


DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 600


def chart(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    *,
    config: ChartConfig | None = None,
    config_path: str | Path | None = None,
) -> Chart:
    """Create a :class:`Chart` drawing into a new off-screen :class:`RasterSurface`."""
    if config is not None and config_path is not None:
        raise ValueError("pass either config or config_path, not both")
    if config_path is not None:
        config = load_chart_config(config_path)
    cfg = config or ChartConfig()
    surface = RasterSurface(width, height, background=cfg.style.background)
    return Chart(surface, config=cfg)
