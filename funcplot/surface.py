from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np
from PIL import Image
import torch

from funcplot.render import SceneRenderer
from funcplot.scene import ChartScene


LOGGER = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    @property
    def viewport(self) -> tuple[int, int]:
        ...

    def is_ready(self) -> bool:
        ...

    def present(self, scene: ChartScene) -> None:
        ...


class RasterSurface:
    """Off-screen RGBA frame that a :class:`~funcplot.chart.Chart` paints into.

    Each :meth:`present` rasterizes the scene and commits it as a new
    ``(H, W, 4)`` uint8 tensor, bumping :attr:`revision`.
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        background: tuple[int, int, int, int] = (255, 255, 255, 255),
    ) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        self._width = int(width)
        self._height = int(height)
        self._background = background
        self._renderer = SceneRenderer()
        self._revision = 0
        self._last_scene: ChartScene | None = None
        self._frame = self._blank_frame()

    @property
    def viewport(self) -> tuple[int, int]:
        return (self._width, self._height)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def last_scene(self) -> ChartScene | None:
        return self._last_scene

    @property
    def renderer(self) -> SceneRenderer:
        return self._renderer

    def is_ready(self) -> bool:
        return self._width > 1 and self._height > 1

    def resize(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("width and height must be >= 0")
        if (width, height) == (self._width, self._height):
            return
        self._width = int(width)
        self._height = int(height)
        self._renderer.invalidate()
        self._frame = self._blank_frame()
        LOGGER.debug("surface resized to %dx%d", self._width, self._height)
        if self._last_scene is not None and self.is_ready():
            self.present(self._last_scene)

    def present(self, scene: ChartScene) -> None:
        if not self.is_ready():
            raise ValueError(f"surface is not ready for drawing ({self._width}x{self._height})")
        rgba = self._renderer.render(scene, self._width, self._height)
        self._frame = torch.from_numpy(np.ascontiguousarray(rgba))
        self._last_scene = scene
        self._revision += 1
        LOGGER.debug("surface revision %d presented", self._revision)

    def read_snapshot(self) -> torch.Tensor:
        return self._frame.clone()

    def to_rgba(self) -> np.ndarray:
        return self._frame.numpy().copy()

    def save_png(self, path: str | Path) -> Path:
        out = Path(path)
        if self._revision == 0:
            LOGGER.warning("saving %s before anything was plotted", out)
        Image.fromarray(self.to_rgba(), mode="RGBA").save(out, format="PNG")
        return out

    def _blank_frame(self) -> torch.Tensor:
        bg = torch.tensor(self._background, dtype=torch.uint8).view(1, 1, 4)
        return bg.expand(max(0, self._height), max(0, self._width), 4).clone()
