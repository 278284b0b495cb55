from __future__ import annotations

from enum import Enum
import logging

import numpy as np

from funcplot.config import ChartConfig
from funcplot.scales import AxisBounds, compute_axis_bounds


LOGGER = logging.getLogger(__name__)


class AxisState(str, Enum):
    UNSCALED = "unscaled"
    SCALED = "scaled"


class AxisScaler:
    """Computes axis bounds once, then keeps them until :meth:`reset`.

    ``UNSCALED -> SCALED`` happens on the first :meth:`resolve`; only
    :meth:`reset` goes back. While ``SCALED`` the stored bounds are returned
    untouched whatever the new samples look like.
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()
        self._bounds: AxisBounds | None = None

    @property
    def state(self) -> AxisState:
        return AxisState.UNSCALED if self._bounds is None else AxisState.SCALED

    @property
    def frozen(self) -> bool:
        return self._bounds is not None

    @property
    def bounds(self) -> AxisBounds | None:
        return self._bounds

    def resolve(
        self,
        y: np.ndarray,
        xmin: float,
        xmax: float,
        *,
        viewport: tuple[int, int],
        aspect_locked: bool,
    ) -> AxisBounds:
        if self._bounds is not None:
            return self._bounds
        cfg = self._config
        self._bounds = compute_axis_bounds(
            y,
            xmin,
            xmax,
            viewport=viewport,
            aspect_locked=aspect_locked,
            y_visual_limit=cfg.y_visual_limit,
            flat_epsilon=cfg.flat_epsilon,
            padding_ratio=cfg.padding_ratio,
            fallback_viewport=cfg.fallback_viewport,
        )
        LOGGER.debug("axis state %s -> %s", AxisState.UNSCALED.value, AxisState.SCALED.value)
        return self._bounds

    def reset(self) -> None:
        if self._bounds is not None:
            LOGGER.debug("axis state %s -> %s", AxisState.SCALED.value, AxisState.UNSCALED.value)
        self._bounds = None
