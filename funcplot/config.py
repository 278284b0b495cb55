from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
import logging
import math
from pathlib import Path
import tomllib

from funcplot.errors import ChartConfigError
from funcplot.interpolation import InterpolationMode


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

DEFAULT_JUMP_THRESHOLD = 10.0
DEFAULT_Y_VISUAL_LIMIT = 10.0
DEFAULT_FLAT_EPSILON = 1e-6
DEFAULT_PADDING_RATIO = 0.1
DEFAULT_FALLBACK_VIEWPORT = (800, 600)
DEFAULT_TITLE = "Function Plot"


@dataclass(frozen=True)
class ChartStyle:
    background: RGBA = (255, 255, 255, 255)
    plot_background: RGBA = (252, 252, 252, 255)
    frame_color: RGBA = (200, 200, 200, 255)
    grid_color: RGBA = (226, 226, 226, 255)
    minor_grid_color: RGBA = (120, 120, 120, 70)
    axis_color: RGBA = (90, 90, 90, 255)
    zero_line_color: RGBA = (150, 150, 150, 255)
    text_color: RGBA = (30, 30, 30, 255)
    function_color: RGBA = (70, 130, 180, 255)
    line_width: int = 2
    tangent_color: RGBA = (205, 92, 92, 255)
    tangent_width: int = 2
    tangent_dash: tuple[int, int] = (8, 5)
    marker_size: int = 5
    integral_fill: RGBA = (34, 139, 34, 80)
    integral_edge: RGBA = (34, 139, 34, 255)
    show_minor_grid: bool = True

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type == "RGBA":
                _check_color(value, f.name)
        if self.line_width <= 0 or self.tangent_width <= 0:
            raise ChartConfigError("line widths must be > 0")
        if self.marker_size <= 0:
            raise ChartConfigError("marker_size must be > 0")
        if len(self.tangent_dash) != 2 or min(self.tangent_dash) <= 0:
            raise ChartConfigError("tangent_dash must be two positive pixel lengths (on, off)")


@dataclass(frozen=True)
class ChartConfig:
    jump_threshold: float = DEFAULT_JUMP_THRESHOLD
    y_visual_limit: float = DEFAULT_Y_VISUAL_LIMIT
    flat_epsilon: float = DEFAULT_FLAT_EPSILON
    padding_ratio: float = DEFAULT_PADDING_RATIO
    fallback_viewport: tuple[int, int] = DEFAULT_FALLBACK_VIEWPORT
    aspect_locked: bool = False
    interpolation: InterpolationMode = InterpolationMode.LINEAR
    integral_precision: int = 6
    title: str = DEFAULT_TITLE
    style: ChartStyle = field(default_factory=ChartStyle)

    def __post_init__(self) -> None:
        if math.isnan(self.jump_threshold) or self.jump_threshold <= 0:
            raise ChartConfigError("jump_threshold must be > 0")
        if not math.isfinite(self.y_visual_limit) or self.y_visual_limit <= 0:
            raise ChartConfigError("y_visual_limit must be a finite value > 0")
        if not math.isfinite(self.flat_epsilon) or self.flat_epsilon <= 0:
            raise ChartConfigError("flat_epsilon must be a finite value > 0")
        if not math.isfinite(self.padding_ratio) or self.padding_ratio < 0:
            raise ChartConfigError("padding_ratio must be a finite value >= 0")
        if len(self.fallback_viewport) != 2 or min(self.fallback_viewport) <= 0:
            raise ChartConfigError("fallback_viewport must be (width, height) with both > 0")
        if self.integral_precision < 0 or self.integral_precision > 15:
            raise ChartConfigError("integral_precision must be in [0, 15]")
        try:
            mode = InterpolationMode.parse(self.interpolation)
        except ValueError as exc:
            raise ChartConfigError(str(exc)) from exc
        object.__setattr__(self, "interpolation", mode)

    def with_overrides(self, **changes: object) -> "ChartConfig":
        return replace(self, **changes)


def load_chart_config(path: str | Path) -> ChartConfig:
    """Read a ``[chart]`` table (and optional ``[chart.style]``) from a TOML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ChartConfigError(f"invalid TOML in {config_path}: {exc}") from exc
    table = raw.get("chart", {})
    if not isinstance(table, dict):
        raise ChartConfigError("[chart] must be a table")
    config = chart_config_from_mapping(table)
    LOGGER.debug("loaded chart config from %s", config_path)
    return config


def chart_config_from_mapping(table: dict[str, object]) -> ChartConfig:
    values = dict(table)
    style_table = values.pop("style", {})
    if not isinstance(style_table, dict):
        raise ChartConfigError("chart.style must be a table")

    kwargs: dict[str, object] = {}
    for name, value in values.items():
        if name not in _CONFIG_FIELDS or name == "style":
            raise ChartConfigError(f"unknown chart config key: {name}")
        kwargs[name] = _coerce_field(_CONFIG_FIELDS[name], value, name)

    style_kwargs: dict[str, object] = {}
    for name, value in style_table.items():
        if name not in _STYLE_FIELDS:
            raise ChartConfigError(f"unknown chart.style key: {name}")
        style_kwargs[name] = _coerce_field(_STYLE_FIELDS[name], value, f"style.{name}")

    return ChartConfig(style=ChartStyle(**style_kwargs), **kwargs)


_CONFIG_FIELDS = {f.name: str(f.type) for f in fields(ChartConfig)}
_STYLE_FIELDS = {f.name: str(f.type) for f in fields(ChartStyle)}


def _coerce_field(type_name: str, value: object, field_name: str) -> object:
    if type_name == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ChartConfigError(f"{field_name} must be a number")
        return float(value)
    if type_name == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            raise ChartConfigError(f"{field_name} must be an integer")
        return value
    if type_name == "bool":
        if not isinstance(value, bool):
            raise ChartConfigError(f"{field_name} must be true or false")
        return value
    if type_name == "str":
        if not isinstance(value, str):
            raise ChartConfigError(f"{field_name} must be a string")
        return value
    if type_name == "InterpolationMode":
        if not isinstance(value, str):
            raise ChartConfigError(f"{field_name} must be a string")
        return value
    if type_name == "RGBA":
        return _coerce_int_tuple(value, field_name, size=4)
    if type_name == "tuple[int, int]":
        return _coerce_int_tuple(value, field_name, size=2)
    raise ChartConfigError(f"{field_name} cannot be set from a config file")


def _coerce_int_tuple(value: object, field_name: str, *, size: int) -> tuple[int, ...]:
    if not isinstance(value, list) or len(value) != size:
        raise ChartConfigError(f"{field_name} must be a list of {size} integers")
    out: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            raise ChartConfigError(f"{field_name} entries must be integers")
        out.append(item)
    return tuple(out)


def _check_color(value: object, field_name: str) -> None:
    if not isinstance(value, tuple) or len(value) != 4:
        raise ChartConfigError(f"{field_name} must be an (r, g, b, a) tuple")
    if any(not isinstance(c, int) or c < 0 or c > 255 for c in value):
        raise ChartConfigError(f"{field_name} channels must be integers in [0, 255]")
