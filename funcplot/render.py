from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from funcplot.interpolation import canonical_spline
from funcplot.overlays import IntegralOverlay, TangentOverlay
from funcplot.raster import (
    LayerCache,
    blit,
    draw_hline,
    draw_markers,
    draw_pixels,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_rect,
    fill_to_baseline,
    new_canvas,
    text_size,
)
from funcplot.scales import (
    AxisBounds,
    PlotTransform,
    build_transform,
    format_ticks_for_axis,
    generate_nice_ticks,
    project,
)
from funcplot.scene import ChartScene


MINOR_TICKS_PER_MAJOR = 5


@dataclass(frozen=True)
class PlotLayout:
    x0: int
    y0: int
    width: int
    height: int
    tick_font_px: float
    title_font_px: float
    tick_x: np.ndarray
    tick_y: np.ndarray
    labels_x: tuple[str, ...]
    labels_y: tuple[str, ...]


class SceneRenderer:
    """Rasterizes a :class:`ChartScene` into an RGBA ``uint8`` array.

    Frame, grid and tick text only depend on the size, bounds and style, so
    they are cached between repaints; curve and overlays are redrawn every time.
    """

    def __init__(self) -> None:
        self._cache = LayerCache()
        self._last_layout: PlotLayout | None = None

    @property
    def last_layout(self) -> PlotLayout | None:
        return self._last_layout

    def invalidate(self) -> None:
        self._cache.invalidate()

    def render(self, scene: ChartScene, width: int, height: int) -> np.ndarray:
        style = scene.style
        layout = self._layout(scene, width, height)
        self._last_layout = layout
        bounds = scene.bounds

        base = new_canvas(width, height, color=style.background)
        blit(base, self._frame_layer(scene, layout, width, height))
        blit(base, self._grid_layer(scene, layout))

        transform = build_transform(bounds, layout.width, layout.height)
        data = new_canvas(layout.width, layout.height)
        self._draw_segments(data, scene, transform, layout.height)
        self._draw_overlays(data, scene, transform, layout.height)
        blit(base, data, layout.x0, layout.y0)

        right = layout.x0 + layout.width - 1
        bottom = layout.y0 + layout.height - 1
        draw_hline(base, layout.x0, right, bottom, style.axis_color)
        draw_vline(base, layout.x0, layout.y0, bottom, style.axis_color)

        blit(base, self._text_layer(scene, layout, width, height))
        self._draw_overlay_labels(base, scene, layout, transform)
        return base

    def _layout(self, scene: ChartScene, width: int, height: int) -> PlotLayout:
        bounds = scene.bounds
        scale_base = min(width, height)
        tick_font_px = max(10.0, min(22.0, scale_base * 0.028))
        title_font_px = max(12.0, min(28.0, scale_base * 0.036))

        provisional_w = max(2, width - 80)
        provisional_h = max(2, height - 60)
        tick_x = generate_nice_ticks(bounds.xmin, bounds.xmax, max(3, provisional_w // 90))
        tick_y = generate_nice_ticks(bounds.ymin, bounds.ymax, max(3, provisional_h // 60))
        labels_x = tuple(format_ticks_for_axis(tick_x))
        labels_y = tuple(format_ticks_for_axis(tick_y))

        max_y_label_w = max((text_size(lbl, font_size_px=tick_font_px)[0] for lbl in labels_y), default=0)
        max_x_label_h = max((text_size(lbl, font_size_px=tick_font_px)[1] for lbl in labels_x), default=0)
        title_h = text_size(scene.title, font_size_px=title_font_px)[1] if scene.title else 0

        left = int(max(12, max_y_label_w + 14))
        right = 16
        top = int(max(10, title_h + 14))
        bottom = int(max(12, max_x_label_h + 16))
        # Small surfaces keep at least half of each dimension for the plot.
        left = min(left, max(2, width // 4))
        right = min(right, max(1, width // 8))
        top = min(top, max(1, height // 4))
        bottom = min(bottom, max(2, height // 4))
        plot_w = max(2, width - left - right)
        plot_h = max(2, height - top - bottom)
        return PlotLayout(
            x0=left,
            y0=top,
            width=plot_w,
            height=plot_h,
            tick_font_px=tick_font_px,
            title_font_px=title_font_px,
            tick_x=tick_x,
            tick_y=tick_y,
            labels_x=labels_x,
            labels_y=labels_y,
        )

    def _frame_layer(self, scene: ChartScene, layout: PlotLayout, width: int, height: int) -> np.ndarray:
        style = scene.style
        key = (width, height, layout.x0, layout.y0, layout.width, layout.height, style.frame_color, style.plot_background)
        cached = self._cache.lookup("frame", key)
        if cached is not None:
            return cached
        frame = new_canvas(width, height)
        draw_hline(frame, 0, width - 1, 0, style.frame_color)
        draw_hline(frame, 0, width - 1, height - 1, style.frame_color)
        draw_vline(frame, 0, 0, height - 1, style.frame_color)
        draw_vline(frame, width - 1, 0, height - 1, style.frame_color)
        fill_rect(
            frame,
            layout.x0,
            layout.y0,
            layout.x0 + layout.width - 1,
            layout.y0 + layout.height - 1,
            style.plot_background,
        )
        return self._cache.store("frame", key, frame)

    def _grid_layer(self, scene: ChartScene, layout: PlotLayout) -> np.ndarray:
        style = scene.style
        bounds = scene.bounds
        key = (
            layout.x0,
            layout.y0,
            layout.width,
            layout.height,
            _bounds_key(bounds),
            tuple(layout.tick_x.tolist()),
            tuple(layout.tick_y.tolist()),
            style.grid_color,
            style.minor_grid_color,
            style.zero_line_color,
            style.show_minor_grid,
        )
        cached = self._cache.lookup("grid", key)
        if cached is not None:
            return cached

        w, h = layout.width, layout.height
        plane = new_canvas(w, h)
        transform = build_transform(bounds, w, h)
        tx, _ = project(layout.tick_x, np.zeros_like(layout.tick_x), transform, h)
        _, ty = project(np.zeros_like(layout.tick_y), layout.tick_y, transform, h)

        if style.show_minor_grid and layout.tick_x.size > 1 and layout.tick_y.size > 1:
            mx = _minor_ticks(layout.tick_x, bounds.xmin, bounds.xmax)
            my = _minor_ticks(layout.tick_y, bounds.ymin, bounds.ymax)
            mpx, _ = project(mx, np.zeros_like(mx), transform, h)
            _, mpy = project(np.zeros_like(my), my, transform, h)
            for px in np.rint(mpx).astype(np.int32).tolist():
                rows = np.arange(0, h, 3, dtype=np.int32)
                draw_pixels(plane, np.full(rows.shape, px, dtype=np.int32), rows, style.minor_grid_color)
            for py in np.rint(mpy).astype(np.int32).tolist():
                cols = np.arange(0, w, 3, dtype=np.int32)
                draw_pixels(plane, cols, np.full(cols.shape, py, dtype=np.int32), style.minor_grid_color)

        for px in np.rint(tx).astype(np.int32).tolist():
            draw_vline(plane, px, 0, h - 1, style.grid_color)
        for py in np.rint(ty).astype(np.int32).tolist():
            draw_hline(plane, 0, w - 1, py, style.grid_color)

        if bounds.xmin <= 0.0 <= bounds.xmax:
            zx, _ = project(np.asarray([0.0]), np.asarray([0.0]), transform, h)
            draw_vline(plane, int(np.rint(zx[0])), 0, h - 1, style.zero_line_color)
        if bounds.ymin <= 0.0 <= bounds.ymax:
            _, zy = project(np.asarray([0.0]), np.asarray([0.0]), transform, h)
            draw_hline(plane, 0, w - 1, int(np.rint(zy[0])), style.zero_line_color)

        grid = new_canvas(layout.x0 + w, layout.y0 + h)
        blit(grid, plane, layout.x0, layout.y0)
        return self._cache.store("grid", key, grid)

    def _text_layer(self, scene: ChartScene, layout: PlotLayout, width: int, height: int) -> np.ndarray:
        style = scene.style
        key = (
            width,
            height,
            layout.x0,
            layout.y0,
            layout.width,
            layout.height,
            _bounds_key(scene.bounds),
            scene.title,
            style.text_color,
            style.axis_color,
        )
        cached = self._cache.lookup("text", key)
        if cached is not None:
            return cached

        text = new_canvas(width, height)
        font_px = layout.tick_font_px
        transform = build_transform(scene.bounds, layout.width, layout.height)
        bottom = layout.y0 + layout.height - 1
        tx, _ = project(layout.tick_x, np.zeros_like(layout.tick_x), transform, layout.height)
        for px, label in zip(np.rint(tx).astype(np.int32).tolist(), layout.labels_x):
            gx = layout.x0 + px
            draw_vline(text, gx, bottom, bottom + 4, style.axis_color)
            lw, _ = text_size(label, font_size_px=font_px)
            draw_text(text, gx - lw // 2, bottom + 7, label, style.text_color, font_size_px=font_px)
        _, ty = project(np.zeros_like(layout.tick_y), layout.tick_y, transform, layout.height)
        for py, label in zip(np.rint(ty).astype(np.int32).tolist(), layout.labels_y):
            gy = layout.y0 + py
            draw_hline(text, layout.x0 - 4, layout.x0, gy, style.axis_color)
            lw, lh = text_size(label, font_size_px=font_px)
            draw_text(text, layout.x0 - lw - 7, gy - lh // 2, label, style.text_color, font_size_px=font_px)
        if scene.title:
            tw, th = text_size(scene.title, font_size_px=layout.title_font_px)
            draw_text(
                text,
                max(2, (width - tw) // 2),
                max(2, (layout.y0 - th) // 2),
                scene.title,
                style.text_color,
                font_size_px=layout.title_font_px,
            )
        return self._cache.store("text", key, text)

    def _draw_segments(self, plane: np.ndarray, scene: ChartScene, transform: PlotTransform, height: int) -> None:
        style = scene.style
        for seg in scene.segments:
            xs, ys = seg.x, seg.y
            if scene.smoothed:
                xs, ys = canonical_spline(xs, ys)
            px, py = project(xs, ys, transform, height)
            if px.size == 1:
                draw_markers(plane, px, py, style.function_color, size=style.line_width)
                continue
            draw_polyline(plane, px, py, style.function_color, width=style.line_width)

    def _draw_overlays(self, plane: np.ndarray, scene: ChartScene, transform: PlotTransform, height: int) -> None:
        style = scene.style
        _, baseline = project(np.asarray([0.0]), np.asarray([IntegralOverlay.baseline]), transform, height)
        for overlay in scene.overlays:
            if isinstance(overlay, IntegralOverlay):
                if overlay.is_empty:
                    continue
                px, py = project(overlay.x, overlay.y, transform, height)
                fill_to_baseline(plane, px, py, float(baseline[0]), style.integral_fill)
                draw_polyline(plane, px, py, style.integral_edge, width=1)
            elif isinstance(overlay, TangentOverlay):
                lx, ly = project(
                    np.asarray([overlay.start[0], overlay.end[0]]),
                    np.asarray([overlay.start[1], overlay.end[1]]),
                    transform,
                    height,
                )
                draw_polyline(plane, lx, ly, style.tangent_color, width=style.tangent_width, dash=style.tangent_dash)
                mx, my = project(np.asarray([overlay.x0]), np.asarray([overlay.fx0]), transform, height)
                draw_markers(plane, mx, my, style.tangent_color, size=style.marker_size, shape="circle")

    def _draw_overlay_labels(self, base: np.ndarray, scene: ChartScene, layout: PlotLayout, transform: PlotTransform) -> None:
        style = scene.style
        font_px = layout.tick_font_px
        label_bg = style.plot_background[:3] + (220,)
        for overlay in scene.overlays:
            if not isinstance(overlay, IntegralOverlay):
                continue
            lw, _ = text_size(overlay.label, font_size_px=font_px)
            mid = (max(overlay.a, scene.bounds.xmin) + min(overlay.b, scene.bounds.xmax)) / 2.0
            cx, _ = project(np.asarray([mid]), np.asarray([0.0]), transform, layout.height)
            x = layout.x0 + int(np.rint(cx[0])) - lw // 2
            x = max(layout.x0 + 4, min(layout.x0 + layout.width - lw - 4, x))
            draw_text(
                base,
                x,
                layout.y0 + 6,
                overlay.label,
                style.text_color,
                font_size_px=font_px,
                background_color=label_bg,
                padding=3,
            )


def _minor_ticks(ticks: np.ndarray, vmin: float, vmax: float) -> np.ndarray:
    step = float(abs(ticks[1] - ticks[0])) / MINOR_TICKS_PER_MAJOR
    start = np.ceil(vmin / step) * step
    values = np.arange(start, vmax + step * 0.5, step, dtype=np.float64)
    values = values[values <= vmax]
    on_major = np.any(np.isclose(values[:, None], ticks[None, :], rtol=0.0, atol=step * 1e-6), axis=1)
    return values[~on_major]


def _bounds_key(bounds: AxisBounds) -> tuple[float, float, float, float]:
    return (round(bounds.xmin, 12), round(bounds.xmax, 12), round(bounds.ymin, 12), round(bounds.ymax, 12))
