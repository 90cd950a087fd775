"""Scatter chart renderer.

X and Y ranges are cached from every point across datasets. Positions map
linearly and do not animate; only the marker radius grows ``0 -> 4``.
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from ..helpers import DEFAULT_COLORS, compute_range, format_tick, lerp, point_xy, resolve_color_range
from ..settings import FALLBACK_COLOR, GRID_DIVISIONS, LEGEND_GUTTER
from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig, PointRange, ValueRange
from . import layout

log = logging.getLogger(__name__)

MAX_POINT_RADIUS = 4


class ScatterRenderer:
    def __init__(self, config: ChartConfig) -> None:
        self.config = config
        self.point_range = self._compute_point_range()

    def _compute_point_range(self) -> PointRange:
        xs: List[float] = []
        ys: List[float] = []
        for dataset in self.config.datasets:
            for element in dataset.get("data") or []:
                xy = point_xy(element)
                if xy is not None:
                    xs.append(xy[0])
                    ys.append(xy[1])
        x_range = compute_range(xs)
        y_range = compute_range(ys)
        return PointRange(x_range.min, x_range.max, y_range.min, y_range.max)

    def _point_color(self, dataset: dict, index: int) -> str:
        background = dataset.get("backgroundColor")
        if isinstance(background, (list, tuple)):
            background = background[0] if background else None
        if background:
            return background
        defaults = resolve_color_range(list(DEFAULT_COLORS), len(self.config.datasets))
        return defaults[index] if index < len(defaults) else FALLBACK_COLOR

    def to_pixel(self, x: float, y: float, plot: Bounds) -> Tuple[float, float]:
        rng = self.point_range
        px = plot.x + ((x - rng.min_x) / (rng.max_x - rng.min_x)) * plot.width
        py = plot.bottom - ((y - rng.min_y) / (rng.max_y - rng.min_y)) * plot.height
        return px, py

    # Drawing ----------------------------------------------------------------
    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if not self.config.datasets:
            log.debug("scatter chart has no datasets; nothing to draw")
            return
        options = self.config.options
        scales = options.get("scales") or {}
        plot = layout.plot_bounds(bounds, options)
        if layout.legend_visible(options):
            self._draw_legend(surface, bounds)
        x_grid, y_grid = layout.grid_enabled(scales)
        layout.apply_grid_style(surface, scales)
        if y_grid:
            layout.draw_horizontal_grid(surface, plot)
        if x_grid:
            layout.draw_vertical_grid(surface, plot, self._x_divisions(plot))
        rng = self.point_range
        layout.draw_value_axis(surface, plot, scales, ValueRange(rng.min_y, rng.max_y))
        x_ticks = [
            (format_tick(rng.min_x + (rng.max_x - rng.min_x) * (i / GRID_DIVISIONS)), x)
            for i, x in enumerate(self._x_divisions(plot))
        ]
        layout.draw_category_axis(surface, plot, scales, x_ticks)
        self._draw_points(surface, plot, progress)

    @staticmethod
    def _x_divisions(plot: Bounds) -> List[float]:
        return [plot.x + (plot.width / GRID_DIVISIONS) * i for i in range(GRID_DIVISIONS + 1)]

    def _draw_legend(self, surface: DrawingSurface, bounds: Bounds) -> None:
        options = self.config.options
        x = bounds.x + 20
        y = bounds.y + 15
        surface.font = layout.legend_font(options)
        surface.text_align = "start"
        surface.text_baseline = "alphabetic"
        for index, dataset in enumerate(self.config.datasets):
            label = dataset.get("label") or f"Dataset {index + 1}"
            surface.fill_style = self._point_color(dataset, index)
            surface.begin_path()
            surface.arc(x + 10, y + 14, 6, 0, math.pi * 2)
            surface.fill()
            surface.fill_style = layout.legend_text_color(options)
            surface.fill_text(label, x + 25, y + 17)
            x += surface.measure_text(label) + LEGEND_GUTTER

    def _draw_points(self, surface: DrawingSurface, plot: Bounds, progress: float) -> None:
        radius = lerp(0, MAX_POINT_RADIUS, progress)
        for ds_index, dataset in enumerate(self.config.datasets):
            color = self._point_color(dataset, ds_index)
            border_color = dataset.get("borderColor")
            border_width = dataset.get("borderWidth")
            for element in dataset.get("data") or []:
                xy = point_xy(element)
                if xy is None:
                    continue
                px, py = self.to_pixel(xy[0], xy[1], plot)
                surface.fill_style = color
                surface.begin_path()
                surface.arc(px, py, radius, 0, math.pi * 2)
                surface.fill()
                if border_color and border_width:
                    surface.stroke_style = border_color
                    surface.line_width = border_width
                    surface.stroke()

    def destroy(self) -> None:
        pass
