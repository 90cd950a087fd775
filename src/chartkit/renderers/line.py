"""Line chart renderer (also the engine behind the area chart).

One polyline per dataset. Points rise from the plot's bottom edge to their
true position as ``lerp(bottom, y, progress)``. With ``tension > 0`` each
segment becomes a cubic Bezier whose control points are offset horizontally
by ``tension * dx`` and held at the endpoint heights; this is a per-segment
smoothing, not a spline through all points.
"""

from __future__ import annotations

import logging
import math
from typing import List, Tuple

from ..helpers import DEFAULT_COLORS, compute_range, lerp, point_value, resolve_color_range
from ..settings import FALLBACK_COLOR, LEGEND_GUTTER
from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig, ValueRange
from . import layout

log = logging.getLogger(__name__)

FILL_ALPHA = 0.3
POINT_RADIUS = 3
Point = Tuple[float, float]


class LineRenderer:
    def __init__(self, config: ChartConfig) -> None:
        self.config = config
        self.value_range = self._compute_value_range()

    def _compute_value_range(self) -> ValueRange:
        values: List[float] = []
        for dataset in self.config.datasets:
            for element in dataset.get("data") or []:
                value = point_value(element)
                if value is not None:
                    values.append(value)
        return compute_range(values)

    def _line_color(self, dataset: dict, index: int) -> str:
        defaults = resolve_color_range(list(DEFAULT_COLORS), len(self.config.datasets))
        return dataset.get("borderColor") or (defaults[index] if index < len(defaults) else FALLBACK_COLOR)

    def _x_positions(self, plot: Bounds, count: int) -> List[float]:
        label_count = len(self.config.labels or [])
        if label_count <= 1:
            return [plot.x + plot.width / 2] * count
        step = plot.width / (label_count - 1)
        return [plot.x + step * i for i in range(count)]

    # Drawing ----------------------------------------------------------------
    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if not self.config.datasets:
            log.debug("line chart has no datasets; nothing to draw")
            return
        options = self.config.options
        scales = options.get("scales") or {}
        plot = layout.plot_bounds(bounds, options)
        if layout.legend_visible(options):
            self._draw_legend(surface, bounds)
        labels = self.config.labels
        x_grid, y_grid = layout.grid_enabled(scales)
        layout.apply_grid_style(surface, scales)
        if y_grid:
            layout.draw_horizontal_grid(surface, plot)
        if x_grid and labels:
            layout.draw_vertical_grid(surface, plot, self._x_positions(plot, len(labels)))
        layout.draw_value_axis(surface, plot, scales, self.value_range)
        layout.draw_category_axis(
            surface, plot, scales, list(zip(labels, self._x_positions(plot, len(labels)))) if labels else None
        )
        self._draw_lines(surface, plot, progress)

    def _draw_legend(self, surface: DrawingSurface, bounds: Bounds) -> None:
        options = self.config.options
        x = bounds.x + 20
        y = bounds.y + 15
        surface.font = layout.legend_font(options)
        surface.text_align = "start"
        surface.text_baseline = "alphabetic"
        for index, dataset in enumerate(self.config.datasets):
            label = dataset.get("label") or f"Dataset {index + 1}"
            surface.stroke_style = self._line_color(dataset, index)
            surface.line_width = 3
            surface.begin_path()
            surface.move_to(x, y + 12)
            surface.line_to(x + 20, y + 12)
            surface.stroke()
            surface.fill_style = layout.legend_text_color(options)
            surface.fill_text(label, x + 30, y + 17)
            x += surface.measure_text(label) + LEGEND_GUTTER

    def animated_points(self, dataset: dict, plot: Bounds, progress: float) -> List[Point]:
        """Pixel points of ``dataset`` at ``progress`` (risen from the bottom edge)."""
        values = [point_value(element) for element in dataset.get("data") or []]
        xs = self._x_positions(plot, len(values))
        points: List[Point] = []
        for x, value in zip(xs, values):
            if value is None:
                continue
            y = layout.value_to_y(value, self.value_range, plot)
            points.append((x, lerp(plot.bottom, y, progress)))
        return points

    @staticmethod
    def _trace(surface: DrawingSurface, points: List[Point], tension: float, *, start_with_line: bool) -> None:
        for index, (x, y) in enumerate(points):
            if index == 0:
                if start_with_line:
                    surface.line_to(x, y)
                else:
                    surface.move_to(x, y)
            elif tension > 0:
                prev_x, prev_y = points[index - 1]
                dx = x - prev_x
                surface.bezier_curve_to(prev_x + dx * tension, prev_y, x - dx * tension, y, x, y)
            else:
                surface.line_to(x, y)

    def _draw_lines(self, surface: DrawingSurface, plot: Bounds, progress: float) -> None:
        if not self.config.labels:
            log.debug("line chart has no labels; skipping series")
            return
        for ds_index, dataset in enumerate(self.config.datasets):
            color = self._line_color(dataset, ds_index)
            tension = float(dataset.get("tension") or 0)
            points = self.animated_points(dataset, plot, progress)
            if not points:
                continue
            if dataset.get("fill"):
                surface.global_alpha = FILL_ALPHA
                surface.fill_style = color
                surface.begin_path()
                surface.move_to(points[0][0], plot.bottom)
                self._trace(surface, points, tension, start_with_line=True)
                surface.line_to(points[-1][0], plot.bottom)
                surface.close_path()
                surface.fill()
                surface.global_alpha = 1.0
            surface.stroke_style = color
            surface.line_width = dataset.get("borderWidth") or 2
            surface.begin_path()
            self._trace(surface, points, tension, start_with_line=False)
            surface.stroke()
            surface.fill_style = color
            for x, y in points:
                surface.begin_path()
                surface.arc(x, y, POINT_RADIUS, 0, math.pi * 2)
                surface.fill()

    def destroy(self) -> None:
        pass
