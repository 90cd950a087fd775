"""Grouped bar chart renderer.

Datasets sit side by side inside each category slot: a group takes 80% of
the slot width, split evenly between datasets. Bars grow from the zero
baseline (downward for negative values) as ``lerp(0, value, progress)``.
"""

from __future__ import annotations

import logging
from typing import Any, List

from ..helpers import DEFAULT_COLORS, compute_range, lerp, point_value, resolve_color_range
from ..settings import FALLBACK_COLOR, LEGEND_GUTTER
from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig, ValueRange
from . import layout

log = logging.getLogger(__name__)

GROUP_WIDTH_RATIO = 0.8


class BarRenderer:
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
        rng = compute_range(values)
        # zero must stay visible as the bar baseline
        return ValueRange(min(0.0, rng.min), rng.max)

    def _dataset_colors(self) -> List[str]:
        return resolve_color_range(list(DEFAULT_COLORS), len(self.config.datasets))

    def _bar_color(self, dataset: dict, index: int, defaults: List[str], category: int) -> str:
        background: Any = dataset.get("backgroundColor")
        if isinstance(background, str):
            return background
        if isinstance(background, (list, tuple)) and background:
            return resolve_color_range(list(background), category + 1)[category]
        return defaults[index] if index < len(defaults) else FALLBACK_COLOR

    # Drawing ----------------------------------------------------------------
    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if not self.config.datasets:
            log.debug("bar chart has no datasets; nothing to draw")
            return
        options = self.config.options
        scales = options.get("scales") or {}
        plot = layout.plot_bounds(bounds, options)
        if layout.legend_visible(options):
            self._draw_legend(surface, bounds)
        x_grid, y_grid = layout.grid_enabled(scales)
        if x_grid or y_grid:
            layout.apply_grid_style(surface, scales)
            if y_grid:
                layout.draw_horizontal_grid(surface, plot)
            if x_grid and self.config.labels:
                layout.draw_vertical_grid(surface, plot, self._slot_centers(plot))
        layout.draw_value_axis(surface, plot, scales, self.value_range)
        labels = self.config.labels
        layout.draw_category_axis(
            surface, plot, scales, list(zip(labels, self._slot_centers(plot))) if labels else None
        )
        self._draw_bars(surface, plot, progress)

    def _slot_centers(self, plot: Bounds) -> List[float]:
        labels = self.config.labels or []
        step = plot.width / len(labels)
        return [plot.x + step * (i + 0.5) for i in range(len(labels))]

    def _draw_legend(self, surface: DrawingSurface, bounds: Bounds) -> None:
        options = self.config.options
        defaults = self._dataset_colors()
        x = bounds.x + 20
        y = bounds.y + 15
        surface.font = layout.legend_font(options)
        surface.text_align = "start"
        surface.text_baseline = "alphabetic"
        for index, dataset in enumerate(self.config.datasets):
            label = dataset.get("label") or f"Dataset {index + 1}"
            surface.fill_style = self._bar_color(dataset, index, defaults, 0)
            surface.fill_rect(x, y + 8, 18, 12)
            surface.fill_style = layout.legend_text_color(options)
            surface.fill_text(label, x + 28, y + 17)
            x += surface.measure_text(label) + LEGEND_GUTTER

    def _draw_bars(self, surface: DrawingSurface, plot: Bounds, progress: float) -> None:
        labels = self.config.labels
        if not labels:
            log.debug("bar chart has no labels; skipping bars")
            return
        datasets = self.config.datasets
        slot_width = plot.width / len(labels)
        group_width = slot_width * GROUP_WIDTH_RATIO
        bar_width = group_width / len(datasets)
        defaults = self._dataset_colors()
        zero_y = layout.value_to_y(0.0, self.value_range, plot)
        for ds_index, dataset in enumerate(datasets):
            for index, element in enumerate(dataset.get("data") or []):
                value = point_value(element)
                if value is None:
                    continue
                value_y = layout.value_to_y(lerp(0.0, value, progress), self.value_range, plot)
                bar_height = zero_y - value_y
                bar_x = plot.x + index * slot_width + (slot_width - group_width) / 2 + ds_index * bar_width
                surface.fill_style = self._bar_color(dataset, ds_index, defaults, index)
                if bar_height > 0:
                    surface.fill_rect(bar_x, value_y, bar_width - 1, bar_height)
                else:
                    surface.fill_rect(bar_x, zero_y, bar_width - 1, abs(bar_height))
                border_color = dataset.get("borderColor")
                border_width = dataset.get("borderWidth")
                if border_color and border_width:
                    surface.stroke_style = border_color
                    surface.line_width = border_width
                    surface.stroke_rect(bar_x, value_y, bar_width - 1, bar_height)

    def destroy(self) -> None:
        pass
