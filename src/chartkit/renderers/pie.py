"""Pie chart renderer.

Only the first dataset is drawn, as proportions of its live sum. Slices are
laid out clockwise from 12 o'clock in data order; during the animation each
slice's end angle is scaled by ``progress``. Slice labels appear once
``progress > 0.8`` so near-zero slices do not flash illegible text.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

from ..helpers import DEFAULT_COLORS, point_value, resolve_color_range
from ..settings import (
    FALLBACK_COLOR,
    PIE_LABEL_MIN_PROGRESS,
    PIE_LABEL_RADIUS_RATIO,
    RADIAL_LEGEND_HEIGHT,
    RADIAL_LEGEND_PER_ROW,
    RADIAL_LEGEND_ROW_HEIGHT,
)
from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig
from . import layout

log = logging.getLogger(__name__)

START_ANGLE = -math.pi / 2


@dataclass(frozen=True)
class Slice:
    start: float
    end: float
    full_angle: float

    @property
    def bisector(self) -> float:
        return self.start + self.full_angle / 2


@dataclass(frozen=True)
class RadialGeometry:
    center_x: float
    center_y: float
    radius: float


def slice_angles(values: Sequence[float], progress: float) -> List[Slice]:
    """Sweep angles for ``values`` as shares of their sum.

    Returns an empty list when the total is not positive.
    """
    total = sum(values)
    if total <= 0:
        return []
    slices: List[Slice] = []
    current = START_ANGLE
    for value in values:
        angle = (value / total) * 2 * math.pi
        slices.append(Slice(start=current, end=current + angle * progress, full_angle=angle))
        current += angle
    return slices


def radial_geometry(bounds: Bounds, options) -> RadialGeometry:
    legend_height = RADIAL_LEGEND_HEIGHT if layout.legend_visible(options) else 0
    usable_height = bounds.height - legend_height - 40
    return RadialGeometry(
        center_x=bounds.x + bounds.width / 2,
        center_y=bounds.y + legend_height + 20 + usable_height / 2,
        radius=min(bounds.width, usable_height) / 2 - 20,
    )


def first_series(config: ChartConfig) -> List[float]:
    datasets = config.datasets
    if not datasets:
        return []
    return [point_value(v) or 0.0 for v in datasets[0].get("data") or []]


def slice_colors(config: ChartConfig, count: int) -> List[str]:
    datasets = config.datasets
    background = datasets[0].get("backgroundColor") if datasets else None
    return resolve_color_range(background or list(DEFAULT_COLORS), count)


def draw_radial_legend(surface: DrawingSurface, bounds: Bounds, config: ChartConfig) -> None:
    """Category legend, up to RADIAL_LEGEND_PER_ROW entries per row, slice-coloured."""
    labels = config.labels
    if not labels or not config.datasets:
        return
    options = config.options
    colors = slice_colors(config, len(labels))
    per_row = min(RADIAL_LEGEND_PER_ROW, len(labels))
    item_width = (bounds.width - 40) / per_row
    surface.font = layout.legend_font(options)
    surface.text_baseline = "alphabetic"
    for index, label in enumerate(labels):
        row, col = divmod(index, per_row)
        x = bounds.x + 20 + col * item_width
        y = bounds.y + 20 + row * RADIAL_LEGEND_ROW_HEIGHT
        surface.fill_style = colors[index] or FALLBACK_COLOR
        surface.fill_rect(x, y - 6, 18, 12)
        surface.fill_style = layout.legend_text_color(options)
        surface.text_align = "left"
        surface.fill_text(str(label), x + 25, y + 1)


class PieRenderer:
    def __init__(self, config: ChartConfig) -> None:
        self.config = config

    def geometry(self, bounds: Bounds) -> RadialGeometry:
        return radial_geometry(bounds, self.config.options)

    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if not self.config.datasets:
            log.debug("pie chart has no datasets; nothing to draw")
            return
        geo = self.geometry(bounds)
        if layout.legend_visible(self.config.options):
            draw_radial_legend(surface, bounds, self.config)
        if geo.radius <= 0:
            log.debug("pie chart bounds too small (radius %.1f)", geo.radius)
            return
        self._draw_slices(surface, geo, progress)

    def _draw_slices(self, surface: DrawingSurface, geo: RadialGeometry, progress: float) -> None:
        labels = self.config.labels
        if not labels:
            log.debug("pie chart has no labels; skipping slices")
            return
        dataset = self.config.datasets[0]
        values = first_series(self.config)
        colors = slice_colors(self.config, len(values))
        border_color = dataset.get("borderColor")
        border_width = dataset.get("borderWidth")
        cx, cy, radius = geo.center_x, geo.center_y, geo.radius
        for index, sl in enumerate(slice_angles(values, progress)):
            surface.begin_path()
            surface.move_to(cx, cy)
            surface.arc(cx, cy, radius, sl.start, sl.end)
            surface.close_path()
            surface.fill_style = colors[index] or FALLBACK_COLOR
            surface.fill()
            if border_color and border_width:
                surface.stroke_style = border_color
                surface.line_width = border_width
                surface.stroke()
            if progress > PIE_LABEL_MIN_PROGRESS and index < len(labels) and labels[index]:
                label_radius = radius * PIE_LABEL_RADIUS_RATIO
                surface.fill_style = "#333"
                surface.font = "12px Arial"
                surface.text_align = "center"
                surface.text_baseline = "middle"
                surface.fill_text(
                    str(labels[index]),
                    cx + math.cos(sl.bisector) * label_radius,
                    cy + math.sin(sl.bisector) * label_radius,
                )

    def destroy(self) -> None:
        pass
