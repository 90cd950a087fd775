"""Doughnut chart renderer.

Same slice layout as the pie chart with an inner radius of 60% of the outer
one. Each slice path runs along the outer arc forward and the inner arc
backward before closing, so the non-zero fill paints a ring segment.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..settings import DOUGHNUT_INNER_RATIO, FALLBACK_COLOR
from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig
from . import layout
from .pie import draw_radial_legend, first_series, radial_geometry, slice_angles, slice_colors

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RingGeometry:
    center_x: float
    center_y: float
    outer_radius: float
    inner_radius: float


class DoughnutRenderer:
    def __init__(self, config: ChartConfig) -> None:
        self.config = config

    def geometry(self, bounds: Bounds) -> RingGeometry:
        geo = radial_geometry(bounds, self.config.options)
        return RingGeometry(
            center_x=geo.center_x,
            center_y=geo.center_y,
            outer_radius=geo.radius,
            inner_radius=geo.radius * DOUGHNUT_INNER_RATIO,
        )

    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if not self.config.datasets:
            log.debug("doughnut chart has no datasets; nothing to draw")
            return
        geo = self.geometry(bounds)
        if layout.legend_visible(self.config.options):
            draw_radial_legend(surface, bounds, self.config)
        if geo.outer_radius <= 0:
            log.debug("doughnut chart bounds too small (radius %.1f)", geo.outer_radius)
            return
        if not self.config.labels:
            log.debug("doughnut chart has no labels; skipping slices")
            return
        dataset = self.config.datasets[0]
        values = first_series(self.config)
        colors = slice_colors(self.config, len(values))
        border_color = dataset.get("borderColor")
        border_width = dataset.get("borderWidth")
        cx, cy = geo.center_x, geo.center_y
        for index, sl in enumerate(slice_angles(values, progress)):
            surface.begin_path()
            surface.arc(cx, cy, geo.outer_radius, sl.start, sl.end)
            surface.arc(cx, cy, geo.inner_radius, sl.end, sl.start, True)
            surface.close_path()
            surface.fill_style = colors[index] or FALLBACK_COLOR
            surface.fill()
            if border_color and border_width:
                surface.stroke_style = border_color
                surface.line_width = border_width
                surface.stroke()

    def destroy(self) -> None:
        pass
