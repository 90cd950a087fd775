"""Cartesian layout helpers (plot rectangle, grid, axes, fonts).

Bar, line and scatter renderers place their own legend and category ticks
but share these rules so the plot rectangle and value axis line up across
chart types.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Tuple

from ..helpers import format_tick
from ..settings import (
    GRID_DIVISIONS,
    LEGEND_BAND_HEIGHT,
    PLOT_INSET_BOTTOM,
    PLOT_INSET_LEFT,
    PLOT_INSET_RIGHT,
    PLOT_INSET_TOP,
    TICK_LABEL_OFFSET,
)
from ..surface import DrawingSurface
from ..types import Bounds, ValueRange

AXIS_COLOR = "#333"
GRID_FALLBACK_COLOR = "rgba(0,0,0,0.1)"
TICK_FALLBACK_COLOR = "#666"


def legend_visible(options: Mapping[str, Any]) -> bool:
    return bool((options.get("legend") or {}).get("display"))


def css_font(font: Mapping[str, Any] | None, default_size: int, default_family: str = "Arial") -> str:
    font = font or {}
    return f"{font.get('size') or default_size}px {font.get('family') or default_family}"


def legend_font(options: Mapping[str, Any]) -> str:
    labels = (options.get("legend") or {}).get("labels") or {}
    return css_font(labels.get("font"), 12)


def legend_text_color(options: Mapping[str, Any]) -> str:
    labels = (options.get("legend") or {}).get("labels") or {}
    return labels.get("color") or "#333"


def plot_bounds(bounds: Bounds, options: Mapping[str, Any]) -> Bounds:
    """Inner plot rectangle: bounds minus legend band and axis label margins."""
    legend_height = LEGEND_BAND_HEIGHT if legend_visible(options) else 0
    return Bounds(
        x=bounds.x + PLOT_INSET_LEFT,
        y=bounds.y + legend_height + PLOT_INSET_TOP,
        width=bounds.width - PLOT_INSET_LEFT - PLOT_INSET_RIGHT,
        height=bounds.height - legend_height - PLOT_INSET_BOTTOM,
    )


def value_to_y(value: float, value_range: ValueRange, plot: Bounds) -> float:
    """Map a value-axis magnitude to a pixel row (larger value -> smaller y)."""
    return plot.bottom - ((value - value_range.min) / value_range.span) * plot.height


def _axis(scales: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    return (scales or {}).get(name) or {}


def grid_enabled(scales: Mapping[str, Any]) -> Tuple[bool, bool]:
    """(x grid, y grid) display flags."""
    x_grid = (_axis(scales, "x").get("grid") or {}).get("display")
    y_grid = (_axis(scales, "y").get("grid") or {}).get("display")
    return bool(x_grid), bool(y_grid)


def apply_grid_style(surface: DrawingSurface, scales: Mapping[str, Any]) -> None:
    grid = _axis(scales, "y").get("grid") or {}
    surface.stroke_style = grid.get("color") or GRID_FALLBACK_COLOR
    surface.line_width = grid.get("lineWidth") or 1


def draw_horizontal_grid(surface: DrawingSurface, plot: Bounds) -> None:
    for i in range(GRID_DIVISIONS + 1):
        y = plot.y + (plot.height / GRID_DIVISIONS) * i
        surface.begin_path()
        surface.move_to(plot.x, y)
        surface.line_to(plot.right, y)
        surface.stroke()


def draw_vertical_grid(surface: DrawingSurface, plot: Bounds, xs: Iterable[float]) -> None:
    for x in xs:
        surface.begin_path()
        surface.move_to(x, plot.y)
        surface.line_to(x, plot.bottom)
        surface.stroke()


def _axis_line(surface: DrawingSurface, x0: float, y0: float, x1: float, y1: float) -> None:
    surface.stroke_style = AXIS_COLOR
    surface.line_width = 1
    surface.begin_path()
    surface.move_to(x0, y0)
    surface.line_to(x1, y1)
    surface.stroke()


def _apply_tick_style(surface: DrawingSurface, ticks: Mapping[str, Any]) -> None:
    surface.fill_style = ticks.get("color") or TICK_FALLBACK_COLOR
    surface.font = css_font(ticks.get("font"), 10)


def draw_value_axis(
    surface: DrawingSurface, plot: Bounds, scales: Mapping[str, Any], value_range: ValueRange
) -> None:
    """Y axis line plus GRID_DIVISIONS + 1 tick labels, right-aligned to the margin."""
    axis = _axis(scales, "y")
    if not axis.get("display"):
        return
    _axis_line(surface, plot.x, plot.y, plot.x, plot.bottom)
    ticks = axis.get("ticks") or {}
    if not ticks.get("display"):
        return
    _apply_tick_style(surface, ticks)
    surface.text_align = "right"
    surface.text_baseline = "middle"
    for i in range(GRID_DIVISIONS + 1):
        value = value_range.min + value_range.span * (1 - i / GRID_DIVISIONS)
        y = plot.y + (plot.height / GRID_DIVISIONS) * i
        surface.fill_text(format_tick(value), plot.x - TICK_LABEL_OFFSET, y)


def draw_category_axis(
    surface: DrawingSurface,
    plot: Bounds,
    scales: Mapping[str, Any],
    ticks_at: Iterable[Tuple[str, float]] | None,
) -> None:
    """X axis line plus centred tick labels at the given (text, x) positions."""
    axis = _axis(scales, "x")
    if not axis.get("display"):
        return
    _axis_line(surface, plot.x, plot.bottom, plot.right, plot.bottom)
    ticks = axis.get("ticks") or {}
    if not ticks.get("display") or ticks_at is None:
        return
    _apply_tick_style(surface, ticks)
    surface.text_align = "center"
    surface.text_baseline = "top"
    for text, x in ticks_at:
        surface.fill_text(text, x, plot.bottom + TICK_LABEL_OFFSET)
