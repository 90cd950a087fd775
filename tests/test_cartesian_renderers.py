"""Tests for bar / line / area / scatter renderers.

All drawing goes to a ``RecordingSurface``. With padding 10 and the legend
hidden, a 400x300 surface yields bounds (10, 10, 380, 280) and the plot
rectangle (60, 20, 300, 230).
"""

from __future__ import annotations

import math

import pytest

from chartkit.options import normalize_config
from chartkit.renderers import AreaRenderer, BarRenderer, LineRenderer, ScatterRenderer
from chartkit.renderers.layout import plot_bounds
from chartkit.types import Bounds

BOUNDS = Bounds(10, 10, 380, 280)
NO_LEGEND = {"legend": {"display": False}}


def _config(chart_type, labels, datasets, **options):
    return normalize_config(
        {
            "type": chart_type,
            "data": {"labels": labels, "datasets": datasets},
            "options": {**NO_LEGEND, **options},
        }
    )


def test_plot_bounds_subtracts_legend_band_and_margins():
    with_legend = plot_bounds(BOUNDS, {"legend": {"display": True}})
    assert (with_legend.x, with_legend.y, with_legend.width, with_legend.height) == (60, 70, 300, 180)
    without = plot_bounds(BOUNDS, NO_LEGEND)
    assert (without.x, without.y, without.width, without.height) == (60, 20, 300, 230)


# Bar -------------------------------------------------------------------------


@pytest.mark.parametrize(
    "values", [[10, 20], [-5, -1], [3, -7, 12], [100], []],
)
def test_bar_value_range_always_includes_zero(values):
    renderer = BarRenderer(_config("bar", ["x"] * len(values), [{"data": values}]))
    assert renderer.value_range.min <= 0


def test_bar_negative_values_draw_down_from_zero(surface):
    renderer = BarRenderer(_config("bar", ["A", "B"], [{"data": [-10, 20]}]))
    renderer.draw(surface, Bounds(10, 10, 380, 280), 1.0)
    neg, pos = surface.named("fill_rect")[-2:]
    # range -13..23 over a 230px plot whose bottom sits at 250
    zero_y = 250 - (13 / 36) * 230
    assert neg.args[1] == pytest.approx(zero_y)
    assert neg.args[3] == pytest.approx(10 / 36 * 230)
    assert pos.args[1] + pos.args[3] == pytest.approx(zero_y)
    assert pos.args[3] == pytest.approx(20 / 36 * 230)


def test_bar_grows_from_baseline(surface):
    renderer = BarRenderer(_config("bar", ["A"], [{"data": [10]}]))
    renderer.draw(surface, BOUNDS, 0.0)
    start = surface.named("fill_rect")[-1]
    surface.reset_commands()
    renderer.draw(surface, BOUNDS, 0.5)
    half = surface.named("fill_rect")[-1]
    surface.reset_commands()
    renderer.draw(surface, BOUNDS, 1.0)
    full = surface.named("fill_rect")[-1]
    assert start.args[3] == pytest.approx(0)
    assert half.args[3] == pytest.approx(full.args[3] / 2)


def test_bar_groups_share_slot(surface):
    renderer = BarRenderer(
        _config("bar", ["A", "B"], [{"data": [1, 2], "backgroundColor": "#aa0000"}, {"data": [3, 4]}])
    )
    renderer.draw(surface, BOUNDS, 1.0)
    bars = surface.named("fill_rect")[-4:]
    # slot = 150, group = 120, bar = 60 (minus 1px gap)
    assert [round(b.args[0], 6) for b in bars] == [75, 225, 135, 285]
    assert all(b.args[2] == pytest.approx(59) for b in bars)
    assert bars[0].style["color"] == "#aa0000"
    assert bars[2].style["color"] == "#e74c3c"


def test_bar_border_uses_stroke_rect(surface):
    renderer = BarRenderer(
        _config("bar", ["A"], [{"data": [5], "borderColor": "#000", "borderWidth": 2}])
    )
    renderer.draw(surface, BOUNDS, 1.0)
    border = surface.named("stroke_rect")[-1]
    assert border.style == {"color": "#000", "width": 2}


def test_bar_value_axis_labels(surface):
    renderer = BarRenderer(_config("bar", ["A", "B"], [{"data": [10, 20]}]))
    renderer.draw(surface, BOUNDS, 1.0)
    texts = [c.args[0] for c in surface.named("fill_text")]
    assert texts[:6] == ["21.0", "16.8", "12.6", "8.4", "4.2", "0.0"]
    assert texts[6:] == ["A", "B"]
    assert surface.named("fill_text")[0].style["align"] == "right"


def test_bar_legend_advances_by_text_width(surface):
    config = normalize_config(
        {
            "type": "bar",
            "data": {"labels": ["A"], "datasets": [{"label": "Sales", "data": [1]}, {"data": [2]}]},
        }
    )
    BarRenderer(config).draw(surface, BOUNDS, 1.0)
    legend_texts = [c for c in surface.named("fill_text") if c.args[0] in ("Sales", "Dataset 2")]
    first, second = legend_texts
    assert first.args[1] == 10 + 20 + 28
    # "Sales" at 12px in the recording surface measures 5 * 12 * 0.6 = 36
    assert second.args[1] == pytest.approx(first.args[1] + 36 + 70)


def test_empty_datasets_draw_nothing(surface):
    for renderer_cls, chart_type in [
        (BarRenderer, "bar"),
        (LineRenderer, "line"),
        (AreaRenderer, "area"),
        (ScatterRenderer, "scatter"),
    ]:
        renderer_cls(_config(chart_type, ["A"], [])).draw(surface, BOUNDS, 1.0)
    assert surface.commands == []


def test_missing_labels_skip_series_without_error(surface):
    renderer = BarRenderer(_config("bar", None, [{"data": [1, 2]}]))
    renderer.draw(surface, BOUNDS, 1.0)
    assert surface.named("fill_rect") == []


# Line / area -----------------------------------------------------------------


def _line(**dataset):
    return LineRenderer(_config("line", ["a", "b", "c"], [{"data": [0, 10, 20], **dataset}]))


def test_line_points_rise_from_bottom():
    renderer = _line()
    plot = plot_bounds(BOUNDS, NO_LEGEND)
    dataset = renderer.config.datasets[0]
    assert [y for _, y in renderer.animated_points(dataset, plot, 0)] == [250, 250, 250]
    points = renderer.animated_points(dataset, plot, 1)
    assert [x for x, _ in points] == [60, 210, 360]
    # range -2..22, value 10 sits halfway
    assert points[1][1] == pytest.approx(250 - 0.5 * 230)


def test_line_tension_uses_per_segment_bezier(surface):
    renderer = _line(tension=0.5, borderColor="#ff0000")
    renderer.draw(surface, BOUNDS, 1.0)
    line = [c for c in surface.named("stroke") if c.style["color"] == "#ff0000"][0]
    assert line.args[0][0] == "move_to"
    _, cp1x, cp1y, cp2x, cp2y, x, y = line.args[1]
    y0 = line.args[0][2]
    assert (cp1x, cp1y) == (pytest.approx(135), y0)
    assert (cp2x, cp2y) == (pytest.approx(135), y)
    assert x == pytest.approx(210)


def test_line_without_tension_uses_straight_segments(surface):
    _line(borderColor="#ff0000").draw(surface, BOUNDS, 1.0)
    line = [c for c in surface.named("stroke") if c.style["color"] == "#ff0000"][0]
    assert [seg[0] for seg in line.args] == ["move_to", "line_to", "line_to"]
    assert line.style["width"] == 2


def test_line_fill_closes_to_baseline_at_thirty_percent(surface):
    _line(fill=True, borderColor="#00ff00").draw(surface, BOUNDS, 1.0)
    area = [c for c in surface.named("fill") if c.style["alpha"] == pytest.approx(0.3)][0]
    assert area.style["color"] == "#00ff00"
    assert area.args[0] == ("move_to", 60, 250)
    assert area.args[-2] == ("line_to", 360, 250)
    assert area.args[-1] == ("close_path",)
    # markers are painted opaque afterwards
    assert surface.named("fill")[-1].style["alpha"] == 1.0


def test_line_single_label_is_centred():
    renderer = LineRenderer(_config("line", ["only"], [{"data": [4]}]))
    plot = plot_bounds(BOUNDS, NO_LEGEND)
    (x, _), = renderer.animated_points(renderer.config.datasets[0], plot, 1)
    assert x == pytest.approx(210)


def test_area_forces_fill_and_owns_line():
    config = _config("area", ["a", "b"], [{"data": [1, 2]}, {"data": [3, 4], "fill": False}])
    area = AreaRenderer(config)
    assert all(ds["fill"] is True for ds in area.line.config.datasets)
    # the caller's configuration is left untouched
    assert "fill" not in config.datasets[0]
    assert area.line.value_range == LineRenderer(config).value_range


def test_area_draws_filled_series_and_destroy_releases_line(surface):
    area = AreaRenderer(_config("area", ["a", "b"], [{"data": [1, 2]}]))
    area.draw(surface, BOUNDS, 1.0)
    assert any(c.style["alpha"] == pytest.approx(0.3) for c in surface.named("fill"))
    area.destroy()
    assert area.line is None
    surface.reset_commands()
    area.draw(surface, BOUNDS, 1.0)
    area.destroy()
    assert surface.commands == []


# Scatter ---------------------------------------------------------------------


def _scatter():
    return ScatterRenderer(
        _config(
            "scatter",
            None,
            [{"data": [{"x": 0, "y": 0}, {"x": 10, "y": 10}], "backgroundColor": "#123456"}],
        )
    )


def test_scatter_caches_independent_ranges():
    rng = _scatter().point_range
    assert (rng.min_x, rng.max_x, rng.min_y, rng.max_y) == pytest.approx((-1, 11, -1, 11))


def test_scatter_animates_radius_only(surface):
    renderer = _scatter()
    renderer.draw(surface, BOUNDS, 0.25)
    early = [c.args[0] for c in surface.named("fill") if c.style["color"] == "#123456"]
    surface.reset_commands()
    renderer.draw(surface, BOUNDS, 1.0)
    late = [c.args[0] for c in surface.named("fill") if c.style["color"] == "#123456"]
    assert [a[1:3] for a in early] == [a[1:3] for a in late]
    assert all(a[3] == pytest.approx(1.0) for a in early)
    assert all(a[3] == pytest.approx(4.0) for a in late)
    assert late[0][1:3] == pytest.approx((60 + 300 / 12, 250 - 230 / 12))


def test_scatter_x_ticks_are_numeric(surface):
    _scatter().draw(surface, BOUNDS, 1.0)
    texts = [c.args[0] for c in surface.named("fill_text") if c.style["baseline"] == "top"]
    assert texts == ["-1.0", "1.4", "3.8", "6.2", "8.6", "11.0"]


def test_scatter_ignores_scalar_elements():
    renderer = ScatterRenderer(_config("scatter", None, [{"data": [1, 2, 3]}]))
    rng = renderer.point_range
    assert (rng.min_x, rng.max_x) == (0, 1)
    assert math.isfinite(rng.max_y)
