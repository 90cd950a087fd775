"""Tests for numeric / colour / easing helpers."""

from __future__ import annotations

import math

import pytest

from chartkit import RecordingSurface
from chartkit.helpers import (
    EASING_FUNCTIONS,
    clamp,
    compute_range,
    deg_to_rad,
    format_tick,
    get_easing,
    hex_to_rgba,
    lerp,
    point_value,
    point_xy,
    rad_to_deg,
    resolve_color_range,
    setup_surface,
)
from chartkit.types import DataPoint


def test_compute_range_empty_and_single():
    empty = compute_range([])
    assert (empty.min, empty.max) == (0, 1)
    single = compute_range([5])
    assert single.min == pytest.approx(4.5)
    assert single.max == pytest.approx(5.5)


def test_compute_range_pads_ten_percent_of_span():
    rng = compute_range([10, 20, 15])
    assert rng.min == pytest.approx(9)
    assert rng.max == pytest.approx(21)


def test_compute_range_equal_values_never_collapse():
    for values in ([0, 0], [-3, -3], [7.5]):
        rng = compute_range(values)
        assert rng.min < rng.max


def test_easing_endpoints():
    for name, fn in EASING_FUNCTIONS.items():
        assert fn(0) == pytest.approx(0), name
        assert fn(1) == pytest.approx(1), name
    assert EASING_FUNCTIONS["easeInOut"](0.5) == pytest.approx(0.5)
    assert EASING_FUNCTIONS["easeIn"](0.5) == pytest.approx(0.25)
    assert EASING_FUNCTIONS["easeOut"](0.5) == pytest.approx(0.75)


def test_unknown_easing_falls_back(caplog):
    with caplog.at_level("WARNING"):
        fn = get_easing("bounce")
    assert fn is EASING_FUNCTIONS["easeInOut"]
    assert "bounce" in caplog.text


def test_lerp_endpoints():
    for a, b in [(0, 10), (-5, 5), (3.5, -2.25)]:
        assert lerp(a, b, 0) == a
        assert lerp(a, b, 1) == b
    assert lerp(0, 4, 0.5) == 2


def test_resolve_color_range_pads_with_last():
    assert resolve_color_range(["#fff", "#000"], 5) == ["#fff", "#000", "#000", "#000", "#000"]


def test_resolve_color_range_slices_and_broadcasts():
    assert resolve_color_range(["a", "b", "c"], 2) == ["a", "b"]
    assert resolve_color_range("#123456", 3) == ["#123456"] * 3
    assert resolve_color_range([], 2) == ["#3498db", "#3498db"]
    assert resolve_color_range(["a"], 0) == []


def test_hex_to_rgba():
    assert hex_to_rgba("#ff8000", 0.5) == "rgba(255, 128, 0, 0.5)"
    assert hex_to_rgba("nonsense") == "rgba(52, 152, 219, 1)"


def test_small_math_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert deg_to_rad(180) == pytest.approx(math.pi)
    assert rad_to_deg(math.pi / 2) == pytest.approx(90)


def test_format_tick_one_decimal_without_negative_zero():
    assert format_tick(1.26) == "1.3"
    assert format_tick(-0.04) == "0.0"
    assert format_tick(-1.0) == "-1.0"


def test_point_accessors():
    assert point_value(3) == 3.0
    assert point_value({"x": 1, "y": 4}) == 4.0
    assert point_value(DataPoint(1, 2)) == 2.0
    assert point_value("x") is None
    assert point_xy({"x": 1, "y": 2}) == (1.0, 2.0)
    assert point_xy(5) is None


def test_setup_surface_scales_backing_by_ratio():
    surface = RecordingSurface(200, 100, device_pixel_ratio=2)
    ratio = setup_surface(surface)
    assert ratio == 2
    assert surface.backing_size == (400, 200)
    assert surface.current_scale == (2, 2)
    # re-running after a size change starts from a fresh transform
    surface.set_client_size(50, 50)
    setup_surface(surface)
    assert surface.backing_size == (100, 100)
    assert surface.current_scale == (2, 2)
