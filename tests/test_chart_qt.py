"""PyQt6 surface, widget host, frame scheduler, export and CLI tests.

Run offscreen (see conftest). Pixel checks sample points well inside a shape
so antialiasing never matters.
"""

from __future__ import annotations

import json
import math

import pytest
from PyQt6.QtGui import QImage

from chartkit import Chart, ManualFrameScheduler, QtFrameScheduler, RecordingSurface
from chartkit.__main__ import main
from chartkit.errors import ExportError
from chartkit.export import export_chart
from chartkit.qt_surface import ChartCanvasWidget, ImageSurface, arc_sweep, to_qcolor, to_qfont

STATIC = {"animation": {"duration": 0}, "legend": {"display": False}}


def _pixel(surface, x, y):
    return surface.image.pixelColor(x, y).name()


@pytest.mark.parametrize(
    "css,expected",
    [("#3498db", "#3498db"), ("red", "#ff0000"), ("rgb(10, 20, 30)", "#0a141e"), ("not-a-colour", "#000000")],
)
def test_to_qcolor(css, expected):
    assert to_qcolor(css).name() == expected


def test_to_qcolor_alpha():
    assert to_qcolor("rgba(0, 0, 0, 0.1)").alphaF() == pytest.approx(0.1, abs=0.01)
    assert to_qcolor("rgba(0, 0, 0, 7)").alphaF() == pytest.approx(1.0)


def test_to_qfont(qapp):
    font = to_qfont("12px Arial, sans-serif")
    assert font.pixelSize() == 12
    assert font.family() == "Arial"
    assert to_qfont("bold 14px Arial").bold()


def test_arc_sweep_follows_canvas_direction():
    assert arc_sweep(0, math.pi / 2, False) == pytest.approx(math.pi / 2)
    # anticlockwise from 0 to 90 degrees takes the long way round
    assert arc_sweep(0, math.pi / 2, True) == pytest.approx(-3 * math.pi / 2)
    assert arc_sweep(-math.pi / 2, 3 * math.pi / 2, False) == pytest.approx(2 * math.pi)
    assert arc_sweep(1.0, 1.0, False) == 0.0


def test_bar_chart_paints_pixels(qapp):
    surface = ImageSurface(400, 300, 1.0)
    config = {
        "type": "bar",
        "data": {"labels": ["A"], "datasets": [{"data": [10], "backgroundColor": "#ff0000"}]},
        "options": STATIC,
    }
    Chart(surface, config, scheduler=ManualFrameScheduler())
    assert _pixel(surface, 200, 150) == "#ff0000"
    # background outside the plot
    assert _pixel(surface, 5, 5) == "#ffffff"


def test_doughnut_leaves_hole(qapp):
    surface = ImageSurface(400, 300, 1.0)
    config = {
        "type": "doughnut",
        "data": {"labels": ["a"], "datasets": [{"data": [1], "backgroundColor": ["#00ff00"]}]},
        "options": STATIC,
    }
    Chart(surface, config, scheduler=ManualFrameScheduler())
    assert _pixel(surface, 200, 150) == "#ffffff"
    assert _pixel(surface, 280, 150) == "#00ff00"
    assert _pixel(surface, 200, 70) == "#00ff00"


def test_image_surface_backing_follows_ratio(qapp):
    surface = ImageSurface(200, 100, 2.0)
    Chart(surface, {"type": "pie", "data": {}, "options": STATIC}, scheduler=ManualFrameScheduler())
    assert (surface.image.width(), surface.image.height()) == (400, 200)
    assert surface.current_scale == (2.0, 2.0)


def test_canvas_widget_resize_redraws(qtbot):
    widget = ChartCanvasWidget(width=400, height=300)
    qtbot.addWidget(widget)
    config = {"type": "bar", "data": {"labels": ["A"], "datasets": [{"data": [1]}]}, "options": STATIC}
    chart = Chart(widget.surface, config, scheduler=ManualFrameScheduler())
    widget.show()
    widget.resize(500, 350)
    qtbot.waitUntil(lambda: widget.surface.client_size() == (500, 350), timeout=2000)
    ratio = widget.surface.device_pixel_ratio()
    assert widget.surface.image.width() == round(500 * ratio)
    assert chart.bounds().width == 480
    chart.destroy()
    assert widget.surface.resize_listener_count == 0


def test_qt_scheduler_fires_and_cancels(qtbot):
    scheduler = QtFrameScheduler(interval_ms=5)
    fired = []
    scheduler.request_frame(fired.append)
    cancelled = scheduler.request_frame(lambda now: fired.append("cancelled"))
    scheduler.cancel_frame(cancelled)
    scheduler.cancel_frame(cancelled)
    qtbot.waitUntil(lambda: len(fired) == 1, timeout=1000)
    qtbot.wait(30)
    assert fired[0] > 0
    assert "cancelled" not in fired
    assert scheduler.pending_count == 0


def test_chart_animates_with_qt_scheduler(qtbot):
    surface = RecordingSurface()
    config = {
        "type": "line",
        "data": {"labels": ["a", "b"], "datasets": [{"data": [1, 2]}]},
        "options": {"animation": {"duration": 60}},
    }
    chart = Chart(surface, config, scheduler=QtFrameScheduler(interval_ms=5))
    assert chart.is_animating
    qtbot.waitUntil(lambda: not chart.is_animating, timeout=2000)
    assert chart.scheduler.pending_count == 0


# Export / CLI ----------------------------------------------------------------


def _image_chart(chart_type="bar"):
    config = {"type": chart_type, "data": {"labels": ["A"], "datasets": [{"data": [3]}]}, "options": STATIC}
    return Chart(ImageSurface(320, 200, 1.0), config, scheduler=ManualFrameScheduler())


def test_export_png(qapp, tmp_path):
    path = tmp_path / "chart.png"
    export_chart(_image_chart(), str(path))
    image = QImage(str(path))
    assert (image.width(), image.height()) == (320, 200)


def test_export_rejects_unknown_format(qapp, tmp_path):
    with pytest.raises(ExportError) as exc:
        export_chart(_image_chart(), str(tmp_path / "chart.gif"), format="gif")
    assert exc.value.context == {"format": "gif"}


def test_export_requires_image_surface(tmp_path):
    chart = Chart(
        RecordingSurface(),
        {"type": "pie", "data": {}, "options": STATIC},
        scheduler=ManualFrameScheduler(),
    )
    with pytest.raises(ExportError):
        export_chart(chart, str(tmp_path / "chart.png"))


def test_export_to_missing_directory_fails(qapp, tmp_path):
    with pytest.raises(ExportError):
        export_chart(_image_chart(), str(tmp_path / "missing" / "chart.png"))


def test_cli_renders_config(qapp, tmp_path, capsys):
    config_path = tmp_path / "chart.json"
    config_path.write_text(
        json.dumps({"type": "pie", "data": {"labels": ["a", "b"], "datasets": [{"data": [1, 2]}]}}),
        encoding="utf-8",
    )
    out = tmp_path / "chart.png"
    assert main(["render", str(config_path), str(out), "--width", "200", "--height", "100"]) == 0
    image = QImage(str(out))
    assert (image.width(), image.height()) == (200, 100)
    assert str(out) in capsys.readouterr().out


def test_cli_reports_chart_errors(qapp, tmp_path, capsys):
    config_path = tmp_path / "chart.json"
    config_path.write_text(json.dumps({"type": "radar", "data": {}}), encoding="utf-8")
    assert main(["render", str(config_path), str(tmp_path / "out.png")]) == 2
    assert "Unsupported chart type" in capsys.readouterr().err
