"""PyQt6 drawing surfaces.

``ImageSurface`` implements the ``DrawingSurface`` contract on top of a
``QImage`` backing buffer: every fill / stroke / text call opens a short-lived
``QPainter``, applies the current scale transform and paints. Paths are kept
in user (CSS pixel) coordinates as a ``QPainterPath`` with winding fill so a
doughnut ring (outer arc forward, inner arc backward) fills as a ring.

``ChartCanvasWidget`` is a minimal Qt host: it owns an ``ImageSurface``,
pushes its widget size into it on resize (which notifies the chart's resize
listener) and blits the backing image in ``paintEvent``.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import (
    QBrush,
    QColor,
    QFont,
    QFontMetricsF,
    QImage,
    QPainter,
    QPainterPath,
    QPen,
    QTransform,
)
from PyQt6.QtWidgets import QWidget

from .settings import FORCED_DEVICE_PIXEL_RATIO
from .surface import SurfaceBase, parse_font_px

__all__ = ["ImageSurface", "ChartCanvasWidget", "to_qcolor", "to_qfont", "arc_sweep"]

_RGBA_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)
_TWO_PI = math.pi * 2


def to_qcolor(css: str) -> QColor:
    """Convert a CSS colour string (hex, named, rgb(), rgba()) to ``QColor``."""
    text = (css or "").strip()
    m = _RGBA_RE.match(text)
    if m:
        parts = [p.strip() for p in m.group(1).split(",")]
        try:
            r, g, b = (int(float(p)) for p in parts[:3])
            alpha = float(parts[3]) if len(parts) > 3 else 1.0
        except (ValueError, IndexError):
            return QColor(0, 0, 0)
        color = QColor(r, g, b)
        color.setAlphaF(max(0.0, min(1.0, alpha)))
        return color
    color = QColor(text)
    return color if color.isValid() else QColor(0, 0, 0)


def to_qfont(css_font: str) -> QFont:
    """Build a ``QFont`` from CSS shorthand like ``"12px Arial, sans-serif"``."""
    size = parse_font_px(css_font)
    family = (css_font or "").split("px", 1)[-1].strip() or "sans-serif"
    primary = family.split(",")[0].strip().strip("'\"") or "sans-serif"
    font = QFont(primary)
    font.setPixelSize(max(1, int(round(size))))
    if "bold" in (css_font or "").lower():
        font.setBold(True)
    return font


def arc_sweep(start: float, end: float, anticlockwise: bool) -> float:
    """Signed sweep (radians) of a canvas arc from ``start`` to ``end``.

    Positive sweeps run clockwise on screen (y axis pointing down).
    """
    if not anticlockwise:
        delta = end - start
        if delta >= _TWO_PI:
            return _TWO_PI
        return delta % _TWO_PI if delta != 0 else 0.0
    delta = start - end
    if delta >= _TWO_PI:
        return -_TWO_PI
    return -(delta % _TWO_PI) if delta != 0 else 0.0


class ImageSurface(SurfaceBase):
    """Offscreen surface painting into a ``QImage`` (ARGB32 premultiplied)."""

    def __init__(self, width: float = 400, height: float = 300, device_pixel_ratio: float | None = None) -> None:
        ratio = device_pixel_ratio or FORCED_DEVICE_PIXEL_RATIO or 1.0
        super().__init__(width, height, ratio)
        self._image = QImage(
            max(1, int(round(width * ratio))),
            max(1, int(round(height * ratio))),
            QImage.Format.Format_ARGB32_Premultiplied,
        )
        self._image.fill(Qt.GlobalColor.transparent)
        self._path = QPainterPath()
        self._path.setFillRule(Qt.FillRule.WindingFill)
        self.on_change = None  # optional callable invoked after each paint op

    @property
    def image(self) -> QImage:
        return self._image

    # Backing --------------------------------------------------------------
    def resize_backing(self, width: int, height: int) -> None:
        self._image = QImage(max(1, int(width)), max(1, int(height)), QImage.Format.Format_ARGB32_Premultiplied)
        self._image.fill(Qt.GlobalColor.transparent)
        self.reset_transform()
        self.reset_state()
        self.begin_path()

    def save(self, path: str, fmt: Optional[str] = None) -> bool:
        return self._image.save(path, fmt.upper() if fmt else None)

    # Painter plumbing -----------------------------------------------------
    def _painter(self) -> QPainter:
        painter = QPainter(self._image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
        sx, sy = self.current_scale
        painter.setTransform(QTransform.fromScale(sx, sy))
        painter.setOpacity(max(0.0, min(1.0, self.global_alpha)))
        return painter

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # Paths ----------------------------------------------------------------
    def begin_path(self) -> None:
        self._path = QPainterPath()
        self._path.setFillRule(Qt.FillRule.WindingFill)

    def move_to(self, x: float, y: float) -> None:
        self._path.moveTo(x, y)

    def line_to(self, x: float, y: float) -> None:
        if self._path.elementCount() == 0:
            self._path.moveTo(x, y)
        else:
            self._path.lineTo(x, y)

    def bezier_curve_to(self, cp1x, cp1y, cp2x, cp2y, x, y) -> None:
        if self._path.elementCount() == 0:
            self._path.moveTo(cp1x, cp1y)
        self._path.cubicTo(QPointF(cp1x, cp1y), QPointF(cp2x, cp2y), QPointF(x, y))

    def arc(self, x, y, radius, start, end, anticlockwise: bool = False) -> None:
        radius = max(0.0, float(radius))
        rect = QRectF(x - radius, y - radius, radius * 2, radius * 2)
        sweep = arc_sweep(start, end, anticlockwise)
        # Qt measures degrees counter-clockwise; canvas radians run clockwise
        start_deg = -math.degrees(start)
        sweep_deg = -math.degrees(sweep)
        if self._path.elementCount() == 0:
            self._path.arcMoveTo(rect, start_deg)
        self._path.arcTo(rect, start_deg, sweep_deg)

    def close_path(self) -> None:
        self._path.closeSubpath()

    def fill(self) -> None:
        painter = self._painter()
        try:
            painter.fillPath(self._path, QBrush(to_qcolor(self.fill_style)))
        finally:
            painter.end()
        self._changed()

    def stroke(self) -> None:
        painter = self._painter()
        try:
            painter.strokePath(self._path, QPen(to_qcolor(self.stroke_style), self.line_width))
        finally:
            painter.end()
        self._changed()

    # Rectangles -----------------------------------------------------------
    def fill_rect(self, x, y, width, height) -> None:
        painter = self._painter()
        try:
            painter.fillRect(QRectF(x, y, width, height).normalized(), to_qcolor(self.fill_style))
        finally:
            painter.end()
        self._changed()

    def stroke_rect(self, x, y, width, height) -> None:
        painter = self._painter()
        try:
            painter.setPen(QPen(to_qcolor(self.stroke_style), self.line_width))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRect(QRectF(x, y, width, height).normalized())
        finally:
            painter.end()
        self._changed()

    def clear_rect(self, x, y, width, height) -> None:
        painter = self._painter()
        try:
            painter.setOpacity(1.0)
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
            painter.fillRect(QRectF(x, y, width, height).normalized(), Qt.GlobalColor.transparent)
        finally:
            painter.end()
        self._changed()

    # Text -----------------------------------------------------------------
    def measure_text(self, text: str) -> float:
        return QFontMetricsF(to_qfont(self.font)).horizontalAdvance(text)

    def fill_text(self, text: str, x: float, y: float) -> None:
        font = to_qfont(self.font)
        metrics = QFontMetricsF(font)
        width = metrics.horizontalAdvance(text)
        align = self.text_align
        if align in ("center",):
            x -= width / 2
        elif align in ("right", "end"):
            x -= width
        baseline = self.text_baseline
        if baseline == "top":
            y += metrics.ascent()
        elif baseline == "middle":
            y += (metrics.ascent() - metrics.descent()) / 2
        elif baseline == "bottom":
            y -= metrics.descent()
        painter = self._painter()
        try:
            painter.setFont(font)
            painter.setPen(to_qcolor(self.fill_style))
            painter.drawText(QPointF(x, y), text)
        finally:
            painter.end()
        self._changed()


class ChartCanvasWidget(QWidget):
    """Widget hosting an ``ImageSurface`` for a ``Chart``.

    Usage::
        canvas = ChartCanvasWidget()
        chart = Chart(canvas.surface, config, scheduler=QtFrameScheduler(parent=canvas))
    """

    def __init__(self, parent: Optional[QWidget] = None, *, width: int = 400, height: int = 300):
        super().__init__(parent)
        self.setObjectName("chartCanvas")
        self.resize(width, height)
        self._surface = ImageSurface(width, height, self._widget_ratio())
        self._surface.on_change = self.update

    @property
    def surface(self) -> ImageSurface:
        return self._surface

    def _widget_ratio(self) -> float:
        if FORCED_DEVICE_PIXEL_RATIO:
            return FORCED_DEVICE_PIXEL_RATIO
        try:
            return float(self.devicePixelRatioF()) or 1.0
        except RuntimeError:  # pragma: no cover - widget not yet realised
            return 1.0

    def resizeEvent(self, event):  # type: ignore[override]
        super().resizeEvent(event)
        size = event.size()
        self._surface.set_client_size(size.width(), size.height(), self._widget_ratio())

    def paintEvent(self, event):  # type: ignore[override]
        painter = QPainter(self)
        try:
            painter.drawImage(QRectF(0, 0, self.width(), self.height()), self._surface.image)
        finally:
            painter.end()
