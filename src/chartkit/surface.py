"""Drawing surface contract and the headless recording surface.

The renderers talk to a small canvas-like API (paths, fills, strokes,
rectangles, text) expressed by ``DrawingSurface``. Two implementations ship:

 - ``RecordingSurface`` (this module): records every drawing call as a
   ``DrawCommand``. No Qt dependency; used by the test-suite and by callers
   that want the raw draw commands (e.g. to replay them elsewhere).
 - ``ImageSurface`` (``chartkit.qt_surface``): paints into a ``QImage``.

Size handling mirrors a browser canvas: ``client_size`` is the displayed size
in device independent pixels, ``resize_backing`` sets the pixel buffer size
(and resets the transform) and hosts call ``set_client_size`` when the
displayed size changes, which notifies every resize listener.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Protocol, Tuple, runtime_checkable

__all__ = [
    "DrawingSurface",
    "SurfaceBase",
    "RecordingSurface",
    "DrawCommand",
    "ResizeListener",
    "parse_font_px",
]

ResizeListener = Callable[[float, float], None]

_FONT_PX_RE = re.compile(r"(\d+(?:\.\d+)?)px")
_DEFAULT_FONT = "10px sans-serif"


def parse_font_px(font: str, default: float = 10.0) -> float:
    m = _FONT_PX_RE.search(font or "")
    return float(m.group(1)) if m else default


@runtime_checkable
class DrawingSurface(Protocol):  # pragma: no cover - structural only
    """Canvas-like drawing target the renderers paint onto."""

    fill_style: str
    stroke_style: str
    line_width: float
    font: str
    text_align: str
    text_baseline: str
    global_alpha: float

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def bezier_curve_to(
        self, cp1x: float, cp1y: float, cp2x: float, cp2y: float, x: float, y: float
    ) -> None: ...

    def arc(
        self, x: float, y: float, radius: float, start: float, end: float, anticlockwise: bool = False
    ) -> None: ...

    def close_path(self) -> None: ...

    def fill(self) -> None: ...

    def stroke(self) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def stroke_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...

    def measure_text(self, text: str) -> float: ...

    def scale(self, sx: float, sy: float) -> None: ...

    def reset_transform(self) -> None: ...

    def client_size(self) -> Tuple[float, float]: ...

    def device_pixel_ratio(self) -> float: ...

    def resize_backing(self, width: int, height: int) -> None: ...

    def add_resize_listener(self, listener: ResizeListener) -> None: ...

    def remove_resize_listener(self, listener: ResizeListener) -> None: ...


class SurfaceBase:
    """Shared canvas state, size bookkeeping and resize listeners."""

    def __init__(self, width: float, height: float, device_pixel_ratio: float = 1.0) -> None:
        self._client_width = float(width)
        self._client_height = float(height)
        self._ratio = float(device_pixel_ratio) if device_pixel_ratio else 1.0
        self._listeners: List[ResizeListener] = []
        self._scale: Tuple[float, float] = (1.0, 1.0)
        self.reset_state()

    def reset_state(self) -> None:
        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0
        self.font = _DEFAULT_FONT
        self.text_align = "start"
        self.text_baseline = "alphabetic"
        self.global_alpha = 1.0

    # Size -----------------------------------------------------------------
    def client_size(self) -> Tuple[float, float]:
        return self._client_width, self._client_height

    def device_pixel_ratio(self) -> float:
        return self._ratio

    def set_client_size(self, width: float, height: float, device_pixel_ratio: float | None = None) -> None:
        """Host hook: the displayed size changed; notify resize listeners."""
        self._client_width = float(width)
        self._client_height = float(height)
        if device_pixel_ratio:
            self._ratio = float(device_pixel_ratio)
        for listener in list(self._listeners):
            listener(self._client_width, self._client_height)

    def add_resize_listener(self, listener: ResizeListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_resize_listener(self, listener: ResizeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def resize_listener_count(self) -> int:
        return len(self._listeners)

    # Transform ------------------------------------------------------------
    def scale(self, sx: float, sy: float) -> None:
        self._scale = (self._scale[0] * sx, self._scale[1] * sy)

    def reset_transform(self) -> None:
        self._scale = (1.0, 1.0)

    @property
    def current_scale(self) -> Tuple[float, float]:
        return self._scale


@dataclass(frozen=True)
class DrawCommand:
    name: str
    args: Tuple[Any, ...] = ()
    style: Dict[str, Any] = field(default_factory=dict)


class RecordingSurface(SurfaceBase):
    """Surface recording draw commands instead of producing pixels.

    Paths are accumulated like a canvas path; ``fill`` / ``stroke`` commands
    carry the path segments they painted so callers can inspect geometry.
    """

    def __init__(self, width: float = 400, height: float = 300, device_pixel_ratio: float = 1.0) -> None:
        super().__init__(width, height, device_pixel_ratio)
        self.commands: List[DrawCommand] = []
        self.backing_size: Tuple[int, int] = (int(width), int(height))
        self._path: List[Tuple[Any, ...]] = []

    # Inspection -----------------------------------------------------------
    def named(self, name: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.name == name]

    def reset_commands(self) -> None:
        self.commands.clear()

    def _record(self, name: str, *args: Any, **style: Any) -> None:
        self.commands.append(DrawCommand(name, tuple(args), dict(style)))

    # Backing --------------------------------------------------------------
    def resize_backing(self, width: int, height: int) -> None:
        self.backing_size = (int(width), int(height))
        self.reset_transform()
        self.reset_state()
        self._path = []
        self._record("resize_backing", int(width), int(height))

    # Paths ----------------------------------------------------------------
    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append(("move_to", x, y))

    def line_to(self, x: float, y: float) -> None:
        self._path.append(("line_to", x, y))

    def bezier_curve_to(self, cp1x, cp1y, cp2x, cp2y, x, y) -> None:
        self._path.append(("bezier_curve_to", cp1x, cp1y, cp2x, cp2y, x, y))

    def arc(self, x, y, radius, start, end, anticlockwise: bool = False) -> None:
        self._path.append(("arc", x, y, radius, start, end, bool(anticlockwise)))

    def close_path(self) -> None:
        self._path.append(("close_path",))

    def fill(self) -> None:
        self._record("fill", *self._path, color=self.fill_style, alpha=self.global_alpha)

    def stroke(self) -> None:
        self._record(
            "stroke", *self._path, color=self.stroke_style, width=self.line_width, alpha=self.global_alpha
        )

    # Rectangles -----------------------------------------------------------
    def fill_rect(self, x, y, width, height) -> None:
        self._record("fill_rect", x, y, width, height, color=self.fill_style, alpha=self.global_alpha)

    def stroke_rect(self, x, y, width, height) -> None:
        self._record("stroke_rect", x, y, width, height, color=self.stroke_style, width=self.line_width)

    def clear_rect(self, x, y, width, height) -> None:
        self._record("clear_rect", x, y, width, height)

    # Text -----------------------------------------------------------------
    def fill_text(self, text: str, x: float, y: float) -> None:
        self._record(
            "fill_text",
            text,
            x,
            y,
            color=self.fill_style,
            font=self.font,
            align=self.text_align,
            baseline=self.text_baseline,
        )

    def measure_text(self, text: str) -> float:
        # Rough average glyph advance; good enough for layout without a font engine
        return len(text) * parse_font_px(self.font) * 0.6

    def scale(self, sx: float, sy: float) -> None:
        super().scale(sx, sy)
        self._record("scale", sx, sy)
