"""chartkit: animated statistical charts on a 2D drawing surface.

A ``Chart`` controller turns a declarative configuration (bar, line, area,
pie, doughnut, scatter) into draw calls on any surface implementing the
canvas-like ``DrawingSurface`` contract, advancing an eased animation one
frame at a time through a frame scheduler.

Surfaces: ``RecordingSurface`` (headless, records commands) and
``ImageSurface`` / ``ChartCanvasWidget`` (PyQt6) in ``chartkit.qt_surface``.
"""

from .controller import AnimationState, Chart  # noqa: F401
from .errors import ChartError, ExportError, SurfaceNotFound, UnsupportedChartType  # noqa: F401
from .helpers import (  # noqa: F401
    DEFAULT_COLORS,
    EASING_FUNCTIONS,
    clamp,
    compute_range,
    deg_to_rad,
    hex_to_rgba,
    lerp,
    rad_to_deg,
    resolve_color_range,
    setup_surface,
)
from .registry import RendererRegistry, renderer_registry  # noqa: F401
from .scheduler import ManualFrameScheduler, QtFrameScheduler  # noqa: F401
from .surface import DrawingSurface, RecordingSurface  # noqa: F401
from .surface_registry import surfaces  # noqa: F401
from .types import Bounds, ChartConfig, ChartType, DataPoint  # noqa: F401

__version__ = "0.1.0"
