"""Numeric, colour and easing utilities shared by the chart renderers.

Everything here is pure (no Qt) so it is unit tested headlessly; the only
function touching a surface is ``setup_surface`` which talks to the
``DrawingSurface`` protocol.
"""

from __future__ import annotations

import logging
import math
import re
from numbers import Real
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .settings import DEFAULT_EASING, FALLBACK_COLOR
from .types import ValueRange

log = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_COLORS",
    "EASING_FUNCTIONS",
    "resolve_color_range",
    "hex_to_rgba",
    "clamp",
    "lerp",
    "compute_range",
    "get_easing",
    "deg_to_rad",
    "rad_to_deg",
    "format_tick",
    "point_value",
    "point_xy",
    "setup_surface",
]

DEFAULT_COLORS: Tuple[str, ...] = (
    "#3498db",
    "#e74c3c",
    "#2ecc71",
    "#f39c12",
    "#9b59b6",
    "#1abc9c",
    "#34495e",
    "#e67e22",
    "#95a5a6",
    "#d35400",
)

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


# Colours ---------------------------------------------------------------------


def resolve_color_range(colors: Any, length: int) -> List[str]:
    """Return exactly ``length`` colours.

    A single colour is broadcast; a sequence is sliced when too long or
    padded by repeating its last entry when too short.
    """
    if length <= 0:
        return []
    if isinstance(colors, (list, tuple)):
        if len(colors) >= length:
            return list(colors[:length])
        pad = colors[-1] if colors else FALLBACK_COLOR
        return list(colors) + [pad] * (length - len(colors))
    return [colors] * length


def hex_to_rgba(hex_color: str, alpha: float = 1) -> str:
    m = _HEX_RE.match(hex_color or "")
    if not m:
        return f"rgba(52, 152, 219, {alpha})"
    r, g, b = (int(part, 16) for part in m.groups())
    return f"rgba({r}, {g}, {b}, {alpha})"


# Math ------------------------------------------------------------------------


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def lerp(start: float, end: float, progress: float) -> float:
    return start + (end - start) * progress


def compute_range(values: Iterable[float]) -> ValueRange:
    """Min/max of ``values`` padded by 10% of the span on both ends.

    Empty input yields ``0..1``. When every value is equal the span is zero,
    so the padding falls back to 10% of the magnitude (0.5 around zero) to
    keep ``min < max`` for the pixel mapping.
    """
    seq = [float(v) for v in values]
    if not seq:
        return ValueRange(0.0, 1.0)
    lo = min(seq)
    hi = max(seq)
    padding = (hi - lo) * 0.1
    if padding == 0:
        padding = abs(lo) * 0.1 or 0.5
    return ValueRange(lo - padding, hi + padding)


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180


def rad_to_deg(radians: float) -> float:
    return radians * 180 / math.pi


def format_tick(value: float) -> str:
    text = f"{value:.1f}"
    return "0.0" if text == "-0.0" else text


# Data points -----------------------------------------------------------------


def point_value(value: Any) -> Optional[float]:
    """Value-axis magnitude of a scalar or ``{x, y}`` data element."""
    if isinstance(value, bool):
        return None
    if isinstance(value, Real):
        return float(value)
    if isinstance(value, Mapping):
        y = value.get("y")
        return float(y) if isinstance(y, Real) else None
    y = getattr(value, "y", None)
    return float(y) if isinstance(y, Real) else None


def point_xy(value: Any) -> Optional[Tuple[float, float]]:
    """``(x, y)`` of a point element, or None for scalars / malformed entries."""
    if isinstance(value, Mapping):
        x, y = value.get("x"), value.get("y")
    else:
        x, y = getattr(value, "x", None), getattr(value, "y", None)
    if isinstance(x, Real) and isinstance(y, Real):
        return float(x), float(y)
    return None


# Easing ----------------------------------------------------------------------


def _ease_in_out(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "linear": lambda t: t,
    "easeIn": lambda t: t * t,
    "easeOut": lambda t: t * (2 - t),
    "easeInOut": _ease_in_out,
}


def get_easing(name: Optional[str]) -> Callable[[float], float]:
    fn = EASING_FUNCTIONS.get(name or DEFAULT_EASING)
    if fn is None:
        log.warning("Unknown easing %r; falling back to %s", name, DEFAULT_EASING)
        return EASING_FUNCTIONS[DEFAULT_EASING]
    return fn


# Surface ---------------------------------------------------------------------


def setup_surface(surface) -> float:
    """Scale the backing buffer by the device pixel ratio.

    Afterwards all drawing uses CSS-pixel coordinates. Must be called again
    whenever the displayed size changes. Returns the ratio applied.
    """
    ratio = surface.device_pixel_ratio() or 1.0
    width, height = surface.client_size()
    surface.resize_backing(int(round(width * ratio)), int(round(height * ratio)))
    surface.reset_transform()
    surface.scale(ratio, ratio)
    return ratio
