"""Global layout and timing constants for the chart engine."""

from __future__ import annotations

import os
from typing import Final, Optional


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


FRAME_INTERVAL_MS: Final = int(os.environ.get("CHARTKIT_FRAME_INTERVAL_MS", "16"))
# Forces the device pixel ratio of offscreen image surfaces (None = ask the host)
FORCED_DEVICE_PIXEL_RATIO: Final = _env_float("CHARTKIT_DEVICE_PIXEL_RATIO")

DEFAULT_DURATION_MS: Final = 800
DEFAULT_EASING: Final = "easeInOut"
DEFAULT_PADDING: Final = 10
FALLBACK_COLOR: Final = "#3498db"

# Cartesian layout (bar, line, area, scatter)
LEGEND_BAND_HEIGHT: Final = 50
PLOT_INSET_LEFT: Final = 50
PLOT_INSET_RIGHT: Final = 30
PLOT_INSET_TOP: Final = 10
PLOT_INSET_BOTTOM: Final = 50
GRID_DIVISIONS: Final = 5
LEGEND_GUTTER: Final = 70
TICK_LABEL_OFFSET: Final = 5

# Radial layout (pie, doughnut)
RADIAL_LEGEND_HEIGHT: Final = 60
RADIAL_LEGEND_PER_ROW: Final = 4
RADIAL_LEGEND_ROW_HEIGHT: Final = 30
DOUGHNUT_INNER_RATIO: Final = 0.6
PIE_LABEL_RADIUS_RATIO: Final = 0.7
PIE_LABEL_MIN_PROGRESS: Final = 0.8
