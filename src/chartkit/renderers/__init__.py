"""Chart renderers, one per chart type."""

from .area import AreaRenderer  # noqa: F401
from .bar import BarRenderer  # noqa: F401
from .base import ChartRenderer  # noqa: F401
from .doughnut import DoughnutRenderer  # noqa: F401
from .line import LineRenderer  # noqa: F401
from .pie import PieRenderer  # noqa: F401
from .scatter import ScatterRenderer  # noqa: F401

__all__ = [
    "ChartRenderer",
    "BarRenderer",
    "LineRenderer",
    "AreaRenderer",
    "PieRenderer",
    "DoughnutRenderer",
    "ScatterRenderer",
]
