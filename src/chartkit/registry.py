"""Renderer registry.

Maps each ``ChartType`` to the renderer class that draws it. The controller
dispatches through a registry instead of branching on the type tag, and a
tag outside the closed ``ChartType`` set (or one without a registered
renderer) is rejected with ``UnsupportedChartType``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict

from .errors import UnsupportedChartType
from .renderers import (
    AreaRenderer,
    BarRenderer,
    ChartRenderer,
    DoughnutRenderer,
    LineRenderer,
    PieRenderer,
    ScatterRenderer,
)
from .types import ChartConfig, ChartType

__all__ = ["RendererType", "RendererRegistry", "renderer_registry", "default_registry"]

RendererFactory = Callable[[ChartConfig], ChartRenderer]


@dataclass
class RendererType:
    """Metadata for a registered renderer."""

    chart_type: ChartType
    factory: RendererFactory
    description: str


class RendererRegistry:
    def __init__(self) -> None:
        self._types: Dict[ChartType, RendererType] = {}

    def register(self, chart_type: ChartType | str, factory: RendererFactory, description: str = "") -> None:
        key = self._coerce(chart_type)
        if key in self._types:
            raise ValueError(f"Renderer already registered for chart type: {key.value}")
        self._types[key] = RendererType(key, factory, description)

    def get(self, chart_type: ChartType | str) -> RendererType:
        key = self._coerce(chart_type)
        entry = self._types.get(key)
        if entry is None:
            raise UnsupportedChartType(
                f"Unsupported chart type: {key.value}", context={"type": key.value}
            )
        return entry

    def create(self, config: ChartConfig) -> ChartRenderer:
        """Resolve the renderer for ``config.type`` and construct it."""
        return self.get(config.type).factory(config)

    def list_types(self) -> Dict[str, str]:
        return {k.value: v.description for k, v in self._types.items()}

    @staticmethod
    def _coerce(chart_type: ChartType | str) -> ChartType:
        try:
            return ChartType(chart_type)
        except ValueError:
            raise UnsupportedChartType(
                f"Unsupported chart type: {chart_type}", context={"type": chart_type}
            ) from None


def default_registry() -> RendererRegistry:
    """Fresh registry holding the six built-in renderers."""
    registry = RendererRegistry()
    registry.register(ChartType.BAR, BarRenderer, "Grouped bar chart")
    registry.register(ChartType.LINE, LineRenderer, "Multi-series line chart")
    registry.register(ChartType.AREA, AreaRenderer, "Filled line chart")
    registry.register(ChartType.PIE, PieRenderer, "Pie chart of the first dataset")
    registry.register(ChartType.DOUGHNUT, DoughnutRenderer, "Doughnut chart of the first dataset")
    registry.register(ChartType.SCATTER, ScatterRenderer, "XY scatter chart")
    return registry


renderer_registry = default_registry()
