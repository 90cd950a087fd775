"""Area chart renderer: a line chart with every dataset filled."""

from __future__ import annotations

from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig
from .line import LineRenderer


class AreaRenderer:
    """Owns a ``LineRenderer`` built from a copy of the config with ``fill=True``."""

    def __init__(self, config: ChartConfig) -> None:
        self.config = config
        data = dict(config.data)
        data["datasets"] = [{**dataset, "fill": True} for dataset in config.datasets]
        self.line: LineRenderer | None = LineRenderer(
            ChartConfig(type=config.type, data=data, options=config.options)
        )

    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None:
        if self.line is not None:
            self.line.draw(surface, bounds, progress)

    def destroy(self) -> None:
        if self.line is not None:
            self.line.destroy()
            self.line = None
