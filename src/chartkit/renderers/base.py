"""Renderer contract shared by the six chart types."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..surface import DrawingSurface
from ..types import Bounds, ChartConfig

__all__ = ["ChartRenderer"]


@runtime_checkable
class ChartRenderer(Protocol):  # pragma: no cover - structural only
    """Turns a configuration plus an animation progress into draw calls.

    Implementations compute any range cache in ``__init__``; ``draw`` only
    reads it, so repeated draws at the same progress paint the same frame.
    """

    config: ChartConfig

    def draw(self, surface: DrawingSurface, bounds: Bounds, progress: float) -> None: ...

    def destroy(self) -> None: ...
