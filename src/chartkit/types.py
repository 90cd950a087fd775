"""Core chart types.

Configurations stay JSON-compatible mappings (``data`` / ``options``) so they
can be loaded straight from disk; only the few values that flow through the
layout math get dedicated dataclasses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

__all__ = [
    "ChartType",
    "CARTESIAN_TYPES",
    "ChartConfig",
    "DataPoint",
    "Bounds",
    "ValueRange",
    "PointRange",
]


class ChartType(str, Enum):  # str subclass keeps JSON round-trips trivial
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"
    DOUGHNUT = "doughnut"
    SCATTER = "scatter"


CARTESIAN_TYPES = frozenset({ChartType.BAR, ChartType.LINE, ChartType.AREA, ChartType.SCATTER})


@dataclass(frozen=True)
class ChartConfig:
    """A chart configuration.

    Attributes:
        type: Chart type tag (``"bar"``, ``"line"`` ...). Left as a plain string
            so unsupported tags surface as ``UnsupportedChartType`` at dispatch.
        data: ``{"labels": [...], "datasets": [...]}`` mapping.
        options: Option groups (animation, scales, legend, padding ...).
    """

    type: str
    data: Mapping[str, Any] = field(default_factory=dict)
    options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ChartConfig":
        chart_type = raw.get("type")
        if isinstance(chart_type, ChartType):
            chart_type = chart_type.value
        return cls(
            type=str(chart_type) if chart_type is not None else "",
            data=dict(raw.get("data") or {}),
            options=dict(raw.get("options") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "data": dict(self.data), "options": dict(self.options)}

    @property
    def labels(self) -> Optional[list]:
        labels = self.data.get("labels")
        return list(labels) if labels else None

    @property
    def datasets(self) -> list:
        return list(self.data.get("datasets") or [])


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float
    label: Optional[str] = None


@dataclass(frozen=True)
class Bounds:
    """Pixel rectangle in surface (CSS pixel) coordinates."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class ValueRange:
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min


@dataclass(frozen=True)
class PointRange:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
