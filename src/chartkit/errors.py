"""Structured errors raised by the chart engine."""

from __future__ import annotations
from typing import Any


class ChartError(Exception):
    """Base class for chart construction / lifecycle issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class SurfaceNotFound(ChartError, LookupError):
    """Raised when a surface handle does not resolve to a drawing surface."""


class UnsupportedChartType(ChartError, ValueError):
    """Raised when a configuration names a chart type with no renderer."""


class ExportError(ChartError):
    """Raised when a rendered chart cannot be written to disk."""
