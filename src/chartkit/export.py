"""Chart export helpers.

Writes the current backing buffer of an image-backed chart to disk. Charts
drawn onto other surfaces (e.g. ``RecordingSurface``) cannot be exported.
"""
from __future__ import annotations

import logging

from .errors import ExportError
from .qt_surface import ImageSurface

log = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("png", "jpg", "bmp")


def export_chart(chart, path: str, *, format: str = "png") -> None:
    """Export a chart's surface to ``path``.

    Args:
        chart: A ``Chart`` (or anything exposing ``surface``).
        path: Destination file path (existing directory required).
        format: 'png', 'jpg' or 'bmp'.
    """
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ExportError(f"format must be one of {', '.join(SUPPORTED_FORMATS)}", context={"format": format})
    surface = getattr(chart, "surface", None)
    if not isinstance(surface, ImageSurface):
        raise ExportError(
            "Only image-backed charts can be exported",
            context={"surface": type(surface).__name__},
        )
    if not surface.save(path, fmt):
        raise ExportError(f"Failed to write image to {path}", context={"path": path})
    log.debug("exported chart to %s", path)
