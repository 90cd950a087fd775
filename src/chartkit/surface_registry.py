"""Host-provided registry resolving string ids to drawing surfaces.

Hosts register the surfaces they own under a semantic id so charts can be
constructed from a string handle::

    from chartkit.surface_registry import surfaces
    surfaces.register("sales-chart", canvas.surface)
    Chart("sales-chart", config)

In tests:
    with surfaces.override_context(demo=RecordingSurface()):
        ...
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from threading import RLock
from typing import Any, Dict, Generator, Iterable

from .errors import SurfaceNotFound
from .surface import DrawingSurface

__all__ = ["SurfaceRegistry", "SurfaceAlreadyRegisteredError", "surfaces", "resolve_surface"]


class SurfaceAlreadyRegisteredError(RuntimeError):
    """Raised when registering an existing id without allow_override."""


@dataclass
class SurfaceRecord:
    key: str
    surface: Any
    origin: str | None = None


class SurfaceRegistry:
    """Thread-safe id -> surface registry."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._records: Dict[str, SurfaceRecord] = {}

    def register(self, key: str, surface: Any, *, allow_override: bool = False, origin: str | None = None) -> None:
        with self._lock:
            if key in self._records and not allow_override:
                raise SurfaceAlreadyRegisteredError(f"Surface '{key}' already registered")
            self._records[key] = SurfaceRecord(key=key, surface=surface, origin=origin)

    def get(self, key: str) -> Any:
        with self._lock:
            record = self._records.get(key)
        if record is None:
            raise SurfaceNotFound(f"Surface with id {key!r} not found", context={"id": key})
        return record.surface

    def try_get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            record = self._records.get(key)
            return record.surface if record else default

    @contextmanager
    def override_context(self, **overrides: Any) -> Generator[None, None, None]:
        """Temporarily register / replace surfaces; restores prior state on exit."""
        previous: Dict[str, SurfaceRecord | None] = {}
        with self._lock:
            for key, surface in overrides.items():
                previous[key] = self._records.get(key)
                self._records[key] = SurfaceRecord(key=key, surface=surface, origin="override")
        try:
            yield
        finally:
            with self._lock:
                for key, prior in previous.items():
                    if prior is None:
                        self._records.pop(key, None)
                    else:
                        self._records[key] = prior

    def unregister(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def list_keys(self) -> Iterable[str]:
        with self._lock:
            return list(self._records.keys())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


surfaces = SurfaceRegistry()


def resolve_surface(handle: Any, registry: SurfaceRegistry | None = None) -> DrawingSurface:
    """Resolve a surface handle (direct surface or registry id).

    Raises ``SurfaceNotFound`` when the id is unknown or the resolved object
    does not implement the drawing surface contract.
    """
    if isinstance(handle, str):
        surface = (registry or surfaces).get(handle)
    else:
        surface = handle
    if surface is None or not isinstance(surface, DrawingSurface):
        raise SurfaceNotFound(
            f"Handle {handle!r} does not resolve to a drawing surface",
            context={"handle": handle if isinstance(handle, str) else type(handle).__name__},
        )
    return surface
