"""Chart controller.

Owns the drawing surface, the merged configuration, the active renderer and
the animation clock.

Lifecycle::

    chart = Chart(surface_or_id, {"type": "bar", "data": {...}})
    chart.update({"type": "line"})   # old renderer destroyed, new one drawn
    chart.destroy()                  # idempotent

Animation state machine: ``IDLE -> ANIMATING`` when ``render()`` runs with a
positive duration, back to ``IDLE`` when progress reaches 1 or when
``render`` / ``update`` / ``destroy`` cancels the pending frame. Only one run
is active per controller; the previous frame handle is always cancelled
before a new run starts, so no stale frame can paint afterwards.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Optional

from .helpers import get_easing, setup_surface
from .options import normalize_config
from .registry import RendererRegistry, renderer_registry
from .renderers import ChartRenderer
from .scheduler import FrameScheduler
from .settings import DEFAULT_DURATION_MS, DEFAULT_PADDING
from .surface import DrawingSurface
from .surface_registry import SurfaceRegistry, resolve_surface
from .types import Bounds, ChartConfig

log = logging.getLogger(__name__)

__all__ = ["AnimationState", "Chart"]


class AnimationState(str, Enum):
    IDLE = "idle"
    ANIMATING = "animating"


class Chart:
    """Animated chart bound to one drawing surface.

    Args:
        surface: A drawing surface or the id of one registered in the
            surface registry.
        config: ``ChartConfig`` or JSON-compatible mapping
            (``{"type": ..., "data": ..., "options": ...}``).
        scheduler: Frame scheduler; defaults to a ``QtFrameScheduler``.
        registry: Renderer registry; defaults to the built-in six renderers.
        surfaces: Registry used to resolve string surface ids.

    Raises:
        SurfaceNotFound: ``surface`` does not resolve to a drawing surface.
        UnsupportedChartType: ``config`` names a type with no renderer.
    """

    def __init__(
        self,
        surface: DrawingSurface | str,
        config: ChartConfig | Mapping[str, Any],
        *,
        scheduler: Optional[FrameScheduler] = None,
        registry: Optional[RendererRegistry] = None,
        surfaces: Optional[SurfaceRegistry] = None,
    ) -> None:
        self._surface = resolve_surface(surface, surfaces)
        self._registry = registry or renderer_registry
        self._config = normalize_config(config)
        setup_surface(self._surface)
        # renderer first: an unsupported type must abort before any listener or frame exists
        self._renderer: Optional[ChartRenderer] = self._registry.create(self._config)
        self._scheduler = scheduler if scheduler is not None else self._default_scheduler()
        self._frame_handle: Optional[int] = None
        self._start_time = 0.0
        self._animating = False
        self._observing = False
        self._sync_resize_observer()
        log.debug("chart created (type=%s)", self._config.type)
        self.render()

    @staticmethod
    def _default_scheduler() -> FrameScheduler:
        from .scheduler import QtFrameScheduler

        return QtFrameScheduler()

    # Introspection -------------------------------------------------------
    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def renderer(self) -> Optional[ChartRenderer]:
        return self._renderer

    @property
    def surface(self) -> DrawingSurface:
        return self._surface

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def is_animating(self) -> bool:
        return self._animating

    @property
    def state(self) -> AnimationState:
        return AnimationState.ANIMATING if self._animating else AnimationState.IDLE

    # Public API ----------------------------------------------------------
    def render(self) -> None:
        """Re-run the current configuration (animated when duration > 0)."""
        if self._renderer is None:
            return
        duration = (self._config.options.get("animation") or {}).get("duration") or 0
        if duration > 0:
            self._start_animation()
        else:
            self._stop_animation()
            self.render_frame(1.0)

    def update(self, partial: ChartConfig | Mapping[str, Any]) -> None:
        """Shallow-merge ``partial`` over the configuration and rebuild the renderer.

        An unsupported type raises before anything changes. Otherwise the old
        renderer is destroyed before the new one is constructed and drawn.
        """
        if isinstance(partial, ChartConfig):
            partial = partial.to_dict()
        merged = {**self._config.to_dict(), **dict(partial)}
        new_config = normalize_config(merged)
        entry = self._registry.get(new_config.type)
        self._stop_animation()
        if self._renderer is not None:
            self._renderer.destroy()
            self._renderer = None
        self._config = new_config
        self._renderer = entry.factory(new_config)
        self._sync_resize_observer()
        log.debug("chart updated (type=%s)", new_config.type)
        self.render()

    def destroy(self) -> None:
        """Cancel animation, release the renderer and the resize observation."""
        self._stop_animation()
        if self._renderer is not None:
            self._renderer.destroy()
            self._renderer = None
            log.debug("chart destroyed")
        self._unobserve_resize()

    # Frames --------------------------------------------------------------
    def bounds(self) -> Bounds:
        """Content rectangle: current surface size minus per-side padding."""
        padding = self._config.options.get("padding") or {}

        def side(name: str) -> float:
            value = padding.get(name)
            return DEFAULT_PADDING if value is None else value

        width, height = self._surface.client_size()
        left, top = side("left"), side("top")
        return Bounds(
            x=left,
            y=top,
            width=width - left - side("right"),
            height=height - top - side("bottom"),
        )

    def render_frame(self, progress: float) -> None:
        """Clear, paint the background and draw the renderer at ``progress``."""
        if self._renderer is None:
            return
        surface = self._surface
        width, height = surface.client_size()
        surface.global_alpha = 1.0
        surface.clear_rect(0, 0, width, height)
        background = self._config.options.get("backgroundColor")
        if background:
            surface.fill_style = background
            surface.fill_rect(0, 0, width, height)
        self._renderer.draw(surface, self.bounds(), progress)

    def _start_animation(self) -> None:
        self._stop_animation()
        self._animating = True
        self._start_time = self._scheduler.now()
        log.debug("animation started")
        self._animate_frame(self._start_time)

    def _animate_frame(self, now: float) -> None:
        self._frame_handle = None
        if not self._animating:
            return
        animation = self._config.options.get("animation") or {}
        duration = animation.get("duration") or DEFAULT_DURATION_MS
        progress = min((now - self._start_time) / duration, 1.0)
        self.render_frame(get_easing(animation.get("easing"))(progress))
        if progress < 1:
            self._frame_handle = self._scheduler.request_frame(self._animate_frame)
        else:
            self._animating = False
            log.debug("animation finished")

    def _stop_animation(self) -> None:
        if self._frame_handle is not None:
            self._scheduler.cancel_frame(self._frame_handle)
            self._frame_handle = None
        if self._animating:
            log.debug("animation cancelled")
        self._animating = False

    # Resize --------------------------------------------------------------
    def _sync_resize_observer(self) -> None:
        if self._config.options.get("responsive"):
            if not self._observing:
                self._surface.add_resize_listener(self._on_resize)
                self._observing = True
        else:
            self._unobserve_resize()

    def _unobserve_resize(self) -> None:
        if self._observing:
            self._surface.remove_resize_listener(self._on_resize)
            self._observing = False

    def _on_resize(self, width: float, height: float) -> None:
        log.debug("surface resized to %.0fx%.0f", width, height)
        setup_surface(self._surface)
        self.render_frame(1.0)
