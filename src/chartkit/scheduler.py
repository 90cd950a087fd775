"""Frame-callback schedulers.

The controller never sleeps or loops: it asks a scheduler for "call me on
the next frame" and receives a handle it can cancel. Two schedulers ship:

 - ``ManualFrameScheduler``: deterministic clock advanced explicitly by the
   host (tests, offscreen rendering, custom event loops).
 - ``QtFrameScheduler``: single-shot ``QTimer`` per requested frame, driven
   by the running Qt event loop.
"""

from __future__ import annotations

from time import perf_counter
from typing import Callable, Dict, Protocol, Tuple

from PyQt6.QtCore import QObject, QTimer

from .settings import FRAME_INTERVAL_MS

__all__ = ["FrameCallback", "FrameScheduler", "ManualFrameScheduler", "QtFrameScheduler"]

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):  # pragma: no cover - structural only
    def now(self) -> float:
        """Monotonic time in milliseconds."""
        ...

    def request_frame(self, callback: FrameCallback) -> int: ...

    def cancel_frame(self, handle: int) -> None: ...


class ManualFrameScheduler:
    """Scheduler whose clock only moves when ``advance`` is called.

    Usage::
        sched = ManualFrameScheduler()
        chart = Chart(surface, config, scheduler=sched)
        sched.run_until_idle()
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._pending: Dict[int, FrameCallback] = {}
        self._next_handle = 1

    def now(self) -> float:
        return self._now

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._pending.pop(handle, None)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def advance(self, ms: float = FRAME_INTERVAL_MS) -> int:
        """Move the clock forward and fire frames that were pending before the call.

        Frames requested by those callbacks wait for the next ``advance``.
        Returns the number of callbacks fired.
        """
        self._now += ms
        fired = 0
        for handle in list(self._pending):
            callback = self._pending.pop(handle, None)
            if callback is None:  # cancelled by an earlier callback in this batch
                continue
            callback(self._now)
            fired += 1
        return fired

    def run_until_idle(self, step_ms: float = FRAME_INTERVAL_MS, max_frames: int = 10_000) -> int:
        frames = 0
        while self._pending and frames < max_frames:
            frames += self.advance(step_ms)
        return frames


class QtFrameScheduler(QObject):
    """Frame scheduler backed by single-shot ``QTimer`` instances."""

    def __init__(self, interval_ms: int = FRAME_INTERVAL_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._interval = max(1, int(interval_ms))
        self._timers: Dict[int, Tuple[QTimer, FrameCallback]] = {}
        self._next_handle = 1

    def now(self) -> float:
        return perf_counter() * 1000.0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = self._next_handle
        self._next_handle += 1
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(self._interval)
        timer.timeout.connect(lambda h=handle: self._fire(h))  # type: ignore[attr-defined]
        self._timers[handle] = (timer, callback)
        timer.start()
        return handle

    def cancel_frame(self, handle: int) -> None:
        entry = self._timers.pop(handle, None)
        if entry is None:
            return
        timer, _ = entry
        timer.stop()
        timer.deleteLater()

    @property
    def pending_count(self) -> int:
        return len(self._timers)

    def _fire(self, handle: int) -> None:
        entry = self._timers.pop(handle, None)
        if entry is None:
            return
        timer, callback = entry
        timer.deleteLater()
        callback(self.now())
