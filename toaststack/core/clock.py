from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from textual.timer import Timer
    from textual.widget import Widget

log = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Clock(Protocol):
    """Scheduling port used by the toast controllers.

    All delays and timestamps are integer milliseconds.
    """

    def now(self) -> int: ...

    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle: ...

    def call_soon(self, callback: Callback) -> TimerHandle: ...


def cancel_handle(handle: TimerHandle | None) -> None:
    """Cancel *handle* if present. Safe to call repeatedly."""
    if handle is not None:
        handle.cancel()


# ------------------------------------------------------------------
# asyncio
# ------------------------------------------------------------------


class AsyncioClock:
    """Clock backed by an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> int:
        return int(self.loop.time() * 1000)

    def call_later(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        return self.loop.call_later(max(0, delay_ms) / 1000, callback)

    def call_soon(self, callback: Callback) -> asyncio.Handle:
        return self.loop.call_soon(callback)


# ------------------------------------------------------------------
# Textual
# ------------------------------------------------------------------


class _TextualTimerHandle:
    def __init__(self, timer: Timer) -> None:
        self._timer: Timer | None = timer

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None


class _RefreshHandle:
    """Handle for a ``call_after_refresh`` callback, which Textual can't cancel."""

    def __init__(self, callback: Callback) -> None:
        self._callback: Callback | None = callback

    def __call__(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None:
            callback()

    def cancel(self) -> None:
        self._callback = None


class TextualClock:
    """Clock that schedules through a mounted Textual widget."""

    def __init__(self, widget: Widget) -> None:
        self._widget = widget

    def now(self) -> int:
        return int(time.monotonic() * 1000)

    def call_later(self, delay_ms: int, callback: Callback) -> _TextualTimerHandle:
        timer = self._widget.set_timer(max(0, delay_ms) / 1000, callback)
        return _TextualTimerHandle(timer)

    def call_soon(self, callback: Callback) -> _RefreshHandle:
        handle = _RefreshHandle(callback)
        self._widget.call_after_refresh(handle)
        return handle


# ------------------------------------------------------------------
# Virtual time
# ------------------------------------------------------------------


class ManualTimer:
    def __init__(self, due: int, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Deterministic virtual clock for headless simulation.

    Nothing runs until :meth:`advance` or :meth:`run_pending` is called.
    Callbacks due at the same instant run in scheduling order.
    """

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self._queue: list[tuple[int, int, ManualTimer]] = []
        self._seq = itertools.count()

    def now(self) -> int:
        return self._now

    def call_later(self, delay_ms: int, callback: Callback) -> ManualTimer:
        timer = ManualTimer(self._now + max(0, delay_ms), callback)
        heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    def call_soon(self, callback: Callback) -> ManualTimer:
        return self.call_later(0, callback)

    @property
    def pending(self) -> int:
        """Number of scheduled, non-cancelled callbacks."""
        return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def run_pending(self) -> int:
        """Run everything due at the current instant."""
        return self.advance(0)

    def advance(self, delay_ms: int) -> int:
        """Move time forward by *delay_ms*, firing due callbacks in order.

        Returns the number of callbacks run.
        """
        target = self._now + delay_ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = max(self._now, due)
            timer.cancelled = True
            timer.callback()
            ran += 1
        self._now = target
        return ran
