"""
Timers for debounced commits.

Provides:
  - Scheduler protocol: ``call_later(delay_seconds, callback) -> handle``
  - AsyncioScheduler: schedules on the running event loop
  - ManualScheduler: virtual clock advanced explicitly (tests, headless use)
  - Debouncer: cancel-and-reschedule wrapper owning exactly one timer
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Delegates to ``loop.call_later``; the loop is resolved lazily."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        try:
            loop = self._loop or asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError(
                "AsyncioScheduler needs a running event loop; "
                "pass a loop or another scheduler outside asyncio"
            ) from e
        return loop.call_later(delay, callback)


class _ManualHandle:
    def __init__(self, scheduler: ManualScheduler, due: float, seq: int, callback: Callable[[], None]):
        self._scheduler = scheduler
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            self._scheduler._discard(self)

    def __lt__(self, other: _ManualHandle) -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class ManualScheduler:
    """
    Deterministic virtual clock.  Nothing fires until ``advance()`` moves
    time past a timer's due point; timers fire in due order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[_ManualHandle] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        due = round(self.now + max(delay, 0.0), 6)
        handle = _ManualHandle(self, due, next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def _discard(self, handle: _ManualHandle) -> None:
        if handle in self._queue:
            self._queue.remove(handle)
            heapq.heapify(self._queue)

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    def advance(self, ms: float) -> int:
        """Move the clock forward *ms* milliseconds; return how many timers fired."""
        target = round(self.now + ms / 1000.0, 6)
        fired = 0
        while self._queue and self._queue[0].due <= target:
            handle = heapq.heappop(self._queue)
            self.now = handle.due
            handle.cancelled = True
            handle.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """Fire everything pending regardless of due time."""
        fired = 0
        while self._queue:
            handle = self._queue[0]
            fired += self.advance((handle.due - self.now) * 1000.0)
        return fired


class Debouncer:
    """
    Runs *callback* once the owner has been quiet for *delay_ms*.
    Each trigger() cancels the previous timer; only the last payload is used.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_ms: float,
        scheduler: Scheduler | None = None,
        name: str = "",
    ) -> None:
        self._callback = callback
        self.delay_ms = delay_ms
        self._scheduler = scheduler or AsyncioScheduler()
        self.name = name or getattr(callback, "__name__", "debouncer")
        self._handle: Optional[TimerHandle] = None
        self._args: tuple[Any, ...] = ()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self, *args: Any) -> None:
        """Restart the quiet period.  Nothing changes if the timer cannot start."""
        handle = self._scheduler.call_later(self.delay_ms / 1000.0, self._fire)
        self.cancel()
        self._args = args
        self._handle = handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def flush(self) -> bool:
        """Run a pending callback now.  Returns False when nothing was pending."""
        if self._handle is None:
            return False
        self.cancel()
        self._run()
        return True

    def _fire(self) -> None:
        self._handle = None
        self._run()

    def _run(self) -> None:
        args, self._args = self._args, ()
        logger.debug(f"[{self.name}] quiet period elapsed, running")
        self._callback(*args)
