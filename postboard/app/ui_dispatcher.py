"""Dispatchers that move fetch completions onto the UI thread.

The composition root passes Tk ``after`` and ``after_cancel`` callables into
``TkDispatcher`` so the drain timer is tracked in one place and canceled
safely when the window closes. Worker threads only touch the queue.
"""

from __future__ import annotations

import logging
import queue
import time
from typing import Callable, Optional


ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]
Task = Callable[[], None]


class TkDispatcher:
    """Queue callables from any thread and run them from Tk's main loop."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn, interval_ms: int = 50) -> None:
        """Store schedule/cancel functions.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
            interval_ms: Delay between queue drains.
        """
        self._log = logging.getLogger(__name__)
        self._schedule = schedule
        self._cancel = cancel
        self._interval_ms = max(1, int(interval_ms))
        self._tasks: "queue.Queue[Task]" = queue.Queue()
        self._token: Optional[str] = None

    def __call__(self, task: Task) -> None:
        """Enqueue ``task``; safe to call from worker threads."""
        self._tasks.put(task)

    def start(self) -> None:
        """Begin draining the queue on the UI thread."""
        if self._token is None:
            self._token = self._schedule(self._interval_ms, self._tick)

    def stop(self) -> None:
        """Cancel the pending drain tick."""
        token, self._token = self._token, None
        if token is None:
            return
        try:
            self._cancel(token)
        except Exception:
            self._log.debug("after_cancel failed for %s", token, exc_info=True)

    def drain(self) -> int:
        """Run every queued task now; returns how many ran."""
        ran = 0
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return ran
            try:
                task()
            except Exception:
                self._log.exception("UI task failed")
            ran += 1

    def _tick(self) -> None:
        self.drain()
        if self._token is not None:
            self._token = self._schedule(self._interval_ms, self._tick)


class BlockingDispatcher:
    """Dispatcher for headless runs: the main thread waits and drains."""

    def __init__(self) -> None:
        self._tasks: "queue.Queue[Task]" = queue.Queue()

    def __call__(self, task: Task) -> None:
        self._tasks.put(task)

    def run_until(self, done: Callable[[], bool], timeout_s: float) -> bool:
        """Run queued tasks on the calling thread until ``done()`` or timeout.

        Returns:
            ``True`` if ``done()`` became true before the deadline.
        """
        deadline = time.monotonic() + timeout_s
        while not done():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            try:
                task = self._tasks.get(timeout=min(remaining, 0.1))
            except queue.Empty:
                continue
            task()
        return True


__all__ = ["BlockingDispatcher", "TkDispatcher"]
