from __future__ import annotations

import queue
import time
from collections.abc import Callable
from typing import Any

from loguru import logger

__all__ = ["ForegroundQueue"]


class ForegroundQueue:
    """Callback queue drained by the thread that owns UI-facing state.

    Stands in for ``wx.CallAfter`` when no wx main loop is running: background
    threads enqueue callbacks with ``call_after`` and the owning thread runs
    them in submission order via ``process_pending`` or ``run_until``.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[tuple[Callable[..., Any], tuple[Any, ...]]] = queue.Queue()

    def call_after(self, callback: Callable[..., Any], *args: Any) -> None:
        self._queue.put((callback, args))

    def pending(self) -> int:
        return self._queue.qsize()

    def process_pending(self) -> int:
        """Run every queued callback without blocking. Returns how many ran."""
        processed = 0
        while True:
            try:
                callback, args = self._queue.get_nowait()
            except queue.Empty:
                return processed
            callback(*args)
            processed += 1

    def run_until(
        self,
        predicate: Callable[[], bool],
        timeout: float = 5.0,
        poll_interval: float = 0.01,
    ) -> bool:
        """Process callbacks until ``predicate`` holds or ``timeout`` elapses."""
        deadline = time.monotonic() + timeout
        while True:
            self.process_pending()
            if predicate():
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug(f"Foreground queue timed out after {timeout}s")
                return False
            try:
                callback, args = self._queue.get(timeout=min(poll_interval, remaining))
            except queue.Empty:
                continue
            callback(*args)
