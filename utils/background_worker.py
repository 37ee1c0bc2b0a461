from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

__all__ = ["BackgroundWorker"]


class BackgroundWorker:
    """Manages background worker threads with lifecycle control and graceful shutdown.

    Run blocking work in threads and marshal callbacks onto the foreground thread.
    """

    def __init__(self, call_after: Callable[..., None] | None = None) -> None:
        """
        Args:
            call_after: Schedules ``callback(*args)`` on the foreground thread.
                Defaults to ``wx.CallAfter`` when wx is importable.
        """
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._dispatch = call_after

    def submit(
        self,
        func: Callable[..., Any],
        *args: Any,
        on_success: Callable[[Any], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
        **kwargs: Any,
    ) -> None:
        """Submit a task to run in a background thread.

        Args:
            func: The function to execute
            *args: Positional arguments for func
            on_success: Optional callback for successful completion (marshaled to foreground)
            on_error: Optional callback for errors (marshaled to foreground)
            **kwargs: Keyword arguments for func

        For long-running tasks, the function should periodically check self.is_stopped()
        and exit when True.
        """

        def wrapper():
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.exception(f"Background task failed: {exc}")
                if on_error:
                    self.call_after(on_error, exc)
                return

            if on_success:
                self.call_after(on_success, result)

        thread = threading.Thread(target=wrapper, daemon=True)
        with self._lock:
            self._threads = [t for t in self._threads if t.is_alive()]
            self._threads.append(thread)
        thread.start()
        logger.debug(f"Started background thread: {getattr(func, '__name__', func)}")

    def call_after(self, callback: Callable, *args: Any) -> None:
        """Marshal callback to the foreground thread."""
        if self._dispatch is not None:
            self._dispatch(callback, *args)
            return
        try:
            import wx

            wx.CallAfter(callback, *args)
        except ImportError:
            callback(*args)

    def is_stopped(self) -> bool:
        """Check if worker has been stopped."""
        return self._stop_event.is_set()

    def shutdown(self, timeout: float = 10.0) -> None:
        """Signal all threads to stop and wait for them to finish."""
        logger.info("Shutting down background worker...")
        self._stop_event.set()

        with self._lock:
            threads = list(self._threads)

        for thread in threads:
            if thread.is_alive():
                logger.debug(f"Waiting for thread {thread.name} to finish...")
                thread.join(timeout=timeout)
                if thread.is_alive():
                    logger.warning(f"Thread {thread.name} did not finish within {timeout}s")

        logger.info("Background worker shutdown complete")

    def __enter__(self) -> BackgroundWorker:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()
