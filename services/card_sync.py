"""
Card Sync Service - Keeps the received cards controller in sync with the database.

A background loop watches the received cards collection through a MongoDB
change stream. Whenever something changes, the user's cards are fetched again
and handed to the controller as a full resync on the foreground thread.
Errors stop the loop and are forwarded to the controller's error listeners.
"""

from __future__ import annotations

import threading

from loguru import logger

from controllers.received_cards_controller import ReceivedCardsController
from repositories.card_repository import CardRepository
from utils.background_worker import BackgroundWorker
from utils.constants import CHANGE_STREAM_MAX_AWAIT_MS


class CardSyncService:
    """Push a fresh card list to the controller after every database change."""

    def __init__(
        self,
        controller: ReceivedCardsController,
        card_repository: CardRepository,
        worker: BackgroundWorker | None = None,
        max_await_time_ms: int = CHANGE_STREAM_MAX_AWAIT_MS,
    ) -> None:
        if controller.user_id is None:
            raise ValueError("CardSyncService requires a controller with a user id")
        self.controller = controller
        self.card_repo = card_repository
        self.worker = worker or controller.worker
        self.max_await_time_ms = max_await_time_ms
        self._stop_event = threading.Event()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        # One event per run; stop() only ends the run it belongs to.
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._running = True
        self.worker.submit(
            self._watch_loop,
            stop_event,
            on_success=lambda _pushed: self._on_loop_finished(stop_event),
            on_error=lambda exc: self._on_loop_failed(stop_event, exc),
        )

    def stop(self) -> None:
        self._stop_event.set()
        self._running = False

    def _should_stop(self, stop_event: threading.Event) -> bool:
        return stop_event.is_set() or self.worker.is_stopped()

    def _push_cards(self) -> None:
        cards = self.card_repo.fetch_received_cards(
            self.controller.user_id, self.controller.data_fetch_mode
        )
        self.worker.call_after(self.controller.load_all, cards)

    def _watch_loop(self, stop_event: threading.Event) -> int:
        """Run until stopped. Returns the number of resyncs pushed."""
        user_id = self.controller.user_id
        pushed = 0
        # Open the stream before the first fetch so no change slips in between.
        with self.card_repo.watch_received_cards(user_id, self.max_await_time_ms) as stream:
            self._push_cards()
            pushed += 1
            while not self._should_stop(stop_event):
                change = stream.try_next()
                if change is None:
                    continue
                # Coalesce bursts of changes into one refetch.
                while change is not None and not self._should_stop(stop_event):
                    logger.debug(f"Received card change: {change.get('operationType')}")
                    change = stream.try_next()
                if self._should_stop(stop_event):
                    break
                self._push_cards()
                pushed += 1
        logger.info(f"Card sync for user {user_id} stopped after {pushed} resyncs")
        return pushed

    def _on_loop_finished(self, stop_event: threading.Event) -> None:
        if stop_event is self._stop_event:
            self._running = False

    def _on_loop_failed(self, stop_event: threading.Event, exc: Exception) -> None:
        if stop_event is self._stop_event:
            self._running = False
        self.controller.report_error(exc)


__all__ = ["CardSyncService"]
