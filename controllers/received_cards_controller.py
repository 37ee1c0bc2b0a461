"""
Received Cards Controller - Presentation logic for the received cards list.

The controller owns the fetched cards, the active sort mode and the active
search query, and exposes a read-only ordered view for the UI layer. It is
UI-agnostic and talks to the presentation layer through listeners.

Threading model:
    All public methods and all listeners run on one foreground thread (the wx
    main loop, or whoever drains a ``ForegroundQueue``). Sorting and filtering
    run on the background worker against an immutable snapshot of the inputs.
    Each request bumps a generation counter; a computed result is published
    only if its generation is still the latest, otherwise it is dropped.
    Because every snapshot carries all inputs (records, sort mode, query), the
    newest request always produces a complete, consistent view.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from loguru import logger

from models import CardTag, ReceivedCard
from repositories.card_repository import CardRepository, DataFetchMode
from services.card_details import DetailSection, build_detail_sections
from services.card_search import filter_positions
from services.card_sorting import (
    DEFAULT_SORT_ACTIONS,
    DEFAULT_SORT_MODE,
    SortAction,
    SortMode,
    is_supported_sort_mode,
    sort_cards,
)
from utils.background_worker import BackgroundWorker

DisplayListener = Callable[[bool], None]
ErrorListener = Callable[[Exception], None]


@dataclass(frozen=True)
class _ViewSnapshot:
    generation: int
    records: tuple[ReceivedCard, ...]
    records_version: int
    mode: SortMode
    query: str
    # Already-sorted cards for (records_version, mode), when available
    sorted_cards: tuple[ReceivedCard, ...] | None


@dataclass(frozen=True)
class _ComputedView:
    generation: int
    cards: tuple[ReceivedCard, ...]
    display_index: tuple[int, ...]
    sort_inputs: tuple[int, SortMode]


def _compute_view(snapshot: _ViewSnapshot) -> _ComputedView:
    cards = snapshot.sorted_cards
    if cards is None:
        cards = sort_cards(snapshot.records, snapshot.mode)
    return _ComputedView(
        generation=snapshot.generation,
        cards=cards,
        display_index=filter_positions(cards, snapshot.query),
        sort_inputs=(snapshot.records_version, snapshot.mode),
    )


class ReceivedCardsController:
    """Sorts, searches and indexes the cards a user has received."""

    def __init__(
        self,
        user_id: str | None = None,
        card_repository: CardRepository | None = None,
        worker: BackgroundWorker | None = None,
        sort_mode: SortMode = DEFAULT_SORT_MODE,
        data_fetch_mode: DataFetchMode | None = None,
        sort_actions: tuple[SortAction, ...] = DEFAULT_SORT_ACTIONS,
    ) -> None:
        self.user_id = user_id
        self.card_repo = card_repository
        self.worker = worker or BackgroundWorker()
        self.data_fetch_mode = data_fetch_mode or DataFetchMode.all()
        self._sort_actions = sort_actions
        if not sort_actions:
            raise ValueError("sort_actions must not be empty")
        self._sort_mode = (
            sort_mode if is_supported_sort_mode(sort_mode, sort_actions) else sort_actions[0].mode
        )

        # Requested inputs
        self._records: tuple[ReceivedCard, ...] = ()
        self._records_version = 0
        self._query = ""
        self._resync_pending = False

        # Published view; cards and display index are always replaced together
        self._cards: tuple[ReceivedCard, ...] = ()
        self._display_index: tuple[int, ...] = ()
        self._published_sort_inputs: tuple[int, SortMode] = (0, self._sort_mode)

        self._generation = 0
        self._settled_generation = 0

        self._listeners: list[DisplayListener] = []
        self._error_listeners: list[ErrorListener] = []

    # ============= Listeners =============

    def add_listener(self, listener: DisplayListener) -> Callable[[], None]:
        """
        Register ``listener(animated)`` for display changes.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def add_error_listener(self, listener: ErrorListener) -> Callable[[], None]:
        """Register ``listener(exc)`` for fetch failures. Returns a remover."""
        self._error_listeners.append(listener)

        def remove() -> None:
            if listener in self._error_listeners:
                self._error_listeners.remove(listener)

        return remove

    def _notify_display_changed(self, animated: bool) -> None:
        for listener in list(self._listeners):
            listener(animated)

    def report_error(self, exc: Exception) -> None:
        """Forward an error to the error listeners unchanged."""
        for listener in list(self._error_listeners):
            listener(exc)

    # ============= State =============

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    @property
    def sort_actions(self) -> tuple[SortAction, ...]:
        return self._sort_actions

    @property
    def query(self) -> str:
        return self._query

    @property
    def is_updating(self) -> bool:
        """True while the latest requested view has not been published yet."""
        return self._settled_generation != self._generation

    def item_count(self) -> int:
        return len(self._display_index)

    def item(self, position: int) -> ReceivedCard:
        """
        Return the card shown at display ``position``.

        Raises:
            IndexError: If ``position`` is not within ``0 .. item_count() - 1``
        """
        count = len(self._display_index)
        if not 0 <= position < count:
            raise IndexError(f"Display position {position} out of range (item count {count})")
        return self._cards[self._display_index[position]]

    def displayed_cards(self) -> list[ReceivedCard]:
        return [self._cards[idx] for idx in self._display_index]

    def details_sections(
        self, position: int, tags: list[CardTag] | None = None
    ) -> list[DetailSection]:
        """Detail screen sections for the card at display ``position``."""
        return build_detail_sections(self.item(position), tags)

    # ============= Operations =============

    def load_all(self, records: Iterable[ReceivedCard]) -> None:
        """Replace every card, keep the sort mode and clear the search query."""
        self._records = tuple(records)
        self._records_version += 1
        self._query = ""
        self._resync_pending = True
        logger.info(f"Loading {len(self._records)} received cards")
        self._schedule()

    def set_sort_mode(self, mode: SortMode) -> None:
        """Re-sort by ``mode``. Unsupported modes are ignored."""
        if not is_supported_sort_mode(mode, self._sort_actions):
            logger.debug(f"Ignoring unsupported sort mode: {mode!r}")
            return
        self._sort_mode = mode
        self._schedule()

    def search(self, query: str) -> None:
        """Show only cards whose first, middle or last name contains ``query``."""
        self._query = query
        self._schedule()

    def refresh(self) -> None:
        """Fetch the user's cards in the background and load them."""
        if self.card_repo is None or self.user_id is None:
            raise RuntimeError("refresh() requires a card repository and a user id")

        user_id = self.user_id
        fetch_mode = self.data_fetch_mode
        self.worker.submit(
            self.card_repo.fetch_received_cards,
            user_id,
            fetch_mode,
            on_success=self.load_all,
            on_error=self.report_error,
        )

    # ============= Background computation =============

    def _schedule(self) -> None:
        self._generation += 1
        sort_inputs = (self._records_version, self._sort_mode)
        reusable = self._cards if self._published_sort_inputs == sort_inputs else None
        snapshot = _ViewSnapshot(
            generation=self._generation,
            records=self._records,
            records_version=self._records_version,
            mode=self._sort_mode,
            query=self._query,
            sorted_cards=reusable,
        )
        self.worker.submit(
            _compute_view,
            snapshot,
            on_success=self._publish,
            on_error=lambda exc, generation=snapshot.generation: self._on_compute_failed(
                generation, exc
            ),
        )

    def _publish(self, view: _ComputedView) -> None:
        if view.generation != self._generation:
            logger.debug(
                f"Dropping stale card view (generation {view.generation}, current {self._generation})"
            )
            return

        changed = view.cards != self._cards or view.display_index != self._display_index
        resync = self._resync_pending

        self._cards = view.cards
        self._display_index = view.display_index
        self._published_sort_inputs = view.sort_inputs
        self._resync_pending = False
        self._settled_generation = view.generation

        if resync or changed:
            self._notify_display_changed(not resync)

    def _on_compute_failed(self, generation: int, exc: Exception) -> None:
        if generation != self._generation:
            return
        self._settled_generation = generation
        self.report_error(exc)


__all__ = ["ReceivedCardsController"]
