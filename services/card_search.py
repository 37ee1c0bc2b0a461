"""Name search over received cards."""

from __future__ import annotations

from collections.abc import Sequence

from models import ReceivedCard


def matches_name_query(card: ReceivedCard, query: str) -> bool:
    """Check if the displayed first, middle or last name contains ``query`` (case-sensitive)."""
    name = card.displayed_localization.name
    names = (name.first or "", name.last or "", name.middle or "")
    return any(query in part for part in names)


def filter_positions(cards: Sequence[ReceivedCard], query: str) -> tuple[int, ...]:
    """
    Return the positions in ``cards`` to display for ``query``.

    An empty query keeps every position. Positions keep the order of ``cards``.
    """
    if not query:
        return tuple(range(len(cards)))
    return tuple(idx for idx, card in enumerate(cards) if matches_name_query(card, query))


__all__ = ["filter_positions", "matches_name_query"]
