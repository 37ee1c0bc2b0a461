"""
Card Sorting - Sort modes and comparators for received cards.

Every mode sorts by a strict total order so results never depend on the order
cards arrived in:

- first name:     (first, last, middle, id)
- last name:      (last, first, middle, id)
- receiving date: (receiving_date, id)

Missing name parts compare as the empty string. Descending reverses the whole
key, so ties fall back to the same secondary fields in descending order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from models import ReceivedCard


class SortProperty(str, Enum):
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"
    RECEIVING_DATE = "receiving_date"


class SortDirection(str, Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


@dataclass(frozen=True)
class SortMode:
    property: SortProperty
    direction: SortDirection


@dataclass(frozen=True)
class SortAction:
    """A selectable sort mode with its menu title."""

    mode: SortMode
    title: str


DEFAULT_SORT_ACTIONS: tuple[SortAction, ...] = (
    SortAction(SortMode(SortProperty.FIRST_NAME, SortDirection.ASCENDING), "First name - ascending"),
    SortAction(SortMode(SortProperty.FIRST_NAME, SortDirection.DESCENDING), "First name - descending"),
    SortAction(SortMode(SortProperty.LAST_NAME, SortDirection.ASCENDING), "Last name - ascending"),
    SortAction(SortMode(SortProperty.LAST_NAME, SortDirection.DESCENDING), "Last name - descending"),
    SortAction(
        SortMode(SortProperty.RECEIVING_DATE, SortDirection.ASCENDING), "Receiving date - ascending"
    ),
    SortAction(
        SortMode(SortProperty.RECEIVING_DATE, SortDirection.DESCENDING), "Receiving date - descending"
    ),
)

SUPPORTED_SORT_MODES: tuple[SortMode, ...] = tuple(action.mode for action in DEFAULT_SORT_ACTIONS)
DEFAULT_SORT_MODE: SortMode = SUPPORTED_SORT_MODES[0]


def is_supported_sort_mode(
    mode: Any, sort_actions: tuple[SortAction, ...] = DEFAULT_SORT_ACTIONS
) -> bool:
    """True if ``mode`` is offered by one of ``sort_actions``."""
    return isinstance(mode, SortMode) and any(action.mode == mode for action in sort_actions)


def sort_key(card: ReceivedCard, prop: SortProperty) -> tuple:
    """Return the total-order key of ``card`` for ``prop``."""
    name = card.displayed_localization.name
    first = name.first or ""
    middle = name.middle or ""
    last = name.last or ""

    if prop is SortProperty.FIRST_NAME:
        return (first, last, middle, card.id)
    if prop is SortProperty.LAST_NAME:
        return (last, first, middle, card.id)
    if prop is SortProperty.RECEIVING_DATE:
        return (card.receiving_date, card.id)
    raise ValueError(f"Unknown sort property: {prop!r}")


def sort_cards(cards: Iterable[ReceivedCard], mode: SortMode) -> tuple[ReceivedCard, ...]:
    """Return ``cards`` ordered by ``mode``."""
    return tuple(
        sorted(
            cards,
            key=lambda card: sort_key(card, mode.property),
            reverse=mode.direction is SortDirection.DESCENDING,
        )
    )


def parse_sort_mode(property_name: str, direction_name: str) -> SortMode | None:
    """Build a supported SortMode from stored/CLI strings, or None if invalid."""
    try:
        mode = SortMode(SortProperty(property_name), SortDirection(direction_name))
    except ValueError:
        return None
    return mode if mode in SUPPORTED_SORT_MODES else None


__all__ = [
    "DEFAULT_SORT_ACTIONS",
    "DEFAULT_SORT_MODE",
    "SUPPORTED_SORT_MODES",
    "SortAction",
    "SortDirection",
    "SortMode",
    "SortProperty",
    "is_supported_sort_mode",
    "parse_sort_mode",
    "sort_cards",
    "sort_key",
]
