"""
Repositories package - Data access layer.

This package contains repository classes that handle all data persistence
and retrieval operations, isolating the presentation and business logic from data access details.
"""

from repositories.card_repository import (
    CardRepository,
    DataFetchMode,
    get_card_repository,
    reset_card_repository,
)

__all__ = [
    "CardRepository",
    "DataFetchMode",
    "get_card_repository",
    "reset_card_repository",
]
