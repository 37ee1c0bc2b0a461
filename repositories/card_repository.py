"""
Card Repository - Data access layer for received business cards.

This module handles all card-related persistence:
- Fetching a user's received cards (all, or a given set of ids)
- Fetching the user's card tags
- Saving and deleting received card documents
- Opening change streams for live sync

Database errors are not caught here; callers decide how to surface them.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import pymongo
from loguru import logger

from models import CardTag, ReceivedCard
from utils.constants import (
    CARD_TAGS_COLLECTION,
    DEFAULT_DATABASE_NAME,
    DEFAULT_MONGO_URI,
    RECEIVED_CARDS_COLLECTION,
)


@dataclass(frozen=True)
class DataFetchMode:
    """Which received cards to fetch: every card, or only the listed ids."""

    card_ids: tuple[str, ...] | None = None

    @classmethod
    def all(cls) -> DataFetchMode:
        return cls(card_ids=None)

    @classmethod
    def specified(cls, card_ids: Iterable[str]) -> DataFetchMode:
        return cls(card_ids=tuple(card_ids))

    @property
    def is_all(self) -> bool:
        return self.card_ids is None


class CardRepository:
    """Repository for received card data access operations."""

    def __init__(
        self,
        mongo_client: pymongo.MongoClient | None = None,
        mongo_uri: str = DEFAULT_MONGO_URI,
        database_name: str = DEFAULT_DATABASE_NAME,
        preferred_language: str | None = None,
    ):
        """
        Initialize the card repository.

        Args:
            mongo_client: MongoDB client instance. If None, one is created on first use.
            mongo_uri: Connection string used when creating the client
            database_name: Database holding the card collections
            preferred_language: Language code used to pick each card's displayed version
        """
        self._client = mongo_client
        self._mongo_uri = mongo_uri
        self._database_name = database_name
        self._db = None
        self.preferred_language = preferred_language

    def _get_db(self):
        """Get or create database connection."""
        if self._db is None:
            if self._client is None:
                self._client = pymongo.MongoClient(self._mongo_uri)
            self._db = self._client.get_database(self._database_name)
        return self._db

    def _received_cards(self):
        return self._get_db()[RECEIVED_CARDS_COLLECTION]

    def _card_tags(self):
        return self._get_db()[CARD_TAGS_COLLECTION]

    # ============= Received Cards =============

    def fetch_received_cards(
        self, user_id: str, mode: DataFetchMode | None = None
    ) -> list[ReceivedCard]:
        """
        Fetch the user's received cards.

        Args:
            user_id: Owner of the cards
            mode: Restrict to specific card ids (default: all cards)

        Returns:
            Mapped cards in storage order. Documents that cannot be mapped are skipped.

        Raises:
            pymongo.errors.PyMongoError: If the database query fails
        """
        mode = mode or DataFetchMode.all()
        query: dict[str, Any] = {"owner_id": user_id}
        if not mode.is_all:
            query["_id"] = {"$in": list(mode.card_ids or ())}

        documents = list(self._received_cards().find(query))
        cards = self.map_cards(documents)
        logger.debug(f"Fetched {len(cards)} received cards for user {user_id}")
        return cards

    def map_cards(self, documents: Iterable[dict[str, Any]]) -> list[ReceivedCard]:
        """Map raw documents to cards, skipping any that are malformed."""
        cards: list[ReceivedCard] = []
        for document in documents:
            try:
                cards.append(ReceivedCard.from_document(document, self.preferred_language))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Error mapping business card {document.get('_id')!r}: {exc}")
        return cards

    def save_received_card(self, user_id: str, card: ReceivedCard) -> None:
        """
        Insert or replace one of the user's received card documents.

        Raises:
            pymongo.errors.DuplicateKeyError: If the card id belongs to another user
        """
        document = card.as_document()
        document["owner_id"] = user_id
        self._received_cards().replace_one(
            {"_id": card.id, "owner_id": user_id}, document, upsert=True
        )
        logger.info(f"Saved received card {card.id} for user {user_id}")

    def delete_received_card(self, user_id: str, card_id: str) -> bool:
        """
        Delete a received card.

        Returns:
            True if deleted, False if not found
        """
        result = self._received_cards().delete_one({"_id": card_id, "owner_id": user_id})
        if result.deleted_count > 0:
            logger.info(f"Deleted received card {card_id} for user {user_id}")
            return True
        logger.warning(f"Received card {card_id} not found for deletion")
        return False

    def watch_received_cards(self, user_id: str, max_await_time_ms: int | None = None):
        """
        Open a change stream over the user's received cards.

        The caller owns the returned stream and must close it.
        """
        pipeline = [
            {
                "$match": {
                    "$or": [
                        {"fullDocument.owner_id": user_id},
                        {"operationType": "delete"},
                    ]
                }
            }
        ]
        return self._received_cards().watch(
            pipeline, full_document="updateLookup", max_await_time_ms=max_await_time_ms
        )

    # ============= Tags =============

    def fetch_tags(self, user_id: str) -> list[CardTag]:
        """Fetch every tag defined by the user."""
        tags: list[CardTag] = []
        for document in self._card_tags().find({"owner_id": user_id}):
            try:
                tags.append(CardTag.from_document(document))
            except (KeyError, TypeError) as exc:
                logger.warning(f"Error mapping card tag {document.get('_id')!r}: {exc}")
        return tags


# Global instance
_default_repository = None


def get_card_repository() -> CardRepository:
    """Get the default card repository instance."""
    global _default_repository
    if _default_repository is None:
        _default_repository = CardRepository()
    return _default_repository


def reset_card_repository() -> None:
    """
    Reset the global card repository instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_repository
    _default_repository = None
