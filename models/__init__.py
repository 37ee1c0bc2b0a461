"""Models package - Immutable card records shared by every layer."""

from models.business_card import (
    CardAddress,
    CardContact,
    CardImage,
    CardLocalization,
    CardName,
    CardPosition,
    CardTexture,
    ReceivedCard,
    resolve_localization,
)
from models.card_tag import CardTag

__all__ = [
    "CardAddress",
    "CardContact",
    "CardImage",
    "CardLocalization",
    "CardName",
    "CardPosition",
    "CardTag",
    "CardTexture",
    "ReceivedCard",
    "resolve_localization",
]
