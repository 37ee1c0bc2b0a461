"""Test helper utilities shared across the test suite.

Provides card factories and the reset hook for global repository instances
so tests stay isolated from each other.
"""

import sys
from datetime import datetime
from pathlib import Path

# Add parent directory to sys.path to enable imports from repositories and services
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

# ruff: noqa: E402
from models import (
    CardAddress,
    CardContact,
    CardImage,
    CardLocalization,
    CardName,
    CardPosition,
    CardTexture,
    ReceivedCard,
)
from repositories.card_repository import reset_card_repository


def make_localization(
    version_id="v-en",
    first=None,
    last=None,
    middle=None,
    prefix=None,
    language_code="en",
    is_default=True,
    position=None,
    contact=None,
    address=None,
):
    """Build a localized card view with placeholder images."""
    return CardLocalization(
        id=version_id,
        front_image=CardImage(id="front", url=f"https://cdn.example.com/{version_id}/front.png"),
        back_image=CardImage(id="back", url=f"https://cdn.example.com/{version_id}/back.png"),
        texture=CardTexture(
            image=CardImage(id="texture", url=f"https://cdn.example.com/{version_id}/texture.png"),
            specular=0.4,
            normal=0.6,
        ),
        name=CardName(prefix=prefix, first=first, middle=middle, last=last),
        position=position or CardPosition(),
        contact=contact or CardContact(),
        address=address or CardAddress(),
        language_code=language_code,
        is_default=is_default,
    )


def make_card(
    card_id,
    first=None,
    last=None,
    middle=None,
    received=None,
    notes="",
    tag_ids=(),
    **localization_kwargs,
):
    """Build a received card with a single displayed localization."""
    localization = make_localization(
        version_id=f"{card_id}-en", first=first, last=last, middle=middle, **localization_kwargs
    )
    return ReceivedCard(
        id=card_id,
        receiving_date=received or datetime(2020, 6, 15, 12, 0),
        language_versions=(localization,),
        displayed_localization=localization,
        notes=notes,
        tag_ids=tuple(tag_ids),
    )


def make_card_document(card_id="card-1", owner_id="user-1", **overrides):
    """Build a stored received-card document."""
    document = {
        "_id": card_id,
        "owner_id": owner_id,
        "receivingDate": datetime(2020, 6, 15, 12, 0),
        "notes": "Met at the conference",
        "tagIDs": ["tag-1"],
        "languageVersions": [
            {
                "id": "v-en",
                "languageCode": "en",
                "isDefault": True,
                "frontImage": {"id": "f1", "url": "https://cdn.example.com/f1.png"},
                "backImage": {"id": "b1", "url": "https://cdn.example.com/b1.png"},
                "texture": {
                    "image": {"id": "t1", "url": "https://cdn.example.com/t1.png"},
                    "specular": 0.3,
                    "normal": 0.7,
                },
                "name": {"first": "Ann", "last": "Lee"},
                "position": {"title": "Engineer", "company": "Acme"},
                "contact": {"email": "ann@example.com"},
                "address": {"city": "Warsaw", "country": "Poland"},
                "hapticFeedbackSharpness": 0.8,
                "cornerRadiusHeightMultiplier": 0.1,
            },
            {
                "id": "v-pl",
                "languageCode": "pl",
                "isDefault": False,
                "frontImage": {"id": "f2", "url": "https://cdn.example.com/f2.png"},
                "backImage": {"id": "b2", "url": "https://cdn.example.com/b2.png"},
                "texture": {"image": {"id": "t2", "url": "https://cdn.example.com/t2.png"}},
                "name": {"first": "Anna", "last": "Li"},
            },
        ],
    }
    document.update(overrides)
    return document


def reset_all_repositories() -> None:
    """Reset all global repository instances."""
    reset_card_repository()


def reset_all_globals() -> None:
    """Reset all global repository instances.

    This is the recommended function to call in test teardown or setup
    to ensure complete isolation between tests.
    """
    reset_all_repositories()
