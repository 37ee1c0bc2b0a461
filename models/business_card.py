"""
Business Card Models - Immutable records for received business cards.

A received card is stored as one document holding several language versions
of the same card data. Only one version is displayed at a time; it is picked
when the document is mapped, so the rest of the application only deals with
``ReceivedCard.displayed_localization``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class CardImage:
    id: str
    url: str


@dataclass(frozen=True)
class CardTexture:
    image: CardImage
    specular: float = 0.5
    normal: float = 0.5


@dataclass(frozen=True)
class CardName:
    prefix: str | None = None
    first: str | None = None
    middle: str | None = None
    last: str | None = None


@dataclass(frozen=True)
class CardPosition:
    title: str | None = None
    company: str | None = None


@dataclass(frozen=True)
class CardContact:
    email: str | None = None
    phone_number_primary: str | None = None
    phone_number_secondary: str | None = None
    fax: str | None = None
    website: str | None = None


@dataclass(frozen=True)
class CardAddress:
    country: str | None = None
    city: str | None = None
    post_code: str | None = None
    street: str | None = None


@dataclass(frozen=True)
class CardLocalization:
    """One language version of a business card."""

    id: str
    front_image: CardImage
    back_image: CardImage
    texture: CardTexture
    name: CardName = field(default_factory=CardName)
    position: CardPosition = field(default_factory=CardPosition)
    contact: CardContact = field(default_factory=CardContact)
    address: CardAddress = field(default_factory=CardAddress)
    language_code: str | None = None
    is_default: bool = False
    haptic_feedback_sharpness: float = 0.5
    corner_radius_height_multiplier: float = 0.0


def resolve_localization(
    versions: list[CardLocalization] | tuple[CardLocalization, ...],
    preferred_language: str | None = None,
) -> CardLocalization:
    """
    Pick the language version to display.

    Order of preference: exact ``language_code`` match, the version flagged
    as default, the first version.

    Raises:
        ValueError: If ``versions`` is empty
    """
    if not versions:
        raise ValueError("Card has no language versions")
    if preferred_language:
        for version in versions:
            if version.language_code == preferred_language:
                return version
    for version in versions:
        if version.is_default:
            return version
    return versions[0]


@dataclass(frozen=True)
class ReceivedCard:
    """A business card received by a user, with its displayed localization resolved."""

    id: str
    receiving_date: datetime
    language_versions: tuple[CardLocalization, ...]
    displayed_localization: CardLocalization
    notes: str = ""
    tag_ids: tuple[str, ...] = ()

    @property
    def owner_display_name(self) -> str:
        name = self.displayed_localization.name
        parts = [name.prefix, name.first, name.middle, name.last]
        return " ".join(part for part in parts if part)

    @property
    def address_formatted(self) -> str:
        address = self.displayed_localization.address
        city_line = " ".join(part for part in (address.post_code, address.city) if part)
        lines = [address.street, city_line, address.country]
        return "\n".join(line for line in lines if line)

    @property
    def receiving_date_formatted(self) -> str:
        return self.receiving_date.strftime("%d %b %Y")

    # ============= Document Mapping =============

    @classmethod
    def from_document(
        cls, document: dict[str, Any], preferred_language: str | None = None
    ) -> ReceivedCard:
        """
        Build a card from a stored document.

        Raises:
            KeyError: If a required field is missing
            TypeError / ValueError: If a field has the wrong shape
        """
        versions = tuple(_localization_from_document(raw) for raw in document["languageVersions"])
        receiving_date = document["receivingDate"]
        if isinstance(receiving_date, str):
            receiving_date = datetime.fromisoformat(receiving_date)
        if not isinstance(receiving_date, datetime):
            raise TypeError(f"receivingDate must be a datetime, got {type(receiving_date).__name__}")
        # Naive UTC, as pymongo returns BSON dates
        if receiving_date.tzinfo is not None:
            receiving_date = receiving_date.astimezone(timezone.utc).replace(tzinfo=None)

        return cls(
            id=str(document["_id"]),
            receiving_date=receiving_date,
            language_versions=versions,
            displayed_localization=resolve_localization(versions, preferred_language),
            notes=document.get("notes") or "",
            tag_ids=tuple(document.get("tagIDs") or ()),
        )

    def as_document(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "receivingDate": self.receiving_date,
            "languageVersions": [_localization_as_document(v) for v in self.language_versions],
            "notes": self.notes,
            "tagIDs": list(self.tag_ids),
        }


def _image_from_document(raw: dict[str, Any]) -> CardImage:
    return CardImage(id=str(raw["id"]), url=str(raw["url"]))


def _localization_from_document(raw: dict[str, Any]) -> CardLocalization:
    texture = raw["texture"]
    name = raw.get("name") or {}
    position = raw.get("position") or {}
    contact = raw.get("contact") or {}
    address = raw.get("address") or {}
    return CardLocalization(
        id=str(raw["id"]),
        front_image=_image_from_document(raw["frontImage"]),
        back_image=_image_from_document(raw["backImage"]),
        texture=CardTexture(
            image=_image_from_document(texture["image"]),
            specular=float(texture.get("specular", 0.5)),
            normal=float(texture.get("normal", 0.5)),
        ),
        name=CardName(
            prefix=name.get("prefix"),
            first=name.get("first"),
            middle=name.get("middle"),
            last=name.get("last"),
        ),
        position=CardPosition(title=position.get("title"), company=position.get("company")),
        contact=CardContact(
            email=contact.get("email"),
            phone_number_primary=contact.get("phoneNumberPrimary"),
            phone_number_secondary=contact.get("phoneNumberSecondary"),
            fax=contact.get("fax"),
            website=contact.get("website"),
        ),
        address=CardAddress(
            country=address.get("country"),
            city=address.get("city"),
            post_code=address.get("postCode"),
            street=address.get("street"),
        ),
        language_code=raw.get("languageCode"),
        is_default=bool(raw.get("isDefault", False)),
        haptic_feedback_sharpness=float(raw.get("hapticFeedbackSharpness", 0.5)),
        corner_radius_height_multiplier=float(raw.get("cornerRadiusHeightMultiplier", 0.0)),
    )


def _localization_as_document(version: CardLocalization) -> dict[str, Any]:
    return {
        "id": version.id,
        "frontImage": {"id": version.front_image.id, "url": version.front_image.url},
        "backImage": {"id": version.back_image.id, "url": version.back_image.url},
        "texture": {
            "image": {"id": version.texture.image.id, "url": version.texture.image.url},
            "specular": version.texture.specular,
            "normal": version.texture.normal,
        },
        "name": {
            "prefix": version.name.prefix,
            "first": version.name.first,
            "middle": version.name.middle,
            "last": version.name.last,
        },
        "position": {"title": version.position.title, "company": version.position.company},
        "contact": {
            "email": version.contact.email,
            "phoneNumberPrimary": version.contact.phone_number_primary,
            "phoneNumberSecondary": version.contact.phone_number_secondary,
            "fax": version.contact.fax,
            "website": version.contact.website,
        },
        "address": {
            "country": version.address.country,
            "city": version.address.city,
            "postCode": version.address.post_code,
            "street": version.address.street,
        },
        "languageCode": version.language_code,
        "isDefault": version.is_default,
        "hapticFeedbackSharpness": version.haptic_feedback_sharpness,
        "cornerRadiusHeightMultiplier": version.corner_radius_height_multiplier,
    }


__all__ = [
    "CardAddress",
    "CardContact",
    "CardImage",
    "CardLocalization",
    "CardName",
    "CardPosition",
    "CardTexture",
    "ReceivedCard",
    "resolve_localization",
]
