"""
Card Details - Sections shown on the detail screen of a received card.

Sections are built from sparse card data: rows without a value are dropped
and sections without rows are omitted entirely. Item numbers restart at 0 in
every section.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from models import CardTag, ReceivedCard


class DetailAction(str, Enum):
    COPY = "copy"
    CALL = "call"
    SEND_EMAIL = "send_email"
    VISIT_WEBSITE = "visit_website"
    NAVIGATE = "navigate"
    EDIT_TAGS = "edit_tags"
    EDIT_NOTES = "edit_notes"


class SectionKind(str, Enum):
    IMAGES = "images"
    EDITABLE = "editable"
    META = "meta"
    PERSONAL = "personal"
    CONTACT = "contact"
    ADDRESS = "address"


@dataclass(frozen=True)
class DetailItem:
    item_number: int
    title: str
    value: str | None
    actions: tuple[DetailAction, ...] = ()
    # Extra payload for rendering; compared but left out of the hash
    data: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class DetailSection:
    kind: SectionKind
    items: tuple[DetailItem, ...]


def _numbered(
    rows: list[tuple[str, str | None, tuple[DetailAction, ...]]],
) -> tuple[DetailItem, ...]:
    return tuple(
        DetailItem(item_number=idx, title=title, value=value, actions=actions)
        for idx, (title, value, actions) in enumerate(rows)
    )


def _non_empty(
    rows: list[tuple[str, str | None, tuple[DetailAction, ...]]],
) -> list[tuple[str, str | None, tuple[DetailAction, ...]]]:
    return [row for row in rows if row[1]]


class CardDetailsSectionBuilder:
    """Build the ordered detail sections for one card."""

    def __init__(self, card: ReceivedCard, tags: list[CardTag] | None = None) -> None:
        self.card = card
        self.tags = list(tags or [])

    def build(self) -> list[DetailSection]:
        sections = [
            self._images_section(),
            self._editable_section(),
            self._meta_section(),
            self._personal_section(),
            self._contact_section(),
            self._address_section(),
        ]
        return [section for section in sections if section is not None]

    def _images_section(self) -> DetailSection:
        localization = self.card.displayed_localization
        item = DetailItem(
            item_number=0,
            title="Card",
            value=None,
            data={
                "front_image_url": localization.front_image.url,
                "back_image_url": localization.back_image.url,
                "texture_image_url": localization.texture.image.url,
                "normal": localization.texture.normal,
                "specular": localization.texture.specular,
                "corner_radius_height_multiplier": localization.corner_radius_height_multiplier,
            },
        )
        return DetailSection(SectionKind.IMAGES, (item,))

    def _editable_section(self) -> DetailSection:
        tags_value = ",\n".join(tag.title for tag in self.tags) if self.tags else "No tags."
        has_notes = bool(self.card.notes)
        notes_actions = (
            (DetailAction.COPY, DetailAction.EDIT_NOTES) if has_notes else (DetailAction.EDIT_NOTES,)
        )
        rows = [
            ("Tags", tags_value, (DetailAction.EDIT_TAGS,)),
            ("Notes", self.card.notes if has_notes else "No notes.", notes_actions),
        ]
        return DetailSection(SectionKind.EDITABLE, _numbered(rows))

    def _meta_section(self) -> DetailSection:
        rows = [("Date Received", self.card.receiving_date_formatted, ())]
        return DetailSection(SectionKind.META, _numbered(rows))

    def _personal_section(self) -> DetailSection | None:
        position = self.card.displayed_localization.position
        copy = (DetailAction.COPY,)
        rows = _non_empty(
            [
                ("Name", self.card.owner_display_name, copy),
                ("Position", position.title, copy),
                ("Company", position.company, copy),
            ]
        )
        if not rows:
            return None
        return DetailSection(SectionKind.PERSONAL, _numbered(rows))

    def _contact_section(self) -> DetailSection | None:
        contact = self.card.displayed_localization.contact
        rows = _non_empty(
            [
                ("Phone", contact.phone_number_primary, (DetailAction.COPY, DetailAction.CALL)),
                (
                    "Phone Secondary",
                    contact.phone_number_secondary,
                    (DetailAction.COPY, DetailAction.CALL),
                ),
                ("Email", contact.email, (DetailAction.COPY, DetailAction.SEND_EMAIL)),
                ("Website", contact.website, (DetailAction.COPY, DetailAction.VISIT_WEBSITE)),
                ("Fax", contact.fax, (DetailAction.COPY,)),
            ]
        )
        if not rows:
            return None
        return DetailSection(SectionKind.CONTACT, _numbered(rows))

    def _address_section(self) -> DetailSection | None:
        address = self.card.address_formatted
        if not address:
            return None
        rows = [("Address", address, (DetailAction.COPY, DetailAction.NAVIGATE))]
        return DetailSection(SectionKind.ADDRESS, _numbered(rows))


def build_detail_sections(card: ReceivedCard, tags: list[CardTag] | None = None) -> list[DetailSection]:
    """Return the detail sections for ``card``, restricted to the tags attached to it."""
    attached = [tag for tag in tags or [] if tag.id in card.tag_ids]
    return CardDetailsSectionBuilder(card, attached).build()


__all__ = [
    "CardDetailsSectionBuilder",
    "DetailAction",
    "DetailItem",
    "DetailSection",
    "SectionKind",
    "build_detail_sections",
]
