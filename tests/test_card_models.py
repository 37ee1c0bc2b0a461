"""Tests for card records and document mapping."""

from datetime import datetime

import pytest
from test_helpers import make_card, make_card_document, make_localization

from models import CardAddress, CardTag, ReceivedCard, resolve_localization


def test_resolve_localization_prefers_language_match():
    en = make_localization("en", language_code="en", is_default=True)
    pl = make_localization("pl", language_code="pl", is_default=False)

    assert resolve_localization([en, pl], "pl") is pl


def test_resolve_localization_falls_back_to_default():
    en = make_localization("en", language_code="en", is_default=False)
    de = make_localization("de", language_code="de", is_default=True)

    assert resolve_localization([en, de], "fr") is de
    assert resolve_localization([en, de]) is de


def test_resolve_localization_falls_back_to_first():
    en = make_localization("en", is_default=False)
    pl = make_localization("pl", language_code="pl", is_default=False)

    assert resolve_localization([en, pl]) is en


def test_resolve_localization_requires_versions():
    with pytest.raises(ValueError):
        resolve_localization([])


def test_from_document_maps_fields():
    card = ReceivedCard.from_document(make_card_document())

    assert card.id == "card-1"
    assert card.receiving_date == datetime(2020, 6, 15, 12, 0)
    assert card.notes == "Met at the conference"
    assert card.tag_ids == ("tag-1",)
    assert len(card.language_versions) == 2
    displayed = card.displayed_localization
    assert displayed.id == "v-en"
    assert displayed.name.first == "Ann"
    assert displayed.position.company == "Acme"
    assert displayed.contact.email == "ann@example.com"
    assert displayed.texture.specular == 0.3
    assert displayed.haptic_feedback_sharpness == 0.8


def test_from_document_uses_preferred_language():
    card = ReceivedCard.from_document(make_card_document(), preferred_language="pl")

    assert card.displayed_localization.name.first == "Anna"
    assert card.displayed_localization.texture.specular == 0.5


def test_from_document_accepts_iso_date_strings():
    card = ReceivedCard.from_document(make_card_document(receivingDate="2021-03-04T05:06:07"))

    assert card.receiving_date == datetime(2021, 3, 4, 5, 6, 7)


def test_from_document_converts_aware_dates_to_naive_utc():
    card = ReceivedCard.from_document(make_card_document(receivingDate="2021-03-04T07:06:07+02:00"))

    assert card.receiving_date == datetime(2021, 3, 4, 5, 6, 7)
    assert card.receiving_date.tzinfo is None


def test_from_document_rejects_bad_date():
    with pytest.raises(TypeError):
        ReceivedCard.from_document(make_card_document(receivingDate=12345))


def test_from_document_requires_language_versions():
    with pytest.raises(ValueError):
        ReceivedCard.from_document(make_card_document(languageVersions=[]))


def test_from_document_missing_field_raises_key_error():
    document = make_card_document()
    del document["receivingDate"]

    with pytest.raises(KeyError):
        ReceivedCard.from_document(document)


def test_as_document_round_trips():
    card = ReceivedCard.from_document(make_card_document())

    restored = ReceivedCard.from_document(card.as_document())

    assert restored == card


def test_owner_display_name_skips_missing_parts():
    card = make_card("c1", first="Ann", last="Lee", prefix="Dr.")

    assert card.owner_display_name == "Dr. Ann Lee"
    assert make_card("c2").owner_display_name == ""


def test_address_formatted():
    card = make_card("c1", address=CardAddress(city="Warsaw", country="Poland"))

    assert card.address_formatted == "Warsaw\nPoland"
    assert make_card("c2").address_formatted == ""


def test_card_tag_from_document():
    tag = CardTag.from_document({"_id": "t1", "title": "Work", "color": "#ff0000"})

    assert tag == CardTag(id="t1", title="Work", color="#ff0000", description=None)


def test_cards_are_immutable():
    card = make_card("c1")

    with pytest.raises(AttributeError):
        card.notes = "changed"
