"""Tests for the command-line entry point."""

from datetime import datetime
from unittest.mock import Mock

import pytest
from test_helpers import make_card

import main
from controllers.session_manager import ReceivedCardsSessionManager
from models import CardPosition
from repositories.card_repository import DataFetchMode
from services.card_sorting import SortDirection, SortMode, SortProperty


class FakeRepository:
    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.fetch_received_cards = Mock(
            return_value=[
                make_card("cid", first="Cid", last="Ng", received=datetime(2020, 6, 3)),
                make_card("ann", first="Ann", last="Lee", received=datetime(2020, 6, 1)),
                make_card("bob", first="Bob", last="Ng", received=datetime(2020, 6, 2)),
            ]
        )
        FakeRepository.instances.append(self)


@pytest.fixture
def settings_paths(tmp_path):
    return tmp_path / "settings.json", tmp_path / "config.json"


@pytest.fixture(autouse=True)
def patched_environment(monkeypatch, settings_paths):
    FakeRepository.instances = []
    settings_file, config_file = settings_paths
    monkeypatch.setattr(main, "ensure_base_dirs", lambda: None)
    monkeypatch.setattr(main, "configure_logging", lambda *_args, **_kwargs: None)
    monkeypatch.setattr(
        main,
        "ReceivedCardsSessionManager",
        lambda: ReceivedCardsSessionManager(settings_file=settings_file, config_file=config_file),
    )
    monkeypatch.setattr(main, "CardRepository", FakeRepository)


def output_ids(output):
    return [line.rsplit("[", 1)[1].rstrip("]") for line in output.splitlines() if line.endswith("]")]


def test_lists_cards_in_saved_sort_order(capsys):
    assert main.main(["--user", "user-1"]) == 0

    out = capsys.readouterr().out
    assert "3 card(s):" in out
    assert output_ids(out) == ["ann", "bob", "cid"]
    repo = FakeRepository.instances[0]
    repo.fetch_received_cards.assert_called_once_with("user-1", DataFetchMode.all())


def test_sort_search_and_ids(capsys, settings_paths):
    code = main.main(
        ["--user", "user-1", "--sort", "receiving_date", "--descending", "--search", "Ng", "--ids", "bob", "cid"]
    )

    assert code == 0
    assert output_ids(capsys.readouterr().out) == ["cid", "bob"]
    repo = FakeRepository.instances[0]
    repo.fetch_received_cards.assert_called_once_with("user-1", DataFetchMode.specified(["bob", "cid"]))

    settings_file, config_file = settings_paths
    restored = ReceivedCardsSessionManager(settings_file=settings_file, config_file=config_file)
    assert restored.get_sort_mode() == SortMode(SortProperty.RECEIVING_DATE, SortDirection.DESCENDING)


def test_descending_without_sort_reverses_saved_key(capsys, settings_paths):
    settings_file, config_file = settings_paths
    ReceivedCardsSessionManager(settings_file=settings_file, config_file=config_file).save_sort_mode(
        SortMode(SortProperty.LAST_NAME, SortDirection.ASCENDING)
    )

    assert main.main(["--user", "user-1", "--descending"]) == 0

    assert output_ids(capsys.readouterr().out) == ["cid", "bob", "ann"]
    restored = ReceivedCardsSessionManager(settings_file=settings_file, config_file=config_file)
    assert restored.get_sort_mode() == SortMode(SortProperty.LAST_NAME, SortDirection.DESCENDING)


@pytest.mark.parametrize(("flags", "level"), [([], "INFO"), (["--verbose"], "DEBUG")])
def test_verbose_flag_sets_console_level(monkeypatch, flags, level):
    configure = Mock()
    monkeypatch.setattr(main, "configure_logging", configure)

    main.main(["--user", "user-1", *flags])

    configure.assert_called_once_with(main.LOGS_DIR, console_level=level)


def test_language_flag_reaches_repository():
    main.main(["--user", "user-1", "--language", "pl"])

    assert FakeRepository.instances[0].kwargs["preferred_language"] == "pl"


def test_fetch_failure_returns_error(monkeypatch, capsys):
    class FailingRepository(FakeRepository):
        def __init__(self, **kwargs):
            super().__init__(**kwargs)
            self.fetch_received_cards = Mock(side_effect=ConnectionError("offline"))

    monkeypatch.setattr(main, "CardRepository", FailingRepository)

    assert main.main(["--user", "user-1"]) == 1
    assert "offline" in capsys.readouterr().err


def test_format_card_line():
    card = make_card(
        "c1",
        first="Ann",
        last="Lee",
        received=datetime(2020, 6, 15),
        position=CardPosition(company="Acme"),
    )

    assert main.format_card_line(card) == " 15 Jun 2020  Ann Lee (Acme)  [c1]"
    assert main.format_card_line(make_card("c2")).endswith("<no name>  [c2]")
