#!/usr/bin/env python3
"""Command-line entry point that lists a user's received business cards."""

from __future__ import annotations

import argparse
import sys

from loguru import logger

from controllers.received_cards_controller import ReceivedCardsController
from controllers.session_manager import ReceivedCardsSessionManager
from models import ReceivedCard
from repositories.card_repository import CardRepository, DataFetchMode
from services.card_sorting import SortDirection, SortMode, SortProperty
from services.card_sync import CardSyncService
from utils.background_worker import BackgroundWorker
from utils.constants import LOGS_DIR, ensure_base_dirs
from utils.foreground import ForegroundQueue
from utils.logging_config import configure_logging


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List the business cards a user has received.")
    parser.add_argument("--user", required=True, help="Id of the user whose cards are listed.")
    parser.add_argument(
        "--sort",
        choices=[prop.value for prop in SortProperty],
        default=None,
        help="Sort key (defaults to the last one used).",
    )
    parser.add_argument(
        "--descending",
        action="store_true",
        help="Sort in descending order (applies to the last used key when --sort is omitted).",
    )
    parser.add_argument("--search", default="", help="Only show cards whose name contains this text.")
    parser.add_argument("--ids", nargs="+", default=None, help="Only fetch these card ids.")
    parser.add_argument("--language", default=None, help="Preferred card language code.")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and print the list again after every database change.",
    )
    parser.add_argument("--verbose", action="store_true", help="Show debug logging on the console.")
    return parser.parse_args(argv)


def format_card_line(card: ReceivedCard) -> str:
    position = card.displayed_localization.position
    company = f" ({position.company})" if position.company else ""
    name = card.owner_display_name or "<no name>"
    return f"{card.receiving_date_formatted:>12s}  {name}{company}  [{card.id}]"


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    ensure_base_dirs()
    configure_logging(LOGS_DIR, console_level="DEBUG" if args.verbose else "INFO")

    session = ReceivedCardsSessionManager()
    sort_mode = session.get_sort_mode()
    if args.sort:
        direction = SortDirection.DESCENDING if args.descending else SortDirection.ASCENDING
        sort_mode = SortMode(SortProperty(args.sort), direction)
    elif args.descending:
        sort_mode = SortMode(sort_mode.property, SortDirection.DESCENDING)

    repository = CardRepository(
        mongo_uri=session.get_mongo_uri(),
        database_name=session.get_database_name(),
        preferred_language=args.language or session.get_preferred_language(),
    )
    foreground = ForegroundQueue()
    worker = BackgroundWorker(call_after=foreground.call_after)
    controller = ReceivedCardsController(
        user_id=args.user,
        card_repository=repository,
        worker=worker,
        sort_mode=sort_mode,
        data_fetch_mode=DataFetchMode.specified(args.ids) if args.ids else DataFetchMode.all(),
    )

    errors: list[Exception] = []
    resyncs: list[bool] = []
    controller.add_error_listener(errors.append)

    def on_display_changed(animated: bool) -> None:
        if not animated:
            resyncs.append(animated)

    controller.add_listener(on_display_changed)

    def print_cards() -> None:
        print(f"\n{controller.item_count()} card(s):")
        for position in range(controller.item_count()):
            print(format_card_line(controller.item(position)))

    try:
        controller.refresh()
        foreground.run_until(lambda: bool(errors or resyncs), timeout=30.0)
        if errors:
            print(f"Failed to fetch cards: {errors[0]}", file=sys.stderr)
            return 1
        if not resyncs:
            print("Timed out waiting for cards.", file=sys.stderr)
            return 1

        if args.search:
            controller.search(args.search)
            foreground.run_until(lambda: not controller.is_updating)
        print_cards()
        session.save_sort_mode(controller.sort_mode)

        if args.watch:
            sync = CardSyncService(controller, repository, worker)
            seen = len(resyncs)
            sync.start()
            try:
                while not errors:
                    foreground.run_until(lambda: bool(errors) or len(resyncs) > seen, timeout=1.0)
                    if len(resyncs) > seen and not controller.is_updating:
                        seen = len(resyncs)
                        # A resync clears the query
                        if args.search:
                            controller.search(args.search)
                            foreground.run_until(lambda: not controller.is_updating)
                        print_cards()
            except KeyboardInterrupt:
                logger.info("Stopping card sync")
            finally:
                sync.stop()
            if errors:
                print(f"Card sync failed: {errors[0]}", file=sys.stderr)
                return 1
        return 0
    finally:
        worker.shutdown(timeout=2.0)


if __name__ == "__main__":
    raise SystemExit(main())
