from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from services.card_sorting import DEFAULT_SORT_MODE, SortMode, parse_sort_mode
from utils.constants import (
    CONFIG_FILE,
    DEFAULT_DATABASE_NAME,
    DEFAULT_MONGO_URI,
    SESSION_SETTINGS_FILE,
)


class ReceivedCardsSessionManager:
    """Encapsulates received cards settings/config persistence and restoration."""

    def __init__(
        self,
        settings_file: Path = SESSION_SETTINGS_FILE,
        config_file: Path = CONFIG_FILE,
    ) -> None:
        self.settings_file = settings_file
        self.config_file = config_file

        self.settings: dict[str, Any] = self._load_json_file(self.settings_file)
        self.config: dict[str, Any] = self._load_json_file(self.config_file)

    # ------------------------------------------------------------------ helpers ------------------------------------------------------------------
    @staticmethod
    def _load_json_file(path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except json.JSONDecodeError as exc:
            logger.warning(f"Invalid JSON at {path}: {exc}")
            return {}
        except OSError as exc:
            logger.warning(f"Unable to read {path}: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {path}: expected a JSON object")
            return {}
        return data

    # ------------------------------------------------------------------ config ------------------------------------------------------------------
    def get_mongo_uri(self) -> str:
        return str(self.config.get("mongo_uri") or DEFAULT_MONGO_URI)

    def get_database_name(self) -> str:
        return str(self.config.get("database_name") or DEFAULT_DATABASE_NAME)

    def get_preferred_language(self) -> str | None:
        language = self.config.get("preferred_language")
        return language if isinstance(language, str) and language else None

    # ------------------------------------------------------------------ sort mode ------------------------------------------------------------------
    def get_sort_mode(self) -> SortMode:
        saved = self.settings.get("sort_mode")
        if not isinstance(saved, dict):
            return DEFAULT_SORT_MODE
        mode = parse_sort_mode(str(saved.get("property", "")), str(saved.get("direction", "")))
        if mode is None:
            logger.debug(f"Ignoring invalid saved sort mode: {saved!r}")
            return DEFAULT_SORT_MODE
        return mode

    def save_sort_mode(self, mode: SortMode) -> None:
        """Persist the selected sort mode to the settings file."""
        data = dict(self.settings)
        data["sort_mode"] = {"property": mode.property.value, "direction": mode.direction.value}

        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with self.settings_file.open("w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2)
        except OSError as exc:
            logger.warning(f"Unable to persist received cards settings: {exc}")
            return

        self.settings = data


__all__ = ["ReceivedCardsSessionManager"]
