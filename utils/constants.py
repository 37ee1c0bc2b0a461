"""Constants file."""

import os
import sys
from pathlib import Path

APP_NAME = "Virtual Business Cards"


def _default_base_dir() -> Path:
    """Return the writable base directory for config/logging."""
    if getattr(sys, "frozen", False):
        local_appdata = os.getenv("LOCALAPPDATA")
        if local_appdata:
            return Path(local_appdata) / APP_NAME
        return Path.home() / ".virtual_business_cards"
    return Path(__file__).resolve().parent.parent


BASE_DATA_DIR = _default_base_dir()
CONFIG_DIR = BASE_DATA_DIR / "config"
LOGS_DIR = BASE_DATA_DIR / "logs"


def ensure_base_dirs() -> None:
    """Ensure base config/log directories exist without importing side effects."""
    BASE_DATA_DIR.mkdir(parents=True, exist_ok=True)
    for path in (CONFIG_DIR, LOGS_DIR):
        path.mkdir(parents=True, exist_ok=True)


CONFIG_FILE = CONFIG_DIR / "config.json"
SESSION_SETTINGS_FILE = CONFIG_DIR / "received_cards_settings.json"

# Document database
DEFAULT_MONGO_URI = "mongodb://localhost:27017/"
DEFAULT_DATABASE_NAME = "virtual_business_cards"
RECEIVED_CARDS_COLLECTION = "received_cards"
CARD_TAGS_COLLECTION = "card_tags"

# Live sync
CHANGE_STREAM_MAX_AWAIT_MS = 500

__all__ = [
    "APP_NAME",
    "BASE_DATA_DIR",
    "CONFIG_DIR",
    "LOGS_DIR",
    "CONFIG_FILE",
    "SESSION_SETTINGS_FILE",
    "DEFAULT_MONGO_URI",
    "DEFAULT_DATABASE_NAME",
    "RECEIVED_CARDS_COLLECTION",
    "CARD_TAGS_COLLECTION",
    "CHANGE_STREAM_MAX_AWAIT_MS",
    "ensure_base_dirs",
]
