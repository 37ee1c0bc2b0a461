"""
Services package - Business logic layer.

This package exposes business services while avoiding heavy imports at module load time.
"""

from importlib import import_module
from typing import Any

__all__ = [
    "CardDetailsSectionBuilder",
    "CardSyncService",
    "DEFAULT_SORT_ACTIONS",
    "DEFAULT_SORT_MODE",
    "SortDirection",
    "SortMode",
    "SortProperty",
    "build_detail_sections",
    "filter_positions",
    "sort_cards",
]

_LAZY_MODULES = {
    "CardDetailsSectionBuilder": "services.card_details",
    "build_detail_sections": "services.card_details",
    "filter_positions": "services.card_search",
    "CardSyncService": "services.card_sync",
    "DEFAULT_SORT_ACTIONS": "services.card_sorting",
    "DEFAULT_SORT_MODE": "services.card_sorting",
    "SortDirection": "services.card_sorting",
    "SortMode": "services.card_sorting",
    "SortProperty": "services.card_sorting",
    "sort_cards": "services.card_sorting",
}


def __getattr__(name: str) -> Any:
    if name in _LAZY_MODULES:
        module = import_module(_LAZY_MODULES[name])
        value = getattr(module, name)
        globals()[name] = value
        return value

    raise AttributeError(f"module 'services' has no attribute '{name}'")
