from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CardTag:
    """User-defined label that can be attached to received cards."""

    id: str
    title: str
    color: str
    description: str | None = None

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> CardTag:
        return cls(
            id=str(document["_id"]),
            title=str(document["title"]),
            color=str(document.get("color", "")),
            description=document.get("description"),
        )


__all__ = ["CardTag"]
