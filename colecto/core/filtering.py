from __future__ import annotations

import re
from enum import Enum
from typing import Iterable

from colecto.core.models import Note

_WS_RE = re.compile(r"\s+")


class SortOrder(str, Enum):
    MODIFIED_DESC = "modified_desc"
    MODIFIED_ASC = "modified_asc"
    TITLE_ASC = "title_asc"
    TITLE_DESC = "title_desc"

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MODIFIED_DESC


SORT_LABELS = {
    SortOrder.MODIFIED_DESC: "Recently modified",
    SortOrder.MODIFIED_ASC: "Oldest first",
    SortOrder.TITLE_ASC: "Title A-Z",
    SortOrder.TITLE_DESC: "Title Z-A",
}


def filter_notes(notes: Iterable[Note], query: str) -> list[Note]:
    """Naive case-insensitive substring match on title or content."""
    q = (query or "").strip().casefold()
    if not q:
        return list(notes)
    return [n for n in notes if q in n.title.casefold() or q in n.content.casefold()]


def sort_notes(notes: Iterable[Note], order: SortOrder = SortOrder.MODIFIED_DESC) -> list[Note]:
    items = list(notes)
    if order in (SortOrder.TITLE_ASC, SortOrder.TITLE_DESC):
        return sorted(
            items,
            key=lambda n: (n.title.casefold(), n.id),
            reverse=order is SortOrder.TITLE_DESC,
        )
    # id first so equal timestamps keep a stable order
    items.sort(key=lambda n: n.id)
    items.sort(key=lambda n: n.modified, reverse=order is SortOrder.MODIFIED_DESC)
    return items


def preview_snippet(content: str, limit: int = 60) -> str:
    text = _WS_RE.sub(" ", content or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."
