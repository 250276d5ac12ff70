from __future__ import annotations

import unicodedata
from typing import Iterable, Iterator

from colecto.settings import NOTE_EXT, UNTITLED_PREFIX


def is_note_name(name: str) -> bool:
    return name.endswith(NOTE_EXT)


def ensure_note_ext(note_id: str) -> str:
    return note_id if note_id.endswith(NOTE_EXT) else f"{note_id}{NOTE_EXT}"


def title_from_id(note_id: str) -> str:
    """Strip the note extension from the end of the id (never an inner occurrence)."""
    if note_id.endswith(NOTE_EXT):
        return note_id[: -len(NOTE_EXT)]
    return note_id


def note_id_from_title(title: str) -> str:
    return f"{title}{NOTE_EXT}"


def is_plain_file_name(name: str) -> bool:
    """
    True when `name` addresses a file directly inside the folder:
    no separators, no dot entries, no NUL.
    """
    if not name or name in (".", ".."):
        return False
    return not any(ch in name for ch in ("/", "\\", "\0"))


def is_valid_title(title: str) -> bool:
    """
    A new title must be a plain file name without line breaks, tabs or other
    Cc controls. Format characters (ZWNJ, ZWJ, soft hyphen) are allowed.
    """
    title = (title or "").strip()
    if not title or not is_plain_file_name(note_id_from_title(title)) or title in (".", ".."):
        return False
    return all(unicodedata.category(ch) != "Cc" for ch in title)


def untitled_note_id(n: int) -> str:
    return note_id_from_title(f"{UNTITLED_PREFIX} {n}")


def untitled_candidates(existing: Iterable[str]) -> Iterator[str]:
    """
    "Untitled Note <n>.md" names absent from `existing`, counting up from
    (number of entries starting with the prefix) + 1.
    Gaps below the starting count are not revisited.
    """
    names = set(existing)
    counter = sum(1 for name in names if name.startswith(UNTITLED_PREFIX)) + 1
    while True:
        candidate = untitled_note_id(counter)
        if candidate not in names:
            yield candidate
        counter += 1


def next_untitled_id(existing: Iterable[str]) -> str:
    return next(untitled_candidates(existing))
