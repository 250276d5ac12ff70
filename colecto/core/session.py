from __future__ import annotations

from typing import Iterable

from colecto.core.models import Note


def find_note(notes: Iterable[Note], note_id: str | None) -> Note | None:
    if note_id is None:
        return None
    for note in notes:
        if note.id == note_id:
            return note
    return None


class EditSession:
    """
    Editor state for the selected note.

    `loaded_text` is what was last read from or written to disk; `buffer`
    is what the user currently sees. Autosave writes only when the two differ.
    """

    def __init__(self) -> None:
        self.note_id: str | None = None
        self.loaded_text = ""
        self.buffer = ""

    @property
    def active(self) -> bool:
        return self.note_id is not None

    def open(self, note: Note | None) -> None:
        self.note_id = note.id if note is not None else None
        self.loaded_text = note.content if note is not None else ""
        self.buffer = self.loaded_text

    def close(self) -> None:
        self.open(None)

    def edit(self, text: str) -> None:
        self.buffer = text

    def needs_save(self) -> bool:
        return self.active and self.buffer != self.loaded_text

    def mark_saved(self, text: str) -> None:
        self.loaded_text = text

    def retarget(self, new_id: str) -> None:
        """The current note was renamed; buffer and loaded text stay as they are."""
        self.note_id = new_id

    def sync_from(self, notes: Iterable[Note]) -> bool:
        """
        Adopt a fresh listing. Unsaved edits are kept; if the note vanished
        from disk the session closes. Returns False in that case.
        """
        if self.note_id is None:
            return True
        note = find_note(notes, self.note_id)
        if note is None:
            self.close()
            return False
        if self.buffer == self.loaded_text:
            self.buffer = note.content
        self.loaded_text = note.content
        return True
