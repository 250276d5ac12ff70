from __future__ import annotations

from pathlib import Path
from typing import Callable

from colecto.core.models import Note, RenameResult
from colecto.logging_setup import get_logger
from colecto.store.note_store import NoteStore

log = get_logger(__name__)

FolderPicker = Callable[[], "str | Path | None"]


class NotesApi:
    """
    Request/response surface the UI talks to.

    Mirrors the store one call per operation, adds folder selection, and
    maps anything unexpected that escapes the store to the operation's
    failure value so the UI never has to catch.
    """

    def __init__(self, store: NoteStore | None = None, *, pick_folder: FolderPicker | None = None):
        self.store = store or NoteStore()
        self._pick_folder = pick_folder

    def select_folder(self) -> str | None:
        if self._pick_folder is None:
            log.warning("select_folder: no folder picker configured")
            return None
        try:
            picked = self._pick_folder()
        except Exception:
            log.exception("Folder picker failed")
            return None
        if not picked:
            log.info("Folder selection cancelled")
            return None
        path = Path(picked).expanduser().resolve()
        if not path.is_dir():
            log.warning("Selected path is not a directory: %s", path)
            return None
        log.info("Folder selected: %s", path)
        return str(path)

    def get_notes(self, folder: str) -> list[Note]:
        log.debug("get_notes: folder=%s", folder)
        try:
            return self.store.list_notes(folder)
        except Exception:
            log.exception("get_notes crashed: folder=%s", folder)
            return []

    def save_note(self, folder: str, note_id: str, content: str) -> bool:
        log.debug("save_note: folder=%s id=%s", folder, note_id)
        try:
            return self.store.save_note(folder, note_id, content)
        except Exception:
            log.exception("save_note crashed: folder=%s id=%s", folder, note_id)
            return False

    def create_note(self, folder: str) -> str | None:
        log.debug("create_note: folder=%s", folder)
        try:
            return self.store.create_note(folder)
        except Exception:
            log.exception("create_note crashed: folder=%s", folder)
            return None

    def delete_note(self, folder: str, note_id: str) -> bool:
        log.debug("delete_note: folder=%s id=%s", folder, note_id)
        try:
            return self.store.delete_note(folder, note_id)
        except Exception:
            log.exception("delete_note crashed: folder=%s id=%s", folder, note_id)
            return False

    def rename_note(self, folder: str, old_id: str, new_title: str) -> RenameResult:
        log.debug("rename_note: folder=%s id=%s new_title=%r", folder, old_id, new_title)
        try:
            return self.store.rename_note(folder, old_id, new_title)
        except Exception as exc:
            log.exception("rename_note crashed: folder=%s id=%s", folder, old_id)
            return RenameResult.failed(str(exc))
