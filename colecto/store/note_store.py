# colecto/store/note_store.py

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

from colecto.core.filenames import (
    ensure_note_ext,
    is_note_name,
    is_plain_file_name,
    is_valid_title,
    note_id_from_title,
    untitled_candidates,
)
from colecto.core.models import Note, RenameResult
from colecto.logging_setup import get_logger
from colecto.store.filesystem import atomic_write_text

log = get_logger(__name__)

ERR_INVALID_NAME = "Invalid note name"
ERR_NOT_FOUND = "Note not found"
ERR_NAME_TAKEN = "A note with this name already exists"


class NoteStore:
    """
    CRUD over note files in a single folder.

    The store holds no current-folder state: every call names its folder.
    No call raises; failures come back as False / None / a failed
    RenameResult and are logged. Callers re-list to observe the new state
    after any mutation.
    """

    def __init__(self, *, encoding: str = "utf-8"):
        self.encoding = encoding

    # ───────────────────────── public API ─────────────────────────

    def list_notes(self, folder: str | Path) -> list[Note]:
        """
        Notes directly inside `folder`, most recently modified first.
        An unreadable folder yields an empty list.
        """
        try:
            with os.scandir(self._folder(folder)) as it:
                entries = [e for e in it if is_note_name(e.name)]
        except (OSError, ValueError) as exc:
            log.error("List failed: folder=%s err=%s", folder, exc)
            return []

        notes: list[Note] = []
        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                path = Path(entry.path)
                with open(path, "r", encoding=self.encoding, newline="") as f:
                    content = f.read()
                modified = datetime.fromtimestamp(path.stat().st_mtime)
            except (OSError, UnicodeDecodeError) as exc:
                log.warning("Skipping unreadable note: path=%s err=%s", entry.path, exc)
                continue
            notes.append(Note(id=entry.name, content=content, modified=modified))

        notes.sort(key=lambda n: n.id)
        notes.sort(key=lambda n: n.modified, reverse=True)
        log.debug("Listed notes: folder=%s count=%d", folder, len(notes))
        return notes

    def save_note(self, folder: str | Path, note_id: str, content: str) -> bool:
        """Overwrite the note with `content`; the extension is appended if missing."""
        try:
            path = self._note_path(folder, ensure_note_ext(note_id))
            atomic_write_text(path, content, encoding=self.encoding)
        except (OSError, ValueError) as exc:
            log.error("Save failed: folder=%s id=%s err=%s", folder, note_id, exc)
            return False
        log.info("Saved note: %s chars=%d", path, len(content))
        return True

    def create_note(self, folder: str | Path) -> str | None:
        """Create an empty "Untitled Note <n>.md" and return its id."""
        try:
            base = self._folder(folder)
            names = os.listdir(base)
        except (OSError, ValueError) as exc:
            log.error("Create failed: folder=%s err=%s", folder, exc)
            return None

        for note_id in untitled_candidates(names):
            try:
                # exclusive create: a name taken since listdir() is skipped, not truncated
                with open(base / note_id, "x", encoding=self.encoding):
                    pass
            except FileExistsError:
                log.debug("Create: name taken meanwhile, trying next: %s", note_id)
                continue
            except OSError as exc:
                log.error("Create failed: folder=%s id=%s err=%s", folder, note_id, exc)
                return None
            log.info("Created note: folder=%s id=%s", folder, note_id)
            return note_id
        return None

    def delete_note(self, folder: str | Path, note_id: str) -> bool:
        try:
            path = self._note_path(folder, note_id)
            if not path.is_file():
                log.warning("Delete failed: no such note: folder=%s id=%s", folder, note_id)
                return False
            path.unlink()
        except (OSError, ValueError) as exc:
            log.error("Delete failed: folder=%s id=%s err=%s", folder, note_id, exc)
            return False
        log.info("Deleted note: %s", path)
        return True

    def rename_note(self, folder: str | Path, note_id: str, new_title: str) -> RenameResult:
        """
        Rename the note file to `<new_title>.md`, keeping its content.

        Renaming to the current title is a successful no-op. An existing
        different file at the target name is never overwritten; the
        existence check and the rename are not atomic together.
        """
        new_title = (new_title or "").strip()
        if not is_valid_title(new_title):
            log.warning("Rename rejected: invalid title=%r", new_title)
            return RenameResult.failed(ERR_INVALID_NAME)

        try:
            src = self._note_path(folder, note_id)
        except ValueError:
            log.warning("Rename rejected: invalid id=%r", note_id)
            return RenameResult.failed(ERR_NOT_FOUND)

        new_id = note_id_from_title(new_title)
        dst = src.parent / new_id

        try:
            if not src.is_file():
                log.warning("Rename failed: no such note: %s", src)
                return RenameResult.failed(ERR_NOT_FOUND)
            if new_id == note_id:
                log.debug("Rename is a no-op: %s", src)
                return RenameResult.ok(note_id)
            if dst.exists() and not _same_file(src, dst):
                log.info("Rename refused, target exists: %s -> %s", src, dst)
                return RenameResult.failed(ERR_NAME_TAKEN)
            src.rename(dst)
        except OSError as exc:
            log.error("Rename failed: %s -> %s err=%s", src, dst, exc)
            return RenameResult.failed(exc.strerror or str(exc))

        log.info("Renamed note: %s -> %s", note_id, new_id)
        return RenameResult.ok(new_id)

    # ───────────────────────── internal ─────────────────────────

    @staticmethod
    def _folder(folder: str | Path) -> Path:
        if not folder:
            raise ValueError("no folder given")
        return Path(folder)

    def _note_path(self, folder: str | Path, note_id: str) -> Path:
        if not is_plain_file_name(note_id or ""):
            raise ValueError(f"invalid note id: {note_id!r}")
        return self._folder(folder) / note_id


def _same_file(a: Path, b: Path) -> bool:
    # case-only renames on case-insensitive file systems
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
