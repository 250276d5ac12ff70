# colecto/store/filesystem.py

from __future__ import annotations

import os
import uuid
from datetime import datetime
from pathlib import Path

from colecto.core.filenames import title_from_id
from colecto.settings import RECOVERY_DIR


def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to a hidden temp file in the same directory
    - fsync
    - replace()

    Readers see either the old or the new content, never a partial file.
    The temp name does not end with the note extension, so a leftover is
    never listed as a note.
    """
    path = Path(path)
    tmp_path = path.parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def write_recovery_copy(
    note_id: str,
    text: str,
    *,
    recovery_dir: Path = RECOVERY_DIR,
) -> Path:
    """
    Emergency copy of editor text when the regular save failed.

    Writes a timestamped file into ~/.colecto/recovery/.
    """
    recovery_dir = Path(recovery_dir)
    recovery_dir.mkdir(parents=True, exist_ok=True)

    stem = title_from_id(Path(note_id).name) or "Untitled"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = recovery_dir / f"{stem}.recovery.{ts}.md"
    atomic_write_text(recovery_path, text)
    return recovery_path
