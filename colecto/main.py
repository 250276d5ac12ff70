from __future__ import annotations

import argparse
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from colecto.app_settings import open_settings
from colecto.logging_setup import SESSION_ID, install_global_exception_hooks, log, setup_logging
from colecto.settings import APP_NAME
from colecto.store.note_store import NoteStore
from colecto.ui.main_window import NotesApp, initial_folder


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog=APP_NAME, description="Plain-file notes in a folder")
    p.add_argument(
        "--folder",
        type=Path,
        default=None,
        help="Notes folder to open (defaults to the last used one)",
    )
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()
    install_global_exception_hooks()

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    settings = open_settings()
    win = NotesApp(store=NoteStore(), settings=settings)
    folder = initial_folder(settings, args.folder)
    if folder is not None:
        win.open_folder(folder)
    win.show()
    log.info("Application started, SID=%s folder=%s", SESSION_ID, folder)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
