from __future__ import annotations
from pathlib import Path

APP_NAME = "colecto"
APP_DIR = Path.home() / f".{APP_NAME}"
LOG_DIR = APP_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
RECOVERY_DIR = APP_DIR / "recovery"

NOTE_EXT = ".md"
UNTITLED_PREFIX = "Untitled Note"

AUTOSAVE_INTERVAL_MS = 2000
PREVIEW_DEBOUNCE_MS = 300
