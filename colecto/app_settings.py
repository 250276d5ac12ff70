from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings

from colecto.settings import APP_NAME


@dataclass(frozen=True)
class SettingsKeys:
    FOLDER: str = "notes/folder"
    SORT_ORDER: str = "notes/sort_order"
    UI_GEOMETRY: str = "ui/geometry"
    UI_SPLITTER: str = "ui/splitter_sizes"


def open_settings() -> QSettings:
    return QSettings(APP_NAME, APP_NAME)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_int_list(settings: QSettings, key: str) -> list[int] | None:
    """QSettings hands lists back as list, tuple or "200,800" depending on backend."""
    value = settings.value(key)
    if value is None:
        return None
    if isinstance(value, str):
        value = value.replace(",", " ").split()
    out: list[int] = []
    try:
        for x in value:
            out.append(int(x))
    except (TypeError, ValueError):
        return None
    return out or None


def set_value(settings: QSettings, key: str, value) -> None:
    """Best-effort write; a settings backend failure must not break the UI."""
    try:
        settings.setValue(key, value)
    except Exception:
        pass
