from __future__ import annotations

from contextlib import contextmanager

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QListWidget

NOTE_ID_ROLE = Qt.UserRole


@contextmanager
def blocked_signals(obj):
    """Temporarily silence a widget's signals; always re-enabled afterwards."""
    if obj is None:
        yield
        return
    obj.blockSignals(True)
    try:
        yield
    finally:
        obj.blockSignals(False)


def selected_note_ids(listw: QListWidget) -> list[str]:
    ids = []
    for item in listw.selectedItems():
        note_id = item.data(NOTE_ID_ROLE)
        if note_id:
            ids.append(note_id)
    return ids


def select_note_in_list(listw: QListWidget, note_id: str | None) -> bool:
    with blocked_signals(listw):
        listw.clearSelection()
        if note_id is None:
            return False
        for i in range(listw.count()):
            if listw.item(i).data(NOTE_ID_ROLE) == note_id:
                listw.setCurrentRow(i)
                return True
    return False
