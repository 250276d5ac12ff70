from __future__ import annotations

from PySide6.QtWidgets import QFileDialog, QInputDialog, QLineEdit, QMessageBox, QWidget


def pick_folder(parent: QWidget) -> str | None:
    path = QFileDialog.getExistingDirectory(parent, "Select notes folder")
    return path or None


def confirm_delete(parent: QWidget, titles: list[str]) -> bool:
    if len(titles) == 1:
        text = f"Delete \"{titles[0]}\"?"
    else:
        text = f"Delete {len(titles)} notes?"
    answer = QMessageBox.question(
        parent,
        "Delete note",
        text,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return answer == QMessageBox.Yes


def ask_new_title(parent: QWidget, current_title: str) -> str | None:
    """None when the user cancels or leaves the field empty."""
    text, ok = QInputDialog.getText(
        parent,
        "Rename note",
        "New name:",
        QLineEdit.Normal,
        current_title,
    )
    text = (text or "").strip()
    if not ok or not text:
        return None
    return text


def show_rename_error(parent: QWidget, reason: str) -> None:
    QMessageBox.warning(parent, "Rename failed", reason or "The note could not be renamed.")
