from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt, QSettings, QTimer
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QAbstractItemView, QComboBox, QHBoxLayout, QLabel, QLineEdit,
    QListWidget, QListWidgetItem, QMainWindow, QPlainTextEdit, QPushButton,
    QSplitter, QStackedWidget, QTextBrowser, QVBoxLayout, QWidget,
)

from colecto.api import NotesApi
from colecto.app_settings import SettingsKeys, get_int_list, get_str, set_value
from colecto.core.filtering import SORT_LABELS, SortOrder, filter_notes, preview_snippet, sort_notes
from colecto.core.models import Note
from colecto.core.session import EditSession, find_note
from colecto.logging_setup import get_logger
from colecto.services.markdown_renderer import MarkdownRenderer
from colecto.settings import APP_NAME, AUTOSAVE_INTERVAL_MS, PREVIEW_DEBOUNCE_MS
from colecto.store.filesystem import write_recovery_copy
from colecto.store.note_store import NoteStore
from colecto.ui.dialogs import ask_new_title, confirm_delete, pick_folder, show_rename_error
from colecto.ui.qt_utils import NOTE_ID_ROLE, blocked_signals, select_note_in_list, selected_note_ids

log = get_logger(__name__)

STATUS_TIMEOUT_MS = 6000


class NotesApp(QMainWindow):
    """
    Folder-backed notes window.

    The note list is rebuilt from a fresh listing after every create, save,
    rename and delete; nothing is patched in memory.
    """

    def __init__(self, *, store: NoteStore | None = None, settings: QSettings):
        super().__init__()
        self.setWindowTitle("Colecto")

        self.api = NotesApi(store, pick_folder=lambda: pick_folder(self))
        self.settings = settings
        self.renderer = MarkdownRenderer()

        self.folder: str | None = None
        self.notes: list[Note] = []
        self.session = EditSession()
        self._last_recovery_text: str | None = None
        self.sort_order = SortOrder.parse(get_str(settings, SettingsKeys.SORT_ORDER, ""))

        self.pages = QStackedWidget()
        self.pages.addWidget(self._build_welcome())
        self.splitter = self._build_workspace()
        self.pages.addWidget(self.splitter)
        self.setCentralWidget(self.pages)

        self.autosave_timer = QTimer(self)
        self.autosave_timer.setInterval(AUTOSAVE_INTERVAL_MS)
        self.autosave_timer.timeout.connect(self._autosave)

        self.preview_timer = QTimer(self)
        self.preview_timer.setInterval(PREVIEW_DEBOUNCE_MS)
        self.preview_timer.setSingleShot(True)
        self.preview_timer.timeout.connect(self._render_preview)

        self._build_menu()
        self._restore_geometry()
        self._show_editor(False)

    # ───────────────────────── layout ─────────────────────────

    def _build_welcome(self) -> QWidget:
        page = QWidget()
        layout = QVBoxLayout(page)
        layout.addStretch(1)

        title = QLabel("<h1>Colecto</h1>")
        title.setAlignment(Qt.AlignCenter)
        tagline = QLabel("A personal thought system")
        tagline.setAlignment(Qt.AlignCenter)
        btn = QPushButton("Select Folder")
        btn.clicked.connect(self.select_folder)

        layout.addWidget(title)
        layout.addWidget(tagline)
        layout.addWidget(btn, alignment=Qt.AlignCenter)
        layout.addStretch(1)
        return page

    def _build_workspace(self) -> QSplitter:
        # sidebar
        self.btn_new = QPushButton("+")
        self.btn_new.setToolTip("New note")
        self.btn_new.setFixedWidth(32)
        self.btn_new.clicked.connect(self.create_note)

        header = QHBoxLayout()
        header.addWidget(QLabel("<b>Colecto</b>"))
        header.addStretch(1)
        header.addWidget(self.btn_new)

        self.search = QLineEdit()
        self.search.setPlaceholderText("Search…")
        self.search.setClearButtonEnabled(True)
        self.search.textChanged.connect(self.refresh_list)

        self.sort_box = QComboBox()
        for order, label in SORT_LABELS.items():
            self.sort_box.addItem(label, order.value)
        self.sort_box.setCurrentIndex(self.sort_box.findData(self.sort_order.value))
        self.sort_box.currentIndexChanged.connect(self._on_sort_changed)

        self.listw = QListWidget()
        self.listw.setSelectionMode(QAbstractItemView.ExtendedSelection)
        self.listw.itemSelectionChanged.connect(self._on_select_note)

        self.btn_folder = QPushButton("Change folder")
        self.btn_folder.setFlat(True)
        self.btn_folder.clicked.connect(self.select_folder)

        sidebar = QWidget()
        side_layout = QVBoxLayout(sidebar)
        side_layout.setContentsMargins(8, 8, 8, 8)
        side_layout.addLayout(header)
        side_layout.addWidget(self.search)
        side_layout.addWidget(self.sort_box)
        side_layout.addWidget(self.listw)
        side_layout.addWidget(self.btn_folder)

        # editor
        self.title_line = QLineEdit()
        self.title_line.setReadOnly(True)
        self.saving_label = QLabel("Saving…")
        self.saving_label.setVisible(False)

        btn_save = QPushButton("Save")
        btn_save.clicked.connect(self.save_current)
        btn_rename = QPushButton("Rename")
        btn_rename.clicked.connect(self.rename_current)
        btn_delete = QPushButton("Delete")
        btn_delete.clicked.connect(self.delete_selected)

        actions = QHBoxLayout()
        actions.addWidget(self.title_line, 1)
        actions.addWidget(self.saving_label)
        actions.addWidget(btn_save)
        actions.addWidget(btn_rename)
        actions.addWidget(btn_delete)

        self.editor = QPlainTextEdit()
        self.editor.setPlaceholderText("Start writing…")
        self.editor.textChanged.connect(self._on_text_changed)

        self.preview = QTextBrowser()
        self.preview.setOpenExternalLinks(True)

        self.editor_split = QSplitter(Qt.Horizontal)
        self.editor_split.addWidget(self.editor)
        self.editor_split.addWidget(self.preview)
        self.editor_split.setStretchFactor(0, 3)
        self.editor_split.setStretchFactor(1, 2)

        editor_page = QWidget()
        editor_layout = QVBoxLayout(editor_page)
        editor_layout.setContentsMargins(8, 8, 8, 8)
        editor_layout.addLayout(actions)
        editor_layout.addWidget(self.editor_split)

        empty = QLabel("Select a note or create a new one")
        empty.setAlignment(Qt.AlignCenter)

        self.editor_pages = QStackedWidget()
        self.editor_pages.addWidget(empty)
        self.editor_pages.addWidget(editor_page)

        splitter = QSplitter(Qt.Horizontal)
        splitter.addWidget(sidebar)
        splitter.addWidget(self.editor_pages)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 3)
        return splitter

    def _build_menu(self) -> None:
        filem = self.menuBar().addMenu("File")

        act_folder = QAction("Select folder…", self)
        act_folder.triggered.connect(self.select_folder)

        act_new = QAction("New note", self)
        act_new.setShortcut("Ctrl+N")
        act_new.triggered.connect(self.create_note)

        act_save = QAction("Save", self)
        act_save.setShortcut("Ctrl+S")
        act_save.triggered.connect(self.save_current)

        act_rename = QAction("Rename…", self)
        act_rename.setShortcut("F2")
        act_rename.triggered.connect(self.rename_current)

        act_delete = QAction("Delete", self)
        act_delete.triggered.connect(self.delete_selected)

        filem.addAction(act_folder)
        filem.addSeparator()
        filem.addAction(act_new)
        filem.addAction(act_save)
        filem.addAction(act_rename)
        filem.addAction(act_delete)

    def _restore_geometry(self) -> None:
        geo = self.settings.value(SettingsKeys.UI_GEOMETRY)
        if geo:
            self.restoreGeometry(geo)
        else:
            self.resize(1200, 800)
        sizes = get_int_list(self.settings, SettingsKeys.UI_SPLITTER)
        if sizes:
            self.splitter.setSizes(sizes)

    def closeEvent(self, event):  # type: ignore[override]
        """Persist pending edits and window layout before closing."""
        self.autosave_timer.stop()
        self._flush_current()
        set_value(self.settings, SettingsKeys.UI_GEOMETRY, self.saveGeometry())
        set_value(self.settings, SettingsKeys.UI_SPLITTER, self.splitter.sizes())
        super().closeEvent(event)

    # ───────────────────────── folder ─────────────────────────

    def select_folder(self) -> None:
        path = self.api.select_folder()
        if path is None:
            return
        self.open_folder(path)

    def open_folder(self, path: str) -> None:
        self._flush_current()
        self.folder = path
        set_value(self.settings, SettingsKeys.FOLDER, path)
        self.setWindowTitle(f"Colecto - {Path(path).name}")
        self.pages.setCurrentIndex(1)
        self.autosave_timer.start()

        self.session.close()
        self.load_notes()
        visible = self._visible_notes()
        if visible:
            self.open_note(visible[0].id)
        else:
            self._show_editor(False)

    # ───────────────────────── list ─────────────────────────

    def load_notes(self) -> None:
        """Replace the in-memory list with a fresh listing of the folder."""
        if self.folder is None:
            return
        self.notes = self.api.get_notes(self.folder)
        if not self.session.sync_from(self.notes):
            log.info("Current note disappeared from disk")
            self._show_editor(False)
        elif self.session.active and self.session.buffer != self.editor.toPlainText():
            self._set_editor_text(self.session.buffer)
            self._render_preview()
        self.refresh_list()

    def _visible_notes(self) -> list[Note]:
        return sort_notes(filter_notes(self.notes, self.search.text()), self.sort_order)

    def refresh_list(self) -> None:
        with blocked_signals(self.listw):
            self.listw.clear()
            visible = self._visible_notes()
            for note in visible:
                item = QListWidgetItem(f"{note.title}\n{preview_snippet(note.content)}")
                item.setData(NOTE_ID_ROLE, note.id)
                item.setToolTip(note.modified.strftime("%Y-%m-%d %H:%M"))
                self.listw.addItem(item)
            if not visible:
                placeholder = QListWidgetItem("No notes yet" if not self.notes else "No matches")
                placeholder.setFlags(Qt.NoItemFlags)
                self.listw.addItem(placeholder)
        select_note_in_list(self.listw, self.session.note_id)

    def _on_sort_changed(self, index: int) -> None:
        self.sort_order = SortOrder.parse(self.sort_box.itemData(index))
        set_value(self.settings, SettingsKeys.SORT_ORDER, self.sort_order.value)
        self.refresh_list()

    def _on_select_note(self) -> None:
        item = self.listw.currentItem()
        if item is None or not item.isSelected():
            return
        note_id = item.data(NOTE_ID_ROLE)
        if note_id and note_id != self.session.note_id:
            self.open_note(note_id)

    # ───────────────────────── editor ─────────────────────────

    def open_note(self, note_id: str) -> None:
        if note_id != self.session.note_id and self.session.needs_save():
            self._flush_current()
            self.load_notes()
        note = find_note(self.notes, note_id)
        if note is None:
            log.warning("open_note: %s not in current listing", note_id)
            return
        self.session.open(note)
        self._set_editor_text(note.content)
        self.title_line.setText(note.title)
        self._show_editor(True)
        self._render_preview()
        select_note_in_list(self.listw, note_id)
        log.debug("Opened note: %s", note_id)

    def _show_editor(self, visible: bool) -> None:
        self.editor_pages.setCurrentIndex(1 if visible else 0)
        if not visible:
            self._set_editor_text("")
            self.title_line.clear()

    def _set_editor_text(self, text: str) -> None:
        with blocked_signals(self.editor):
            self.editor.setPlainText(text)

    def _on_text_changed(self) -> None:
        self.session.edit(self.editor.toPlainText())
        self.preview_timer.start()

    def _render_preview(self) -> None:
        self.preview.setHtml(self.renderer.render_page(self.session.buffer))

    # ───────────────────────── mutations ─────────────────────────

    def _autosave(self) -> None:
        if self.session.needs_save():
            log.debug("Autosave: %s", self.session.note_id)
            self.save_current()

    def _flush_current(self) -> None:
        if self.folder is not None and self.session.needs_save():
            log.info("Flush-save before switch: %s", self.session.note_id)
            self._write_current()

    def _write_current(self) -> bool:
        note_id, text = self.session.note_id, self.session.buffer
        ok = self.api.save_note(self.folder, note_id, text)
        if ok:
            self.session.mark_saved(text)
            return True
        if text == self._last_recovery_text:
            return False
        try:
            rec = write_recovery_copy(note_id, text)
        except OSError:
            log.exception("Recovery copy failed: %s", note_id)
            self._report(f"Could not save \"{note_id}\"; recovery copy failed too")
        else:
            self._last_recovery_text = text
            log.warning("Save failed, recovery copy written: %s", rec)
            self._report(f"Could not save \"{note_id}\"; copy kept at {rec}")
        return False

    def save_current(self) -> None:
        if self.folder is None or not self.session.active:
            return
        self.saving_label.setVisible(True)
        try:
            self._write_current()
            self.load_notes()
        finally:
            self.saving_label.setVisible(False)

    def create_note(self) -> None:
        if self.folder is None:
            return
        self._flush_current()
        note_id = self.api.create_note(self.folder)
        if note_id is None:
            self._report("Could not create a note")
            return
        self.search.clear()
        self.load_notes()
        self.open_note(note_id)
        self.editor.setFocus()

    def delete_selected(self) -> None:
        if self.folder is None:
            return
        ids = selected_note_ids(self.listw)
        if not ids and self.session.active:
            ids = [self.session.note_id]
        if not ids:
            return
        titles = [n.title for n in self.notes if n.id in ids] or ids
        if not confirm_delete(self, titles):
            return

        failed = [note_id for note_id in ids if not self.api.delete_note(self.folder, note_id)]
        if self.session.note_id in ids and self.session.note_id not in failed:
            self.session.close()
            self._show_editor(False)
        if failed:
            self._report(f"Could not delete: {', '.join(failed)}")
        self.load_notes()

    def rename_current(self) -> None:
        if self.folder is None or not self.session.active:
            return
        note = find_note(self.notes, self.session.note_id)
        current_title = note.title if note is not None else self.title_line.text()
        new_title = ask_new_title(self, current_title)
        if new_title is None:
            return

        self._flush_current()
        result = self.api.rename_note(self.folder, self.session.note_id, new_title)
        if not result.success:
            log.info("Rename refused: %s", result.error)
            show_rename_error(self, result.error)
            return

        self.session.retarget(result.new_id)
        self.load_notes()
        renamed = find_note(self.notes, result.new_id)
        if renamed is not None:
            self.title_line.setText(renamed.title)
        select_note_in_list(self.listw, result.new_id)

    def _report(self, message: str) -> None:
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)


def initial_folder(settings: QSettings, override: str | Path | None = None) -> str | None:
    """Folder to open on startup: explicit override first, then the remembered one."""
    candidate = str(override) if override else get_str(settings, SettingsKeys.FOLDER, "")
    if candidate and Path(candidate).is_dir():
        return str(Path(candidate).resolve())
    if candidate:
        log.warning("%s: folder not available: %s", APP_NAME, candidate)
    return None
