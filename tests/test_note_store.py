import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from colecto.store.note_store import ERR_INVALID_NAME, ERR_NAME_TAKEN, ERR_NOT_FOUND, NoteStore


def _write(folder, name, text="", mtime=None):
    path = folder / name
    path.write_text(text, encoding="utf-8", newline="")
    if mtime is not None:
        os.utime(path, (mtime, mtime))
    return path


def _ids(store, folder):
    return [n.id for n in store.list_notes(folder)]


# ───────────────────────── list ─────────────────────────

def test_list_only_md_files(tmp_path):
    _write(tmp_path, "a.md", "A")
    _write(tmp_path, "b.txt", "B")
    _write(tmp_path, "c.markdown", "C")
    (tmp_path / "dir.md").mkdir()
    (tmp_path / "sub").mkdir()
    _write(tmp_path / "sub", "nested.md", "N")

    assert _ids(NoteStore(), tmp_path) == ["a.md"]


def test_list_sorted_newest_first(tmp_path):
    _write(tmp_path, "old.md", mtime=1_000_000)
    _write(tmp_path, "new.md", mtime=3_000_000)
    _write(tmp_path, "mid.md", mtime=2_000_000)

    notes = NoteStore().list_notes(tmp_path)

    assert [n.id for n in notes] == ["new.md", "mid.md", "old.md"]
    assert all(a.modified >= b.modified for a, b in zip(notes, notes[1:]))


def test_list_equal_timestamps_ordered_by_id(tmp_path):
    for name in ("c.md", "a.md", "b.md"):
        _write(tmp_path, name, mtime=1_000_000)

    assert _ids(NoteStore(), tmp_path) == ["a.md", "b.md", "c.md"]


def test_list_reads_content_and_title(tmp_path):
    _write(tmp_path, "Shopping.md", "milk\r\neggs\n")

    [note] = NoteStore().list_notes(tmp_path)

    assert note.id == "Shopping.md"
    assert note.title == "Shopping"
    assert note.content == "milk\r\neggs\n"


def test_title_strips_only_the_suffix(tmp_path):
    _write(tmp_path, "notes.md.md")
    _write(tmp_path, "my.md draft.md")

    titles = sorted(n.title for n in NoteStore().list_notes(tmp_path))

    assert titles == ["my.md draft", "notes.md"]


def test_list_missing_folder_is_empty(tmp_path):
    assert NoteStore().list_notes(tmp_path / "nope") == []


def test_list_file_instead_of_folder_is_empty(tmp_path):
    path = _write(tmp_path, "a.md", "x")
    assert NoteStore().list_notes(path) == []


def test_list_empty_folder_argument(tmp_path):
    assert NoteStore().list_notes("") == []


def test_list_skips_undecodable_file(tmp_path):
    _write(tmp_path, "good.md", "ok")
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe\xfa")

    assert _ids(NoteStore(), tmp_path) == ["good.md"]


# ───────────────────────── save ─────────────────────────

def test_save_round_trip(tmp_path):
    store = NoteStore()
    assert store.save_note(tmp_path, "Idea.md", "# Idea\n\nbody")

    [note] = store.list_notes(tmp_path)
    assert note.id == "Idea.md"
    assert note.content == "# Idea\n\nbody"


def test_save_appends_extension(tmp_path):
    store = NoteStore()
    assert store.save_note(tmp_path, "Idea", "x")
    assert (tmp_path / "Idea.md").read_text(encoding="utf-8") == "x"


def test_save_overwrites_fully(tmp_path):
    _write(tmp_path, "a.md", "a much longer original text")
    store = NoteStore()

    assert store.save_note(tmp_path, "a.md", "short")
    assert store.save_note(tmp_path, "a.md", "short")

    assert [n.content for n in store.list_notes(tmp_path)] == ["short"]
    assert sorted(os.listdir(tmp_path)) == ["a.md"]


def test_save_missing_folder_fails(tmp_path):
    assert NoteStore().save_note(tmp_path / "nope", "a.md", "x") is False


def test_save_rejects_path_in_id(tmp_path):
    store = NoteStore()
    assert store.save_note(tmp_path, "../escape.md", "x") is False
    assert store.save_note(tmp_path, "sub/a.md", "x") is False
    assert not (tmp_path.parent / "escape.md").exists()


def test_save_failure_is_logged(tmp_path, caplog):
    caplog.set_level("ERROR")
    NoteStore().save_note(tmp_path / "nope", "a.md", "x")
    assert any("Save failed" in r.getMessage() for r in caplog.records)


def test_save_then_list_reorders(tmp_path):
    _write(tmp_path, "A.md", "hello", mtime=1_000_000)
    _write(tmp_path, "B.md", "world", mtime=2_000_000)
    store = NoteStore()

    assert _ids(store, tmp_path) == ["B.md", "A.md"]

    assert store.save_note(tmp_path, "A.md", "updated")
    notes = store.list_notes(tmp_path)

    assert [n.id for n in notes] == ["A.md", "B.md"]
    assert notes[0].content == "updated"


# ───────────────────────── create ─────────────────────────

def test_create_in_empty_folder(tmp_path):
    store = NoteStore()

    assert store.create_note(tmp_path) == "Untitled Note 1.md"
    assert store.create_note(tmp_path) == "Untitled Note 2.md"
    assert (tmp_path / "Untitled Note 1.md").read_text(encoding="utf-8") == ""


def test_create_many_distinct(tmp_path):
    store = NoteStore()
    ids = [store.create_note(tmp_path) for _ in range(5)]

    assert ids == [f"Untitled Note {i}.md" for i in range(1, 6)]
    assert sorted(_ids(store, tmp_path)) == sorted(ids)


def test_create_skips_taken_name(tmp_path):
    _write(tmp_path, "Untitled Note 2.md", "keep")

    assert NoteStore().create_note(tmp_path) == "Untitled Note 3.md"
    assert (tmp_path / "Untitled Note 2.md").read_text(encoding="utf-8") == "keep"


def test_create_counts_all_prefixed_entries(tmp_path):
    _write(tmp_path, "Untitled Note 1.md")
    _write(tmp_path, "Untitled Note.txt")

    assert NoteStore().create_note(tmp_path) == "Untitled Note 3.md"


def test_create_gap_below_count_is_not_reused(tmp_path):
    _write(tmp_path, "Untitled Note 2.md")
    _write(tmp_path, "Untitled Note 3.md")

    assert NoteStore().create_note(tmp_path) == "Untitled Note 4.md"


def test_create_never_truncates_file_appearing_after_listing(tmp_path, monkeypatch):
    import colecto.store.note_store as note_store

    _write(tmp_path, "Untitled Note 1.md", "external")
    monkeypatch.setattr(note_store.os, "listdir", lambda _path: [])

    assert NoteStore().create_note(tmp_path) == "Untitled Note 2.md"
    assert (tmp_path / "Untitled Note 1.md").read_text(encoding="utf-8") == "external"


def test_create_missing_folder_returns_none(tmp_path):
    assert NoteStore().create_note(tmp_path / "nope") is None


# ───────────────────────── delete ─────────────────────────

def test_delete_removes_note(tmp_path):
    _write(tmp_path, "a.md", "x")
    _write(tmp_path, "b.md", "y")
    store = NoteStore()

    assert store.delete_note(tmp_path, "a.md") is True
    assert _ids(store, tmp_path) == ["b.md"]


def test_delete_missing_fails(tmp_path):
    assert NoteStore().delete_note(tmp_path, "ghost.md") is False


def test_delete_directory_fails(tmp_path):
    (tmp_path / "dir.md").mkdir()
    assert NoteStore().delete_note(tmp_path, "dir.md") is False
    assert (tmp_path / "dir.md").is_dir()


def test_delete_rejects_path_in_id(tmp_path):
    outside = tmp_path / "outside.md"
    outside.write_text("x", encoding="utf-8")
    folder = tmp_path / "notes"
    folder.mkdir()

    assert NoteStore().delete_note(folder, "../outside.md") is False
    assert outside.exists()


# ───────────────────────── rename ─────────────────────────

def test_rename_preserves_content(tmp_path):
    _write(tmp_path, "A.md", "body")
    store = NoteStore()

    result = store.rename_note(tmp_path, "A.md", "Better name")

    assert result.success
    assert result.new_id == "Better name.md"
    assert _ids(store, tmp_path) == ["Better name.md"]
    assert (tmp_path / "Better name.md").read_text(encoding="utf-8") == "body"


def test_rename_collision_changes_nothing(tmp_path):
    _write(tmp_path, "A.md", "a")
    _write(tmp_path, "B.md", "b")

    result = NoteStore().rename_note(tmp_path, "A.md", "B")

    assert not result.success
    assert result.error == ERR_NAME_TAKEN
    assert (tmp_path / "A.md").read_text(encoding="utf-8") == "a"
    assert (tmp_path / "B.md").read_text(encoding="utf-8") == "b"


def test_rename_to_same_title_is_noop_success(tmp_path):
    _write(tmp_path, "A.md", "a", mtime=1_000_000)

    result = NoteStore().rename_note(tmp_path, "A.md", "A")

    assert result.success
    assert result.new_id == "A.md"
    assert os.listdir(tmp_path) == ["A.md"]
    assert (tmp_path / "A.md").stat().st_mtime == 1_000_000


def test_rename_trims_whitespace(tmp_path):
    _write(tmp_path, "A.md")
    result = NoteStore().rename_note(tmp_path, "A.md", "  Trimmed  ")
    assert result.new_id == "Trimmed.md"


def test_rename_missing_source(tmp_path):
    result = NoteStore().rename_note(tmp_path, "ghost.md", "Other")
    assert not result.success
    assert result.error == ERR_NOT_FOUND


def test_rename_invalid_titles(tmp_path):
    _write(tmp_path, "A.md")
    store = NoteStore()

    for bad in ("", "   ", "a/b", "a\\b", "..", "tab\there"):
        result = store.rename_note(tmp_path, "A.md", bad)
        assert not result.success
        assert result.error == ERR_INVALID_NAME

    assert os.listdir(tmp_path) == ["A.md"]


def test_rename_result_as_dict(tmp_path):
    _write(tmp_path, "A.md")
    _write(tmp_path, "B.md")
    store = NoteStore()

    assert store.rename_note(tmp_path, "A.md", "B").as_dict() == {"success": False, "error": ERR_NAME_TAKEN}
    assert store.rename_note(tmp_path, "A.md", "C").as_dict() == {"success": True, "newId": "C.md"}


# ───────────────────────── format characters in names ─────────────────────────

ZWNJ_TITLE = "می\u200cخواهم"
ZWJ_EMOJI_TITLE = "\U0001f468\u200d\U0001f469 family"


def test_format_char_names_are_listed_saved_renamed_deleted(tmp_path):
    store = NoteStore()
    for title in (ZWNJ_TITLE, ZWJ_EMOJI_TITLE, "soft\u00adhyphen"):
        note_id = f"{title}.md"
        _write(tmp_path, note_id, "old")

        assert note_id in _ids(store, tmp_path)

        assert store.save_note(tmp_path, note_id, "new") is True
        assert (tmp_path / note_id).read_text(encoding="utf-8") == "new"

        result = store.rename_note(tmp_path, note_id, f"{title} 2")
        assert result.success
        assert result.new_id == f"{title} 2.md"

        assert store.delete_note(tmp_path, result.new_id) is True
        assert _ids(store, tmp_path) == []


def test_rename_to_zwnj_title(tmp_path):
    _write(tmp_path, "A.md", "body")

    result = NoteStore().rename_note(tmp_path, "A.md", ZWNJ_TITLE)

    assert result.success
    assert (tmp_path / f"{ZWNJ_TITLE}.md").read_text(encoding="utf-8") == "body"


def test_nul_in_id_is_rejected(tmp_path):
    assert NoteStore().save_note(tmp_path, "a\0b.md", "x") is False
    assert NoteStore().delete_note(tmp_path, "a\0b.md") is False
