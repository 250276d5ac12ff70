import sys
import os
from datetime import datetime

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from colecto.core.filtering import SortOrder, filter_notes, preview_snippet, sort_notes
from colecto.core.models import Note


def _note(note_id, content="", day=1):
    return Note(id=note_id, content=content, modified=datetime(2024, 1, day))


NOTES = [
    _note("Groceries.md", "milk, eggs", day=3),
    _note("alpha.md", "Meeting with Bob", day=1),
    _note("Zeta.md", "nothing here", day=2),
]


def test_filter_by_title_or_content_case_insensitive():
    assert [n.id for n in filter_notes(NOTES, "GROC")] == ["Groceries.md"]
    assert [n.id for n in filter_notes(NOTES, "bob")] == ["alpha.md"]


def test_blank_query_keeps_all():
    assert filter_notes(NOTES, "   ") == NOTES


def test_filter_does_not_match_extension():
    assert filter_notes(NOTES, ".md") == []


def test_sort_orders():
    assert [n.id for n in sort_notes(NOTES)] == ["Groceries.md", "Zeta.md", "alpha.md"]
    assert [n.id for n in sort_notes(NOTES, SortOrder.MODIFIED_ASC)] == ["alpha.md", "Zeta.md", "Groceries.md"]
    assert [n.id for n in sort_notes(NOTES, SortOrder.TITLE_ASC)] == ["alpha.md", "Groceries.md", "Zeta.md"]
    assert [n.id for n in sort_notes(NOTES, SortOrder.TITLE_DESC)] == ["Zeta.md", "Groceries.md", "alpha.md"]


def test_sort_does_not_mutate_input():
    before = list(NOTES)
    sort_notes(NOTES, SortOrder.TITLE_ASC)
    assert NOTES == before


def test_parse_sort_order():
    assert SortOrder.parse("title_asc") is SortOrder.TITLE_ASC
    assert SortOrder.parse("bogus") is SortOrder.MODIFIED_DESC
    assert SortOrder.parse(None) is SortOrder.MODIFIED_DESC


def test_preview_snippet():
    assert preview_snippet("short") == "short"
    assert preview_snippet("a\n\n  b") == "a b"
    long = "x" * 100
    assert preview_snippet(long) == "x" * 60 + "..."
    assert preview_snippet("") == ""
