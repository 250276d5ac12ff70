from .filenames import ensure_note_ext, is_note_name, is_valid_title, next_untitled_id, title_from_id
from .filtering import SortOrder, filter_notes, preview_snippet, sort_notes
from .models import Note, RenameResult
from .session import EditSession, find_note

__all__ = ["ensure_note_ext",
           "is_note_name",
           "is_valid_title",
           "next_untitled_id",
           "title_from_id",
           "SortOrder",
           "filter_notes",
           "preview_snippet",
           "sort_notes",
           "Note",
           "RenameResult",
           "EditSession",
           "find_note",
           ]
