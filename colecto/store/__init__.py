from .filesystem import atomic_write_text, write_recovery_copy
from .note_store import ERR_INVALID_NAME, ERR_NAME_TAKEN, ERR_NOT_FOUND, NoteStore

__all__ = ["atomic_write_text",
           "write_recovery_copy",
           "NoteStore",
           "ERR_INVALID_NAME",
           "ERR_NAME_TAKEN",
           "ERR_NOT_FOUND",
           ]
