from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from colecto.core.filenames import title_from_id


@dataclass(frozen=True)
class Note:
    """
    One note file in the chosen folder.

    `content` is a snapshot taken at listing time; re-list to observe changes.
    """
    id: str
    content: str
    modified: datetime

    @property
    def title(self) -> str:
        return title_from_id(self.id)


@dataclass(frozen=True)
class RenameResult:
    success: bool
    new_id: str | None = None
    error: str | None = None

    @classmethod
    def ok(cls, new_id: str) -> "RenameResult":
        return cls(True, new_id=new_id)

    @classmethod
    def failed(cls, error: str) -> "RenameResult":
        return cls(False, error=error)

    def as_dict(self) -> dict:
        if self.success:
            return {"success": True, "newId": self.new_id}
        return {"success": False, "error": self.error}
