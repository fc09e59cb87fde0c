"""Day note repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from ...models.day_note import DayNote


class DayNoteRepository(Protocol):
    """Repository for per-day calendar notes."""

    def list_between(self, start: date, end: date, *, user_id: str) -> list[DayNote]:
        """List notes in an inclusive date range."""
        ...

    def upsert(self, note_date: date, content: str, *, user_id: str) -> DayNote:
        """Insert or replace the note for a day."""
        ...

    def delete(self, note_date: date, *, user_id: str) -> None:
        """Delete the note for a day."""
        ...
