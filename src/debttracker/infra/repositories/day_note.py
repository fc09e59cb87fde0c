"""SQLModel implementation of DayNote repository."""

from __future__ import annotations

from datetime import date

from sqlmodel import select

from ...models.day_note import DayNote
from ..database import SessionFactory


class SQLModelDayNoteRepository:
    """SQLModel-based day note repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_between(self, start: date, end: date, *, user_id: str) -> list[DayNote]:
        with self.session_factory() as session:
            statement = (
                select(DayNote)
                .where(DayNote.user_id == user_id)
                .where(DayNote.note_date >= start, DayNote.note_date <= end)
                .order_by(DayNote.note_date)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def upsert(self, note_date: date, content: str, *, user_id: str) -> DayNote:
        with self.session_factory() as session:
            note = session.exec(
                select(DayNote).where(DayNote.note_date == note_date, DayNote.user_id == user_id)
            ).first()
            if note:
                note.content = content
            else:
                note = DayNote(user_id=user_id, note_date=note_date, content=content)
            session.add(note)
            session.commit()
            session.refresh(note)
            session.expunge(note)
            return note

    def delete(self, note_date: date, *, user_id: str) -> None:
        with self.session_factory() as session:
            note = session.exec(
                select(DayNote).where(DayNote.note_date == note_date, DayNote.user_id == user_id)
            ).first()
            if note:
                session.delete(note)
                session.commit()
