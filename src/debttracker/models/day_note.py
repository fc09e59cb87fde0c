"""Free-text notes pinned to a calendar day."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from .debt import new_id, utcnow


class DayNote(SQLModel, table=True):
    __tablename__: ClassVar[str] = "day_notes"
    __table_args__ = (UniqueConstraint("user_id", "note_date", name="uq_day_notes_user_date"),)

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(nullable=False, index=True, max_length=64)
    note_date: date = Field(nullable=False, index=True)
    content: str = Field(nullable=False, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
