"""Month calendar of due debts, payments and day notes."""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Sequence

from ..domain.identity import Principal
from ..domain.repositories import DayNoteRepository
from ..exceptions import FieldError, PermissionDeniedError, ValidationError
from ..logging_config import get_logger
from ..models.day_note import DayNote
from ..models.debt import STATUS_COMPLETED, Debt
from ..models.payment import Payment
from .permissions import require_principal
from .settings import AppSettings

logger = get_logger("calendar")

MAX_NOTE_LENGTH = 2000


@dataclass(slots=True)
class CalendarDay:
    day: date
    due_debts: list[Debt] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    note: Optional[DayNote] = None

    @property
    def has_event(self) -> bool:
        return bool(self.due_debts or self.payments or self.note)


def _is_due_on(debt: Debt, day: date, today: date) -> bool:
    if debt.status == STATUS_COMPLETED:
        return False
    if debt.due_date == day:
        return True
    # Monthly installments recur on the due date's day of month, shown from today on.
    return day.day == debt.due_date.day and day >= today


def month_calendar(
    debts: Sequence[Debt],
    payments: Sequence[Payment],
    year: int,
    month: int,
    *,
    today: Optional[date] = None,
    notes: Iterable[DayNote] = (),
) -> list[CalendarDay]:
    """One entry per day of the month with what falls on it."""

    today = today or date.today()
    notes_by_day = {note.note_date: note for note in notes}
    days: list[CalendarDay] = []
    for day_number in range(1, monthrange(year, month)[1] + 1):
        day = date(year, month, day_number)
        days.append(
            CalendarDay(
                day=day,
                due_debts=[debt for debt in debts if _is_due_on(debt, day, today)],
                payments=[payment for payment in payments if payment.payment_date == day],
                note=notes_by_day.get(day),
            )
        )
    return days


def month_notes(
    principal: Optional[Principal], repo: DayNoteRepository, year: int, month: int
) -> list[DayNote]:
    principal = require_principal(principal)
    start = date(year, month, 1)
    end = date(year, month, monthrange(year, month)[1])
    return repo.list_between(start, end, user_id=principal.user_id)


def save_day_note(
    principal: Optional[Principal],
    repo: DayNoteRepository,
    settings: AppSettings,
    note_date: date,
    content: str,
) -> Optional[DayNote]:
    """Store the note for a day; blank content removes it and returns None."""

    principal = require_principal(principal)
    if not settings.enabled_features.notes:
        raise PermissionDeniedError("Day notes are disabled")
    text = (content or "").strip()
    if not text:
        repo.delete(note_date, user_id=principal.user_id)
        return None
    if len(text) > MAX_NOTE_LENGTH:
        raise ValidationError(
            [FieldError("content", f"Note must be at most {MAX_NOTE_LENGTH} characters")]
        )
    note = repo.upsert(note_date, text, user_id=principal.user_id)
    logger.info("Day note saved", extra={"note_date": note_date.isoformat()})
    return note


def delete_day_note(principal: Optional[Principal], repo: DayNoteRepository, note_date: date) -> None:
    principal = require_principal(principal)
    repo.delete(note_date, user_id=principal.user_id)
