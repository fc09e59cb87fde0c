"""Debt entity and its closed vocabularies."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional
from uuid import uuid4

from sqlmodel import Field, SQLModel

DEBT_TYPES: tuple[str, ...] = ("bank_loan", "company_loan", "friend_loan", "other")
DEBT_STATUSES: tuple[str, ...] = ("pending", "in_progress", "completed")

BANK_LOAN = "bank_loan"
STATUS_PENDING = "pending"
STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"


def new_id() -> str:
    """Return a fresh string identifier for persisted rows."""

    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Debt(SQLModel, table=True):
    """A tracked obligation with a principal amount, schedule, and status."""

    __tablename__: ClassVar[str] = "debts"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: Optional[str] = Field(default=None, index=True, max_length=64)
    name: Optional[str] = Field(default=None, max_length=120)
    amount: float = Field(nullable=False)
    debt_type: str = Field(default="other", nullable=False, max_length=32)
    due_date: date = Field(nullable=False, index=True)
    installments: int = Field(default=1, nullable=False)
    installment_amount: float = Field(nullable=False)
    description: str = Field(default="", max_length=1000)
    status: str = Field(default=STATUS_PENDING, nullable=False, max_length=16, index=True)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    category_id: Optional[str] = Field(default=None, max_length=64)
    bank_id: Optional[str] = Field(default=None, max_length=64)
