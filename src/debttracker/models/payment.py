"""Append-only payment records applied against a debt."""

from __future__ import annotations

from datetime import date, datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .debt import new_id, utcnow


class Payment(SQLModel, table=True):
    """Money applied to a debt, with the balance snapshot taken at submission."""

    __tablename__: ClassVar[str] = "payments"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: Optional[str] = Field(default=None, index=True, max_length=64)
    debt_id: str = Field(foreign_key="debts.id", nullable=False, index=True, max_length=64)
    payment_date: date = Field(nullable=False, index=True)
    payment_amount: float = Field(nullable=False)
    # Snapshot only; never recomputed when later payments arrive.
    remaining_balance: float = Field(nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
