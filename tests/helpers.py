"""Unsaved entity builders and repository stubs shared by the test modules."""

from __future__ import annotations

from datetime import date

from sqlalchemy.exc import OperationalError

from debttracker.models import Debt, Payment


def make_debt(
    amount: float = 100.0,
    installments: int = 1,
    due_date: date = date(2024, 1, 15),
    status: str = "pending",
    debt_type: str = "other",
    **extra,
) -> Debt:
    """Build an unsaved debt with sensible defaults.

    ``installment_amount`` defaults to the ceiling split of ``amount``.
    """
    installment_amount = extra.pop("installment_amount", -(-amount // installments))
    return Debt(
        amount=amount,
        installments=installments,
        installment_amount=installment_amount,
        due_date=due_date,
        status=status,
        debt_type=debt_type,
        description=extra.pop("description", "Test debt"),
        **extra,
    )


def make_payment(
    debt_id: str,
    amount: float,
    payment_date: date = date(2024, 1, 15),
    remaining_balance: float = 0.0,
) -> Payment:
    """Build an unsaved payment."""
    return Payment(
        debt_id=debt_id,
        payment_amount=amount,
        payment_date=payment_date,
        remaining_balance=remaining_balance,
    )


class FailingListRepository:
    """Wraps a repository and makes ``list_all`` fail."""

    def __init__(self, inner, error: Exception | None = None):
        self.inner = inner
        self.error = error or OperationalError("SELECT", {}, Exception("database is locked"))

    def list_all(self, *, user_id):
        raise self.error

    def __getattr__(self, name):
        return getattr(self.inner, name)


class FailingCreateRepository:
    """Wraps a repository and makes ``create`` fail."""

    def __init__(self, inner):
        self.inner = inner

    def create(self, *args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    def __getattr__(self, name):
        return getattr(self.inner, name)
