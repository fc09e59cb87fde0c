"""Installment, balance and schedule derivations for debts.

Everything here is a pure function of a debt and its payments. Money is
summed as ``Decimal`` and every rounding goes up (ceiling) so the
installments never add up to less than what is owed.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_CEILING, Decimal
from typing import Iterable, Optional

from ..exceptions import InvalidStatusTransitionError
from ..models.debt import (
    DEBT_STATUSES,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
    Debt,
)
from ..models.payment import Payment

DEBT_TYPE_LABELS: dict[str, str] = {
    "bank_loan": "Bank loan",
    "company_loan": "Company loan",
    "friend_loan": "Loan from friend/family",
    "other": "Other debt",
}

STATUS_LABELS: dict[str, str] = {
    STATUS_PENDING: "Pending",
    STATUS_IN_PROGRESS: "In progress",
    STATUS_COMPLETED: "Completed",
}

_STATUS_RANK = {status: rank for rank, status in enumerate(DEBT_STATUSES)}


@dataclass(slots=True)
class InstallmentRow:
    """One scheduled portion of a debt's repayment."""

    number: int
    due_date: date
    amount: int


def _to_decimal(value: float | int | Decimal) -> Decimal:
    # str() keeps 0.1 as 0.1 instead of its binary expansion.
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def add_months(value: date, months: int) -> date:
    """Shift a date by whole calendar months, clamping to the month's last day."""

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return date(year, month, day)


def total_paid(payments: Iterable[Payment]) -> Decimal:
    """Sum the amounts of the given payments."""

    return sum((_to_decimal(payment.payment_amount) for payment in payments), Decimal(0))


def calculate_installment_amount(debt: Debt) -> int:
    """Return the per-installment amount, rounded up."""

    amount = _to_decimal(debt.amount)
    if debt.installments > 0:
        return _ceil(amount / Decimal(debt.installments))
    return _ceil(amount)


def calculate_remaining_balance(debt: Debt, payments: Iterable[Payment]) -> int:
    """Return ceil(amount - paid).

    Overpayment yields a negative value; it is not clamped so callers can
    surface it.
    """

    return _ceil(_to_decimal(debt.amount) - total_paid(payments))


def calculate_next_payment_date(debt: Debt, payments: Iterable[Payment]) -> Optional[date]:
    """Return the next due date, or None once every installment has a payment.

    The schedule stays anchored to ``debt.due_date``: the k-th payment moves
    the next due date to ``due_date + k months`` no matter when it was made.
    """

    paid_installments = len(list(payments))
    if paid_installments == 0:
        return debt.due_date
    if paid_installments >= debt.installments:
        return None
    return add_months(debt.due_date, paid_installments)


def next_status(current: str, remaining_balance: float | int) -> str:
    """Status a debt moves to after a payment leaves ``remaining_balance``."""

    if remaining_balance <= 0:
        return STATUS_COMPLETED
    if current == STATUS_PENDING:
        return STATUS_IN_PROGRESS
    return current


def ensure_forward_transition(current: str, new: str) -> None:
    """Reject unknown statuses and any move back towards ``pending``."""

    if new not in _STATUS_RANK:
        raise InvalidStatusTransitionError(f"Unknown debt status: {new!r}")
    if current in _STATUS_RANK and _STATUS_RANK[new] < _STATUS_RANK[current]:
        raise InvalidStatusTransitionError(f"Debt status cannot move from {current} to {new}")


def build_installment_schedule(debt: Debt) -> list[InstallmentRow]:
    """List every installment with its due date and amount.

    All rows carry the ceiling installment amount except the last, which
    takes whatever is left so the rows sum to exactly the (rounded-up)
    principal.
    """

    count = max(debt.installments, 1)
    per_installment = calculate_installment_amount(debt)
    total = _ceil(_to_decimal(debt.amount))
    rows: list[InstallmentRow] = []
    allocated = 0
    for index in range(count):
        if index == count - 1:
            amount = total - allocated
        else:
            amount = min(per_installment, total - allocated)
        allocated += amount
        rows.append(
            InstallmentRow(
                number=index + 1,
                due_date=add_months(debt.due_date, index),
                amount=amount,
            )
        )
    return rows


def paid_percentage(debt: Debt, payments: Iterable[Payment]) -> int:
    """Share of the principal already paid, 0..100."""

    amount = _to_decimal(debt.amount)
    if amount <= 0:
        return 100
    paid = total_paid(payments)
    percent = int((paid / amount * 100).to_integral_value())
    return max(0, min(100, percent))


def suggested_payment(debt: Debt, payments: Iterable[Payment]) -> int:
    """Amount to pre-fill for the next payment: one installment, capped by the balance."""

    remaining = calculate_remaining_balance(debt, payments)
    return max(0, min(calculate_installment_amount(debt), remaining))


def format_currency(amount: float | int | Decimal, label: str = "Rials") -> str:
    """Render an amount with thousands separators and the currency label."""

    value = _to_decimal(amount)
    if value == value.to_integral_value():
        text = f"{int(value):,}"
    else:
        text = f"{value:,.2f}"
    return f"{text} {label}".strip()


def debt_type_label(debt_type: str) -> str:
    return DEBT_TYPE_LABELS.get(debt_type, debt_type)


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


__all__ = [
    "InstallmentRow",
    "add_months",
    "build_installment_schedule",
    "calculate_installment_amount",
    "calculate_next_payment_date",
    "calculate_remaining_balance",
    "debt_type_label",
    "ensure_forward_transition",
    "format_currency",
    "next_status",
    "paid_percentage",
    "status_label",
    "suggested_payment",
    "total_paid",
]
