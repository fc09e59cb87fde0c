"""Dashboard and report figures derived from debts and payments."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from ..models.debt import DEBT_TYPES, STATUS_COMPLETED, Debt
from ..models.payment import Payment
from .debts import total_paid


@dataclass(frozen=True, slots=True)
class DebtSummary:
    """Headline totals shown on the dashboard."""

    total_amount: Decimal
    total_paid: Decimal
    remaining: Decimal
    active_count: int
    completed_count: int


@dataclass(frozen=True, slots=True)
class InstallmentProgress:
    """'Installment k of n' for a debt; ``current`` is None once all are paid."""

    current: int | None
    total: int


def summarize(debts: Sequence[Debt], payments: Iterable[Payment]) -> DebtSummary:
    total_amount = sum((Decimal(str(debt.amount)) for debt in debts), Decimal(0))
    paid = total_paid(payments)
    completed = sum(1 for debt in debts if debt.status == STATUS_COMPLETED)
    return DebtSummary(
        total_amount=total_amount,
        total_paid=paid,
        remaining=total_amount - paid,
        active_count=len(debts) - completed,
        completed_count=completed,
    )


def upcoming_debts(debts: Iterable[Debt], limit: int = 3) -> list[Debt]:
    """Open debts with the earliest due dates."""

    open_debts = [debt for debt in debts if debt.status != STATUS_COMPLETED]
    return sorted(open_debts, key=lambda debt: debt.due_date)[:limit]


def totals_by_type(debts: Iterable[Debt]) -> dict[str, Decimal]:
    """Principal per debt type, every type present (chart data)."""

    totals: dict[str, Decimal] = defaultdict(Decimal)
    for debt_type in DEBT_TYPES:
        totals[debt_type] = Decimal(0)
    for debt in debts:
        totals[debt.debt_type] += Decimal(str(debt.amount))
    return dict(totals)


def installment_progress(debt: Debt, payments: Iterable[Payment]) -> InstallmentProgress:
    paid_count = sum(1 for payment in payments if payment.debt_id == debt.id)
    total = max(debt.installments, 1)
    return InstallmentProgress(current=paid_count + 1 if paid_count < total else None, total=total)


__all__ = [
    "DebtSummary",
    "InstallmentProgress",
    "installment_progress",
    "summarize",
    "totals_by_type",
    "upcoming_debts",
]
