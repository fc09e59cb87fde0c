"""Creation-boundary validation for debts and payments.

Requiredness of optional fields is a deployment policy, so the validator
takes an explicit ``AppSettings`` instead of reading global state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional

from ..exceptions import FieldError, ValidationError
from ..models.debt import BANK_LOAN, DEBT_TYPES, STATUS_PENDING, Debt
from ..models.payment import Payment
from .debts import calculate_installment_amount
from .settings import AppSettings


@dataclass(slots=True)
class DebtDraft:
    """A validated debt that has not been persisted yet."""

    amount: float
    debt_type: str
    due_date: date
    installments: int
    installment_amount: int
    description: str = ""
    name: Optional[str] = None
    category_id: Optional[str] = None
    bank_id: Optional[str] = None
    status: str = STATUS_PENDING

    def to_model(self) -> Debt:
        return Debt(
            name=self.name,
            amount=self.amount,
            debt_type=self.debt_type,
            due_date=self.due_date,
            installments=self.installments,
            installment_amount=self.installment_amount,
            description=self.description,
            status=self.status,
            category_id=self.category_id,
            bank_id=self.bank_id,
        )


@dataclass(slots=True)
class PaymentDraft:
    """A validated payment request; the balance snapshot is filled in later."""

    debt_id: str
    payment_amount: float
    payment_date: date

    def to_model(self, remaining_balance: int) -> Payment:
        return Payment(
            debt_id=self.debt_id,
            payment_amount=self.payment_amount,
            payment_date=self.payment_date,
            remaining_balance=remaining_balance,
        )


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _positive_number(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(_text(value).replace(",", ""))
    except InvalidOperation:
        return None
    if not number.is_finite() or number <= 0:
        return None
    # Stored as float: reject values that overflow to inf or underflow to 0.
    as_float = float(number)
    if not math.isfinite(as_float) or as_float <= 0:
        return None
    return number


def _positive_int(value: Any) -> Optional[int]:
    number = _positive_number(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(_text(value))
    except ValueError:
        return None


def validate_debt_input(
    data: Mapping[str, Any],
    settings: AppSettings,
    *,
    min_due_date: Optional[date] = None,
) -> DebtDraft:
    """Check a debt submission and return the draft to persist.

    Raises:
        ValidationError: with every failing field, in form order.
    """

    errors: list[FieldError] = []
    required = settings.required_fields

    name = _text(data.get("name")) or None
    if required.name and not name:
        errors.append(FieldError("name", "Debt name is required"))

    amount = _positive_number(data.get("amount"))
    if _text(data.get("amount")) == "":
        errors.append(FieldError("amount", "Amount is required"))
    elif amount is None:
        errors.append(FieldError("amount", "Amount must be a positive number"))

    debt_type = _text(data.get("debt_type")) or "other"
    if debt_type not in DEBT_TYPES:
        errors.append(FieldError("debt_type", "Choose a debt type"))

    category_id: Optional[str] = None
    if settings.enabled_features.categories:
        category_id = _text(data.get("category_id")) or None
        if settings.category_required() and not category_id:
            errors.append(FieldError("category_id", "Category is required"))

    bank_id: Optional[str] = None
    if debt_type == BANK_LOAN and settings.enabled_features.banks:
        bank_id = _text(data.get("bank_id")) or None
        if settings.bank_required() and not bank_id:
            errors.append(FieldError("bank_id", "Bank is required"))

    raw_due = data.get("due_date")
    due_date = _parse_date(raw_due)
    if raw_due is None or _text(raw_due) == "":
        errors.append(FieldError("due_date", "Due date is required"))
    elif due_date is None:
        errors.append(FieldError("due_date", "Due date must be a valid date (YYYY-MM-DD)"))
    elif min_due_date is not None and due_date < min_due_date:
        errors.append(
            FieldError("due_date", f"Due date cannot be before {min_due_date.isoformat()}")
        )

    installments = _positive_int(data.get("installments", 1))
    if installments is None:
        errors.append(FieldError("installments", "Installments must be a positive whole number"))

    description = _text(data.get("description"))
    if required.description and not description:
        errors.append(FieldError("description", "Description is required"))

    if errors:
        raise ValidationError(errors)

    draft = DebtDraft(
        name=name,
        amount=float(amount),
        debt_type=debt_type,
        due_date=due_date,
        installments=installments,
        installment_amount=0,
        description=description,
        category_id=category_id,
        bank_id=bank_id,
    )
    draft.installment_amount = calculate_installment_amount(draft.to_model())
    return draft


def validate_payment_input(data: Mapping[str, Any], *, today: Optional[date] = None) -> PaymentDraft:
    """Check a payment submission.

    ``payment_date`` defaults to today when omitted.

    Raises:
        ValidationError: with every failing field.
    """

    errors: list[FieldError] = []

    debt_id = _text(data.get("debt_id"))
    if not debt_id:
        errors.append(FieldError("debt_id", "Choose the debt this payment belongs to"))

    amount = _positive_number(data.get("payment_amount"))
    if amount is None:
        errors.append(FieldError("payment_amount", "Payment amount must be a positive number"))

    raw_date = data.get("payment_date")
    if raw_date is None or _text(raw_date) == "":
        payment_date: Optional[date] = today or date.today()
    else:
        payment_date = _parse_date(raw_date)
        if payment_date is None:
            errors.append(FieldError("payment_date", "Payment date must be a valid date (YYYY-MM-DD)"))

    if errors:
        raise ValidationError(errors)

    return PaymentDraft(debt_id=debt_id, payment_amount=float(amount), payment_date=payment_date)
