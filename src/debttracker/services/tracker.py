"""Application controller: owns the in-memory state and the user actions.

Local collections change only after the persistence layer confirms a
write; any failure leaves ``AppState`` exactly as it was and emits an error
notification before re-raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping, Optional

from ..exceptions import DebtTrackerError, EntityNotFoundError
from ..logging_config import get_logger
from ..models.debt import Debt
from ..models.payment import Payment
from .debts import next_status
from .settings import AppSettings
from .sync import DebtSynchronizer, MigrationReport
from .validation import validate_debt_input, validate_payment_input

logger = get_logger("tracker")

LEVEL_SUCCESS = "success"
LEVEL_ERROR = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    """User-facing message emitted after an action."""

    level: str
    title: str
    message: str


Notifier = Callable[[Notification], None]


def _log_notification(notification: Notification) -> None:
    log = logger.error if notification.level == LEVEL_ERROR else logger.info
    log("%s: %s", notification.title, notification.message)


@dataclass
class AppState:
    """Debts and payments as currently shown to the user."""

    debts: list[Debt] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    loaded: bool = False
    last_migration: Optional[MigrationReport] = None

    def find_debt(self, debt_id: str) -> Optional[Debt]:
        return next((debt for debt in self.debts if debt.id == debt_id), None)

    def payments_for(self, debt_id: str) -> list[Payment]:
        """Payments of one debt in chronological order."""
        return sorted(
            (payment for payment in self.payments if payment.debt_id == debt_id),
            key=lambda payment: payment.payment_date,
        )


class DebtTrackerApp:
    """Start-up loading plus the add-debt and add-payment flows."""

    def __init__(
        self,
        synchronizer: DebtSynchronizer,
        settings: AppSettings,
        *,
        min_due_date: Optional[date] = None,
        notify: Optional[Notifier] = None,
    ):
        self.sync = synchronizer
        self.settings = settings
        self.min_due_date = min_due_date
        self.notify: Notifier = notify or _log_notification
        self.state = AppState()

    def _fail(self, title: str, exc: DebtTrackerError) -> None:
        self.notify(Notification(LEVEL_ERROR, title, str(exc) or "Please try again."))

    def load(self) -> AppState:
        """Migrate legacy data if needed, then replace state with a fresh fetch."""

        report = self.sync.migrate_legacy_data()
        try:
            debts, payments = self.sync.fetch_all()
        except DebtTrackerError as exc:
            self._fail("Could not load data", exc)
            raise
        self.state = AppState(debts=debts, payments=payments, loaded=True, last_migration=report)
        self.notify(Notification(LEVEL_SUCCESS, "Data loaded", "Your debts were loaded."))
        return self.state

    def add_debt(self, data: Mapping[str, Any]) -> Debt:
        """Validate and persist a new debt, then append it locally."""

        try:
            draft = validate_debt_input(data, self.settings, min_due_date=self.min_due_date)
            created = self.sync.create_debt(draft)
        except DebtTrackerError as exc:
            self._fail("Could not save debt", exc)
            raise
        self.state.debts.append(created)
        self.notify(Notification(LEVEL_SUCCESS, "Debt added", "The new debt was saved."))
        return created

    def add_payment(self, data: Mapping[str, Any]) -> Payment:
        """Record a payment and move the debt's status forward if needed.

        The stored ``remaining_balance`` is computed from the payments
        already stored for the debt plus this one.
        """

        try:
            draft = validate_payment_input(data)
            debt = self.state.find_debt(draft.debt_id)
            if debt is None:
                raise EntityNotFoundError(f"Debt {draft.debt_id} not found")

            created = self.sync.record_payment(debt, draft.to_model(remaining_balance=0))
            new_status = next_status(debt.status, created.remaining_balance)
            updated_debt: Optional[Debt] = None
            if new_status != debt.status:
                try:
                    updated_debt = self.sync.update_debt_status(debt.id, new_status)
                except DebtTrackerError:
                    logger.warning(
                        "Payment stored but status update failed; a reload will show it",
                        extra={"payment_id": created.id, "debt_id": debt.id},
                    )
                    raise
        except DebtTrackerError as exc:
            self._fail("Could not record payment", exc)
            raise

        self.state.payments.append(created)
        if updated_debt is not None:
            self.state.debts = [
                updated_debt if item.id == updated_debt.id else item for item in self.state.debts
            ]
        self.notify(Notification(LEVEL_SUCCESS, "Payment recorded", "The payment was saved."))
        return created


__all__ = ["AppState", "DebtTrackerApp", "Notification"]
