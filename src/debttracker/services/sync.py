"""Bridge between in-memory collections and the persistence layer.

Every read and write is scoped to the signed-in principal's ``user_id``;
owner filtering happens here and in the repositories rather than being
left to the database.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError

from ..domain.identity import IdentityProvider, Principal
from ..domain.repositories import DebtRepository, PaymentRepository
from ..exceptions import (
    AuthenticationRequiredError,
    EntityNotFoundError,
    PersistenceError,
    SyncError,
)
from ..infra.legacy_cache import LegacyCache
from ..logging_config import get_logger
from ..models.debt import Debt
from ..models.payment import Payment
from .debts import calculate_remaining_balance, ensure_forward_transition
from .validation import DebtDraft

logger = get_logger("sync")

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class MigrationReport:
    """Outcome of a legacy-data migration attempt."""

    migrated_debts: int = 0
    migrated_payments: int = 0
    skipped_reason: Optional[str] = None
    failed: bool = False

    @property
    def migrated(self) -> bool:
        return not self.failed and self.skipped_reason is None


class DebtSynchronizer:
    """Fetch, create and status-update operations plus the legacy migration."""

    def __init__(
        self,
        debt_repo: DebtRepository,
        payment_repo: PaymentRepository,
        identity: IdentityProvider,
        *,
        legacy_cache: Optional[LegacyCache] = None,
    ):
        self.debt_repo = debt_repo
        self.payment_repo = payment_repo
        self.identity = identity
        self.legacy_cache = legacy_cache

    def _require_principal(self) -> Principal:
        principal = self.identity.current_session()
        if principal is None:
            raise AuthenticationRequiredError("Sign in to access your debts")
        return principal

    def _persist(self, action: str, call: Callable[[], T]) -> T:
        try:
            return call()
        except SQLAlchemyError as exc:
            logger.error("Persistence call failed", extra={"action": action, "error": str(exc)})
            raise PersistenceError(f"Could not {action}") from exc

    def fetch_all(self) -> tuple[list[Debt], list[Payment]]:
        """Load the principal's debts and payments concurrently.

        Raises:
            SyncError: if either fetch fails; the other result is discarded.
        """

        user_id = self._require_principal().user_id
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="debttracker-fetch") as pool:
            debts_future: Future[list[Debt]] = pool.submit(self.debt_repo.list_all, user_id=user_id)
            payments_future: Future[list[Payment]] = pool.submit(
                self.payment_repo.list_all, user_id=user_id
            )
        # Leaving the executor block joins both futures.
        failures = [
            exc
            for exc in (debts_future.exception(), payments_future.exception())
            if exc is not None
        ]
        if failures:
            logger.error(
                "Loading debts and payments failed",
                extra={"user_id": user_id, "failures": [repr(exc) for exc in failures]},
            )
            raise SyncError("Could not load debts and payments", failures)

        debts, payments = debts_future.result(), payments_future.result()
        logger.info(
            "Loaded debts and payments",
            extra={"user_id": user_id, "debts": len(debts), "payments": len(payments)},
        )
        return debts, payments

    def create_debt(self, debt: Union[DebtDraft, Debt]) -> Debt:
        """Persist a debt and return the stored row with its id and created_at."""

        user_id = self._require_principal().user_id
        model = debt.to_model() if isinstance(debt, DebtDraft) else debt
        created = self._persist("save the debt", lambda: self.debt_repo.create(model, user_id=user_id))
        logger.info("Debt created", extra={"debt_id": created.id, "amount": created.amount})
        return created

    def create_payment(self, payment: Payment) -> Payment:
        """Persist a payment and return the stored row."""

        user_id = self._require_principal().user_id
        created = self._persist(
            "save the payment", lambda: self.payment_repo.create(payment, user_id=user_id)
        )
        logger.info(
            "Payment created",
            extra={
                "payment_id": created.id,
                "debt_id": created.debt_id,
                "remaining_balance": created.remaining_balance,
            },
        )
        return created

    def record_payment(self, debt: Debt, payment: Payment) -> Payment:
        """Snapshot the balance against stored payments, then persist ``payment``.

        The snapshot counts every payment already in the store for the debt,
        including ones the in-memory state has not picked up yet.
        """

        user_id = self._require_principal().user_id
        stored = self._persist(
            "load the payments",
            lambda: self.payment_repo.list_for_debt(debt.id, user_id=user_id),
        )
        payment.remaining_balance = calculate_remaining_balance(debt, [*stored, payment])
        return self.create_payment(payment)

    def update_debt_status(self, debt_id: str, status: str) -> Debt:
        """Update only the status of a debt; statuses never move backwards.

        Raises:
            EntityNotFoundError: if the debt is not the principal's.
            InvalidStatusTransitionError: for a regression or unknown status.
            PersistenceError: if the store fails.
        """

        user_id = self._require_principal().user_id
        current = self._persist(
            "load the debt", lambda: self.debt_repo.get_by_id(debt_id, user_id=user_id)
        )
        if current is None:
            raise EntityNotFoundError(f"Debt {debt_id} not found")
        ensure_forward_transition(current.status, status)
        if current.status == status:
            return current
        updated = self._persist(
            "update the debt status",
            lambda: self.debt_repo.update_status(debt_id, status, user_id=user_id),
        )
        logger.info(
            "Debt status updated",
            extra={"debt_id": debt_id, "from_status": current.status, "to_status": status},
        )
        return updated

    def migrate_legacy_data(self) -> MigrationReport:
        """Copy locally cached records into an empty store, once.

        Runs only when the principal has no debts stored yet, so repeating it
        never duplicates rows. The copy is a single transaction: a failure
        leaves the store empty and the next start tries again. Failures are
        logged and reported, never raised.
        """

        if self.legacy_cache is None:
            return MigrationReport(skipped_reason="no legacy cache configured")
        try:
            principal = self.identity.current_session()
            if principal is None:
                logger.warning("Skipping legacy migration: no signed-in user")
                return MigrationReport(skipped_reason="not signed in")
            user_id = principal.user_id

            if self.debt_repo.count(user_id=user_id) > 0:
                return MigrationReport(skipped_reason="store already has debts")

            snapshot = self.legacy_cache.load()
            if snapshot.is_empty:
                return MigrationReport(skipped_reason="legacy cache is empty")

            self.debt_repo.import_legacy(snapshot.debts, snapshot.payments, user_id=user_id)
        except Exception:
            logger.exception(
                "Legacy data migration failed",
                extra={"cache_path": str(self.legacy_cache.path)},
            )
            return MigrationReport(failed=True)

        report = MigrationReport(
            migrated_debts=len(snapshot.debts), migrated_payments=len(snapshot.payments)
        )
        logger.info(
            "Legacy data migrated",
            extra={
                "user_id": user_id,
                "debts": report.migrated_debts,
                "payments": report.migrated_payments,
            },
        )
        return report


__all__ = ["DebtSynchronizer", "MigrationReport"]
