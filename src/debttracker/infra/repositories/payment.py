"""SQLModel implementation of Payment repository."""

from __future__ import annotations

from sqlmodel import select

from ...models.payment import Payment
from ..database import SessionFactory


class SQLModelPaymentRepository:
    """SQLModel-based payment repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_all(self, *, user_id: str) -> list[Payment]:
        """List the owner's payments ordered by payment date."""
        with self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.user_id == user_id)
                .order_by(Payment.payment_date, Payment.created_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def list_for_debt(self, debt_id: str, *, user_id: str) -> list[Payment]:
        """List payments for one debt ordered by payment date."""
        with self.session_factory() as session:
            statement = (
                select(Payment)
                .where(Payment.debt_id == debt_id, Payment.user_id == user_id)
                .order_by(Payment.payment_date, Payment.created_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, payment: Payment, *, user_id: str) -> Payment:
        """Insert a payment and return the persisted row."""
        with self.session_factory() as session:
            payment.user_id = user_id
            session.add(payment)
            session.commit()
            session.refresh(payment)
            session.expunge(payment)
            return payment
