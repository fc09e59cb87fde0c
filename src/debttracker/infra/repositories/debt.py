"""SQLModel implementation of Debt repository."""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import func
from sqlmodel import select

from ...exceptions import EntityNotFoundError
from ...models.debt import Debt
from ...models.payment import Payment
from ..database import SessionFactory


class SQLModelDebtRepository:
    """SQLModel-based debt repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, debt_id: str, *, user_id: str) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Debt).where(Debt.id == debt_id, Debt.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self, *, user_id: str) -> list[Debt]:
        """List the owner's debts, oldest first."""
        with self.session_factory() as session:
            statement = (
                select(Debt)
                .where(Debt.user_id == user_id)
                .order_by(Debt.created_at)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def count(self, *, user_id: str) -> int:
        """Count the owner's debts."""
        with self.session_factory() as session:
            statement = select(func.count()).select_from(Debt).where(Debt.user_id == user_id)
            return int(session.exec(statement).one())

    def create(self, debt: Debt, *, user_id: str) -> Debt:
        """Insert a debt; id and created_at are kept when already set."""
        with self.session_factory() as session:
            debt.user_id = user_id
            session.add(debt)
            session.commit()
            session.refresh(debt)
            session.expunge(debt)
            return debt

    def update_status(self, debt_id: str, status: str, *, user_id: str) -> Debt:
        """Patch only the status column."""
        with self.session_factory() as session:
            debt = session.exec(
                select(Debt).where(Debt.id == debt_id, Debt.user_id == user_id)
            ).first()
            if debt is None:
                raise EntityNotFoundError(f"Debt {debt_id} not found")
            debt.status = status
            session.add(debt)
            session.commit()
            session.refresh(debt)
            session.expunge(debt)
            return debt

    def import_legacy(
        self, debts: Sequence[Debt], payments: Sequence[Payment], *, user_id: str
    ) -> None:
        """Insert cached debts and payments atomically; any failure rolls back both."""
        with self.session_factory() as session:
            for debt in debts:
                debt.user_id = user_id
                session.add(debt)
            # Debts first so payment foreign keys resolve.
            session.flush()
            for payment in payments:
                payment.user_id = user_id
                session.add(payment)
            session.flush()
