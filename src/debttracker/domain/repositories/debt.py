"""Debt repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ...models.debt import Debt
from ...models.payment import Payment


class DebtRepository(Protocol):
    """Repository for debts, scoped to an owner."""

    def get_by_id(self, debt_id: str, *, user_id: str) -> Optional[Debt]:
        """Retrieve a debt by ID."""
        ...

    def list_all(self, *, user_id: str) -> list[Debt]:
        """List the owner's debts."""
        ...

    def count(self, *, user_id: str) -> int:
        """Count the owner's debts."""
        ...

    def create(self, debt: Debt, *, user_id: str) -> Debt:
        """Insert a debt and return the persisted row."""
        ...

    def update_status(self, debt_id: str, status: str, *, user_id: str) -> Debt:
        """Patch only the status column."""
        ...

    def import_legacy(
        self, debts: Sequence[Debt], payments: Sequence[Payment], *, user_id: str
    ) -> None:
        """Insert cached debts and their payments in one transaction."""
        ...
