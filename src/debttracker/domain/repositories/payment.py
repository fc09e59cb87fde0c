"""Payment repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.payment import Payment


class PaymentRepository(Protocol):
    """Append-only repository for payments, scoped to an owner."""

    def list_all(self, *, user_id: str) -> list[Payment]:
        """List the owner's payments ordered by payment date."""
        ...

    def list_for_debt(self, debt_id: str, *, user_id: str) -> list[Payment]:
        """List payments for one debt ordered by payment date."""
        ...

    def create(self, payment: Payment, *, user_id: str) -> Payment:
        """Insert a payment and return the persisted row."""
        ...
