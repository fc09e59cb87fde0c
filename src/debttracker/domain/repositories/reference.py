"""Category and bank repository protocols."""

from __future__ import annotations

from typing import Optional, Protocol, TypeVar

from ...models.reference import Bank, DebtCategory

RowT = TypeVar("RowT", DebtCategory, Bank)


class ReferenceRepository(Protocol[RowT]):
    """Shared shape of the named reference tables."""

    def get_by_id(self, item_id: str) -> Optional[RowT]:
        """Retrieve a row by ID regardless of owner."""
        ...

    def list_visible(self, *, user_id: str) -> list[RowT]:
        """List system rows plus rows owned by ``user_id``, ordered by name."""
        ...

    def create(self, name: str, *, user_id: Optional[str], is_system: bool) -> RowT:
        """Insert a row."""
        ...

    def rename(self, item_id: str, name: str) -> RowT:
        """Change a row's name."""
        ...

    def delete(self, item_id: str) -> None:
        """Delete a row by ID."""
        ...


class CategoryRepository(ReferenceRepository[DebtCategory], Protocol):
    """Repository for debt categories."""


class BankRepository(ReferenceRepository[Bank], Protocol):
    """Repository for banks."""
