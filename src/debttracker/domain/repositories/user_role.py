"""User role repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.user_role import UserRole


class UserRoleRepository(Protocol):
    """Repository for role assignments."""

    def get(self, user_id: str) -> Optional[UserRole]:
        """Retrieve the role row for a user."""
        ...

    def list_all(self) -> list[UserRole]:
        """List every role assignment."""
        ...

    def create(self, user_id: str, role: str) -> UserRole:
        """Insert a role row."""
        ...

    def set_role(self, user_id: str, role: str) -> UserRole:
        """Update (or insert) a user's role."""
        ...
