"""Principal and identity-provider contract.

Authentication itself is delegated to an external identity provider; the
core only asks who is signed in right now.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Protocol

from ..models.user_role import ROLE_ADMIN, ROLE_USER


@dataclass(frozen=True, slots=True)
class Principal:
    """The signed-in user as seen by the application."""

    user_id: str
    role: str = ROLE_USER
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    def with_role(self, role: str) -> "Principal":
        return replace(self, role=role)


class IdentityProvider(Protocol):
    """Source of the current authenticated session."""

    def current_session(self) -> Optional[Principal]:
        """Return the signed-in principal, or None when signed out."""
        ...


class StaticIdentityProvider:
    """Identity provider with a fixed principal, for local mode and tests."""

    def __init__(self, principal: Optional[Principal] = None):
        self.principal = principal

    def current_session(self) -> Optional[Principal]:
        return self.principal

    def sign_in(self, principal: Principal) -> None:
        self.principal = principal

    def sign_out(self) -> None:
        self.principal = None
