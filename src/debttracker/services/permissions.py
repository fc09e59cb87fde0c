"""Single authorization policy for every managed resource.

Admins manage everything. Everyone else manages only rows they own, and
never shared (``is_system``) reference rows or role assignments.
"""

from __future__ import annotations

from typing import Optional

from ..domain.identity import Principal
from ..exceptions import AuthenticationRequiredError, PermissionDeniedError
from ..models.user_role import UserRole


def can_manage(principal: Optional[Principal], resource: object) -> bool:
    """Return True when ``principal`` may edit or delete ``resource``."""

    if principal is None:
        return False
    if principal.is_admin:
        return True
    if isinstance(resource, UserRole):
        return False
    if getattr(resource, "is_system", False):
        return False
    return getattr(resource, "user_id", None) == principal.user_id


def require_principal(principal: Optional[Principal]) -> Principal:
    if principal is None:
        raise AuthenticationRequiredError("Sign in to continue")
    return principal


def require_manage(principal: Optional[Principal], resource: object) -> Principal:
    """Raise unless ``principal`` may manage ``resource``."""

    principal = require_principal(principal)
    if not can_manage(principal, resource):
        raise PermissionDeniedError(f"Not allowed to manage this {type(resource).__name__}")
    return principal


def require_admin(principal: Optional[Principal]) -> Principal:
    principal = require_principal(principal)
    if not principal.is_admin:
        raise PermissionDeniedError("Administrator role required")
    return principal
