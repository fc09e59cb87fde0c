"""Role resolution and role management for identity-provider principals."""

from __future__ import annotations

from typing import Optional

from ..domain.identity import IdentityProvider, Principal
from ..domain.repositories import UserRoleRepository
from ..logging_config import get_logger
from ..models.user_role import ALLOWED_ROLES, ROLE_USER, UserRole
from .permissions import require_admin

logger = get_logger("auth")


def _normalize_role(role: str) -> str:
    role = (role or ROLE_USER).strip().lower()
    if role not in ALLOWED_ROLES:
        raise ValueError(f"Invalid role: {role}")
    return role


def resolve_principal(
    identity: IdentityProvider, role_repo: UserRoleRepository
) -> Optional[Principal]:
    """Return the signed-in principal carrying its stored role.

    A principal seen for the first time gets the default ``user`` role row.
    """

    principal = identity.current_session()
    if principal is None:
        return None
    row = role_repo.get(principal.user_id)
    if row is None:
        row = role_repo.create(principal.user_id, ROLE_USER)
        logger.info("Assigned default role", extra={"user_id": principal.user_id})
    return principal.with_role(row.role)


def list_user_roles(actor: Optional[Principal], role_repo: UserRoleRepository) -> list[UserRole]:
    """Every role assignment; admins only."""

    require_admin(actor)
    return role_repo.list_all()


def set_role(
    actor: Optional[Principal], *, user_id: str, role: str, role_repo: UserRoleRepository
) -> UserRole:
    """Change another user's role; admins only."""

    require_admin(actor)
    normalized_role = _normalize_role(role)
    row = role_repo.set_role(user_id, normalized_role)
    logger.info(
        "User role updated",
        extra={"user_id": user_id, "role": normalized_role, "actor": actor.user_id if actor else None},
    )
    return row
