"""Role assignments for principals supplied by the identity provider."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlmodel import Field, SQLModel

from .debt import new_id, utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ALLOWED_ROLES = frozenset({ROLE_USER, ROLE_ADMIN})


class UserRole(SQLModel, table=True):
    """Role row keyed by the external user id."""

    __tablename__: ClassVar[str] = "user_roles"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: str = Field(nullable=False, unique=True, index=True, max_length=64)
    role: str = Field(default=ROLE_USER, nullable=False, max_length=16)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
