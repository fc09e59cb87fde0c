"""SQLModel implementation of UserRole repository."""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ...models.user_role import UserRole
from ..database import SessionFactory


class SQLModelUserRoleRepository:
    """SQLModel-based role repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, user_id: str) -> Optional[UserRole]:
        with self.session_factory() as session:
            obj = session.exec(select(UserRole).where(UserRole.user_id == user_id)).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[UserRole]:
        with self.session_factory() as session:
            rows = list(session.exec(select(UserRole).order_by(UserRole.created_at)).all())  # type: ignore
            session.expunge_all()
            return rows

    def create(self, user_id: str, role: str) -> UserRole:
        with self.session_factory() as session:
            row = UserRole(user_id=user_id, role=role)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    def set_role(self, user_id: str, role: str) -> UserRole:
        with self.session_factory() as session:
            row = session.exec(select(UserRole).where(UserRole.user_id == user_id)).first()
            if row:
                row.role = role
            else:
                row = UserRole(user_id=user_id, role=role)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row
