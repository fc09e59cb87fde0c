"""SQLModel implementations of the category and bank repositories."""

from __future__ import annotations

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy import or_
from sqlmodel import select

from ...exceptions import EntityNotFoundError
from ...models.reference import Bank, DebtCategory
from ..database import SessionFactory

RowT = TypeVar("RowT", DebtCategory, Bank)


class _SQLModelReferenceRepository(Generic[RowT]):
    """Shared CRUD for named reference tables with an ``is_system`` flag."""

    model: Type[RowT]

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, item_id: str) -> Optional[RowT]:
        """Retrieve a row by ID regardless of owner."""
        with self.session_factory() as session:
            obj = session.get(self.model, item_id)
            if obj:
                session.expunge(obj)
            return obj

    def list_visible(self, *, user_id: str) -> list[RowT]:
        """List system rows plus rows owned by ``user_id``, ordered by name."""
        model = self.model
        with self.session_factory() as session:
            statement = (
                select(model)
                .where(or_(model.is_system == True, model.user_id == user_id))  # noqa: E712
                .order_by(model.name)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, name: str, *, user_id: Optional[str], is_system: bool) -> RowT:
        """Insert a row."""
        with self.session_factory() as session:
            row = self.model(name=name, user_id=user_id, is_system=is_system)
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    def rename(self, item_id: str, name: str) -> RowT:
        """Change a row's name."""
        with self.session_factory() as session:
            row = session.get(self.model, item_id)
            if row is None:
                raise EntityNotFoundError(f"{self.model.__name__} {item_id} not found")
            row.name = name
            session.add(row)
            session.commit()
            session.refresh(row)
            session.expunge(row)
            return row

    def delete(self, item_id: str) -> None:
        """Delete a row by ID."""
        with self.session_factory() as session:
            row = session.get(self.model, item_id)
            if row:
                session.delete(row)
                session.commit()


class SQLModelCategoryRepository(_SQLModelReferenceRepository[DebtCategory]):
    """SQLModel-based debt category repository."""

    model = DebtCategory


class SQLModelBankRepository(_SQLModelReferenceRepository[Bank]):
    """SQLModel-based bank repository."""

    model = Bank
