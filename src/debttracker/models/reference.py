"""Shared reference data: debt categories and banks."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from .debt import new_id, utcnow


class DebtCategory(SQLModel, table=True):
    """Category a debt can be filed under."""

    __tablename__: ClassVar[str] = "debt_categories"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=80, index=True)
    user_id: Optional[str] = Field(default=None, index=True, max_length=64)
    is_system: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)


class Bank(SQLModel, table=True):
    """Lending bank referenced by bank loans."""

    __tablename__: ClassVar[str] = "banks"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    name: str = Field(nullable=False, max_length=80, index=True)
    user_id: Optional[str] = Field(default=None, index=True, max_length=64)
    is_system: bool = Field(default=False, nullable=False)
    created_at: datetime = Field(default_factory=utcnow, nullable=False)
