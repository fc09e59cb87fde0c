"""Repository protocol definitions for domain layer."""

from .day_note import DayNoteRepository
from .debt import DebtRepository
from .payment import PaymentRepository
from .reference import BankRepository, CategoryRepository, ReferenceRepository
from .user_role import UserRoleRepository

__all__ = [
    "BankRepository",
    "CategoryRepository",
    "DayNoteRepository",
    "DebtRepository",
    "PaymentRepository",
    "ReferenceRepository",
    "UserRoleRepository",
]
