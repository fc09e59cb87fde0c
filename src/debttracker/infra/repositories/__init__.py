"""Concrete repository implementations using SQLModel."""

from .day_note import SQLModelDayNoteRepository
from .debt import SQLModelDebtRepository
from .payment import SQLModelPaymentRepository
from .reference import SQLModelBankRepository, SQLModelCategoryRepository
from .settings import SQLModelSettingsRepository
from .user_role import SQLModelUserRoleRepository

__all__ = [
    "SQLModelBankRepository",
    "SQLModelCategoryRepository",
    "SQLModelDayNoteRepository",
    "SQLModelDebtRepository",
    "SQLModelPaymentRepository",
    "SQLModelSettingsRepository",
    "SQLModelUserRoleRepository",
]
