"""SQLModel table exports."""

from .day_note import DayNote
from .debt import Debt
from .payment import Payment
from .reference import Bank, DebtCategory
from .settings import AppSetting
from .user_role import UserRole

__all__ = [
    "AppSetting",
    "Bank",
    "DayNote",
    "Debt",
    "DebtCategory",
    "Payment",
    "UserRole",
]
