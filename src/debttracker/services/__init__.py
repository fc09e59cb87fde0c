"""Service module exports."""

from . import (
    auth,
    calendar_view,
    debts,
    permissions,
    reference_data,
    reports,
    settings,
    sync,
    tracker,
    validation,
)

__all__ = [
    "auth",
    "calendar_view",
    "debts",
    "permissions",
    "reference_data",
    "reports",
    "settings",
    "sync",
    "tracker",
    "validation",
]
