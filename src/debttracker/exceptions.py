"""Custom exception hierarchy for DebtTracker."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class DebtTrackerError(Exception):
    """Base exception for all DebtTracker errors."""


class ConfigurationError(DebtTrackerError):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single user-correctable problem with one input field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class ValidationError(DebtTrackerError):
    """Raised when a creation request is rejected before persistence.

    ``errors`` keeps the order in which fields were checked so callers can
    render them as-is.
    """

    def __init__(self, errors: Sequence[FieldError]):
        if not errors:
            raise ValueError("ValidationError requires at least one field error")
        self.errors: list[FieldError] = list(errors)
        super().__init__("; ".join(str(error) for error in self.errors))

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


class PersistenceError(DebtTrackerError):
    """Raised when the persistence layer rejects or fails an operation."""


class SyncError(PersistenceError):
    """Raised when a combined load fails; carries every underlying failure."""

    def __init__(self, message: str, failures: Sequence[BaseException] = ()):
        self.failures: list[BaseException] = list(failures)
        detail = "; ".join(f"{type(exc).__name__}: {exc}" for exc in self.failures)
        super().__init__(f"{message} ({detail})" if detail else message)


class AuthenticationRequiredError(DebtTrackerError):
    """Raised when an operation needs a signed-in principal and none exists."""


class PermissionDeniedError(DebtTrackerError):
    """Raised when a principal may not manage the targeted resource."""


class EntityNotFoundError(DebtTrackerError):
    """Raised when a referenced entity does not exist."""


class InvalidStatusTransitionError(DebtTrackerError):
    """Raised when a debt status update would move backwards."""
