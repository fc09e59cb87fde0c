"""Pytest configuration and shared fixtures for DebtTracker tests.

This module provides database fixtures, identity fixtures and test data
factories for testing derivations, repositories and services without
touching the real app database.
"""

from __future__ import annotations

import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path

import pytest
from sqlmodel import Session, SQLModel, create_engine

from debttracker.domain.identity import Principal, StaticIdentityProvider
from debttracker.infra.repositories import (
    SQLModelBankRepository,
    SQLModelCategoryRepository,
    SQLModelDayNoteRepository,
    SQLModelDebtRepository,
    SQLModelPaymentRepository,
    SQLModelSettingsRepository,
    SQLModelUserRoleRepository,
)
from debttracker.logging_config import ROOT_LOGGER_NAME
# Import all models to ensure they are registered with SQLModel metadata
from debttracker.models import Debt, Payment
from tests.helpers import make_debt, make_payment

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so log files close per test."""
    yield
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    A file (rather than ``:memory:``) lets the concurrent fetch threads see
    the same data.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(
        f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False}
    )
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Create a session factory for repositories.

    Returns:
        Callable: Factory returning transactional session context managers
    """

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


# =============================================================================
# Identity Fixtures
# =============================================================================


@pytest.fixture
def principal() -> Principal:
    """Ordinary signed-in user."""
    return Principal(user_id="user-1", email="user1@example.com")


@pytest.fixture
def other_principal() -> Principal:
    return Principal(user_id="user-2", email="user2@example.com")


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(user_id="admin-1", role="admin", email="admin@example.com")


@pytest.fixture
def identity(principal) -> StaticIdentityProvider:
    return StaticIdentityProvider(principal)


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def debt_repo(session_factory) -> SQLModelDebtRepository:
    return SQLModelDebtRepository(session_factory)


@pytest.fixture
def payment_repo(session_factory) -> SQLModelPaymentRepository:
    return SQLModelPaymentRepository(session_factory)


@pytest.fixture
def category_repo(session_factory) -> SQLModelCategoryRepository:
    return SQLModelCategoryRepository(session_factory)


@pytest.fixture
def bank_repo(session_factory) -> SQLModelBankRepository:
    return SQLModelBankRepository(session_factory)


@pytest.fixture
def day_note_repo(session_factory) -> SQLModelDayNoteRepository:
    return SQLModelDayNoteRepository(session_factory)


@pytest.fixture
def user_role_repo(session_factory) -> SQLModelUserRoleRepository:
    return SQLModelUserRoleRepository(session_factory)


@pytest.fixture
def settings_repo(session_factory) -> SQLModelSettingsRepository:
    return SQLModelSettingsRepository(session_factory)


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def debt_factory(debt_repo, principal):
    """Factory for creating persisted debts owned by ``principal``.

    Returns:
        Callable: Function that creates and persists Debt instances
    """

    def _create_debt(owner: Principal | None = None, **kwargs) -> Debt:
        owner = owner or principal
        return debt_repo.create(make_debt(**kwargs), user_id=owner.user_id)

    return _create_debt


@pytest.fixture
def payment_factory(payment_repo, principal):
    """Factory for creating persisted payments owned by ``principal``."""

    def _create_payment(debt: Debt, amount: float, owner: Principal | None = None, **kwargs) -> Payment:
        owner = owner or principal
        return payment_repo.create(make_payment(debt.id, amount, **kwargs), user_id=owner.user_id)

    return _create_payment
