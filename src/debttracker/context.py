"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .config import BaseConfig
from .domain.identity import IdentityProvider, Principal, StaticIdentityProvider
from .infra.database import SessionFactory, bootstrap_database
from .infra.legacy_cache import LegacyCache
from .infra.repositories import (
    SQLModelBankRepository,
    SQLModelCategoryRepository,
    SQLModelDayNoteRepository,
    SQLModelDebtRepository,
    SQLModelPaymentRepository,
    SQLModelSettingsRepository,
    SQLModelUserRoleRepository,
)
from .logging_config import setup_logging
from .services.auth import resolve_principal
from .services.debts import format_currency
from .services.reference_data import ReferenceDataService
from .services.settings import AppSettings, load_app_settings
from .services.sync import DebtSynchronizer
from .services.tracker import DebtTrackerApp, Notifier


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    config: BaseConfig
    session_factory: SessionFactory
    identity: IdentityProvider

    # Repositories
    debt_repo: SQLModelDebtRepository
    payment_repo: SQLModelPaymentRepository
    category_repo: SQLModelCategoryRepository
    bank_repo: SQLModelBankRepository
    day_note_repo: SQLModelDayNoteRepository
    user_role_repo: SQLModelUserRoleRepository
    settings_repo: SQLModelSettingsRepository

    # Services
    settings: AppSettings
    synchronizer: DebtSynchronizer
    tracker: DebtTrackerApp
    categories: ReferenceDataService
    banks: ReferenceDataService

    def current_principal(self) -> Optional[Principal]:
        """The signed-in principal with its stored role."""

        return resolve_principal(self.identity, self.user_role_repo)

    def reload_settings(self) -> AppSettings:
        self.settings = load_app_settings(self.settings_repo)
        self.tracker.settings = self.settings
        return self.settings

    def format_money(self, amount: float | int | Decimal) -> str:
        """Render an amount with the configured currency label."""

        return format_currency(amount, label=self.config.CURRENCY_LABEL)


def create_app_context(
    config: Optional[BaseConfig] = None,
    *,
    identity: Optional[IdentityProvider] = None,
    notify: Optional[Notifier] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    logger = setup_logging(config)
    _engine, session_factory = bootstrap_database(config)

    if identity is None:
        # Local single-user mode: one fixed principal owns all data.
        identity = StaticIdentityProvider(Principal(user_id=config.LOCAL_USER_ID))

    debt_repo = SQLModelDebtRepository(session_factory)
    payment_repo = SQLModelPaymentRepository(session_factory)
    category_repo = SQLModelCategoryRepository(session_factory)
    bank_repo = SQLModelBankRepository(session_factory)
    day_note_repo = SQLModelDayNoteRepository(session_factory)
    user_role_repo = SQLModelUserRoleRepository(session_factory)
    settings_repo = SQLModelSettingsRepository(session_factory)

    settings = load_app_settings(settings_repo)
    synchronizer = DebtSynchronizer(
        debt_repo,
        payment_repo,
        identity,
        legacy_cache=LegacyCache(config.LEGACY_CACHE_PATH),
    )
    tracker = DebtTrackerApp(
        synchronizer,
        settings,
        min_due_date=config.MIN_DUE_DATE,
        notify=notify,
    )

    logger.info("Application context ready", extra={"data_dir": str(config.DATA_DIR)})

    return AppContext(
        config=config,
        session_factory=session_factory,
        identity=identity,
        debt_repo=debt_repo,
        payment_repo=payment_repo,
        category_repo=category_repo,
        bank_repo=bank_repo,
        day_note_repo=day_note_repo,
        user_role_repo=user_role_repo,
        settings_repo=settings_repo,
        settings=settings,
        synchronizer=synchronizer,
        tracker=tracker,
        categories=ReferenceDataService(category_repo, kind="category"),
        banks=ReferenceDataService(bank_repo, kind="bank"),
    )
