"""Deployment-time form policy: which fields are required, which features are on."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from ..infra.repositories.settings import SQLModelSettingsRepository
from ..logging_config import get_logger

SETTINGS_KEY = "app_settings"

logger = get_logger("settings")


@dataclass(frozen=True, slots=True)
class RequiredFields:
    name: bool = True
    category: bool = False
    bank: bool = False
    description: bool = True


@dataclass(frozen=True, slots=True)
class EnabledFeatures:
    categories: bool = True
    banks: bool = True
    notes: bool = True


@dataclass(frozen=True, slots=True)
class AppSettings:
    """Configuration threaded into validation and conditional form fields."""

    required_fields: RequiredFields = field(default_factory=RequiredFields)
    enabled_features: EnabledFeatures = field(default_factory=EnabledFeatures)

    def bank_required(self) -> bool:
        return self.enabled_features.banks and self.required_fields.bank

    def category_required(self) -> bool:
        return self.enabled_features.categories and self.required_fields.category

    def to_dict(self) -> dict[str, Any]:
        return {
            "requiredFields": asdict(self.required_fields),
            "enabledFeatures": asdict(self.enabled_features),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppSettings":
        """Build settings from the stored JSON shape; unknown keys are ignored.

        Raises:
            ValueError: if either section is not a JSON object.
        """

        required = data.get("requiredFields") or {}
        enabled = data.get("enabledFeatures") or {}
        if not isinstance(required, Mapping) or not isinstance(enabled, Mapping):
            raise ValueError("requiredFields and enabledFeatures must be objects")
        return cls(
            required_fields=RequiredFields(
                **{k: bool(v) for k, v in required.items() if k in RequiredFields.__dataclass_fields__}
            ),
            enabled_features=EnabledFeatures(
                **{k: bool(v) for k, v in enabled.items() if k in EnabledFeatures.__dataclass_fields__}
            ),
        )


def load_app_settings(repo: SQLModelSettingsRepository) -> AppSettings:
    """Read stored settings, falling back to defaults when absent or unreadable."""

    row = repo.get(SETTINGS_KEY)
    if row is None:
        return AppSettings()
    try:
        data = json.loads(row.value)
        if not isinstance(data, dict):
            raise ValueError("settings payload is not an object")
        return AppSettings.from_dict(data)
    except (ValueError, TypeError) as exc:
        logger.warning("Stored app settings unreadable; using defaults", extra={"error": str(exc)})
        return AppSettings()


def save_app_settings(repo: SQLModelSettingsRepository, settings: AppSettings) -> AppSettings:
    repo.set(SETTINGS_KEY, json.dumps(settings.to_dict()), description="Form requirements and features")
    logger.info("App settings saved", extra=settings.to_dict())
    return settings
