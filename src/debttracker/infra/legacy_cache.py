"""Reader for records cached by the older local-only client.

That client stored two JSON arrays, ``debts`` and ``payments``, with
camelCase keys. The file here holds both arrays in one object::

    {"debts": [{"id": "1", "debtType": "bank_loan", ...}], "payments": [...]}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from ..models.debt import Debt
from ..models.payment import Payment

# Legacy key -> storage column.
DEBT_FIELD_MAP: dict[str, str] = {
    "id": "id",
    "name": "name",
    "amount": "amount",
    "debtType": "debt_type",
    "dueDate": "due_date",
    "installments": "installments",
    "installmentAmount": "installment_amount",
    "description": "description",
    "status": "status",
    "createdAt": "created_at",
    "category_id": "category_id",
    "bank_id": "bank_id",
}

PAYMENT_FIELD_MAP: dict[str, str] = {
    "id": "id",
    "debtId": "debt_id",
    "paymentDate": "payment_date",
    "paymentAmount": "payment_amount",
    "remainingBalance": "remaining_balance",
    "createdAt": "created_at",
}


@dataclass(slots=True)
class LegacySnapshot:
    """Everything found in the local cache."""

    debts: list[Debt] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.debts and not self.payments


def _parse_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    text = str(value)
    # Cached dates were sometimes full ISO timestamps.
    return date.fromisoformat(text[:10])


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _remap(record: Mapping[str, Any], field_map: Mapping[str, str]) -> dict[str, Any]:
    return {column: record[key] for key, column in field_map.items() if record.get(key) is not None}


def debt_from_legacy(record: Mapping[str, Any]) -> Debt:
    """Build a Debt row from one cached record, keeping its id and timestamp."""

    values = _remap(record, DEBT_FIELD_MAP)
    values["id"] = str(values["id"])
    values["amount"] = float(values["amount"])
    values["installments"] = int(values.get("installments", 1))
    values["installment_amount"] = float(values.get("installment_amount", values["amount"]))
    values["due_date"] = _parse_date(values["due_date"])
    if "created_at" in values:
        values["created_at"] = _parse_timestamp(values["created_at"])
    return Debt(**values)


def payment_from_legacy(record: Mapping[str, Any]) -> Payment:
    """Build a Payment row from one cached record, keeping its id."""

    values = _remap(record, PAYMENT_FIELD_MAP)
    values["id"] = str(values["id"])
    values["debt_id"] = str(values["debt_id"])
    values["payment_date"] = _parse_date(values["payment_date"])
    values["payment_amount"] = float(values["payment_amount"])
    values["remaining_balance"] = float(values["remaining_balance"])
    if "created_at" in values:
        values["created_at"] = _parse_timestamp(values["created_at"])
    return Payment(**values)


class LegacyCache:
    """JSON file left behind by the local-only storage mode."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> LegacySnapshot:
        """Parse the cache file; a missing file yields an empty snapshot.

        Malformed JSON or records raise ``ValueError``/``KeyError`` for the
        caller to handle.
        """
        if not self.exists():
            return LegacySnapshot()
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Legacy cache {self.path} must contain a JSON object")
        return LegacySnapshot(
            debts=[debt_from_legacy(item) for item in payload.get("debts") or []],
            payments=[payment_from_legacy(item) for item in payload.get("payments") or []],
        )
