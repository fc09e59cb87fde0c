"""Category and bank management on top of the typed repositories."""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from ..domain.identity import Principal
from ..domain.repositories.reference import ReferenceRepository
from ..exceptions import EntityNotFoundError, FieldError, ValidationError
from ..logging_config import get_logger
from ..models.reference import Bank, DebtCategory
from .permissions import require_admin, require_manage, require_principal

logger = get_logger("reference_data")

RowT = TypeVar("RowT", DebtCategory, Bank)

MAX_NAME_LENGTH = 80


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError([FieldError("name", "Name is required")])
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(
            [FieldError("name", f"Name must be at most {MAX_NAME_LENGTH} characters")]
        )
    return cleaned


class ReferenceDataService(Generic[RowT]):
    """List, create, rename and delete categories or banks for a principal."""

    def __init__(self, repo: ReferenceRepository[RowT], *, kind: str):
        self.repo = repo
        self.kind = kind

    def list_visible(self, principal: Optional[Principal]) -> list[RowT]:
        principal = require_principal(principal)
        return self.repo.list_visible(user_id=principal.user_id)

    def create(self, principal: Optional[Principal], name: str, *, is_system: bool = False) -> RowT:
        """Create a row; shared system rows need the admin role."""

        principal = require_admin(principal) if is_system else require_principal(principal)
        row = self.repo.create(
            _clean_name(name),
            user_id=None if is_system else principal.user_id,
            is_system=is_system,
        )
        logger.info(
            "Reference row created",
            extra={"kind": self.kind, "row_id": row.id, "is_system": is_system},
        )
        return row

    def _get(self, item_id: str) -> RowT:
        row = self.repo.get_by_id(item_id)
        if row is None:
            raise EntityNotFoundError(f"{self.kind} {item_id} not found")
        return row

    def rename(self, principal: Optional[Principal], item_id: str, name: str) -> RowT:
        require_manage(principal, self._get(item_id))
        return self.repo.rename(item_id, _clean_name(name))

    def delete(self, principal: Optional[Principal], item_id: str) -> None:
        require_manage(principal, self._get(item_id))
        self.repo.delete(item_id)
        logger.info("Reference row deleted", extra={"kind": self.kind, "row_id": item_id})
