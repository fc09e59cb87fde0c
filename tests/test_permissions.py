"""Tests for the authorization policy, reference data and role management."""

from __future__ import annotations

import pytest

from debttracker.domain.identity import Principal, StaticIdentityProvider
from debttracker.exceptions import (
    AuthenticationRequiredError,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from debttracker.models import Bank, DebtCategory, UserRole
from debttracker.services.auth import list_user_roles, resolve_principal, set_role
from debttracker.services.permissions import can_manage, require_admin, require_manage
from debttracker.services.reference_data import ReferenceDataService
from tests.helpers import make_debt


@pytest.fixture
def categories(category_repo) -> ReferenceDataService:
    return ReferenceDataService(category_repo, kind="category")


@pytest.fixture
def banks(bank_repo) -> ReferenceDataService:
    return ReferenceDataService(bank_repo, kind="bank")


class TestCanManage:
    def test_owner_can_manage_own_rows(self, principal):
        assert can_manage(principal, make_debt(user_id=principal.user_id))
        assert can_manage(principal, DebtCategory(name="Mine", user_id=principal.user_id))

    def test_other_users_rows_denied(self, principal, other_principal):
        assert not can_manage(principal, make_debt(user_id=other_principal.user_id))
        assert not can_manage(principal, Bank(name="Theirs", user_id=other_principal.user_id))

    def test_system_rows_need_admin(self, principal, admin_principal):
        shared = DebtCategory(name="Housing", is_system=True)

        assert not can_manage(principal, shared)
        assert can_manage(admin_principal, shared)

    def test_role_rows_need_admin(self, principal, admin_principal):
        own_role = UserRole(user_id=principal.user_id, role="user")

        assert not can_manage(principal, own_role)
        assert can_manage(admin_principal, own_role)

    def test_admin_manages_everything(self, admin_principal, other_principal):
        assert can_manage(admin_principal, make_debt(user_id=other_principal.user_id))

    def test_signed_out_manages_nothing(self):
        assert not can_manage(None, make_debt(user_id="anyone"))

    def test_require_manage_raises(self, principal, other_principal):
        with pytest.raises(PermissionDeniedError):
            require_manage(principal, make_debt(user_id=other_principal.user_id))
        with pytest.raises(AuthenticationRequiredError):
            require_manage(None, make_debt())

    def test_require_admin(self, principal, admin_principal):
        assert require_admin(admin_principal) is admin_principal
        with pytest.raises(PermissionDeniedError, match="Administrator"):
            require_admin(principal)


class TestReferenceDataService:
    def test_user_creates_private_row(self, categories, principal, other_principal):
        row = categories.create(principal, "  Rent  ")

        assert row.name == "Rent"
        assert row.user_id == principal.user_id
        assert not row.is_system
        assert [item.name for item in categories.list_visible(other_principal)] == []

    def test_admin_creates_shared_row(self, banks, admin_principal, principal):
        row = banks.create(admin_principal, "Melli", is_system=True)

        assert row.is_system
        assert row.user_id is None
        assert [item.name for item in banks.list_visible(principal)] == ["Melli"]

    def test_user_cannot_create_shared_row(self, banks, principal):
        with pytest.raises(PermissionDeniedError):
            banks.create(principal, "Melli", is_system=True)

    @pytest.mark.parametrize("name", ["", "   ", "x" * 81])
    def test_name_validated(self, categories, principal, name):
        with pytest.raises(ValidationError):
            categories.create(principal, name)

    def test_owner_renames_and_deletes(self, categories, principal):
        row = categories.create(principal, "Rent")

        assert categories.rename(principal, row.id, "Housing").name == "Housing"
        categories.delete(principal, row.id)

        assert categories.list_visible(principal) == []

    def test_other_user_cannot_touch_row(self, categories, principal, other_principal):
        row = categories.create(principal, "Rent")

        with pytest.raises(PermissionDeniedError):
            categories.rename(other_principal, row.id, "Mine now")
        with pytest.raises(PermissionDeniedError):
            categories.delete(other_principal, row.id)

    def test_user_cannot_delete_shared_row(self, banks, admin_principal, principal):
        row = banks.create(admin_principal, "Melli", is_system=True)

        with pytest.raises(PermissionDeniedError):
            banks.delete(principal, row.id)

        banks.delete(admin_principal, row.id)
        assert banks.list_visible(principal) == []

    def test_missing_row(self, categories, principal):
        with pytest.raises(EntityNotFoundError):
            categories.delete(principal, "missing")

    def test_list_requires_principal(self, categories):
        with pytest.raises(AuthenticationRequiredError):
            categories.list_visible(None)


class TestRoles:
    def test_first_sign_in_gets_default_role(self, identity, user_role_repo, principal):
        resolved = resolve_principal(identity, user_role_repo)

        assert resolved.user_id == principal.user_id
        assert resolved.role == "user"
        assert user_role_repo.get(principal.user_id).role == "user"

    def test_stored_admin_role_is_applied(self, user_role_repo):
        user_role_repo.create("boss", "admin")
        identity = StaticIdentityProvider(Principal(user_id="boss"))

        assert resolve_principal(identity, user_role_repo).is_admin

    def test_signed_out_resolves_to_none(self, user_role_repo):
        assert resolve_principal(StaticIdentityProvider(None), user_role_repo) is None
        assert user_role_repo.list_all() == []

    def test_admin_sets_role(self, admin_principal, user_role_repo):
        row = set_role(admin_principal, user_id="user-7", role=" ADMIN ", role_repo=user_role_repo)

        assert row.role == "admin"
        assert [item.user_id for item in list_user_roles(admin_principal, user_role_repo)] == [
            "user-7"
        ]

    def test_invalid_role_rejected(self, admin_principal, user_role_repo):
        with pytest.raises(ValueError, match="Invalid role"):
            set_role(admin_principal, user_id="user-7", role="owner", role_repo=user_role_repo)

    def test_non_admin_cannot_manage_roles(self, principal, user_role_repo):
        with pytest.raises(PermissionDeniedError):
            set_role(principal, user_id=principal.user_id, role="admin", role_repo=user_role_repo)
        with pytest.raises(PermissionDeniedError):
            list_user_roles(principal, user_role_repo)
