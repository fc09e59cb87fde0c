"""Tests for debt and payment input validation."""

from __future__ import annotations

from datetime import date

import pytest

from debttracker.exceptions import ValidationError
from debttracker.services.settings import AppSettings, EnabledFeatures, RequiredFields
from debttracker.services.validation import validate_debt_input, validate_payment_input


def _debt_input(**overrides):
    data = {
        "name": "Car loan",
        "amount": "100",
        "debt_type": "other",
        "due_date": "2024-01-15",
        "installments": "3",
        "description": "Monthly car payments",
    }
    data.update(overrides)
    return data


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings()


class TestValidateDebtInput:
    def test_valid_input_builds_draft(self, settings):
        draft = validate_debt_input(_debt_input(), settings)

        assert draft.name == "Car loan"
        assert draft.amount == 100.0
        assert draft.due_date == date(2024, 1, 15)
        assert draft.installments == 3
        assert draft.installment_amount == 34
        assert draft.status == "pending"

    def test_draft_to_model_has_no_owner_yet(self, settings):
        debt = validate_debt_input(_debt_input(), settings).to_model()

        assert debt.user_id is None
        assert debt.id
        assert debt.installment_amount == 34

    def test_amount_with_thousands_separators(self, settings):
        draft = validate_debt_input(_debt_input(amount="50,000,000", installments=12), settings)
        assert draft.amount == 50_000_000
        assert draft.installment_amount == 4_166_667

    def test_installments_default_to_one(self, settings):
        data = _debt_input()
        del data["installments"]

        draft = validate_debt_input(data, settings)

        assert draft.installments == 1
        assert draft.installment_amount == 100

    def test_debt_type_defaults_to_other(self, settings):
        draft = validate_debt_input(_debt_input(debt_type=""), settings)
        assert draft.debt_type == "other"

    def test_missing_required_fields_reported_in_form_order(self, settings):
        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input({"name": "", "amount": "", "description": ""}, settings)

        fields = [error.field for error in exc_info.value.errors]
        assert fields == ["name", "amount", "due_date", "description"]
        assert "Amount is required" in exc_info.value.messages
        assert "Due date is required" in exc_info.value.messages

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "nan", True, "1e400", "1e-400"])
    def test_amount_must_be_positive_number(self, settings, amount):
        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input(_debt_input(amount=amount), settings)

        assert exc_info.value.messages == ["Amount must be a positive number"]

    @pytest.mark.parametrize("installments", ["0", "-1", "2.5", "x"])
    def test_installments_must_be_positive_integer(self, settings, installments):
        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input(_debt_input(installments=installments), settings)

        assert [error.field for error in exc_info.value.errors] == ["installments"]

    def test_unknown_debt_type_rejected(self, settings):
        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input(_debt_input(debt_type="mortgage"), settings)
        assert exc_info.value.errors[0].field == "debt_type"

    def test_invalid_due_date_rejected(self, settings):
        with pytest.raises(ValidationError, match="valid date"):
            validate_debt_input(_debt_input(due_date="15/01/2024"), settings)

    def test_due_date_accepts_date_objects(self, settings):
        draft = validate_debt_input(_debt_input(due_date=date(2024, 3, 1)), settings)
        assert draft.due_date == date(2024, 3, 1)

    def test_min_due_date_enforced(self, settings):
        with pytest.raises(ValidationError, match="cannot be before 2024-01-01"):
            validate_debt_input(
                _debt_input(due_date="2023-12-31"), settings, min_due_date=date(2024, 1, 1)
            )

    def test_min_due_date_is_inclusive(self, settings):
        draft = validate_debt_input(
            _debt_input(due_date="2024-01-01"), settings, min_due_date=date(2024, 1, 1)
        )
        assert draft.due_date == date(2024, 1, 1)

    def test_optional_name_when_not_required(self):
        settings = AppSettings(required_fields=RequiredFields(name=False))
        draft = validate_debt_input(_debt_input(name="  "), settings)
        assert draft.name is None

    def test_description_optional_when_not_required(self):
        settings = AppSettings(required_fields=RequiredFields(description=False))
        draft = validate_debt_input(_debt_input(description=""), settings)
        assert draft.description == ""

    def test_category_required_when_configured(self):
        settings = AppSettings(required_fields=RequiredFields(category=True))

        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input(_debt_input(), settings)
        assert exc_info.value.messages == ["Category is required"]

        draft = validate_debt_input(_debt_input(category_id="cat-1"), settings)
        assert draft.category_id == "cat-1"

    def test_category_dropped_when_feature_disabled(self):
        settings = AppSettings(
            required_fields=RequiredFields(category=True),
            enabled_features=EnabledFeatures(categories=False),
        )

        draft = validate_debt_input(_debt_input(category_id="cat-1"), settings)

        assert draft.category_id is None

    def test_bank_required_only_for_bank_loans(self):
        settings = AppSettings(required_fields=RequiredFields(bank=True))

        other = validate_debt_input(_debt_input(debt_type="other"), settings)
        assert other.bank_id is None

        with pytest.raises(ValidationError) as exc_info:
            validate_debt_input(_debt_input(debt_type="bank_loan"), settings)
        assert exc_info.value.messages == ["Bank is required"]

    def test_bank_ignored_for_non_bank_loans(self, settings):
        draft = validate_debt_input(_debt_input(debt_type="friend_loan", bank_id="bank-1"), settings)
        assert draft.bank_id is None

    def test_bank_kept_for_bank_loans(self, settings):
        draft = validate_debt_input(_debt_input(debt_type="bank_loan", bank_id="bank-1"), settings)
        assert draft.bank_id == "bank-1"

    def test_bank_not_required_when_banks_disabled(self):
        settings = AppSettings(
            required_fields=RequiredFields(bank=True),
            enabled_features=EnabledFeatures(banks=False),
        )

        draft = validate_debt_input(_debt_input(debt_type="bank_loan"), settings)

        assert draft.bank_id is None


class TestValidatePaymentInput:
    def test_valid_payment(self):
        draft = validate_payment_input(
            {"debt_id": "debt-1", "payment_amount": "34", "payment_date": "2024-02-01"}
        )

        assert draft.debt_id == "debt-1"
        assert draft.payment_amount == 34.0
        assert draft.payment_date == date(2024, 2, 1)

    def test_payment_date_defaults_to_today(self):
        draft = validate_payment_input(
            {"debt_id": "debt-1", "payment_amount": 10}, today=date(2024, 5, 5)
        )
        assert draft.payment_date == date(2024, 5, 5)

    def test_missing_fields_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payment_input({"payment_amount": "0", "payment_date": "not-a-date"})

        assert [error.field for error in exc_info.value.errors] == [
            "debt_id",
            "payment_amount",
            "payment_date",
        ]

    def test_to_model_carries_remaining_balance(self):
        draft = validate_payment_input({"debt_id": "debt-1", "payment_amount": "1,200,000"})

        payment = draft.to_model(remaining_balance=-200_000)

        assert payment.payment_amount == 1_200_000
        assert payment.remaining_balance == -200_000
        assert payment.debt_id == "debt-1"

    @pytest.mark.parametrize("amount", ["1e400", "inf", "1e-400"])
    def test_payment_amount_must_fit_a_float(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            validate_payment_input({"debt_id": "debt-1", "payment_amount": amount})

        assert exc_info.value.messages == ["Payment amount must be a positive number"]
