"""
Tests for input validation.

Covers:
- Email validation and canonical (duplicate-detection) form
- Phone normalization
- Operation input models surfacing as ValidationError
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from deeddraw.config.business_constants import (
    MAX_MONEY_AMOUNT,
    MAX_POINTS_PER_TRANSACTION,
    calculate_base_amount,
)
from deeddraw.models.enums import UserCategory
from deeddraw.utils.exceptions import ValidationError
from deeddraw.validators import (
    RegisterUserInput,
    SubmitTransactionInput,
    WithdrawalRequestInput,
    parse_input,
)
from deeddraw.validators.unified import (
    canonical_email,
    normalize_email,
    normalize_phone,
    validate_email,
)


def submission(**overrides):
    data = {
        "user_id": 1,
        "points": 2,
        "transaction_date": datetime(2025, 3, 1, tzinfo=UTC),
        "transaction_amount": "750000",
        "etransfer_reference": "CA1234XYZ",
        "etransfer_email": "Payer@Example.com",
        "etransfer_date": datetime(2025, 3, 2, tzinfo=UTC),
    }
    data.update(overrides)
    return data


class TestEmailValidation:
    """Test email helpers."""

    def test_valid(self):
        assert validate_email("user@example.com") == (True, None)

    @pytest.mark.parametrize(
        "email", ["", "invalid", "a@b@c.com", "user@localhost", "user@.com"]
    )
    def test_invalid(self, email):
        """Malformed emails are rejected with a message."""
        is_valid, error = validate_email(email)
        assert is_valid is False
        assert error

    def test_normalize_lowercases(self):
        """Stored form is trimmed lowercase."""
        assert normalize_email("  John.Doe@Example.COM ") == "john.doe@example.com"

    def test_canonical_strips_gmail_dots(self):
        """Gmail ignores dots in the local part."""
        assert canonical_email("D1.Fashad@gmail.com") == "d1fashad@gmail.com"
        assert canonical_email("d.1.f@googlemail.com") == "d1f@googlemail.com"

    def test_canonical_keeps_other_dots(self):
        """Other providers treat dots as significant."""
        assert canonical_email("john.doe@example.com") == "john.doe@example.com"

    def test_canonical_invalid(self):
        with pytest.raises(ValueError):
            canonical_email("not-an-email")


class TestPhoneNormalization:
    """Test phone normalization."""

    def test_formatting_removed(self):
        assert normalize_phone("(416) 555-0199") == "4165550199"

    def test_too_short(self):
        with pytest.raises(ValueError):
            normalize_phone("555-0199")


class TestSubmitTransactionInput:
    """Test submission input model."""

    def test_valid_submission(self):
        """Valid input is normalized."""
        data = parse_input(SubmitTransactionInput, submission(referral_code_used="  "))

        assert data.transaction_amount == Decimal("750000")
        assert data.etransfer_email == "payer@example.com"
        assert data.referral_code_used is None

    def test_deal_below_minimum(self):
        """Deals under $500,000 do not qualify."""
        with pytest.raises(ValidationError) as exc_info:
            parse_input(
                SubmitTransactionInput, submission(transaction_amount="499999.99")
            )

        assert exc_info.value.message.startswith("transaction_amount:")
        assert "500,000" in exc_info.value.message

    def test_zero_points(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_input(SubmitTransactionInput, submission(points=0))

        assert exc_info.value.details["errors"][0]["field"] == "points"

    def test_points_fit_price_column(self):
        """The largest allowed purchase still fits DECIMAL(12, 2)."""
        data = parse_input(
            SubmitTransactionInput, submission(points=MAX_POINTS_PER_TRANSACTION)
        )
        assert calculate_base_amount(data.points) <= MAX_MONEY_AMOUNT

        with pytest.raises(ValidationError) as exc_info:
            parse_input(
                SubmitTransactionInput,
                submission(points=MAX_POINTS_PER_TRANSACTION + 1),
            )

        assert exc_info.value.details["errors"][0]["field"] == "points"

    def test_deal_amount_too_large(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_input(
                SubmitTransactionInput,
                submission(transaction_amount="10000000000000"),
            )

        assert exc_info.value.details["errors"][0]["field"] == "transaction_amount"

    def test_missing_reference(self):
        """Missing required field."""
        data = submission()
        del data["etransfer_reference"]

        with pytest.raises(ValidationError):
            parse_input(SubmitTransactionInput, data)

    def test_bad_etransfer_email(self):
        with pytest.raises(ValidationError):
            parse_input(SubmitTransactionInput, submission(etransfer_email="nope"))

    def test_model_instance_passes_through(self):
        """Already validated models are returned unchanged."""
        data = SubmitTransactionInput.model_validate(submission())
        assert parse_input(SubmitTransactionInput, data) is data


class TestWithdrawalRequestInput:
    """Test withdrawal input model."""

    def test_valid(self):
        data = parse_input(
            WithdrawalRequestInput,
            {"user_id": 1, "amount": "150.00", "email": "Me@Example.com"},
        )

        assert data.amount == Decimal("150.00")
        assert data.email == "me@example.com"

    def test_sub_cent_amount(self):
        """Amounts are limited to cents."""
        with pytest.raises(ValidationError):
            parse_input(
                WithdrawalRequestInput,
                {"user_id": 1, "amount": "150.001", "email": "me@example.com"},
            )


class TestRegisterUserInput:
    """Test registration input model."""

    def test_valid(self):
        data = parse_input(
            RegisterUserInput,
            {
                "first_name": " Alice ",
                "last_name": "Bobson",
                "email": "Alice@Example.com",
                "phone": "416-555-0199",
                "category": "agent-broker",
                "company": "",
            },
        )

        assert data.first_name == "Alice"
        assert data.email == "alice@example.com"
        assert data.phone == "4165550199"
        assert data.category is UserCategory.AGENT_BROKER
        assert data.company is None

    def test_unknown_category(self):
        with pytest.raises(ValidationError):
            parse_input(
                RegisterUserInput,
                {
                    "first_name": "Alice",
                    "last_name": "Bobson",
                    "email": "alice@example.com",
                    "category": "astronaut",
                },
            )
