"""
Input models for ledger operations.

Every inbound operation is validated here before any domain logic or
persistence runs. pydantic failures surface as the ledger's ValidationError.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from deeddraw.config.business_constants import (
    MAX_POINTS_PER_TRANSACTION,
    MAX_TRANSACTION_AMOUNT,
    MIN_TRANSACTION_AMOUNT,
)
from deeddraw.models.enums import UserCategory
from deeddraw.utils.exceptions import ValidationError
from deeddraw.validators.unified import normalize_email, normalize_phone

InputModel = TypeVar("InputModel", bound=BaseModel)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SubmitTransactionInput(BaseModel):
    """Registration of a real-estate deal as a draw entry."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    user_id: int = Field(..., ge=1, description="Submitting user")
    points: int = Field(
        ..., ge=1, le=MAX_POINTS_PER_TRANSACTION, description="Points purchased"
    )
    transaction_date: datetime = Field(..., description="Date of the real-estate deal")
    transaction_amount: Decimal = Field(
        ..., le=MAX_TRANSACTION_AMOUNT, description="Deal amount (CAD)"
    )
    etransfer_reference: str = Field(..., min_length=1, max_length=255)
    etransfer_email: str = Field(..., description="Sender of the e-transfer")
    etransfer_date: datetime = Field(..., description="When the e-transfer was sent")
    referral_code_used: str | None = Field(default=None, max_length=20)

    @field_validator("transaction_amount")
    @classmethod
    def validate_transaction_amount(cls, v: Decimal) -> Decimal:
        """Only deals of at least $500,000 qualify."""
        if v < MIN_TRANSACTION_AMOUNT:
            raise ValueError(
                f"Transaction amount must be at least ${MIN_TRANSACTION_AMOUNT:,}"
            )
        return v

    @field_validator("etransfer_email")
    @classmethod
    def validate_etransfer_email(cls, v: str) -> str:
        """E-transfer sender email."""
        return normalize_email(v)

    @field_validator("referral_code_used", mode="before")
    @classmethod
    def blank_referral_code(cls, v: Any) -> Any:
        """Empty referral code means no referral."""
        return _blank_to_none(v)


class WithdrawalRequestInput(BaseModel):
    """Request to pay out referral earnings."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    user_id: int = Field(..., ge=1)
    amount: Decimal = Field(..., max_digits=12, decimal_places=2)
    email: str = Field(..., description="Destination of the e-transfer")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Destination email."""
        return normalize_email(v)


class RegisterUserInput(BaseModel):
    """New participant registration."""

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str
    phone: str | None = None
    category: UserCategory
    company: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=50)
    referred_by: str | None = Field(default=None, max_length=20)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Participant email."""
        return normalize_email(v)

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v: Any) -> Any:
        """Optional phone, stored without formatting."""
        v = _blank_to_none(v)
        if v is None:
            return None
        return normalize_phone(v)

    @field_validator("company", "city", "province", "referred_by", mode="before")
    @classmethod
    def blank_optional(cls, v: Any) -> Any:
        """Empty optional strings are stored as NULL."""
        return _blank_to_none(v)


def parse_input(
    model: type[InputModel], data: InputModel | dict[str, Any]
) -> InputModel:
    """
    Validate raw operation input.

    Args:
        model: Input model class
        data: Already-built model or raw mapping

    Returns:
        Validated model instance

    Raises:
        ValidationError: If any field is missing or invalid
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in error["loc"]),
                "message": error["msg"].removeprefix("Value error, "),
            }
            for error in e.errors()
        ]
        first = errors[0]
        raise ValidationError(
            f"{first['field']}: {first['message']}",
            details={"errors": errors},
        ) from e
