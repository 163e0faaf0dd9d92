"""Input validation and normalization."""

from deeddraw.validators.inputs import (
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
    validate_phone,
)


__all__ = [
    "RegisterUserInput",
    "SubmitTransactionInput",
    "WithdrawalRequestInput",
    "canonical_email",
    "normalize_email",
    "normalize_phone",
    "parse_input",
    "validate_email",
    "validate_phone",
]
