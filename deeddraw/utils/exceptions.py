"""
Ledger exceptions.

Every failure the core reports to its caller is a LedgerError subclass with a
stable error_code and safe details. None of them is retried by the core.
"""

from decimal import Decimal
from typing import Any


class LedgerError(Exception):
    """Base class for all ledger failures."""

    error_code = "ledger_error"

    def __init__(
        self, message: str, *, details: dict[str, Any] | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        """Serializable representation for the transport layer."""
        payload: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            payload["details"] = {
                key: str(value) if isinstance(value, Decimal) else value
                for key, value in self.details.items()
            }
        return payload


class ValidationError(LedgerError):
    """Malformed or out-of-range input, rejected before any persistence."""

    error_code = "validation_error"


class NotFoundError(LedgerError):
    """Referenced entity does not exist."""

    error_code = "not_found"


class DuplicateUserError(LedgerError):
    """A user with the same normalized email already exists."""

    error_code = "duplicate_user"


class InvalidReferralCode(LedgerError):
    """Referral code does not resolve to a user."""

    error_code = "invalid_referral_code"

    def __init__(self, code: str) -> None:
        super().__init__("Invalid referral code", details={"code": code})
        self.code = code


class SelfReferralNotAllowed(LedgerError):
    """Referral code resolves to the submitter."""

    error_code = "self_referral_not_allowed"

    def __init__(self, code: str) -> None:
        super().__init__(
            "You cannot use your own referral code", details={"code": code}
        )
        self.code = code


class InvalidStateTransition(LedgerError):
    """Transition attempted from a non-eligible state."""

    error_code = "invalid_state_transition"

    def __init__(self, entity: str, entity_id: int, current_status: str) -> None:
        super().__init__(
            f"{entity} is already {current_status}",
            details={
                "entity": entity,
                "id": entity_id,
                "current_status": current_status,
            },
        )
        self.entity = entity
        self.entity_id = entity_id
        self.current_status = current_status


class BelowMinimum(LedgerError):
    """Withdrawal amount below the minimum."""

    error_code = "below_minimum"

    def __init__(self, amount: Decimal, minimum: Decimal) -> None:
        super().__init__(
            f"Minimum withdrawal amount is ${minimum}",
            details={"amount": amount, "minimum": minimum},
        )
        self.amount = amount
        self.minimum = minimum


class InsufficientBalance(LedgerError):
    """Withdrawal exceeds available referral earnings."""

    error_code = "insufficient_balance"

    def __init__(self, requested: Decimal, available: Decimal) -> None:
        super().__init__(
            f"Insufficient balance. Available: ${available:.2f}",
            details={"requested": requested, "available": available},
        )
        self.requested = requested
        self.available = available


class SequenceExhausted(LedgerError):
    """
    Certificate sequence for a year ran out of padded width.

    Fatal: requires a change of numbering width policy, never retried.
    """

    error_code = "sequence_exhausted"

    def __init__(self, year: int, maximum: int) -> None:
        super().__init__(
            f"Certificate sequence for {year} exhausted (max {maximum})",
            details={"year": year, "maximum": maximum},
        )
        self.year = year
        self.maximum = maximum


class LockConflictError(LedgerError):
    """Row lock could not be obtained within the retry budget."""

    error_code = "lock_conflict"
