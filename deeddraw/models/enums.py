"""
Model enumerations.

Status values are stored as plain strings (enum .value) in the database.
"""

from enum import Enum


class TransactionStatus(str, Enum):
    """Lifecycle of a registered entry."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"
    REFUNDED = "refunded"  # administrative only


class ReferralStatus(str, Enum):
    """
    Lifecycle of a referral reward.

    pending: awaiting transaction verification
    approved: transaction verified, reward earned
    paid: reward settled outside the withdrawal flow
    cancelled: transaction rejected
    """

    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"
    CANCELLED = "cancelled"


class ReferralPaymentMethod(str, Enum):
    """How a referral reward was settled."""

    CREDIT = "credit"
    ETRANSFER = "etransfer"
    MANUAL = "manual"


class WithdrawalStatus(str, Enum):
    """Lifecycle of a withdrawal request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserCategory(str, Enum):
    """Participant professional category."""

    AGENT_BROKER = "agent-broker"
    DEVELOPER = "developer"
    SALES_MARKETING = "sales-marketing"
    MORTGAGE_BROKER = "mortgage-broker"


# Statuses of withdrawals that reserve referral earnings
RESERVING_WITHDRAWAL_STATUSES = (
    WithdrawalStatus.PENDING.value,
    WithdrawalStatus.APPROVED.value,
)
