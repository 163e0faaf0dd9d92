"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from deeddraw.models.base import Base
from deeddraw.models.certificate_sequence import CertificateSequence
from deeddraw.models.enums import (
    ReferralPaymentMethod,
    ReferralStatus,
    TransactionStatus,
    UserCategory,
    WithdrawalStatus,
)
from deeddraw.models.referral import Referral
from deeddraw.models.transaction import Transaction
from deeddraw.models.user import User
from deeddraw.models.withdrawal import Withdrawal


__all__ = [
    "Base",
    "CertificateSequence",
    "Referral",
    "ReferralPaymentMethod",
    "ReferralStatus",
    "Transaction",
    "TransactionStatus",
    "User",
    "UserCategory",
    "Withdrawal",
    "WithdrawalStatus",
]
