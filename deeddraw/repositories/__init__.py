"""
Repositories.

Data access layer: one repository per model, none of them commit.
"""

from deeddraw.repositories.base import BaseRepository
from deeddraw.repositories.certificate_sequence_repository import (
    CertificateSequenceRepository,
)
from deeddraw.repositories.referral_repository import ReferralRepository
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository


__all__ = [
    "BaseRepository",
    "CertificateSequenceRepository",
    "ReferralRepository",
    "TransactionRepository",
    "UserRepository",
    "WithdrawalRepository",
]
