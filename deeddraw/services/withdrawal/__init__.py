"""
Withdrawal services package.

- balance_manager: ledger-recomputed referral balance
- request_handler: creation of withdrawal requests
- lifecycle_handler: admin approve / reject
- query_service: listings
"""

from deeddraw.services.withdrawal.balance_manager import (
    WithdrawalBalance,
    WithdrawalBalanceManager,
)
from deeddraw.services.withdrawal.lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from deeddraw.services.withdrawal.query_service import WithdrawalQueryService
from deeddraw.services.withdrawal.request_handler import WithdrawalRequestHandler


__all__ = [
    "WithdrawalBalance",
    "WithdrawalBalanceManager",
    "WithdrawalLifecycleHandler",
    "WithdrawalQueryService",
    "WithdrawalRequestHandler",
]
