"""
Transaction services package.

- lifecycle_handler: submit / approve / reject state machine
- query_service: participant and admin listings
"""

from deeddraw.services.transaction.lifecycle_handler import (
    TransactionLifecycleHandler,
)
from deeddraw.services.transaction.query_service import TransactionQueryService


__all__ = [
    "TransactionLifecycleHandler",
    "TransactionQueryService",
]
