"""
Withdrawal request handling.

Creates pending withdrawal requests against referral earnings. The owner's
row is locked NOWAIT so concurrent requests cannot both spend the same
balance; lock conflicts are retried with exponential backoff.
"""

import asyncio
import random
from typing import Any

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import MIN_WITHDRAWAL_AMOUNT
from deeddraw.models.enums import WithdrawalStatus
from deeddraw.models.withdrawal import Withdrawal
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository
from deeddraw.services.base_service import BaseService
from deeddraw.services.withdrawal.balance_manager import WithdrawalBalanceManager
from deeddraw.utils.exceptions import (
    BelowMinimum,
    InsufficientBalance,
    LedgerError,
    LockConflictError,
    NotFoundError,
)
from deeddraw.validators.inputs import WithdrawalRequestInput, parse_input


# Maximum retries for lock conflicts
MAX_RETRIES = 3
RETRY_DELAY_BASE = 1.0  # Base delay in seconds
LOCK_NOT_AVAILABLE = "55P03"


def is_lock_conflict(error: DBAPIError) -> bool:
    """
    Check if a database error is a NOWAIT lock failure.

    asyncpg surfaces lock_not_available as a generic DBAPIError, psycopg as
    OperationalError; both carry SQLSTATE 55P03.
    """
    sqlstate = getattr(error.orig, "sqlstate", None) or getattr(
        error.orig, "pgcode", None
    )
    if sqlstate == LOCK_NOT_AVAILABLE:
        return True
    error_str = str(error).lower()
    return "could not obtain lock" in error_str or "lock_not_available" in error_str


class WithdrawalRequestHandler(BaseService):
    """Handles withdrawal request creation and validation."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal request handler."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    async def request_withdrawal(
        self, data: WithdrawalRequestInput | dict[str, Any]
    ) -> Withdrawal:
        """
        Request a payout of referral earnings.

        Args:
            data: Withdrawal request input

        Returns:
            Pending withdrawal

        Raises:
            ValidationError: Invalid input (e.g. email)
            BelowMinimum: Amount below the minimum withdrawal
            NotFoundError: Unknown user
            InsufficientBalance: Amount exceeds available balance
            LockConflictError: Owner row stayed locked through all retries
        """
        data = parse_input(WithdrawalRequestInput, data)
        if data.amount < MIN_WITHDRAWAL_AMOUNT:
            raise BelowMinimum(data.amount, MIN_WITHDRAWAL_AMOUNT)

        for attempt in range(MAX_RETRIES):
            try:
                withdrawal = await self._create_withdrawal(data)
                await self.commit()
            except DBAPIError as e:
                await self.rollback()
                if not is_lock_conflict(e):
                    self.logger.error(f"Database error in withdrawal: {e}")
                    raise
                if attempt == MAX_RETRIES - 1:
                    raise LockConflictError(
                        "Withdrawal system is busy, try again in a few seconds",
                        details={"user_id": data.user_id},
                    ) from e
                delay = RETRY_DELAY_BASE * (2 ** attempt) + random.uniform(0, 0.5)
                self.logger.warning(
                    "Lock conflict on withdrawal request, retrying",
                    extra={"user_id": data.user_id, "attempt": attempt + 1},
                )
                await asyncio.sleep(delay)
                continue
            except LedgerError:
                await self.rollback()
                raise

            self.logger.info(
                "Withdrawal request created",
                extra={
                    "withdrawal_id": withdrawal.id,
                    "user_id": data.user_id,
                    "amount": str(withdrawal.amount),
                },
            )
            return withdrawal

        raise LockConflictError("Withdrawal system is busy")

    async def _create_withdrawal(self, data: WithdrawalRequestInput) -> Withdrawal:
        user = await self.user_repo.get_by_id_for_update(data.user_id, nowait=True)
        if user is None:
            raise NotFoundError("User not found", details={"user_id": data.user_id})

        balance = await self.balance_manager.balance_for(user)
        if data.amount > balance.available:
            self.logger.warning(
                "Insufficient balance for withdrawal",
                extra={
                    "user_id": user.id,
                    "available": str(balance.available),
                    "requested": str(data.amount),
                },
            )
            raise InsufficientBalance(data.amount, balance.available)

        return await self.withdrawal_repo.create(
            user_id=user.id,
            amount=data.amount,
            email=data.email,
            status=WithdrawalStatus.PENDING.value,
        )
