"""
Withdrawal balance manager.

Available referral balance is recomputed from the ledger on every call;
the cached users.referral_earnings column is never trusted here.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import REWARD_PER_POINT, to_money
from deeddraw.models.user import User
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository
from deeddraw.utils.exceptions import NotFoundError


@dataclass(frozen=True)
class WithdrawalBalance:
    """Referral earnings position of a user."""

    total_earnings: Decimal
    total_withdrawn: Decimal
    available: Decimal


class WithdrawalBalanceManager:
    """Computes withdrawable referral balance."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal balance manager.

        Args:
            session: Database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.transaction_repo = TransactionRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)

    async def available_balance(self, user_id: int) -> WithdrawalBalance:
        """
        Get user's withdrawable balance.

        Args:
            user_id: User ID

        Returns:
            WithdrawalBalance

        Raises:
            NotFoundError: If user doesn't exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", details={"user_id": user_id})
        return await self.balance_for(user)

    async def balance_for(self, user: User) -> WithdrawalBalance:
        """
        Compute balance of an already loaded (possibly locked) user.

        total_earnings: reward per point over verified transactions that
        used the user's code. total_withdrawn: pending and approved
        withdrawals, so rejected ones release their reservation.
        """
        referred_points = await self.transaction_repo.sum_referred_verified_points(
            user.referral_code
        )
        total_earnings = to_money(Decimal(referred_points) * REWARD_PER_POINT)
        total_withdrawn = await self.withdrawal_repo.sum_reserved(user.id)
        return WithdrawalBalance(
            total_earnings=total_earnings,
            total_withdrawn=total_withdrawn,
            available=total_earnings - total_withdrawn,
        )
