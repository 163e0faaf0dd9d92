"""
User statistics functionality.

Participant dashboard figures, recomputed from the ledger.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import REWARD_PER_POINT, to_money
from deeddraw.models.enums import TransactionStatus
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.base_service import BaseService
from deeddraw.utils.exceptions import NotFoundError


class UserStatisticsService(BaseService):
    """Provides per-user statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user statistics service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.transaction_repo = TransactionRepository(session)

    async def get_user_stats(self, user_id: int) -> dict:
        """
        Get user statistics.

        Args:
            user_id: User ID

        Returns:
            Dict with total_points, pending_points, total_entries,
            pending_entries, total_amount_paid, completed_referrals,
            referral_rewards_earned

        Raises:
            NotFoundError: If user doesn't exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", details={"user_id": user_id})

        verified = TransactionStatus.VERIFIED.value
        pending = TransactionStatus.PENDING.value

        referred_points = await self.transaction_repo.sum_referred_verified_points(
            user.referral_code
        )

        return {
            "total_points": await self.transaction_repo.sum_verified_points(user_id),
            "pending_points": await self.transaction_repo.sum_points_by_status(
                user_id, pending
            ),
            "total_entries": await self.transaction_repo.count(
                user_id=user_id, status=verified
            ),
            "pending_entries": await self.transaction_repo.count(
                user_id=user_id, status=pending
            ),
            "total_amount_paid": await self.transaction_repo.sum_verified_amount(
                user_id
            ),
            "completed_referrals": await self.transaction_repo.count_referred_verified(
                user.referral_code
            ),
            "referral_rewards_earned": to_money(
                Decimal(referred_points) * REWARD_PER_POINT
            ),
        }
