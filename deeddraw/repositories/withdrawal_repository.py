"""
Withdrawal repository.

Data access layer for Withdrawal model.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import to_money
from deeddraw.models.enums import RESERVING_WITHDRAWAL_STATUSES
from deeddraw.models.withdrawal import Withdrawal
from deeddraw.repositories.base import BaseRepository


class WithdrawalRepository(BaseRepository[Withdrawal]):
    """Withdrawal repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal repository."""
        super().__init__(Withdrawal, session)

    async def sum_reserved(self, user_id: int) -> Decimal:
        """
        Sum amounts of user's pending and approved withdrawals.

        Rejected withdrawals release their reservation by dropping out of
        this sum.

        Args:
            user_id: User ID

        Returns:
            Total reserved amount
        """
        stmt = select(func.sum(Withdrawal.amount)).where(
            Withdrawal.user_id == user_id,
            Withdrawal.status.in_(RESERVING_WITHDRAWAL_STATUSES),
        )
        result = await self.session.execute(stmt)
        return to_money(result.scalar())

    async def get_by_user(self, user_id: int) -> list[Withdrawal]:
        """Get user's withdrawals newest first."""
        stmt = (
            select(Withdrawal)
            .where(Withdrawal.user_id == user_id)
            .order_by(Withdrawal.created_at.desc(), Withdrawal.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_filtered(
        self, status: str | None = None, limit: int | None = None
    ) -> list[Withdrawal]:
        """
        Admin listing newest first.

        Args:
            status: Optional status filter
            limit: Max number of results

        Returns:
            List of withdrawals
        """
        stmt = select(Withdrawal)
        if status:
            stmt = stmt.where(Withdrawal.status == status)
        stmt = stmt.order_by(Withdrawal.created_at.desc(), Withdrawal.id.desc())
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
