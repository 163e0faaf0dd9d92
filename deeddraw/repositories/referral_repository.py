"""
Referral repository.

Data access layer for Referral model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.referral import Referral
from deeddraw.repositories.base import BaseRepository


class ReferralRepository(BaseRepository[Referral]):
    """Referral repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral repository."""
        super().__init__(Referral, session)

    async def get_by_transaction_id(
        self, transaction_id: int, for_update: bool = False
    ) -> Referral | None:
        """
        Get the referral attached to a transaction.

        Args:
            transaction_id: Transaction ID
            for_update: Lock the row until commit

        Returns:
            Referral or None when no code was used
        """
        stmt = select(Referral).where(Referral.transaction_id == transaction_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_referrer(
        self, referrer_id: int, status: str | None = None
    ) -> list[Referral]:
        """
        Get referrals earned by a referrer, newest first.

        Args:
            referrer_id: Referrer user ID
            status: Optional status filter

        Returns:
            List of referrals
        """
        stmt = select(Referral).where(Referral.referrer_id == referrer_id)
        if status:
            stmt = stmt.where(Referral.status == status)
        stmt = stmt.order_by(Referral.created_at.desc(), Referral.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
