"""
Transaction repository.

Data access layer for Transaction model, including the ledger aggregates
that every balance and report is recomputed from.
"""

from decimal import Decimal

from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import to_money
from deeddraw.models.enums import TransactionStatus
from deeddraw.models.transaction import Transaction
from deeddraw.repositories.base import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Transaction repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction repository."""
        super().__init__(Transaction, session)

    async def get_max_certificate_number(self, prefix: str) -> str | None:
        """
        Get highest certificate number starting with prefix.

        Sequence parts are zero padded, so lexicographic max is numeric max.

        Args:
            prefix: e.g. "DD-2025-"

        Returns:
            Highest certificate number or None
        """
        stmt = select(func.max(Transaction.certificate_number)).where(
            Transaction.certificate_number.like(f"{prefix}%")
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def get_by_user(
        self, user_id: int, status: str | None = None
    ) -> list[Transaction]:
        """
        Get user's transactions newest first.

        Args:
            user_id: Owner ID
            status: Optional status filter

        Returns:
            List of transactions
        """
        stmt = select(Transaction).where(Transaction.user_id == user_id)
        if status:
            stmt = stmt.where(Transaction.status == status)
        stmt = stmt.order_by(Transaction.created_at.desc(), Transaction.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_filtered(
        self,
        status: str | None = None,
        user_id: int | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Transaction], int]:
        """
        Admin listing with optional filters and pagination.

        Returns:
            Tuple of (transactions newest first, total_count)
        """
        conditions = []
        if status:
            conditions.append(Transaction.status == status)
        if user_id is not None:
            conditions.append(Transaction.user_id == user_id)

        count_stmt = select(func.count(Transaction.id)).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = (
            select(Transaction)
            .where(*conditions)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_recent(self, limit: int) -> list[Transaction]:
        """Get latest transactions regardless of status."""
        stmt = (
            select(Transaction)
            .order_by(Transaction.created_at.desc(), Transaction.id.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_status(self, status: str) -> int:
        """Count transactions in a status."""
        return await self.count(status=status)

    async def sum_verified_points(self, user_id: int | None = None) -> int:
        """
        Sum points over verified transactions.

        Args:
            user_id: Restrict to one owner, or None for the whole pool

        Returns:
            Total points
        """
        stmt = select(func.coalesce(func.sum(Transaction.points), 0)).where(
            Transaction.status == TransactionStatus.VERIFIED.value
        )
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def sum_verified_amount(self, user_id: int | None = None) -> Decimal:
        """Sum charged amount over verified transactions."""
        stmt = select(func.sum(Transaction.amount)).where(
            Transaction.status == TransactionStatus.VERIFIED.value
        )
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        result = await self.session.execute(stmt)
        return to_money(result.scalar())

    async def sum_points_by_status(self, user_id: int, status: str) -> int:
        """Sum points of user's transactions in a status."""
        stmt = select(func.coalesce(func.sum(Transaction.points), 0)).where(
            Transaction.user_id == user_id,
            Transaction.status == status,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def sum_referred_verified_points(self, referral_code: str) -> int:
        """
        Sum points of verified transactions that used a referral code.

        Args:
            referral_code: Referrer's code

        Returns:
            Total referred points
        """
        stmt = select(func.coalesce(func.sum(Transaction.points), 0)).where(
            Transaction.referral_code_used == referral_code,
            Transaction.status == TransactionStatus.VERIFIED.value,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)

    async def count_referred_verified(self, referral_code: str) -> int:
        """Count verified transactions that used a referral code."""
        return await self.count(
            referral_code_used=referral_code,
            status=TransactionStatus.VERIFIED.value,
        )

    async def count_distinct_verified_owners(self) -> int:
        """Count users with at least one verified transaction."""
        stmt = select(func.count(func.distinct(Transaction.user_id))).where(
            Transaction.status == TransactionStatus.VERIFIED.value
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def get_verified_certificates_by_user(
        self, user_ids: list[int]
    ) -> dict[int, list[str]]:
        """
        Map owners to certificate numbers of their verified transactions.

        Args:
            user_ids: Owners to include

        Returns:
            {user_id: [certificate_number, ...]} in issue order
        """
        if not user_ids:
            return {}
        stmt = (
            select(Transaction.user_id, Transaction.certificate_number)
            .where(
                Transaction.user_id.in_(user_ids),
                Transaction.status == TransactionStatus.VERIFIED.value,
            )
            .order_by(Transaction.certificate_number.asc())
        )
        result = await self.session.execute(stmt)
        certificates: dict[int, list[str]] = {}
        for user_id, certificate_number in result.all():
            certificates.setdefault(user_id, []).append(certificate_number)
        return certificates

    async def get_user_totals(
        self, user_ids: list[int]
    ) -> dict[int, tuple[int, Decimal, int]]:
        """
        Ledger totals per owner.

        Args:
            user_ids: Owners to include

        Returns:
            {user_id: (verified_points, verified_amount, transaction_count)}
        """
        if not user_ids:
            return {}
        verified = Transaction.status == TransactionStatus.VERIFIED.value
        stmt = (
            select(
                Transaction.user_id,
                func.coalesce(
                    func.sum(case((verified, Transaction.points), else_=0)), 0
                ),
                func.sum(case((verified, Transaction.amount), else_=None)),
                func.count(Transaction.id),
            )
            .where(Transaction.user_id.in_(user_ids))
            .group_by(Transaction.user_id)
        )
        result = await self.session.execute(stmt)
        return {
            user_id: (int(points or 0), to_money(amount), count)
            for user_id, points, amount, count in result.all()
        }
