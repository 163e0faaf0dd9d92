"""
User repository.

Data access layer for User model.
"""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import TransactionStatus
from deeddraw.models.transaction import Transaction
from deeddraw.models.user import User
from deeddraw.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_normalized_email(self, normalized_email: str) -> User | None:
        """
        Get user by canonical email.

        Args:
            normalized_email: Output of canonical_email()

        Returns:
            User or None
        """
        return await self.get_by(normalized_email=normalized_email)

    async def get_by_referral_code(self, referral_code: str) -> User | None:
        """
        Get user owning a referral code.

        Args:
            referral_code: Normalized (uppercase) referral code

        Returns:
            User or None
        """
        return await self.get_by(referral_code=referral_code)

    async def referral_code_exists(self, referral_code: str) -> bool:
        """Check if referral code is already taken."""
        return await self.exists(referral_code=referral_code)

    async def count_participants(self) -> int:
        """Count non-admin users."""
        stmt = select(func.count(User.id)).where(User.is_admin.is_(False))
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def get_leaderboard(self, limit: int) -> list[User]:
        """
        Get top participants by cached points.

        Args:
            limit: Max number of users

        Returns:
            Non-admin users with points, by points desc then registration asc
        """
        stmt = (
            select(User)
            .where(User.is_admin.is_(False), User.total_points > 0)
            .order_by(User.total_points.desc(), User.created_at.asc(), User.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_verified_participants(
        self, query: str, limit: int
    ) -> list[User]:
        """
        Search users with at least one verified transaction by name.

        Args:
            query: Case-insensitive name fragment
            limit: Max number of users

        Returns:
            Matching users ordered by points desc
        """
        pattern = f"%{query.lower()}%"
        verified_owner = (
            select(Transaction.id)
            .where(
                Transaction.user_id == User.id,
                Transaction.status == TransactionStatus.VERIFIED.value,
            )
            .exists()
        )
        stmt = (
            select(User)
            .where(
                User.is_admin.is_(False),
                verified_owner,
                or_(
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    func.lower(User.first_name + " " + User.last_name).like(pattern),
                ),
            )
            .order_by(User.total_points.desc(), User.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_participants(self) -> list[User]:
        """Get all non-admin users, newest first."""
        stmt = (
            select(User)
            .where(User.is_admin.is_(False))
            .order_by(User.created_at.desc(), User.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_paginated(
        self,
        page: int = 1,
        per_page: int = 50,
        search: str | None = None,
        category: str | None = None,
    ) -> tuple[list[User], int]:
        """
        Find users newest first with pagination.

        Args:
            page: Page number (1-indexed)
            per_page: Items per page
            search: Optional fragment of first name, last name or email
            category: Optional UserCategory value

        Returns:
            Tuple of (users, total_count)
        """
        conditions = []
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(User.first_name).like(pattern),
                    func.lower(User.last_name).like(pattern),
                    User.email.like(pattern),
                )
            )
        if category:
            conditions.append(User.category == category)

        count_stmt = select(func.count(User.id)).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar() or 0

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
