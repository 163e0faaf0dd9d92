"""
User service module.

Structure:
- registration.py: participant registration with referral support
- statistics.py: per-user ledger statistics

Usage:
    from deeddraw.services.user import UserService

    user_service = UserService(session)
    user = await user_service.register_user({...})
    stats = await user_service.get_user_stats(user.id)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.services.user.registration import UserRegistrationService
from deeddraw.services.user.statistics import UserStatisticsService


class UserService(UserRegistrationService, UserStatisticsService):
    """Combined user service."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize all user service parts."""
        super().__init__(session)


__all__ = [
    "UserRegistrationService",
    "UserService",
    "UserStatisticsService",
]
