"""
Withdrawal query service.

Handles withdrawal listings.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import WithdrawalStatus
from deeddraw.models.withdrawal import Withdrawal
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository
from deeddraw.utils.exceptions import ValidationError


class WithdrawalQueryService:
    """Handles withdrawal queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal query service."""
        self.session = session
        self.withdrawal_repo = WithdrawalRepository(session)

    async def get_user_withdrawals(self, user_id: int) -> list[Withdrawal]:
        """Get user's withdrawals, newest first."""
        return await self.withdrawal_repo.get_by_user(user_id)

    async def list_withdrawals(
        self, status: str | None = None, limit: int | None = None
    ) -> list[Withdrawal]:
        """
        Admin listing of withdrawals.

        Args:
            status: Optional WithdrawalStatus value
            limit: Max number of results

        Returns:
            Withdrawals newest first

        Raises:
            ValidationError: Unknown status
        """
        if status is not None and status not in {s.value for s in WithdrawalStatus}:
            raise ValidationError(
                f"Unknown withdrawal status: {status}", details={"status": status}
            )
        return await self.withdrawal_repo.find_filtered(status=status, limit=limit)
