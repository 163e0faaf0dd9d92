"""
Withdrawal lifecycle handling.

Admin approval and rejection of pending withdrawal requests. Neither touches
point or paid totals; rejection releases the reserved amount simply by
leaving the pending/approved set.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import WithdrawalStatus
from deeddraw.models.withdrawal import Withdrawal
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.repositories.withdrawal_repository import WithdrawalRepository
from deeddraw.services.base_service import BaseService, transaction
from deeddraw.services.withdrawal.balance_manager import WithdrawalBalanceManager
from deeddraw.utils.datetime_utils import utc_now
from deeddraw.utils.exceptions import (
    InsufficientBalance,
    InvalidStateTransition,
    NotFoundError,
)


class WithdrawalLifecycleHandler(BaseService):
    """Handles withdrawal lifecycle operations."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal lifecycle handler.

        Args:
            session: Database session
        """
        super().__init__(session)
        self.withdrawal_repo = WithdrawalRepository(session)
        self.user_repo = UserRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    @transaction
    async def approve(self, withdrawal_id: int, notes: str | None = None) -> Withdrawal:
        """
        Approve a pending withdrawal (admin only).

        Args:
            withdrawal_id: Withdrawal ID
            notes: Admin notes

        Returns:
            Approved withdrawal

        Raises:
            NotFoundError: Unknown withdrawal
            InvalidStateTransition: Withdrawal is not pending
            InsufficientBalance: Earnings no longer cover the reservation
        """
        withdrawal = await self._get_pending_for_update(withdrawal_id)

        user = await self.user_repo.get_by_id_for_update(withdrawal.user_id)
        balance = await self.balance_manager.balance_for(user)
        if balance.available < 0:
            raise InsufficientBalance(
                withdrawal.amount, balance.available + withdrawal.amount
            )

        withdrawal.status = WithdrawalStatus.APPROVED.value
        withdrawal.processed_at = utc_now()
        if notes:
            withdrawal.admin_notes = notes
        await self.session.flush()

        self.logger.info(
            "Withdrawal approved",
            extra={
                "withdrawal_id": withdrawal.id,
                "user_id": withdrawal.user_id,
                "amount": str(withdrawal.amount),
            },
        )
        return withdrawal

    @transaction
    async def reject(self, withdrawal_id: int, notes: str | None = None) -> Withdrawal:
        """
        Reject a pending withdrawal (admin only).

        Args:
            withdrawal_id: Withdrawal ID
            notes: Admin notes (reason)

        Returns:
            Rejected withdrawal

        Raises:
            NotFoundError: Unknown withdrawal
            InvalidStateTransition: Withdrawal is not pending
        """
        withdrawal = await self._get_pending_for_update(withdrawal_id)

        withdrawal.status = WithdrawalStatus.REJECTED.value
        withdrawal.processed_at = utc_now()
        if notes:
            withdrawal.admin_notes = notes
        await self.session.flush()

        self.logger.info(
            "Withdrawal rejected",
            extra={
                "withdrawal_id": withdrawal.id,
                "user_id": withdrawal.user_id,
                "amount": str(withdrawal.amount),
            },
        )
        return withdrawal

    async def _get_pending_for_update(self, withdrawal_id: int) -> Withdrawal:
        withdrawal = await self.withdrawal_repo.get_by_id_for_update(withdrawal_id)
        if withdrawal is None:
            raise NotFoundError(
                "Withdrawal not found", details={"withdrawal_id": withdrawal_id}
            )
        if withdrawal.status != WithdrawalStatus.PENDING.value:
            raise InvalidStateTransition("Withdrawal", withdrawal.id, withdrawal.status)
        return withdrawal
