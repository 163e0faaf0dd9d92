"""
Transaction query service.

Read-only listings of entries for participants and admins.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import TransactionStatus
from deeddraw.models.transaction import Transaction
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.services.base_service import BaseService
from deeddraw.utils.exceptions import NotFoundError, ValidationError


class TransactionQueryService(BaseService):
    """Handles transaction queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize transaction query service."""
        super().__init__(session)
        self.transaction_repo = TransactionRepository(session)

    async def get_user_transactions(self, user_id: int) -> list[Transaction]:
        """Get user's own transactions, newest first."""
        return await self.transaction_repo.get_by_user(user_id)

    async def get_user_transaction(
        self, user_id: int, transaction_id: int
    ) -> Transaction:
        """
        Get a single transaction owned by user.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else
        """
        tx = await self.transaction_repo.get_by_id(transaction_id)
        if tx is None or tx.user_id != user_id:
            raise NotFoundError(
                "Transaction not found",
                details={"transaction_id": transaction_id},
            )
        return tx

    async def list_transactions(
        self,
        status: str | None = None,
        user_id: int | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Transaction], int]:
        """
        Admin listing with filters.

        Args:
            status: Optional TransactionStatus value
            user_id: Optional owner filter
            page: Page number (1-indexed)
            per_page: Items per page

        Returns:
            Tuple of (transactions, total_count)

        Raises:
            ValidationError: Unknown status or bad pagination
        """
        if status is not None and status not in {s.value for s in TransactionStatus}:
            raise ValidationError(
                f"Unknown transaction status: {status}", details={"status": status}
            )
        if page < 1 or per_page < 1:
            raise ValidationError("Page and per_page must be positive")
        return await self.transaction_repo.find_filtered(
            status=status, user_id=user_id, page=page, per_page=per_page
        )
