"""
Ledger facade.

Inbound surface of the ledger: every call opens its own session, runs one
service operation and closes the session.
"""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.database import async_session_maker
from deeddraw.models import Referral, Transaction, User, Withdrawal
from deeddraw.services.notification.dispatcher import NotificationDispatcher
from deeddraw.services.referral.earnings_manager import ReferralEarningsManager
from deeddraw.services.reporting.reporting_service import ReportingService
from deeddraw.services.transaction.lifecycle_handler import (
    TransactionLifecycleHandler,
)
from deeddraw.services.transaction.query_service import TransactionQueryService
from deeddraw.services.user import UserService
from deeddraw.services.withdrawal.balance_manager import (
    WithdrawalBalance,
    WithdrawalBalanceManager,
)
from deeddraw.services.withdrawal.lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from deeddraw.services.withdrawal.query_service import WithdrawalQueryService
from deeddraw.services.withdrawal.request_handler import WithdrawalRequestHandler
from deeddraw.validators.inputs import (
    RegisterUserInput,
    SubmitTransactionInput,
    WithdrawalRequestInput,
)


class LedgerFacade:
    """
    One entry point per ledger operation.

    Example:
        ledger = LedgerFacade()
        tx = await ledger.submit_transaction({...})
        await ledger.approve_transaction(tx.id)
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = async_session_maker,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        """
        Initialize facade.

        Args:
            session_factory: Returns a new AsyncSession per call
            dispatcher: Notification dispatcher (Dramatiq by default)
        """
        self.session_factory = session_factory
        self.dispatcher = dispatcher or NotificationDispatcher()

    # Transactions

    async def submit_transaction(
        self, data: SubmitTransactionInput | dict[str, Any]
    ) -> Transaction:
        async with self.session_factory() as session:
            handler = TransactionLifecycleHandler(session, self.dispatcher)
            return await handler.submit(data)

    async def approve_transaction(
        self,
        transaction_id: int,
        notes: str | None = None,
        admin_id: int | None = None,
    ) -> Transaction:
        async with self.session_factory() as session:
            handler = TransactionLifecycleHandler(session, self.dispatcher)
            return await handler.approve(transaction_id, notes=notes, admin_id=admin_id)

    async def reject_transaction(self, transaction_id: int, reason: str) -> Transaction:
        async with self.session_factory() as session:
            handler = TransactionLifecycleHandler(session, self.dispatcher)
            return await handler.reject(transaction_id, reason)

    async def get_user_transactions(self, user_id: int) -> list[Transaction]:
        async with self.session_factory() as session:
            return await TransactionQueryService(session).get_user_transactions(user_id)

    async def get_user_transaction(
        self, user_id: int, transaction_id: int
    ) -> Transaction:
        async with self.session_factory() as session:
            return await TransactionQueryService(session).get_user_transaction(
                user_id, transaction_id
            )

    async def list_transactions(
        self,
        status: str | None = None,
        user_id: int | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[Transaction], int]:
        async with self.session_factory() as session:
            return await TransactionQueryService(session).list_transactions(
                status=status, user_id=user_id, page=page, per_page=per_page
            )

    # Withdrawals

    async def request_withdrawal(
        self, data: WithdrawalRequestInput | dict[str, Any]
    ) -> Withdrawal:
        async with self.session_factory() as session:
            return await WithdrawalRequestHandler(session).request_withdrawal(data)

    async def approve_withdrawal(
        self, withdrawal_id: int, notes: str | None = None
    ) -> Withdrawal:
        async with self.session_factory() as session:
            return await WithdrawalLifecycleHandler(session).approve(
                withdrawal_id, notes=notes
            )

    async def reject_withdrawal(
        self, withdrawal_id: int, notes: str | None = None
    ) -> Withdrawal:
        async with self.session_factory() as session:
            return await WithdrawalLifecycleHandler(session).reject(
                withdrawal_id, notes=notes
            )

    async def available_balance(self, user_id: int) -> WithdrawalBalance:
        async with self.session_factory() as session:
            return await WithdrawalBalanceManager(session).available_balance(user_id)

    async def get_user_withdrawals(self, user_id: int) -> list[Withdrawal]:
        async with self.session_factory() as session:
            return await WithdrawalQueryService(session).get_user_withdrawals(user_id)

    async def list_withdrawals(self, status: str | None = None) -> list[Withdrawal]:
        async with self.session_factory() as session:
            return await WithdrawalQueryService(session).list_withdrawals(status=status)

    # Referrals

    async def get_referrals(
        self, referrer_id: int, status: str | None = None
    ) -> list[Referral]:
        async with self.session_factory() as session:
            return await ReferralEarningsManager(session).get_referrals(
                referrer_id, status=status
            )

    async def mark_referral_paid(
        self,
        referral_id: int,
        payment_method: str,
        payment_reference: str | None = None,
        notes: str | None = None,
    ) -> Referral:
        async with self.session_factory() as session:
            return await ReferralEarningsManager(session).mark_referral_paid(
                referral_id,
                payment_method,
                payment_reference=payment_reference,
                notes=notes,
            )

    # Users

    async def register_user(self, data: RegisterUserInput | dict[str, Any]) -> User:
        async with self.session_factory() as session:
            return await UserService(session).register_user(data)

    async def get_user_stats(self, user_id: int) -> dict[str, int | Decimal]:
        async with self.session_factory() as session:
            return await UserService(session).get_user_stats(user_id)

    # Reporting

    async def dashboard(self) -> dict:
        async with self.session_factory() as session:
            return await ReportingService(session).dashboard()

    async def global_stats(self) -> dict:
        async with self.session_factory() as session:
            return await ReportingService(session).global_stats()

    async def leaderboard(self) -> list[dict]:
        async with self.session_factory() as session:
            return await ReportingService(session).leaderboard()

    async def search_participants(self, query: str | None) -> list[dict]:
        async with self.session_factory() as session:
            return await ReportingService(session).search_participants(query)

    async def export_participants(self) -> list[dict]:
        async with self.session_factory() as session:
            return await ReportingService(session).export_participants()

    async def list_users(
        self,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
        category: str | None = None,
    ) -> dict:
        async with self.session_factory() as session:
            return await ReportingService(session).list_users(
                page=page, per_page=per_page, search=search, category=category
            )
