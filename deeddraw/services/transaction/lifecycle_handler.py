"""
Transaction lifecycle handling.

State machine of a draw entry: submit (pending) -> approve (verified) or
reject (rejected). Approval is the only place that credits a participant's
points and paid totals.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import ReferralStatus, TransactionStatus
from deeddraw.models.transaction import Transaction
from deeddraw.models.user import User
from deeddraw.repositories.referral_repository import ReferralRepository
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.base_service import BaseService, transaction
from deeddraw.services.certificate.numbering import CertificateNumberService
from deeddraw.services.notification.dispatcher import NotificationDispatcher
from deeddraw.services.notification.events import (
    ETransferInstructionsEvent,
    PaymentApprovedEvent,
)
from deeddraw.services.referral.pricing_engine import ReferralPricingEngine
from deeddraw.utils.datetime_utils import utc_now
from deeddraw.utils.exceptions import (
    InvalidStateTransition,
    NotFoundError,
    ValidationError,
)
from deeddraw.validators.inputs import SubmitTransactionInput, parse_input


class TransactionLifecycleHandler(BaseService):
    """
    Handles transaction lifecycle operations.

    Each public operation runs in its own DB transaction and emits its
    notification only after that transaction committed.
    """

    def __init__(
        self,
        session: AsyncSession,
        dispatcher: NotificationDispatcher | None = None,
    ) -> None:
        """
        Initialize transaction lifecycle handler.

        Args:
            session: Database session
            dispatcher: Notification dispatcher (Dramatiq by default)
        """
        super().__init__(session)
        self.transaction_repo = TransactionRepository(session)
        self.user_repo = UserRepository(session)
        self.referral_repo = ReferralRepository(session)
        self.pricing_engine = ReferralPricingEngine(session)
        self.certificate_service = CertificateNumberService(session)
        self.dispatcher = dispatcher or NotificationDispatcher()

    async def submit(
        self, data: SubmitTransactionInput | dict[str, Any]
    ) -> Transaction:
        """
        Register a new entry awaiting payment verification.

        Args:
            data: Submission input

        Returns:
            Pending transaction with its certificate number

        Raises:
            ValidationError: Invalid input
            NotFoundError: Unknown submitter
            InvalidReferralCode: Referral code does not resolve
            SelfReferralNotAllowed: Submitter used their own code
            SequenceExhausted: No certificate numbers left this year
        """
        data = parse_input(SubmitTransactionInput, data)
        tx, owner = await self._submit(data)

        self.dispatcher.dispatch(
            ETransferInstructionsEvent(
                email=owner.email,
                amount=tx.amount,
                certificate_number=tx.certificate_number,
                user_name=owner.first_name,
            )
        )
        return tx

    @transaction
    async def _submit(
        self, data: SubmitTransactionInput
    ) -> tuple[Transaction, User]:
        owner = await self.user_repo.get_by_id(data.user_id)
        if owner is None:
            raise NotFoundError("User not found", details={"user_id": data.user_id})

        quote = await self.pricing_engine.price_transaction(
            points=data.points,
            referral_code_used=data.referral_code_used,
            submitter_id=owner.id,
        )
        certificate_number = await self.certificate_service.next_certificate_number()

        tx = await self.transaction_repo.create(
            user_id=owner.id,
            points=data.points,
            amount=quote.amount,
            referral_discount=quote.referral_discount,
            referral_code_used=quote.referral_code,
            certificate_number=certificate_number,
            transaction_date=data.transaction_date,
            transaction_amount=data.transaction_amount,
            etransfer_reference=data.etransfer_reference,
            etransfer_email=data.etransfer_email,
            etransfer_date=data.etransfer_date,
            status=TransactionStatus.PENDING.value,
        )

        if quote.referrer is not None:
            await self.referral_repo.create(
                referrer_id=quote.referrer.id,
                referred_user_id=owner.id,
                transaction_id=tx.id,
                referral_code=quote.referral_code,
                reward_amount=quote.reward_amount,
                status=ReferralStatus.PENDING.value,
            )

        self.logger.info(
            "Transaction submitted",
            extra={
                "transaction_id": tx.id,
                "user_id": owner.id,
                "certificate_number": certificate_number,
                "points": tx.points,
                "amount": str(tx.amount),
                "referrer_id": quote.referrer.id if quote.referrer else None,
            },
        )
        return tx, owner

    async def approve(
        self,
        transaction_id: int,
        notes: str | None = None,
        admin_id: int | None = None,
    ) -> Transaction:
        """
        Verify payment of a pending transaction.

        Args:
            transaction_id: Transaction ID
            notes: Admin notes
            admin_id: Verifying admin (for audit)

        Returns:
            Verified transaction

        Raises:
            NotFoundError: Unknown transaction
            InvalidStateTransition: Transaction is not pending
        """
        tx, owner = await self._approve(transaction_id, notes, admin_id)

        self.dispatcher.dispatch(
            PaymentApprovedEvent(
                email=owner.email,
                amount=tx.amount,
                points=tx.points,
                certificate_number=tx.certificate_number,
                user_name=owner.first_name,
            )
        )
        return tx

    @transaction
    async def _approve(
        self,
        transaction_id: int,
        notes: str | None,
        admin_id: int | None,
    ) -> tuple[Transaction, User]:
        tx = await self._get_pending_for_update(transaction_id)

        tx.status = TransactionStatus.VERIFIED.value
        tx.verified_at = utc_now()
        tx.verified_by = admin_id
        if notes:
            tx.notes = notes

        referral = await self.referral_repo.get_by_transaction_id(
            tx.id, for_update=True
        )
        user_ids = {tx.user_id}
        if referral is not None:
            user_ids.add(referral.referrer_id)

        # Lock users in id order so crossed referrals cannot deadlock
        locked: dict[int, User] = {}
        for user_id in sorted(user_ids):
            locked[user_id] = await self.user_repo.get_by_id_for_update(user_id)

        owner = locked[tx.user_id]
        owner.total_points += tx.points
        owner.total_paid += tx.amount

        if referral is not None and referral.status == ReferralStatus.PENDING.value:
            referral.status = ReferralStatus.APPROVED.value
            referrer = locked[referral.referrer_id]
            referrer.referral_earnings += referral.reward_amount

        await self.session.flush()

        self.logger.info(
            "Transaction verified",
            extra={
                "transaction_id": tx.id,
                "user_id": owner.id,
                "points": tx.points,
                "amount": str(tx.amount),
                "admin_id": admin_id,
                "referral_id": referral.id if referral else None,
            },
        )
        return tx, owner

    @transaction
    async def reject(self, transaction_id: int, reason: str) -> Transaction:
        """
        Reject a pending transaction.

        No totals change; the attached referral (if any) is cancelled.

        Args:
            transaction_id: Transaction ID
            reason: Rejection reason shown to the participant

        Returns:
            Rejected transaction

        Raises:
            ValidationError: Empty reason
            NotFoundError: Unknown transaction
            InvalidStateTransition: Transaction is not pending
        """
        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("Rejection reason is required")

        tx = await self._get_pending_for_update(transaction_id)

        tx.status = TransactionStatus.REJECTED.value
        tx.rejection_reason = reason
        tx.notes = reason

        referral = await self.referral_repo.get_by_transaction_id(
            tx.id, for_update=True
        )
        if referral is not None and referral.status == ReferralStatus.PENDING.value:
            referral.status = ReferralStatus.CANCELLED.value

        await self.session.flush()

        self.logger.info(
            "Transaction rejected",
            extra={
                "transaction_id": tx.id,
                "user_id": tx.user_id,
                "reason": reason,
            },
        )
        return tx

    async def _get_pending_for_update(self, transaction_id: int) -> Transaction:
        tx = await self.transaction_repo.get_by_id_for_update(transaction_id)
        if tx is None:
            raise NotFoundError(
                "Transaction not found",
                details={"transaction_id": transaction_id},
            )
        if not tx.is_pending:
            raise InvalidStateTransition("Transaction", tx.id, tx.status)
        return tx
