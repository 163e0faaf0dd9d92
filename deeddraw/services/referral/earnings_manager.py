"""
Referral earnings management.

Referral listings and payout bookkeeping for rewards settled outside the
withdrawal flow.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.enums import ReferralPaymentMethod, ReferralStatus
from deeddraw.models.referral import Referral
from deeddraw.repositories.referral_repository import ReferralRepository
from deeddraw.services.base_service import BaseService, transaction
from deeddraw.utils.datetime_utils import utc_now
from deeddraw.utils.exceptions import (
    InvalidStateTransition,
    NotFoundError,
    ValidationError,
)


class ReferralEarningsManager(BaseService):
    """Manages referral earnings operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize earnings manager."""
        super().__init__(session)
        self.referral_repo = ReferralRepository(session)

    async def get_referrals(
        self, referrer_id: int, status: str | None = None
    ) -> list[Referral]:
        """
        Get referrals earned by a user, newest first.

        Args:
            referrer_id: Referrer user ID
            status: Optional ReferralStatus value filter

        Returns:
            List of referrals
        """
        return await self.referral_repo.get_by_referrer(referrer_id, status=status)

    @transaction
    async def mark_referral_paid(
        self,
        referral_id: int,
        payment_method: str,
        payment_reference: str | None = None,
        notes: str | None = None,
    ) -> Referral:
        """
        Record that an approved referral reward was paid.

        Args:
            referral_id: Referral ID
            payment_method: credit / etransfer / manual
            payment_reference: External reference of the payout
            notes: Admin notes

        Returns:
            Updated referral

        Raises:
            ValidationError: If payment method is unknown
            NotFoundError: If referral doesn't exist
            InvalidStateTransition: If referral is not approved
        """
        try:
            method = ReferralPaymentMethod(payment_method)
        except ValueError as e:
            raise ValidationError(
                f"Unknown payment method: {payment_method}",
                details={"payment_method": payment_method},
            ) from e

        referral = await self.referral_repo.get_by_id_for_update(referral_id)
        if referral is None:
            raise NotFoundError(
                "Referral not found", details={"referral_id": referral_id}
            )
        if referral.status != ReferralStatus.APPROVED.value:
            raise InvalidStateTransition("Referral", referral.id, referral.status)

        referral.status = ReferralStatus.PAID.value
        referral.paid_at = utc_now()
        referral.payment_method = method.value
        referral.payment_reference = payment_reference
        if notes:
            referral.notes = notes
        await self.session.flush()

        self.logger.info(
            "Referral reward marked paid",
            extra={
                "referral_id": referral.id,
                "referrer_id": referral.referrer_id,
                "reward_amount": str(referral.reward_amount),
                "payment_method": method.value,
            },
        )
        return referral
