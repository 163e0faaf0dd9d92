"""
Referral pricing engine.

Prices a point purchase and resolves the referral that applies to it. Pure
read: nothing is written here, the transaction lifecycle persists the
referral in the same DB transaction as the entry.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import (
    calculate_base_amount,
    calculate_referral_discount,
    calculate_referral_reward,
)
from deeddraw.models.user import User
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.base_service import BaseService
from deeddraw.services.referral.referral_code import ReferralCode
from deeddraw.utils.exceptions import (
    InvalidReferralCode,
    SelfReferralNotAllowed,
    ValidationError,
)


@dataclass(frozen=True)
class PricingQuote:
    """Price of a purchase, with the referral it earns if any."""

    base_amount: Decimal
    amount: Decimal
    referral_discount: Decimal
    referrer: User | None = None
    reward_amount: Decimal = Decimal("0")

    @property
    def referral_code(self) -> str | None:
        """Referrer's code, or None without a referral."""
        return self.referrer.referral_code if self.referrer else None


class ReferralPricingEngine(BaseService):
    """Computes price, discount and referral reward for a purchase."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize pricing engine."""
        super().__init__(session)
        self.user_repo = UserRepository(session)

    async def price_transaction(
        self,
        points: int,
        referral_code_used: str | None,
        submitter_id: int,
    ) -> PricingQuote:
        """
        Price a purchase of points.

        Args:
            points: Points purchased (>= 1)
            referral_code_used: Raw referral code, or None
            submitter_id: User buying the points

        Returns:
            PricingQuote

        Raises:
            ValidationError: If points < 1
            InvalidReferralCode: If the code does not resolve to a user
            SelfReferralNotAllowed: If the code belongs to the submitter
        """
        if points < 1:
            raise ValidationError(
                "Points must be at least 1", details={"points": points}
            )

        base_amount = calculate_base_amount(points)

        if not referral_code_used or not referral_code_used.strip():
            return PricingQuote(
                base_amount=base_amount,
                amount=base_amount,
                referral_discount=Decimal("0"),
            )

        code = ReferralCode.parse(referral_code_used)
        referrer = await self.user_repo.get_by_referral_code(code.value)
        if referrer is None:
            raise InvalidReferralCode(code.value)
        if referrer.id == submitter_id:
            raise SelfReferralNotAllowed(code.value)

        discount = calculate_referral_discount(points)
        return PricingQuote(
            base_amount=base_amount,
            amount=base_amount - discount,
            referral_discount=discount,
            referrer=referrer,
            reward_amount=calculate_referral_reward(points),
        )
