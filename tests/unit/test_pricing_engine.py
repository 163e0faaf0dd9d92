"""
Tests for ReferralPricingEngine.

The engine is a pure read: it prices the purchase and resolves the
referrer; it never writes.
"""

from decimal import Decimal

import pytest

from deeddraw.utils.exceptions import (
    InvalidReferralCode,
    SelfReferralNotAllowed,
    ValidationError,
)


class TestReferralPricingEngine:
    """Test purchase pricing."""

    @pytest.mark.asyncio
    async def test_no_referral(self, pricing_engine):
        """Without a code the full price is charged."""
        quote = await pricing_engine.price_transaction(
            points=3, referral_code_used=None, submitter_id=2
        )

        assert quote.amount == Decimal("6000")
        assert quote.referral_discount == Decimal("0")
        assert quote.referrer is None
        assert quote.referral_code is None
        pricing_engine.user_repo.get_by_referral_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_referral_is_no_referral(self, pricing_engine):
        """Whitespace-only code is treated as absent."""
        quote = await pricing_engine.price_transaction(
            points=1, referral_code_used="   ", submitter_id=2
        )

        assert quote.amount == Decimal("2000")
        assert quote.referrer is None

    @pytest.mark.asyncio
    async def test_valid_referral(self, pricing_engine, mock_referrer):
        """Two points with a code: 3800 charged, 200 owed to the referrer."""
        quote = await pricing_engine.price_transaction(
            points=2, referral_code_used="alibob1234", submitter_id=2
        )

        assert quote.base_amount == Decimal("4000")
        assert quote.referral_discount == Decimal("200")
        assert quote.amount == Decimal("3800")
        assert quote.reward_amount == Decimal("200")
        assert quote.referrer is mock_referrer
        assert quote.referral_code == "ALIBOB1234"

    @pytest.mark.asyncio
    async def test_unknown_code(self, pricing_engine):
        """Unresolvable code is rejected."""
        with pytest.raises(InvalidReferralCode) as exc_info:
            await pricing_engine.price_transaction(
                points=1, referral_code_used="NOPE9999", submitter_id=2
            )

        assert exc_info.value.code == "NOPE9999"

    @pytest.mark.asyncio
    async def test_self_referral(self, pricing_engine, mock_referrer):
        """Using one's own code is rejected."""
        with pytest.raises(SelfReferralNotAllowed):
            await pricing_engine.price_transaction(
                points=1,
                referral_code_used="ALIBOB1234",
                submitter_id=mock_referrer.id,
            )

    @pytest.mark.asyncio
    async def test_zero_points(self, pricing_engine):
        """At least one point must be bought."""
        with pytest.raises(ValidationError):
            await pricing_engine.price_transaction(
                points=0, referral_code_used=None, submitter_id=2
            )
