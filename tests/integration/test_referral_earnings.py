"""Integration tests for referral listings and payout bookkeeping."""

import pytest

from deeddraw.models.enums import ReferralStatus
from deeddraw.utils.exceptions import (
    InvalidStateTransition,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def referral_setup(ledger, user_factory, submission):
    """Alice refers Bob once; returns (alice, transaction)."""

    async def create():
        alice = await user_factory("Alice", referral_code="ALICE1001")
        bob = await user_factory("Bob")
        tx = await ledger.submit_transaction(
            submission(bob.id, points=2, referral_code="ALICE1001")
        )
        return alice, tx

    return create


class TestMarkReferralPaid:
    """Tests for recording referral payouts."""

    @pytest.mark.asyncio
    async def test_mark_paid(self, ledger, referral_setup):
        alice, tx = await referral_setup()
        await ledger.approve_transaction(tx.id)
        [referral] = await ledger.get_referrals(alice.id)

        paid = await ledger.mark_referral_paid(
            referral.id, "etransfer", payment_reference="ET-778", notes="March payout"
        )

        assert paid.status == ReferralStatus.PAID.value
        assert paid.paid_at is not None
        assert paid.payment_method == "etransfer"
        assert paid.payment_reference == "ET-778"
        assert [r.id for r in await ledger.get_referrals(alice.id, status="paid")] == [
            referral.id
        ]

    @pytest.mark.asyncio
    async def test_pending_referral_cannot_be_paid(self, ledger, referral_setup):
        alice, _ = await referral_setup()
        [referral] = await ledger.get_referrals(alice.id)

        with pytest.raises(InvalidStateTransition) as exc_info:
            await ledger.mark_referral_paid(referral.id, "manual")

        assert exc_info.value.current_status == ReferralStatus.PENDING.value

    @pytest.mark.asyncio
    async def test_paid_only_once(self, ledger, referral_setup):
        alice, tx = await referral_setup()
        await ledger.approve_transaction(tx.id)
        [referral] = await ledger.get_referrals(alice.id)
        await ledger.mark_referral_paid(referral.id, "credit")

        with pytest.raises(InvalidStateTransition):
            await ledger.mark_referral_paid(referral.id, "credit")

    @pytest.mark.asyncio
    async def test_unknown_method(self, ledger, referral_setup):
        alice, tx = await referral_setup()
        await ledger.approve_transaction(tx.id)
        [referral] = await ledger.get_referrals(alice.id)

        with pytest.raises(ValidationError):
            await ledger.mark_referral_paid(referral.id, "bitcoin")

    @pytest.mark.asyncio
    async def test_unknown_referral(self, ledger):
        with pytest.raises(NotFoundError):
            await ledger.mark_referral_paid(77, "manual")
