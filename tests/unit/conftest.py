"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Mock referrer/submitter users
- ReferralPricingEngine with a mocked user repository
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from deeddraw.services.referral.pricing_engine import ReferralPricingEngine


@pytest.fixture
def mock_referrer():
    """
    Mock user owning referral code ALIBOB1234.

    Returns:
        MagicMock: Referrer with id 1
    """
    user = MagicMock()
    user.id = 1
    user.referral_code = "ALIBOB1234"
    user.referral_earnings = Decimal("0")
    return user


@pytest.fixture
def pricing_engine(mock_session, mock_referrer):
    """
    ReferralPricingEngine whose code lookup knows only mock_referrer.

    Returns:
        ReferralPricingEngine: Engine for testing
    """
    engine = ReferralPricingEngine(mock_session)

    async def lookup(code):
        return mock_referrer if code == mock_referrer.referral_code else None

    engine.user_repo.get_by_referral_code = AsyncMock(side_effect=lookup)
    return engine
