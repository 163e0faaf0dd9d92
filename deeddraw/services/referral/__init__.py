"""
Referral services package.

- referral_code: ReferralCode value type and unique code generator
- pricing_engine: price/discount/reward of a purchase
- earnings_manager: referral listings and payout bookkeeping
"""

from deeddraw.services.referral.earnings_manager import ReferralEarningsManager
from deeddraw.services.referral.pricing_engine import (
    PricingQuote,
    ReferralPricingEngine,
)
from deeddraw.services.referral.referral_code import (
    ReferralCode,
    ReferralCodeGenerator,
    referral_code_base,
)


__all__ = [
    "PricingQuote",
    "ReferralCode",
    "ReferralCodeGenerator",
    "ReferralEarningsManager",
    "ReferralPricingEngine",
    "referral_code_base",
]
