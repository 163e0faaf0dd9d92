"""
Business logic constants for DeedDraw.

Central location for business rules and constants used across the application.
This module can be imported by models, repositories and services without
circular dependencies.
"""

from decimal import Decimal


# Pricing: every point costs $2000, referral code holders save $100 per point
PRICE_PER_POINT = Decimal("2000")
DISCOUNT_PER_POINT = Decimal("100")

# Referrer earns $100 per point of a verified referred purchase
REWARD_PER_POINT = Decimal("100")

# Minimum real-estate deal that qualifies for registration
MIN_TRANSACTION_AMOUNT = Decimal("500000")

# Minimum withdrawal of referral earnings
MIN_WITHDRAWAL_AMOUNT = Decimal("100")

# Draw is held once the pool reaches this many verified points
TARGET_POINTS = 400
PRIZE_POOL = Decimal("500000")

# Reporting windows
RECENT_ACTIVITY_LIMIT = 10
LEADERBOARD_LIMIT = 10
PARTICIPANT_SEARCH_LIMIT = 10
PARTICIPANT_SEARCH_MIN_LENGTH = 2

# Certificate numbers: PREFIX-YYYY-NNNNNN
CERTIFICATE_SEQUENCE_WIDTH = 6
CERTIFICATE_SEQUENCE_MAX = 10 ** CERTIFICATE_SEQUENCE_WIDTH - 1

# Referral code generation
REFERRAL_CODE_MAX_ATTEMPTS = 10
REFERRAL_CODE_MAX_LENGTH = 20

# Money precision
MONEY_QUANT = Decimal("0.01")

# Column limits: money is DECIMAL(12, 2), deal amounts DECIMAL(15, 2)
MAX_MONEY_AMOUNT = Decimal("9999999999.99")
MAX_TRANSACTION_AMOUNT = Decimal("9999999999999.99")
MAX_POINTS_PER_TRANSACTION = int(MAX_MONEY_AMOUNT // PRICE_PER_POINT)


def calculate_base_amount(points: int) -> Decimal:
    """
    Calculate price of points before any referral discount.

    Args:
        points: Number of points purchased

    Returns:
        points * PRICE_PER_POINT
    """
    return Decimal(points) * PRICE_PER_POINT


def calculate_referral_discount(points: int) -> Decimal:
    """Discount granted when a valid referral code is used."""
    return Decimal(points) * DISCOUNT_PER_POINT


def calculate_referral_reward(points: int) -> Decimal:
    """Reward owed to the referrer once the purchase is verified."""
    return Decimal(points) * REWARD_PER_POINT


def calculate_pool_progress(total_points: int) -> Decimal:
    """
    Calculate pool progress percentage.

    progress = min(total_points / TARGET_POINTS, 1) * 100, rounded to cents.

    Args:
        total_points: Sum of points over verified transactions

    Returns:
        Percentage in range 0.00-100.00
    """
    if total_points <= 0:
        return Decimal("0.00")
    ratio = min(Decimal(total_points) / Decimal(TARGET_POINTS), Decimal("1"))
    return (ratio * Decimal("100")).quantize(MONEY_QUANT)


def points_until_draw(total_points: int) -> int:
    """Points still missing before the draw is held."""
    return max(TARGET_POINTS - total_points, 0)


def to_money(value: Decimal | int | float | str | None) -> Decimal:
    """
    Coerce a database aggregate into a cents-precision Decimal.

    SUM() over an empty set yields NULL, and SQLite hands back floats.
    """
    if value is None:
        return Decimal("0.00")
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(MONEY_QUANT)
