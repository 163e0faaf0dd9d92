"""
Standard type definitions for database models.

Provides consistent types for monetary fields across all models.
"""

from sqlalchemy import DECIMAL

# Standard money type for prices, discounts, rewards and withdrawals
# Precision: 12 digits total, 2 after decimal point (CAD cents)
# Range: up to 9,999,999,999.99
MoneyType = DECIMAL(12, 2)

# Real-estate deal amounts
# Precision: 15 digits total, 2 after decimal point
DealAmountType = DECIMAL(15, 2)
