"""
Referral model.

One record per transaction that used a referral code. Its lifecycle mirrors
the parent transaction.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deeddraw.models.base import Base
from deeddraw.models.enums import ReferralStatus
from deeddraw.models.types import MoneyType

if TYPE_CHECKING:
    from deeddraw.models.transaction import Transaction


class Referral(Base):
    """Referral model - reward owed to a referrer for one transaction."""

    __tablename__ = "referrals"
    __table_args__ = (
        CheckConstraint(
            'reward_amount >= 0', name='check_referral_reward_non_negative'
        ),
        CheckConstraint(
            'referrer_id != referred_user_id',
            name='check_referral_not_self'
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    referrer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    referred_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    transaction_id: Mapped[int] = mapped_column(
        ForeignKey("transactions.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
        index=True,
    )
    referral_code: Mapped[str] = mapped_column(String(20), nullable=False)
    reward_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=ReferralStatus.PENDING.value,
        nullable=False,
        index=True,
    )

    # Settlement bookkeeping
    paid_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    payment_method: Mapped[str | None] = mapped_column(String(20), nullable=True)
    payment_reference: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    transaction: Mapped["Transaction"] = relationship(
        "Transaction", back_populates="referral"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Referral(id={self.id}, referrer_id={self.referrer_id}, "
            f"transaction_id={self.transaction_id}, status={self.status!r})>"
        )
