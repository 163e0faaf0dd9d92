"""
Transaction model.

A registered draw entry backed by a real-estate deal and an e-transfer
payment awaiting admin verification.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deeddraw.models.base import Base
from deeddraw.models.enums import TransactionStatus
from deeddraw.models.types import DealAmountType, MoneyType

if TYPE_CHECKING:
    from deeddraw.models.referral import Referral
    from deeddraw.models.user import User


class Transaction(Base):
    """
    Transaction entity.

    Attributes:
        id: Primary key
        user_id: Owner (submitter)
        points: Points purchased (>= 1)
        amount: Price charged = points * 2000 - referral_discount
        referral_discount: points * 100 when a referral code was used
        referral_code_used: Referrer's code (never the owner's own)
        certificate_number: PREFIX-YYYY-NNNNNN, assigned once
        transaction_amount: Underlying real-estate deal amount
        status: pending / verified / rejected / refunded
        verified_at: When an admin verified the payment
        rejection_reason: Reason given on rejection
        notes: Admin notes
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint('points >= 1', name='check_transaction_points_min'),
        CheckConstraint(
            'amount >= 0', name='check_transaction_amount_non_negative'
        ),
        CheckConstraint(
            'referral_discount >= 0',
            name='check_transaction_referral_discount_non_negative'
        ),
        Index('idx_transaction_created_at', 'created_at'),
        Index('idx_transaction_referral_code_status', 'referral_code_used', 'status'),
    )

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Owner
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )

    # Pricing
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    referral_discount: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    referral_code_used: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )

    # Certificate
    certificate_number: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, index=True
    )

    # Real-estate deal
    transaction_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    transaction_amount: Mapped[Decimal] = mapped_column(
        DealAmountType, nullable=False
    )

    # Manual e-transfer settlement
    etransfer_reference: Mapped[str] = mapped_column(String(255), nullable=False)
    etransfer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    etransfer_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    # Lifecycle
    status: Mapped[str] = mapped_column(
        String(20),
        default=TransactionStatus.PENDING.value,
        nullable=False,
        index=True,
    )
    verified_by: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User", back_populates="transactions", foreign_keys=[user_id]
    )
    referral: Mapped["Referral | None"] = relationship(
        "Referral", back_populates="transaction", uselist=False
    )

    @property
    def is_pending(self) -> bool:
        """Check if transaction still awaits verification."""
        return self.status == TransactionStatus.PENDING.value

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Transaction(id={self.id}, certificate={self.certificate_number!r}, "
            f"points={self.points}, amount={self.amount}, status={self.status!r})>"
        )
