"""
User model.

Represents a registered draw participant (or admin).
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from deeddraw.models.base import Base
from deeddraw.models.types import MoneyType

if TYPE_CHECKING:
    from deeddraw.models.transaction import Transaction
    from deeddraw.models.withdrawal import Withdrawal


class User(Base):
    """User model - registered participants."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            'total_points >= 0', name='check_user_total_points_non_negative'
        ),
        CheckConstraint(
            'total_paid >= 0', name='check_user_total_paid_non_negative'
        ),
        CheckConstraint(
            'referral_earnings >= 0',
            name='check_user_referral_earnings_non_negative'
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Identity
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    normalized_email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="Lowercase email with provider-ignored dots removed",
    )
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    province: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Referral
    referral_code: Mapped[str] = mapped_column(
        String(20), nullable=False, unique=True, index=True
    )
    referred_by: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Referral code of the user who referred this user",
    )

    # Status flags
    is_admin: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )

    # Denormalized caches, written only when a transaction is verified
    total_points: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, index=True
    )
    total_paid: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    referral_earnings: Mapped[Decimal] = mapped_column(
        MoneyType,
        default=Decimal("0"),
        nullable=False,
        comment="Hint only: withdrawals recompute earnings from the ledger",
    )

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
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction",
        back_populates="user",
        foreign_keys="Transaction.user_id",
    )
    withdrawals: Mapped[list["Withdrawal"]] = relationship(
        "Withdrawal",
        back_populates="user",
    )

    @property
    def full_name(self) -> str:
        """Display name."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, email={self.email!r}, "
            f"referral_code={self.referral_code!r}, "
            f"total_points={self.total_points})>"
        )
