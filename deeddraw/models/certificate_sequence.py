"""
CertificateSequence model.

One row per calendar year. The row is locked FOR UPDATE while a certificate
number is issued so concurrent submissions cannot read the same maximum.
"""

from sqlalchemy import CheckConstraint, Integer
from sqlalchemy.orm import Mapped, mapped_column

from deeddraw.models.base import Base


class CertificateSequence(Base):
    """Last certificate sequence value issued per year."""

    __tablename__ = "certificate_sequences"
    __table_args__ = (
        CheckConstraint(
            'last_value >= 0', name='check_certificate_sequence_non_negative'
        ),
    )

    year: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    last_value: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return f"<CertificateSequence(year={self.year}, last_value={self.last_value})>"
