"""
Certificate numbering.

Issues human-facing certificate numbers PREFIX-YYYY-NNNNNN, strictly
increasing within a calendar year and unique across all transactions.
"""

import re
from typing import NamedTuple

from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.business_constants import (
    CERTIFICATE_SEQUENCE_MAX,
    CERTIFICATE_SEQUENCE_WIDTH,
)
from deeddraw.config.settings import settings
from deeddraw.repositories.certificate_sequence_repository import (
    CertificateSequenceRepository,
)
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.services.base_service import BaseService
from deeddraw.utils.datetime_utils import utc_now
from deeddraw.utils.exceptions import SequenceExhausted, ValidationError

CERTIFICATE_PATTERN = re.compile(r"^([A-Z0-9]+)-(\d{4})-(\d+)$")


class CertificateNumber(NamedTuple):
    """Parsed certificate number."""

    prefix: str
    year: int
    sequence: int


def format_certificate_number(prefix: str, year: int, sequence: int) -> str:
    """
    Render a certificate number.

    Args:
        prefix: Certificate prefix (e.g. "DD")
        year: Calendar year
        sequence: 1-based sequence within the year

    Returns:
        e.g. "DD-2025-000001"
    """
    return f"{prefix}-{year}-{sequence:0{CERTIFICATE_SEQUENCE_WIDTH}d}"


def parse_certificate_number(value: str) -> CertificateNumber:
    """
    Split a certificate number into its parts.

    Args:
        value: Certificate number string

    Returns:
        CertificateNumber(prefix, year, sequence)

    Raises:
        ValidationError: If the string is not PREFIX-YYYY-NNNNNN
    """
    match = CERTIFICATE_PATTERN.match(value or "")
    if not match:
        raise ValidationError(
            f"Malformed certificate number: {value!r}",
            details={"certificate_number": value},
        )
    prefix, year, sequence = match.groups()
    return CertificateNumber(prefix, int(year), int(sequence))


class CertificateNumberService(BaseService):
    """
    Certificate number allocator.

    Must run inside the caller's DB transaction: the year's sequence row
    stays locked until that transaction commits or rolls back.
    """

    def __init__(self, session: AsyncSession, prefix: str | None = None) -> None:
        """Initialize certificate numbering."""
        super().__init__(session)
        self.prefix = prefix or settings.certificate_prefix
        self.sequence_repo = CertificateSequenceRepository(session)
        self.transaction_repo = TransactionRepository(session)

    async def next_certificate_number(self, year: int | None = None) -> str:
        """
        Allocate the next certificate number for a year.

        Args:
            year: Calendar year (default: current UTC year)

        Returns:
            Newly allocated certificate number

        Raises:
            SequenceExhausted: If the year's padded width is used up
        """
        if year is None:
            year = utc_now().year

        sequence = await self.sequence_repo.get_for_update(year)
        if sequence is None:
            await self.sequence_repo.insert_if_missing(year)
            sequence = await self.sequence_repo.get_for_update(year)

        year_prefix = f"{self.prefix}-{year}-"
        highest = await self.transaction_repo.get_max_certificate_number(year_prefix)
        scanned = parse_certificate_number(highest).sequence if highest else 0

        next_value = max(scanned, sequence.last_value) + 1
        if next_value > CERTIFICATE_SEQUENCE_MAX:
            self.logger.critical(
                "Certificate sequence exhausted",
                extra={"year": year, "maximum": CERTIFICATE_SEQUENCE_MAX},
            )
            raise SequenceExhausted(year, CERTIFICATE_SEQUENCE_MAX)

        sequence.last_value = next_value
        await self.session.flush()

        certificate_number = format_certificate_number(self.prefix, year, next_value)
        self.logger.debug(
            f"Allocated certificate {certificate_number}",
            extra={"year": year, "sequence": next_value},
        )
        return certificate_number
