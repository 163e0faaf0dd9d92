"""
Integration tests for certificate number allocation.

Numbers are PREFIX-YYYY-NNNNNN, strictly increasing per year, and never
collide with numbers already present in the transactions table.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from deeddraw.models import CertificateSequence
from deeddraw.repositories.transaction_repository import TransactionRepository
from deeddraw.services.certificate.numbering import CertificateNumberService
from deeddraw.utils.exceptions import SequenceExhausted


@pytest.fixture
def allocate(session_maker):
    """Allocate one number in its own committed DB transaction."""

    async def next_number(year: int, prefix: str | None = None) -> str:
        async with session_maker() as session:
            service = CertificateNumberService(session, prefix=prefix)
            number = await service.next_certificate_number(year=year)
            await session.commit()
            return number

    return next_number


class TestCertificateNumberService:
    """Tests for per-year sequences."""

    @pytest.mark.asyncio
    async def test_sequence_per_year(self, allocate):
        assert await allocate(2025) == "DD-2025-000001"
        assert await allocate(2025) == "DD-2025-000002"
        assert await allocate(2026) == "DD-2026-000001"
        assert await allocate(2025) == "DD-2025-000003"

    @pytest.mark.asyncio
    async def test_custom_prefix(self, allocate):
        assert await allocate(2025, prefix="QA") == "QA-2025-000001"

    @pytest.mark.asyncio
    async def test_skips_numbers_already_issued(
        self, allocate, session_maker, user_factory
    ):
        """An existing higher certificate moves the sequence forward."""
        bob = await user_factory("Bob")
        async with session_maker() as session:
            await TransactionRepository(session).create(
                user_id=bob.id,
                points=1,
                amount=Decimal("2000"),
                referral_discount=Decimal("0"),
                certificate_number="DD-2025-000041",
                transaction_date=datetime(2025, 1, 5, tzinfo=UTC),
                transaction_amount=Decimal("600000"),
                etransfer_reference="LEGACY-41",
                etransfer_email="bob@example.com",
                etransfer_date=datetime(2025, 1, 6, tzinfo=UTC),
            )
            await session.commit()

        assert await allocate(2025) == "DD-2025-000042"

    @pytest.mark.asyncio
    async def test_rolled_back_allocation_is_reused(self, session_maker, allocate):
        """A number allocated in a rolled-back transaction is not consumed."""
        async with session_maker() as session:
            await CertificateNumberService(session).next_certificate_number(year=2025)
            await session.rollback()

        assert await allocate(2025) == "DD-2025-000001"

    @pytest.mark.asyncio
    async def test_exhausted(self, session_maker, allocate):
        async with session_maker() as session:
            session.add(CertificateSequence(year=2025, last_value=999999))
            await session.commit()

        with pytest.raises(SequenceExhausted) as exc_info:
            await allocate(2025)

        assert exc_info.value.year == 2025

    @pytest.mark.asyncio
    async def test_year_row_created_concurrently(self, session_maker):
        """A year row committed after the first lookup is locked, not duplicated."""
        async with session_maker() as session:
            session.add(CertificateSequence(year=2025, last_value=5))
            await session.commit()

        async with session_maker() as session:
            service = CertificateNumberService(session)
            locking_select = service.sequence_repo.get_for_update
            lookups = []

            async def missed_first_lookup(year):
                lookups.append(year)
                if len(lookups) == 1:
                    return None
                return await locking_select(year)

            service.sequence_repo.get_for_update = missed_first_lookup
            number = await service.next_certificate_number(year=2025)
            await session.commit()

        assert number == "DD-2025-000006"
        assert lookups == [2025, 2025]
        async with session_maker() as session:
            sequence = await session.get(CertificateSequence, 2025)
            assert sequence.last_value == 6
