"""
CertificateSequence repository.

Data access layer for per-year certificate counters.
"""

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.models.certificate_sequence import CertificateSequence
from deeddraw.repositories.base import BaseRepository


class CertificateSequenceRepository(BaseRepository[CertificateSequence]):
    """Certificate sequence repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize certificate sequence repository."""
        super().__init__(CertificateSequence, session)

    async def get_for_update(self, year: int) -> CertificateSequence | None:
        """
        Get the year's counter holding a row lock until commit.

        Args:
            year: Calendar year

        Returns:
            Locked counter or None if the year has no row yet
        """
        stmt = (
            select(CertificateSequence)
            .where(CertificateSequence.year == year)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def insert_if_missing(self, year: int) -> None:
        """
        Create the year's counter unless another transaction already did.

        Uses INSERT ... ON CONFLICT DO NOTHING, so two first-of-year
        allocations never fail on the primary key; the loser waits for the
        winner's row and then locks it.

        Args:
            year: Calendar year
        """
        dialect = self.session.get_bind().dialect.name
        insert = sqlite_insert if dialect == "sqlite" else postgresql_insert
        stmt = (
            insert(CertificateSequence)
            .values(year=year, last_value=0)
            .on_conflict_do_nothing(index_elements=[CertificateSequence.year])
        )
        await self.session.execute(stmt)
