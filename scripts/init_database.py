#!/usr/bin/env python3
"""Initialize database tables and admin accounts."""

import asyncio
import sys

from loguru import logger

from deeddraw.config.database import create_session_maker, get_engine
from deeddraw.config.settings import settings
from deeddraw.models import Base, UserCategory
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.referral.referral_code import ReferralCodeGenerator
from deeddraw.validators.unified import canonical_email

# Configure logger for script
logger.remove()
logger.add(sys.stderr, level="INFO")


async def ensure_admins() -> None:
    """Create an admin account for every ADMIN_EMAILS address missing one."""
    session_maker = create_session_maker(get_engine())
    async with session_maker() as session:
        user_repo = UserRepository(session)
        generator = ReferralCodeGenerator(user_repo)

        for email in settings.get_admin_emails():
            normalized = canonical_email(email)
            existing = await user_repo.get_by_normalized_email(normalized)
            if existing:
                if not existing.is_admin:
                    existing.is_admin = True
                    logger.info(f"Promoted existing user to admin: {email}")
                continue

            admin = await user_repo.create(
                first_name="Admin",
                last_name="User",
                email=email,
                normalized_email=normalized,
                category=UserCategory.AGENT_BROKER.value,
                referral_code=await generator.generate("Admin", "User"),
                is_admin=True,
            )
            logger.info(
                f"Admin user created: {email} (referral code {admin.referral_code})"
            )

        await session.commit()


async def init_database() -> None:
    """Create all database tables."""
    logger.info("Connecting to database...")
    engine = get_engine()

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    await ensure_admins()
    await engine.dispose()
    logger.success("Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_database())
