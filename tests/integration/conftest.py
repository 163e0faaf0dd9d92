"""
Shared fixtures for integration tests.

Each test gets a fresh in-memory SQLite database. StaticPool keeps the single
connection alive across sessions, so every helper commits before returning.
"""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from deeddraw.models import Base, User, UserCategory
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.ledger_facade import LedgerFacade
from deeddraw.validators.unified import canonical_email


@pytest_asyncio.fixture
async def engine():
    """In-memory database with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    """Session factory bound to the test database."""
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )


@pytest.fixture
def ledger(session_maker, dispatcher):
    """Ledger facade with recorded notifications."""
    return LedgerFacade(session_factory=session_maker, dispatcher=dispatcher)


@pytest.fixture
def user_factory(session_maker):
    """
    Create committed users with deterministic referral codes.

    Usage:
        alice = await user_factory("Alice", referral_code="ALICE1001")
    """
    counter = {"n": 0}

    async def create_user(
        first_name: str = "Test",
        last_name: str = "User",
        *,
        referral_code: str | None = None,
        email: str | None = None,
        is_admin: bool = False,
        category: UserCategory = UserCategory.AGENT_BROKER,
        **fields,
    ) -> User:
        counter["n"] += 1
        email = email or f"{first_name.lower()}{counter['n']}@example.com"
        async with session_maker() as session:
            user = await UserRepository(session).create(
                first_name=first_name,
                last_name=last_name,
                email=email,
                normalized_email=canonical_email(email),
                category=category.value,
                referral_code=referral_code or f"TST{1000 + counter['n']}",
                is_admin=is_admin,
                **fields,
            )
            await session.commit()
            return user

    return create_user


@pytest.fixture
def submission():
    """Build a valid transaction submission."""

    def build(user_id: int, points: int = 2, referral_code: str | None = None, **overrides):
        data = {
            "user_id": user_id,
            "points": points,
            "transaction_date": datetime(2025, 3, 1, tzinfo=UTC),
            "transaction_amount": Decimal("750000"),
            "etransfer_reference": "CA1234XYZ",
            "etransfer_email": "payer@example.com",
            "etransfer_date": datetime(2025, 3, 2, tzinfo=UTC),
            "referral_code_used": referral_code,
        }
        data.update(overrides)
        return data

    return build


@pytest.fixture
def fetch(session_maker):
    """Load a fresh copy of an entity in its own session."""

    async def load(model, entity_id):
        async with session_maker() as session:
            return await session.get(model, entity_id)

    return load
