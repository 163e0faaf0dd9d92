"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for settings validation, before any deeddraw import
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["ADMIN_EMAILS"] = "admin@deeddraw.com"

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from unittest.mock import AsyncMock, MagicMock

import pytest

from deeddraw.services.notification.dispatcher import NotificationDispatcher


class RecordingPublisher:
    """Publisher that keeps published events in memory."""

    def __init__(self) -> None:
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


@pytest.fixture
def mock_session():
    """Mock AsyncSession for tests without a database."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def publisher():
    """Recording notification publisher."""
    return RecordingPublisher()


@pytest.fixture
def dispatcher(publisher):
    """Dispatcher delivering into the recording publisher."""
    return NotificationDispatcher(publisher)
