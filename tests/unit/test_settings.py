"""Tests for settings validation."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from deeddraw.config.settings import Settings


def make_settings(**overrides):
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "environment": "test",
        "debug": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class TestDatabaseUrl:
    """Test DATABASE_URL normalization."""

    @pytest.mark.parametrize(
        "url",
        ["postgres://u:p@db/deeddraw", "postgresql://u:p@db/deeddraw"],
    )
    def test_driver_added(self, url):
        """Plain Postgres URLs get the asyncpg driver."""
        settings = make_settings(database_url=url)
        assert settings.database_url == "postgresql+asyncpg://u:p@db/deeddraw"

    def test_unsupported_scheme(self):
        with pytest.raises(PydanticValidationError):
            make_settings(database_url="mysql://u:p@db/deeddraw")


class TestEnvironment:
    """Test environment-specific rules."""

    def test_debug_forbidden_in_production(self):
        with pytest.raises(PydanticValidationError):
            make_settings(environment="production", debug=True)

    def test_debug_allowed_outside_production(self):
        assert make_settings(environment="development", debug=True).debug is True


class TestCertificatePrefix:
    """Test certificate prefix normalization."""

    def test_uppercased(self):
        assert make_settings(certificate_prefix="dd").certificate_prefix == "DD"

    def test_dash_rejected(self):
        """Prefix is split on '-' when parsing numbers."""
        with pytest.raises(PydanticValidationError):
            make_settings(certificate_prefix="D-D")


class TestAdminEmails:
    """Test ADMIN_EMAILS parsing."""

    def test_parsed_and_lowercased(self):
        settings = make_settings(admin_emails=" Admin@DeedDraw.com, ,ops@deeddraw.com")
        assert settings.get_admin_emails() == [
            "admin@deeddraw.com",
            "ops@deeddraw.com",
        ]

    def test_invalid_entries_skipped(self):
        settings = make_settings(admin_emails="not-an-email,admin@deeddraw.com")
        assert settings.get_admin_emails() == ["admin@deeddraw.com"]

    def test_empty(self):
        assert make_settings(admin_emails="").get_admin_emails() == []
