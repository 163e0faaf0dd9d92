"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Admin
    admin_emails: str = ""  # Comma-separated list

    # Redis (for Dramatiq notification queue)
    redis_host: str = "localhost"
    redis_port: int = Field(default=6379, ge=1, le=65535)
    redis_password: str | None = None
    redis_db: int = 0

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"
    log_file: str = "logs/deeddraw.log"

    # Payments (manual Interac e-Transfer)
    payment_email: str = "payment@deeddraw.com"
    support_email: str = "support@deeddraw.com"

    # Certificates
    certificate_prefix: str = Field(
        default="DD",
        min_length=1,
        max_length=8,
        description="Prefix of human-facing certificate numbers (PREFIX-YYYY-NNNNNN)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_production(self) -> 'Settings':
        """Validate production-specific requirements."""
        if self.environment == 'production':
            # DEBUG must be False in production
            if self.debug:
                raise ValueError(
                    'DEBUG must be False in production environment. '
                    'Set DEBUG=false in your .env file.'
                )

            if self.database_url.startswith('sqlite'):
                logger.warning(
                    'DATABASE_URL points to SQLite in production. '
                    'Row-level locks are not enforced by SQLite.'
                )

        return self

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if v.startswith('postgres://'):
            v = v.replace('postgres://', 'postgresql+asyncpg://', 1)
        elif v.startswith('postgresql://'):
            v = v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        if not v.startswith(('postgresql+asyncpg://', 'sqlite+aiosqlite://')):
            raise ValueError(
                'DATABASE_URL must start with postgresql+asyncpg:// '
                'or sqlite+aiosqlite://'
            )
        return v

    @field_validator('certificate_prefix')
    @classmethod
    def validate_certificate_prefix(cls, v: str) -> str:
        """Certificate prefix must be alphanumeric (it is split on '-')."""
        v = v.strip().upper()
        if not v.isalnum():
            raise ValueError('CERTIFICATE_PREFIX must be alphanumeric')
        return v

    def get_admin_emails(self) -> list[str]:
        """Parse admin emails from comma-separated string."""
        if not self.admin_emails:
            return []

        result = []
        for email in self.admin_emails.split(","):
            email_stripped = email.strip().lower()
            if not email_stripped:
                continue
            if "@" not in email_stripped:
                logger.warning(f"Invalid admin email: {email_stripped}")
                continue
            result.append(email_stripped)
        return result


# Global settings instance
settings = Settings()
