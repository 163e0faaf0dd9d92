"""
User registration functionality.

Registers participants with duplicate-email protection and referral support.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from deeddraw.config.settings import settings
from deeddraw.models.user import User
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.services.base_service import BaseService, transaction
from deeddraw.services.referral.referral_code import (
    ReferralCode,
    ReferralCodeGenerator,
)
from deeddraw.utils.exceptions import DuplicateUserError, InvalidReferralCode
from deeddraw.validators.inputs import RegisterUserInput, parse_input
from deeddraw.validators.unified import canonical_email


class UserRegistrationService(BaseService):
    """Handles new participant registration."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user registration service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.code_generator = ReferralCodeGenerator(self.user_repo)

    async def register_user(self, data: RegisterUserInput | dict[str, Any]) -> User:
        """
        Register new user with referral support.

        Args:
            data: Registration input

        Returns:
            Created user with a unique referral code

        Raises:
            ValidationError: Invalid input
            DuplicateUserError: Email (Gmail dots ignored) already registered
            InvalidReferralCode: referred_by does not resolve to a user
        """
        data = parse_input(RegisterUserInput, data)
        return await self._register(data)

    @transaction
    async def _register(self, data: RegisterUserInput) -> User:
        normalized = canonical_email(data.email)
        if await self.user_repo.get_by_normalized_email(normalized) is not None:
            raise DuplicateUserError(
                "User with this email already exists",
                details={"email": data.email},
            )

        referred_by = None
        if data.referred_by:
            code = ReferralCode.parse(data.referred_by)
            referrer = await self.user_repo.get_by_referral_code(code.value)
            if referrer is None:
                raise InvalidReferralCode(code.value)
            referred_by = referrer.referral_code

        referral_code = await self.code_generator.generate(
            data.first_name, data.last_name
        )

        try:
            user = await self.user_repo.create(
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                normalized_email=normalized,
                phone=data.phone,
                category=data.category.value,
                company=data.company,
                city=data.city,
                province=data.province,
                referral_code=referral_code,
                referred_by=referred_by,
                is_admin=data.email in settings.get_admin_emails(),
            )
        except IntegrityError as e:
            raise DuplicateUserError(
                "User with this email already exists",
                details={"email": data.email},
            ) from e

        self.logger.info(
            "User registered",
            extra={
                "user_id": user.id,
                "referral_code": referral_code,
                "has_referrer": referred_by is not None,
            },
        )
        return user
