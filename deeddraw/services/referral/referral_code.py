"""
Referral code value type and generator.

Codes are stored uppercase and looked up through the unique index on
users.referral_code.
"""

import re
import secrets
import string
import unicodedata
from dataclasses import dataclass

from deeddraw.config.business_constants import (
    REFERRAL_CODE_MAX_ATTEMPTS,
    REFERRAL_CODE_MAX_LENGTH,
)
from deeddraw.repositories.user_repository import UserRepository
from deeddraw.utils.exceptions import InvalidReferralCode

REFERRAL_CODE_PATTERN = re.compile(rf"^[A-Z0-9]{{4,{REFERRAL_CODE_MAX_LENGTH}}}$")

_FALLBACK_ALPHABET = string.ascii_uppercase + string.digits


@dataclass(frozen=True)
class ReferralCode:
    """
    Normalized referral code.

    Build with ReferralCode.parse(); raw user input is stripped and
    uppercased before the format check.
    """

    value: str

    @classmethod
    def parse(cls, raw: str) -> "ReferralCode":
        """
        Normalize and validate a referral code.

        Raises:
            InvalidReferralCode: If the normalized code has an invalid format
        """
        normalized = (raw or "").strip().upper()
        if not REFERRAL_CODE_PATTERN.match(normalized):
            raise InvalidReferralCode(normalized)
        return cls(normalized)

    def __str__(self) -> str:
        return self.value


def _ascii_alnum(name: str) -> str:
    folded = unicodedata.normalize("NFKD", name or "")
    return "".join(ch for ch in folded if ch.isascii() and ch.isalnum())


def referral_code_base(first_name: str, last_name: str) -> str:
    """
    First three letters of each name, uppercased.

    Accents are folded to ASCII so every generated code matches
    REFERRAL_CODE_PATTERN ("Hélène Côté" -> "HELCOT").
    """
    first = _ascii_alnum(first_name)[:3]
    last = _ascii_alnum(last_name)[:3]
    return (first + last).upper()


class ReferralCodeGenerator:
    """Generates unique referral codes for new users."""

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    async def generate(self, first_name: str, last_name: str) -> str:
        """
        Generate an unused referral code.

        base + 4 random digits (1000-9999), retried on collision. After
        REFERRAL_CODE_MAX_ATTEMPTS collisions the suffix switches to 4
        random alphanumeric characters.

        Args:
            first_name: User's first name
            last_name: User's last name

        Returns:
            Referral code not yet owned by anyone
        """
        base = referral_code_base(first_name, last_name)

        for _ in range(REFERRAL_CODE_MAX_ATTEMPTS + 1):
            code = f"{base}{secrets.randbelow(9000) + 1000}"
            if not await self.user_repo.referral_code_exists(code):
                return code

        while True:
            suffix = "".join(secrets.choice(_FALLBACK_ALPHABET) for _ in range(4))
            code = f"{base}{suffix}"
            if not await self.user_repo.referral_code_exists(code):
                return code
