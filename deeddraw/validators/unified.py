"""
Unified field validators.

Each validator returns (is_valid, error_message); normalizers raise
ValueError on invalid input.
"""

import re

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

# Providers that ignore dots in the local part
DOTS_IGNORED_DOMAINS = frozenset({"gmail.com", "googlemail.com"})


def validate_email(email: str) -> tuple[bool, str | None]:
    """
    Validate email address.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_email("user@example.com")
        (True, None)
        >>> validate_email("invalid")
        (False, "Email must contain '@'")
    """
    if not email or not isinstance(email, str):
        return False, "Email is empty"

    email = email.strip()

    if not email:
        return False, "Email is empty"

    if len(email) > 255:
        return False, "Email is too long (maximum 255 characters)"

    if "@" not in email:
        return False, "Email must contain '@'"

    parts = email.split("@")
    if len(parts) != 2:
        return False, "Email must contain exactly one '@'"

    local, domain = parts

    if not local or len(local) > 64:
        return False, "Email local part must be 1-64 characters"

    if "." not in domain:
        return False, "Email domain must contain a dot (.)"

    if any(not part for part in domain.split(".")):
        return False, "Email domain has invalid structure"

    if not EMAIL_PATTERN.match(email):
        return False, "Invalid email format"

    return True, None


def validate_phone(phone: str) -> tuple[bool, str | None]:
    """
    Validate phone number.

    Args:
        phone: Phone number to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not phone or not isinstance(phone, str):
        return False, "Phone is empty"

    phone = phone.strip()

    if len(phone) > 20:
        return False, "Phone is too long (maximum 20 characters)"

    digits = re.sub(r"\D", "", phone)

    if len(digits) < 10 or len(digits) > 15:
        return False, "Phone must be 10-15 digits"

    return True, None


def normalize_email(email: str) -> str:
    """
    Normalize email to lowercase for storage.

    Args:
        email: Email address

    Returns:
        Lowercase email

    Raises:
        ValueError: If email is invalid
    """
    is_valid, error = validate_email(email)
    if not is_valid:
        raise ValueError(error)

    return email.strip().lower()


def canonical_email(email: str) -> str:
    """
    Canonical form used for duplicate detection.

    Gmail treats d1.fashad@gmail.com and d1fashad@gmail.com as the same
    mailbox, so dots are dropped from the local part for those domains.

    Args:
        email: Email address

    Returns:
        Lowercase email with provider-ignored dots removed

    Raises:
        ValueError: If email is invalid
    """
    email = normalize_email(email)
    local, domain = email.split("@")
    if domain in DOTS_IGNORED_DOMAINS:
        local = local.replace(".", "")
    return f"{local}@{domain}"


def normalize_phone(phone: str) -> str:
    """
    Normalize phone number by removing formatting.

    Raises:
        ValueError: If phone is invalid
    """
    is_valid, error = validate_phone(phone)
    if not is_valid:
        raise ValueError(error)

    return re.sub(r"[\s\-().]", "", phone.strip())
