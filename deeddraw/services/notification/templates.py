"""
Notification message templates.

Plain-text renderings of the two outbound emails. Delivery belongs to the
mail relay.
"""

from dataclasses import dataclass
from decimal import Decimal

from deeddraw.config.settings import settings

ETRANSFER_INSTRUCTIONS_SUBJECT = "📧 E-Transfer Payment Instructions - DeedDraw"
PAYMENT_APPROVED_SUBJECT = "✅ Payment Approved - Your Entry is Now Active!"


@dataclass(frozen=True)
class RenderedMessage:
    """Email ready for the mail relay."""

    to: str
    subject: str
    body: str


def format_amount(amount: Decimal | str) -> str:
    """$3,800.00 style amount."""
    return f"${Decimal(str(amount)):,.2f}"


def render_etransfer_instructions(
    email: str, user_name: str, amount: Decimal | str, certificate_number: str
) -> RenderedMessage:
    """Render payment instructions for a newly registered entry."""
    body = "\n".join([
        f"Hi {user_name}!",
        "",
        "Thank you for registering your entry! Your entry is currently "
        "pending until we receive your e-Transfer payment.",
        "Please complete your payment within 24 hours to activate your entry.",
        "",
        "E-TRANSFER INSTRUCTIONS",
        "1. Open your online banking (Interac e-Transfer section)",
        f"2. Send e-Transfer to: {settings.payment_email}",
        f"3. Amount: {format_amount(amount)}",
        "4. Security question: Certificate Number?",
        f"5. Security answer: {certificate_number}",
        "",
        "Your entry will be verified within 24 hours after payment.",
        f"Need help? Contact us at {settings.support_email}",
    ])
    return RenderedMessage(
        to=email, subject=ETRANSFER_INSTRUCTIONS_SUBJECT, body=body
    )


def render_payment_approved(
    email: str,
    user_name: str,
    amount: Decimal | str,
    points: int,
    certificate_number: str,
) -> RenderedMessage:
    """Render approval confirmation for a verified entry."""
    body = "\n".join([
        f"Congratulations, {user_name}!",
        "",
        "Your payment has been verified and your entry is now active.",
        f"Certificate number: {certificate_number}",
        f"Points: {points}",
        f"Amount paid: {format_amount(amount)}",
        "",
        f"Questions? Contact us at {settings.support_email}",
    ])
    return RenderedMessage(to=email, subject=PAYMENT_APPROVED_SUBJECT, body=body)
