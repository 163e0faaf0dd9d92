"""
Notification delivery tasks.

Render ledger notifications and hand them to the mail relay. Retried by
Dramatiq with exponential backoff when the relay fails.
"""

import dramatiq
from dramatiq.middleware import CurrentMessage
from loguru import logger

from deeddraw.services.notification.templates import (
    RenderedMessage,
    render_etransfer_instructions,
    render_payment_approved,
)
from jobs.broker import broker  # noqa: F401  must be set before actors are declared

NOTIFICATIONS_QUEUE = "notifications"


def _hand_off(message: RenderedMessage) -> None:
    """Pass a rendered email to the mail relay."""
    current = CurrentMessage.get_current_message()
    logger.info(
        f"Email handed to mail relay: {message.subject}",
        extra={
            "to": message.to,
            "subject": message.subject,
            "message_id": current.message_id if current else None,
        },
    )


@dramatiq.actor(queue_name=NOTIFICATIONS_QUEUE, max_retries=5)
def send_etransfer_instructions(
    email: str, amount: str, certificate_number: str, user_name: str
) -> None:
    """
    Deliver e-transfer payment instructions.

    Args:
        email: Participant email
        amount: Amount due (decimal string)
        certificate_number: Certificate used as security answer
        user_name: Greeting name
    """
    message = render_etransfer_instructions(
        email=email,
        user_name=user_name,
        amount=amount,
        certificate_number=certificate_number,
    )
    _hand_off(message)


@dramatiq.actor(queue_name=NOTIFICATIONS_QUEUE, max_retries=5)
def send_payment_approved(
    email: str,
    amount: str,
    points: int,
    certificate_number: str,
    user_name: str,
) -> None:
    """Deliver payment approval confirmation."""
    message = render_payment_approved(
        email=email,
        user_name=user_name,
        amount=amount,
        points=points,
        certificate_number=certificate_number,
    )
    _hand_off(message)
