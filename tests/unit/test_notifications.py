"""
Tests for notification dispatch and rendering.

Dispatch is best-effort: a failing publisher must never raise into the
ledger operation that emitted the event.
"""

from decimal import Decimal

import pytest
from loguru import logger

from deeddraw.config.settings import settings
from deeddraw.services.notification import (
    ETransferInstructionsEvent,
    NotificationDispatcher,
    PaymentApprovedEvent,
    render_etransfer_instructions,
    render_payment_approved,
)
from deeddraw.services.notification.templates import (
    ETRANSFER_INSTRUCTIONS_SUBJECT,
    PAYMENT_APPROVED_SUBJECT,
    format_amount,
)


class FailingPublisher:
    """Publisher whose delivery channel is down."""

    def publish(self, event) -> None:
        raise ConnectionError("mail relay unreachable")


@pytest.fixture
def instructions_event():
    return ETransferInstructionsEvent(
        email="bob@example.com",
        amount=Decimal("3800.00"),
        certificate_number="DD-2025-000001",
        user_name="Bob",
    )


@pytest.fixture
def error_logs():
    """Collect ERROR-level loguru records."""
    records = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="ERROR"
    )
    yield records
    logger.remove(handler_id)


class TestNotificationDispatcher:
    """Test best-effort dispatch."""

    def test_publishes_event(self, dispatcher, publisher, instructions_event):
        assert dispatcher.dispatch(instructions_event) is True
        assert publisher.events == [instructions_event]

    def test_publisher_failure_swallowed(self, instructions_event, error_logs):
        """Failure is logged and reported as False."""
        dispatcher = NotificationDispatcher(FailingPublisher())

        assert dispatcher.dispatch(instructions_event) is False
        assert len(error_logs) == 1
        assert "ETransferInstructionsEvent" in error_logs[0]["message"]


class TestEvents:
    """Test queue payloads."""

    def test_amount_serialized_as_string(self, instructions_event):
        assert instructions_event.to_message() == {
            "email": "bob@example.com",
            "amount": "3800.00",
            "certificate_number": "DD-2025-000001",
            "user_name": "Bob",
        }

    def test_payment_approved_payload(self):
        event = PaymentApprovedEvent(
            email="bob@example.com",
            amount=Decimal("2000.00"),
            points=1,
            certificate_number="DD-2025-000002",
            user_name="Bob",
        )

        message = event.to_message()

        assert message["points"] == 1
        assert message["amount"] == "2000.00"


class TestTemplates:
    """Test email rendering."""

    def test_format_amount(self):
        assert format_amount(Decimal("3800")) == "$3,800.00"
        assert format_amount("2000.5") == "$2,000.50"

    def test_etransfer_instructions(self):
        """Certificate number is the security answer."""
        message = render_etransfer_instructions(
            email="bob@example.com",
            user_name="Bob",
            amount="3800.00",
            certificate_number="DD-2025-000001",
        )

        assert message.to == "bob@example.com"
        assert message.subject == ETRANSFER_INSTRUCTIONS_SUBJECT
        assert "Hi Bob!" in message.body
        assert f"Send e-Transfer to: {settings.payment_email}" in message.body
        assert "Amount: $3,800.00" in message.body
        assert "Security answer: DD-2025-000001" in message.body

    def test_payment_approved(self):
        message = render_payment_approved(
            email="bob@example.com",
            user_name="Bob",
            amount=Decimal("4000"),
            points=2,
            certificate_number="DD-2025-000003",
        )

        assert message.subject == PAYMENT_APPROVED_SUBJECT
        assert "Certificate number: DD-2025-000003" in message.body
        assert "Points: 2" in message.body
        assert "Amount paid: $4,000.00" in message.body
