"""
Dramatiq notification publisher.

Enqueues ledger events onto the notifications queue.
"""

from deeddraw.services.notification.events import (
    ETransferInstructionsEvent,
    NotificationEvent,
    PaymentApprovedEvent,
)


class DramatiqPublisher:
    """Publishes events as Dramatiq messages."""

    def publish(self, event: NotificationEvent) -> None:
        """
        Enqueue delivery of event.

        Raises:
            TypeError: If the event type has no delivery actor
        """
        # Imported lazily: importing the actors configures the broker
        from jobs.tasks.notification_delivery import (
            send_etransfer_instructions,
            send_payment_approved,
        )

        if isinstance(event, ETransferInstructionsEvent):
            send_etransfer_instructions.send(**event.to_message())
        elif isinstance(event, PaymentApprovedEvent):
            send_payment_approved.send(**event.to_message())
        else:
            raise TypeError(f"No delivery actor for {type(event).__name__}")
