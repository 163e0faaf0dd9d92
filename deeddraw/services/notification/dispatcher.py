"""
Notification dispatcher.

Best-effort delivery of ledger events: a failing publisher is logged and
never propagates into (or rolls back) the ledger operation that emitted the
event.
"""

from typing import Protocol

from loguru import logger

from deeddraw.services.notification.events import NotificationEvent
from deeddraw.services.notification.publisher import DramatiqPublisher


class NotificationPublisher(Protocol):
    """Anything that can hand an event to a delivery channel."""

    def publish(self, event: NotificationEvent) -> None:
        ...


class NotificationDispatcher:
    """Wraps a publisher and swallows its failures."""

    def __init__(self, publisher: NotificationPublisher | None = None) -> None:
        """
        Initialize dispatcher.

        Args:
            publisher: Delivery channel, DramatiqPublisher by default
        """
        self.publisher = publisher or DramatiqPublisher()

    def dispatch(self, event: NotificationEvent) -> bool:
        """
        Publish event.

        Args:
            event: Ledger event

        Returns:
            True if published, False if the publisher failed
        """
        event_type = type(event).__name__
        try:
            self.publisher.publish(event)
        except Exception as e:
            logger.error(
                f"Failed to publish {event_type}: {e}",
                extra={
                    "event_type": event_type,
                    "certificate_number": event.certificate_number,
                },
            )
            return False

        logger.info(
            f"Published {event_type}",
            extra={
                "event_type": event_type,
                "certificate_number": event.certificate_number,
            },
        )
        return True
