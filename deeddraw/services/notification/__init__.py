"""
Notification services.

Ledger events, their rendering and best-effort dispatch.
"""

from deeddraw.services.notification.dispatcher import (
    NotificationDispatcher,
    NotificationPublisher,
)
from deeddraw.services.notification.events import (
    ETransferInstructionsEvent,
    NotificationEvent,
    PaymentApprovedEvent,
)
from deeddraw.services.notification.publisher import DramatiqPublisher
from deeddraw.services.notification.templates import (
    RenderedMessage,
    render_etransfer_instructions,
    render_payment_approved,
)


__all__ = [
    "DramatiqPublisher",
    "ETransferInstructionsEvent",
    "NotificationDispatcher",
    "NotificationEvent",
    "NotificationPublisher",
    "PaymentApprovedEvent",
    "RenderedMessage",
    "render_etransfer_instructions",
    "render_payment_approved",
]
