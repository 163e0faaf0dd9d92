"""
Outbound notification events.

Emitted by the ledger after a successful commit. Amounts are Decimals here
and serialized as strings for the queue.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class ETransferInstructionsEvent:
    """Entry registered: tell the participant how to pay."""

    email: str
    amount: Decimal
    certificate_number: str
    user_name: str

    def to_message(self) -> dict[str, Any]:
        """JSON-safe payload."""
        payload = asdict(self)
        payload["amount"] = str(self.amount)
        return payload


@dataclass(frozen=True)
class PaymentApprovedEvent:
    """Payment verified: the entry is now active."""

    email: str
    amount: Decimal
    points: int
    certificate_number: str
    user_name: str

    def to_message(self) -> dict[str, Any]:
        """JSON-safe payload."""
        payload = asdict(self)
        payload["amount"] = str(self.amount)
        return payload


NotificationEvent = ETransferInstructionsEvent | PaymentApprovedEvent
