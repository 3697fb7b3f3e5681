"""Collaborator protocols for the shop core.

The shop never moves money or delivers notifications itself. It calls into
these two interfaces. They are Protocols (structural subtyping) so concrete
implementations don't need to inherit from a base class.

Concrete implementations:
    - services/payment_service.py       (PaymentService, simulated ledger)
    - infrastructure/event_log.py       (InMemoryEventLog)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from secondhand_shop.domain.enums import EventType


@dataclass(frozen=True)
class ShopEvent:
    """A notification emitted by a shop after a committed operation.

    Attributes:
        sequence: Per-shop, 1-based, gap-free counter.
        event_type: Which notification this is.
        shop_address: Custody address of the emitting shop.
        actor: Identity whose call produced the event.
        payload: Notification arguments, e.g. {"offer_id": 1, "amount": 5}.
        created_at: UTC timestamp.
    """

    sequence: int
    event_type: EventType
    shop_address: str
    actor: str
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "sequence": self.sequence,
            "event_type": self.event_type.value,
            "shop_address": self.shop_address,
            "actor": self.actor,
            "payload": dict(self.payload),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@runtime_checkable
class EventSink(Protocol):
    """Anything that can receive shop notifications."""

    def publish(self, event: ShopEvent) -> None:
        """Deliver one event. Called after the operation has committed."""
        ...


@runtime_checkable
class PaymentGateway(Protocol):
    """The fund-transfer substrate the shop holds custody through."""

    def create_wallet(self) -> str:
        """Return the address of a new, empty custody account."""
        ...

    def balance_of(self, account: str) -> int:
        """Return the funds currently held by ``account``."""
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> str:
        """Move ``amount`` from ``sender`` to ``recipient``.

        Returns:
            A transaction hash.

        Raises:
            PaymentError: If the transfer is rejected. No funds move.
        """
        ...
