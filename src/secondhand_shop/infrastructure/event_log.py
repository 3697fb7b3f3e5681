"""In-memory, append-only event log.

Every shop keeps one of these as its audit trail. It satisfies the EventSink
protocol, so the same class can also be handed to a registry as an external
observer that collects the notifications of every shop.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from secondhand_shop.domain.enums import EventType
    from secondhand_shop.domain.protocols import ShopEvent


class InMemoryEventLog:
    """Append-only store of ShopEvents in publication order."""

    def __init__(self) -> None:
        self._events: list[ShopEvent] = []
        self._lock = threading.Lock()

    def publish(self, event: ShopEvent) -> None:
        """Append an event. This is the ONLY write operation allowed."""
        with self._lock:
            self._events.append(event)

    def get_all(self) -> list[ShopEvent]:
        with self._lock:
            return list(self._events)

    def get_by_type(self, event_type: EventType) -> list[ShopEvent]:
        with self._lock:
            return [e for e in self._events if e.event_type == event_type]

    def get_by_offer(self, offer_id: int) -> list[ShopEvent]:
        """Fetch all events whose payload references ``offer_id``."""
        with self._lock:
            return [e for e in self._events if e.payload.get("offer_id") == offer_id]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
