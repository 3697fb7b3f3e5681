"""Infrastructure — in-memory adapters for the shop's collaborators."""

from secondhand_shop.infrastructure.event_log import InMemoryEventLog

__all__ = ["InMemoryEventLog"]
