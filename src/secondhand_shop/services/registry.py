"""Shop Registry — one shop per owning identity.

The registry is consulted once per seller, to open their shop. Everything
after that happens on the EscrowShop directly.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from secondhand_shop.domain.exceptions import DuplicateShopError
from secondhand_shop.logging_config import get_logger
from secondhand_shop.services.shop_service import EscrowShop

if TYPE_CHECKING:
    from collections.abc import Iterable

    from secondhand_shop.domain.protocols import EventSink, PaymentGateway

logger = get_logger(__name__)


class ShopRegistry:
    """Maps an owner to at most one EscrowShop. Entries are never removed."""

    def __init__(
        self,
        owner: str,
        payments: PaymentGateway,
        sinks: Iterable[EventSink] = (),
    ) -> None:
        """
        Args:
            owner: Identity that deployed the registry. It gets no special
                rights over the shops.
            payments: Gateway every created shop holds custody through.
            sinks: Extra event sinks handed to every created shop.
        """
        self._owner = owner
        self._payments = payments
        self._sinks = list(sinks)
        self._shops_by_owner: dict[str, EscrowShop] = {}
        self._lock = threading.Lock()

    def create_shop(self, caller: str) -> EscrowShop:
        """Open a shop owned by ``caller``.

        Raises:
            DuplicateShopError: If ``caller`` already owns a shop.
        """
        with self._lock:
            if caller in self._shops_by_owner:
                raise DuplicateShopError(caller)
            shop = EscrowShop(owner=caller, payments=self._payments, sinks=self._sinks)
            self._shops_by_owner[caller] = shop

        logger.info("registry.shop_created", owner=caller, shop=shop.address)
        return shop

    def get_shop(self, owner: str) -> EscrowShop | None:
        with self._lock:
            return self._shops_by_owner.get(owner)

    def get_owner(self) -> str:
        return self._owner

    def __len__(self) -> int:
        with self._lock:
            return len(self._shops_by_owner)
