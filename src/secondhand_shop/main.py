"""Composition root for the second-hand marketplace.

Wires settings, logging, the payment ledger and the shop registry together.

Usage:
    from secondhand_shop.main import create_marketplace

    registry = create_marketplace()
    shop = registry.create_shop("0xSeller...")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from secondhand_shop.config import Settings, get_settings
from secondhand_shop.logging_config import get_logger, setup_logging
from secondhand_shop.services.payment_service import PaymentService
from secondhand_shop.services.registry import ShopRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from secondhand_shop.domain.protocols import EventSink, PaymentGateway


def create_marketplace(
    settings: Settings | None = None,
    payments: PaymentGateway | None = None,
    sinks: Iterable[EventSink] = (),
) -> ShopRegistry:
    """Create a configured ShopRegistry.

    Args:
        settings: Defaults to the cached environment settings.
        payments: Defaults to a fresh simulated PaymentService.
        sinks: External observers of every shop's notifications.
    """
    settings = settings or get_settings()

    setup_logging(log_level=settings.app_log_level, json_logs=settings.json_logs)
    logger = get_logger(__name__)

    registry = ShopRegistry(
        owner=settings.registry_owner,
        payments=payments or PaymentService(),
        sinks=sinks,
    )
    logger.info("marketplace.started", env=settings.app_env, registry_owner=registry.get_owner())
    return registry
