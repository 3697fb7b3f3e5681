"""Application services — use case orchestration."""

from secondhand_shop.services.payment_service import PaymentService
from secondhand_shop.services.registry import ShopRegistry
from secondhand_shop.services.shop_service import EscrowShop

__all__ = ["EscrowShop", "PaymentService", "ShopRegistry"]
