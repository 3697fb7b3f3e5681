"""Second-hand marketplace: per-seller shops with escrowed payments."""

from secondhand_shop.main import create_marketplace
from secondhand_shop.services import EscrowShop, PaymentService, ShopRegistry

__all__ = ["EscrowShop", "PaymentService", "ShopRegistry", "create_marketplace"]
