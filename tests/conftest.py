"""Shared test fixtures for the second-hand shop test suite.

Provides:
    - Named identities (registry deployer, two sellers, two buyers)
    - A simulated payment ledger with funded buyers
    - A registry and the shop opened by the first seller
"""

from __future__ import annotations

import pytest

from secondhand_shop.infrastructure.event_log import InMemoryEventLog
from secondhand_shop.services.payment_service import PaymentService
from secondhand_shop.services.registry import ShopRegistry
from secondhand_shop.services.shop_service import EscrowShop

BUYER_FUNDS = 10**18

# ---------------------------------------------------------------------------
# Identities
# ---------------------------------------------------------------------------

CREATOR = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
SELLER1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
SELLER2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
BUYER1 = "0x90F79bf6EB2c4f870365E785982E1f101E93b906"
BUYER2 = "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65"


@pytest.fixture
def creator() -> str:
    return CREATOR


@pytest.fixture
def seller1() -> str:
    return SELLER1


@pytest.fixture
def seller2() -> str:
    return SELLER2


@pytest.fixture
def buyer1() -> str:
    return BUYER1


@pytest.fixture
def buyer2() -> str:
    return BUYER2


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def payments() -> PaymentService:
    """Payment ledger where both buyers hold BUYER_FUNDS."""
    service = PaymentService()
    service.deposit(BUYER1, BUYER_FUNDS)
    service.deposit(BUYER2, BUYER_FUNDS)
    return service


@pytest.fixture
def observer() -> InMemoryEventLog:
    """External sink collecting the notifications of every shop."""
    return InMemoryEventLog()


@pytest.fixture
def registry(creator: str, payments: PaymentService, observer: InMemoryEventLog) -> ShopRegistry:
    return ShopRegistry(owner=creator, payments=payments, sinks=[observer])


@pytest.fixture
def shop(registry: ShopRegistry, seller1: str) -> EscrowShop:
    """The shop opened by seller1."""
    return registry.create_shop(seller1)


@pytest.fixture
def accepted_offer(shop: EscrowShop, seller1: str, buyer1: str) -> int:
    """Offer 1 (buyer1, 50_000) on sale 1 ("TV", 1_000_000), accepted."""
    sale_id = shop.create_sale(seller1, "TV", 1_000_000)
    offer_id = shop.add_offer(buyer1, sale_id, 50_000)
    shop.response_to_offer(seller1, offer_id, True)
    return offer_id
