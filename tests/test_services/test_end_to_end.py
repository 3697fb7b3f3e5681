"""End-to-end escrow flows through the registry.

Mirrors a real second-hand deal: list, offer, accept, pay, confirm, withdraw.
"""

from __future__ import annotations

import threading

import pytest

from secondhand_shop.domain.enums import EventType
from secondhand_shop.domain.exceptions import ShopError
from secondhand_shop.services.payment_service import PaymentService
from secondhand_shop.services.registry import ShopRegistry
from secondhand_shop.services.shop_service import EscrowShop

PRICE = 10**16
OFFER = 5 * 10**15


def _assert_custody(shop: EscrowShop, received: int, withdrawn: int) -> None:
    held = shop.get_blocked_balance() + shop.get_available_balance()
    assert held <= received - withdrawn
    assert held <= shop.get_contract_balance()


class TestPerfectTransaction:
    def test_can_do_a_perfect_transaction(
        self, registry: ShopRegistry, seller1: str, buyer1: str
    ) -> None:
        shop = registry.create_shop(seller1)
        assert registry.get_shop(seller1) is shop

        contract_before = shop.get_contract_balance()
        owner_before = shop.get_owner_balance()

        sale_id = shop.create_sale(seller1, "Phone", PRICE)
        offer_id = shop.add_offer(buyer1, sale_id, OFFER)
        shop.response_to_offer(seller1, offer_id, True)
        assert shop.get_offer(offer_id).accepted is True

        shop.buy_the_sale(buyer1, offer_id, OFFER)
        assert shop.get_sale(sale_id).sold is True
        assert shop.get_blocked_balance() == OFFER
        assert shop.get_available_balance() == 0
        assert shop.get_contract_balance() > contract_before

        shop.confirm_receive(buyer1, offer_id)
        assert shop.get_blocked_balance() == 0
        assert shop.get_available_balance() == OFFER

        assert shop.withdraw(seller1) == OFFER
        assert shop.get_available_balance() == 0
        assert shop.get_contract_balance() == 0
        assert shop.get_owner_balance() == owner_before + OFFER

        assert [e.event_type for e in shop.get_events()] == [
            EventType.CREATE_SALE,
            EventType.CREATE_OFFER,
            EventType.ACCEPT_OFFER,
            EventType.PURCHASE,
            EventType.BUY,
            EventType.WITHDRAW,
        ]

    def test_withdraw_twice_leaves_zero(
        self, registry: ShopRegistry, seller1: str, buyer1: str
    ) -> None:
        shop = registry.create_shop(seller1)
        shop.create_sale(seller1, "Phone", PRICE)
        shop.add_offer(buyer1, 1, OFFER)
        shop.response_to_offer(seller1, 1, True)
        shop.buy_the_sale(buyer1, 1, OFFER)
        shop.confirm_receive(buyer1, 1)

        assert shop.withdraw(seller1) == OFFER
        assert shop.withdraw(seller1) == 0
        assert shop.get_available_balance() == 0
        assert shop.get_contract_balance() == 0


class TestCustodyInvariant:
    def test_invariant_holds_at_every_step(
        self, registry: ShopRegistry, seller1: str, buyer1: str, buyer2: str
    ) -> None:
        shop = registry.create_shop(seller1)
        received = withdrawn = 0

        for title in ("TV", "Radio", "Lamp"):
            shop.create_sale(seller1, title, 1_000)
        steps = [
            (buyer1, 1, 700),
            (buyer2, 2, 800),
            (buyer1, 3, 900),
        ]
        for buyer, sale_id, price in steps:
            offer_id = shop.add_offer(buyer, sale_id, price)
            shop.response_to_offer(seller1, offer_id, True)
            _assert_custody(shop, received, withdrawn)

            shop.buy_the_sale(buyer, offer_id, price)
            received += price
            _assert_custody(shop, received, withdrawn)

        shop.confirm_receive(buyer1, 1)
        _assert_custody(shop, received, withdrawn)
        withdrawn += shop.withdraw(seller1)
        _assert_custody(shop, received, withdrawn)

        shop.confirm_receive(buyer2, 2)
        shop.confirm_receive(buyer1, 3)
        withdrawn += shop.withdraw(seller1)
        _assert_custody(shop, received, withdrawn)

        assert withdrawn == received == 2_400
        assert shop.get_contract_balance() == 0

    def test_rejected_calls_never_break_custody(
        self, registry: ShopRegistry, seller1: str, seller2: str, buyer1: str, buyer2: str
    ) -> None:
        shop = registry.create_shop(seller1)
        shop.create_sale(seller1, "TV", 100)
        shop.add_offer(buyer1, 1, 50)
        shop.response_to_offer(seller1, 1, True)
        shop.buy_the_sale(buyer1, 1, 50)

        attempts = [
            lambda: shop.buy_the_sale(buyer2, 1, 50),
            lambda: shop.confirm_receive(buyer2, 1),
            lambda: shop.withdraw(seller2),
            lambda: shop.buy_the_sale(buyer1, 1, 50),
            lambda: shop.confirm_receive(buyer1, 2),
        ]
        for attempt in attempts:
            with pytest.raises(ShopError):
                attempt()
            _assert_custody(shop, received=50, withdrawn=0)

        assert shop.get_blocked_balance() == 50


class TestConcurrency:
    def test_only_one_of_many_racing_buyers_wins(
        self, payments: PaymentService, seller1: str
    ) -> None:
        shop = EscrowShop(owner=seller1, payments=payments)
        shop.create_sale(seller1, "Bike", 1_000)

        buyers = [f"0x{i:040x}" for i in range(1, 11)]
        for buyer in buyers:
            payments.deposit(buyer, 1_000)
            offer_id = shop.add_offer(buyer, 1, 500)
            shop.response_to_offer(seller1, offer_id, True)

        winners: list[str] = []
        errors: list[ShopError] = []
        barrier = threading.Barrier(len(buyers))

        def attempt(offer_id: int, buyer: str) -> None:
            barrier.wait()
            try:
                shop.buy_the_sale(buyer, offer_id, 500)
                winners.append(buyer)
            except ShopError as exc:
                errors.append(exc)

        threads = [
            threading.Thread(target=attempt, args=(offer_id, buyer))
            for offer_id, buyer in enumerate(buyers, start=1)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(winners) == 1
        assert {e.code for e in errors} == {"SALE_ALREADY_SOLD"}
        assert shop.get_blocked_balance() == 500
        assert shop.get_contract_balance() == 500
