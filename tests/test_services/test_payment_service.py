"""Unit tests for the simulated PaymentService."""

from __future__ import annotations

import pytest

from secondhand_shop.domain.exceptions import InsufficientFundsError, PaymentError
from secondhand_shop.domain.protocols import PaymentGateway
from secondhand_shop.services.payment_service import PaymentService


class TestPaymentService:
    def test_satisfies_gateway_protocol(self) -> None:
        assert isinstance(PaymentService(), PaymentGateway)

    def test_new_wallet_is_empty(self) -> None:
        svc = PaymentService()
        address = svc.create_wallet()

        assert address.startswith("0x")
        assert len(address) == 42
        assert svc.balance_of(address) == 0

    def test_wallets_are_unique(self) -> None:
        svc = PaymentService()
        assert svc.create_wallet() != svc.create_wallet()

    def test_deposit_credits_account(self) -> None:
        svc = PaymentService()
        svc.deposit("0xa", 100)
        svc.deposit("0xa", 50)
        assert svc.balance_of("0xa") == 150

    def test_transfer_moves_funds(self) -> None:
        svc = PaymentService()
        svc.deposit("0xa", 100)

        tx_hash = svc.transfer("0xa", "0xb", 40)

        assert tx_hash.startswith("0x")
        assert len(tx_hash) == 66
        assert svc.balance_of("0xa") == 60
        assert svc.balance_of("0xb") == 40

    def test_overdraft_moves_nothing(self) -> None:
        svc = PaymentService()
        svc.deposit("0xa", 10)

        with pytest.raises(InsufficientFundsError) as exc_info:
            svc.transfer("0xa", "0xb", 11)

        assert exc_info.value.required == 11
        assert exc_info.value.available == 10
        assert svc.balance_of("0xa") == 10
        assert svc.balance_of("0xb") == 0

    @pytest.mark.parametrize("amount", [0, -1, 1.5, True, "10"])
    def test_invalid_transfer_amounts(self, amount: object) -> None:
        svc = PaymentService()
        svc.deposit("0xa", 10)
        with pytest.raises(PaymentError):
            svc.transfer("0xa", "0xb", amount)  # type: ignore[arg-type]

    def test_negative_deposit_rejected(self) -> None:
        with pytest.raises(PaymentError):
            PaymentService().deposit("0xa", -5)
