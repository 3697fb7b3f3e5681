"""Payment Service — simulated custody ledger.

Holds the external balances of every identity and every shop custody account,
and moves funds between them. Transaction hashes are fake, generated the same
way a simulated on-chain settlement would be.

A transfer either moves the full amount or raises without touching any
balance.
"""

from __future__ import annotations

import threading
import uuid
from collections import defaultdict

from secondhand_shop.domain.exceptions import InsufficientFundsError, PaymentError
from secondhand_shop.logging_config import get_logger

logger = get_logger(__name__)


def _fake_tx_hash() -> str:
    return "0x" + uuid.uuid4().hex + uuid.uuid4().hex


class PaymentService:
    """In-memory implementation of the PaymentGateway protocol."""

    def __init__(self) -> None:
        self._balances: defaultdict[str, int] = defaultdict(int)
        self._lock = threading.Lock()

    def create_wallet(self) -> str:
        """Return a fresh, empty account address."""
        address = "0x" + uuid.uuid4().hex + uuid.uuid4().hex[:8]
        logger.debug("payment.wallet_created", address=address)
        return address

    def deposit(self, account: str, amount: int) -> str:
        """Credit ``account`` with new funds from outside the marketplace."""
        self._check_amount(amount)
        with self._lock:
            self._balances[account] += amount
            balance = self._balances[account]
        tx_hash = _fake_tx_hash()
        logger.info("payment.deposit", account=account, amount=amount, balance=balance)
        return tx_hash

    def balance_of(self, account: str) -> int:
        with self._lock:
            return self._balances.get(account, 0)

    def transfer(self, sender: str, recipient: str, amount: int) -> str:
        """Move ``amount`` from ``sender`` to ``recipient``.

        Returns:
            The settlement transaction hash.

        Raises:
            PaymentError: If ``amount`` is not a positive integer.
            InsufficientFundsError: If ``sender`` can't cover ``amount``.
        """
        self._check_amount(amount)
        if amount == 0:
            raise PaymentError("Transfer amount must be positive")

        with self._lock:
            available = self._balances.get(sender, 0)
            if available < amount:
                logger.warning(
                    "payment.transfer_rejected",
                    sender=sender,
                    required=amount,
                    available=available,
                )
                raise InsufficientFundsError(sender, required=amount, available=available)
            self._balances[sender] = available - amount
            self._balances[recipient] += amount

        tx_hash = _fake_tx_hash()
        logger.info(
            "payment.transfer",
            tx_hash=tx_hash,
            amount=amount,
            from_wallet=sender,
            to_wallet=recipient,
        )
        return tx_hash

    @staticmethod
    def _check_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise PaymentError(f"Invalid amount: {amount!r}")
