"""Escrow Shop — the negotiation and custody workflow of one seller.

Coordinates between:
    - Domain state machines (sale and offer lifecycle guards)
    - The payment gateway (custody account, transfers)
    - The event log and any external sinks (notifications)

Every public operation takes the caller's identity explicitly and runs under
the shop's lock. Preconditions are all checked before anything is mutated,
and funds are moved before the internal ledger is updated, so a rejected
operation or a failed transfer leaves the shop exactly as it was.

Custody accounting:
    buy_the_sale     payment -> blocked_balance
    confirm_receive  one offer's payment: blocked -> available
    withdraw         available_balance -> owner
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from statemachine.exceptions import TransitionNotAllowed

from secondhand_shop.domain.enums import EventType, OfferStatus, SaleStatus
from secondhand_shop.domain.exceptions import (
    InsufficientPaymentError,
    InvalidStateTransitionError,
    NotAcceptedError,
    NotOwnerError,
    NotTheBuyerError,
    OfferNotFoundError,
    OfferNotPurchasedError,
    OwnerCannotOfferError,
    ReceiptAlreadyConfirmedError,
    SaleAlreadySoldError,
    SaleNotFoundError,
)
from secondhand_shop.domain.models import Offer, Sale
from secondhand_shop.domain.protocols import ShopEvent
from secondhand_shop.domain.state_machine import OfferStateMachine, SaleStateMachine
from secondhand_shop.infrastructure.event_log import InMemoryEventLog
from secondhand_shop.logging_config import get_logger
from secondhand_shop.schemas.shop import (
    AddOfferRequest,
    BalanceResponse,
    BuySaleRequest,
    CreateSaleRequest,
    OfferResponse,
    OfferStatusResponse,
    RespondToOfferRequest,
    SaleResponse,
    parse_request,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from secondhand_shop.domain.protocols import EventSink, PaymentGateway

logger = get_logger(__name__)


class EscrowShop:
    """Sales, offers and escrowed funds of a single owner."""

    def __init__(
        self,
        owner: str,
        payments: PaymentGateway,
        address: str | None = None,
        sinks: Iterable[EventSink] = (),
    ) -> None:
        self._owner = owner
        self._payments = payments
        self._address = address or payments.create_wallet()
        self._sinks = list(sinks)
        self._event_log = InMemoryEventLog()
        self._lock = threading.RLock()

        self._next_sale_id = 1
        self._next_offer_id = 1
        self._sales: dict[int, Sale] = {}
        self._offers: dict[int, Offer] = {}
        self._blocked_balance = 0
        self._available_balance = 0

        self._log = logger.bind(shop=self._address, owner=self._owner)

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def address(self) -> str:
        return self._address

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def create_sale(self, caller: str, title: str, asking_price: int) -> int:
        """List a new item. Owner only. Returns the new sale id."""
        request = parse_request(CreateSaleRequest, title=title, asking_price=asking_price)

        with self._lock:
            self._require_owner(caller)

            sale_id = self._next_sale_id
            self._sales[sale_id] = Sale(
                sale_id=sale_id,
                title=request.title,
                asking_price=request.asking_price,
            )
            self._next_sale_id += 1

            self._emit(EventType.CREATE_SALE, actor=caller, owner=self._owner, sale_id=sale_id)

        self._log.info("shop.sale_created", sale_id=sale_id, asking_price=request.asking_price)
        return sale_id

    # ------------------------------------------------------------------
    # Negotiation
    # ------------------------------------------------------------------

    def add_offer(self, caller: str, sale_id: int, price_offered: int) -> int:
        """Propose a price for an unsold sale. Anyone but the owner. Returns the offer id."""
        request = parse_request(AddOfferRequest, sale_id=sale_id, price_offered=price_offered)

        with self._lock:
            if caller == self._owner:
                raise OwnerCannotOfferError(caller)
            sale = self._get_sale_or_raise(request.sale_id)
            if sale.sold:
                raise SaleAlreadySoldError(sale.sale_id)

            offer_id = self._next_offer_id
            self._offers[offer_id] = Offer(
                offer_id=offer_id,
                sale_id=sale.sale_id,
                price_offered=request.price_offered,
                buyer=caller,
            )
            self._next_offer_id += 1

            self._emit(
                EventType.CREATE_OFFER,
                actor=caller,
                buyer=caller,
                offer_id=offer_id,
                price_offered=request.price_offered,
            )

        self._log.info(
            "shop.offer_added",
            offer_id=offer_id,
            sale_id=sale.sale_id,
            buyer=caller,
            price_offered=request.price_offered,
        )
        return offer_id

    def response_to_offer(self, caller: str, offer_id: int, accept: bool) -> None:
        """Accept an offer, or leave it pending. Owner only.

        Declining changes nothing: a declined offer is indistinguishable from
        one that was never answered.
        """
        request = parse_request(RespondToOfferRequest, offer_id=offer_id, accept=accept)

        with self._lock:
            self._require_owner(caller)
            offer = self._get_offer_or_raise(request.offer_id)

            if not request.accept:
                self._log.info("shop.offer_declined", offer_id=offer.offer_id)
                return

            offer.status = OfferStatus(
                self._fire_transition(OfferStateMachine, offer.status, "seller_accepts")
            )
            self._emit(
                EventType.ACCEPT_OFFER,
                actor=caller,
                buyer=offer.buyer,
                offer_id=offer.offer_id,
            )

        self._log.info("shop.offer_accepted", offer_id=offer.offer_id, buyer=offer.buyer)

    # ------------------------------------------------------------------
    # Custody
    # ------------------------------------------------------------------

    def buy_the_sale(self, caller: str, offer_id: int, payment_amount: int) -> str | None:
        """Pay for an accepted offer. The payment is held as blocked balance.

        Returns:
            The transaction hash of the payment, or None for a zero-priced
            offer paid with nothing.
        """
        request = parse_request(BuySaleRequest, offer_id=offer_id, payment_amount=payment_amount)
        amount = request.payment_amount

        with self._lock:
            offer = self._get_offer_or_raise(request.offer_id)
            if not offer.accepted:
                raise NotAcceptedError(offer.offer_id)
            if caller != offer.buyer:
                raise NotTheBuyerError(offer.offer_id, caller)
            if amount < offer.price_offered:
                raise InsufficientPaymentError(
                    offer.offer_id, required=offer.price_offered, paid=amount
                )
            sale = self._sales[offer.sale_id]
            if sale.sold:
                raise SaleAlreadySoldError(sale.sale_id)

            new_offer_status = self._fire_transition(
                OfferStateMachine, offer.status, "buyer_pays"
            )
            new_sale_status = self._fire_transition(SaleStateMachine, sale.status, "purchased")

            # Funds first: a rejected transfer must leave the ledger untouched
            tx_hash = self._payments.transfer(caller, self._address, amount) if amount else None

            offer.status = OfferStatus(new_offer_status)
            offer.amount_paid = amount
            sale.status = SaleStatus(new_sale_status)
            self._blocked_balance += amount

            self._emit(
                EventType.PURCHASE,
                actor=caller,
                buyer=caller,
                offer_id=offer.offer_id,
                price=amount,
            )

        self._log.info(
            "shop.purchased",
            offer_id=offer.offer_id,
            sale_id=sale.sale_id,
            buyer=caller,
            amount=amount,
            tx_hash=tx_hash,
        )
        return tx_hash

    def confirm_receive(self, caller: str, offer_id: int) -> int:
        """Buyer confirms the item arrived; release the payment to the owner.

        Moves exactly the amount paid for ``offer_id`` from blocked to
        available, once. Returns the released amount.
        """
        with self._lock:
            offer = self._get_offer_or_raise(offer_id)
            if caller != offer.buyer:
                raise NotTheBuyerError(offer.offer_id, caller)
            if not offer.purchased:
                raise OfferNotPurchasedError(offer.offer_id)
            if offer.released:
                raise ReceiptAlreadyConfirmedError(offer.offer_id)

            amount = offer.amount_paid
            self._blocked_balance -= amount
            self._available_balance += amount
            offer.released = True

            self._emit(
                EventType.BUY,
                actor=caller,
                buyer=caller,
                offer_id=offer.offer_id,
                amount=amount,
            )

        self._log.info("shop.receipt_confirmed", offer_id=offer.offer_id, amount=amount)
        return amount

    # name used by the published shop interface
    comfirm_receive = confirm_receive

    def withdraw(self, caller: str) -> int:
        """Send the whole available balance to the owner. Owner only.

        Returns the amount withdrawn; 0 (and no transfer, no event) when
        nothing is available.
        """
        with self._lock:
            self._require_owner(caller)

            amount = self._available_balance
            if amount == 0:
                self._log.info("shop.withdraw_noop")
                return 0

            tx_hash = self._payments.transfer(self._address, self._owner, amount)
            self._available_balance = 0

            self._emit(EventType.WITHDRAW, actor=caller, owner=self._owner, amount=amount)

        self._log.info("shop.withdrawn", amount=amount, tx_hash=tx_hash)
        return amount

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------

    def get_owner(self) -> str:
        return self._owner

    def get_sale(self, sale_id: int) -> SaleResponse:
        with self._lock:
            return SaleResponse.model_validate(self._get_sale_or_raise(sale_id))

    def get_offer(self, offer_id: int) -> OfferResponse:
        with self._lock:
            return OfferResponse.model_validate(self._get_offer_or_raise(offer_id))

    def get_offers_for_sale(self, sale_id: int) -> list[OfferResponse]:
        """All offers made on ``sale_id``, oldest first."""
        with self._lock:
            self._get_sale_or_raise(sale_id)
            return [
                OfferResponse.model_validate(o)
                for o in self._offers.values()
                if o.sale_id == sale_id
            ]

    def get_offer_status(self, offer_id: int) -> OfferStatusResponse:
        """Offer status with the lifecycle events still allowed from it."""
        with self._lock:
            offer = self._get_offer_or_raise(offer_id)
            sm = OfferStateMachine(current_status=offer.status)
            return OfferStatusResponse(
                offer_id=offer.offer_id,
                status=offer.status,
                released=offer.released,
                allowed_events=sm.get_allowed_events(),
            )

    def get_blocked_balance(self) -> int:
        with self._lock:
            return self._blocked_balance

    def get_available_balance(self) -> int:
        with self._lock:
            return self._available_balance

    def get_contract_balance(self) -> int:
        """Funds the custody account actually holds."""
        return self._payments.balance_of(self._address)

    def get_owner_balance(self) -> int:
        """The owner's external balance. Informational only."""
        return self._payments.balance_of(self._owner)

    def get_balances(self) -> BalanceResponse:
        with self._lock:
            return BalanceResponse(
                shop_address=self._address,
                owner=self._owner,
                blocked_balance=self._blocked_balance,
                available_balance=self._available_balance,
                contract_balance=self.get_contract_balance(),
            )

    def get_events(
        self,
        event_type: EventType | None = None,
        offer_id: int | None = None,
    ) -> list[ShopEvent]:
        """Audit trail of this shop, optionally filtered."""
        if offer_id is None:
            events = self._event_log.get_all()
        else:
            events = self._event_log.get_by_offer(offer_id)
        if event_type is not None:
            events = [e for e in events if e.event_type == event_type]
        return events

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _require_owner(self, caller: str) -> None:
        if caller != self._owner:
            raise NotOwnerError(caller)

    def _get_sale_or_raise(self, sale_id: int) -> Sale:
        sale = self._sales.get(sale_id)
        if sale is None:
            raise SaleNotFoundError(sale_id)
        return sale

    def _get_offer_or_raise(self, offer_id: int) -> Offer:
        offer = self._offers.get(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)
        return offer

    @staticmethod
    def _fire_transition(
        machine_cls: type[SaleStateMachine] | type[OfferStateMachine],
        current_status: str,
        event_name: str,
    ) -> str:
        """Validate a transition and return the resulting status.

        Raises InvalidStateTransitionError if the transition is illegal.
        Nothing is mutated here; the caller applies the returned status.
        """
        sm = machine_cls(current_status=current_status)
        try:
            getattr(sm, event_name)()
        except TransitionNotAllowed as err:
            raise InvalidStateTransitionError(current_status, event_name) from err
        return sm.status

    def _emit(self, event_type: EventType, actor: str, **payload: Any) -> None:
        """Record an event in the audit trail and forward it to the sinks.

        Must be called with the lock held, after the state change.
        """
        event = ShopEvent(
            sequence=len(self._event_log) + 1,
            event_type=event_type,
            shop_address=self._address,
            actor=actor,
            payload=payload,
            created_at=datetime.now(UTC),
        )
        self._event_log.publish(event)

        for sink in self._sinks:
            try:
                sink.publish(event)
            except Exception:
                # The operation is committed; an observer can't undo it
                self._log.exception(
                    "shop.event_sink_failed",
                    event_type=event_type.value,
                    sink=type(sink).__name__,
                )
