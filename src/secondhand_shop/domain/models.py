"""Sale and Offer records owned by a single shop.

Plain dataclasses: the shop mutates them in place under its lock and hands
callers pydantic snapshots (see schemas/shop.py), never the records themselves.
"""

from __future__ import annotations

from dataclasses import dataclass

from secondhand_shop.domain.enums import OfferStatus, SaleStatus


@dataclass
class Sale:
    """A listing created by the shop owner.

    Attributes:
        sale_id: Positive id allocated by the shop; never reused.
        title: Free-text label for the item.
        asking_price: Price the owner asks for, in the ledger's integer unit.
        status: LISTED until the first successful purchase, then SOLD.
    """

    sale_id: int
    title: str
    asking_price: int
    status: SaleStatus = SaleStatus.LISTED

    @property
    def sold(self) -> bool:
        return self.status == SaleStatus.SOLD


@dataclass
class Offer:
    """A buyer's proposed price against one sale.

    Attributes:
        offer_id: Positive id allocated by the shop; never reused.
        sale_id: The sale this offer targets.
        price_offered: Minimum amount the buyer must pay once accepted.
        buyer: Identity that made the offer.
        status: PENDING -> ACCEPTED -> PURCHASED.
        amount_paid: What the buyer actually paid (0 until purchased).
        released: True once the buyer confirmed receipt and the funds were
            moved from blocked to available.
    """

    offer_id: int
    sale_id: int
    price_offered: int
    buyer: str
    status: OfferStatus = OfferStatus.PENDING
    amount_paid: int = 0
    released: bool = False

    @property
    def accepted(self) -> bool:
        return self.status in (OfferStatus.ACCEPTED, OfferStatus.PURCHASED)

    @property
    def purchased(self) -> bool:
        return self.status == OfferStatus.PURCHASED
