"""Domain enumerations for the second-hand shop.

These enums define the canonical states and notification types used throughout
the system. They are framework-agnostic.
"""

import enum


class SaleStatus(enum.StrEnum):
    """Lifecycle states of a sale listing.

    See domain/state_machine.py for the transition table.
    """

    LISTED = "LISTED"
    SOLD = "SOLD"


class OfferStatus(enum.StrEnum):
    """Lifecycle states of a buyer's offer.

    A declined offer stays PENDING; there is no rejected state.
    """

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    PURCHASED = "PURCHASED"


class EventType(enum.StrEnum):
    """Notifications emitted by a shop.

    Every successful state-changing operation produces exactly one event,
    except a declined offer and an empty withdrawal, which produce none.
    """

    # Negotiation
    CREATE_SALE = "CreateSale"
    CREATE_OFFER = "CreateOffer"
    ACCEPT_OFFER = "AcceptOffer"

    # Custody
    PURCHASE = "Purchase"
    BUY = "Buy"
    WITHDRAW = "Withdraw"
