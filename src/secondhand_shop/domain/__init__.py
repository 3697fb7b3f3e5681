"""Domain layer — pure business logic with zero framework dependencies."""

from secondhand_shop.domain.enums import (
    EventType,
    OfferStatus,
    SaleStatus,
)
from secondhand_shop.domain.exceptions import (
    DuplicateShopError,
    InsufficientFundsError,
    InsufficientPaymentError,
    InvalidStateTransitionError,
    NotAcceptedError,
    NotOwnerError,
    NotTheBuyerError,
    OfferNotFoundError,
    OfferNotPurchasedError,
    OwnerCannotOfferError,
    PaymentError,
    ReceiptAlreadyConfirmedError,
    SaleAlreadySoldError,
    SaleNotFoundError,
    ShopError,
    ShopValidationError,
)
from secondhand_shop.domain.models import Offer, Sale
from secondhand_shop.domain.protocols import (
    EventSink,
    PaymentGateway,
    ShopEvent,
)
from secondhand_shop.domain.state_machine import (
    OfferStateMachine,
    SaleStateMachine,
    validate_transition,
)

__all__ = [
    "EventType",
    "OfferStatus",
    "SaleStatus",
    "DuplicateShopError",
    "InsufficientFundsError",
    "InsufficientPaymentError",
    "InvalidStateTransitionError",
    "NotAcceptedError",
    "NotOwnerError",
    "NotTheBuyerError",
    "OfferNotFoundError",
    "OfferNotPurchasedError",
    "OwnerCannotOfferError",
    "PaymentError",
    "ReceiptAlreadyConfirmedError",
    "SaleAlreadySoldError",
    "SaleNotFoundError",
    "ShopError",
    "ShopValidationError",
    "Offer",
    "Sale",
    "EventSink",
    "PaymentGateway",
    "ShopEvent",
    "OfferStateMachine",
    "SaleStateMachine",
    "validate_transition",
]
