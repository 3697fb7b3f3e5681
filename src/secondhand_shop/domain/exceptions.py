"""Domain exceptions for the second-hand shop.

These exceptions are framework-agnostic and represent business rule violations.
Every failed operation raises one of them before any state is mutated.
"""


class ShopError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "SHOP_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


# --- Authorization Errors ---


class NotOwnerError(ShopError):
    """Raised when a non-owner calls an owner-only operation."""

    def __init__(self, caller: str) -> None:
        super().__init__(
            message=f"Owner only can run this transaction (caller: {caller})",
            code="NOT_OWNER",
        )
        self.caller = caller


class OwnerCannotOfferError(ShopError):
    """Raised when the shop owner tries to make an offer on their own sale."""

    def __init__(self, caller: str) -> None:
        super().__init__(
            message="You can not create offer as you are the owner",
            code="OWNER_CANNOT_OFFER",
        )
        self.caller = caller


class NotTheBuyerError(ShopError):
    """Raised when someone other than the offer's buyer acts on it."""

    def __init__(self, offer_id: int, caller: str) -> None:
        super().__init__(
            message=f"You are not the buyer of offer {offer_id}",
            code="NOT_THE_BUYER",
        )
        self.offer_id = offer_id
        self.caller = caller


# --- Lookup Errors ---


class SaleNotFoundError(ShopError):
    """Raised when a sale ID does not exist."""

    def __init__(self, sale_id: int) -> None:
        super().__init__(
            message=f"This sale does not exist: {sale_id}",
            code="SALE_NOT_FOUND",
        )
        self.sale_id = sale_id


class OfferNotFoundError(ShopError):
    """Raised when an offer ID does not exist."""

    def __init__(self, offer_id: int) -> None:
        super().__init__(
            message=f"This offer does not exist: {offer_id}",
            code="OFFER_NOT_FOUND",
        )
        self.offer_id = offer_id


class DuplicateShopError(ShopError):
    """Raised when an identity that already owns a shop asks for another."""

    def __init__(self, owner: str) -> None:
        super().__init__(
            message=f"You can only have one shop (owner: {owner})",
            code="DUPLICATE_SHOP",
        )
        self.owner = owner


# --- Lifecycle Errors ---


class InvalidStateTransitionError(ShopError):
    """Raised when an attempted lifecycle transition is not allowed.

    Example: PENDING -> PURCHASED (the seller must accept first).
    """

    def __init__(self, current_state: str, attempted_event: str) -> None:
        super().__init__(
            message=f"Invalid state transition: {current_state} -> {attempted_event}",
            code="INVALID_STATE_TRANSITION",
        )
        self.current_state = current_state
        self.attempted_event = attempted_event


class NotAcceptedError(ShopError):
    """Raised when a buyer tries to pay for an offer the owner has not accepted."""

    def __init__(self, offer_id: int) -> None:
        super().__init__(
            message=f"The owner did not accept your offer yet: {offer_id}",
            code="NOT_ACCEPTED",
        )
        self.offer_id = offer_id


class SaleAlreadySoldError(ShopError):
    """Raised when a sale that was already bought is offered on or bought again."""

    def __init__(self, sale_id: int) -> None:
        super().__init__(
            message=f"This sale is already sold: {sale_id}",
            code="SALE_ALREADY_SOLD",
        )
        self.sale_id = sale_id


class OfferNotPurchasedError(ShopError):
    """Raised when receipt is confirmed for an offer that was never paid."""

    def __init__(self, offer_id: int) -> None:
        super().__init__(
            message=f"This offer has not been purchased: {offer_id}",
            code="OFFER_NOT_PURCHASED",
        )
        self.offer_id = offer_id


class ReceiptAlreadyConfirmedError(ShopError):
    """Raised on a second receipt confirmation for the same offer."""

    def __init__(self, offer_id: int) -> None:
        super().__init__(
            message=f"Receipt already confirmed for offer: {offer_id}",
            code="RECEIPT_ALREADY_CONFIRMED",
        )
        self.offer_id = offer_id


# --- Input Errors ---


class ShopValidationError(ShopError):
    """Raised when operation arguments fail schema validation."""

    def __init__(self, message: str, validation_errors: list | None = None) -> None:
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.validation_errors = validation_errors or []


# --- Payment Errors ---


class PaymentError(ShopError):
    """Raised when a fund transfer is rejected."""

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message=message, code="PAYMENT_ERROR")
        self.tx_hash = tx_hash


class InsufficientPaymentError(PaymentError):
    """Raised when a buyer pays less than the accepted offer price."""

    def __init__(self, offer_id: int, required: int, paid: int) -> None:
        super().__init__(
            message=(
                f"Insufficient payment for offer {offer_id}: "
                f"required {required}, paid {paid}"
            ),
        )
        self.code = "INSUFFICIENT_PAYMENT"
        self.offer_id = offer_id
        self.required = required
        self.paid = paid


class InsufficientFundsError(PaymentError):
    """Raised when an account cannot cover a transfer."""

    def __init__(self, account: str, required: int, available: int) -> None:
        super().__init__(
            message=(
                f"Insufficient funds in {account}: "
                f"required {required}, available {available}"
            ),
        )
        self.code = "INSUFFICIENT_FUNDS"
        self.account = account
        self.required = required
        self.available = available
