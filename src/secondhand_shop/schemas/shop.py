"""Pydantic schemas for shop operations.

Request models validate operation arguments before the shop touches any state.
Response models are immutable snapshots handed to callers so the shop's own
records can't be mutated from outside.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, ValidationError

from secondhand_shop.domain.exceptions import ShopValidationError

Amount = Annotated[int, Field(strict=True, ge=0, description="Unsigned ledger amount")]

RequestT = TypeVar("RequestT", bound=BaseModel)

# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------


class CreateSaleRequest(BaseModel):
    """Arguments of create_sale."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Label of the item for sale",
        examples=["Phone"],
    )
    asking_price: Amount


class AddOfferRequest(BaseModel):
    """Arguments of add_offer."""

    sale_id: StrictInt
    price_offered: Amount


class RespondToOfferRequest(BaseModel):
    """Arguments of response_to_offer."""

    offer_id: StrictInt
    accept: StrictBool


class BuySaleRequest(BaseModel):
    """Arguments of buy_the_sale."""

    offer_id: StrictInt
    payment_amount: Amount


def parse_request(model_cls: type[RequestT], **values: Any) -> RequestT:
    """Validate ``values`` against ``model_cls``.

    Raises:
        ShopValidationError: carrying pydantic's error list.
    """
    try:
        return model_cls.model_validate(values)
    except ValidationError as err:
        raise ShopValidationError(
            message=f"Invalid arguments for {model_cls.__name__}",
            validation_errors=err.errors(include_url=False),
        ) from err


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------


class SaleResponse(BaseModel):
    """Read-only view of a sale."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    sale_id: int
    title: str
    asking_price: int
    sold: bool
    status: str


class OfferResponse(BaseModel):
    """Read-only view of an offer."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    offer_id: int
    sale_id: int
    price_offered: int
    buyer: str
    accepted: bool
    status: str
    amount_paid: int
    released: bool


class OfferStatusResponse(BaseModel):
    """Lightweight status check for an offer."""

    model_config = ConfigDict(frozen=True)

    offer_id: int
    status: str
    released: bool
    allowed_events: list[str] = Field(
        description="State machine events that can fire from the current status"
    )


class BalanceResponse(BaseModel):
    """Custody accounting of one shop at one point in time."""

    model_config = ConfigDict(frozen=True)

    shop_address: str
    owner: str
    blocked_balance: int
    available_balance: int
    contract_balance: int = Field(
        description="Funds the custody account actually holds"
    )


class ShopEventResponse(BaseModel):
    """Serializable view of a ShopEvent."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    sequence: int
    event_type: str
    shop_address: str
    actor: str
    payload: dict[str, Any]
    created_at: datetime | None = None
