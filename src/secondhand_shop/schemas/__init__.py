"""Pydantic schemas."""

from secondhand_shop.schemas.shop import (
    AddOfferRequest,
    BalanceResponse,
    BuySaleRequest,
    CreateSaleRequest,
    OfferResponse,
    OfferStatusResponse,
    RespondToOfferRequest,
    SaleResponse,
    ShopEventResponse,
    parse_request,
)

__all__ = [
    "AddOfferRequest",
    "BalanceResponse",
    "BuySaleRequest",
    "CreateSaleRequest",
    "OfferResponse",
    "OfferStatusResponse",
    "RespondToOfferRequest",
    "SaleResponse",
    "ShopEventResponse",
    "parse_request",
]
